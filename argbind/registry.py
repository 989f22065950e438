"""
Argbind binding registry.

Registry is the dispatch handler holding every Binding of a definition: a table
of named bindings keyed by their spelling and an ordered list of positional
bindings consumed in registration order.

Error translation (applied around every conversion step)
- FormatError becomes IllegalValueError naming the binding.
- IllegalValueError / ValueMissingError are re-issued with the binding's display
  name as label, never nested.
- Any other ArgumentError propagates unchanged.
- Any other exception becomes IllegalValueError carrying its message.
"""
import warnings
from types import MappingProxyType

from .bindings import Binding
from .dispatch import Handler, HelpHandler
from .faults import *


class Registry(Handler):
    def __init__(self):
        self._named = {}
        self._positional = []
        self._index = 0

    @property
    def named_bindings(self):
        return MappingProxyType(self._named)

    @property
    def positional_bindings(self):
        return tuple(self._positional)

    def register(self, binding, /):
        """
        Add a binding, rejecting definitions that could never parse correctly.

        Raises
        - ValueError: malformed, reserved or duplicated spelling; positional
          binding without a description.
        - TypeError: positional binding registered after a final one.
        """
        if not isinstance(binding, Binding):
            raise TypeError("register() argument must be a binding")
        if binding.positional:
            if not binding.descr:
                raise ValueError("positional bindings must have a description")
            if self._positional and self._positional[-1].final:
                raise TypeError(
                    "%s accepts every remaining positional argument, no positional binding can follow it"
                    % self._positional[-1].display_name
                )
            self._positional.append(binding)
            return binding

        name = binding.name
        if not name.startswith("-"):
            raise ValueError("argument name %r must start with '-'" % name)
        if name == "-":
            raise ValueError("argument name '-' is reserved for positional arguments")
        if name in HelpHandler.names:
            raise ValueError("argument name %r is reserved for help" % name)
        if name in self._named:
            raise ValueError("argument name %r is already registered" % name)
        self._named[name] = binding
        return binding

    def reset(self):
        for binding in self._named.values():
            binding.found = False
        for binding in self._positional:
            binding.found = False
        self._index = 0

    def _invoke(self, binding, cursor, label):
        try:
            binding(cursor, label)
        except FormatError as error:
            raise IllegalValueError(
                cursor.app_name,
                label=binding.display_name,
                value=error.value,
                details=error.details,
                position=error.position,
            ) from None
        except (IllegalValueError, ValueMissingError) as error:
            raise error.replace(label=binding.display_name) from None
        except ArgumentError:
            raise
        except Exception as error:
            raise IllegalValueError(cursor.app_name, label=binding.display_name, details=str(error)) from error

    def named(self, cursor, token, /):
        try:
            binding = self._named[token]
        except KeyError:
            return False
        self._invoke(binding, cursor, token)
        if binding.found and binding.scalar:
            warnings.warn(
                OverriddenValueWarning(
                    "%s given more than once, the last value is kept" % binding.display_name,
                    app_name=cursor.app_name,
                    label=binding.display_name,
                ),
                stacklevel=2,
            )
        binding.found = True
        return True

    def positional(self, cursor, token, /):
        if self._index >= len(self._positional):
            return False
        binding = self._positional[self._index]
        start = cursor.position
        self._invoke(binding, cursor, binding.display_name)
        if cursor.position == start:
            cursor.next()
        binding.found = True
        if not binding.final:
            self._index += 1
        return True

    def check(self, app_name, /):
        for binding in self._named.values():
            if binding.required and not binding.found:
                raise RequiredArgumentMissingError(app_name, label=binding.display_name)
        for binding in self._positional[self._index:]:
            if binding.required and not binding.found:
                raise RequiredArgumentMissingError(app_name, label=binding.display_name)


__all__ = (
    "Registry",
)
