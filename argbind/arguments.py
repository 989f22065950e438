r"""
Argbind declarative argument definitions.

Overview
- Arguments: a CommandLine with a Registry in its handler chain. Subclass it (or
  use it directly) and declare bindings in __init__ with named() / positional().

- Destinations
  • Assign(owner, attribute): keep the last value.
  • Append(list) / Insert(set): accumulate every value.
  • a callable (cursor, label): custom handler reading the cursor itself.
  When the destination is omitted, the call returns a decorator binding the
  decorated function as the custom handler.

- Validation modes (mutually exclusive)
  • plain: type's formatter (int, float, str, or a Formatter such as unsigned).
  • range: minimum and/or maximum, inclusive.
  • membership: choices; sequences must not repeat a value, sets are listed sorted.
  • value map: values, looked up by the raw text.
  • custom: format, a function from text to value.
  Any mode combines with separator: one token is split and every piece is stored.

- Positional arguments accumulating into Append/Insert without a separator are
  final: they take every remaining positional token.

Quick example:
    >>> class Options(Arguments):
    ...     def __init__(self):
    ...         super().__init__()
    ...         self.level = 0
    ...         self.files = []
    ...         self.named("-l", "level", Assign(self, "level"), int, minimum=0, maximum=9)
    ...         self.positional("file", Append(self.files), required=True)
    ...
    >>> Options().parse("prog -l 3 a.txt b.txt").files
    ['a.txt', 'b.txt']
"""
from collections.abc import Iterable, Set

from .bindings import *
from .dispatch import CommandLine
from .faults import FormatError
from .formatters import formatter as _formatter
from .registry import Registry
from .utils import *


def _formatted(format, /):
    """
    Wrap a custom format function so every failure is a FormatError with the text.
    """
    if not callable(format):
        raise TypeError("format must be callable")

    def convert(text):
        try:
            return format(text)
        except FormatError as error:
            if error.value is Unset:
                raise error.replace(value=text) from None
            raise
        except Exception as error:
            raise FormatError(str(error), value=text) from error

    return rename(convert, getattr(format, "__name__", "convert"))


def _legal(choices, /):
    if isinstance(choices, str) or not isinstance(choices, Iterable):
        raise TypeError("choices must be a non-string iterable")
    if isinstance(choices, Set):
        legal = frozenset(choices)
    else:
        legal = tuple(choices)
        seen = []
        for choice in legal:
            if choice in seen:
                raise ValueError("choices must not repeat a value (%r)" % (choice,))
            seen.append(choice)
    if not legal:
        raise ValueError("choices must not be empty")
    return legal


def _converter(type, minimum, maximum, choices, values, format):
    ranged = minimum is not Unset or maximum is not Unset
    modes = [mode for mode, given in (
        ("minimum/maximum", ranged),
        ("choices", choices is not Unset),
        ("values", values is not Unset),
        ("format", format is not Unset),
    ) if given]
    if len(modes) > 1:
        raise TypeError("%s cannot be combined" % " and ".join(modes))

    if format is not Unset:
        return _formatted(format)

    if values is not Unset:
        table = values if isinstance(values, ValueMap) else ValueMap(values)
        if not table:
            raise ValueError("values must not be empty")
        return table.translate

    formatter = _formatter(type)

    if choices is not Unset:
        legal = _legal(choices)

        @rename("in_set")
        def convert(text):
            return formatter.in_set(text, legal)

        return convert

    if ranged:
        if not unbounded(minimum) and not unbounded(maximum) and minimum > maximum:
            raise ValueError("minimum must not be greater than maximum")

        @rename("in_range")
        def convert(text):
            return formatter.in_range(text, minimum, maximum)

        return convert

    return formatter.parse


class Arguments(CommandLine):
    """
    Argument definition built from named() and positional() declarations.
    """

    def __init__(self):
        super().__init__()
        self._registry = self.append(Registry())

    @property
    def registry(self):
        return self._registry

    def _bind(
            self,
            name,
            descr,
            destination,
            type,
            *,
            required,
            minimum,
            maximum,
            choices,
            values,
            format,
            separator,
            allow_empty,
    ):
        if not isinstance(descr, str):
            raise TypeError("descr must be a string")

        if isinstance(destination, Destination):
            if allow_empty and separator is Unset:
                raise TypeError("allow_empty requires a separator")
            step = Conversion(
                _converter(type, minimum, maximum, choices, values, format),
                destination,
                separator=separator,
                allow_empty=allow_empty,
            )
            final = not name and separator is Unset and not destination.scalar
        elif callable(destination):
            given = [option for option, value in (
                ("minimum", minimum),
                ("maximum", maximum),
                ("choices", choices),
                ("values", values),
                ("format", format),
                ("separator", separator),
            ) if value is not Unset]
            if given or type is not str or allow_empty:
                raise TypeError("a custom handler takes no conversion options")
            step = destination
            final = False
        else:
            raise TypeError("destination must be Assign, Append, Insert or a callable")

        return self._registry.register(Binding(name, descr, step, required=required, final=final))

    def _declare(self, name, descr, destination, options):
        if destination is not Unset:
            return self._bind(name, descr, destination, **options)

        applied = False

        def decorator(callback):
            nonlocal applied
            if applied:
                raise TypeError("this decorator was already applied")
            if not callable(callback):
                raise TypeError("decorator must be applied to a callable")
            applied = True
            return self._bind(name, descr, callback, **options)

        return rename(decorator, "positional" if not name else "named")

    def named(
            self,
            name,
            descr,
            destination=Unset,
            /,
            type=str,
            *,
            required=False,
            minimum=Unset,
            maximum=Unset,
            choices=Unset,
            values=Unset,
            format=Unset,
            separator=Unset,
            allow_empty=False,
    ):
        """
        Declare a flag such as "-n" or "--count".

        The conversion step receives the flag spelling as label and reads the
        value from the cursor. Returns the Binding, or a decorator when
        destination is omitted.
        """
        if not isinstance(name, str):
            raise TypeError("named() first argument must be a string")
        if not name:
            raise ValueError("named() first argument must be a non-empty string")
        return self._declare(name, descr, destination, dict(
            type=type,
            required=required,
            minimum=minimum,
            maximum=maximum,
            choices=choices,
            values=values,
            format=format,
            separator=separator,
            allow_empty=allow_empty,
        ))

    def positional(
            self,
            descr,
            destination=Unset,
            /,
            type=str,
            *,
            required=False,
            minimum=Unset,
            maximum=Unset,
            choices=Unset,
            values=Unset,
            format=Unset,
            separator=Unset,
            allow_empty=False,
    ):
        """
        Declare the next positional slot, described by descr.

        Returns the Binding, or a decorator when destination is omitted.
        """
        if not isinstance(descr, str):
            raise TypeError("positional() first argument must be a string")
        if not descr:
            raise ValueError("positional arguments must have a description")
        return self._declare("", descr, destination, dict(
            type=type,
            required=required,
            minimum=minimum,
            maximum=maximum,
            choices=choices,
            values=values,
            format=format,
            separator=separator,
            allow_empty=allow_empty,
        ))


__all__ = (
    "Arguments",
)
