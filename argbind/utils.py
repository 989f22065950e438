"""
Argbind utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the cursor, the formatters and the registry.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support the binding layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/"".

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated wrappers for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr).

- listing(values, quoted=False) / render(value)
  • Produce the "a, b, c" lists and scalar spellings used inside fault messages.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
    >>> listing({30, 10, 20})
    '10, 20, 30'
    >>> listing(("beta", "alpha"), quoted=True)
    '"beta", "alpha"'
"""
import builtins
import functools
import math
from collections.abc import Set
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Used when None is a legitimate user value (or an unbounded limit) but the
    API needs a way to distinguish “not provided” from “provided as None”.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable and a singleton per process.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when UnsetType appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0 or "" are preserved as-is; only Unset is replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable (updated in place)
    - rename(name)           -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                # Built-ins disallow attribute updates.
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" on the instance. Sets are exposed as
    frozensets and lists as tuples, so callers cannot mutate binding metadata
    through the public API.

    Example
    - Given self._choices, declare choices = mirror("choices") to expose it safely.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        value = getattr(self, "_" + name)
        if isinstance(value, list):
            return tuple(value)
        if isinstance(value, Set) and not isinstance(value, frozenset):
            return frozenset(value)
        return value

    return property(getter)


def unbounded(limit, /):
    """
    Tell whether a range limit leaves its side of the range open.

    Unset, None and the infinities are all accepted as "no limit".
    """
    if limit is Unset or limit is None:
        return True
    return isinstance(limit, float) and math.isinf(limit)


def render(value, /, *, quoted=False):
    """
    Spell a single value the way fault messages show it.

    Strings are double-quoted when asked to; everything else uses str().
    """
    if quoted:
        return f'"{value}"'
    return str(value)


def listing(values, /, *, quoted=False):
    """
    Join legal values into a comma-separated list for fault messages.

    Sets carry no order of their own, so they are listed sorted when their
    members are comparable. Sequences keep the order they were given in.
    """
    ordered = list(values)
    if isinstance(values, Set):
        try:
            ordered.sort()
        except TypeError:
            pass  # mixed members, keep iteration order
    return ", ".join(render(value, quoted=quoted) for value in ordered)


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish “no input” from “explicitly passed None”.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "unbounded",
    "render",
    "listing",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
