"""
Argbind formatter matrix.

A Formatter turns the raw text of one token into a typed value and knows how to
check that value against an inclusive range or a set of legal values. Every
failure is a FormatError carrying the offending text; the registry later names
the binding it happened for.

Registry
- formatter(int) / formatter(float) / formatter(str) return the shared instance
  registered for that type; a Formatter instance (e.g. unsigned) is returned as is.
- @register(type) adds a Formatter subclass for a new type.

Quick example:
    >>> formatter(int).in_range("7", 1, 5)
    Traceback (most recent call last):
    ...
    argbind.faults.FormatError: value must be between 1 and 5 inclusive
"""
import builtins
import math
import re
from abc import ABC, abstractmethod

from .faults import FormatError
from .utils import *

_formatters = {}


class Formatter(ABC):
    """
    Text-to-value converter with range and membership checks.

    Subclasses implement parse() and set expected to the sentence used when the
    text does not have the right shape.
    """
    expected = "must be a valid value"
    quoted = False

    @abstractmethod
    def parse(self, text, /):
        raise NotImplementedError

    def __call__(self, text, /):
        return self.parse(text)

    def span(self, minimum=Unset, maximum=Unset, /):
        """
        Describe an inclusive range, naming only its bounded sides.
        """
        low, high = render(minimum, quoted=self.quoted), render(maximum, quoted=self.quoted)
        if not unbounded(minimum) and not unbounded(maximum):
            return "between %s and %s inclusive" % (low, high)
        if not unbounded(minimum):
            return "greater than or equal to %s" % low
        if not unbounded(maximum):
            return "less than or equal to %s" % high
        return "unbounded"

    def within(self, value, minimum=Unset, maximum=Unset, /):
        if not unbounded(minimum) and value < minimum:
            return False
        if not unbounded(maximum) and value > maximum:
            return False
        return True

    def in_range(self, text, minimum=Unset, maximum=Unset, /):
        value = self.parse(text)
        if not self.within(value, minimum, maximum):
            raise FormatError("value must be " + self.span(minimum, maximum), value=text)
        return value

    def in_set(self, text, legal, /):
        value = self.parse(text)
        if value not in legal:
            raise FormatError("legal values are " + listing(legal, quoted=self.quoted), value=text)
        return value

    def __repr__(self):
        return "<%s>" % type(self).__name__


def register(type, /):
    """
    Class decorator registering a Formatter subclass as the converter of type.

    The class is instantiated once; formatter(type) returns that instance.
    """
    def decorator(cls):
        if not isinstance(cls, builtins.type) or not issubclass(cls, Formatter):
            raise TypeError("@register() must be applied to a Formatter subclass")
        _formatters[type] = cls()
        return cls

    return rename(decorator, "register")


def formatter(type, /):
    """
    Resolve the formatter for a type, or pass a Formatter instance through.
    """
    if isinstance(type, Formatter):
        return type
    try:
        return _formatters[type]
    except (KeyError, TypeError):
        raise TypeError("no formatter registered for %r" % (type,)) from None


@register(int)
class IntegerFormatter(Formatter):
    expected = "must be an integer"
    pattern = re.compile(r"[+-]?\d+")

    def parse(self, text, /):
        if not self.pattern.fullmatch(text):
            raise FormatError(self.expected, value=text)
        return int(text, 10)


class UnsignedFormatter(IntegerFormatter):
    expected = "must be a non-negative integer"
    pattern = re.compile(r"\+?\d+")


@register(float)
class FloatFormatter(Formatter):
    expected = "must be a floating-point number"
    pattern = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?|[+-]?(inf|infinity|nan)", re.IGNORECASE)

    def parse(self, text, /):
        if not self.pattern.fullmatch(text):
            raise FormatError(self.expected, value=text)
        return float(text)

    def within(self, value, minimum=Unset, maximum=Unset, /):
        if math.isnan(value) and not (unbounded(minimum) and unbounded(maximum)):
            return False
        return super().within(value, minimum, maximum)


@register(str)
class StringFormatter(Formatter):
    expected = "must be a string"
    quoted = True

    def parse(self, text, /):
        return text


unsigned = UnsignedFormatter()
"""
Formatter for base-10 integers that must not be negative.
"""


def split(text, separator, convert, /, *, allow_empty=False):
    """
    Split one token on separator and convert every piece.

    All pieces are converted before the list is returned, so a failure on any
    piece leaves nothing half-stored. An empty token is a FormatError unless
    allow_empty is set, in which case no pieces are produced.
    """
    if not isinstance(separator, str) or not separator:
        raise ValueError("separator must be a non-empty string")
    if not text:
        if allow_empty:
            return []
        raise FormatError("value is empty", value=text)
    return [convert(piece) for piece in text.split(separator)]


__all__ = (
    "Formatter",
    "IntegerFormatter",
    "UnsignedFormatter",
    "FloatFormatter",
    "StringFormatter",
    "formatter",
    "register",
    "split",
    "unsigned",
)
