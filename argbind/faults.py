"""
Argbind faults (errors and warnings) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing issue raised while
  binding command-line tokens (errors and warnings).
- ArgumentError: base type of every parse-time error. Carries the invocation
  name plus a read-only options mapping (label, value, details, position, name)
  and composes the lowercased detail sentence from them.
- FormatError: conversion-local failure raised by formatters and custom format
  functions. It knows nothing about bindings; the registry re-issues it as an
  IllegalValueError naming the binding.
- ArgumentWarning: non-fatal conditions surfaced through the warnings module.

Message shape
- str(error) is "app_name: detail", or only the detail without a name.
- details are short lowercased sentences, e.g.
  'illegal value "11" for command-line argument integer value (-i) (legal values are 10, 20, 30)'.

Rendering
- Errors and warnings implement __rich__: a header with program name, fault code
  and title, the message, and a single hint line.
- Rendering honors the "colorful" (default True) and "fancy" (default False)
  options and the __styles__, __prog__ and __codes__ overrides of __main__.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes for command-line binding issues (stable identifiers).

    grouping (by high-level domain)
    - values (2110x)
      • VALUE_MISSING, ILLEGAL_VALUE
    - dispatch (2111x)
      • UNKNOWN_ARGUMENT, TOO_MANY_ARGUMENTS
    - completion (2112x)
      • REQUIRED_ARGUMENT_MISSING
    - warnings (22xxx)
      • EMPTY_VALUE, OVERRIDDEN_VALUE
    """
    # --- value errors (21xxx) ---
    VALUE_MISSING               = 21101
    ILLEGAL_VALUE               = 21102

    # --- dispatch errors (21xxx) ---
    UNKNOWN_ARGUMENT            = 21111
    TOO_MANY_ARGUMENTS          = 21112

    # --- completion errors (21xxx) ---
    REQUIRED_ARGUMENT_MISSING   = 21121

    # --- warnings (22xxx) ---
    EMPTY_VALUE                 = 22111
    OVERRIDDEN_VALUE            = 22112

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


_ERROR_STYLES = {
    "prog-name": "bold #E6E6F0",  # near-white program name
    "code": "bold #00E5FF",  # neon cyan fault code
    "title": "bold #FF4DA6",  # pinky title
    "message": "#C8C8D0",  # soft light gray message
    "hint-arrow": "#9CE19C dim",
    "hint": "italic #9CE19C",
}

_WARNING_STYLES = {
    "prog-name": "bold #E6E6F0",
    "code": "bold #FFB400",  # amber fault code for warnings
    "title": "bold #FFC2E0",
    "message": "#D6D6DE",
    "hint-arrow": "#B8EFAF dim",
    "hint": "italic #B8EFAF",
}


def _render(fault, palette, /):
    """
    Build the rich renderable shared by errors and warnings.

    The fault must expose code, title, hint, message, app_name and options.
    """
    main = __import__("__main__")
    colorful = fault.options.get("colorful", True)
    fancy = fault.options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    prog = getattr(main, "__prog__", fault.app_name) or "argbind"

    header = Text.assemble(
        "[ ",
        text(prog, "prog-name"),
        " - ",
        text(fault.code.normalize() if isinstance(fault.code, FaultCode) else "", "code"),
        " | ",
        text(fault.title.title(), "title"),
        " ]"
    )
    message = text(fault.message, "message")
    hint = Text.assemble(text(" → ", "hint-arrow"), text(fault.hint, "hint"))

    if fancy:
        width = console.width - 4
        try:
            width = int(width * fault.options["ratio"])
        except KeyError:
            width = None
        return Panel(Group(message, hint), title=header, title_align="left", width=width)

    return Group(header, message, hint)


class ArgumentError(Exception):
    """
    Base of every error raised while binding command-line tokens.

    Subclasses only decide how the detail sentence reads (describe()) and which
    fault code, title and hint they present.
    """
    code = Unset
    title = "argument error"
    hint = "use -h for help"

    def __init__(self, app_name="", /, **options):
        if not isinstance(app_name, str):
            raise TypeError("%s() first argument must be a string" % type(self).__name__)
        self.app_name = app_name
        self.options = MappingProxyType(options)
        super().__init__(str(self))

    @property
    def label(self):
        return self.options.get("label", "")

    @property
    def value(self):
        return self.options.get("value", Unset)

    @property
    def details(self):
        return self.options.get("details", "")

    @property
    def position(self):
        return self.options.get("position", Unset)

    @property
    def message(self):
        return self.describe()

    def describe(self):
        return coalesce(self.details, "") or "error parsing command-line arguments"

    def __str__(self):
        if self.app_name:
            return "%s: %s" % (self.app_name, self.message)
        return self.message

    def __rich__(self):
        return _render(self, _ERROR_STYLES)

    def replace(self, *unused, **overrides):
        """
        Re-issue this error with merged options (app_name may be overridden too).

        The registry uses this to attach a binding's display name to an error
        raised by the cursor without nesting one error inside another.
        """
        if unused:
            raise TypeError("replace() takes no positional arguments")
        app_name = overrides.pop("app_name", self.app_name)
        return type(self)(app_name, **{**self.options, **overrides})

    __replace__ = replace


class ValueMissingError(ArgumentError):
    code = FaultCode.VALUE_MISSING
    title = "value missing"
    hint = "give the argument a value after it"

    def describe(self):
        if self.label:
            return "value missing for %s" % self.label
        return "required value missing on the command-line"


class IllegalValueError(ArgumentError):
    code = FaultCode.ILLEGAL_VALUE
    title = "illegal value"
    hint = "check the value against the expected format"

    def describe(self):
        message = "illegal value"
        if self.value is not Unset and str(self.value):
            message += ' "%s"' % self.value
        if self.label:
            message += " for command-line argument %s" % self.label
        else:
            message += " on the command-line"
        if self.details:
            message += " (%s)" % self.details
        return message


class UnknownArgumentError(ArgumentError):
    code = FaultCode.UNKNOWN_ARGUMENT
    title = "unknown argument"
    hint = "use -h for the list of known arguments"

    def describe(self):
        name = self.options.get("name", "")
        if name:
            return "unknown command-line argument %s" % name
        return "unknown command-line argument"


class TooManyArgumentsError(ArgumentError):
    code = FaultCode.TOO_MANY_ARGUMENTS
    title = "too many arguments"
    hint = "remove the extra arguments"

    def describe(self):
        return "too many command-line arguments"


class RequiredArgumentMissingError(ArgumentError):
    code = FaultCode.REQUIRED_ARGUMENT_MISSING
    title = "required argument missing"

    def describe(self):
        return "%s not specified.  use -h for help." % self.label


class FormatError(Exception):
    """
    Conversion failure raised by formatters and custom format functions.

    Carries the offending text and its stream position (when known) and a
    lowercased description of what was expected. It is not an ArgumentError:
    the registry translates it into an IllegalValueError carrying the
    binding's display name.
    """

    def __init__(self, details="", /, *, value=Unset, position=Unset):
        self.details = details
        self.value = value
        self.position = position
        super().__init__(details)

    def replace(self, *unused, **overrides):
        if unused:
            raise TypeError("replace() takes no positional arguments")
        return type(self)(
            overrides.get("details", self.details),
            value=overrides.get("value", self.value),
            position=overrides.get("position", self.position),
        )

    __replace__ = replace


class ArgumentWarning(Warning):
    """
    Base of the non-fatal conditions reported through warnings.warn().
    """
    code = Unset
    title = "argument warning"
    hint = ""

    def __init__(self, message="", /, *, app_name="", **options):
        self.message = message
        self.app_name = app_name
        self.options = MappingProxyType(options)
        super().__init__(message)

    def __rich__(self):
        return _render(self, _WARNING_STYLES)

    def replace(self, *unused, **overrides):
        if unused:
            raise TypeError("replace() takes no positional arguments")
        app_name = overrides.pop("app_name", self.app_name)
        return type(self)(self.message, app_name=app_name, **{**self.options, **overrides})

    __replace__ = replace


class EmptyValueWarning(ArgumentWarning):
    code = FaultCode.EMPTY_VALUE
    title = "empty value"
    hint = "nothing was stored for this argument"


class OverriddenValueWarning(ArgumentWarning):
    code = FaultCode.OVERRIDDEN_VALUE
    title = "overridden value"
    hint = "only the last value given is kept"


__all__ = (
    "FaultCode",
    "ArgumentError",
    "ValueMissingError",
    "IllegalValueError",
    "UnknownArgumentError",
    "TooManyArgumentsError",
    "RequiredArgumentMissingError",
    "FormatError",
    "ArgumentWarning",
    "EmptyValueWarning",
    "OverriddenValueWarning",
)
