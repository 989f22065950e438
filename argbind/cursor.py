"""
Argbind token cursor.

Cursor walks the tokens that follow the invocation name. It never skips a token
silently: every typed extraction that fails puts the token back before raising,
so the offending token is current again when the error reaches the caller.

Failures
- ValueMissingError when the stream is exhausted.
- IllegalValueError (with the offending text and its position) when the token
  does not have the expected shape, is out of range or is not a legal value.

Quick example:
    >>> cursor = Cursor("prog", ("-n", "12", "x"))
    >>> cursor.next()
    '-n'
    >>> cursor.next_as_integer_in_range("-n", 0, 10)
    Traceback (most recent call last):
    ...
    argbind.faults.IllegalValueError: prog: illegal value "12" for command-line argument -n (must be an integer between 0 and 10 inclusive)
    >>> cursor.current()
    '12'
"""
from .faults import FormatError, IllegalValueError, ValueMissingError
from .formatters import formatter, unsigned
from .utils import *


class Cursor:
    """
    Read position over an immutable token stream.

    The position never drops below 0 and never moves past the end; next()
    advances it by one and put_back() steps back by exactly one.
    """
    app_name = mirror("app_name")
    tokens = mirror("tokens")
    position = mirror("position")

    def __init__(self, app_name, tokens=(), /):
        if not isinstance(app_name, str):
            raise TypeError("Cursor() first argument must be a string")
        if not app_name:
            raise ValueError("Cursor() first argument must be a non-empty string")
        tokens = tuple(tokens)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("Cursor() tokens must be strings")
        self._app_name = app_name
        self._tokens = tokens
        self._position = 0

    def __len__(self):
        return len(self._tokens)

    def __repr__(self):
        return "%s(%r, %r, position=%d)" % (type(self).__name__, self._app_name, self._tokens, self._position)

    @property
    def remaining(self):
        return len(self._tokens) - self._position

    def current(self, label=Unset):
        if self._position >= len(self._tokens):
            raise ValueMissingError(self._app_name, label=coalesce(label, ""))
        return self._tokens[self._position]

    def next(self, label=Unset):
        token = self.current(label)
        self._position += 1
        return token

    def put_back(self):
        if self._position == 0:
            raise IndexError("cannot put back before the first token")
        self._position -= 1

    def next_as(self, label, convert, /):
        """
        Consume one token and return convert(label, token).

        Whatever convert raises propagates, but the token is put back first.
        A FormatError without a position is given the offending token's.
        """
        token = self.next(label)
        try:
            return convert(coalesce(label, ""), token)
        except FormatError as error:
            self.put_back()
            if error.position is Unset:
                raise error.replace(position=self._position) from None
            raise
        except Exception:
            self.put_back()
            raise

    def _illegal(self, label, text, details):
        # The offending token has already been consumed.
        return IllegalValueError(
            self._app_name,
            label=label,
            value=text,
            details=details,
            position=self._position - 1,
        )

    def _extract(self, label, formatter, /, *, checked=False, minimum=Unset, maximum=Unset):
        def convert(label, text):
            try:
                value = formatter.parse(text)
            except FormatError:
                raise self._illegal(label, text, formatter.expected) from None
            if checked and not formatter.within(value, minimum, maximum):
                raise self._illegal(label, text, "%s %s" % (formatter.expected, formatter.span(minimum, maximum)))
            return value

        return self.next_as(label, convert)

    def next_as_integer(self, label=Unset):
        return self._extract(label, formatter(int))

    def next_as_unsigned(self, label=Unset):
        return self._extract(label, unsigned)

    def next_as_float(self, label=Unset):
        return self._extract(label, formatter(float))

    def next_as_integer_in_range(self, label=Unset, minimum=Unset, maximum=Unset):
        return self._extract(label, formatter(int), checked=True, minimum=minimum, maximum=maximum)

    def next_as_unsigned_in_range(self, label=Unset, minimum=Unset, maximum=Unset):
        return self._extract(label, unsigned, checked=True, minimum=minimum, maximum=maximum)

    def next_as_float_in_range(self, label=Unset, minimum=Unset, maximum=Unset):
        return self._extract(label, formatter(float), checked=True, minimum=minimum, maximum=maximum)

    def next_in_set(self, label=Unset, legal=()):
        """
        Consume one token that must be a member of legal, as raw text.
        """
        def convert(label, text):
            if text not in legal:
                raise self._illegal(label, text, "legal values are " + listing(legal, quoted=True))
            return text

        return self.next_as(label, convert)


__all__ = (
    "Cursor",
)
