"""
Argbind dispatcher.

A CommandLine owns an ordered chain of Handler objects (the help handler first)
and drives them through one parse pass:

1. init: build a fresh Cursor, reset every handler, run the initialize() hook.
2. dispatch: a non-empty token starting with "-" is named. It is consumed and
   offered to each handler in order; nobody accepting it raises
   UnknownArgumentError. Any other token is positional. It is offered still
   unconsumed, and nobody accepting it raises TooManyArgumentsError.
3. completion: check(app_name) on every handler, then the validate() hook.

The first error aborts the pass. Writes made before it are kept.
"""
import shlex
import sys
from collections.abc import Iterable

from .cursor import Cursor
from .faults import TooManyArgumentsError, UnknownArgumentError
from .utils import *


class Handler:
    """
    One step of the dispatch chain. The base class handles nothing.
    """

    def reset(self):
        pass

    def named(self, cursor, token, /):
        return False

    def positional(self, cursor, token, /):
        return False

    def check(self, app_name, /):
        pass


class HelpHandler(Handler):
    """
    Recognizes -h and --help. Only records the request; no text is printed.
    """
    names = ("-h", "--help")

    def __init__(self):
        self.requested = False

    def reset(self):
        self.requested = False

    def named(self, cursor, token, /):
        if token in self.names:
            self.requested = True
            return True
        return False


def _tokenize(argv):
    if argv is Unset:
        return list(sys.argv)
    if isinstance(argv, str):
        return shlex.split(argv)
    if isinstance(argv, Iterable):
        tokens = list(argv)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() argument must be a string or an iterable of strings")


class CommandLine:
    """
    Base of every argument-definition object.

    Subclasses add handlers with append() and may override initialize() and
    validate() for per-pass setup and cross-field checks.
    """

    def __init__(self):
        self._help = HelpHandler()
        self._handlers = [self._help]
        self._app_name = Unset

    @property
    def handlers(self):
        return tuple(self._handlers)

    @property
    def show_usage(self):
        return self._help.requested

    @property
    def app_name(self):
        return self._app_name

    def append(self, handler, /):
        if not isinstance(handler, Handler):
            raise TypeError("append() argument must be a handler")
        self._handlers.append(handler)
        return handler

    def initialize(self):
        """
        Hook run after every handler was reset, before the first token.
        """

    def validate(self, app_name, /):
        """
        Hook run after every handler's check() for cross-field validation.
        """

    def parse(self, argv=Unset, /):
        """
        Bind a full command line, invocation name first.

        Parameters
        - argv:
          • Unset: read sys.argv.
          • str: shell-like string, split with shlex.split.
          • Iterable[str]: already tokenized.

        Returns self so calls can be chained.
        """
        tokens = _tokenize(argv)
        if not tokens or not tokens[0]:
            raise ValueError("parse() needs a non-empty invocation name")
        cursor = Cursor(tokens[0], tokens[1:])
        self._app_name = cursor.app_name

        for handler in self._handlers:
            handler.reset()
        self.initialize()

        while cursor.remaining:
            token = cursor.current()
            if token.startswith("-"):
                cursor.next()
                if not any(handler.named(cursor, token) for handler in self._handlers):
                    raise UnknownArgumentError(cursor.app_name, name=token, position=cursor.position - 1)
            elif not any(handler.positional(cursor, token) for handler in self._handlers):
                raise TooManyArgumentsError(cursor.app_name, value=token, position=cursor.position)

        for handler in self._handlers:
            handler.check(cursor.app_name)
        self.validate(cursor.app_name)
        return self


__all__ = (
    "Handler",
    "HelpHandler",
    "CommandLine",
)
