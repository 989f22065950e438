"""
Argbind bindings and value destinations.

Overview
- Binding: one registered argument. A flag spelling (empty for positionals), a
  description, the required/final markers and the conversion step invoked as
  step(cursor, label). Per-parse state lives in found.

- Destinations (explicit actions, never closures over variables)
  • Assign(owner, attribute): scalar overwrite of an attribute, or of a key
    when owner is a mutable mapping.
  • Append(list): ordered accumulation.
  • Insert(set): unique accumulation.

- Conversion: the standard conversion step. Reads one token through the cursor,
  converts it (optionally split on a separator) and stores the result.

- ValueMap: immutable text-to-value table; ValueMap.of(SomeEnum) keys the members
  by their lowercased names.

Quick example:
    >>> settings = {}
    >>> step = Conversion(int, Assign(settings, "count"))
    >>> step(Cursor("prog", ("12",)), "-n")
    >>> settings
    {'count': 12}
"""
import warnings
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, MutableMapping, MutableSequence, MutableSet

from .faults import EmptyValueWarning, FormatError
from .formatters import split
from .utils import *


class Destination(ABC):
    """
    Where converted values go. Scalar destinations keep only the last value.
    """
    scalar = False

    @abstractmethod
    def store(self, value, /):
        raise NotImplementedError

    def __call__(self, value, /):
        self.store(value)


class Assign(Destination):
    scalar = True

    owner = mirror("owner")
    attribute = mirror("attribute")

    def __init__(self, owner, attribute, /):
        if not isinstance(attribute, str) or not attribute:
            raise TypeError("Assign() second argument must be a non-empty string")
        self._owner = owner
        self._attribute = attribute

    def store(self, value, /):
        if isinstance(self._owner, MutableMapping):
            self._owner[self._attribute] = value
        else:
            setattr(self._owner, self._attribute, value)

    def __repr__(self):
        return "Assign(%r, %r)" % (self._owner, self._attribute)


class Append(Destination):
    target = mirror("target")

    def __init__(self, target, /):
        if not isinstance(target, MutableSequence):
            raise TypeError("Append() argument must be a mutable sequence")
        self._target = target

    def store(self, value, /):
        self._target.append(value)

    def __repr__(self):
        return "Append(%r)" % (self._target,)


class Insert(Destination):
    target = mirror("target")

    def __init__(self, target, /):
        if not isinstance(target, MutableSet):
            raise TypeError("Insert() argument must be a mutable set")
        self._target = target

    def store(self, value, /):
        self._target.add(value)

    def __repr__(self):
        return "Insert(%r)" % (self._target,)


class Conversion:
    """
    Conversion step: one token in, one or more stored values out.

    convert maps the raw text to a value and may raise FormatError. With a
    separator the token is split and every piece is converted before anything
    is stored. The token is put back on the cursor when conversion fails.
    """
    convert = mirror("convert")
    destination = mirror("destination")
    separator = mirror("separator")
    allow_empty = mirror("allow_empty")

    def __init__(self, convert, destination, /, *, separator=Unset, allow_empty=False):
        if not callable(convert):
            raise TypeError("Conversion() first argument must be callable")
        if not isinstance(destination, Destination):
            raise TypeError("Conversion() second argument must be a destination")
        if separator is not Unset and (not isinstance(separator, str) or not separator):
            raise ValueError("separator must be a non-empty string")
        self._convert = convert
        self._destination = destination
        self._separator = separator
        self._allow_empty = bool(allow_empty)

    @property
    def scalar(self):
        return self._destination.scalar

    def __call__(self, cursor, label, /):
        def convert(label, text):
            if self._separator is Unset:
                return [self._convert(text)]
            return split(text, self._separator, self._convert, allow_empty=self._allow_empty)

        values = cursor.next_as(label, convert)

        if not values:
            warnings.warn(
                EmptyValueWarning("empty value for %s, nothing stored" % (label or "argument"), app_name=cursor.app_name, label=label),
                stacklevel=2,
            )
            return
        if self._destination.scalar:
            self._destination.store(values[-1])
            return
        for value in values:
            self._destination.store(value)


class Binding:
    """
    One registered argument: a flag or a positional slot.

    The step is invoked as step(cursor, label) where label is the spelling for
    named bindings and the display name for positionals.
    """
    name = mirror("name")
    descr = mirror("descr")
    step = mirror("step")
    required = mirror("required")
    final = mirror("final")

    def __init__(self, name, descr, step, /, *, required=False, final=False):
        if not isinstance(name, str):
            raise TypeError("Binding() first argument must be a string")
        if not isinstance(descr, str):
            raise TypeError("Binding() second argument must be a string")
        if not callable(step):
            raise TypeError("Binding() third argument must be callable")
        if not name and not descr:
            raise ValueError("binding needs a name or a description")
        if name and final:
            raise ValueError("only positional bindings can be final")
        self._name = name
        self._descr = descr
        self._step = step
        self._required = bool(required)
        self._final = bool(final)
        self.found = False

    @property
    def positional(self):
        return not self._name

    @property
    def scalar(self):
        return getattr(self._step, "scalar", False)

    @property
    def display_name(self):
        if self._name and self._descr:
            return "%s (%s)" % (self._descr, self._name)
        return self._name or self._descr

    def __call__(self, cursor, label, /):
        return self._step(cursor, label)

    def __repr__(self):
        return "Binding(%r, %r, required=%r, final=%r)" % (self._name, self._descr, self._required, self._final)


class ValueMap(Mapping):
    """
    Immutable mapping from the legal spellings of a value to the value itself.
    """

    def __init__(self, pairs=(), /):
        if isinstance(pairs, Mapping):
            pairs = pairs.items()
        if not isinstance(pairs, Iterable):
            raise TypeError("ValueMap() argument must be a mapping or an iterable of pairs")
        table = {}
        for key, value in pairs:
            if not isinstance(key, str):
                raise TypeError("ValueMap() keys must be strings")
            if key in table:
                raise ValueError("duplicate key %r in value map" % key)
            table[key] = value
        self._table = table

    @classmethod
    def of(cls, enum, /):
        return cls((member.name.lower(), member) for member in enum)

    def __getitem__(self, key, /):
        return self._table[key]

    def __iter__(self):
        return iter(self._table)

    def __len__(self):
        return len(self._table)

    def __repr__(self):
        return "ValueMap(%r)" % (self._table,)

    def translate(self, text, /):
        try:
            return self._table[text]
        except KeyError:
            raise FormatError("legal values are " + listing(self._table, quoted=True), value=text) from None


__all__ = (
    "Binding",
    "Destination",
    "Assign",
    "Append",
    "Insert",
    "Conversion",
    "ValueMap",
)
