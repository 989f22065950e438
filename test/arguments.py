"""
Arguments module behavioral tests (declarative bindings end to end).

Scope
- Validate named/positional declarations across plain, range, membership,
  value-map and custom modes, alone and with a separator.
- Validate custom handlers, including the decorator form and its single use.
- Validate the final-positional rule and the mutual exclusion of modes.
- Validate complete command lines: exact values in token order, repeated parses.

Conventions
- Test method names follow CamelCase per project convention.
- Definitions are Arguments subclasses declaring bindings in __init__.
"""

from __future__ import annotations

import enum
import unittest
import warnings
from unittest import TestCase

from argbind import (
    Append,
    Arguments,
    Assign,
    EmptyValueWarning,
    FormatError,
    IllegalValueError,
    Insert,
    RequiredArgumentMissingError,
    TooManyArgumentsError,
    UnknownArgumentError,
    ValueMap,
    unsigned,
)


class Level(enum.Enum):
    LOW = 1
    HIGH = 2


class Simple(Arguments):
    def __init__(self):
        super().__init__()
        self.integer = 0
        self.real = 0.0
        self.text = ""
        self.named("-i", "integer value", Assign(self, "integer"), int, required=True)
        self.named("-d", "double value", Assign(self, "real"), float)
        self.named("-s", "string value", Assign(self, "text"))


class TestNamedDeclarations(TestCase):
    """Behavioral tests for named() across validation modes."""

    def testSingleValues(self):
        args = Simple().parse(["prog", "-i", "100", "-d", "-0.5", "-s", "foo"])
        self.assertEqual((args.integer, args.real, args.text), (100, -0.5, "foo"))

    def testPlainIntegerFailure(self):
        with self.assertRaises(IllegalValueError) as context:
            Simple().parse(["prog", "-i", "ten"])
        self.assertEqual(
            str(context.exception),
            'prog: illegal value "ten" for command-line argument integer value (-i) (must be an integer)',
        )

    def testPlainFloatFailure(self):
        with self.assertRaises(IllegalValueError) as context:
            Simple().parse(["prog", "-d", "half"])
        self.assertEqual(context.exception.details, "must be a floating-point number")

    def testMembership(self):
        args = Arguments()
        values = {}
        args.named("-i", "integer value", Assign(values, "i"), int, choices={10, 20, 30, 40, 50})
        args.parse(["prog", "-i", "30"])
        self.assertEqual(values, {"i": 30})
        with self.assertRaises(IllegalValueError) as context:
            args.parse(["prog", "-i", "11"])
        self.assertEqual(
            str(context.exception),
            'prog: illegal value "11" for command-line argument integer value (-i) '
            '(legal values are 10, 20, 30, 40, 50)',
        )

    def testMembershipSequenceKeepsOrder(self):
        args = Arguments()
        args.named("-m", "mode", Assign({}, "m"), choices=("slow", "fast"))
        with self.assertRaises(IllegalValueError) as context:
            args.parse(["prog", "-m", "medium"])
        self.assertEqual(context.exception.details, 'legal values are "slow", "fast"')

    def testMembershipDuplicatesRejected(self):
        with self.assertRaises(ValueError):
            Arguments().named("-m", "mode", Assign({}, "m"), choices=("slow", "slow"))

    def testRange(self):
        args = Arguments()
        values = {}
        args.named("-i", "integer value", Assign(values, "i"), int, minimum=-10, maximum=10)
        args.parse(["prog", "-i", "-10"])
        self.assertEqual(values, {"i": -10})
        with self.assertRaises(IllegalValueError) as context:
            args.parse(["prog", "-i", "11"])
        self.assertEqual(context.exception.details, "value must be between -10 and 10 inclusive")
        self.assertEqual(context.exception.value, "11")

    def testRangeOpenSide(self):
        args = Arguments()
        args.named("-r", "ratio", Assign({}, "r"), float, minimum=0.0)
        with self.assertRaises(IllegalValueError) as context:
            args.parse(["prog", "-r", "-0.1"])
        self.assertEqual(context.exception.details, "value must be greater than or equal to 0.0")

    def testRangeInvertedRejected(self):
        with self.assertRaises(ValueError):
            Arguments().named("-i", "x", Assign({}, "i"), int, minimum=5, maximum=1)

    def testUnsignedFormatter(self):
        args = Arguments()
        with self.assertRaises(IllegalValueError) as context:
            args.named("-u", "count", Assign({}, "u"), unsigned)
            args.parse(["prog", "-u", "-1"])
        self.assertEqual(context.exception.details, "must be a non-negative integer")

    def testValueMap(self):
        args = Arguments()
        values = {}
        args.named("-l", "level", Assign(values, "level"), values=ValueMap.of(Level))
        args.parse(["prog", "-l", "high"])
        self.assertIs(values["level"], Level.HIGH)
        with self.assertRaises(IllegalValueError) as context:
            args.parse(["prog", "-l", "medium"])
        self.assertEqual(context.exception.details, 'legal values are "low", "high"')

    def testPlainMappingAsValues(self):
        args = Arguments()
        values = {}
        args.named("-b", "switch", Assign(values, "b"), values={"on": True, "off": False})
        args.parse(["prog", "-b", "off"])
        self.assertIs(values["b"], False)

    def testCustomFormat(self):
        args = Arguments()
        values = {}
        args.named("-p", "pair", Assign(values, "p"), format=lambda text: tuple(text.split(":", 1)))
        args.parse(["prog", "-p", "a:b"])
        self.assertEqual(values, {"p": ("a", "b")})

    def testCustomFormatErrorsNormalized(self):
        def port(text):
            value = int(text)
            if not 0 < value < 65536:
                raise FormatError("port out of range")
            return value

        args = Arguments()
        args.named("--port", "port", Assign({}, "port"), format=port)
        with self.assertRaises(IllegalValueError) as context:
            args.parse(["prog", "--port", "70000"])
        self.assertEqual(
            str(context.exception),
            'prog: illegal value "70000" for command-line argument port (--port) (port out of range)',
        )
        with self.assertRaises(IllegalValueError) as context:
            args.parse(["prog", "--port", "eighty"])
        self.assertEqual(context.exception.value, "eighty")

    def testModesAreExclusive(self):
        with self.assertRaises(TypeError):
            Arguments().named("-i", "x", Assign({}, "i"), int, minimum=0, choices={1, 2})
        with self.assertRaises(TypeError):
            Arguments().named("-i", "x", Assign({}, "i"), values={"a": 1}, format=str.upper)

    def testUnknownTypeRejected(self):
        with self.assertRaises(TypeError):
            Arguments().named("-c", "complex", Assign({}, "c"), complex)

    def testNameMustStartWithDash(self):
        with self.assertRaises(ValueError):
            Arguments().named("i", "x", Assign({}, "i"))

    def testRequiredNamed(self):
        args = Arguments()
        args.named("-o", "output", Assign({}, "o"), required=True)
        with self.assertRaises(RequiredArgumentMissingError) as context:
            args.parse(["prog"])
        self.assertEqual(str(context.exception), "prog: output (-o) not specified.  use -h for help.")


class TestSeparatedValues(TestCase):
    """Behavioral tests for separator-split tokens."""

    def testRepeatedIntoList(self):
        args = Arguments()
        words = []
        args.named("-w", "word", Append(words))
        args.parse(["prog", "-w", "a", "-w", "b", "-w", "a"])
        self.assertEqual(words, ["a", "b", "a"])

    def testRepeatedIntoSet(self):
        args = Arguments()
        words = set()
        args.named("-w", "word", Insert(words))
        args.parse(["prog", "-w", "a", "-w", "b", "-w", "a"])
        self.assertEqual(words, {"a", "b"})

    def testSeparatedIntoList(self):
        args = Arguments()
        words = []
        args.named("-l", "list", Append(words), separator=",")
        args.parse(["prog", "-l", "a,b,a,c,d"])
        self.assertEqual(words, ["a", "b", "a", "c", "d"])

    def testSeparatedIntoSet(self):
        args = Arguments()
        words = set()
        args.named("-s", "set", Insert(words), separator=",")
        args.parse(["prog", "-s", "a,b,a,c,d"])
        self.assertEqual(words, {"a", "b", "c", "d"})

    def testSeparatedWithRange(self):
        args = Arguments()
        numbers = []
        args.named("-n", "numbers", Append(numbers), int, minimum=1, maximum=5, separator=",")
        with self.assertRaises(IllegalValueError) as context:
            args.parse(["prog", "-n", "1,2,9"])
        self.assertEqual(numbers, [])
        self.assertEqual(context.exception.value, "9")

    def testEmptyRejected(self):
        args = Arguments()
        args.named("-l", "list", Append([]), separator=",")
        with self.assertRaises(IllegalValueError) as context:
            args.parse(["prog", "-l", ""])
        self.assertEqual(context.exception.details, "value is empty")

    def testEmptyAllowedWarns(self):
        args = Arguments()
        words = []
        args.named("-l", "list", Append(words), separator=",", allow_empty=True)
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            args.parse(["prog", "-l", ""])
        self.assertEqual(words, [])
        self.assertTrue(any(issubclass(warning.category, EmptyValueWarning) for warning in caught))

    def testAllowEmptyNeedsSeparator(self):
        with self.assertRaises(TypeError):
            Arguments().named("-l", "list", Append([]), allow_empty=True)


class TestPositionalDeclarations(TestCase):
    """Behavioral tests for positional() declarations."""

    def testScalarPositionalsInOrder(self):
        args = Arguments()
        values = {}
        args.positional("source", Assign(values, "source"), required=True)
        args.positional("count", Assign(values, "count"), int)
        args.parse(["prog", "in.txt", "3"])
        self.assertEqual(values, {"source": "in.txt", "count": 3})

    def testListPositionalIsFinal(self):
        args = Arguments()
        files = []
        binding = args.positional("files", Append(files))
        self.assertTrue(binding.final)
        with self.assertRaises(TypeError):
            args.positional("more", Assign({}, "more"))
        args.parse(["prog", "a", "b"])
        self.assertEqual(files, ["a", "b"])

    def testSetPositionalIsFinal(self):
        args = Arguments()
        self.assertTrue(args.positional("tags", Insert(set())).final)

    def testSeparatedPositionalIsNotFinal(self):
        args = Arguments()
        first, second = [], []
        self.assertFalse(args.positional("first", Append(first), separator=",").final)
        args.positional("second", Append(second), separator=",")
        args.parse(["prog", "a,b", "c"])
        self.assertEqual((first, second), (["a", "b"], ["c"]))

    def testSurplusPositional(self):
        args = Arguments()
        args.positional("source", Assign({}, "source"))
        with self.assertRaises(TooManyArgumentsError):
            args.parse(["prog", "a", "b"])

    def testRequiredPositionalMissing(self):
        args = Arguments()
        args.positional("source", Assign({}, "source"), required=True)
        with self.assertRaises(RequiredArgumentMissingError) as context:
            args.parse(["prog"])
        self.assertEqual(str(context.exception), "prog: source not specified.  use -h for help.")

    def testPositionalIllegalValueNamesDescription(self):
        args = Arguments()
        args.positional("count", Assign({}, "count"), int)
        with self.assertRaises(IllegalValueError) as context:
            args.parse(["prog", "many"])
        self.assertEqual(context.exception.label, "count")

    def testDescriptionRequired(self):
        with self.assertRaises(ValueError):
            Arguments().positional("", Assign({}, "x"))


class TestCustomHandlers(TestCase):
    """Behavioral tests for custom handlers and the decorator form."""

    def testMultiTokenHandler(self):
        args = Arguments()
        received = []

        @args.named("-x", "triple")
        def triple(cursor, label):
            received.append((cursor.next_as_integer(label), cursor.next_as_float(label), cursor.next(label)))

        args.parse(["prog", "-x", "999", "999.999", "plugh"])
        self.assertEqual(received, [(999, 999.999, "plugh")])
        self.assertEqual(triple.name, "-x")

    def testDecoratorAppliesOnce(self):
        args = Arguments()
        decorator = args.named("-x", "once")
        decorator(lambda cursor, label: None)
        with self.assertRaises(TypeError):
            decorator(lambda cursor, label: None)

    def testCustomHandlerRejectsConversionOptions(self):
        with self.assertRaises(TypeError):
            Arguments().named("-x", "odd", lambda cursor, label: None, int)
        with self.assertRaises(TypeError):
            Arguments().named("-x", "odd", lambda cursor, label: None, separator=",")

    def testCustomPositionalHandler(self):
        args = Arguments()
        seen = []

        @args.positional("anything")
        def anything(cursor, label):
            seen.append(cursor.next(label).upper())

        args.parse(["prog", "abc"])
        self.assertEqual(seen, ["ABC"])

    def testCustomHandlerValueMissing(self):
        args = Arguments()
        args.named("-x", "triple", lambda cursor, label: cursor.next_as_integer(label))
        with self.assertRaises(Exception) as context:
            args.parse(["prog", "-x"])
        self.assertEqual(str(context.exception), "prog: value missing for triple (-x)")

    def testBadDestinationRejected(self):
        with self.assertRaises(TypeError):
            Arguments().named("-x", "odd", [])


class TestWholeCommandLines(TestCase):
    """Behavioral tests for complete parses."""

    def testUnknownFlagDoesNotMutate(self):
        args = Simple()
        with self.assertRaises(UnknownArgumentError):
            args.parse(["prog", "-z", "-i", "5"])
        self.assertEqual(args.integer, 0)

    def testEarlierWritesAreKept(self):
        args = Simple()
        with self.assertRaises(IllegalValueError):
            args.parse(["prog", "-i", "5", "-d", "x"])
        self.assertEqual(args.integer, 5)

    def testPutBackLeavesOffendingToken(self):
        args = Arguments()
        tokens = []

        @args.named("-x", "inspector")
        def inspect(cursor, label):
            try:
                cursor.next_as_integer(label)
            except IllegalValueError:
                tokens.append(cursor.current(label))
                raise

        with self.assertRaises(IllegalValueError):
            args.parse(["prog", "-x", "nope"])
        self.assertEqual(tokens, ["nope"])

    def testRepeatedParseResets(self):
        args = Arguments()
        args.named("-o", "output", Assign({}, "o"), required=True)
        args.parse(["prog", "-o", "x"])
        with self.assertRaises(RequiredArgumentMissingError):
            args.parse(["prog"])

    def testHelpStillChecksRequired(self):
        args = Arguments()
        args.named("-o", "output", Assign({}, "o"), required=True)
        with self.assertRaises(RequiredArgumentMissingError):
            args.parse(["prog", "-h"])
        self.assertTrue(args.show_usage)

    def testHelpNamesReserved(self):
        with self.assertRaises(ValueError):
            Arguments().named("-h", "host", Assign({}, "h"))

    def testValidateHook(self):
        class Pair(Arguments):
            def __init__(self):
                super().__init__()
                self.low = 0
                self.high = 0
                self.named("--low", "low", Assign(self, "low"), int)
                self.named("--high", "high", Assign(self, "high"), int)

            def validate(self, app_name, /):
                if self.low > self.high:
                    raise IllegalValueError(app_name, details="low must not exceed high")

        Pair().parse(["prog", "--low", "1", "--high", "2"])
        with self.assertRaises(IllegalValueError):
            Pair().parse(["prog", "--low", "3", "--high", "2"])


if __name__ == "__main__":
    unittest.main()
