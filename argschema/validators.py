"""
Argschema validators: the decode capability behind every argument's 'type'.

Contract
- A validator maps one raw binding to a typed value or fails with DecodeError.
- The raw binding handed over by the parser is one of:
  • Unset          → no token bound the argument (absence).
  • str            → a flag value or a positional token.
  • True           → a boolean flag given without a value.
  • list[str]      → a variadic positional or a repeated multiple-value flag.
- Absence is decided by the validator itself: required validators reject Unset,
  optional ones (Optional, Boolean, Sequence with min=0) substitute a default.

Traits read by the parser and the help renderer
- boolean:  the flag takes no value; '--name' alone binds True.
- multiple: the flag may repeat; every occurrence is accumulated into a list.
- required: absence is a decode failure.
- summary:  short type label rendered in help ("string", "integer", "{a,b}").

Built-ins
- String, Integer, Number, Boolean, Choice, Sequence, Optional
- Converter: any plain callable (pathlib.Path, datetime.date.fromisoformat, ...)
- Adapted: a pydantic TypeAdapter (or an annotation turned into one)

resolve(x) normalizes what an Argument accepts as 'type' into a Validator.
"""
import functools
import operator
import re
import typing
from collections import abc

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .utils import Unset


class DecodeError(Exception):
    """Raised by a validator when a raw binding cannot be decoded."""

    def __init__(self, reason, /):
        super().__init__(reason)
        self.reason = reason


class Validator:
    """
    Base decode capability.

    Subclasses implement decode(raw). The shared _single() helper handles the
    absence/shape checks of single-valued validators.
    """
    summary = "value"
    boolean = False
    multiple = False
    required = True

    def decode(self, raw, /):
        raise NotImplementedError

    def _single(self, raw):
        if raw is Unset:
            raise DecodeError("required")
        if raw is True:
            raise DecodeError("expected a %s, got a bare flag" % self.summary)
        if not isinstance(raw, str):
            raise DecodeError("expected a single %s, got %d values" % (self.summary, len(raw)))
        return raw

    def __rich_repr__(self):
        yield from ()

    def __repr__(self):
        return f"{type(self).__name__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return tuple(self.__rich_repr__()) == tuple(other.__rich_repr__())

    def __hash__(self):
        return hash((type(self), tuple(map(repr, self.__rich_repr__()))))


class String(Validator):
    summary = "string"

    def __init__(self, *, min=0, pattern=Unset):
        if not isinstance(min, int) or min < 0:
            raise ValueError("string 'min' must be a non-negative integer")
        if not isinstance(pattern, str | Unset):
            raise TypeError("string 'pattern' must be a string")
        self.min = min
        try:
            self.pattern = re.compile(pattern) if pattern is not Unset else Unset
        except re.error as error:
            raise ValueError("string 'pattern' is not a valid regular expression: %s" % error) from None

    def decode(self, raw, /):
        value = self._single(raw)
        if len(value) < self.min:
            raise DecodeError("expected at least %d characters, got %d" % (self.min, len(value)))
        if self.pattern and not self.pattern.fullmatch(value):
            raise DecodeError("%r does not match %r" % (value, self.pattern.pattern))
        return value

    def __rich_repr__(self):
        if self.min:
            yield "min", self.min
        if self.pattern:
            yield "pattern", self.pattern.pattern


class _Bounded(Validator):
    convert = staticmethod(int)

    def __init__(self, *, min=Unset, max=Unset):
        self.min = min
        self.max = max
        if min is not Unset and max is not Unset and min > max:
            raise ValueError(f"{self.summary} 'min' cannot be greater than 'max'")

    def decode(self, raw, /):
        value = self._single(raw)
        try:
            value = self.convert(value)
        except ValueError:
            raise DecodeError("expected %s %s, got %r" % ("an" if self.summary[0] in "aeiou" else "a", self.summary, raw)) from None
        if self.min is not Unset and value < self.min:
            raise DecodeError("expected a value >= %s, got %s" % (self.min, value))
        if self.max is not Unset and value > self.max:
            raise DecodeError("expected a value <= %s, got %s" % (self.max, value))
        return value

    def __rich_repr__(self):
        if self.min is not Unset:
            yield "min", self.min
        if self.max is not Unset:
            yield "max", self.max


class Integer(_Bounded):
    summary = "integer"
    convert = staticmethod(int)


class Number(_Bounded):
    summary = "number"
    convert = staticmethod(float)


class Boolean(Validator):
    """
    Presence flag. '--name' binds True; absence resolves to False unless the
    validator is declared required. Explicit values are accepted as well
    ('--name=no', '--name=1').
    """
    summary = "boolean"
    boolean = True

    truthy = frozenset({"true", "yes", "on", "1"})
    falsy = frozenset({"false", "no", "off", "0"})

    def __init__(self, *, required=False):
        self.required = bool(required)

    def decode(self, raw, /):
        if raw is Unset:
            if self.required:
                raise DecodeError("required")
            return False
        if isinstance(raw, bool):
            return raw
        if not isinstance(raw, str):
            raise DecodeError("expected a single boolean, got %d values" % len(raw))
        if raw.lower() in self.truthy:
            return True
        if raw.lower() in self.falsy:
            return False
        raise DecodeError("expected a boolean (true/false, yes/no, on/off, 1/0), got %r" % raw)

    def __rich_repr__(self):
        if self.required:
            yield "required", self.required


class Choice(Validator):
    def __init__(self, *choices):
        if not choices:
            raise TypeError("choice must specify at least one choice")
        if not all(isinstance(choice, str) for choice in choices):
            raise TypeError("choice choices must be strings")
        if len(set(choices)) != len(choices):
            raise ValueError("choice choices cannot contain duplicates")
        self.choices = choices

    @property
    def summary(self):
        return "{%s}" % ",".join(self.choices)

    def decode(self, raw, /):
        if (value := self._single(raw)) not in self.choices:
            raise DecodeError("invalid choice %r (choose from %s)" % (value, ", ".join(map(repr, self.choices))))
        return value

    def __rich_repr__(self):
        yield "choices", self.choices


class Sequence(Validator):
    """
    List of values decoded item by item. Used for variadic positionals and for
    flags that may repeat ('--tag a --tag b').
    """
    multiple = True

    def __init__(self, item=str, /, *, min=0):
        if not isinstance(min, int) or min < 0:
            raise ValueError("sequence 'min' must be a non-negative integer")
        self.item = resolve(item)
        if self.item.multiple:
            raise TypeError("sequence items cannot be sequences")
        self.min = min

    @property
    def summary(self):
        return self.item.summary + "..."

    @property
    def required(self):
        return self.min > 0

    def decode(self, raw, /):
        if raw is Unset:
            raw = []
        elif raw is True:
            raise DecodeError("expected %s values, got a bare flag" % self.item.summary)
        elif isinstance(raw, str):
            raw = [raw]
        if len(raw) < self.min:
            raise DecodeError("required" if not raw else "expected at least %d values, got %d" % (self.min, len(raw)))
        values = []
        for index, token in enumerate(raw, 1):
            try:
                values.append(self.item.decode(token))
            except DecodeError as error:
                raise DecodeError("item %d: %s" % (index, error.reason)) from None
        return values

    def __rich_repr__(self):
        yield "item", self.item
        if self.min:
            yield "min", self.min


class Optional(Validator):
    """Wrap a validator so absence resolves to 'default' instead of failing."""
    required = False

    def __init__(self, inner, /, default=None):
        self.inner = resolve(inner)
        self.default = default

    @property
    def summary(self):
        return self.inner.summary

    @property
    def boolean(self):
        return self.inner.boolean

    @property
    def multiple(self):
        return self.inner.multiple

    def decode(self, raw, /):
        if raw is Unset:
            return self.default
        return self.inner.decode(raw)

    def __rich_repr__(self):
        yield "inner", self.inner
        yield "default", self.default


class Converter(Validator):
    """
    Adapt a plain callable taking one string. Any exception raised by the
    callable becomes a decode failure; ValueError and TypeError keep their
    message.
    """

    def __init__(self, callback, /, summary=Unset):
        if not callable(callback):
            raise TypeError("converter 'callback' must be callable")
        self.callback = callback
        self.summary = summary or getattr(callback, "__name__", "value").lower()

    def decode(self, raw, /):
        value = self._single(raw)
        try:
            return self.callback(value)
        except (ValueError, TypeError) as error:
            raise DecodeError(str(error) or "invalid %s %r" % (self.summary, value)) from None
        except Exception:
            raise DecodeError("invalid %s %r" % (self.summary, value)) from None

    def __rich_repr__(self):
        yield "callback", self.callback


@functools.lru_cache(maxsize=128)
def _adapter(annotation):
    return TypeAdapter(annotation)


class Adapted(Validator):
    """
    Delegate decoding to a pydantic TypeAdapter.

    Accepts either a ready TypeAdapter or an annotation (list[int],
    Literal["a", "b"], a BaseModel, ...); adapters built from annotations are
    cached. List-like annotations make the argument multiple and bool makes
    it boolean. A boolean adapter is optional by default: absence resolves
    to False, as with Boolean.
    """

    def __init__(self, source, /, *, summary=Unset, multiple=Unset, required=Unset):
        if isinstance(source, TypeAdapter):
            self.annotation = Unset
            self.adapter = source
        else:
            try:
                self.adapter = _adapter(source)
            except TypeError:
                raise TypeError("adapted 'source' must be a type-adapter or a hashable annotation") from None
            self.annotation = source

        origin = typing.get_origin(self.annotation) or self.annotation
        self.boolean = self.annotation is bool
        self.multiple = bool(multiple) if multiple is not Unset else (
            isinstance(origin, type) and issubclass(origin, (list, tuple, set, frozenset, abc.Sequence)) and origin is not str
        )
        self.summary = summary or getattr(self.annotation, "__name__", None) or "value"
        self.required = bool(required) if required is not Unset else not self.boolean

    def decode(self, raw, /):
        if raw is Unset:
            if self.required:
                raise DecodeError("required")
            return False if self.boolean else None
        try:
            return self.adapter.validate_python(raw)
        except PydanticValidationError as error:
            raise DecodeError("; ".join(detail["msg"] for detail in error.errors())) from None

    def __rich_repr__(self):
        yield "source", self.adapter if self.annotation is Unset else self.annotation


def resolve(type, /):
    """
    Normalize an Argument 'type' into a Validator.

    - Validator instances pass through.
    - bool/str/int/float map to Boolean/String/Integer/Number.
    - pydantic TypeAdapter instances become Adapted.
    - Any other callable becomes a Converter.
    """
    if isinstance(type, Validator):
        return type
    if isinstance(type, TypeAdapter):
        return Adapted(type)
    try:
        return {bool: Boolean, str: String, int: Integer, float: Number}[type]()
    except (KeyError, TypeError):
        pass
    if callable(type):
        return Converter(type)
    raise TypeError("argument 'type' must be a validator, a type-adapter or a callable")


__all__ = (
    "DecodeError",
    "Validator",
    "String",
    "Integer",
    "Number",
    "Boolean",
    "Choice",
    "Sequence",
    "Optional",
    "Converter",
    "Adapted",
    "resolve",
)
