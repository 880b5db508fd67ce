r"""
Argschema argument declaration.

Overview
- Argument: declarative description of one named argument of a command.
  • type: validator/decoder of the raw binding (see argschema.validators).
  • positional: Unset | int (fixed 0-based index) | "..." / Ellipsis (variadic).
  • short: Unset | single-character alias usable as '-x'.
  • descr: Unset | str | Text, rendered in help.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ via read-only properties.

Binding (performed by argschema.commands.Command.parse)
- '--<key>' or '-<short>' binds the flag value (True for boolean validators).
- otherwise a fixed positional index binds that positional token.
- otherwise a variadic argument binds every unclaimed positional token.
- otherwise the validator receives Unset and decides about absence.

Validation highlights
- short must be exactly one letter or digit.
- positional indices must be non-negative integers (bool is rejected).
- a variadic argument always decodes a list: a single-valued validator is
  applied per token (wrapped into validators.Sequence).
- descr strings are trimmed; empty strings are rejected.

Quick example:
    >>> from argschema.arguments import Argument
    >>> from argschema.validators import Integer, Sequence
    >>> count = Argument(Integer(min=1), short="c", descr="how many times")
    >>> files = Argument(Sequence(str), positional=...)
"""
import builtins
import functools
import operator
import re
from types import EllipsisType

from rich.text import Text

from .utils import *
from .validators import Sequence, resolve


class ArgumentType(type):
    """
    Metaclass that turns specs into introspectable, read-only descriptors.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and help output.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                if (object := getattr(self, name)) is not None:
                    yield name, object
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate argument metadata in place.

    - type: resolved into a Validator (TypeError when unresolvable).
    - positional: Unset | int >= 0 | Ellipsis ("..." is accepted as Ellipsis).
    - short: Unset | one letter or digit, stored without the dash.
    - descr: Unset | non-empty str | Text; Unset becomes None.
    """
    metadata["type"] = resolve(metadata["type"])

    if (positional := metadata["positional"]) == "...":
        positional = Ellipsis
    if not isinstance(positional, int | EllipsisType | Unset) or isinstance(positional, bool):
        raise TypeError(f"{cls.__typename__} 'positional' must be an integer or ellipsis")
    if isinstance(positional, int) and positional < 0:
        raise ValueError(f"{cls.__typename__} 'positional' must be a non-negative integer")
    metadata["positional"] = coalesce(positional)

    if not isinstance(short := metadata["short"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'short' must be a string")
    elif isinstance(short, str) and not re.fullmatch(r"[^\W_]", short := short.strip().removeprefix("-")):
        raise ValueError(f"{cls.__typename__} 'short' must be a single letter or digit")
    metadata["short"] = coalesce(short)

    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    # Variadic arguments always bind a list; per-token validators are lifted.
    if metadata["positional"] is Ellipsis and not metadata["type"].multiple:
        metadata["type"] = Sequence(metadata["type"])


class Argument(metaclass=ArgumentType):
    """
    Declarative description of one named argument.

    Properties
    - type, positional, short, descr: sanitized, read-only.
    - variadic: True when positional is the "consume the rest" marker.
    """

    __introspectable__ = (
        "type",
        "positional",
        "short",
        "descr",
    )

    def __init__(self, type=str, /, positional=Unset, short=Unset, descr=Unset):
        metadata = {
            "type": type,
            "positional": positional,
            "short": short,
            "descr": descr,
        }
        _sanitize_metadata(builtins.type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def variadic(self):
        return self._positional is Ellipsis

    def __eq__(self, other):
        if not isinstance(other, Argument):
            return NotImplemented
        return tuple(self.__rich_repr__()) == tuple(other.__rich_repr__())

    def __hash__(self):
        return hash((self._type, self._positional, self._short))


__all__ = (
    "Argument",
)

# Not part of the public API.
del ArgumentType
