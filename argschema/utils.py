"""
Argschema utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the validators, arguments and commands layers.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support the higher-level schema and parser code.

Overview
- UnsetType / Unset
  • Singleton sentinel for "value not provided" without conflating it with None.
  • The parser hands Unset to a validator when no token bound to an argument.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, preserving legitimate falsey values.

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated wrappers.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr)
    with fresh container copies so public state cannot be mutated.

- pluralize(text, count=2) / ordinal(number)
  • Wording helpers for messages ("2 invalid arguments", "third position").

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
    >>> ordinal(3)
    'third'
"""
import builtins
import functools
import re
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a process-wide singleton.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
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

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Returns object unless it is Unset, in which case default is returned.
    Falsey values like None, 0, "" or [] are preserved as-is.
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable (updated in place)
    - rename(name) -> decorator
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


def _immortalize(object):
    """
    Recursively copy container values so callers never touch backing storage.

    - Sequence (non-string): new tuple.
    - Mapping: new dict with the same keys (order preserved).
    - Set: new frozenset.
    - Anything else: returned as-is.
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return frozenset(map(_immortalize, object))
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors the private attribute "_{name}".
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def pluralize(text, count=2, /):
    """
    Best-effort English pluralizer for the last word of a phrase.

    Returns text unchanged when count == 1. Only the regular patterns the
    package messages need are covered (s/sh/ch/x/z -> +es, consonant+y -> ies).

    Examples
    - pluralize("argument")           -> "arguments"
    - pluralize("invalid argument", 1) -> "invalid argument"
    - pluralize("switch")             -> "switches"
    """
    if not isinstance(text, str):
        raise TypeError("pluralize() argument must be a string")
    if count == 1 or not (match := re.search(r"(\S+)(\s*)$", text)):
        return text

    head, last, trail = text[:match.start(1)], match.group(1), match.group(2)

    if last.lower().endswith(("s", "sh", "ch", "x", "z")):
        plural = last + "es"
    elif last.lower().endswith("y") and len(last) > 1 and last[-2].lower() not in "aeiou":
        plural = last[:-1] + "ies"
    else:
        plural = last + "s"
    return head + plural + trail


@functools.cache
def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return (
            "first", "second", "third", "fourth", "fifth",
            "sixth", "seventh", "eighth", "ninth", "tenth",
        )[number - 1] if number > 0 else str(number)
    except IndexError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"
    return f"{number}%s" % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


Unset = UnsetType()
"""
Internal sentinel for "not provided".

The parser passes Unset to a validator when an argument received no token;
validators either reject it (required) or substitute their default.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "pluralize",
    "ordinal",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
