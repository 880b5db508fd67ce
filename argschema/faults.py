"""
Argschema faults (parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain to keep copy consistent and searches predictable.
- CommandException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased and actionable way.
- ValidationError: the aggregate of every per-argument decode failure of one
  parse, itemized as Issue(key, reason) pairs.

Propagation
- The parser never raises these: they are returned as data inside an Error
  result (see argschema.results) so callers branch in one place.
- Schema declaration defects are not faults; they raise TypeError/ValueError
  at construction time.

UX goals
- Position-first messages: structural faults name the ordinal position of the
  offending token ("at third position").
- Soft but technical language: short titles, one-sentence bodies, a single hint.
- Readable styling, configurable via __styles__ in __main__.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType
from typing import NamedTuple

from rich.console import Group
from rich.text import Text

from .utils import Unset, pluralize


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • UNKNOWN_COMMAND, MISSING_COMMAND
    - switches (1111x)
      • MALFORMED_TOKEN, UNKNOWN_SWITCH, MISSING_VALUE, DUPLICATED_SWITCH
    - positionals (1112x)
      • UNEXPECTED_CARDINAL
    - validation (1113x)
      • INVALID_ARGUMENTS
    - help (1190x)
      • HELP_REQUESTED

    normalize() allows host remapping to custom labels while keeping codes stable.
    """
    # --- routing errors ---
    UNKNOWN_COMMAND             = 11101
    MISSING_COMMAND             = 11102

    # --- switch errors ---
    MALFORMED_TOKEN             = 11111
    UNKNOWN_SWITCH              = 11112
    MISSING_VALUE               = 11114
    DUPLICATED_SWITCH           = 11115

    # --- positional errors ---
    UNEXPECTED_CARDINAL         = 11121

    # --- validation errors ---
    INVALID_ARGUMENTS           = 11131

    # --- not an error: explicit help request (safe-parse only) ---
    HELP_REQUESTED              = 11901

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class Issue(NamedTuple):
    """One per-argument decode failure: the argument key and a readable reason."""
    key: str
    reason: str


class CommandException(Exception):
    """
    base of every parse fault.

    options
    - title: short headline ("unknown option or flag").
    - code: FaultCode.
    - hint: one actionable sentence.
    - command: name of the command (or registry) that produced the fault.
    - any other context (token, input, index, suggestions, ...).
    """
    title = "command error"
    code = Unset

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({"title": self.title, "code": self.code, "hint": ""} | options)

    def __getattr__(self, name):
        # Read-only access to the option context (fault.code, fault.hint, ...).
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(name) from None

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.message == other.message and dict(self.options) == dict(other.options)

    def __hash__(self):
        return hash((type(self), self.message, self.options["code"]))

    def __repr__(self):
        return f"{type(self).__name__}({self.message!r})"

    def _styles(self, palette):
        return defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))

    def _render(self, palette, *extras):
        main = __import__("__main__")
        styles = self._styles(palette)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style])

        prog = text(getattr(main, "__prog__", self.options.get("command", "argschema")), "prog-name")
        code = self.options["code"]

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else "-", "code"),
            " | ",
            text(self.options["title"].title(), "error-title"),
            " ]"
        )
        renders = [header, text(self.message, "error-message"), *extras]
        if self.options["hint"]:
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(self.options["hint"], "hint")))
        return Group(*renders)

    def __rich__(self):
        return self._render({
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })


class MalformedTokenError(CommandException):
    title = "malformed option or flag"
    code = FaultCode.MALFORMED_TOKEN


class UnknownSwitchError(CommandException):
    title = "unknown option or flag"
    code = FaultCode.UNKNOWN_SWITCH


class MissingValueError(CommandException):
    title = "option value required"
    code = FaultCode.MISSING_VALUE


class DuplicatedSwitchError(CommandException):
    title = "duplicated option or flag"
    code = FaultCode.DUPLICATED_SWITCH


class UnexpectedCardinalError(CommandException):
    title = "unexpected positional"
    code = FaultCode.UNEXPECTED_CARDINAL


class UnknownCommandError(CommandException):
    title = "unknown command"
    code = FaultCode.UNKNOWN_COMMAND


class MissingCommandError(CommandException):
    title = "missing command"
    code = FaultCode.MISSING_COMMAND


class HelpRequested(CommandException):
    title = "help requested"
    code = FaultCode.HELP_REQUESTED


class ValidationError(CommandException):
    """
    aggregate of per-argument decode failures.

    every failing key of one parse is reported together, in declared order;
    the parser never stops at the first failure.
    """
    title = "invalid arguments"
    code = FaultCode.INVALID_ARGUMENTS

    def __init__(self, issues, /, **options):
        issues = tuple(Issue(*issue) for issue in issues)
        if not issues:
            raise ValueError("validation error requires at least one issue")
        keys = ", ".join(repr(issue.key) for issue in issues)
        super().__init__("%d %s: %s" % (len(issues), pluralize("invalid argument", len(issues)), keys), **options)
        self.issues = issues

    @property
    def keys(self):
        return tuple(issue.key for issue in self.issues)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.issues == other.issues and dict(self.options) == dict(other.options)

    def __hash__(self):
        return hash((type(self), self.issues))

    def __rich__(self):
        styles = self._styles({"issue-key": "bold #FFD600", "issue-reason": "#C8C8D0"})
        lines = [
            Text.assemble(
                " • ",
                (issue.key, styles["issue-key"]),
                ": ",
                (issue.reason, styles["issue-reason"]),
            )
            for issue in self.issues
        ]
        return self._render({
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        }, *lines)


__all__ = (
    "FaultCode",
    "Issue",
    "CommandException",
    "MalformedTokenError",
    "UnknownSwitchError",
    "MissingValueError",
    "DuplicatedSwitchError",
    "UnexpectedCardinalError",
    "UnknownCommandError",
    "MissingCommandError",
    "HelpRequested",
    "ValidationError",
)
