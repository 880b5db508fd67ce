"""
Argschema parse results: one discriminated value per invocation.

Variants (each exposes a `type` discriminant)
- Success(data)            → "success": decoded values keyed like the command's args.
- Help(help)               → "help": rendered help text.
- Error(error, help)       → "error": a fault (see argschema.faults) plus help text.
- Subcommand(name, result) → "subcommand": the inner result of the dispatched
  command, whatever its own variant is.

Safe-parse variants
- Ok(data)      → ok is True.
- Failed(error) → ok is False.

Results are immutable NamedTuples with variant-aware equality: two results are
equal only when they are the same variant with equal payloads, so parsing the
same tokens twice yields equal results.

Consumers
- exitcode(result): 0 for Success and Help, 1 for Error; Subcommand follows
  its inner result.
- report(result, target): print help (stdout) or fault + help (stderr) with rich
  and return the exit code.
"""
from typing import NamedTuple, Any

from rich.console import Console
from rich.text import Text

from .faults import CommandException
from .utils import Unset


def _equals(self, other):
    return type(self) is type(other) and tuple.__eq__(self, other)


def _differs(self, other):
    return not _equals(self, other)


class Success(NamedTuple):
    """Every argument decoded; data is keyed exactly like the command's args."""
    data: dict[str, Any]

    type = "success"
    __eq__ = _equals
    __ne__ = _differs
    __hash__ = None


class Help(NamedTuple):
    """Help was requested (or is the only sensible answer, e.g. empty dispatch)."""
    help: str

    type = "help"
    __eq__ = _equals
    __ne__ = _differs
    __hash__ = None


class Error(NamedTuple):
    """A fault plus the help text to show next to it."""
    error: CommandException
    help: str

    type = "error"
    __eq__ = _equals
    __ne__ = _differs
    __hash__ = None


class Subcommand(NamedTuple):
    """
    A subcommand matched; result is its own Success/Help/Error.

    The wrapper always reports "subcommand" so callers first branch on the
    dispatch, then on result.type.
    """
    name: str
    result: Success | Help | Error

    type = "subcommand"
    __eq__ = _equals
    __ne__ = _differs
    __hash__ = None


class Ok(NamedTuple):
    data: Any

    ok = True
    __eq__ = _equals
    __ne__ = _differs
    __hash__ = None


class Failed(NamedTuple):
    error: CommandException

    ok = False
    __eq__ = _equals
    __ne__ = _differs
    __hash__ = None


def exitcode(result, /):
    """
    map a result to a process exit code.

    - Success, Help → 0
    - Error         → 1
    - Subcommand    → exit code of its inner result
    """
    match result:
        case Subcommand():
            return exitcode(result.result)
        case Success() | Help():
            return 0
        case Error():
            return 1
    raise TypeError("exitcode() argument must be a parse result")


def report(result, /, target=Unset, *, console=Unset, colorful=True):
    """
    print a result for a terminal user and return its exit code.

    behavior
    - Success: prints nothing.
    - Help: prints the help to stdout.
    - Error: prints the fault (rich-rendered) and then the help to stderr.
    - Subcommand: reports its inner result.

    parameters
    - target: the Command or Subcommands that produced the result. when given,
      help is re-rendered with styles (palette overridable via __styles__ in
      __main__); otherwise the plain help text carried by the result is printed.
    - console: rich Console to print to (defaults to stdout for help, stderr
      for errors).
    - colorful: False disables colors on the default consoles.
    """
    name = Unset
    if isinstance(result, Subcommand):
        name, result = result.name, result.result

    code = exitcode(result)
    if isinstance(result, Success):
        return code

    if target is Unset:
        help = Text(result.help)
    elif name is Unset:
        help = target.render(colorful=colorful)
    else:
        help = target.render(name, colorful=colorful)

    if console is Unset:
        console = Console(stderr=isinstance(result, Error), no_color=not colorful, highlight=False)

    if isinstance(result, Error):
        console.print(result.error)
        console.print()
    console.print(help)
    return code


__all__ = (
    "Success",
    "Help",
    "Error",
    "Subcommand",
    "Ok",
    "Failed",
    "exitcode",
    "report",
)
