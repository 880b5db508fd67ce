"""
Argschema command layer: declare commands, parse tokens, dispatch subcommands.

What this module provides
- Command: a named, described, ordered mapping of argument keys to Argument declarations.
  • parse(tokens) → Success | Help | Error (see argschema.results).
  • safe_parse(tokens) → Ok | Failed.
  • render() → rich Text help (usage, description, arguments).
- Subcommands: an immutable registry of name → Command.
  • parse(tokens) → Subcommand | Help | Error, dispatching on the first token.
- Factories and helpers:
  • command(name, descr, **args): keyword-style Command construction.
  • invoke(target, prompt): parse a prompt (argv, shell-like string or tokens).
  • run(target, prompt): invoke, report, and exit unless the parse succeeded.

Core ideas
- Declarative schemas: construction validates the declaration eagerly (short
  alias collisions, positional index conflicts, variadic placement) and raises
  TypeError/ValueError, because those are programmer errors.
- Parsing never raises for user input: every failure is returned as an Error
  result carrying a fault and ready-to-print help.
- Decode failures are aggregated: every invalid argument of one parse is named
  in a single ValidationError.

Quick start
    from argschema import Argument, Command, Sequence, invoke

    greet = Command("greet", "say hello", {
        "name": Argument(str, short="n", descr="who to greet"),
        "loud": Argument(bool, descr="shout it"),
        "rest": Argument(Sequence(str), positional=...),
    })

    result = invoke(greet, "--name Alice --loud a b")
    # Success(data={'name': 'Alice', 'loud': True, 'rest': ['a', 'b']})

Policies
- strict=True: unknown flags and unclaimed positional tokens are errors;
  strict=False ignores them.
- positionals=False: any positional token is an error.
- helper=True: '-h' is a help alias besides '--help'; when False, '-h' can be
  declared as a short alias of an argument.
"""
import difflib
import functools
import logging
import operator
import os.path
import re
import shlex
import sys
from collections import deque
from collections.abc import Iterable, Mapping

from rich.text import Text

from .arguments import Argument
from .faults import *
from .results import Success, Help, Error, Subcommand, Ok, Failed, report
from .utils import *
from .validators import DecodeError

logger = logging.getLogger(__name__)


class CommandType(type):
    """
    Metaclass for the command layer classes.

    Responsibilities
    - Expose the fields listed in __introspectable__ as read-only properties
      (mirror()), so a declared schema cannot be mutated after construction.
    - Provide stable, readable __repr__/__rich_repr__ for diagnostics.
    - Derive __typename__ from the class name for consistent messages.
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
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_name(cls, name, /):
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not re.fullmatch(r"\w[\w.-]*", name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' must be a non-empty word (letters, digits, '_', '-', '.')")
    return name


def _sanitize_descr(cls, descr, /):
    if not isinstance(descr, str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    return coalesce(descr)


def _process_args(cls, metadata, /):
    """
    Validate the declared arguments and compile the switch table.

    Responsibilities
    - args: Mapping (or iterable of pairs) of key → Argument; bare validators or
      callables are lifted into Argument(type).
    - keys: words made of letters, digits, '_' and '-', not starting with a digit
      or '-'; 'help' is reserved. '--<key>' is the long flag, with '_' spelled '-'.
    - switches: '--key' and '-s' → key; any collision raises ValueError.
    - positionals: fixed indices are distinct; at most one variadic argument and
      no fixed-index argument declared after it.
    """
    args = metadata["args"]
    if isinstance(args, Mapping):
        args = args.items()
    elif not isinstance(args, Iterable) or isinstance(args, str):
        raise TypeError(f"{cls.__typename__} 'args' must be a mapping")

    declared = metadata["args"] = {}
    switches = metadata["switches"] = {}
    indices = {}
    variadic = None

    for key, argument in args:
        if not isinstance(key, str):
            raise TypeError(f"{cls.__typename__} argument keys must be strings")
        elif not re.fullmatch(r"[^\W\d_][\w-]*|_[\w-]+", key):
            raise ValueError(f"{cls.__typename__} argument key {key!r} is not a valid name")
        elif key in declared:
            raise ValueError(f"{cls.__typename__} argument key {key!r} is declared twice")
        elif key.strip("_").replace("_", "-") == "help":
            raise ValueError(f"{cls.__typename__} argument key 'help' is reserved")

        if not isinstance(argument, Argument):
            try:
                argument = Argument(argument)
            except TypeError:
                raise TypeError(f"{cls.__typename__} argument {key!r} must be an argument or a validator") from None

        if (switch := "--" + key.strip("_").replace("_", "-")) in switches:
            raise ValueError(f"{cls.__typename__} argument {key!r} flag {switch!r} is already used by {switches[switch]!r}")
        switches[switch] = key

        if argument.short:
            if argument.short == "h" and metadata["helper"]:
                raise ValueError(f"{cls.__typename__} argument {key!r} short alias '-h' is reserved for help")
            if (short := "-" + argument.short) in switches:
                raise ValueError(f"{cls.__typename__} short alias {short!r} is used by both {switches[short]!r} and {key!r}")
            switches[short] = key

        if argument.variadic:
            if variadic is not None:
                raise ValueError(f"{cls.__typename__} arguments {variadic!r} and {key!r} cannot both be variadic")
            variadic = key
        elif argument.positional is not None:
            if variadic is not None:
                raise ValueError(f"{cls.__typename__} positional argument {key!r} must be declared before variadic {variadic!r}")
            if argument.positional in indices:
                raise ValueError(
                    f"{cls.__typename__} arguments {indices[argument.positional]!r} and {key!r} share position {argument.positional}"
                )
            indices[argument.positional] = key

        declared[key] = argument


def _tokens(prompt, /):
    """
    Normalize a prompt into a list of tokens.

    - Unset: sys.argv[1:].
    - str: split shell-style (shlex.split).
    - Iterable[str]: used as is (a copy).
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() argument must be a string or an iterable of strings")


def _looks_like_switch(token):
    return token.startswith("-") and token != "-" and token != "--" and not re.fullmatch(r"-\d+(\.\d*)?", token)


class Command(metaclass=CommandType):
    """
    Declarative command surface: a name, a description and ordered arguments.

    Lifecycle
    - Constructed once (typically at import time) and immutable afterwards.
    - Declaration problems raise TypeError/ValueError eagerly.
    - parse()/safe_parse() are pure: no state survives a call.
    """

    __introspectable__ = (
        "name",
        "descr",
        "args",
        "strict",
        "positionals",
        "helper",
    )

    def __init__(self, name, /, descr=Unset, args=(), *, strict=True, positionals=True, helper=True):
        cls = type(self)
        metadata = {
            "name": _sanitize_name(cls, name),
            "descr": _sanitize_descr(cls, descr),
            "args": args,
            "strict": bool(strict),
            "positionals": bool(positionals),
            "helper": bool(helper),
        }
        _process_args(cls, metadata)

        if not metadata["positionals"]:
            for key, argument in metadata["args"].items():
                if argument.positional is not None:
                    raise ValueError(f"{cls.__typename__} argument {key!r} is positional but positionals are disabled")

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def helps(self):
        """Tokens that request help for this command."""
        return ("--help", "-h") if self._helper else ("--help",)

    # ── Parsing ───────────────────────────────────────────────────────────────

    def parse(self, tokens=Unset, /):
        """
        Parse tokens into Success, Help or Error. Never raises for user input.

        tokens: Unset (sys.argv[1:]), a shell-like string or an iterable of strings.
        """
        return self._parse(_tokens(tokens), (self._name,))

    def safe_parse(self, tokens=Unset, /):
        """
        Parse tokens into Ok(data) or Failed(error).

        A help request becomes Failed(HelpRequested) carrying the help text.
        """
        match self.parse(tokens):
            case Success(data):
                return Ok(data)
            case Help(help):
                return Failed(HelpRequested("help requested", command=self._name, help=help))
            case Error(error, _):
                return Failed(error)

    def _parse(self, tokens, route):
        logger.debug("parsing %r for %r", tokens, " ".join(route))

        if self._requests_help(tokens):
            logger.debug("help requested for %r", self._name)
            return Help(self.render(route=route).plain)

        try:
            flags, positionals = self._tokenize(tokens, route)
            bindings = self._bind(flags, positionals, route)
        except CommandException as fault:
            logger.debug("structural fault for %r: %s", self._name, fault.message)
            return Error(fault, self.render(route=route).plain)

        data = {}
        issues = []
        for key, argument in self._args.items():
            try:
                data[key] = argument.type.decode(bindings.get(key, Unset))
            except DecodeError as error:
                issues.append(Issue(key, error.reason))

        if issues:
            logger.debug("%d decode failures for %r", len(issues), self._name)
            return Error(ValidationError(
                issues,
                command=" ".join(route),
                hint="run '%s --help' to see the expected arguments" % " ".join(route),
            ), self.render(route=route).plain)

        return Success(data)

    def _requests_help(self, tokens):
        """
        whether a help token appears before the '--' terminator.

        help wins over any other content of the flag section, but tokens after
        '--' are positional: 'cmd -- --help' passes '--help' as a value.
        """
        for token in tokens:
            if token == "--":
                return False
            if token in self.helps:
                return True
        return False

    def _switch(self, token, index, route):
        """resolve a switch token to an argument key, or None when ignored."""
        try:
            return self._switches[token]
        except KeyError:
            pass
        if not self._strict:
            logger.debug("ignoring unknown switch %r", token)
            return None

        suggestions = difflib.get_close_matches(token, self._switches.keys(), 5)
        try:
            hint = "did you mean %r? you can also run '%s --help' to see all options" % (suggestions[0], " ".join(route))
        except IndexError:
            hint = "try '%s --help' to see all available options" % " ".join(route)
        raise UnknownSwitchError(
            "unknown option or flag %r at %s position" % (token, ordinal(index)),
            command=" ".join(route),
            input=token,
            index=index,
            suggestions=tuple(suggestions),
            hint=hint,
        )

    def _tokenize(self, tokens, route):
        """
        split tokens into flag bindings and positional tokens.

        returns
        - flags: dict[key, list[str | True]] in order of appearance.
        - positionals: list of (index, token), index being the 1-based position.
        """
        flags = {}
        positionals = []
        queue = deque(enumerate(tokens, 1))

        def store(key, value, input, index):
            if key in flags and not self._args[key].type.multiple:
                raise DuplicatedSwitchError(
                    "option or flag %r at %s position was already given" % (input, ordinal(index)),
                    command=" ".join(route),
                    input=input,
                    index=index,
                    hint="give %r only once" % input,
                )
            flags.setdefault(key, []).append(value)

        def take(input, index):
            if queue and queue[0][1] != "--" and not _looks_like_switch(queue[0][1]):
                return queue.popleft()[1]
            raise MissingValueError(
                "option %r at %s position requires a value" % (input, ordinal(index)),
                command=" ".join(route),
                input=input,
                index=index,
                hint="pass a value after a space or inline (for example: %s=<value>)" % input,
            )

        digits = any(re.fullmatch(r"-\d", switch) for switch in self._switches)

        while queue:
            index, token = queue.popleft()

            if token == "--":
                positionals.extend(queue)
                break

            if token == "-" or not token.startswith("-") or (not digits and not _looks_like_switch(token)):
                positionals.append((index, token))
                continue

            if token.startswith("--"):
                match = re.fullmatch(r"(?P<input>--[^\W_][\w-]*)(=(?P<value>.*))?", token, re.DOTALL)
                if not match:
                    raise MalformedTokenError(
                        "bad form of option or flag %r at %s position" % (token, ordinal(index)),
                        command=" ".join(route),
                        token=token,
                        index=index,
                        hint="try '%s --help' to see valid spellings and forms (e.g., --name=value)" % " ".join(route),
                    )
                input = match["input"].replace("_", "-")
                if (key := self._switch(input, index, route)) is None:
                    continue
                value = match["value"]
                if value is None:
                    value = True if self._args[key].type.boolean else take(input, index)
                store(key, value, input, index)
                continue

            if not re.fullmatch(r"-[^\W_].*", token, re.DOTALL):
                raise MalformedTokenError(
                    "bad form of option or flag %r at %s position" % (token, ordinal(index)),
                    command=" ".join(route),
                    token=token,
                    index=index,
                    hint="short aliases are a dash and one letter or digit (e.g., -n value or -nvalue)",
                )

            # short aliases: '-x', '-x value', '-xvalue', '-x=value' and bundled booleans '-abc'
            body = token[1:]
            while body:
                input, body = "-" + body[0], body[1:]
                if (key := self._switch(input, index, route)) is None:
                    break
                if self._args[key].type.boolean:
                    if body.startswith("="):
                        value, body = body[1:], ""
                    else:
                        value = True
                elif body:
                    value, body = body.removeprefix("="), ""
                else:
                    value = take(input, index)
                store(key, value, input, index)

        return flags, positionals

    def _bind(self, flags, positionals, route):
        """
        resolve each argument's raw binding in declared order.

        order: flag values, then the fixed positional index, then (variadic)
        every positional token no fixed index claimed. arguments left unbound
        are absent (their validator receives Unset).
        """
        bindings = {}
        claimed = set()

        for key, argument in self._args.items():
            if key in flags:
                values = flags[key]
                bindings[key] = values if argument.type.multiple else values[0]
            elif isinstance(argument.positional, int) and argument.positional < len(positionals):
                bindings[key] = positionals[argument.positional][1]
                claimed.add(argument.positional)

        for key, argument in self._args.items():
            if argument.variadic and key not in bindings:
                bindings[key] = [token for position, (_, token) in enumerate(positionals) if position not in claimed]
                claimed.update(range(len(positionals)))

        leftovers = [item for position, item in enumerate(positionals) if position not in claimed]
        if leftovers and (self._strict or not self._positionals):
            index, token = leftovers[0]
            raise UnexpectedCardinalError(
                "unexpected positional %r at %s position" % (token, ordinal(index)),
                command=" ".join(route),
                token=token,
                index=index,
                leftover=tuple(token for _, token in leftovers),
                hint=(
                    "this command takes no positionals; pass values through options"
                    if not self._positionals else
                    "remove the extra inputs, then run '%s --help' to see valid forms" % " ".join(route)
                ),
            )
        return bindings

    # ── Rendering ─────────────────────────────────────────────────────────────

    def render(self, *, colorful=False, route=Unset):
        """
        Render help as rich Text: usage, description and arguments.

        Palette keys (override through a __styles__ mapping in __main__)
        - usage-label, program-name, description-section
        - group-label, argument-description, argument-notes
        - option-name, flag-name, metavar, positional

        colorful=False yields unstyled Text (its .plain is what results carry).
        """
        styler = _styler(colorful)
        route = " ".join(coalesce(route, (self._name,)))

        def label(key, argument):
            parts = [Text(", ").join(
                Text(switch, styler("flag-name" if argument.type.boolean else "option-name"))
                for switch in self._names(key)
            )]
            if not argument.type.boolean:
                parts.append(Text("<%s>" % argument.type.summary, styler("metavar")))
            return Text(" ").join(parts)

        def annotate(argument):
            notes = []
            if argument.type.required:
                notes.append("required")
            if argument.variadic:
                notes.append("remaining positionals")
            elif argument.positional is not None:
                notes.append("positional %d" % (argument.positional + 1))
            return notes

        # usage: flags first, then fixed positionals by index, then the variadic tail
        usage = Text.assemble(("usage", styler("usage-label")), ": ", (route, styler("program-name")))
        inputs = [Text("[%s]" % " | ".join(self.helps), styler("flag-name"))]
        tail = []
        for key, argument in self._args.items():
            if argument.positional is None:
                if argument.type.boolean:
                    piece = Text("--" + key.strip("_").replace("_", "-"), styler("flag-name"))
                else:
                    piece = Text.assemble(
                        ("--" + key.strip("_").replace("_", "-"), styler("option-name")),
                        " ",
                        ("<%s>" % argument.type.summary, styler("metavar")),
                    )
                inputs.append(piece if argument.type.required else Text.assemble("[", piece, "]"))
            else:
                piece = Text("<%s>%s" % (key, "..." * argument.variadic), styler("positional"))
                tail.append((
                    argument.positional if not argument.variadic else sys.maxsize,
                    piece if argument.type.required else Text.assemble("[", piece, "]"),
                ))
        inputs.extend(piece for _, piece in sorted(tail, key=operator.itemgetter(0)))
        usage.append(" ").append(Text(" ").join(inputs))

        renders = [usage]

        if self._descr:
            renders.append(_text(self._descr, styler("description-section")))

        labels = [(label(key, argument), argument) for key, argument in self._args.items()]
        labels.append((Text(", ").join(Text(name, styler("flag-name")) for name in reversed(self.helps)), None))
        indent = max(15, max(len(text) for text, _ in labels) + 4)
        padding = 2

        section = Text.assemble((("arguments" if self._args else "options"), styler("group-label")), ":")
        for text, argument in labels:
            line = Text(" " * padding).append(text)
            line.append(" " * (indent - padding - len(text)))
            if argument is None:
                line.append("show this help message and exit", styler("argument-description"))
            else:
                if argument.descr:
                    line.append(_text(argument.descr, styler("argument-description")))
                if notes := annotate(argument):
                    line.append(" " * bool(argument.descr)).append("(%s)" % ", ".join(notes), styler("argument-notes"))
            line.rstrip()
            section.append("\n").append(line)
        renders.append(section)

        return Text("\n\n").join(renders)

    def _names(self, key):
        names = ["-" + self._args[key].short] if self._args[key].short else []
        return names + ["--" + key.strip("_").replace("_", "-")]


class Subcommands(metaclass=CommandType):
    """
    Immutable registry of subcommand name → Command.

    parse() dispatches on the first token; the remaining tokens are parsed by
    the matched command and wrapped as Subcommand(name, inner_result).
    """

    __introspectable__ = (
        "name",
        "descr",
        "commands",
    )

    def __init__(self, commands, /, name=Unset, descr=Unset):
        cls = type(self)
        if isinstance(commands, Mapping):
            commands = commands.items()
        elif not isinstance(commands, Iterable) or isinstance(commands, str):
            raise TypeError(f"{cls.__typename__} 'commands' must be a mapping")

        registry = {}
        for key, command in commands:
            key = _sanitize_name(cls, key)
            if not isinstance(command, Command):
                raise TypeError(f"{cls.__typename__} {key!r} must map to a command")
            if key in registry:
                raise ValueError(f"{cls.__typename__} command name {key!r} is already in use")
            registry[key] = command
        if not registry:
            raise ValueError(f"{cls.__typename__} must register at least one command")

        self._commands = registry
        self._name = _sanitize_name(cls, coalesce(name, _program()))
        self._descr = _sanitize_descr(cls, descr)

    def __getitem__(self, name):
        return self._commands[name]

    def __contains__(self, name):
        return name in self._commands

    def __iter__(self):
        return iter(self._commands)

    def __len__(self):
        return len(self._commands)

    def parse(self, tokens=Unset, /):
        """
        Dispatch tokens to a registered command.

        - no tokens, or a leading '--help'/'-h': top-level Help.
        - a leading option: Error(MissingCommandError).
        - an unknown first token: Error(UnknownCommandError) with suggestions.
        - otherwise Subcommand(name, command.parse(rest)).
        """
        tokens = _tokens(tokens)
        logger.debug("dispatching %r for %r", tokens, self._name)

        if not tokens or tokens[0] in ("--help", "-h"):
            return Help(self.render().plain)

        input, rest = tokens[0], tokens[1:]

        if _looks_like_switch(input):
            return Error(MissingCommandError(
                "expected a command before option %r at first position" % input,
                command=self._name,
                input=input,
                index=1,
                hint="choose one of: %s" % ", ".join(self._commands),
            ), self.render().plain)

        try:
            command = self._commands[input]
        except KeyError:
            suggestions = difflib.get_close_matches(input, self._commands.keys(), 5)
            try:
                hint = "did you mean %r? you can also run '%s --help' to see available commands" % (suggestions[0], self._name)
            except IndexError:
                hint = "run '%s --help' to see available commands" % self._name
            return Error(UnknownCommandError(
                "unknown command %r at first position (valid commands: %s)" % (input, ", ".join(self._commands)),
                command=self._name,
                input=input,
                index=1,
                commands=tuple(self._commands),
                suggestions=tuple(suggestions),
                hint=hint,
            ), self.render().plain)

        logger.debug("dispatched %r to %r", input, command.name)
        return Subcommand(input, command._parse(rest, (self._name, input)))

    def safe_parse(self, tokens=Unset, /):
        """
        Dispatch tokens into Ok({"command": name, "data": data}) or Failed(error).
        """
        match self.parse(tokens):
            case Subcommand(name, Success(data)):
                return Ok({"command": name, "data": data})
            case Subcommand(name, Help(help)):
                return Failed(HelpRequested("help requested", command=" ".join((self._name, name)), help=help))
            case Subcommand(_, Error(error, _)):
                return Failed(error)
            case Help(help):
                return Failed(HelpRequested("help requested", command=self._name, help=help))
            case Error(error, _):
                return Failed(error)

    def render(self, name=Unset, /, *, colorful=False):
        """
        Render the top-level help (commands table), or the help of one
        registered command when name is given.
        """
        if name is not Unset:
            return self._commands[name].render(colorful=colorful, route=(self._name, name))

        styler = _styler(colorful)
        usage = Text.assemble(
            ("usage", styler("usage-label")), ": ",
            (self._name, styler("program-name")), " ",
            ("<command>", styler("positional")), " ",
            ("[arguments]", styler("metavar")),
        )
        renders = [usage]

        if self._descr:
            renders.append(_text(self._descr, styler("description-section")))

        indent = max(15, max(map(len, self._commands)) + 4)
        section = Text.assemble(("commands", styler("group-label")), ":")
        for key, command in self._commands.items():
            line = Text("  ").append(key, styler("children"))
            if command.descr:
                line.append(" " * (indent - 2 - len(key))).append(_text(command.descr, styler("children-description")))
            section.append("\n").append(line)
        renders.append(section)

        renders.append(Text("run '%s <command> --help' for command details" % self._name, styler("epilog-section")))
        return Text("\n\n").join(renders)


def _program():
    # "python -m pkg" and "-c" style argv[0] values are reduced to their first word
    match = re.search(r"\w[\w.-]*", os.path.basename(sys.argv[0]) if sys.argv else "")
    return match.group() if match else "argschema"


def _styler(colorful):
    """
    return a palette lookup honoring __styles__ overrides in __main__;
    every style is empty when colorful is False.
    """
    styles = {
        # === Head sections ===
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "description-section": "italic #A3A3A3",  # Neutral gray
        "epilog-section": "#737373",  # Dim footer gray

        # === Groups / arguments ===
        "group-label": "bold #FFFFFF",  # Pure white headers
        "argument-description": "#9CA3AF",  # Muted gray
        "argument-notes": "italic #737373",

        # === Names / metavars ===
        "option-name": "bold #00E6FF",  # CYAN for options
        "flag-name": "bold #22C55E",  # GREEN for flags
        "metavar": "bold #FFD600",  # AMBER for parameters
        "positional": "bold #FF4D94",

        # === Commands ===
        "children": "bold #36C5F0",  # Sky-blue subcommands
        "children-description": "#9CA3AF",
    } | getattr(__import__("__main__"), "__styles__", {})

    def styler(style):
        return styles.get(style, "") if colorful else ""
    return styler


def _text(fragment, style=""):
    if isinstance(fragment, Text):
        return fragment.copy() if style else Text(fragment.plain)
    return Text(str(fragment), style)


def command(name, /, descr=Unset, *, strict=True, positionals=True, helper=True, **args):
    """
    Keyword-style Command factory: command("greet", "say hello", name=Argument(str)).

    Argument keys follow keyword order, which is also the help order.
    """
    return Command(name, descr, args, strict=strict, positionals=positionals, helper=helper)


def invoke(target, prompt=Unset, /):
    """
    Parse a prompt with a Command or Subcommands.

    - prompt Unset: sys.argv[1:]; str: shlex.split; Iterable[str]: as is.
    - returns the parse result (never raises for user input).
    """
    if not hasattr(target, "parse") or not callable(target.parse):
        raise TypeError("invoke() first argument must be a command or subcommands")
    return target.parse(prompt)


def run(target, prompt=Unset, /, *, colorful=True):
    """
    Parse a prompt and act as a command-line entry point.

    Success returns the result; Help and Error are reported with rich and end
    the process with exitcode(result).
    """
    result = invoke(target, prompt)
    if (result.result if isinstance(result, Subcommand) else result).type == "success":
        return result
    sys.exit(report(result, target, colorful=colorful))


__all__ = (
    "Command",
    "Subcommands",
    "command",
    "invoke",
    "run",
)

# Not part of the public API.
del CommandType
