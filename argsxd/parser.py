"""
Argsxd parser: register argument declarations, parse a token vector, read values back.

What this module provides
- ArgParser: a registry of Arg declarations keyed by long name, plus program
  metadata (name, author, version, copyright, info, usage) used for help and
  version output.

Quick start
    from argsxd import ArgParser, Arg

    parser = ArgParser("tool").version("1.0.0").args(
        Arg("verbose").alias("V").describe("Talk more").flag(False),
        Arg("output").describe("Where to write").option("out.txt"),
        Arg("commit").describe("Commit afterwards").word(False),
    ).parse()

    parser.get_flag("verbose")     # True after "-V" or "--verbose"
    parser.get_option("output")    # "a.txt" after "-o a.txt" or "--output a.txt"
    parser.get_word("commit")      # boolean(True) after "commit"

Token shapes
- "--name"        long flag/option; an option takes the next token as value.
- "-s"            short flag/option.
- "-abc"          cluster; each character acts on its own, options all take
                  the same next token.
- "word"          bare word; a string word takes the next token as value.
- anything else   ignored.
A value is only taken from the next token when it does not start with '-'.

Outcomes
- help/version requests, unexpected arguments, missing required arguments and
  empty input (with require_args) are faults (see argsxd.faults). They are all
  routed through ArgParser.trigger(): by default they print and exit the
  process; with shell=False they are raised; a fallback hook can intercept them.
"""
import copy
import shlex
import sys
import warnings
from collections import defaultdict
from collections.abc import Iterable
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

from .arguments import Arg, Unknown, Flag, Option, Word, Boolean, String
from .faults import *
from .utils import *

# Reserved shorts and the built-in arguments that own them.
_RESERVED = {"h": "help", "v": "version"}


def _accessor(name, kind):
    """
    Build a chainable dual accessor for a metadata field stored under "_" + name.

    Behavior
    - Called without a value: return the current value.
    - Called with a value: type-check it against `kind`, store it, return the parser.
    """

    @rename(name)
    def accessor(self, value=Unset, /):
        if value is Unset:
            return getattr(self, "_" + name)
        if not isinstance(value, kind):
            raise TypeError(f"parser {name} must be a {kind.__name__}")
        setattr(self, "_" + name, value)
        return self

    accessor.__doc__ = f"Return the {name} when called without a value; otherwise set it and return the parser."
    return accessor


def _accepts(following):
    # A following token is a value only when present and not dash-prefixed.
    return following is not Unset and not following.startswith("-")


class ArgParser:
    """
    Registry of argument declarations plus the program metadata shown in help.

    Lifecycle
    - Construction pre-registers the "help" (-h) and "version" (-v) flags.
    - The host registers its Args (copies are stored), then calls parse().
    - parse() walks the tokens left to right and updates the stored Args.
    - The host reads results with get_flag/get_option/get_word.

    Runtime options
    - shell: when True (default) faults print and terminate the process;
      when False they are raised as ParseExit subclasses.
    - colorful: style help and fault messages (palette overridable through
      __main__.__styles__).
    """

    def __init__(self, name, /, *, shell=True, colorful=False):
        if not isinstance(name, str):
            raise TypeError("parser name must be a string")
        if not isinstance(shell, bool):
            raise TypeError("parser shell must be a boolean")
        if not isinstance(colorful, bool):
            raise TypeError("parser colorful must be a boolean")

        self._name = name
        self._author = ""
        self._version = ""
        self._copyright = ""
        self._info = ""
        self._usage = f"{name} [flags] [options]"
        self._require_args = False
        self._args = {}

        self._shell = shell
        self._colorful = colorful
        self._fallback = Unset

        self.args(
            Arg("help").alias("h").describe("Prints the help dialog").flag(False),
            Arg("version").alias("v").describe("Prints the version").flag(False),
        )

    name = _accessor("name", str)
    author = _accessor("author", str)
    version = _accessor("version", str)
    copyright = _accessor("copyright", str)
    info = _accessor("info", str)
    usage = _accessor("usage", str)
    require_args = _accessor("require_args", bool)

    @property
    def shell(self):
        return self._shell

    @property
    def colorful(self):
        return self._colorful

    @property
    def arguments(self):
        """
        Read-only view of the registry (long name -> stored Arg).
        """
        return MappingProxyType(self._args)

    def args(self, *arguments):
        """
        Register argument declarations.

        Rules
        - Each argument must be an Arg whose kind is not Unknown; otherwise
          TypeError is raised (programmer error).
        - A copy is stored, keyed by name; a later declaration with the same
          name replaces the earlier one.
        - A flag/option sharing its short character with another flag/option,
          or using a reserved one, triggers a ShortCollisionWarning.

        Returns
        - The parser, for chaining.
        """
        for argument in arguments:
            if not isinstance(argument, Arg):
                raise TypeError("parser arguments must be Arg instances")
            if isinstance(argument.kind, Unknown):
                raise TypeError(
                    f"argument {argument.name!r} has no kind; declare it with flag(), option() or word()"
                )
            self._check_short(argument)
            self._args[argument.name] = copy.copy(argument)
        return self

    def _check_short(self, argument):
        if not isinstance(argument.kind, (Flag, Option)) or argument.name in _RESERVED.values():
            return
        if argument.short in _RESERVED:
            warnings.warn(
                f"short -{argument.short} of {argument.name!r} is always taken by --{_RESERVED[argument.short]}",
                ShortCollisionWarning,
                stacklevel=3,
            )
            return
        for other in self._args.values():
            if (
                other.name != argument.name and
                other.short == argument.short and
                isinstance(other.kind, (Flag, Option))
            ):
                warnings.warn(
                    f"short -{argument.short} of {argument.name!r} is shared with {other.name!r}; both will react",
                    ShortCollisionWarning,
                    stacklevel=3,
                )
                return

    def fallback(self, fallback, /):
        """
        Register a one-time fault handler.

        Contract
        - fallback: callable receiving the fault (with parser/shell/colorful bound
          into its options) instead of the default print-and-exit / raise.
        - When the fallback returns, parse() stops and returns the parser.
        - Can be set only once per parser.

        Returns
        - The same callable, enabling decorator-style usage: @parser.fallback
        """
        if not callable(fallback):
            raise TypeError("parser fallback must be callable")
        if self._fallback is not Unset:
            raise TypeError("parser fallback cannot be overridden")
        self._fallback = fallback
        return fallback

    def trigger(self, fault, /):
        """
        Single sink for every fault produced while parsing.
        """
        if not isinstance(fault, ParseExit):
            raise TypeError("trigger() argument must be a parse fault")
        fault = fault.__replace__(parser=self, shell=self._shell, colorful=self._colorful)
        if self._fallback is not Unset:
            return self._fallback(fault)
        trigger(fault)

    def parse(self, tokens=Unset, /):
        """
        Parse a token vector into the registered arguments.

        Parameters
        - tokens:
          • Unset: read sys.argv[1:] (the program name is discarded).
          • str: shell-like string, split with shlex.split.
          • Iterable[str]: tokens already stripped of the program name.

        Returns
        - The parser, ready for lookups (unless a fault terminated the process
          or was raised).

        Raises
        - TypeError: when tokens is not Unset/str/Iterable[str].
        - ParseExit subclasses: only when shell=False and no fallback is set.
        """
        if tokens is Unset:
            tokens = sys.argv[1:]
        elif isinstance(tokens, str):
            tokens = shlex.split(tokens)
        elif isinstance(tokens, Iterable):
            tokens = list(tokens)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        try:
            self._parseargs(tokens)
        except ParseExit as fault:
            self.trigger(fault)
        return self

    def parse_vec(self, tokens, /):
        """
        Parse an explicit token vector (already stripped of the program name).
        """
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("parse_vec() argument must be an iterable of strings")
        return self.parse(tokens)

    def _parseargs(self, tokens):
        """
        Walk the tokens left to right, then check required arguments.

        Rules (first match wins, per token)
        1. bare word: the token equals the name of a Word argument.
        2. long form: "--name".
        3. short form / cluster: "-abc".
        4. anything else is ignored.

        Value tokens are not skipped: they are visited again on their own
        iteration and normally match nothing.
        """
        if not tokens and self._require_args:
            raise EmptyInputError()

        for index, token in enumerate(tokens):
            following = tokens[index + 1] if index + 1 < len(tokens) else Unset

            argument = self._args.get(token)
            if argument is not None and isinstance(argument.kind, Word):
                self._parse_word(argument, following)
                continue

            if token.startswith("--"):
                self._parse_long(token, following)
            elif token.startswith("-"):
                self._parse_cluster(token, following)

        for argument in self._args.values():
            if argument.required and not argument.set:
                raise MissingArgumentError(f'Didn\'t find "{argument.name}"', argument=argument.name)

    def _parse_word(self, argument, following):
        value = argument.kind.value
        if isinstance(value, Boolean):
            argument.word(Boolean(not value.value))
            argument._mark()
        elif _accepts(following):
            argument.word(String(following))
            argument._mark()

    def _parse_long(self, token, following):
        name = token[2:]
        if name == "help":
            raise HelpRequest()
        if name == "version":
            raise VersionRequest(self.render_version())

        argument = self._args.get(name)
        if argument is None:
            raise UnexpectedArgumentError(f'Unexpected argument: "{token}"', token=token)

        if isinstance(argument.kind, Flag):
            argument.flag(not argument.kind.value)
            argument._mark()
        elif isinstance(argument.kind, Option) and _accepts(following):
            argument.option(following)
            argument._mark()

    def _parse_cluster(self, token, following):
        for short in token[1:]:
            if short == "h":
                raise HelpRequest()
            if short == "v":
                raise VersionRequest(self.render_version())

            # Unknown shorts are ignored; shared shorts act on every owner.
            for argument in self._args.values():
                if argument.short != short:
                    continue
                if isinstance(argument.kind, Flag):
                    argument.flag(not argument.kind.value)
                    argument._mark()
                elif isinstance(argument.kind, Option) and following is not Unset:
                    if following.startswith("-"):
                        raise UnexpectedArgumentError(f'Unexpected argument: "{following}"', token=following)
                    argument.option(following)
                    argument._mark()

    def _lookup(self, name, kind):
        argument = self._args.get(name)
        if argument is None or not isinstance(argument.kind, kind):
            return None
        return argument.kind.value

    def get_flag(self, name, /):
        """Current value of a Flag argument, or None if unknown or not a flag."""
        return self._lookup(name, Flag)

    def get_option(self, name, /):
        """Current value of an Option argument, or None if unknown or not an option."""
        return self._lookup(name, Option)

    def get_word(self, name, /):
        """Current WordValue of a Word argument, or None if unknown or not a word."""
        return self._lookup(name, Word)

    def render_version(self):
        return f"{self._name} {self._version}"

    def render_help(self):
        r"""
        Build the help text as a rich Text.

        Layout
            <name> <version>
            <author>
            <info>
            <copyright>

            Usage:
            \t<usage>

            Flags:
            \t-<short>, --<name>\t<help>

            Options:
            \t-<short>, --<name>\t<help>

            Words:
            \t<name>\t<help>

        Empty sections are omitted; entries follow registration order.

        Palette keys
        - program-name, program-version, author, info, copyright
        - section-label, usage
        - flag-name, option-name, word-name, argument-help
        Define a mapping named __styles__ in __main__ to override any entry.
        """
        styles = defaultdict(str, {
            # === Head ===
            "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "program-version": "bold #00E6FF",  # CYAN version
            "author": "#E5E7EB",
            "info": "italic #A3A3A3",  # Neutral gray
            "copyright": "#737373",  # Dim footer gray

            # === Sections ===
            "section-label": "bold #FFFFFF",  # Pure white headers
            "usage": "bold #36C5F0",  # SKY-BLUE

            # === Entries ===
            "flag-name": "bold #22C55E",  # GREEN for flags
            "option-name": "bold #00E6FF",  # CYAN for options
            "word-name": "bold #FFD600",  # AMBER for words
            "argument-help": "#9CA3AF",  # Muted gray
        } | getattr(__import__("__main__"), "__styles__", {}))

        def text(fragment, style):
            if not self._colorful:
                return Text(fragment)
            return Text(fragment, styles[style])

        lines = [
            Text.assemble(text(self._name, "program-name"), " ", text(self._version, "program-version")),
            text(self._author, "author"),
            text(self._info, "info"),
            text(self._copyright, "copyright"),
            Text(),
            text("Usage:", "section-label"),
            Text.assemble("\t", text(self._usage, "usage")),
        ]

        for label, kind, style in (
            ("Flags:", Flag, "flag-name"),
            ("Options:", Option, "option-name"),
            ("Words:", Word, "word-name"),
        ):
            arguments = [argument for argument in self._args.values() if isinstance(argument.kind, kind)]
            if not arguments:
                continue
            lines.append(Text())
            lines.append(text(label, "section-label"))
            for argument in arguments:
                if kind is Word:
                    names = text(argument.name, style)
                else:
                    names = Text.assemble(text(f"-{argument.short}", style), ", ", text(f"--{argument.name}", style))
                lines.append(Text.assemble("\t", names, "\t", text(argument.help, "argument-help")))

        return Text("\n").join(lines)

    def format_help(self):
        """Plain-text help (tabs preserved), as printed by print_help()."""
        return self.render_help().plain

    def print_help(self):
        console = Console()
        if not self._colorful:
            console.file.write(self.format_help() + "\n")
            return
        # Rich expands tabs on print; the tabs themselves go straight to the file.
        for line in self.render_help().split("\n", allow_blank=True):
            for index, piece in enumerate(line.split("\t", allow_blank=True)):
                if index:
                    console.file.write("\t")
                console.print(piece, end="", soft_wrap=True)
            console.file.write("\n")

    def __repr__(self):
        return f"arg-parser(name={self._name!r}, version={self._version!r}, arguments={list(self._args)!r})"

    def __rich_repr__(self):
        yield "name", self._name
        yield "version", self._version
        yield "author", self._author
        yield "usage", self._usage
        yield "require_args", self._require_args
        yield "arguments", list(self._args.values())
        yield "shell", self._shell
        yield "colorful", self._colorful


__all__ = (
    "ArgParser",
)
