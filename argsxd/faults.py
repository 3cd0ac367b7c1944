"""
Argsxd faults (parse outcomes and warnings) and rendering.

Scope
- FaultCode: stable numeric identifiers for every way a parse can end early.
- ParseExit: base type of those outcomes. It carries a message plus runtime
  options and knows how to render and surface itself.
  • ParseRequest: the user asked for something (help, version); status 0.
  • ParseError: the input is unusable (empty, unexpected, missing); status 1.
- ParseWarning: programmer-facing warnings raised at registration time.
- trigger(): central entry point to surface any fault.

Surfacing rules
- Every fault goes through trigger() (or the parser's fallback hook), so the
  process is terminated from exactly one place.
- shell=False: the fault is raised to the host, which can inspect .code,
  .status and .message.
- shell=True: the message (if any) is printed to stdout or stderr, help is
  printed when the fault asks for it, then sys.exit(status).

Styling
- Messages render through rich and are styled only when colorful=True.
  Palette entries can be overridden with a __styles__ mapping in __main__.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

from .utils import Unset, UnsetType, nullify


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - requests (1000x): HELP_REQUESTED, VERSION_REQUESTED
    - errors (1100x): EMPTY_INPUT, UNEXPECTED_ARGUMENT, MISSING_ARGUMENT
    """
    # --- requests (10xxx) ---
    HELP_REQUESTED      = 10001
    VERSION_REQUESTED   = 10002

    # --- errors (11xxx) ---
    EMPTY_INPUT         = 11001
    UNEXPECTED_ARGUMENT = 11002
    MISSING_ARGUMENT    = 11003


def palette():
    """
    return the fault palette merged with the host's __main__.__styles__ overrides.
    """
    return defaultdict(str, {
        "version-line": "bold #00E6FF",  # cyan, same as the version in help
        "error-message": "bold #FF4DA6",  # friendly pinky error
    } | getattr(__import__("__main__"), "__styles__", {}))


class ParseExit(Exception):
    """
    a parse outcome that ends parsing before the host gets its values back.

    class attributes (set per subclass)
    - code: FaultCode of the outcome.
    - status: process exit status used in shell mode.
    - stderr: whether the message goes to stderr instead of stdout.
    - helpful: whether the parser help is printed after the message.
    - style: palette key of the message.
    - end: terminator printed after the message.

    options
    - parser: the ArgParser that produced the fault (needed to print help).
    - shell: terminate the process (True) or raise to the host (False).
    - colorful: style the message.
    - any extra context (token, argument, ...) given by the parser.
    """
    code = Unset
    status = 1
    stderr = False
    helpful = True
    style = "error-message"
    end = "\n"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, (str, UnsetType))
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        message = nullify(self.message, "")
        if not self.options.get("colorful", False):
            return Text(message)
        return Text(message, palette()[self.style])

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        if self.message is not Unset:
            Console(stderr=self.stderr).print(self, end=self.end, soft_wrap=True)
        if self.helpful and "parser" in self.options:
            self.options["parser"].print_help()
        sys.exit(self.status)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ParseRequest(ParseExit):
    status = 0


class HelpRequest(ParseRequest):
    code = FaultCode.HELP_REQUESTED


class VersionRequest(ParseRequest):
    code = FaultCode.VERSION_REQUESTED
    helpful = False
    style = "version-line"


class ParseError(ParseExit):
    status = 1


class EmptyInputError(ParseError):
    code = FaultCode.EMPTY_INPUT


class UnexpectedArgumentError(ParseError):
    code = FaultCode.UNEXPECTED_ARGUMENT
    stderr = True


class MissingArgumentError(ParseError):
    code = FaultCode.MISSING_ARGUMENT
    # Blank line between the diagnostic and the help text.
    end = "\n\n"


class ParseWarning(Warning):
    pass


class ShortCollisionWarning(ParseWarning):
    """
    a flag/option shares its short character with another one, or uses a reserved one.

    the collision is kept: every argument with that short reacts to it, and the
    reserved 'h'/'v' shorts are always taken by help and version first.
    """


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseExit).
    - options are merged into the fault via __replace__(**options) before triggering.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "ParseExit",
    "ParseRequest",
    "HelpRequest",
    "VersionRequest",
    "ParseError",
    "EmptyInputError",
    "UnexpectedArgumentError",
    "MissingArgumentError",
    "ParseWarning",
    "ShortCollisionWarning",
    "trigger",
)
