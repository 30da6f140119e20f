"""
Bosun faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing errors.
  Codes are grouped by domain to keep copy consistent and make logs/searches predictable.
- CommandException: base type that carries message + options and knows how to
  render itself in a friendly and actionable way through rich.
- CommandError family: failures of the runner (routing, program metadata).
- FlagError family: failures of the flag parser (unknown, ambiguous, missing,
  needless or invalid switch arguments).
- trigger(): central entry point to surface a fault on stderr and terminate.

Integration
- Library code raises these exceptions like any other.
- Runner.run() catches them when tracing is disabled and calls trigger(fault, prog=...),
  which prints the fault on the stderr console and exits with status 1.
- Rendering honours __styles__ (palette overrides) and __codes__ (code labels)
  declared by the host application in __main__.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset, UnsetType, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the cli (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • INVALID_COMMAND, MISSING_PROGRAM_METADATA
    - switches (1111x/1112x)
      • UNKNOWN_SWITCH, AMBIGUOUS_SWITCH, NEEDLESS_ARGUMENT,
        MISSING_ARGUMENT, INVALID_ARGUMENT
    - delegated (1113x)
      • DELEGATED_ERROR (anything raised by a command handler)
    - interruption (1114x)
      • INTERRUPTED
    """
    # --- routing errors (11xxx) ---
    INVALID_COMMAND             = 11101
    MISSING_PROGRAM_METADATA    = 11102

    # --- switch errors (11xxx) ---
    UNKNOWN_SWITCH              = 11112
    AMBIGUOUS_SWITCH            = 11113
    NEEDLESS_ARGUMENT           = 11114
    MISSING_ARGUMENT            = 11117
    INVALID_ARGUMENT            = 11124

    # --- delegated errors (11xxx) ---
    DELEGATED_ERROR             = 11131

    # --- interruption (11xxx) ---
    INTERRUPTED                 = 11141

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    Base of every bosun fault.

    - message: the one-line, user-facing text (also str(exception)).
    - options: read-only rendering context (prog, hint, colorful, ...), merged
      in by trigger() through copy.replace().
    - code/title: class-level identity used in the rendered header.
    """
    code = FaultCode.DELEGATED_ERROR
    title = "error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        header = Text.assemble(
            "[ ",
            text(self.options.get("prog", "bosun"), "prog-name"),
            " — ",
            text(self.code.normalize(), "code"),
            " | ",
            text(self.title.title(), "error-title"),
            " ]"
        )
        renders = [header, text(self.message, "error-message")]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))
        return Group(*renders)

    def __trigger__(self):
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        replica = type(self)(self.message, **{**self.options, **overrides})
        replica.__cause__ = self.__cause__
        return replica


class CommandError(CommandException):
    """Failure of the runner itself (routing, program metadata)."""


class InvalidCommandError(CommandError):
    code = FaultCode.INVALID_COMMAND
    title = "invalid command"


class MissingProgramMetadataError(CommandError):
    code = FaultCode.MISSING_PROGRAM_METADATA
    title = "missing program metadata"


class FlagError(CommandException):
    """
    Failure of the flag parser.

    The offending switch token is kept in options["switch"] (and the offending
    value, when there is one, in options["value"]).
    """
    reason = "invalid option"

    @classmethod
    def of(cls, switch, value=Unset, /):
        """Build the error with the conventional "<reason>: <switch> [<value>]" message."""
        message = "%s: %s" % (cls.reason, switch if value is Unset else "%s %s" % (switch, value))
        if value is Unset:
            return cls(message, switch=switch)
        return cls(message, switch=switch, value=value)

    @property
    def switch(self):
        return self.options.get("switch")


class UnknownSwitchError(FlagError):
    code = FaultCode.UNKNOWN_SWITCH
    title = "unknown option"
    reason = "invalid option"


class AmbiguousSwitchError(FlagError):
    code = FaultCode.AMBIGUOUS_SWITCH
    title = "ambiguous option"
    reason = "ambiguous option"


class NeedlessArgumentError(FlagError):
    code = FaultCode.NEEDLESS_ARGUMENT
    title = "needless argument"
    reason = "needless argument"


class MissingArgumentError(FlagError):
    code = FaultCode.MISSING_ARGUMENT
    title = "missing argument"
    reason = "missing argument"


class InvalidArgumentError(FlagError):
    code = FaultCode.INVALID_ARGUMENT
    title = "invalid argument"
    reason = "invalid argument"


class DelegatedCommandError(CommandException):
    """Anything else raised while a command ran; rendered when tracing is off."""
    code = FaultCode.DELEGATED_ERROR
    title = "error"


class InterruptionError(CommandException):
    code = FaultCode.INTERRUPTED
    title = "interrupted"


def trigger(fault, /, **options):
    """
    surface a fault with the given rendering options and terminate.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - the default __trigger__ prints on the stderr console and exits with status 1.

    typical options
    - prog, hint, colorful.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "CommandException",
    "CommandError",
    "InvalidCommandError",
    "MissingProgramMetadataError",
    "FlagError",
    "UnknownSwitchError",
    "AmbiguousSwitchError",
    "NeedlessArgumentError",
    "MissingArgumentError",
    "InvalidArgumentError",
    "DelegatedCommandError",
    "InterruptionError",
    "FaultCode",
    "trigger",
)
