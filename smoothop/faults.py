"""
smoothop faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for user-facing parse faults.
- Definition errors: raised while the program is being built (programmer mistakes).
  They are plain TypeError/ValueError subclasses and are never caught.
- CommandException: parse-time fault carrying a message + options, which knows how to
  render itself (rich Text) and how to surface itself (print + exit, or raise).
- CommandWarning: non-fatal notices, emitted through the warnings module.
- trigger(): central entry point to surface any fault with the given options.

Rendering
- Every parse fault renders as the same block:

      ERROR:
        ERROR
          <message>

        Run `$ <prog> --help` for more info.

- Styling applies only when colorful=True; the palette can be overridden with a
  __styles__ mapping in __main__, the program name with __prog__.

Integration
- Program.parse() builds a fault and calls Program.trigger(fault), which merges
  the runtime options (prog, shell, colorful, host) and calls trigger().
- In shell mode the fault is printed through the host and the host exits with 1.
  Otherwise the fault is raised.
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    every fault class carries one as `code`, so callers catching faults (shell=False)
    can branch on it without matching messages.

    grouping
    - routing (111xx): INVALID_COMMAND, NO_COMMAND
    - switches (112xx): UNKNOWN_FLAG
    - positionals (113xx): INSUFFICIENT_ARGUMENTS
    - warnings (12xxx): ALIAS_SHADOWS_COMMAND
    """
    # --- routing errors ---
    INVALID_COMMAND        = 11101
    NO_COMMAND             = 11102

    # --- flag errors ---
    UNKNOWN_FLAG           = 11201

    # --- positional errors ---
    INSUFFICIENT_ARGUMENTS = 11301

    # --- warnings ---
    ALIAS_SHADOWS_COMMAND  = 12101


class DuplicateCommandError(ValueError): ...
class SingleModeCommandError(TypeError): ...
class AliasInSingleModeError(TypeError): ...
class AliasWithoutCommandError(TypeError): ...


def _styles():
    return defaultdict(str, {
        "error-label": "bold #FF4DA6",  # friendly pinky headline
        "error-message": "#C8C8D0",  # soft light gray message
        "hint": "italic #9CE19C",  # gentle green hint text
        "prog-name": "bold #E6E6F0",  # near-white program name
    } | getattr(__import__("__main__"), "__styles__", {}))


class CommandException(Exception):
    """
    base of all parse-time faults.

    - message: the user-facing sentence (e.g. "Invalid command: foo").
    - options: read-only runtime context (prog, shell, colorful, host, code, ...).
    """
    code = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        styles = _styles()
        colorful = self.options.get("colorful", False)

        def styler(style):
            return styles[style] if colorful else ""

        prog = getattr(__import__("__main__"), "__prog__", self.options.get("prog", "")) or ""
        return Text.assemble(
            ("ERROR", styler("error-label")), ": ", "\n",
            "  ", ("ERROR", styler("error-label")), "\n",
            "    ", (str(self.message), styler("error-message")), "\n",
            "\n",
            "  ", ("Run `", styler("hint")), ("$ " + prog, styler("prog-name")),
            (" --help` for more info.", styler("hint")), "\n",
        )

    def __str__(self):
        return str(self.message)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        host = self.options["host"]
        host.print(self)
        host.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class InvalidCommandError(CommandException):
    code = FaultCode.INVALID_COMMAND


class NoCommandSpecifiedError(CommandException):
    code = FaultCode.NO_COMMAND


class UnknownFlagError(CommandException):
    """
    strict-mode rejection; options["value"] keeps the `unknown` callback's raw output
    and options["token"] the offending flag.
    """
    code = FaultCode.UNKNOWN_FLAG

    @property
    def value(self):
        return self.options.get("value")

    @property
    def token(self):
        return self.options.get("token")


class InsufficientArgumentsError(CommandException):
    code = FaultCode.INSUFFICIENT_ARGUMENTS


class CommandWarning(Warning):
    """
    base of all non-fatal notices; surfaced with warnings.warn.
    """
    code = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)


class AliasShadowWarning(CommandWarning):
    code = FaultCode.ALIAS_SHADOWS_COMMAND


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode the fault is printed through options["host"] and the host exits;
      otherwise the fault is raised.
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
    "FaultCode",
    "DuplicateCommandError",
    "SingleModeCommandError",
    "AliasInSingleModeError",
    "AliasWithoutCommandError",
    "CommandException",
    "InvalidCommandError",
    "NoCommandSpecifiedError",
    "UnknownFlagError",
    "InsufficientArgumentsError",
    "CommandWarning",
    "AliasShadowWarning",
    "trigger",
)
