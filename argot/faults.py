"""
Argot faults (parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse failure.
  Codes are grouped by domain to keep copy consistent and make logs/searches
  predictable.
- ParseError: base type that carries message + options and knows how to render
  itself in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (raise it, or print it and
  terminate the process in shell mode).

Taxonomy
- selection:   NoCommandSelectedError, MultipleCommandsSelectedError
- values:      CommandParseError, ArgumentParseError,
               MissingCommandValueError, MissingArgumentValueError
- structure:   MissingRequiredArgumentError, UnknownArgumentError
- validation:  CommandValidationError, ArgumentValidationError
Option-flavoured aliases (NoOptionSelectedError, ...) name the same classes.

Options
- Context set by the parser: command, argument, token.
- Presentation set by the interface when surfacing: prog, shell, fancy, colorful.
- Copy overrides: title, hint.

Integration
- The parser raises the error classes directly; Interface.fail() hands them to
  trigger(fault, shell=True, ...) so they are rendered via rich on stderr.
- Styles are overridable via __styles__ in __main__, labels of codes via
  __codes__ and the program name via __prog__.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - selection (1110x)
      • NO_COMMAND_SELECTED, MULTIPLE_COMMANDS_SELECTED
    - values (1111x)
      • COMMAND_PARSE, MISSING_COMMAND_VALUE, ARGUMENT_PARSE, MISSING_ARGUMENT_VALUE
    - structure (1112x)
      • MISSING_REQUIRED_ARGUMENT, UNKNOWN_ARGUMENT
    - validation (1113x)
      • COMMAND_VALIDATION, ARGUMENT_VALIDATION

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- selection errors (1110x) ---
    NO_COMMAND_SELECTED         = 11101
    MULTIPLE_COMMANDS_SELECTED  = 11102

    # --- value errors (1111x) ---
    COMMAND_PARSE               = 11111
    MISSING_COMMAND_VALUE       = 11112
    ARGUMENT_PARSE              = 11113
    MISSING_ARGUMENT_VALUE      = 11114

    # --- structure errors (1112x) ---
    MISSING_REQUIRED_ARGUMENT   = 11121
    UNKNOWN_ARGUMENT            = 11122

    # --- validation errors (1113x) ---
    COMMAND_VALIDATION          = 11131
    ARGUMENT_VALIDATION         = 11132

    def normalize(self):
        """
        label of this code: the entry of a __codes__ mapping in __main__ when
        the host defines one, the numeric id otherwise.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParseError(Exception):
    """
    base of every failure reported by Interface.parse().

    attributes
    - message: one-sentence, lowercased description of the failure.
    - options: read-only mapping with the context (command, argument, token) and,
      once surfaced, the presentation switches (prog, shell, fancy, colorful).
    - code: the FaultCode of the concrete class.
    """
    code = Unset
    title = "parse error"
    hint = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def command(self):
        return self.options.get("command")

    @property
    def argument(self):
        return self.options.get("argument")

    @property
    def token(self):
        return self.options.get("token")

    def __str__(self):
        return "" if self.message is Unset else self.message

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # === Header ===
            "prog-name": "bold #E6E6F0",
            "fault-code": "bold #00E5FF",
            "fault-title": "bold #FF4DA6",

            # === Body ===
            "fault-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog", "argot")), styler("prog-name"))
        code = self.code.normalize() if isinstance(self.code, FaultCode) else "?"

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code, styler("fault-code")),
            " | ",
            text(self.options.get("title", self.title).title(), styler("fault-title")),
            " ]"
        )
        message = text(str(self), styler("fault-message"))
        renders = [message]

        hint = self.options.get("hint", self.hint)
        if hint:
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left", width=console.width - 4)

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class NoCommandSelectedError(ParseError):
    code = FaultCode.NO_COMMAND_SELECTED
    title = "no command selected"
    hint = "pass a command name right after the program name"

class MultipleCommandsSelectedError(ParseError):
    code = FaultCode.MULTIPLE_COMMANDS_SELECTED
    title = "multiple commands selected"

class CommandParseError(ParseError):
    code = FaultCode.COMMAND_PARSE
    title = "invalid command value"

class ArgumentParseError(ParseError):
    code = FaultCode.ARGUMENT_PARSE
    title = "invalid argument value"

class MissingCommandValueError(ParseError):
    code = FaultCode.MISSING_COMMAND_VALUE
    title = "missing command value"
    hint = "pass a value right after the command name"

class MissingArgumentValueError(ParseError):
    code = FaultCode.MISSING_ARGUMENT_VALUE
    title = "missing argument value"

class MissingRequiredArgumentError(ParseError):
    code = FaultCode.MISSING_REQUIRED_ARGUMENT
    title = "missing required argument"

class UnknownArgumentError(ParseError):
    code = FaultCode.UNKNOWN_ARGUMENT
    title = "unknown argument"
    hint = "check the spelling, or see the manual for the accepted flags"

class CommandValidationError(ParseError):
    code = FaultCode.COMMAND_VALIDATION
    title = "command validation failed"

class ArgumentValidationError(ParseError):
    code = FaultCode.ARGUMENT_VALIDATION
    title = "argument validation failed"


NoOptionSelectedError = NoCommandSelectedError
MultipleOptionsSelectedError = MultipleCommandsSelectedError
OptionParseError = CommandParseError
MissingOptionValueError = MissingCommandValueError
OptionValidationError = CommandValidationError


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseError).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console and the process exits
      with status 1; otherwise, the exception is raised.

    typical options
    - prog, shell, fancy, colorful, title, hint.
    """
    if not all(callable(getattr(fault, name, None)) for name in ("__trigger__", "__replace__")):
        raise TypeError("trigger() argument must be a fault (missing __trigger__ or __replace__)")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "ParseError",
    "NoCommandSelectedError",
    "MultipleCommandsSelectedError",
    "CommandParseError",
    "ArgumentParseError",
    "MissingCommandValueError",
    "MissingArgumentValueError",
    "MissingRequiredArgumentError",
    "UnknownArgumentError",
    "CommandValidationError",
    "ArgumentValidationError",
    "NoOptionSelectedError",
    "MultipleOptionsSelectedError",
    "OptionParseError",
    "MissingOptionValueError",
    "OptionValidationError",
    "trigger",
)
