"""
Helmsman faults (errors and warnings) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing issue, grouped by
  domain so console logs stay searchable.
- CommandException / CommandWarning: base types that carry message + options,
  compare by value, and render themselves with rich. Exceptions are fatal for the
  line they belong to; warnings are reported and execution proceeds.
- Concrete faults are created through Fault.create(localization, **fields) so the
  message and hint are looked up in the active localization.

Integration
- The parser records faults as data in ParseResult.errors; it never raises them.
- DuplicateCommandError is the exception: it is raised at registration time.
- The console driver prints or logs each recorded fault (see helmsman.console).
"""
import re
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.text import Text

from .utils import *


class FaultCode(IntEnum):
    """
    canonical fault codes used by the console (stable identifiers).

    grouping
    - errors (11xxx): routing (1110x), named arguments (1111x), values (1112x),
      delegated handler failures (1113x).
    - warnings (12xxx): same sub-ranges, for non-fatal diagnostics.

    normalize() lets the host relabel codes through a __codes__ mapping in
    __main__ while the numeric identity stays stable.
    """
    # --- routing errors ---
    UNKNOWN_COMMAND             = 11101
    DUPLICATE_COMMAND           = 11102

    # --- named argument errors ---
    DUPLICATE_ARGUMENT          = 11115
    MISSING_VALUE               = 11117

    # --- value errors ---
    TYPE_CONVERSION             = 11124

    # --- delegated errors ---
    DELEGATED_ERROR             = 11131

    # --- warnings ---
    MISSING_ARGUMENT            = 12125
    UNHANDLED_ARGUMENT          = 12141

    def normalize(self):
        """
        return a host-normalized string for this code.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class Fault:
    """
    Shared behavior of CommandException and CommandWarning.

    Class attributes (per concrete fault)
    - __code__: FaultCode
    - __title__: short lowercase title
    - __message__: default message template (printf-style named fields)
    - __hint__: default hint template

    Instance data
    - message: rendered message.
    - options: read-only mapping with code/title/hint/cause and the fields
      used to render the message (token, input, position, argument, ...).
    """
    __code__ = Unset
    __title__ = ""
    __message__ = ""
    __hint__ = ""

    fatal = False

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    @classmethod
    def create(cls, localization=Unset, /, **fields):
        """
        Build a fault whose message and hint come from the localization.

        Keys
        - errors.<kind>: message template, defaulting to cls.__message__.
        - hints.<kind>: hint template, defaulting to cls.__hint__.

        kind is the kebab-case class name without its "-error"/"-warning" suffix
        (MissingCommandError → "missing-command").
        """
        key = re.sub(r"(?<!^)(?=[A-Z])", r"-", cls.__name__).lower().removesuffix("-error").removesuffix("-warning")
        if localization is Unset:
            message, hint = cls.__message__, cls.__hint__
        else:
            message = localization.text("errors." + key, cls.__message__)
            hint = localization.text("hints." + key, cls.__hint__)
        return cls(
            message % fields,
            code=cls.__code__,
            title=cls.__title__,
            hint=hint % fields,
            **fields,
        )

    @property
    def kind(self):
        return type(self).__name__

    @property
    def code(self):
        return self.options.get("code")

    @property
    def title(self):
        return self.options.get("title", "")

    @property
    def hint(self):
        return self.options.get("hint", "")

    @property
    def cause(self):
        return self.options.get("cause")

    def __eq__(self, other):
        if not isinstance(other, Fault):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message and self.options == other.options

    def __hash__(self):
        return hash((type(self), self.message))

    def __repr__(self):
        return "%s(%r, code=%r)" % (type(self).__name__, self.message, self.code)

    def __rich__(self):
        styles = defaultdict(str, {
            "code": "bold #00E5FF" if self.fatal else "bold #FFB400",
            "title": "bold #FF4DA6" if self.fatal else "bold #FFC2E0",
            "message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(__import__("__main__"), "__styles__", {}))

        header = Text.assemble(
            "[",
            (self.code.normalize() if isinstance(self.code, FaultCode) else "-", styles["code"]),
            " | ",
            (self.title, styles["title"]),
            "] ",
        )
        text = Text.assemble(header, (self.message, styles["message"]))
        if self.hint:
            text.append(" → ", styles["hint-arrow"]).append(self.hint, styles["hint"])
        return text


class CommandException(Fault, Exception):
    """Fatal fault: the line it belongs to is never dispatched."""
    fatal = True


class CommandWarning(Fault, Warning):
    """Non-fatal fault: reported, then the command still runs."""
    fatal = False


class MissingCommandError(CommandException):
    __code__ = FaultCode.UNKNOWN_COMMAND
    __title__ = "unknown command"
    __message__ = "unknown command %(input)r"
    __hint__ = "type 'help' to list the available commands"


class DuplicateCommandError(CommandException):
    __code__ = FaultCode.DUPLICATE_COMMAND
    __title__ = "duplicate command"
    __message__ = "command %(name)r is already registered"
    __hint__ = "command names are case-insensitive; pick a different name"


class DuplicateArgumentError(CommandException):
    __code__ = FaultCode.DUPLICATE_ARGUMENT
    __title__ = "duplicate argument"
    __message__ = "argument %(input)r at %(position)s position was already provided"
    __hint__ = "keep a single %(input)s; each argument can be given only once"


class MissingValueError(CommandException):
    __code__ = FaultCode.MISSING_VALUE
    __title__ = "missing value"
    __message__ = "argument %(input)r at %(position)s position expects a %(type)s value"
    __hint__ = "pass it after a space or inline (for example: %(input)s%(assignment)s<%(type)s>)"


class TypeConversionError(CommandException):
    __code__ = FaultCode.TYPE_CONVERSION
    __title__ = "bad value"
    __message__ = "cannot read %(token)r at %(position)s position as %(type)s for %(name)r"
    __hint__ = "%(cause)s"


class DelegatedCommandError(CommandException):
    __code__ = FaultCode.DELEGATED_ERROR
    __title__ = "command failed"
    __message__ = "something occurred while running %(name)r"
    __hint__ = "check the server log for more details"


class MissingArgumentError(CommandWarning):
    __code__ = FaultCode.MISSING_ARGUMENT
    __title__ = "missing argument"
    __message__ = "missing argument %(name)r (%(type)s)"
    __hint__ = "run '%(command)s --help' to see the expected usage"


class UnhandledArgumentError(CommandWarning):
    __code__ = FaultCode.UNHANDLED_ARGUMENT
    __title__ = "unhandled argument"
    __message__ = "unhandled argument %(token)r at %(position)s position"
    __hint__ = "it was ignored; run '%(command)s --help' to see the expected usage"


__all__ = (
    "FaultCode",
    "Fault",
    "CommandException",
    "CommandWarning",
    "MissingCommandError",
    "DuplicateCommandError",
    "DuplicateArgumentError",
    "MissingValueError",
    "TypeConversionError",
    "DelegatedCommandError",
    "MissingArgumentError",
    "UnhandledArgumentError",
)
