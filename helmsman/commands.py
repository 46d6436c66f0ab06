"""
Helmsman command layer: declare console commands and their handlers.

What this module provides
- Command: a named, described unit holding an ordered set of argument specs
  (Cardinal, Option, Flag) and the capability to execute with parsed values.
  • Subclass it and override execute(context, values), or
  • build it from a plain function with the command(...) decorator.
- HelpCommand: the built-in "help" command (global listing or per-command help).

Core ideas
- Declarative surface: usage and help text are generated from argument metadata only.
- Immutable once built: every field is exposed through read-only properties.
- The registry stores Command objects, never concrete handler types.

Quick start
    from helmsman import command, Cardinal, Option, ValueType

    @command("kick", Cardinal("target"), Option("reason", "r"), help=True)
    def kick(context, values):
        \"\"\"disconnect a player\"\"\"
        context.kick(values["target"], values["reason"])
"""
import inspect
import re

from rich.console import Console

from .arguments import Cardinal, Option, Flag
from .faults import MissingCommandError
from .formatting import format_usage, format_help, format_commands
from .utils import *


class CommandType(type):
    """
    Metaclass giving commands read-only introspection.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable __repr__/__rich_repr__ (restricted to __displayable__).
    """
    __introspectable__ = ()
    __displayable__ = Unset

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
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join("%s=%r" % pair for pair in self.__rich_repr__())
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_arguments(arguments, /):
    """
    Internal: validate the argument list of a command.

    Rules
    - every item is a Cardinal, Option, or Flag.
    - names and short aliases are unique within the command.
    - at most one greedy cardinal, and it must be the last cardinal.
    - a required cardinal cannot follow an optional one.
    """
    names = set()
    shorts = set()
    optional = greedy = False
    for argument in arguments:
        if not isinstance(argument, Cardinal | Option | Flag):
            raise TypeError("command arguments must be cardinals, options or flags")
        if argument.name in names:
            raise ValueError("command arguments cannot share the name %r" % argument.name)
        names.add(argument.name)
        if argument.short is not None:
            if argument.short in shorts:
                raise ValueError("command arguments cannot share the short name %r" % argument.short)
            shorts.add(argument.short)
        if not argument.positional:
            continue
        if greedy:
            raise ValueError("greedy cardinal %r must be the last cardinal" % argument.name)
        if argument.required and optional:
            raise ValueError("required cardinal %r cannot follow an optional one" % argument.name)
        optional |= not argument.required
        greedy |= argument.greedy


class Command(metaclass=CommandType):
    """
    Console command specification.

    Responsibilities
    - Introspection: name, descr, arguments (declaration order), cardinals
      (positional order) and switches (named arguments and flags).
    - Help capability: help=True adds a "--help/-h" flag; when it is bound the
      console renders help instead of executing.
    - Execution: execute(context, values) runs the handler with a mapping of
      every argument name to its bound value or default.

    Lifecycle
    - Built once at startup, registered, and never mutated afterwards.
    """

    __introspectable__ = (
        "name",
        "descr",
        "arguments",
        "cardinals",
        "switches",
    )

    __displayable__ = (
        "name",
        "descr",
        "arguments",
    )

    def __init__(self, name, /, *arguments, descr=Unset, help=False, callback=Unset):
        """
        Parameters
        - name: str
          First token of the line; matched case-insensitively.
        - *arguments: Cardinal | Option | Flag
          Argument specs in declaration order.
        - descr: Unset | str
          One-line description for help listings.
        - help: bool
          Add the "--help/-h" flag (help short-circuit).
        - callback: Unset | Callable[[context, values], outcome]
          Handler used by execute() when the class does not override it.
        """
        if not isinstance(name, str):
            raise TypeError("command 'name' must be a string")
        elif not re.fullmatch(r"[^\W_][\w-]*", name := name.strip()):
            raise ValueError("command 'name' must be a single word")

        if not isinstance(descr, str | Unset):
            raise TypeError("command 'descr' must be a string")
        elif isinstance(descr, str) and not (descr := descr.strip()):
            raise ValueError("command 'descr' cannot be empty")

        if callback is not Unset and not callable(callback):
            raise TypeError("command 'callback' must be callable")

        arguments = list(arguments)
        if help:
            arguments.append(helper := Flag("help", "h", descr="show this help"))
        else:
            helper = None
        _sanitize_arguments(arguments)

        self._name = name
        self._descr = coalesce(descr)
        self._arguments = tuple(arguments)
        self._cardinals = tuple(argument for argument in arguments if argument.positional)
        self._switches = tuple(argument for argument in arguments if not argument.positional)
        self._help = helper
        self._callback = callback

    @property
    def help(self):
        """The help flag when the command supports help, otherwise None."""
        return self._help

    def find(self, name, /):
        """Return the argument spec called name, or None."""
        for argument in self._arguments:
            if argument.name == name:
                return argument
        return None

    def execute(self, context, values, /):
        """
        Run the command.

        Parameters
        - context: the host object (see helmsman.console.Host).
        - values: read-only mapping of every argument name to its value.

        Returns
        - any outcome; the console driver hands it back to its caller.
        """
        if self._callback is Unset:
            raise NotImplementedError("%s.execute() is not implemented" % type(self).__name__)
        return self._callback(context, values)


def command(name=Unset, /, *arguments, descr=Unset, help=False):
    """
    Build a Command from a handler function.

    Usage
        @command("ban", Cardinal("target"), Option("duration", "d", type=ValueType.INTEGER))
        def ban(context, values):
            \"\"\"ban a player\"\"\"

    Behavior
    - name defaults to the function name (underscores become hyphens).
    - descr defaults to the first line of the function docstring.

    Returns
    - a decorator producing a Command whose execute() calls the function.
    """
    @rename("command")
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError("@command() must be applied to a callable")
        doc = inspect.getdoc(callback)
        return Command(
            coalesce(name, callback.__name__.strip("_").replace("_", "-")),
            *arguments,
            descr=coalesce(descr, doc.splitlines()[0] if doc else Unset),
            help=help,
            callback=callback,
        )

    return wrapper


class HelpCommand(Command):
    """
    Built-in "help" command.

    - help           → table of every registered command, in registration order.
    - help <command> → usage line and argument table of that command.
    - help <unknown> → non-fatal "unknown command" notice (the line itself parsed fine).
    """

    def __init__(self, parser, /, console=Unset):
        super().__init__(
            "help",
            Cardinal("command", required=False, descr="command to describe"),
            descr="list the commands or show the help of one",
        )
        self._parser = parser
        self._console = coalesce(console, Console())

    def execute(self, context, values, /):
        settings = self._parser.settings

        if (name := values["command"]) is None:
            self._console.print(format_commands(self._parser.registry, settings))
            return None

        if (command := self._parser.registry.resolve(name)) is None:
            self._console.print(MissingCommandError.create(settings, input=name))
            return None

        self._console.print(format_usage(command, settings))
        self._console.print(format_help(command, settings))
        return command


__all__ = (
    "Command",
    "HelpCommand",
    "command",
)

# Keep the metaclass out of star-imports and docs.
del CommandType
