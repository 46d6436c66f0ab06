"""
Helmsman parser: registration API, matcher, and parse results.

What this module provides
- Parser: owns the settings and the command registry; register(...) at startup,
  parse(line) for every console line.
- ParseResult: the immutable dispatch object produced for one line.

Matching (one line, left to right)
- the first token resolves the command (case-insensitive); unknown → one fatal
  MissingCommandError and nothing else.
- "--name" / "-x" (optionally "--name=value") bind switches: flags take no
  value, options consume the next token (or the inline value) and coerce it.
- other tokens fill the cardinals in order; a greedy cardinal absorbs every
  remaining token that binds no switch ("-ish" included), joined with single
  spaces.
- prefixed tokens that name no switch but look like one ("--bogus") and tokens
  left over once the cardinals are full are unconsumed and reported as
  non-fatal UnhandledArgumentError.
- required arguments left unbound end up in missing (plus a non-fatal
  MissingArgumentError each).

Faults are recorded in order of discovery and never raised, so one line
reports every problem at once. Parsing keeps no state between lines: the same
line against the same registry always yields an equal ParseResult.
"""
import logging
from collections import deque
from types import MappingProxyType
from typing import NamedTuple

from .commands import Command
from .faults import *
from .registry import Registry
from .settings import ParserSettings
from .tokens import tokenize
from .utils import *

logger = logging.getLogger(__name__)


def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based token position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


class ParseResult(NamedTuple):
    """
    Outcome of parsing one console line.

    Fields
    - command: the matched Command, or None when the first token matched nothing.
    - values: read-only mapping of argument name → typed value (bound arguments only).
    - missing: required arguments that were never bound (cardinals first).
    - errors: classified faults in the order they were found.
    - unconsumed: tokens that were not mapped to any argument.
    """
    command: Command | None
    values: MappingProxyType
    missing: tuple
    errors: tuple
    unconsumed: tuple

    @property
    def fatal(self):
        """True when any recorded fault blocks dispatch."""
        return any(error.fatal for error in self.errors)

    @property
    def wants_help(self):
        """True when the command supports help and --help was given."""
        if self.command is None or self.command.help is None:
            return False
        return self.values.get(self.command.help.name) is True

    def find(self, argument, default=Unset, /):
        """
        Value of an argument (spec or name): the bound value, else default,
        else the argument's own default.
        """
        if isinstance(argument, str):
            if self.command is None or (spec := self.command.find(argument)) is None:
                raise KeyError(argument)
            argument = spec
        try:
            return self.values[argument.name]
        except KeyError:
            return coalesce(default, argument.default)

    def namespace(self) -> MappingProxyType:
        """Read-only mapping of every argument of the command to its value."""
        if self.command is None:
            return MappingProxyType({})
        return MappingProxyType({argument.name: self.find(argument) for argument in self.command.arguments})


class Parser:
    """
    Command parser bound to one registry and one set of settings.

    Lifecycle
    - construct with ParserSettings (defaults: "--", "-", "=", identity localization).
    - register(...) every command at startup; freeze() before the console starts.
    - parse(line) any number of times; parsing only reads the registry.
    """

    def __init__(self, settings=Unset, /):
        if not isinstance(settings := coalesce(settings, ParserSettings()), ParserSettings):
            raise TypeError("parser 'settings' must be parser-settings")
        self._settings = settings
        self._registry = Registry(settings.localization)

    @property
    def settings(self):
        return self._settings

    @property
    def registry(self):
        return self._registry

    def register(self, source, /, *args, **kwargs):
        """
        Register a command.

        Accepts
        - a Command instance (no extra arguments allowed);
        - a Command subclass or any factory returning a Command, called with
          *args and **kwargs (e.g. register(HelpCommand, parser)).

        Raises
        - TypeError: source is neither, or the factory did not return a Command.
        - DuplicateCommandError: the name is already registered.
        """
        if isinstance(source, Command):
            if args or kwargs:
                raise TypeError("register() takes no extra arguments with a command instance")
            command = source
        elif callable(source):
            command = source(*args, **kwargs)
        else:
            raise TypeError("register() argument must be a command, a command type or a factory")

        if not isinstance(command, Command):
            raise TypeError("register() factory must return a command")
        return self._registry.register(command)

    def freeze(self):
        """Fix the registry contents; further registration raises RuntimeError."""
        self._registry.freeze()

    def parse(self, line, /):
        """
        Parse one console line into a ParseResult.

        An empty (or blank) line yields an empty result with no command and no
        faults; the console driver skips such lines before calling parse.
        """
        if not (tokens := tokenize(line)):
            return ParseResult(None, MappingProxyType({}), (), (), ())

        if (command := self._registry.resolve(tokens[0])) is None:
            return ParseResult(
                None,
                MappingProxyType({}),
                (),
                (MissingCommandError.create(self._settings, input=tokens[0]),),
                (),
            )

        result = self._match(command, tokens)
        logger.debug(
            "parsed %r: %d value(s), %d missing, %d fault(s), %d unconsumed",
            line, len(result.values), len(result.missing), len(result.errors), len(result.unconsumed)
        )
        return result

    def _resolve_switch(self, command, token):
        """
        Classify a token against the switches of a command.

        Returns
        - (argument, input, inline) when the token names a switch; inline is the
          text after the assignment character, or None.
        - (None, input, None) when it looks like a switch ("--bogus", "-q") but
          names none of them.
        - Unset when the token is positional (including "-5" and a bare "--").
        """
        settings = self._settings
        for prefix, attribute in ((settings.prefix_long, "name"), (settings.prefix_short, "short")):
            if not token.startswith(prefix) or len(token) == len(prefix):
                continue

            input, separator, inline = token.partition(settings.assignment)
            name = input[len(prefix):]
            for argument in command.switches:
                if getattr(argument, attribute) == name:
                    return argument, input, inline if separator else None

            if name[:1].isalpha():
                return None, input, None
            return Unset
        return Unset

    def _coerce(self, argument, token, position, values, errors):
        """Convert token for argument; bind it or record a TypeConversionError."""
        try:
            values[argument.name] = argument.type.convert(token, argument.choices)
        except ValueError as exception:
            errors.append(TypeConversionError.create(
                self._settings,
                token=token,
                position=_ordinal(position),
                type=self._settings.typename(argument.type),
                name=argument.name,
                cause=str(exception),
                argument=argument,
            ))

    def _match(self, command, tokens):
        """
        Bind tokens[1:] to the arguments of command (see the module docstring).

        Positions in fault messages are 1-based over the whole line, so the
        command name is the first position.
        """
        settings = self._settings
        values = {}
        errors = []
        unconsumed = []
        provided = set()
        greedy = []

        cardinals = deque(command.cardinals)
        stream = deque(enumerate(tokens[1:], start=2))

        while stream:
            position, token = stream.popleft()

            if (switch := self._resolve_switch(command, token)) is Unset:
                if cardinals and cardinals[0].greedy:
                    greedy.append((position, token))
                elif cardinals:
                    self._coerce(cardinals.popleft(), token, position, values, errors)
                else:
                    unconsumed.append(token)
                    errors.append(UnhandledArgumentError.create(
                        settings, token=token, position=_ordinal(position), command=command.name
                    ))
                continue

            argument, input, inline = switch
            if argument is None and cardinals and cardinals[0].greedy:
                greedy.append((position, token))
                continue
            if argument is None:
                unconsumed.append(token)
                errors.append(UnhandledArgumentError.create(
                    settings, token=token, position=_ordinal(position), command=command.name
                ))
                continue

            if argument in provided:
                # the repeated value goes with its switch, not to the cardinals
                if not argument.flag and inline is None and stream:
                    stream.popleft()
                errors.append(DuplicateArgumentError.create(
                    settings, input=input, position=_ordinal(position), argument=argument
                ))
                continue
            provided.add(argument)

            if argument.flag and inline is None:
                values[argument.name] = True
                continue

            if inline is None:
                try:
                    _, inline = stream.popleft()
                except IndexError:
                    pass
            elif not inline:
                # "--name=" carries no value; a quoted "" token does
                inline = None

            if inline is None:
                errors.append(MissingValueError.create(
                    settings,
                    input=input,
                    position=_ordinal(position),
                    type=settings.typename(argument.type),
                    assignment=settings.assignment,
                    argument=argument,
                ))
                continue

            self._coerce(argument, inline, position, values, errors)

        if greedy:
            self._coerce(cardinals.popleft(), " ".join(token for _, token in greedy), greedy[0][0], values, errors)

        missing = []
        for argument in (*command.cardinals, *command.switches):
            if argument.required and argument.name not in values:
                missing.append(argument)
                errors.append(MissingArgumentError.create(
                    settings,
                    name=argument.name,
                    type=settings.typename(argument.type),
                    command=command.name,
                    argument=argument,
                ))

        return ParseResult(
            command,
            MappingProxyType(values),
            tuple(missing),
            tuple(errors),
            tuple(unconsumed),
        )


__all__ = (
    "Parser",
    "ParseResult",
)
