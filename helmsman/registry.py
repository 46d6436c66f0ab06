"""
Command registry.

Holds every registered Command, keyed by its lowercased name, and remembers
registration order for listings. Registration happens once at startup; after
freeze() the registry is read-only, so lookups need no synchronization.
"""
import logging

from .commands import Command
from .faults import DuplicateCommandError
from .utils import *

logger = logging.getLogger(__name__)


class _Listing:
    """
    Lazy, restartable view over the registered commands.

    Each iteration walks the registry afresh in registration order.
    """

    __slots__ = ("_commands",)

    def __init__(self, commands, /):
        self._commands = commands

    def __iter__(self):
        return iter(self._commands.values())

    def __len__(self):
        return len(self._commands)

    def __repr__(self):
        return "<commands %s>" % ", ".join(command.name for command in self)


class Registry:
    """
    Case-insensitive mapping from command name to Command.

    Operations
    - register(command): add a command; DuplicateCommandError on a name collision.
    - resolve(name): the command or None.
    - all(): lazy, restartable iterable in registration order.
    - freeze(): reject any further registration (RuntimeError).
    """

    def __init__(self, localization=Unset, /):
        self._commands = {}
        self._localization = localization
        self._frozen = False

    @property
    def frozen(self):
        return self._frozen

    def register(self, command, /):
        """
        Register a command and return it.

        Raises
        - TypeError: command is not a Command.
        - RuntimeError: the registry is frozen.
        - DuplicateCommandError: a command with the same name (any casing)
          is already registered; the first registration is kept.
        """
        if not isinstance(command, Command):
            raise TypeError("register() argument must be a command")
        if self._frozen:
            raise RuntimeError("cannot register %r: the registry is frozen" % command.name)

        if (key := command.name.lower()) in self._commands:
            raise DuplicateCommandError.create(self._localization, name=command.name)

        self._commands[key] = command
        logger.debug("registered command %r", command.name)
        return command

    def resolve(self, name, /):
        """Return the command called name (case-insensitive), or None."""
        if not isinstance(name, str):
            raise TypeError("resolve() argument must be a string")
        return self._commands.get(name.lower())

    def all(self):
        """Lazy, restartable iterable over every command in registration order."""
        return _Listing(self._commands)

    def freeze(self):
        self._frozen = True

    def __contains__(self, name):
        return isinstance(name, str) and name.lower() in self._commands

    def __len__(self):
        return len(self._commands)

    def __iter__(self):
        return iter(self.all())


__all__ = (
    "Registry",
)
