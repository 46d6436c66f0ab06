"""
Console driver.

ServerConsole is the thread that sits between the operator and the parser:
it reads one line at a time, parses it, reports faults and either renders help
or runs the command handler.

Dispatch policy (per line)
- blank line → skipped, nothing is parsed.
- unknown command → the MissingCommandError is printed; nothing runs.
- --help given on a command that supports it → usage and help are printed
  instead of running the handler (not an error path).
- non-fatal faults are printed as warnings; unresolved and unhandled input is
  printed too; other fatal faults are logged with their cause.
- missing required arguments → one consolidated message plus the usage line.
- any fatal fault → the usage line is printed and the handler does not run.
- otherwise → command.execute(host, values); an exception raised by the
  handler is logged and reported as a DelegatedCommandError, the loop goes on.

The loop ends when the input stream closes (the host is then asked to shut
down) or when the host stops running between two lines.
"""
import logging
import sys
from threading import Thread
from typing import Protocol

from rich.console import Console

from .faults import *
from .formatting import format_usage, format_help, format_missing
from .utils import *

logger = logging.getLogger(__name__)


class Host(Protocol):
    """
    The service the console is attached to; handed to handlers as context.
    """

    @property
    def running(self) -> bool: ...

    def request_shutdown(self) -> None: ...


class ServerConsole(Thread):
    """
    Dedicated console thread.

    Parameters
    - parser: Parser with every command registered (frozen when the loop starts).
    - host: Host passed to handlers; polled between lines and asked to shut down on EOF.
    - stdin: text stream read line by line (defaults to sys.stdin).
    - console: rich Console used for all operator output (defaults to stdout).
    - prompt: text printed before every read.
    """

    def __init__(self, parser, host, /, stdin=Unset, console=Unset, *, prompt="> "):
        super().__init__(name="console", daemon=True)
        self._parser = parser
        self._host = host
        self._stdin = coalesce(stdin, sys.stdin)
        self._console = coalesce(console, Console())
        self._prompt = prompt

    @property
    def parser(self):
        return self._parser

    def run(self):
        settings = self._parser.settings
        self._parser.freeze()
        self._console.print(settings.text("console.intro", "console active, type 'help' to list the commands"))

        while self._host.running:
            self._console.print(self._prompt, end="", markup=False, highlight=False)
            if not (line := self._stdin.readline()):
                logger.info("console input closed, requesting shutdown")
                self._host.request_shutdown()
                break

            if not (line := line.strip()):
                continue

            self.dispatch(self._parser.parse(line))

    def dispatch(self, result, /):
        """
        Apply the dispatch policy to one parse result.

        Returns
        - the handler outcome when the command ran, otherwise None.
        """
        settings = self._parser.settings
        echo = self._console.print

        if (command := result.command) is None:
            for error in result.errors:
                echo(error)
            return None

        if result.wants_help:
            echo(format_usage(command, settings, result))
            echo(format_help(command, settings))
            return None

        for error in result.errors:
            if isinstance(error, MissingArgumentError):
                continue
            if not error.fatal or isinstance(error, UnhandledArgumentError):
                echo(error)
            else:
                logger.warning("%s: %s (%s)", error.kind, error.message, error.cause or error.hint)

        if result.missing:
            echo(format_missing(result.missing, settings), markup=False)

        if result.fatal or result.missing:
            echo(format_usage(command, settings, result))
            return None

        try:
            return command.execute(self._host, result.namespace())
        except Exception as exception:
            logger.exception("command %r failed", command.name)
            fault = DelegatedCommandError.create(settings, name=command.name, cause=str(exception))
            fault.__cause__ = exception
            echo(fault)
            return None


__all__ = (
    "Host",
    "ServerConsole",
)
