import logging
import sys
import threading

from rich.logging import RichHandler

from helmsman import *


class Server:
    """Stand-in host: keeps running until the console asks it to stop."""

    def __init__(self):
        self._stopped = threading.Event()
        self.players = {"alice", "bob", "carol"}

    @property
    def running(self):
        return not self._stopped.is_set()

    def request_shutdown(self):
        self._stopped.set()

    def wait(self):
        self._stopped.wait()


@command(
    "announce",
    Cardinal("message", greedy=True, descr="text to broadcast"),
    help=True,
)
def announce(context, values):
    """broadcast a message to every player"""
    print("[broadcast] %s" % values["message"])


@command(
    "kick",
    Cardinal("target", descr="player to disconnect"),
    Option("reason", "r", descr="shown to the player"),
    Flag("silent", "s", descr="do not announce the kick"),
    help=True,
)
def kick(context, values):
    """disconnect a player"""
    if values["target"] not in context.players:
        raise LookupError("no player named %r" % values["target"])
    context.players.discard(values["target"])
    if not values["silent"]:
        print("[broadcast] %s was kicked (%s)" % (values["target"], values["reason"] or "no reason"))


@command(
    "ban",
    Cardinal("target", descr="player to ban"),
    Option("duration", "d", ValueType.INTEGER, descr="ban length in minutes", required=True),
    Option("scope", type=ValueType.TOKEN, choices=("server", "world"), default="server"),
    help=True,
)
def ban(context, values):
    """ban a player for a while"""
    context.players.discard(values["target"])
    print("[broadcast] %s was banned from the %s for %d minutes" % (
        values["target"], values["scope"], values["duration"]
    ))


@command()
def exit_(context, values):
    """stop the server"""
    context.request_shutdown()


if __name__ == '__main__':
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )

    parser = Parser()
    parser.register(HelpCommand, parser)
    for handler in (announce, kick, ban, exit_):
        parser.register(handler)

    server = Server()
    ServerConsole(parser, server, sys.stdin).start()
    server.wait()
