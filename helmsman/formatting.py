"""
Usage and help rendering.

Every function here is a pure function of command metadata (plus the parser
settings and, for usage, an optional parse result used to mark which arguments
were supplied). Nothing executes a handler or mutates a result.

Products
- format_usage(command, settings, result=None) → Text
    kick target [reason...] [--silent] [--duration <integer>]
- format_help(command, settings) → Text
    one row per argument: names, type label, required marker, description.
- format_missing(arguments, settings) → str
    the consolidated "missing arguments" sentence.
- format_commands(registry, settings) → Table
    the global command listing, in registration order.

Palette keys
- command-name, argument, supplied-argument, missing-argument, bracket
- argument-names, argument-type, required-marker, argument-description, description
- commands-title, commands-table, commands, commands-description

Define a mapping named __styles__ in __main__ to override any palette entry.
"""
from collections import defaultdict

from rich.box import ROUNDED
from rich.table import Table
from rich.text import Text

from .utils import *


def _styles():
    return defaultdict(str, {
        "command-name": "bold #FF4D94",
        "argument": "bold #36C5F0",
        "supplied-argument": "bold #22C55E",
        "missing-argument": "bold #EF4444",
        "bracket": "#737373",

        "argument-names": "bold #00E6FF",
        "argument-type": "#FFD600",
        "required-marker": "#F97316",
        "argument-description": "#9CA3AF",
        "description": "italic #A3A3A3",

        "commands-title": "bold #FFFFFF",
        "commands-table": "#4B5563",
        "commands": "bold #36C5F0",
        "commands-description": "#9CA3AF",
    } | getattr(__import__("__main__"), "__styles__", {}))


def _label(argument, settings, /):
    """Usage label of one argument, without brackets."""
    if argument.positional:
        return argument.name + ("..." if argument.greedy else "")
    if argument.flag:
        return settings.prefix_long + argument.name
    return "%s%s <%s>" % (settings.prefix_long, argument.name, settings.typename(argument.type))


def format_usage(command, settings, result=None, /):
    """
    Render the one-line usage of a command.

    Cardinals come first in positional order, then switches in declaration
    order. Required arguments are bare, optional ones are bracketed. With a
    result, supplied and missing arguments get their own styles; the plain
    text does not change.
    """
    styles = _styles()
    usage = Text(command.name, styles["command-name"])

    supplied = result.values.keys() if result is not None else ()
    missing = result.missing if result is not None else ()

    for argument in (*command.cardinals, *command.switches):
        if argument.name in supplied:
            style = styles["supplied-argument"]
        elif argument in missing:
            style = styles["missing-argument"]
        else:
            style = styles["argument"]

        usage.append(" ")
        if argument.required:
            usage.append(_label(argument, settings), style)
        else:
            usage.append("[", styles["bracket"])
            usage.append(_label(argument, settings), style)
            usage.append("]", styles["bracket"])

    return usage


def format_help(command, settings, /):
    """
    Render the full help table of a command.

    Layout (one row per argument, cardinals first, then switches)
        <description>

        -d, --duration   integer      (required) - ban length in minutes
        target           string       (required) - player to ban
    """
    styles = _styles()
    required = settings.text("help.required", "(required)")
    buffer = "" if len(command.arguments) == 1 else " " * len(required)

    help = Text()
    if command.descr:
        help.append("    ").append(command.descr, styles["description"]).append("\n\n")

    for argument in (*command.cardinals, *command.switches):
        if argument.positional:
            names = _label(argument, settings)
        else:
            names = ", ".join(
                name for name in (
                    settings.prefix_short + argument.short if argument.short else None,
                    settings.prefix_long + argument.name,
                ) if name
            )

        help.append("    ")
        help.append(f"{names:<16}", styles["argument-names"]).append(" ")
        help.append(f"{settings.typename(argument.type):<12}", styles["argument-type"]).append(" ")
        help.append(required if argument.required else buffer, styles["required-marker"])
        if argument.descr:
            help.append(" - ").append(argument.descr, styles["argument-description"])
        help.append("\n")

    help.rstrip()
    return help


def format_missing(arguments, settings, /):
    """
    Render the consolidated message for missing required arguments.

    Example
    - "missing arguments: target (string), duration (integer)"
    """
    noun = settings.text("help.argument", "argument")
    if len(arguments) != 1:
        noun = pluralize(noun)

    return settings.text("help.missing", "missing %(noun)s: %(arguments)s") % {
        "noun": noun,
        "arguments": settings.text("help.missing-delimiter", ", ").join(
            settings.text("help.type", "%(name)s (%(type)s)") % {
                "name": argument.name,
                "type": settings.typename(argument.type),
            } for argument in arguments
        ),
    }


def format_commands(registry, settings, /):
    """
    Render the global command listing (name and description per command).
    """
    styles = _styles()
    table = Table(
        settings.text("help.name", "name"),
        settings.text("help.help", "help"),
        title=Text(settings.text("help.commands", "commands"), styles["commands-title"]),
        box=ROUNDED,
        style=styles["commands-table"],
        header_style=styles["commands-title"],
    )

    for command in registry.all():
        table.add_row(
            Text(command.name, styles["commands"]),
            Text(str(command.descr or ""), styles["commands-description"]),
        )

    return table


__all__ = (
    "format_usage",
    "format_help",
    "format_missing",
    "format_commands",
)
