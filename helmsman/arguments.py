r"""
Helmsman argument specifications.

Overview
- Specs
  • Cardinal: positional, value-bearing argument (optionally greedy: absorbs the rest of the line).
  • Option: named, value-bearing argument with a long name and an optional short alias (--reason/-r).
  • Flag: named, presence-only switch (--verbose/-v), bound to True when present.
- ValueType: the closed set of payload types (flag, integer, string, token) and their coercion.

Introspection & representation
- ArgumentType metaclass derives a __typename__, exposes the fields listed in
  __introspectable__ as read-only properties, and provides stable
  __repr__/__rich_repr__ implementations.

Metadata (sanitized on construction)
- Shared (all specs)
  • name: identifier made of letters/digits separated by single hyphens ("duration", "dry-run").
  • descr: Unset | str | Text (short help), non-empty when provided; None when omitted.
  • required: bool (is-required-by-default).
- Value-bearing (Cardinal/Option)
  • type: ValueType other than FLAG.
  • choices: Iterable[str], only for ValueType.TOKEN, where it is mandatory.
  • default: any value reported for an unbound argument.
- Named (Option/Flag)
  • short: Unset | single letter/digit alias.
- Cardinal only
  • greedy: bool, absorbs every remaining positional token (string type only).

Quick example:
    >>> from helmsman.arguments import Cardinal, Option, Flag, ValueType
    >>> target = Cardinal("target", descr="player to act on")
    >>> duration = Option("duration", "d", type=ValueType.INTEGER, default=0)
    >>> verbose = Flag("verbose", "v")
"""
import builtins
import functools
import operator
import re
from collections.abc import Iterable
from enum import Enum

from rich.text import Text

from .utils import *


_BOOLEANS = {
    "true": True,
    "yes": True,
    "on": True,
    "1": True,
    "false": False,
    "no": False,
    "off": False,
    "0": False,
}


class ValueType(Enum):
    """
    Payload type of an argument.

    The enum value is the internal tag; display labels come from the
    localization ("types.<value>"), never from the tag itself.
    """
    FLAG = "flag"
    INTEGER = "integer"
    STRING = "string"
    TOKEN = "token"

    def convert(self, raw, choices=(), /):
        """
        Coerce a raw token into this type.

        Rules
        - FLAG: true/yes/on/1 and false/no/off/0 (case-insensitive).
        - INTEGER: base-10 integer, optional sign.
        - STRING: the token unchanged.
        - TOKEN: one of choices, matched case-insensitively; the declared choice is returned.

        Raises
        - ValueError: the token does not fit the type.
        """
        if not isinstance(raw, str):
            raise TypeError("convert() first argument must be a string")

        match self:
            case ValueType.FLAG:
                try:
                    return _BOOLEANS[raw.strip().lower()]
                except KeyError:
                    raise ValueError("expected one of %s" % ", ".join(_BOOLEANS)) from None
            case ValueType.INTEGER:
                try:
                    return int(raw, 10)
                except ValueError:
                    raise ValueError("expected a base-10 integer") from None
            case ValueType.TOKEN:
                for choice in choices:
                    if choice.casefold() == raw.casefold():
                        return choice
                raise ValueError("expected one of %s" % ", ".join(map(repr, choices)))
            case _:
                return raw


class ArgumentType(type):
    """
    Metaclass that turns specs into introspectable, read-only descriptors.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens).
    - Expose every name listed in __introspectable__ as a read-only property
      backed by the private "_<name>" field (see mirror()).
    - Provide stable __repr__/__rich_repr__ for diagnostics; __displayable__
      narrows the fields shown when set.
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
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate the fields shared by every spec (name, descr, required).

    Raises
    - TypeError: name/descr of the wrong type.
    - ValueError: empty or malformed name, empty descr.

    Notes
    - Mutates metadata in place: the name is trimmed, descr becomes None when
      omitted, required becomes a bool.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif not re.fullmatch(r"[^\W\d_](-?[^\W_]+)*", name):
        raise ValueError(f"{cls.__typename__} 'name' must be letters or digits separated by single hyphens")
    metadata["name"] = name

    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    metadata["required"] = bool(metadata["required"])


def _sanitize_named_metadata(cls, metadata, /):
    """
    Internal: validate the short alias of named specs (Option, Flag).

    A short alias is a single letter or digit; Unset becomes None.
    """
    if not isinstance(short := metadata["short"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'short' must be a string")
    elif isinstance(short, str) and not re.fullmatch(r"[^\W_]", short):
        raise ValueError(f"{cls.__typename__} 'short' must be a single letter or digit")
    metadata["short"] = coalesce(short)


def _sanitize_typed_metadata(cls, metadata, /):
    """
    Internal: validate type and choices of value-bearing specs (Cardinal, Option).

    Rules
    - type must be a ValueType and cannot be FLAG (presence-only arguments are Flags).
    - TOKEN requires at least one choice; other types reject choices.
    - choices are non-empty strings without case-insensitive duplicates,
      normalized to a tuple in declaration order.
    """
    if not isinstance(type := metadata["type"], ValueType):
        raise TypeError(f"{cls.__typename__} 'type' must be a value-type")
    elif type is ValueType.FLAG:
        raise TypeError(f"{cls.__typename__} cannot be a flag, use 'Flag' instead")

    if not isinstance(choices := metadata["choices"], Iterable) or isinstance(choices, str):
        raise TypeError(f"{cls.__typename__} 'choices' must be an iterable of strings")

    sanitized = []
    for choice in choices:
        if not isinstance(choice, str):
            raise TypeError(f"{cls.__typename__} 'choices' must be strings")
        elif not (choice := choice.strip()):
            raise ValueError(f"{cls.__typename__} 'choices' cannot contain empty strings")
        elif choice.casefold() in map(str.casefold, sanitized):
            raise ValueError(f"{cls.__typename__} 'choices' cannot contain duplicates")
        sanitized.append(choice)

    if type is ValueType.TOKEN and not sanitized:
        raise ValueError(f"{cls.__typename__} of type token must declare 'choices'")
    elif type is not ValueType.TOKEN and sanitized:
        raise TypeError(f"{cls.__typename__} can only declare 'choices' with type token")
    metadata["choices"] = tuple(sanitized)


class Cardinal(metaclass=ArgumentType):
    """
    Positional, value-bearing argument specification.

    Cardinals are filled in declaration order by tokens that are not switches.
    A greedy cardinal absorbs every remaining positional token, joined with
    single spaces (free-text payloads such as an announcement).
    """

    __introspectable__ = (
        "name",
        "type",
        "descr",
        "required",
        "greedy",
        "choices",
        "default",
    )

    positional = True
    flag = False
    short = None

    def __init__(
            self,
            name,
            /,
            type=ValueType.STRING,
            descr=Unset,
            *,
            required=True,
            greedy=False,
            choices=(),
            default=None,
    ):
        """
        Construct a Cardinal spec.

        Parameters
        - name: str
          Identifier used as the binding key and in usage/help.
        - type: ValueType
          Payload type (FLAG is rejected).
        - descr: Unset | str
          Short description for help.
        - required: bool
          Whether an unbound cardinal is reported as missing.
        - greedy: bool
          Absorb the rest of the positional tokens (string type only).
        - choices: Iterable[str]
          Allowed tokens for ValueType.TOKEN.
        - default: Any
          Value reported when the cardinal is not bound.
        """
        metadata = {
            "name": name,
            "type": type,
            "descr": descr,
            "required": required,
            "greedy": bool(greedy),
            "choices": choices,
            "default": default,
        }
        _sanitize_metadata(builtins.type(self), metadata)
        _sanitize_typed_metadata(builtins.type(self), metadata)

        if metadata["greedy"] and metadata["type"] is not ValueType.STRING:
            raise TypeError(f"greedy {builtins.type(self).__typename__} must be of type string")

        for name, object in metadata.items():
            setattr(self, "_" + name, object)


class Option(metaclass=ArgumentType):
    """
    Named, value-bearing argument specification.

    Matched by its long name (--duration) or its short alias (-d); the value is
    the next token, or the inline part of --duration=60.
    """

    __introspectable__ = (
        "name",
        "short",
        "type",
        "descr",
        "required",
        "choices",
        "default",
    )

    positional = False
    flag = False
    greedy = False

    def __init__(
            self,
            name,
            short=Unset,
            /,
            type=ValueType.STRING,
            descr=Unset,
            *,
            required=False,
            choices=(),
            default=None,
    ):
        metadata = {
            "name": name,
            "short": short,
            "type": type,
            "descr": descr,
            "required": required,
            "choices": choices,
            "default": default,
        }
        _sanitize_metadata(builtins.type(self), metadata)
        _sanitize_named_metadata(builtins.type(self), metadata)
        _sanitize_typed_metadata(builtins.type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)


class Flag(metaclass=ArgumentType):
    """
    Named, presence-only switch specification.

    Presence binds True; an unbound flag reads as False. An inline value
    (--verbose=off) is coerced as a boolean.
    """

    __introspectable__ = (
        "name",
        "short",
        "descr",
        "required",
    )

    positional = False
    flag = True
    greedy = False
    type = ValueType.FLAG
    choices = ()
    default = False

    def __init__(self, name, short=Unset, /, descr=Unset, *, required=False):
        metadata = {
            "name": name,
            "short": short,
            "descr": descr,
            "required": required,
        }
        _sanitize_metadata(builtins.type(self), metadata)
        _sanitize_named_metadata(builtins.type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)


__all__ = (
    # Classes (specifications)
    "Cardinal",
    "Option",
    "Flag",

    # Payload types
    "ValueType",
)

# Keep the metaclass out of star-imports and docs.
del ArgumentType
