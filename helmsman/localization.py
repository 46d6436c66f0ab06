"""
Helmsman localization boundary.

Every user-facing string (type labels, fault messages, hints, help markers) is
looked up through a Localization object carried by ParserSettings. Nothing in
the engine reads a process-wide catalog.

Contract
- text(key, default) returns the display template for key. The base class is
  the identity catalog: it always returns the built-in English default, so the
  engine works unchanged when no translation is supplied.
- Catalog(mapping) overrides any subset of keys; unknown keys fall back to the
  default.
- Templates use printf-style named fields ("%(name)s"); callers interpolate.

Keys
- types.flag, types.integer, types.string, types.token
- errors.<fault-kind>, hints.<fault-kind>   (kind in kebab-case, e.g. errors.missing-command)
- help.required, help.type, help.argument, help.missing, help.missing-delimiter
- help.commands, help.name, help.help, console.intro
"""
from collections.abc import Mapping
from types import MappingProxyType


class Localization:
    """
    Identity text lookup: returns the default for every key.
    """

    def text(self, key, default, /):
        if not isinstance(key, str):
            raise TypeError("text() first argument must be a string")
        return default

    def __repr__(self):
        return f"{type(self).__name__}()"


class Catalog(Localization):
    """
    Mapping-backed text lookup.

    Example
        Catalog({"types.integer": "entero", "help.required": "(obligatorio)"})
    """

    def __init__(self, entries=(), /, **overrides):
        entries = dict(entries) | overrides
        for key, value in entries.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise TypeError("catalog entries must map strings to strings")
        self._entries = MappingProxyType(entries)

    @property
    def entries(self) -> Mapping[str, str]:
        return self._entries

    def text(self, key, default, /):
        super().text(key, default)
        return self._entries.get(key, default)

    def __repr__(self):
        return f"{type(self).__name__}({dict(self._entries)!r})"


__all__ = (
    "Localization",
    "Catalog",
)
