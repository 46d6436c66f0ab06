"""
Parser configuration.

ParserSettings bundles the knobs shared by the matcher, the formatter and the
console driver:
- prefix_long: marker of long switch names ("--" → --verbose).
- prefix_short: marker of short switch names ("-" → -v).
- assignment: inline value separator ("=" → --reason=spam).
- localization: text lookup used for every rendered string.

Settings are validated on construction and read-only afterwards.
"""
from .localization import Localization
from .utils import *


class ParserSettings:
    """
    Validated, immutable parser configuration.

    Raises
    - TypeError: a prefix/assignment is not a string, or localization does not
      provide text().
    - ValueError: empty or whitespace-bearing markers, identical prefixes, or a
      long prefix that is not strictly longer than a short prefix it starts with.
    """

    prefix_long = mirror("prefix_long")
    prefix_short = mirror("prefix_short")
    assignment = mirror("assignment")
    localization = mirror("localization")

    def __init__(self, prefix_long="--", prefix_short="-", assignment="=", *, localization=Unset):
        for label, marker in (("prefix_long", prefix_long), ("prefix_short", prefix_short), ("assignment", assignment)):
            if not isinstance(marker, str):
                raise TypeError(f"settings '{label}' must be a string")
            elif not marker or any(char.isspace() for char in marker):
                raise ValueError(f"settings '{label}' cannot be empty or contain whitespace")

        if prefix_long == prefix_short:
            raise ValueError("settings prefixes must differ")
        if prefix_short.startswith(prefix_long):
            raise ValueError("settings 'prefix_short' cannot extend 'prefix_long'")
        if assignment in (prefix_long, prefix_short):
            raise ValueError("settings 'assignment' cannot be a prefix")

        localization = coalesce(localization, Localization())
        if not callable(getattr(localization, "text", None)):
            raise TypeError("settings 'localization' must provide a text() method")

        self._prefix_long = prefix_long
        self._prefix_short = prefix_short
        self._assignment = assignment
        self._localization = localization

    def text(self, key, default, /):
        """Shortcut for self.localization.text(key, default)."""
        return self._localization.text(key, default)

    def typename(self, type, /):
        """Localized, human label of a ValueType (never the internal tag)."""
        return self.text("types." + type.value, type.value)

    def __repr__(self):
        return "%s(prefix_long=%r, prefix_short=%r, assignment=%r, localization=%r)" % (
            type(self).__name__, self._prefix_long, self._prefix_short, self._assignment, self._localization
        )


__all__ = (
    "ParserSettings",
)
