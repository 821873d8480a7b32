"""SanitizeOptions: immutable snapshot of the sanitizer's boolean flags.

Every pass receives one snapshot, captured once at call time. Toggling a flag
never mutates a snapshot; it produces a new one via ``with_flag()``.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Mapping

_log = logging.getLogger(__name__)

# External (camelCase) flag names → attribute names
OPTION_ALIASES: dict[str, str] = {
    "removeZeroWidth": "remove_zero_width",
    "removeBidi": "remove_bidi",
    "normalizeSpaces": "normalize_spaces",
    "collapseBlankLines": "collapse_blank_lines",
    "expandLatinAbbrev": "expand_latin_abbrev",
}


@dataclass(frozen=True)
class SanitizeOptions:
    remove_zero_width: bool = True
    remove_bidi: bool = True
    normalize_spaces: bool = True
    collapse_blank_lines: bool = True
    expand_latin_abbrev: bool = True

    @classmethod
    def names(cls) -> list[str]:
        """Return the flag attribute names in declaration order."""
        return [f.name for f in fields(cls)]

    @classmethod
    def resolve_name(cls, name: str) -> str:
        """Map a camelCase or snake_case flag name to the attribute name.

        Raises:
            ValueError: if *name* is not a known flag.
        """
        attr = OPTION_ALIASES.get(name, name)
        if attr not in cls.names():
            raise ValueError(f"Unknown option: {name!r}")
        return attr

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any] | None,
        base: "SanitizeOptions | None" = None,
        strict: bool = False,
    ) -> "SanitizeOptions":
        """Build a snapshot from a mapping of flag name → bool.

        Flags missing from *data* keep the value of *base* (defaults if None).
        Unknown names and non-boolean values raise ``ValueError`` when
        *strict*, otherwise they are logged and ignored.
        """
        base = base or cls()
        if not data:
            return base
        changes: dict[str, bool] = {}
        for key, value in data.items():
            try:
                attr = cls.resolve_name(key)
            except ValueError:
                if strict:
                    raise
                _log.warning("Ignoring unknown option %r", key)
                continue
            if not isinstance(value, bool):
                if strict:
                    raise ValueError(f"Option {key!r} must be true or false, got {value!r}")
                _log.warning("Ignoring non-boolean value %r for option %r", value, key)
                continue
            changes[attr] = value
        return replace(base, **changes)

    def with_flag(self, name: str, value: bool) -> "SanitizeOptions":
        return replace(self, **{self.resolve_name(name): bool(value)})

    def is_enabled(self, name: str | None) -> bool:
        """True when *name* is None (ungated) or the named flag is set."""
        if name is None:
            return True
        return bool(getattr(self, self.resolve_name(name)))

    def to_dict(self, camel_case: bool = False) -> dict[str, bool]:
        data = asdict(self)
        if not camel_case:
            return data
        reverse = {v: k for k, v in OPTION_ALIASES.items()}
        return {reverse[k]: v for k, v in data.items()}
