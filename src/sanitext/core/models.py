"""Core data model dataclasses.

Keep this module free of side-effects and Qt imports so it can be used in
tests, the web app and CLI contexts without a display.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class CharClass(str, Enum):
    CLEAN = "clean"
    ZERO_WIDTH = "zero_width"
    BIDI_CONTROL = "bidi_control"
    NBSP_LIKE = "nbsp_like"
    EM_DASH = "em_dash"
    NON_ASCII_OTHER = "non_ascii_other"


class OverlayState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    RENDERING = "rendering"


# ---------------------------------------------------------------------------
# Finding
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Finding:
    """One flagged character at a position in the document's text content."""

    offset: int  # index into the concatenated text of all text leaves
    char: str
    char_class: CharClass
    label: str

    @property
    def codepoint(self) -> str:
        return f"U+{ord(self.char):04X}"

    @property
    def unicode_name(self) -> str:
        return unicodedata.name(self.char, "?")

    def to_dict(self) -> dict:
        return {
            "offset": self.offset,
            "char": self.char,
            "codepoint": self.codepoint,
            "name": self.unicode_name,
            "class": self.char_class.value,
            "label": self.label,
        }
