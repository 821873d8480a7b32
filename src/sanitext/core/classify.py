"""Per-character classification for the highlight overlay.

Classification is an explicit ordered list of rules evaluated top to bottom;
the first enabled rule whose predicate matches wins. The non-ASCII fallback
sits last, so it only fires when nothing more specific matched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from sanitext.core.charsets import BIDI_HIGHLIGHT_RE, EM_DASH, NBSP_LIKE_CHARS, ZERO_WIDTH_CHARS
from sanitext.core.models import CharClass
from sanitext.core.options import SanitizeOptions


@dataclass(frozen=True)
class ClassRule:
    char_class: CharClass
    label: str
    predicate: Callable[[str], bool]
    #: SanitizeOptions flag gating this rule. None = always active.
    option: str | None = None


CLASS_RULES: list[ClassRule] = [
    # Invisible in the editor whatever the flags say
    ClassRule(
        CharClass.ZERO_WIDTH,
        "Zero-width character",
        lambda ch: ch in ZERO_WIDTH_CHARS,
    ),
    ClassRule(
        CharClass.BIDI_CONTROL,
        "BiDi / Direction marker",
        lambda ch: BIDI_HIGHLIGHT_RE.match(ch) is not None,
        option="remove_bidi",
    ),
    ClassRule(
        CharClass.NBSP_LIKE,
        "Non-breaking space",
        lambda ch: ch in NBSP_LIKE_CHARS,
        option="normalize_spaces",
    ),
    ClassRule(
        CharClass.EM_DASH,
        "EM DASH — (will become '; ' )",
        lambda ch: ch == EM_DASH,
    ),
    ClassRule(
        CharClass.NON_ASCII_OTHER,
        "Non-ASCII character",
        lambda ch: ord(ch) > 127,
    ),
]


def classify_char(
    ch: str, options: SanitizeOptions | None = None
) -> tuple[CharClass, str | None]:
    """Return ``(class, label)`` for *ch*; ``(CLEAN, None)`` if unflagged."""
    if options is None:
        options = SanitizeOptions()
    if ord(ch) < 128:
        return CharClass.CLEAN, None
    for rule in CLASS_RULES:
        if options.is_enabled(rule.option) and rule.predicate(ch):
            return rule.char_class, rule.label
    return CharClass.CLEAN, None


def needs_scan(text: str) -> bool:
    """Cheap pre-check: only non-ASCII characters can ever be flagged."""
    return not text.isascii()
