"""Shared character-set constants.

Used by both the text rules (core/rules/) and the highlight classifier
(core/classify.py) so that what gets highlighted matches what the sanitizer
rewrites.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Invisible / control code points
# ---------------------------------------------------------------------------

# ZWSP, ZWNJ, ZWJ, BOM used as zero-width no-break space
ZERO_WIDTH_CHARS = "\u200b\u200c\u200d\ufeff"
ZERO_WIDTH_RE = re.compile(r"[\u200b\u200c\u200d\ufeff]")

# Explicit directional embeddings/overrides (LRE..RLO) and isolates (LRI..PDI)
BIDI_CONTROL_RE = re.compile(r"[\u202a-\u202e\u2066-\u2069]")

# The highlighter also flags the implicit marks LRM/RLM, which the
# normalizer leaves alone.
BIDI_HIGHLIGHT_RE = re.compile(r"[\u202a-\u202e\u2066-\u2069\u200e\u200f]")

# ---------------------------------------------------------------------------
# Spaces and dashes
# ---------------------------------------------------------------------------

NBSP_LIKE_CHARS = "\u00a0\u202f"
NBSP_LIKE_RE = re.compile(r"[\u00a0\u202f]")

EM_DASH = "\u2014"
EM_DASH_RE = re.compile(r"\s*\u2014\s*")
SEMICOLON_SPACES_RE = re.compile(r";\s+")

# Hyphen, non-breaking hyphen, figure dash, en dash, horizontal bar, minus
# sign, small hyphen-minus, full-width hyphen-minus, prolonged sound mark,
# hyphen bullet, two- and three-em dash.
DASH_CHARS = (
    "\u2010\u2011\u2012\u2013\u2015\u2212\ufe63\uff0d\u30fc\u2043\u2e3a\u2e3b"
)
DASH_RE = re.compile(
    r"[\u2010\u2011\u2012\u2013\u2015\u2212\ufe63\uff0d\u30fc\u2043\u2e3a\u2e3b]"
)

# ---------------------------------------------------------------------------
# Latin / English abbreviations → expansions (applied in this order)
# ---------------------------------------------------------------------------

LATIN_ABBREVIATIONS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\b[eE]\.g\."), "for example"),
    (re.compile(r"\b[iI]\.e\."), "that is"),
    (re.compile(r"\betc\.", re.IGNORECASE), "and so on"),
    (re.compile(r"\bvs\.", re.IGNORECASE), "versus"),
    (re.compile(r"\bcf\.", re.IGNORECASE), "compare"),
    (re.compile(r"\bet al\.", re.IGNORECASE), "and others"),
]
