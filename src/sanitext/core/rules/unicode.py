"""Unicode hygiene rules.

Applied first in the pipeline:
- Canonical composition (NFC)
- Zero-width characters (gated by ``remove_zero_width``)
- BiDi embedding / override / isolate controls (gated by ``remove_bidi``)
- Non-breaking space variants (gated by ``normalize_spaces``)
"""

from __future__ import annotations

import unicodedata

from sanitext.core.charsets import BIDI_CONTROL_RE, NBSP_LIKE_RE, ZERO_WIDTH_RE
from sanitext.core.rule_base import TextRule, registry


@registry.register
class NFCRule(TextRule):
    rule_id = "unicode.nfc"
    name = "Canonical composition (NFC)"

    def apply(self, text: str) -> str:
        return unicodedata.normalize("NFC", text)


@registry.register
class ZeroWidthRule(TextRule):
    """Delete ZWSP, ZWNJ, ZWJ and BOM-as-ZWNBSP."""

    rule_id = "unicode.zero_width"
    name = "Zero-width characters"
    option = "remove_zero_width"

    def apply(self, text: str) -> str:
        return ZERO_WIDTH_RE.sub("", text)


@registry.register
class BidiControlRule(TextRule):
    rule_id = "unicode.bidi"
    name = "BiDi control characters"
    option = "remove_bidi"

    def apply(self, text: str) -> str:
        return BIDI_CONTROL_RE.sub("", text)


@registry.register
class NonBreakingSpaceRule(TextRule):
    rule_id = "unicode.spaces"
    name = "Non-breaking spaces"
    option = "normalize_spaces"

    def apply(self, text: str) -> str:
        return NBSP_LIKE_RE.sub(" ", text)
