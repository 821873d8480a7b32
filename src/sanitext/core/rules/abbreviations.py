"""Latin abbreviation expansion (gated by ``expand_latin_abbrev``)."""

from __future__ import annotations

from sanitext.core.charsets import LATIN_ABBREVIATIONS
from sanitext.core.rule_base import TextRule, registry


@registry.register
class LatinAbbreviationRule(TextRule):
    """Expand e.g., i.e., etc., vs., cf. and et al. into plain English.

    Each pattern carries its own case sensitivity; "e.g." and "i.e." only
    accept a capital first letter, the others ignore case entirely.
    """

    rule_id = "abbreviations.latin"
    name = "Latin abbreviations"
    option = "expand_latin_abbrev"

    def apply(self, text: str) -> str:
        for pattern, replacement in LATIN_ABBREVIATIONS:
            text = pattern.sub(replacement, text)
        return text
