"""Dash rules. Always applied.

The em dash rule must run before the generic dash rule: the em dash is not
part of DASH_RE, so its "; " replacement is never turned into a hyphen.
"""

from __future__ import annotations

from sanitext.core.charsets import DASH_RE, EM_DASH_RE, SEMICOLON_SPACES_RE
from sanitext.core.rule_base import TextRule, registry


@registry.register
class EmDashRule(TextRule):
    """Replace each em dash and its surrounding whitespace with "; "."""

    rule_id = "dashes.em_dash"
    name = "Em dash to semicolon"

    def apply(self, text: str) -> str:
        text = EM_DASH_RE.sub("; ", text)
        # exactly one space after any semicolon
        return SEMICOLON_SPACES_RE.sub("; ", text)


@registry.register
class DashVariantsRule(TextRule):
    rule_id = "dashes.other_dashes"
    name = "Dash variants to hyphen"

    def apply(self, text: str) -> str:
        return DASH_RE.sub("-", text)
