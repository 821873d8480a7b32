"""TextNormalizer: runs the ordered text rules against a string.

The normalizer is stateless: the option snapshot is passed to every call.
"""

from __future__ import annotations

import logging

_log = logging.getLogger(__name__)

# Import rules module to trigger all @registry.register decorators
import sanitext.core.rules  # noqa: F401
from sanitext.core.options import SanitizeOptions
from sanitext.core.rule_base import RuleRegistry, TextRule, registry


class TextNormalizer:
    """Apply the registered text rules in pipeline order.

    Usage::

        normalizer = TextNormalizer()
        clean = normalizer.normalize("A — B", SanitizeOptions())
    """

    def __init__(self, rule_registry: RuleRegistry | None = None) -> None:
        self._registry = rule_registry or registry
        self._rules: list[TextRule] = [cls() for cls in self._registry.all_rules()]

    @property
    def rules(self) -> list[TextRule]:
        return list(self._rules)

    def normalize(self, text: str, options: SanitizeOptions | None = None) -> str:
        """Return *text* rewritten by every rule enabled in *options*.

        Never raises: a failing rule is logged and skipped, leaving the text
        as the previous rule produced it.
        """
        if not text:
            return ""
        if options is None:
            options = SanitizeOptions()

        for rule in self._rules:
            if not options.is_enabled(rule.option):
                continue
            try:
                text = rule.apply(text)
            except Exception as exc:
                # Never abort the whole pass because one rule fails
                _log.exception("Rule %s failed: %s", rule.rule_id, exc)
        return text


_default_normalizer: TextNormalizer | None = None


def normalize(text: str, options: SanitizeOptions | None = None) -> str:
    """Normalize *text* with the default rule pipeline."""
    global _default_normalizer
    if _default_normalizer is None:
        _default_normalizer = TextNormalizer()
    return _default_normalizer.normalize(text, options)
