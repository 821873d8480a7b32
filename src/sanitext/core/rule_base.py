"""TextRule base class and the ordered RuleRegistry singleton."""

from __future__ import annotations

from abc import ABC, abstractmethod


class TextRule(ABC):
    """Abstract base for all text normalization rules."""

    #: Stable unique identifier, e.g. "unicode.zero_width"
    rule_id: str

    #: Human-readable name
    name: str = ""

    #: SanitizeOptions flag gating this rule. None = always applied.
    option: str | None = None

    @abstractmethod
    def apply(self, text: str) -> str:
        """Return the rewritten text. Must not raise on any str input."""


class RuleRegistry:
    """Singleton registry of TextRule classes.

    Unlike a lookup table, order matters here: rules are returned in
    registration order, which is the normalization pipeline order. Later rules
    may consume text produced by earlier ones.
    """

    _instance: "RuleRegistry | None" = None
    _rules: dict[str, type[TextRule]]

    def __new__(cls) -> "RuleRegistry":
        if cls._instance is None:
            inst = super().__new__(cls)
            inst._rules = {}
            cls._instance = inst
        return cls._instance

    def register(self, cls: type[TextRule]) -> type[TextRule]:
        """Register a TextRule class. Can be used as a decorator."""
        if cls.rule_id in self._rules:
            raise ValueError(f"Duplicate rule id: {cls.rule_id!r}")
        self._rules[cls.rule_id] = cls
        return cls

    def all_ids(self) -> list[str]:
        return list(self._rules.keys())

    def all_rules(self) -> list[type[TextRule]]:
        return list(self._rules.values())


# Module-level convenience instance
registry = RuleRegistry()
