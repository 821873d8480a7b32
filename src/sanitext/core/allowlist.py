"""Allowlist filter: the last pass before markup is considered safe.

Uses nh3 (Rust-backed ammonia bindings). Disallowed tags are unwrapped so
their text survives; script and style elements are dropped with their
content; every attribute except ``class`` is removed, which takes event
handlers and ``javascript:`` links with it.
"""

from __future__ import annotations

import logging

import nh3

_log = logging.getLogger(__name__)

ALLOWED_TAGS: frozenset[str] = frozenset(
    {
        "p", "br", "div", "span",
        "b", "strong", "i", "em", "u",
        "ul", "ol", "li",
    }
)

# "class" carries list/formatting classes from the editor
ALLOWED_ATTRIBUTES: frozenset[str] = frozenset({"class"})


def scrub_surrogates(text: str) -> str:
    """Replace lone UTF-16 surrogates (valid in JSON, not encodable as UTF-8) with "?"."""
    return text.encode("utf-8", "replace").decode("utf-8")


def restrict(markup: str) -> str:
    """Return *markup* reduced to the allowed tags and attributes."""
    if not markup or not isinstance(markup, str):
        return ""
    return nh3.clean(
        scrub_surrogates(markup),
        tags=set(ALLOWED_TAGS),
        attributes={tag: set(ALLOWED_ATTRIBUTES) for tag in ALLOWED_TAGS},
        # no <a> survives, so ammonia must not try to add rel="..."
        link_rel=None,
    )
