"""The full sanitize pipeline: tree walk → structural cleanup → allowlist."""

from __future__ import annotations

import logging

from sanitext.core.allowlist import restrict
from sanitext.core.cleaner import clean_markup
from sanitext.core.options import SanitizeOptions
from sanitext.core.tree import parse_fragment, serialize, walk_and_normalize

_log = logging.getLogger(__name__)


def sanitize_markup(markup: str, options: SanitizeOptions | None = None) -> str:
    """Return sanitized markup for the HTML fragment *markup*.

    *markup* must already be free of highlight markers; callers holding a
    live, highlighted tree pass ``extract_clean_markup(tree)``.
    """
    if options is None:
        options = SanitizeOptions()

    soup = parse_fragment(markup)
    changed = walk_and_normalize(soup, options)
    cleaned = clean_markup(serialize(soup), options)
    result = restrict(cleaned)
    _log.debug(
        "Sanitized %d -> %d chars (%d text node(s) rewritten)",
        len(markup or ""),
        len(result),
        changed,
    )
    return result
