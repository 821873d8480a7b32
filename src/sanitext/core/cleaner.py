"""Structural markup cleanup, applied to serialized markup after the tree walk.

Removes redundant whitespace between tags, repeated line breaks and empty or
blank paragraphs. An explicitly empty ``<p></p>`` is the canonical blank line
and survives; runs of them collapse to one.
"""

from __future__ import annotations

import logging
import re

from sanitext.core.options import SanitizeOptions

_log = logging.getLogger(__name__)

_LINE_ENDING_RE = re.compile(r"\r\n?")
_BLANK_LINES_RE = re.compile(r"\n{3,}")
_INTER_TAG_SPACE_RE = re.compile(r">\s+<")
_REPEATED_BR_RE = re.compile(r"(?:<br\s*/?>\s*){2,}", re.IGNORECASE)
_BR_ONLY_PARAGRAPH_RE = re.compile(r"<p><br\s*/?></p>", re.IGNORECASE)
_BLANK_PARAGRAPH_RE = re.compile(r"<p>(?:\s|&nbsp;|&#160;|&#xa0;)+</p>", re.IGNORECASE)
_REPEATED_EMPTY_PARAGRAPH_RE = re.compile(r"(?:<p>\s*</p>){2,}", re.IGNORECASE)


def _clean_once(markup: str, options: SanitizeOptions) -> str:
    if options.collapse_blank_lines:
        markup = _LINE_ENDING_RE.sub("\n", markup)
        markup = _BLANK_LINES_RE.sub("\n\n", markup)

    markup = _INTER_TAG_SPACE_RE.sub("><", markup)
    markup = _REPEATED_BR_RE.sub("<br>", markup)
    markup = _BR_ONLY_PARAGRAPH_RE.sub("<p></p>", markup)
    markup = _BLANK_PARAGRAPH_RE.sub("", markup)
    markup = _REPEATED_EMPTY_PARAGRAPH_RE.sub("<p></p>", markup)
    return markup


def clean_markup(markup: str, options: SanitizeOptions | None = None) -> str:
    """Return *markup* with redundant structure removed.

    The rule chain is re-applied until the result is stable, so that
    ``clean_markup(clean_markup(m)) == clean_markup(m)`` for any input.
    """
    if not markup:
        return ""
    if options is None:
        options = SanitizeOptions()

    # Every rule shortens the markup (CR -> LF keeps the length once), so this
    # loop always reaches a fixed point.
    passes = 0
    while True:
        passes += 1
        cleaned = _clean_once(markup, options)
        if cleaned == markup:
            _log.debug("Markup cleanup settled after %d pass(es)", passes)
            return markup
        markup = cleaned
