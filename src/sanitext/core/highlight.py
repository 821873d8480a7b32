"""Highlight overlay: wrap problematic characters in removable markers.

A marker is ``<span class="highlight-invisible" title="<reason>">c</span>``
around exactly one character. ``clear_highlights()`` is the exact inverse of
``highlight_chars()``: after clearing, the text content of the tree is
identical to what it was before marking.
"""

from __future__ import annotations

import copy
import logging

from bs4 import BeautifulSoup, NavigableString, Tag

from sanitext.core.classify import classify_char, needs_scan
from sanitext.core.models import CharClass, Finding
from sanitext.core.options import SanitizeOptions
from sanitext.core.tree import iter_text_nodes, owner_soup, serialize

_log = logging.getLogger(__name__)

MARKER_CLASS = "highlight-invisible"


def is_marker(node) -> bool:
    return (
        isinstance(node, Tag)
        and node.name == "span"
        and MARKER_CLASS in node.get_attribute_list("class")
    )


def count_markers(root: Tag) -> int:
    return len(root.find_all(is_marker))


def clear_highlights(root: Tag) -> int:
    """Replace every marker under *root* with a plain text node.

    Adjacent text nodes are merged afterwards so the tree has the same shape
    as before marking.

    Returns:
        Number of markers removed.
    """
    markers = root.find_all(is_marker)
    for marker in markers:
        marker.replace_with(NavigableString(marker.get_text()))
    if markers:
        root.smooth()
    return len(markers)


def _make_marker(soup: BeautifulSoup, ch: str, label: str) -> Tag:
    marker = soup.new_tag("span", attrs={"class": MARKER_CLASS, "title": label})
    marker.string = ch
    return marker


def highlight_chars(root: Tag, options: SanitizeOptions | None = None) -> int:
    """Wrap every flagged character under *root* in a marker.

    Runs of clean characters stay together in one text node. Text already
    inside a marker is skipped, so markers never nest.

    Returns:
        Number of markers inserted.
    """
    if options is None:
        options = SanitizeOptions()
    soup = owner_soup(root) or BeautifulSoup("", "html.parser")

    inserted = 0
    for leaf in list(iter_text_nodes(root)):
        text = str(leaf)
        if not needs_scan(text) or is_marker(leaf.parent):
            continue

        pieces: list = []
        run: list[str] = []
        flagged = 0
        for ch in text:
            _, label = classify_char(ch, options)
            if label is None:
                run.append(ch)
                continue
            if run:
                pieces.append(NavigableString("".join(run)))
                run = []
            pieces.append(_make_marker(soup, ch, label))
            flagged += 1

        if not flagged:
            continue
        if run:
            pieces.append(NavigableString("".join(run)))
        leaf.replace_with(*pieces)
        inserted += flagged

    _log.debug("Inserted %d highlight marker(s)", inserted)
    return inserted


def collect_findings(root: Tag, options: SanitizeOptions | None = None) -> list[Finding]:
    """List every character the overlay would flag, with text offsets.

    Works on marked and unmarked trees alike, since markers keep their
    character as a text leaf.
    """
    if options is None:
        options = SanitizeOptions()

    findings: list[Finding] = []
    offset = 0
    for leaf in iter_text_nodes(root):
        text = str(leaf)
        if needs_scan(text):
            for i, ch in enumerate(text):
                char_class, label = classify_char(ch, options)
                if char_class is not CharClass.CLEAN:
                    findings.append(Finding(offset + i, ch, char_class, label))
        offset += len(text)
    return findings


def extract_clean_markup(root: Tag) -> str:
    """Serialize *root* with every marker stripped.

    Works on a copy: the live tree keeps its markers.
    """
    clone = copy.copy(root)
    clear_highlights(clone)
    return serialize(clone)
