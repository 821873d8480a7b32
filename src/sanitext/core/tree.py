"""Document tree helpers and the normalization tree walk.

The document tree is a BeautifulSoup tree built with the stdlib
``html.parser`` backend, which keeps fragments as-is (no implied
``<html>``/``<body>`` wrapper). Text leaves are plain ``NavigableString``
instances; comments, CDATA and script/style strings are subclasses and are
never treated as text.
"""

from __future__ import annotations

import logging
from typing import Iterator

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from sanitext.core.normalizer import normalize
from sanitext.core.options import SanitizeOptions

_log = logging.getLogger(__name__)

#: Serialization close to a browser's innerHTML: ``<br>`` instead of
#: ``<br/>``, and only ``&``, ``<``, ``>`` escaped so that sanitized
#: characters stay visible in the output.
MARKUP_FORMATTER = HTMLFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
)


def parse_fragment(markup: str) -> BeautifulSoup:
    """Parse an HTML fragment into a document tree."""
    return BeautifulSoup(markup or "", "html.parser")


def serialize(root: Tag) -> str:
    """Serialize the children of *root* (the equivalent of innerHTML)."""
    return root.decode_contents(formatter=MARKUP_FORMATTER)


def owner_soup(node) -> BeautifulSoup | None:
    """Return the BeautifulSoup object *node* belongs to, if any."""
    while node is not None:
        if isinstance(node, BeautifulSoup):
            return node
        node = node.parent
    return None


def is_text_leaf(node) -> bool:
    return type(node) is NavigableString


def iter_text_nodes(root: Tag) -> Iterator[NavigableString]:
    """Yield every text leaf under *root* in document (pre-)order."""
    for node in root.descendants:
        if is_text_leaf(node):
            yield node


def text_content(root: Tag) -> str:
    """Concatenated text of every text leaf (the equivalent of textContent)."""
    return "".join(iter_text_nodes(root))


def walk_and_normalize(root: Tag, options: SanitizeOptions | None = None) -> int:
    """Normalize every text leaf under *root* in place.

    Element tags and attributes are left untouched. Leaves are collected
    before any replacement so that each one is visited exactly once.

    Returns:
        Number of text leaves whose content changed.
    """
    if options is None:
        options = SanitizeOptions()

    changed = 0
    for leaf in list(iter_text_nodes(root)):
        original = str(leaf)
        updated = normalize(original, options)
        if updated != original:
            leaf.replace_with(NavigableString(updated))
            changed += 1
    _log.debug("Normalized %d text node(s)", changed)
    return changed
