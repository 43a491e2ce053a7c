#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2all/utils/html_utils.py
"""Helpers for reading parsed HTML trees.

All renderers read the BeautifulSoup tree through these helpers: node type
checks, case-insensitive attribute access, whitespace normalization, colour
parsing and text flattening. None of them mutate the tree.

"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterator

from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from html2all.constants import DEFAULT_TEXT_COLOR, RGB

logger = logging.getLogger(__name__)

_HEX_COLOR_RE = re.compile(r"^[0-9a-fA-F]{6}$")


def is_text_node(node: PageElement) -> bool:
    """Return True for character data, excluding comments, doctypes and CDATA."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def is_element(node: PageElement) -> bool:
    """Return True for element nodes."""
    return isinstance(node, Tag)


def tag_name(node: Tag) -> str:
    """Return the lower-cased tag name of an element."""
    return (node.name or "").lower()


def iter_elements(node: Tag) -> Iterator[Tag]:
    """Yield the direct element children of ``node`` in document order."""
    for child in node.children:
        if isinstance(child, Tag):
            yield child


def _attr_value(value: Any) -> str:
    # bs4 returns multi-valued attributes such as class as lists
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    return str(value)


def get_attr_map(node: Tag) -> dict[str, str]:
    """Convert an element's attributes to a dict keyed by lower-cased name.

    Parameters
    ----------
    node : Tag
        Element whose attributes are read

    Returns
    -------
    dict[str, str]
        Attribute values by lower-cased attribute name. When two attributes
        differ only in case, the last one wins.

    """
    return {str(key).lower(): _attr_value(value) for key, value in node.attrs.items()}


def get_attr(node: Tag, key: str, default: str = "") -> str:
    """Look up a single attribute case-insensitively."""
    wanted = key.lower()
    for name, value in node.attrs.items():
        if str(name).lower() == wanted:
            return _attr_value(value)
    return default


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces, keeping boundary spaces.

    A leading or trailing whitespace run in ``text`` is kept as a single
    space so that adjacent inline runs stay separated.

    Examples
    --------
        >>> collapse_whitespace(" a   b  ")
        ' a b '
        >>> collapse_whitespace("singleword")
        'singleword'

    """
    if not text:
        return ""
    words = text.split()
    if not words:
        return " "
    result = " ".join(words)
    if text[0].isspace():
        result = " " + result
    if text[-1].isspace():
        result = result + " "
    return result


def normalize_hex_color(value: str | None) -> str | None:
    """Return the upper-cased 6-digit hex of a colour attribute, or None if invalid."""
    if not value:
        return None
    cleaned = value.strip()
    if cleaned.startswith("#"):
        cleaned = cleaned[1:]
    if not _HEX_COLOR_RE.match(cleaned):
        return None
    return cleaned.upper()


def parse_hex_color(value: str | None, default: RGB = DEFAULT_TEXT_COLOR) -> RGB:
    """Convert a hex colour attribute to an RGB tuple.

    Parameters
    ----------
    value : str or None
        Colour with or without a leading ``#``
    default : tuple of int, default (0, 0, 0)
        Returned when ``value`` is not exactly six hex digits

    Returns
    -------
    tuple of int
        (red, green, blue) components

    Examples
    --------
        >>> parse_hex_color("#FF0000")
        (255, 0, 0)
        >>> parse_hex_color("#FFF")
        (0, 0, 0)

    """
    cleaned = normalize_hex_color(value)
    if cleaned is None:
        if value:
            logger.debug(f"Ignoring invalid colour value {value!r}")
        return default
    return int(cleaned[0:2], 16), int(cleaned[2:4], 16), int(cleaned[4:6], 16)


def extract_text(node: PageElement) -> str:
    """Concatenate all character data below ``node`` in document order."""
    if is_text_node(node):
        return str(node)
    if not isinstance(node, Tag):
        return ""
    return "".join(extract_text(child) for child in node.children)


def extract_flat_text(node: PageElement) -> str:
    """Return the subtree text collapsed to a single stripped line."""
    return collapse_whitespace(extract_text(node)).strip()


def extract_lines(node: Tag) -> list[str]:
    """Collect the stripped, non-empty text nodes below ``node`` as lines.

    Every text node becomes its own line; elements, including ``<br>``,
    only separate nodes.
    """
    lines: list[str] = []
    for child in node.children:
        if is_text_node(child):
            text = str(child).strip()
            if text:
                lines.append(text)
        elif isinstance(child, Tag):
            lines.extend(extract_lines(child))
    return lines


__all__ = [
    "collapse_whitespace",
    "extract_flat_text",
    "extract_lines",
    "extract_text",
    "get_attr",
    "get_attr_map",
    "is_element",
    "is_text_node",
    "iter_elements",
    "normalize_hex_color",
    "parse_hex_color",
    "tag_name",
]
