#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2all/roles.py
"""Semantic classification of markup elements.

Every element is mapped to exactly one :class:`Role` before a renderer
dispatches on it. :func:`classify` looks only at the tag name, so the same
tag always yields the same role; :func:`effective_role` additionally
promotes generic containers explicitly designated as a page header or footer.

Examples
--------
    >>> classify("H2")
    <Role.HEADING_2: 'heading_2'>
    >>> classify("custom-widget")
    <Role.TRANSPARENT: 'transparent'>

"""

from __future__ import annotations

from enum import Enum

from bs4.element import Tag

from html2all.constants import FOOTER_REGION_MARKERS, HEADER_REGION_MARKERS, SKIPPED_TAGS
from html2all.utils.html_utils import get_attr, tag_name


class Role(Enum):
    """Closed set of semantic roles an element can play."""

    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    HEADING_4 = "heading_4"
    HEADING_5 = "heading_5"
    HEADING_6 = "heading_6"
    PARAGRAPH = "paragraph"
    BLOCK = "block"
    INLINE = "inline"
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    FONT = "font"
    ANCHOR = "anchor"
    IMAGE = "image"
    LINE_BREAK = "line_break"
    RULE = "rule"
    ORDERED_LIST = "ordered_list"
    UNORDERED_LIST = "unordered_list"
    LIST_ITEM = "list_item"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_DATA_CELL = "table_data_cell"
    TABLE_HEADER_CELL = "table_header_cell"
    CENTER = "center"
    HEADER_REGION = "header_region"
    FOOTER_REGION = "footer_region"
    CODE_INLINE = "code_inline"
    CODE_BLOCK = "code_block"
    QUOTE = "quote"
    SKIP = "skip"
    TRANSPARENT = "transparent"

    @property
    def heading_level(self) -> int | None:
        """Heading level 1-6 for heading roles, otherwise None."""
        return _HEADING_LEVELS.get(self)

    @property
    def is_heading(self) -> bool:
        return self in _HEADING_LEVELS

    @property
    def is_list(self) -> bool:
        return self in (Role.ORDERED_LIST, Role.UNORDERED_LIST)

    @property
    def is_cell(self) -> bool:
        return self in (Role.TABLE_DATA_CELL, Role.TABLE_HEADER_CELL)


_HEADING_LEVELS: dict[Role, int] = {
    Role.HEADING_1: 1,
    Role.HEADING_2: 2,
    Role.HEADING_3: 3,
    Role.HEADING_4: 4,
    Role.HEADING_5: 5,
    Role.HEADING_6: 6,
}

TAG_ROLES: dict[str, Role] = {
    "h1": Role.HEADING_1,
    "h2": Role.HEADING_2,
    "h3": Role.HEADING_3,
    "h4": Role.HEADING_4,
    "h5": Role.HEADING_5,
    "h6": Role.HEADING_6,
    "p": Role.PARAGRAPH,
    "html": Role.BLOCK,
    "body": Role.BLOCK,
    "section": Role.BLOCK,
    "article": Role.BLOCK,
    "nav": Role.BLOCK,
    "main": Role.BLOCK,
    "div": Role.INLINE,
    "span": Role.INLINE,
    "b": Role.BOLD,
    "strong": Role.BOLD,
    "i": Role.ITALIC,
    "em": Role.ITALIC,
    "u": Role.UNDERLINE,
    "font": Role.FONT,
    "a": Role.ANCHOR,
    "img": Role.IMAGE,
    "br": Role.LINE_BREAK,
    "hr": Role.RULE,
    "ol": Role.ORDERED_LIST,
    "ul": Role.UNORDERED_LIST,
    "li": Role.LIST_ITEM,
    "table": Role.TABLE,
    "tr": Role.TABLE_ROW,
    "td": Role.TABLE_DATA_CELL,
    "th": Role.TABLE_HEADER_CELL,
    "center": Role.CENTER,
    "header": Role.HEADER_REGION,
    "footer": Role.FOOTER_REGION,
    "code": Role.CODE_INLINE,
    "pre": Role.CODE_BLOCK,
    "blockquote": Role.QUOTE,
}
TAG_ROLES.update({tag: Role.SKIP for tag in SKIPPED_TAGS})

# Roles that an explicit header/footer designation may override
_REGION_CANDIDATES = frozenset({Role.BLOCK, Role.INLINE, Role.TRANSPARENT})


def classify(tag: str) -> Role:
    """Map a tag name to its role.

    Parameters
    ----------
    tag : str
        Tag name in any letter case

    Returns
    -------
    Role
        The tag's role; unknown tags are ``Role.TRANSPARENT``

    """
    return TAG_ROLES.get(tag.lower(), Role.TRANSPARENT)


def _region_designation(element: Tag) -> Role | None:
    markers = {get_attr(element, "role").strip().lower(), get_attr(element, "id").strip().lower()}
    markers.update(token.lower() for token in get_attr(element, "class").split())
    if markers & HEADER_REGION_MARKERS:
        return Role.HEADER_REGION
    if markers & FOOTER_REGION_MARKERS:
        return Role.FOOTER_REGION
    return None


def effective_role(element: Tag) -> Role:
    """Return the role a renderer should dispatch on for ``element``.

    Generic containers (block, inline and unknown tags) carrying a
    ``role="banner"``/``role="contentinfo"`` attribute, or an ``id`` or
    ``class`` token of ``header``/``footer``, are treated as page regions.
    Every other element gets ``classify(element.name)``.
    """
    role = classify(tag_name(element))
    if role in _REGION_CANDIDATES:
        return _region_designation(element) or role
    return role


__all__ = ["Role", "TAG_ROLES", "classify", "effective_role"]
