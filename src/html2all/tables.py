#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2all/tables.py
"""Wrapper-transparent collection of table rows and cells.

Real-world markup often wraps rows and cells in section or layout elements
(``<tbody>``, ``<div>`` ...). :func:`collect_rows` looks through such
wrappers so every renderer sees the same rows and cells in document order.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping

from bs4.element import Tag

from html2all.roles import Role, effective_role
from html2all.utils.html_utils import extract_flat_text, get_attr_map, iter_elements

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableCell:
    """A data or header cell found in a row."""

    element: Tag
    is_header: bool
    attrs: dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        """The cell's text flattened to one line."""
        return extract_flat_text(self.element)


@dataclass(frozen=True)
class TableRow:
    """A row with at least one cell."""

    element: Tag
    cells: tuple[TableCell, ...]
    attrs: dict[str, str] = field(default_factory=dict)

    @property
    def is_header(self) -> bool:
        """True when every cell in the row is a header cell."""
        return all(cell.is_header for cell in self.cells)

    def __len__(self) -> int:
        return len(self.cells)


def _collect_cells(container: Tag, cells: list[TableCell]) -> None:
    for child in iter_elements(container):
        role = effective_role(child)
        if role.is_cell:
            cells.append(TableCell(element=child, is_header=role is Role.TABLE_HEADER_CELL, attrs=get_attr_map(child)))
        elif role not in (Role.TABLE, Role.TABLE_ROW):
            _collect_cells(child, cells)


def _collect_rows(container: Tag, rows: list[TableRow]) -> None:
    for child in iter_elements(container):
        role = effective_role(child)
        if role is Role.TABLE_ROW:
            cells: list[TableCell] = []
            _collect_cells(child, cells)
            if cells:
                rows.append(TableRow(element=child, cells=tuple(cells), attrs=get_attr_map(child)))
        elif role is not Role.TABLE:
            _collect_rows(child, rows)


def collect_rows(table: Tag) -> list[TableRow]:
    """Find the rows of ``table`` and the cells of each row.

    Parameters
    ----------
    table : Tag
        The table element

    Returns
    -------
    list of TableRow
        Rows in document order. Rows without cells are dropped, and nested
        tables are left to the cell that contains them.

    """
    rows: list[TableRow] = []
    _collect_rows(table, rows)
    return rows


def column_count(rows: list[TableRow]) -> int:
    """Return the number of cells in the longest row."""
    return max((len(row) for row in rows), default=0)


def has_border(attrs: Mapping[str, str]) -> bool:
    """Return True when a table's ``border`` attribute asks for a grid.

    An absent attribute or a numeric zero means no border. A present but
    non-numeric value, including the bare ``<table border>`` form, counts
    as bordered.
    """
    if "border" not in attrs:
        return False
    value = attrs["border"].strip()
    try:
        return float(value) != 0
    except ValueError:
        return True


def width_fraction(attrs: Mapping[str, str]) -> float:
    """Return a table's ``width="N%"`` attribute as a fraction of the available width.

    Missing, absolute or malformed widths give 1.0; the result is clamped
    to the range (0, 1].
    """
    value = attrs.get("width", "").strip()
    if not value.endswith("%"):
        return 1.0
    try:
        percent = float(value[:-1])
    except ValueError:
        logger.debug(f"Ignoring invalid table width {value!r}")
        return 1.0
    if percent <= 0:
        return 1.0
    return min(percent, 100.0) / 100.0


__all__ = ["TableCell", "TableRow", "collect_rows", "column_count", "has_border", "width_fraction"]
