#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2all/options/pdf.py
"""Configuration options for rendering PDF documents."""

from __future__ import annotations

from dataclasses import dataclass, field

from html2all.constants import (
    DEFAULT_LINK_COLOR,
    DEFAULT_PDF_BULLET,
    DEFAULT_PDF_FONT_FAMILY,
    DEFAULT_PDF_FONT_SIZE,
    DEFAULT_PDF_FOOTER_FONT_SIZE,
    DEFAULT_PDF_FOOTER_OFFSET,
    DEFAULT_PDF_LINE_SPACING,
    DEFAULT_PDF_LIST_INDENT,
    DEFAULT_PDF_MARGIN,
    DEFAULT_PDF_PAGE_SIZE,
    DEFAULT_PDF_TABLE_ROW_HEIGHT,
    RGB,
    PageSize,
)
from html2all.options.base import BaseRendererOptions


@dataclass(frozen=True)
class PdfRendererOptions(BaseRendererOptions):
    """Configuration options for rendering to a paginated PDF canvas.

    All lengths are in points (72 points = 1 inch).

    Parameters
    ----------
    page_size : {"letter", "a4", "legal"}, default "a4"
        Page size for the PDF document.
    margin_top, margin_bottom, margin_left, margin_right : float, default 42.52
        Page margins (15 mm).
    font_name : str, default "Helvetica"
        Default font family. Standard PDF fonts: Helvetica, Times, Courier.
    font_size : float, default 11
        Default font size in points for body text.
    line_spacing : float, default 1.2
        Line height as a multiple of the font size.
    bullet : str, default "•"
        Marker drawn before unordered list items.
    link_color : tuple of int, default (0, 0, 255)
        RGB colour of anchor text.
    table_row_height : float, default 19.84
        Fixed row height of bordered tables (7 mm).
    list_indent : float, default 28.35
        Indent of list items from the left margin (10 mm).
    footer_font_size : float, default 9
        Font size of page footer lines.
    footer_offset : float, default 56.69
        Distance of the first footer line from the page bottom (20 mm).

    """

    page_size: PageSize = field(
        default=DEFAULT_PDF_PAGE_SIZE,
        metadata={"help": "Page size: letter, a4, or legal", "choices": ["letter", "a4", "legal"], "importance": "core"},
    )
    margin_top: float = field(
        default=DEFAULT_PDF_MARGIN,
        metadata={"help": "Top margin in points (72pt = 1 inch)", "type": float, "importance": "advanced"},
    )
    margin_bottom: float = field(
        default=DEFAULT_PDF_MARGIN,
        metadata={"help": "Bottom margin in points", "type": float, "importance": "advanced"},
    )
    margin_left: float = field(
        default=DEFAULT_PDF_MARGIN, metadata={"help": "Left margin in points", "type": float, "importance": "advanced"}
    )
    margin_right: float = field(
        default=DEFAULT_PDF_MARGIN, metadata={"help": "Right margin in points", "type": float, "importance": "advanced"}
    )
    font_name: str = field(
        default=DEFAULT_PDF_FONT_FAMILY,
        metadata={"help": "Default font (Helvetica, Times, Courier)", "importance": "core"},
    )
    font_size: float = field(
        default=DEFAULT_PDF_FONT_SIZE,
        metadata={"help": "Default font size in points", "type": float, "importance": "core"},
    )
    line_spacing: float = field(
        default=DEFAULT_PDF_LINE_SPACING,
        metadata={"help": "Line spacing multiplier (1.0 = single)", "type": float, "importance": "advanced"},
    )
    bullet: str = field(
        default=DEFAULT_PDF_BULLET, metadata={"help": "Marker for unordered list items", "importance": "advanced"}
    )
    link_color: RGB = field(
        default=DEFAULT_LINK_COLOR, metadata={"help": "RGB colour of link text", "importance": "advanced"}
    )
    table_row_height: float = field(
        default=DEFAULT_PDF_TABLE_ROW_HEIGHT,
        metadata={"help": "Row height of bordered tables in points", "type": float, "importance": "advanced"},
    )
    list_indent: float = field(
        default=DEFAULT_PDF_LIST_INDENT,
        metadata={"help": "List item indent in points", "type": float, "importance": "advanced"},
    )
    footer_font_size: float = field(
        default=DEFAULT_PDF_FOOTER_FONT_SIZE,
        metadata={"help": "Footer font size in points", "type": float, "importance": "advanced"},
    )
    footer_offset: float = field(
        default=DEFAULT_PDF_FOOTER_OFFSET,
        metadata={"help": "Footer distance from the page bottom in points", "type": float, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges for PDF renderer options.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        for name in ("margin_top", "margin_bottom", "margin_left", "margin_right"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        for name in ("font_size", "line_spacing", "table_row_height", "footer_font_size"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.page_size not in ("letter", "a4", "legal"):
            raise ValueError(f"page_size must be 'letter', 'a4' or 'legal', got {self.page_size!r}")
