#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2all/canvas.py
"""Paginated drawing canvas.

:class:`PageCanvas` is an :class:`fpdf.FPDF` document measured in points.
Text is placed at fpdf's moving cursor with ``cell``, ``multi_cell`` and
``write``; word wrapping, automatic page breaks and the per-page ``footer``
hook all come from fpdf. The canvas adds three things on top:

- ``use_font`` maps any family name onto one of the core PDF fonts and sets
  the text colour in one call
- a footer procedure can be registered at any time with ``set_footer``
- every placement call is journaled per page (:class:`TextOp`,
  :class:`LineOp`) so a layout can be inspected before it is serialized

Examples
--------
    >>> canvas = PageCanvas()
    >>> canvas.add_page()
    >>> canvas.use_font("Helvetica", "B", 14)
    >>> canvas.cell(0, 20, "Title", align="C")
    >>> canvas.records[0].text
    'Title'

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Callable, Union

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from html2all.constants import (
    DEFAULT_FONT_FACE_FAMILY,
    DEFAULT_PDF_FONT_FAMILY,
    DEFAULT_PDF_FONT_SIZE,
    DEFAULT_PDF_LINE_SPACING,
    DEFAULT_PDF_MARGIN,
    DEFAULT_PDF_PAGE_SIZE,
    DEFAULT_TEXT_COLOR,
    FONT_FACE_FAMILIES,
    PDF_CORE_FONTS_ENCODING,
    RGB,
    PageSize,
)
from html2all.utils.io_utils import write_content

logger = logging.getLogger(__name__)

FooterCallback = Callable[["PageCanvas", int], None]

_CORE_FONT_NAMES: dict[str, dict[str, str]] = {
    "Helvetica": {"": "Helvetica", "B": "Helvetica-Bold", "I": "Helvetica-Oblique", "BI": "Helvetica-BoldOblique"},
    "Times": {"": "Times-Roman", "B": "Times-Bold", "I": "Times-Italic", "BI": "Times-BoldItalic"},
    "Courier": {"": "Courier", "B": "Courier-Bold", "I": "Courier-Oblique", "BI": "Courier-BoldOblique"},
}


@dataclass(frozen=True)
class TextOp:
    """One text placement call.

    ``x``/``y`` are the cursor position when the call was made and
    ``width`` is the box width for cells, or the string width for flowing
    text written with ``write``.
    """

    page: int
    x: float
    y: float
    width: float
    height: float
    text: str
    font_name: str
    font_size: float
    color: RGB = DEFAULT_TEXT_COLOR
    underline: bool = False
    align: str = "L"
    border: bool = False


@dataclass(frozen=True)
class LineOp:
    """A straight line between two points."""

    page: int
    x1: float
    y1: float
    x2: float
    y2: float
    color: RGB = DEFAULT_TEXT_COLOR
    width: float = 0.57


@dataclass
class PageRecord:
    """The placement calls made on one page."""

    number: int
    ops: list[Union[TextOp, LineOp]] = field(default_factory=list)

    @property
    def text_ops(self) -> list[TextOp]:
        return [op for op in self.ops if isinstance(op, TextOp)]

    @property
    def line_ops(self) -> list[LineOp]:
        return [op for op in self.ops if isinstance(op, LineOp)]

    @property
    def bordered_cells(self) -> list[TextOp]:
        return [op for op in self.text_ops if op.border]

    @property
    def text(self) -> str:
        """All text on the page joined in placement order."""
        return "".join(op.text for op in self.text_ops)


def core_family(family: str) -> str:
    """Map a family name to a core PDF family, case-insensitively.

    Examples
    --------
        >>> core_family("Times New Roman")
        'Times'
        >>> core_family("Wingdings")
        'Helvetica'

    """
    if family in _CORE_FONT_NAMES:
        return family
    return FONT_FACE_FAMILIES.get(family.strip().lower(), DEFAULT_FONT_FACE_FAMILY)


def resolve_font_name(family: str, style: str) -> str:
    """Map a family and style mask to a standard PDF font name.

    Parameters
    ----------
    family : str
        Family name such as "Helvetica", "times" or "Arial"; unknown
        families fall back to Helvetica
    style : str
        Style mask made of ``B``, ``I`` and ``U`` characters. Underline does
        not select a different font.

    Returns
    -------
    str
        Name of one of the standard PDF fonts

    Examples
    --------
        >>> resolve_font_name("times", "BI")
        'Times-BoldItalic'

    """
    variants = _CORE_FONT_NAMES[core_family(family)]
    key = ("B" if "B" in style.upper() else "") + ("I" if "I" in style.upper() else "")
    return variants[key]


class PageCanvas(FPDF):
    """Paginated drawing surface on top of :class:`fpdf.FPDF`.

    Parameters
    ----------
    page_size : {"letter", "a4", "legal"}, default "a4"
        Size of every page
    margins : tuple of float, default 15 mm on every side
        (left, top, right, bottom) margins in points
    font_family : str, default "Helvetica"
        Initial font family
    font_size : float, default 11
        Initial font size in points
    line_spacing : float, default 1.2
        Line height as a multiple of the font size
    auto_page_break : bool, default True
        Start a new page when content would cross the bottom margin

    Notes
    -----
    The footer procedure is run by fpdf each time a page is closed, so a
    procedure registered part-way through the document applies to the page
    being drawn and every page after it. The last page is closed when the
    document is serialized by :meth:`to_bytes`.

    Core PDF fonts only cover Windows-1252; other characters are replaced
    with ``?`` before they reach fpdf.

    """

    def __init__(
        self,
        page_size: PageSize = DEFAULT_PDF_PAGE_SIZE,
        margins: tuple[float, float, float, float] = (
            DEFAULT_PDF_MARGIN,
            DEFAULT_PDF_MARGIN,
            DEFAULT_PDF_MARGIN,
            DEFAULT_PDF_MARGIN,
        ),
        font_family: str = DEFAULT_PDF_FONT_FAMILY,
        font_size: float = DEFAULT_PDF_FONT_SIZE,
        line_spacing: float = DEFAULT_PDF_LINE_SPACING,
        auto_page_break: bool = True,
    ):
        super().__init__(orientation="portrait", unit="pt", format=page_size)
        left, top, right, bottom = margins
        self.set_margins(left, top, right)
        self.set_auto_page_break(auto_page_break, margin=bottom)
        self.core_fonts_encoding = PDF_CORE_FONTS_ENCODING

        self.line_spacing = line_spacing
        self.text_rgb: RGB = DEFAULT_TEXT_COLOR
        self.draw_rgb: RGB = DEFAULT_TEXT_COLOR
        self.footer_procedure: FooterCallback | None = None
        self._records: dict[int, PageRecord] = {}
        self._journal_paused = False
        self._pdf_bytes: bytes | None = None

        self.use_font(font_family, "", font_size)

    # ------------------------------------------------------------------
    # Geometry and state
    # ------------------------------------------------------------------

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def leading(self) -> float:
        """Height of one text line in the current font."""
        return self.font_size_pt * self.line_spacing

    @property
    def core_font_name(self) -> str:
        return resolve_font_name(self.font_family, self.font_style)

    @property
    def records(self) -> list[PageRecord]:
        """Journaled placement calls, one record per page."""
        return [self._records.get(number) or PageRecord(number) for number in range(1, self.page_count + 1)]

    def use_font(self, family: str, style: str = "", size: float | None = None, color: RGB | None = None) -> None:
        """Select a core font and, optionally, the text colour.

        Parameters
        ----------
        family : str
            Any family name; it is mapped with :func:`core_family`
        style : str, default ""
            Any combination of ``B``, ``I`` and ``U``
        size : float or None
            Size in points; None keeps the current size
        color : RGB tuple or None
            Text colour; None keeps the current colour

        """
        self.set_font(core_family(family), style.upper(), size if size is not None else self.font_size_pt)
        if color is not None:
            self.set_text_color(*color)

    def set_text_color(self, r: Any, g: int = -1, b: int = -1) -> None:
        super().set_text_color(r, g, b)
        self.text_rgb = (r, r, r) if g == -1 else (r, g, b)

    def set_draw_color(self, r: Any, g: int = -1, b: int = -1) -> None:
        super().set_draw_color(r, g, b)
        self.draw_rgb = (r, r, r) if g == -1 else (r, g, b)

    def sanitize(self, text: str) -> str:
        """Replace characters the core fonts cannot encode."""
        return text.encode(self.core_fonts_encoding, errors="replace").decode(self.core_fonts_encoding)

    def get_string_width(self, s: str, normalized: bool = False, markdown: bool = False) -> float:
        if not normalized:
            s = self.sanitize(s)
        return super().get_string_width(s, normalized, markdown)

    # ------------------------------------------------------------------
    # Journaled drawing
    # ------------------------------------------------------------------

    def _journal(self, op: Union[TextOp, LineOp]) -> None:
        if self._journal_paused:
            return
        record = self._records.setdefault(self.page, PageRecord(self.page))
        record.ops.append(op)

    def _text_op(self, width: float, height: float, text: str, align: str = "L", border: bool = False) -> TextOp:
        return TextOp(
            page=self.page,
            x=self.x,
            y=self.y,
            width=width,
            height=height,
            text=text,
            font_name=self.core_font_name,
            font_size=self.font_size_pt,
            color=self.text_rgb,
            underline=bool(self.underline),
            align=str(align),
            border=bool(border),
        )

    def _break_page_if_needed(self, height: float) -> None:
        """Start the next page now when a line of ``height`` would cross the bottom margin."""
        if not self._journal_paused and self.will_page_break(height):
            x = self.x
            self.add_page(same=True)
            self.x = x

    def _unjournaled(self, method: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        paused = self._journal_paused
        self._journal_paused = True
        try:
            return method(*args, **kwargs)
        finally:
            self._journal_paused = paused

    def cell(
        self,
        w: float | None = None,
        h: float | None = None,
        text: str = "",
        border: Any = 0,
        align: Any = "L",
        **kwargs: Any,
    ):
        """Draw a single-line box of text; see :meth:`fpdf.FPDF.cell`."""
        text = self.sanitize(text)
        self._break_page_if_needed(h if h is not None else self.font_size)
        width = w if w else self.w - self.r_margin - self.x
        self._journal(self._text_op(width, h if h is not None else self.font_size, text, align, border))
        return self._unjournaled(super().cell, w, h, text, border, align=align, **kwargs)

    def multi_cell(
        self, w: float, h: float | None = None, text: str = "", border: Any = 0, align: Any = "L", **kwargs: Any
    ):
        """Draw word-wrapped text as a stack of cells; see :meth:`fpdf.FPDF.multi_cell`."""
        text = self.sanitize(text)
        if not (kwargs.get("dry_run") or kwargs.get("split_only")):
            self._break_page_if_needed(h if h is not None else self.font_size)
            width = w if w else self.w - self.r_margin - self.x
            self._journal(self._text_op(width, h if h is not None else self.font_size, text, align, border))
        return self._unjournaled(super().multi_cell, w, h, text, border, align=align, **kwargs)

    def write(self, h: float | None = None, text: str = "", *args: Any, **kwargs: Any):
        """Flow text from the cursor, wrapping at the right margin; see :meth:`fpdf.FPDF.write`."""
        text = self.sanitize(text)
        if text:
            self._break_page_if_needed(h if h is not None else self.font_size)
            self._journal(self._text_op(self.get_string_width(text), h if h is not None else self.font_size, text))
        return self._unjournaled(super().write, h, text, *args, **kwargs)

    def cell_ln(self, w: float | None, h: float | None, text: str = "", **kwargs: Any):
        """Draw a cell and move to the left margin of the next line."""
        return self.cell(w, h, text, new_x=XPos.LMARGIN, new_y=YPos.NEXT, **kwargs)

    def multi_cell_ln(self, w: float, h: float | None, text: str = "", **kwargs: Any):
        """Draw a wrapped text block and move to the left margin below it."""
        return self.multi_cell(w, h, text, new_x=XPos.LMARGIN, new_y=YPos.NEXT, **kwargs)

    def line(self, x1: float, y1: float, x2: float, y2: float):
        """Draw a line in the current draw colour and line width."""
        self._journal(LineOp(self.page, x1, y1, x2, y2, color=self.draw_rgb, width=self.line_width))
        return self._unjournaled(super().line, x1, y1, x2, y2)

    # ------------------------------------------------------------------
    # Footer and output
    # ------------------------------------------------------------------

    def set_footer(self, callback: FooterCallback | None) -> None:
        """Register the procedure drawing the footer of each page.

        The callback receives the canvas and the 1-based page number.
        Registering again replaces the previous procedure.
        """
        self.footer_procedure = callback

    def footer(self) -> None:
        if self.footer_procedure is None:
            return
        text_rgb, draw_rgb, paused = self.text_rgb, self.draw_rgb, self._journal_paused
        # Footers may be drawn from inside a wrapped multi_cell or write
        self._journal_paused = False
        try:
            self.footer_procedure(self, self.page_no())
        finally:
            self.text_rgb, self.draw_rgb, self._journal_paused = text_rgb, draw_rgb, paused

    def to_bytes(self, creator: str | None = None) -> bytes:
        """Close the document and return the PDF file content.

        The document can no longer be drawn on afterwards; repeated calls
        return the same bytes.
        """
        if self._pdf_bytes is None:
            if creator:
                self.set_creator(creator)
            if self.page == 0:
                self.add_page()
            self._pdf_bytes = bytes(self.output())
            logger.debug(f"Serialized canvas with {self.page_count} page(s)")
        return self._pdf_bytes

    def save(self, output: Union[str, Path, IO[bytes]], creator: str | None = None) -> None:
        """Write the PDF to a path or binary stream."""
        write_content(self.to_bytes(creator=creator), output)


__all__ = [
    "FooterCallback",
    "LineOp",
    "PageCanvas",
    "PageRecord",
    "TextOp",
    "core_family",
    "resolve_font_name",
]
