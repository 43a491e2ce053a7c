#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2all/renderers/pdf.py
"""PDF rendering from HTML trees.

This module provides the PdfRenderer class which walks parsed HTML and
places text at a moving cursor on a :class:`~html2all.canvas.PageCanvas`, an
fpdf2 document. Pages break automatically at the bottom margin, bordered
tables are drawn as fixed-height grids, and a footer region is registered as
a procedure fpdf2 runs as each page is closed.

Font, colour and centering are derived from the inherited
:class:`~html2all.style.StyleContext` each time text is emitted, so nothing
has to be undone when a styled subtree returns. An explicit ``align`` on a
paragraph applies to the text the paragraph emits itself, even below a
``<center>``.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, TYPE_CHECKING, Callable, Union

from bs4.element import PageElement, Tag

from html2all.constants import (
    DEFAULT_FONT_FACE_FAMILY,
    DEFAULT_PDF_FOOTER_LINE_HEIGHT,
    DEFAULT_TEXT_COLOR,
    DEPS_PDF_RENDER,
    FONT_FACE_FAMILIES,
    FONT_SIZE_CODES,
    PDF_HEADING_SIZES,
    PDF_HEADING_SPACE_AFTER_MM,
    PDF_HEADING_SPACE_BEFORE_MM,
    PDF_LIST_ITEM_GAP_MM,
    PDF_LIST_SPACING_MM,
    PDF_PARAGRAPH_SPACE_AFTER_MM,
    PDF_PARAGRAPH_SPACE_BEFORE_MM,
    PDF_RULE_COLOR,
    PDF_RULE_SPACING_MM,
    PDF_RULE_WIDTH,
    PDF_TABLE_SPACING_MM,
    PT_PER_MM,
)
from html2all.exceptions import RenderingError
from html2all.options.html import HtmlParserOptions
from html2all.options.pdf import PdfRendererOptions
from html2all.parsers.html import HtmlDocuments
from html2all.renderers.base import BaseRenderer
from html2all.roles import Role, effective_role
from html2all.style import DEFAULT_STYLE, Alignment, Emphasis, StyleContext, resolve_alignment
from html2all.tables import TableRow, collect_rows, column_count, has_border, width_fraction
from html2all.utils.decorators import debug_timer, requires_dependencies
from html2all.utils.html_utils import (
    collapse_whitespace,
    extract_flat_text,
    extract_lines,
    extract_text,
    get_attr_map,
    is_text_node,
    iter_elements,
    parse_hex_color,
)

if TYPE_CHECKING:
    from html2all.canvas import PageCanvas

logger = logging.getLogger(__name__)

_CODE_FONT_FAMILY = "Courier"
_CELL_ALIGN = {Alignment.LEFT: "L", Alignment.CENTER: "C", Alignment.RIGHT: "R"}


class PdfRenderer(BaseRenderer):
    """Render HTML documents to a paginated PDF canvas.

    Parameters
    ----------
    options : PdfRendererOptions or None, default = None
        PDF rendering options
    parser_options : HtmlParserOptions or None, default = None
        Options for parsing raw markup inputs

    Examples
    --------
    Basic usage:

        >>> renderer = PdfRenderer()
        >>> canvas = renderer.convert("<h1>Title</h1><p>Body</p>")
        >>> canvas.page_count
        1
        >>> renderer.render("<h1>Title</h1>", "output.pdf")

    Custom page setup:

        >>> options = PdfRendererOptions(page_size="letter", font_name="Times")
        >>> pdf_bytes = PdfRenderer(options).render_to_bytes("<p>Hello</p>")

    """

    def __init__(self, options: PdfRendererOptions | None = None, parser_options: HtmlParserOptions | None = None):
        """Initialize the PDF renderer with options."""
        BaseRenderer._validate_options_type(options, PdfRendererOptions, "pdf")
        options = options or PdfRendererOptions()
        super().__init__(options, parser_options)
        self.options: PdfRendererOptions = options
        self.canvas: PageCanvas | None = None
        # Own alignment of the innermost open paragraph; None below a <center>
        self._block_alignment: Alignment | None = None
        self._handlers: dict[Role, Callable[[Tag, StyleContext], None]] = {
            Role.SKIP: self._render_nothing,
            Role.IMAGE: self._render_nothing,
            Role.PARAGRAPH: self._render_paragraph,
            Role.LIST_ITEM: self._render_paragraph,
            Role.QUOTE: self._render_paragraph,
            Role.CENTER: self._render_center,
            Role.BOLD: self._render_emphasis,
            Role.ITALIC: self._render_emphasis,
            Role.UNDERLINE: self._render_emphasis,
            Role.ANCHOR: self._render_anchor,
            Role.FONT: self._render_font,
            Role.TABLE: self._render_table,
            Role.ORDERED_LIST: self._render_list,
            Role.UNORDERED_LIST: self._render_list,
            Role.RULE: self._render_rule,
            Role.LINE_BREAK: self._render_line_break,
            Role.FOOTER_REGION: self._render_footer,
            Role.CODE_INLINE: self._render_code_inline,
            Role.CODE_BLOCK: self._render_code_block,
        }

    @requires_dependencies("pdf_render", DEPS_PDF_RENDER)
    def convert(self, documents: HtmlDocuments) -> PageCanvas:
        """Lay out one or more HTML documents on a paginated canvas.

        Parameters
        ----------
        documents : str, bytes, Tag or sequence of these
            One document or an ordered batch of documents. Every document
            after the first starts on a new page.

        Returns
        -------
        PageCanvas
            The laid-out canvas, ready for :meth:`PageCanvas.to_bytes`

        Raises
        ------
        ParsingError
            If a raw markup input cannot be parsed
        RenderingError
            If layout fails

        """
        from html2all.canvas import PageCanvas

        trees = self._prepare_documents(documents)

        self.canvas = PageCanvas(
            page_size=self.options.page_size,
            margins=(
                self.options.margin_left,
                self.options.margin_top,
                self.options.margin_right,
                self.options.margin_bottom,
            ),
            font_family=self.options.font_name,
            font_size=self.options.font_size,
            line_spacing=self.options.line_spacing,
        )
        self.canvas.add_page()
        self._block_alignment = None

        def render_one(tree: Tag) -> None:
            self._walk(tree, DEFAULT_STYLE)

        with debug_timer(logger, "Rendering (pdf)"):
            self._render_each(trees, render_one, between=self.canvas.add_page)
        logger.debug(f"PDF layout finished with {self.canvas.page_count} page(s)")
        return self.canvas

    def render(self, documents: HtmlDocuments, output: Union[str, Path, IO[bytes]]) -> None:
        """Render the documents to PDF and write the file to ``output``.

        Raises
        ------
        RenderingError
            If PDF serialization fails
        OutputWriteError
            If the output cannot be written

        """
        canvas = self.convert(documents)
        try:
            content = canvas.to_bytes(creator=self.options.creator)
        except Exception as e:
            raise RenderingError(f"Failed to render PDF: {e!r}", rendering_stage="serialization", original_error=e) from e
        self.write_output(content, output)

    # ------------------------------------------------------------------
    # Canvas helpers
    # ------------------------------------------------------------------

    @property
    def _page(self) -> PageCanvas:
        if self.canvas is None:
            raise RenderingError("convert() has not created a canvas", rendering_stage="layout")
        return self.canvas

    def _apply_font(self, ctx: StyleContext) -> None:
        """Load the font and text colour described by ``ctx`` into the canvas."""
        self._page.use_font(
            ctx.font_family or self.options.font_name,
            ctx.style_mask,
            ctx.font_size or self.options.font_size,
            color=ctx.color or DEFAULT_TEXT_COLOR,
        )

    def _at_line_start(self) -> bool:
        return self._page.x <= self._page.l_margin + 0.01

    def _finish_line(self) -> None:
        """Move below a partially written line, if any."""
        if not self._at_line_start():
            self._page.ln()

    def _space(self, millimetres: float) -> None:
        self._page.ln(millimetres * PT_PER_MM)

    def _text_alignment(self, ctx: StyleContext) -> Alignment:
        return self._block_alignment or ctx.alignment

    def _emit_text(self, text: str, ctx: StyleContext) -> None:
        canvas = self._page
        self._apply_font(ctx)
        alignment = self._text_alignment(ctx)
        if alignment is Alignment.LEFT:
            if self._at_line_start():
                text = text.lstrip()
            if text:
                canvas.write(canvas.leading, text)
            return

        text = text.strip()
        if not text:
            return
        self._finish_line()
        canvas.set_x(canvas.l_margin)
        canvas.multi_cell_ln(canvas.epw, canvas.leading, text, align=_CELL_ALIGN[alignment])

    # ------------------------------------------------------------------
    # Tree walk
    # ------------------------------------------------------------------

    def _walk(self, node: PageElement, ctx: StyleContext) -> None:
        if is_text_node(node):
            self._render_text(str(node), ctx)
            return
        if not isinstance(node, Tag):
            return

        role = effective_role(node)
        if role.is_heading:
            self._render_heading(node, ctx, role.heading_level or 1)
            return
        handler = self._handlers.get(role)
        if handler is None:
            self._walk_children(node, ctx)
        else:
            handler(node, ctx)

    def _walk_children(self, node: Tag, ctx: StyleContext) -> None:
        for child in node.children:
            self._walk(child, ctx)

    def _walk_aligned(self, node: Tag, ctx: StyleContext, alignment: Alignment | None) -> None:
        """Walk the children with ``alignment`` as the open paragraph's own alignment."""
        saved = self._block_alignment
        self._block_alignment = alignment
        try:
            self._walk_children(node, ctx)
        finally:
            self._block_alignment = saved

    def _render_nothing(self, node: Tag, ctx: StyleContext) -> None:
        pass

    def _render_text(self, raw: str, ctx: StyleContext) -> None:
        if not raw.strip():
            # Keep inline runs on an open line apart
            if self._text_alignment(ctx) is Alignment.LEFT and not self._at_line_start():
                self._emit_text(" ", ctx)
            return
        self._emit_text(collapse_whitespace(raw), ctx)

    def _render_heading(self, node: Tag, ctx: StyleContext, level: int) -> None:
        canvas = self._page
        self._finish_line()
        self._space(PDF_HEADING_SPACE_BEFORE_MM)
        heading_ctx = ctx.with_emphasis(Emphasis.BOLD).derive(font_size=PDF_HEADING_SIZES[level])
        self._apply_font(heading_ctx)
        text = extract_flat_text(node)
        if text:
            own_alignment, _ = resolve_alignment(ctx, get_attr_map(node))
            canvas.set_x(canvas.l_margin)
            canvas.multi_cell_ln(canvas.epw, canvas.leading, text, align=_CELL_ALIGN[own_alignment])
        self._space(PDF_HEADING_SPACE_AFTER_MM)

    def _render_paragraph(self, node: Tag, ctx: StyleContext) -> None:
        self._finish_line()
        self._space(PDF_PARAGRAPH_SPACE_BEFORE_MM)
        self._page.set_x(self._page.l_margin)
        own_alignment, child_ctx = resolve_alignment(ctx, get_attr_map(node))
        self._walk_aligned(node, child_ctx, own_alignment)
        self._finish_line()
        self._space(PDF_PARAGRAPH_SPACE_AFTER_MM)

    def _render_center(self, node: Tag, ctx: StyleContext) -> None:
        self._walk_aligned(node, ctx.centered(), None)

    def _render_emphasis(self, node: Tag, ctx: StyleContext) -> None:
        flag = {
            Role.BOLD: Emphasis.BOLD,
            Role.ITALIC: Emphasis.ITALIC,
            Role.UNDERLINE: Emphasis.UNDERLINE,
        }[effective_role(node)]
        self._walk_children(node, ctx.with_emphasis(flag))

    def _render_anchor(self, node: Tag, ctx: StyleContext) -> None:
        self._walk_children(node, ctx.with_emphasis(Emphasis.UNDERLINE).derive(color=self.options.link_color))

    def _render_font(self, node: Tag, ctx: StyleContext) -> None:
        attrs = get_attr_map(node)
        overrides: dict[str, object] = {}
        if "size" in attrs:
            size = FONT_SIZE_CODES.get(attrs["size"].strip())
            if size is None:
                logger.debug(f"Ignoring unknown font size code {attrs['size']!r}")
            else:
                overrides["font_size"] = size
        if "color" in attrs:
            overrides["color"] = parse_hex_color(attrs["color"])
        if "face" in attrs:
            overrides["font_family"] = FONT_FACE_FAMILIES.get(attrs["face"].strip().lower(), DEFAULT_FONT_FACE_FAMILY)
        self._walk_children(node, ctx.derive(**overrides))

    def _render_code_inline(self, node: Tag, ctx: StyleContext) -> None:
        self._walk_children(node, ctx.derive(font_family=_CODE_FONT_FAMILY))

    def _render_code_block(self, node: Tag, ctx: StyleContext) -> None:
        canvas = self._page
        self._finish_line()
        self._space(PDF_PARAGRAPH_SPACE_BEFORE_MM)
        self._apply_font(ctx.derive(font_family=_CODE_FONT_FAMILY))
        for line in extract_text(node).strip("\n").split("\n"):
            canvas.set_x(canvas.l_margin)
            canvas.cell_ln(0, canvas.leading, line.rstrip())
        self._space(PDF_PARAGRAPH_SPACE_AFTER_MM)

    def _render_line_break(self, node: Tag, ctx: StyleContext) -> None:
        self._apply_font(ctx)
        self._page.ln(self._page.leading)

    def _render_rule(self, node: Tag, ctx: StyleContext) -> None:
        canvas = self._page
        self._finish_line()
        self._space(PDF_RULE_SPACING_MM)
        canvas.set_draw_color(*PDF_RULE_COLOR)
        canvas.set_line_width(PDF_RULE_WIDTH)
        canvas.line(canvas.l_margin, canvas.y, canvas.w - canvas.r_margin, canvas.y)
        canvas.set_draw_color(*DEFAULT_TEXT_COLOR)
        self._space(PDF_RULE_SPACING_MM)

    def _render_list(self, node: Tag, ctx: StyleContext) -> None:
        """Draw each list item at a fixed indent with its marker and flattened text."""
        canvas = self._page
        ordered = effective_role(node) is Role.ORDERED_LIST
        self._finish_line()
        self._space(PDF_LIST_SPACING_MM)
        self._apply_font(ctx)
        index = 1
        for item in iter_elements(node):
            if effective_role(item) is not Role.LIST_ITEM:
                continue
            if ordered:
                marker = f"{index}. "
                index += 1
            else:
                marker = f"{self.options.bullet} "
            canvas.set_x(canvas.l_margin + self.options.list_indent)
            canvas.write(canvas.leading, marker)
            text = extract_flat_text(item)
            if text:
                canvas.write(canvas.leading, text)
            canvas.ln(canvas.leading + PDF_LIST_ITEM_GAP_MM * PT_PER_MM)
        self._space(PDF_LIST_SPACING_MM)

    def _render_footer(self, node: Tag, ctx: StyleContext) -> None:
        """Register the element's text lines as the footer of each page still open."""
        lines = extract_lines(node)
        if not lines:
            return
        font_name = self.options.font_name
        font_size = self.options.footer_font_size
        offset = self.options.footer_offset

        def draw_footer(canvas: PageCanvas, page_number: int) -> None:
            canvas.set_y(-offset)
            canvas.use_font(font_name, "", font_size, color=DEFAULT_TEXT_COLOR)
            canvas.set_x(canvas.l_margin)
            for line in lines:
                canvas.cell_ln(canvas.epw, DEFAULT_PDF_FOOTER_LINE_HEIGHT, line, align="C")

        self._page.set_footer(draw_footer)
        logger.debug(f"Registered page footer with {len(lines)} line(s)")

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def _render_table(self, node: Tag, ctx: StyleContext) -> None:
        attrs = get_attr_map(node)
        if not has_border(attrs):
            # Layout table: content flows as if the grid were absent
            for child in iter_elements(node):
                self._walk(child, ctx)
            return
        rows = collect_rows(node)
        if rows:
            self._draw_table_grid(rows, width_fraction(attrs), ctx)

    def _draw_table_grid(self, rows: list[TableRow], fraction: float, ctx: StyleContext) -> None:
        """Draw a bordered grid of equal-width columns, centered in the usable width.

        The column width is the table width divided by the length of the
        longest row; shorter rows leave the remaining grid positions empty.
        """
        canvas = self._page
        self._finish_line()
        self._space(PDF_TABLE_SPACING_MM)

        table_width = canvas.epw * fraction
        column_width = table_width / column_count(rows)
        row_height = self.options.table_row_height
        table_x = canvas.l_margin + (canvas.epw - table_width) / 2
        canvas.set_draw_color(*DEFAULT_TEXT_COLOR)

        for row in rows:
            canvas.set_x(table_x)
            for cell in row.cells:
                cell_ctx = ctx.with_emphasis(Emphasis.BOLD) if cell.is_header else ctx
                self._apply_font(cell_ctx)
                text = self._fit_text(cell.text, column_width - 2 * canvas.c_margin)
                canvas.cell(column_width, row_height, text, border=1)
            canvas.ln(row_height)

        self._apply_font(ctx)
        self._space(PDF_TABLE_SPACING_MM)

    def _fit_text(self, text: str, max_width: float) -> str:
        """Trim ``text`` from the right until it fits ``max_width`` in the current font."""
        canvas = self._page
        text = canvas.sanitize(text)
        while text and canvas.get_string_width(text) > max_width:
            text = text[:-1]
        return text


__all__ = ["PdfRenderer"]
