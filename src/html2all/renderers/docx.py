#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2all/renderers/docx.py
"""DOCX rendering from HTML trees.

This module provides the DocxRenderer class which converts parsed HTML to
Microsoft Word (.docx) documents using the python-docx library.

The walk keeps two pieces of output state: the paragraph that inline text is
currently appended to (possibly none) and the container new paragraphs and
tables are added to (the body, the page header, the page footer or a table
cell). Both are swapped in and restored around each subtree by a scoped
helper, while the inherited style travels down the recursion as an
immutable :class:`~html2all.style.StyleContext`.

"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Callable, Generator, Union

if TYPE_CHECKING:
    from docx.table import Table, _Cell
    from docx.text.paragraph import Paragraph

from bs4.element import PageElement, Tag

from html2all.constants import (
    DEFAULT_RULE_COLOR,
    DEPS_DOCX_RENDER,
    DOCX_HEADING_SIZES,
    DOCX_RULE_DEFAULT_THICKNESS,
    DOCX_TABLE_BORDER_SIZE,
    FONT_SIZE_CODES,
)
from html2all.exceptions import RenderingError
from html2all.options.docx import DocxRendererOptions
from html2all.options.html import HtmlParserOptions
from html2all.parsers.html import HtmlDocuments
from html2all.renderers.base import BaseRenderer
from html2all.roles import Role, effective_role
from html2all.style import DEFAULT_STYLE, Alignment, Emphasis, StyleContext, resolve_alignment
from html2all.tables import collect_rows, column_count, has_border
from html2all.utils.decorators import debug_timer, requires_dependencies
from html2all.utils.html_utils import (
    collapse_whitespace,
    extract_text,
    get_attr_map,
    is_text_node,
    iter_elements,
    normalize_hex_color,
    parse_hex_color,
)

logger = logging.getLogger(__name__)


class ContainerKind(Enum):
    """Where new paragraphs and tables are added."""

    BODY = "body"
    HEADER = "header"
    FOOTER = "footer"
    CELL = "cell"


@dataclass(frozen=True)
class Container:
    """A block container paired with its python-docx handle.

    ``handle`` is the ``Document`` for the body, the section's ``_Header``
    or ``_Footer`` for page regions and a ``_Cell`` for table cells.
    """

    kind: ContainerKind
    handle: Any

    def add_paragraph(self) -> Paragraph:
        return self.handle.add_paragraph()

    def add_table(self, rows: int, cols: int, width: Any) -> Table:
        if self.kind is ContainerKind.BODY or self.kind is ContainerKind.CELL:
            return self.handle.add_table(rows, cols)
        return self.handle.add_table(rows, cols, width)


class DocxRenderer(BaseRenderer):
    """Render HTML documents to DOCX format.

    Parameters
    ----------
    options : DocxRendererOptions or None, default = None
        DOCX rendering options
    parser_options : HtmlParserOptions or None, default = None
        Options for parsing raw markup inputs

    Examples
    --------
    Basic usage:

        >>> from html2all.renderers.docx import DocxRenderer
        >>> renderer = DocxRenderer()
        >>> document = renderer.convert("<h1>Title</h1><p>Body text</p>")
        >>> [p.text for p in document.paragraphs]
        ['Title', 'Body text']
        >>> renderer.render("<h1>Title</h1>", "output.docx")

    """

    def __init__(self, options: DocxRendererOptions | None = None, parser_options: HtmlParserOptions | None = None):
        """Initialize the DOCX renderer with options."""
        BaseRenderer._validate_options_type(options, DocxRendererOptions, "docx")
        options = options or DocxRendererOptions()
        super().__init__(options, parser_options)
        self.options: DocxRendererOptions = options
        self.document: Any = None  # Word document (python-docx Document object)
        self._paragraph: Paragraph | None = None
        self._container: Container | None = None
        # Alignment for paragraphs opened lazily by text in the current block
        self._pending_alignment: Alignment | None = None
        self._list_depth = 0
        self._handlers: dict[Role, Callable[[Tag, StyleContext], None]] = {
            Role.HEADER_REGION: self._render_region,
            Role.FOOTER_REGION: self._render_region,
            Role.CENTER: self._render_center,
            Role.PARAGRAPH: self._render_paragraph,
            Role.LIST_ITEM: self._render_paragraph,
            Role.BLOCK: self._render_block,
            Role.BOLD: self._render_emphasis,
            Role.ITALIC: self._render_emphasis,
            Role.UNDERLINE: self._render_emphasis,
            Role.FONT: self._render_font,
            Role.ANCHOR: self._render_anchor,
            Role.LINE_BREAK: self._render_line_break,
            Role.RULE: self._render_rule,
            Role.ORDERED_LIST: self._render_list,
            Role.UNORDERED_LIST: self._render_list,
            Role.TABLE: self._render_table,
            Role.CODE_INLINE: self._render_code_inline,
            Role.CODE_BLOCK: self._render_code_block,
            Role.QUOTE: self._render_quote,
            Role.IMAGE: self._render_nothing,
            Role.SKIP: self._render_nothing,
        }

    @requires_dependencies("docx_render", DEPS_DOCX_RENDER)
    def convert(self, documents: HtmlDocuments) -> Any:
        """Render one or more HTML documents into a Word document.

        Parameters
        ----------
        documents : str, bytes, Tag or sequence of these
            One document or an ordered batch of documents. Consecutive
            documents are separated by a page break.

        Returns
        -------
        docx.document.Document
            The populated python-docx document

        Raises
        ------
        ParsingError
            If a raw markup input cannot be parsed
        RenderingError
            If DOCX generation fails

        """
        from docx import Document
        from docx.enum.table import WD_TABLE_ALIGNMENT
        from docx.enum.text import WD_ALIGN_PARAGRAPH
        from docx.oxml import OxmlElement
        from docx.oxml.ns import qn
        from docx.shared import Inches, Pt, RGBColor

        # Store imports as instance variables for use in other methods
        self._WD_TABLE_ALIGNMENT = WD_TABLE_ALIGNMENT
        self._WD_ALIGN_PARAGRAPH = WD_ALIGN_PARAGRAPH
        self._OxmlElement = OxmlElement
        self._qn = qn
        self._Inches = Inches
        self._Pt = Pt
        self._RGBColor = RGBColor

        trees = self._prepare_documents(documents)
        self.document = Document()
        self._set_document_defaults()
        body = Container(ContainerKind.BODY, self.document)

        def render_one(tree: Tag) -> None:
            self._paragraph = None
            self._container = body
            self._pending_alignment = None
            self._list_depth = 0
            self._walk(tree, DEFAULT_STYLE)

        def page_break() -> None:
            self.document.add_page_break()

        with debug_timer(logger, "Rendering (docx)"):
            self._render_each(trees, render_one, between=page_break)
        return self.document

    def render(self, documents: HtmlDocuments, output: Union[str, Path, IO[bytes]]) -> None:
        """Render the documents to DOCX and save the file to ``output``.

        Raises
        ------
        RenderingError
            If DOCX serialization fails
        OutputWriteError
            If the output cannot be written

        """
        from io import BytesIO

        document = self.convert(documents)
        buffer = BytesIO()
        try:
            document.save(buffer)
        except Exception as e:
            raise RenderingError(f"Failed to serialize DOCX: {e!r}", rendering_stage="serialization", original_error=e) from e
        self.write_output(buffer.getvalue(), output)

    def _set_document_defaults(self) -> None:
        """Set default font, margins and metadata."""
        style = self.document.styles["Normal"]
        style.font.name = self.options.default_font
        style.font.size = self._Pt(self.options.default_font_size)

        margin = self._Inches(self.options.margin_inches)
        for section in self.document.sections:
            section.left_margin = margin
            section.right_margin = margin
            section.top_margin = margin
            section.bottom_margin = margin

        if self.options.creator:
            self.document.core_properties.last_modified_by = self.options.creator

    # ------------------------------------------------------------------
    # Output state
    # ------------------------------------------------------------------

    @contextmanager
    def _scoped(
        self,
        paragraph: Paragraph | None,
        container: Container | None = None,
        alignment: Alignment | None = None,
    ) -> Generator[None, None, None]:
        """Swap in a current paragraph (and container) for one subtree."""
        saved = (self._paragraph, self._container, self._pending_alignment)
        self._paragraph = paragraph
        if container is not None:
            self._container = container
        self._pending_alignment = alignment
        try:
            yield
        finally:
            self._paragraph, self._container, self._pending_alignment = saved

    def _new_paragraph(self, alignment: Alignment) -> Paragraph:
        if self._container is None:
            raise RenderingError("No container to add a paragraph to", rendering_stage="walk")
        paragraph = self._container.add_paragraph()
        paragraph.alignment = self._docx_alignment(alignment)
        return paragraph

    def _ensure_paragraph(self, ctx: StyleContext) -> Paragraph:
        """Return the current paragraph, opening one if there is none."""
        if self._paragraph is None:
            alignment = self._pending_alignment if self._pending_alignment is not None else ctx.alignment
            self._paragraph = self._new_paragraph(alignment)
        return self._paragraph

    def _docx_alignment(self, alignment: Alignment) -> Any:
        return {
            Alignment.LEFT: self._WD_ALIGN_PARAGRAPH.LEFT,
            Alignment.CENTER: self._WD_ALIGN_PARAGRAPH.CENTER,
            Alignment.RIGHT: self._WD_ALIGN_PARAGRAPH.RIGHT,
        }[alignment]

    def _add_run(self, paragraph: Paragraph, text: str, ctx: StyleContext) -> None:
        """Add a run of ``text`` formatted from the style context."""
        run = paragraph.add_run(text)
        if ctx.bold:
            run.bold = True
        if ctx.italic:
            run.italic = True
        if ctx.underline:
            run.underline = True
        if ctx.font_size is not None:
            run.font.size = self._Pt(ctx.font_size)
        if ctx.color is not None:
            run.font.color.rgb = self._RGBColor(*ctx.color)
        if ctx.font_family:
            run.font.name = ctx.font_family

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

    def _render_nothing(self, node: Tag, ctx: StyleContext) -> None:
        pass

    def _render_text(self, raw: str, ctx: StyleContext) -> None:
        if not raw.strip():
            # Separator between inline runs of an open paragraph
            if self._paragraph is not None and self._paragraph.text and not self._paragraph.text[-1].isspace():
                self._add_run(self._paragraph, " ", ctx)
            return
        paragraph = self._ensure_paragraph(ctx)
        text = collapse_whitespace(raw)
        existing = paragraph.text
        if not existing or existing[-1].isspace():
            text = text.lstrip()
        self._add_run(paragraph, text, ctx)

    def _render_region(self, node: Tag, ctx: StyleContext) -> None:
        """Replace the page header or footer with the element's content."""
        is_header = effective_role(node) is Role.HEADER_REGION
        section = self.document.sections[-1]
        region = section.header if is_header else section.footer
        region.is_linked_to_previous = False
        for child in list(region._element):
            region._element.remove(child)

        kind = ContainerKind.HEADER if is_header else ContainerKind.FOOTER
        with self._scoped(None, Container(kind, region)):
            self._walk_children(node, ctx)
        if not region.paragraphs:
            region.add_paragraph()
        logger.debug(f"Filled page {kind.value} region from <{node.name}>")

    def _render_center(self, node: Tag, ctx: StyleContext) -> None:
        with self._scoped(None):
            self._walk_children(node, ctx.centered())

    def _render_block_paragraph(self, node: Tag, ctx: StyleContext, **overrides: Any) -> Paragraph:
        own_alignment, child_ctx = resolve_alignment(ctx, get_attr_map(node))
        paragraph = self._new_paragraph(own_alignment)
        with self._scoped(paragraph, alignment=own_alignment):
            self._walk_children(node, child_ctx.derive(**overrides))
        return paragraph

    def _render_paragraph(self, node: Tag, ctx: StyleContext) -> None:
        self._render_block_paragraph(node, ctx)

    def _render_block(self, node: Tag, ctx: StyleContext) -> None:
        # Paragraph is opened by the first text of the block
        own_alignment, child_ctx = resolve_alignment(ctx, get_attr_map(node))
        with self._scoped(None, alignment=own_alignment):
            self._walk_children(node, child_ctx)

    def _render_heading(self, node: Tag, ctx: StyleContext, level: int) -> None:
        heading_ctx = ctx.with_emphasis(Emphasis.BOLD)
        paragraph = self._render_block_paragraph(node, heading_ctx, font_size=DOCX_HEADING_SIZES[level])
        if self.options.use_heading_styles:
            paragraph.style = self.document.styles[f"Heading {level}"]

    def _render_quote(self, node: Tag, ctx: StyleContext) -> None:
        paragraph = self._render_block_paragraph(node, ctx)
        paragraph.paragraph_format.left_indent = self._Inches(0.5)

    def _render_emphasis(self, node: Tag, ctx: StyleContext) -> None:
        flag = {
            Role.BOLD: Emphasis.BOLD,
            Role.ITALIC: Emphasis.ITALIC,
            Role.UNDERLINE: Emphasis.UNDERLINE,
        }[effective_role(node)]
        self._ensure_paragraph(ctx)
        self._walk_children(node, ctx.with_emphasis(flag))

    def _render_font(self, node: Tag, ctx: StyleContext) -> None:
        attrs = get_attr_map(node)
        overrides: dict[str, Any] = {}
        if "size" in attrs:
            size = FONT_SIZE_CODES.get(attrs["size"].strip())
            if size is None:
                logger.debug(f"Ignoring unknown font size code {attrs['size']!r}")
            else:
                overrides["font_size"] = size
        if "color" in attrs:
            overrides["color"] = parse_hex_color(attrs["color"])
        if attrs.get("face", "").strip():
            overrides["font_family"] = attrs["face"].strip()
        self._ensure_paragraph(ctx)
        self._walk_children(node, ctx.derive(**overrides))

    def _render_anchor(self, node: Tag, ctx: StyleContext) -> None:
        self._ensure_paragraph(ctx)
        link_ctx = ctx.with_emphasis(Emphasis.UNDERLINE).derive(color=self.options.link_color)
        self._walk_children(node, link_ctx)

    def _render_code_inline(self, node: Tag, ctx: StyleContext) -> None:
        self._ensure_paragraph(ctx)
        self._walk_children(node, ctx.derive(font_family=self.options.code_font))

    def _render_code_block(self, node: Tag, ctx: StyleContext) -> None:
        own_alignment, _ = resolve_alignment(ctx, get_attr_map(node))
        paragraph = self._new_paragraph(own_alignment)
        code = extract_text(node).strip("\n")
        if code:
            self._add_run(paragraph, code, ctx.derive(font_family=self.options.code_font))

    def _render_line_break(self, node: Tag, ctx: StyleContext) -> None:
        if self._paragraph is not None:
            self._paragraph.add_run().add_break()

    def _render_rule(self, node: Tag, ctx: StyleContext) -> None:
        """Add an empty paragraph carrying a single bottom border."""
        attrs = get_attr_map(node)
        thickness = DOCX_RULE_DEFAULT_THICKNESS
        try:
            size = int(attrs.get("size", "").strip())
        except ValueError:
            size = 0
        if size > 0:
            thickness = size * 2
        color = normalize_hex_color(attrs.get("color")) or DEFAULT_RULE_COLOR

        paragraph = self._new_paragraph(ctx.alignment)
        p_pr = paragraph._p.get_or_add_pPr()
        p_bdr = self._OxmlElement("w:pBdr")
        bottom = self._OxmlElement("w:bottom")
        bottom.set(self._qn("w:val"), "single")
        bottom.set(self._qn("w:sz"), str(thickness))
        bottom.set(self._qn("w:space"), "1")
        bottom.set(self._qn("w:color"), color)
        p_bdr.append(bottom)
        p_pr.append(p_bdr)
        paragraph.paragraph_format.space_before = self._Pt(0)
        paragraph.paragraph_format.space_after = self._Pt(0)

    def _render_list(self, node: Tag, ctx: StyleContext) -> None:
        ordered = effective_role(node) is Role.ORDERED_LIST
        index = 1
        for item in iter_elements(node):
            if effective_role(item) is not Role.LIST_ITEM:
                continue
            if ordered:
                prefix = f"{index}. "
                index += 1
            else:
                prefix = f"{self.options.bullet} "
            paragraph = self._new_paragraph(ctx.alignment)
            if self._list_depth:
                paragraph.paragraph_format.left_indent = self._Inches(0.25 * self._list_depth)
            paragraph.add_run(prefix)
            self._list_depth += 1
            try:
                with self._scoped(paragraph, alignment=ctx.alignment):
                    self._walk_children(item, ctx)
            finally:
                self._list_depth -= 1

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def _render_table(self, node: Tag, ctx: StyleContext) -> None:
        rows = collect_rows(node)
        if not rows:
            return
        attrs = get_attr_map(node)
        section = self.document.sections[-1]
        usable_width = section.page_width - section.left_margin - section.right_margin
        table = self._container.add_table(len(rows), column_count(rows), usable_width)
        self._set_table_full_width(table)
        if has_border(attrs):
            self._set_table_borders(table)
        if ctx.alignment is Alignment.CENTER or Alignment.from_attr(attrs.get("align")) is Alignment.CENTER:
            table.alignment = self._WD_TABLE_ALIGNMENT.CENTER

        for row_index, row in enumerate(rows):
            for col_index, cell in enumerate(row.cells):
                docx_cell = table.cell(row_index, col_index)
                background = cell.attrs.get("bgcolor") or row.attrs.get("bgcolor")
                if background:
                    fill = normalize_hex_color(background)
                    if fill is None:
                        logger.debug(f"Ignoring invalid cell background {background!r}")
                    else:
                        self._set_cell_background(docx_cell, fill)
                self._render_cell(docx_cell, cell.element, cell.is_header, cell.attrs, ctx)

    def _render_cell(
        self, docx_cell: _Cell, element: Tag, is_header: bool, attrs: dict[str, str], ctx: StyleContext
    ) -> None:
        alignment = Alignment.CENTER if Alignment.from_attr(attrs.get("align")) is Alignment.CENTER else Alignment.LEFT
        paragraph = docx_cell.paragraphs[0]
        paragraph.alignment = self._docx_alignment(alignment)
        cell_ctx = ctx.derive(alignment=alignment, forced_center=False)
        if is_header:
            cell_ctx = cell_ctx.with_emphasis(Emphasis.BOLD)
        with self._scoped(paragraph, Container(ContainerKind.CELL, docx_cell), alignment=alignment):
            self._walk_children(element, cell_ctx)

    def _set_table_full_width(self, table: Table) -> None:
        tbl_pr = table._tbl.tblPr
        tbl_w = tbl_pr.find(self._qn("w:tblW"))
        if tbl_w is None:
            tbl_w = self._OxmlElement("w:tblW")
            tbl_pr.insert(1 if tbl_pr.find(self._qn("w:tblStyle")) is not None else 0, tbl_w)
        tbl_w.set(self._qn("w:type"), "pct")
        tbl_w.set(self._qn("w:w"), "5000")

    def _set_table_borders(self, table: Table) -> None:
        """Apply single-line borders to every edge of the table."""
        tbl_pr = table._tbl.tblPr
        borders = self._OxmlElement("w:tblBorders")
        for edge in ("top", "left", "bottom", "right", "insideH", "insideV"):
            border = self._OxmlElement(f"w:{edge}")
            border.set(self._qn("w:val"), "single")
            border.set(self._qn("w:sz"), str(DOCX_TABLE_BORDER_SIZE))
            border.set(self._qn("w:space"), "0")
            border.set(self._qn("w:color"), "auto")
            borders.append(border)
        for successor in ("w:shd", "w:tblLayout", "w:tblCellMar", "w:tblLook"):
            found = tbl_pr.find(self._qn(successor))
            if found is not None:
                found.addprevious(borders)
                break
        else:
            tbl_pr.append(borders)

    def _set_cell_background(self, docx_cell: _Cell, fill: str) -> None:
        tc_pr = docx_cell._element.get_or_add_tcPr()
        shading = self._OxmlElement("w:shd")
        shading.set(self._qn("w:val"), "clear")
        shading.set(self._qn("w:color"), "auto")
        shading.set(self._qn("w:fill"), fill)
        tc_pr.append(shading)


__all__ = ["Container", "ContainerKind", "DocxRenderer"]
