#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2all/renderers/markdown.py
"""Markdown rendering from HTML trees.

This module provides the MarkdownRenderer class, which walks parsed HTML
once per document and appends Markdown syntax to a text buffer. Emphasis is
tracked in the shared :class:`~html2all.style.StyleContext` so nested
emphasis of the same kind is wrapped only once.

"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import IO, Callable, Union

from bs4.element import PageElement, Tag

from html2all.constants import DEPS_HTML, MARKDOWN_LIST_INDENT
from html2all.options.html import HtmlParserOptions
from html2all.options.markdown import MarkdownRendererOptions
from html2all.parsers.html import HtmlDocuments
from html2all.renderers.base import BaseRenderer
from html2all.roles import Role, effective_role
from html2all.style import DEFAULT_STYLE, Emphasis, StyleContext
from html2all.tables import collect_rows, column_count
from html2all.utils.decorators import debug_timer, requires_dependencies
from html2all.utils.html_utils import collapse_whitespace, extract_text, get_attr, is_text_node, iter_elements

logger = logging.getLogger(__name__)

_BLANK_LINE_RUN_RE = re.compile(r"\n{3,}")


class MarkdownRenderer(BaseRenderer):
    """Render HTML documents to Markdown text.

    Parameters
    ----------
    options : MarkdownRendererOptions or None, default = None
        Markdown formatting options
    parser_options : HtmlParserOptions or None, default = None
        Options for parsing raw markup inputs

    Examples
    --------
        >>> renderer = MarkdownRenderer()
        >>> renderer.convert("<h1>Title</h1><p>Body.</p>")
        '# Title\\n\\nBody.'

    """

    def __init__(
        self, options: MarkdownRendererOptions | None = None, parser_options: HtmlParserOptions | None = None
    ):
        """Initialize the Markdown renderer with options."""
        BaseRenderer._validate_options_type(options, MarkdownRendererOptions, "markdown")
        options = options or MarkdownRendererOptions()
        super().__init__(options, parser_options)
        self.options: MarkdownRendererOptions = options
        self._output: list[str] = []
        self._list_depth = 0
        self._handlers: dict[Role, Callable[[Tag, StyleContext], None]] = {
            Role.PARAGRAPH: self._render_block,
            Role.BLOCK: self._render_block,
            Role.BOLD: self._render_bold,
            Role.ITALIC: self._render_italic,
            Role.UNDERLINE: self._render_underline,
            Role.ANCHOR: self._render_anchor,
            Role.IMAGE: self._render_image,
            Role.LINE_BREAK: self._render_line_break,
            Role.RULE: self._render_rule,
            Role.ORDERED_LIST: self._render_list,
            Role.UNORDERED_LIST: self._render_list,
            Role.LIST_ITEM: self._render_stray_list_item,
            Role.TABLE: self._render_table,
            Role.CODE_INLINE: self._render_code_inline,
            Role.CODE_BLOCK: self._render_code_block,
            Role.QUOTE: self._render_quote,
            Role.SKIP: self._render_nothing,
        }

    @requires_dependencies("markdown_render", DEPS_HTML)
    def convert(self, documents: HtmlDocuments) -> str:
        """Render one or more HTML documents to Markdown.

        Parameters
        ----------
        documents : str, bytes, Tag or sequence of these
            One document or an ordered batch of documents

        Returns
        -------
        str
            Markdown text; consecutive documents are separated by a
            thematic break

        """
        trees = self._prepare_documents(documents)
        rendered: list[str] = []

        def render_one(tree: Tag) -> None:
            self._output = []
            self._list_depth = 0
            self._walk(tree, DEFAULT_STYLE)
            rendered.append("".join(self._output))

        with debug_timer(logger, "Rendering (markdown)"):
            self._render_each(trees, render_one)

        text = f"\n\n{self.options.document_separator}\n\n".join(rendered)
        if self.options.collapse_blank_lines:
            text = _BLANK_LINE_RUN_RE.sub("\n\n", text).strip()
        return text

    def render(self, documents: HtmlDocuments, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render the documents to Markdown and write the text to ``output``."""
        self.write_output(self.convert(documents), output)

    def render_to_string(self, documents: HtmlDocuments) -> str:
        """Render the documents to a Markdown string."""
        return self.convert(documents)

    def render_to_bytes(self, documents: HtmlDocuments) -> bytes:
        """Render the documents to UTF-8 encoded Markdown."""
        return self.convert(documents).encode("utf-8")

    # ------------------------------------------------------------------
    # Tree walk
    # ------------------------------------------------------------------

    def _walk(self, node: PageElement, ctx: StyleContext) -> None:
        if is_text_node(node):
            text = str(node)
            if text.strip():
                self._output.append(text)
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

    def _render_heading(self, node: Tag, ctx: StyleContext, level: int) -> None:
        self._output.append(f"\n{'#' * level} ")
        self._walk_children(node, ctx)
        self._output.append("\n\n")

    def _render_block(self, node: Tag, ctx: StyleContext) -> None:
        self._walk_children(node, ctx)
        self._output.append("\n\n")

    def _render_emphasis(self, node: Tag, ctx: StyleContext, flag: Emphasis, opener: str, closer: str) -> None:
        if ctx.has(flag):
            self._walk_children(node, ctx)
            return
        self._output.append(opener)
        self._walk_children(node, ctx.with_emphasis(flag))
        self._output.append(closer)

    def _render_bold(self, node: Tag, ctx: StyleContext) -> None:
        self._render_emphasis(node, ctx, Emphasis.BOLD, "**", "**")

    def _render_italic(self, node: Tag, ctx: StyleContext) -> None:
        self._render_emphasis(node, ctx, Emphasis.ITALIC, "*", "*")

    def _render_underline(self, node: Tag, ctx: StyleContext) -> None:
        tag = self.options.underline_tag
        self._render_emphasis(node, ctx, Emphasis.UNDERLINE, f"<{tag}>", f"</{tag}>")

    def _render_anchor(self, node: Tag, ctx: StyleContext) -> None:
        self._output.append("[")
        self._walk_children(node, ctx)
        self._output.append(f"]({get_attr(node, 'href')})")

    def _render_image(self, node: Tag, ctx: StyleContext) -> None:
        self._output.append(f"![{get_attr(node, 'alt')}]({get_attr(node, 'src')})")

    def _render_line_break(self, node: Tag, ctx: StyleContext) -> None:
        self._output.append("  \n")

    def _render_rule(self, node: Tag, ctx: StyleContext) -> None:
        self._output.append("\n---\n\n")

    def _render_code_inline(self, node: Tag, ctx: StyleContext) -> None:
        self._output.append("`")
        self._walk_children(node, ctx)
        self._output.append("`")

    def _render_code_block(self, node: Tag, ctx: StyleContext) -> None:
        code = extract_text(node).strip("\n")
        self._output.append(f"\n```\n{code}\n```\n\n")

    def _render_quote(self, node: Tag, ctx: StyleContext) -> None:
        self._output.append("\n> ")
        self._walk_children(node, ctx)
        self._output.append("\n\n")

    def _render_list(self, node: Tag, ctx: StyleContext) -> None:
        ordered = effective_role(node) is Role.ORDERED_LIST
        indent = MARKDOWN_LIST_INDENT * self._list_depth
        index = 1
        self._output.append("\n")
        for item in iter_elements(node):
            if effective_role(item) is not Role.LIST_ITEM:
                continue
            if ordered:
                self._output.append(f"{indent}{index}. ")
                index += 1
            else:
                self._output.append(f"{indent}- ")
            self._list_depth += 1
            try:
                self._walk_children(item, ctx)
            finally:
                self._list_depth -= 1
            self._output.append("\n")
        self._output.append("\n")

    def _render_stray_list_item(self, node: Tag, ctx: StyleContext) -> None:
        # <li> outside any list
        self._walk_children(node, ctx)
        self._output.append("\n")

    def _render_cell(self, cell: Tag, ctx: StyleContext) -> str:
        saved_output = self._output
        self._output = []
        try:
            self._walk_children(cell, ctx)
            text = "".join(self._output)
        finally:
            self._output = saved_output
        return collapse_whitespace(text).strip().replace("|", "\\|")

    def _render_table(self, node: Tag, ctx: StyleContext) -> None:
        rows = collect_rows(node)
        if not rows:
            return
        columns = column_count(rows)
        self._output.append("\n")
        for position, row in enumerate(rows):
            cells = [self._render_cell(cell.element, ctx) for cell in row.cells]
            self._output.append("| " + " | ".join(cells) + " |\n")
            if position == 0 or row.is_header:
                self._output.append("|" + " --- |" * columns + "\n")
        self._output.append("\n")


__all__ = ["MarkdownRenderer"]
