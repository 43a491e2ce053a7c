#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the html2all parser and renderers."""

from html2all.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from html2all.options.docx import DocxRendererOptions
from html2all.options.html import HtmlParserOptions
from html2all.options.markdown import MarkdownRendererOptions
from html2all.options.pdf import PdfRendererOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "DocxRendererOptions",
    "HtmlParserOptions",
    "MarkdownRendererOptions",
    "PdfRendererOptions",
]
