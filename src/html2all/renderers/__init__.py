#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/html2all/renderers/__init__.py
"""Renderers for converting parsed HTML to the supported output formats.

Every renderer walks the same parsed tree with the shared role classifier and
style context, and produces one artifact per batch of documents.

Available renderers:
- MarkdownRenderer: Render to Markdown text (requires beautifulsoup4)
- DocxRenderer: Render to Microsoft Word .docx (requires python-docx)
- PdfRenderer: Render to PDF through an in-memory page canvas (requires fpdf2)

Examples
--------
Render a page to Markdown:

    >>> from html2all.renderers import MarkdownRenderer
    >>> MarkdownRenderer().convert("<ul><li>A</li><li>B</li></ul>")
    '- A\\n- B'

Render two pages into one Word document:

    >>> from html2all.renderers import DocxRenderer
    >>> DocxRenderer().render(["<h1>One</h1>", "<h1>Two</h1>"], "output.docx")

"""

from html2all.renderers.base import BaseRenderer
from html2all.renderers.docx import DocxRenderer
from html2all.renderers.markdown import MarkdownRenderer
from html2all.renderers.pdf import PdfRenderer

__all__ = [
    "BaseRenderer",
    "DocxRenderer",
    "MarkdownRenderer",
    "PdfRenderer",
]
