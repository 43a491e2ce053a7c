"""html2all - Render HTML documents to Markdown, Word and PDF.

html2all walks parsed HTML trees once and renders them to three artifacts:
Markdown text, a python-docx Word document with header and footer regions,
and a paginated PDF built on an in-memory page canvas. Every renderer shares
one role classifier and one immutable style context, so the same markup
gives the same structure in each format.

Key Features
------------
- Markdown output with headings, emphasis, lists, tables and code blocks
- Word output with heading styles, run-level fonts and colours, shaded
  table cells, horizontal rules and page header/footer regions
- PDF output with word-wrapped text, centered content, bordered table grids
  and a footer repeated on every page
- Batches of documents rendered into a single artifact
- Malformed markup and bad attribute values never abort a conversion

Supported Output Formats
------------------------
- Markdown (requires beautifulsoup4)
- Word .docx (requires python-docx)
- PDF (requires fpdf2)

Examples
--------
Basic usage:

    >>> from html2all import html_to_markdown
    >>> html_to_markdown("<h1>Title</h1><p>Body.</p>")
    '# Title\\n\\nBody.'

Rendering a batch of pages to Word and PDF:

    >>> from html2all import convert
    >>> pages = ["<h1>Report</h1><p>One</p>", "<h1>Appendix</h1><p>Two</p>"]
    >>> convert(pages, "docx", "report.docx")
    >>> convert(pages, "pdf", "report.pdf", page_size="letter")

Using options objects:

    >>> from html2all import PdfRenderer, PdfRendererOptions
    >>> renderer = PdfRenderer(PdfRendererOptions(font_size=10, margin_left=72))
    >>> canvas = renderer.convert("<center>Cover</center>")
    >>> canvas.page_count
    1

See Also
--------
html2all.renderers : Renderer classes
html2all.options : Option dataclasses

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "html2all requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from html2all.api import convert, html_to_docx, html_to_markdown, html_to_pdf
from html2all.exceptions import (
    DependencyError,
    Html2AllError,
    InvalidOptionsError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from html2all.options import (
    BaseParserOptions,
    BaseRendererOptions,
    DocxRendererOptions,
    HtmlParserOptions,
    MarkdownRendererOptions,
    PdfRendererOptions,
)
from html2all.parsers import HtmlParser
from html2all.renderers import BaseRenderer, DocxRenderer, MarkdownRenderer, PdfRenderer

__all__ = [
    "__version__",
    # API
    "convert",
    "html_to_docx",
    "html_to_markdown",
    "html_to_pdf",
    # Parsers and renderers
    "BaseRenderer",
    "DocxRenderer",
    "HtmlParser",
    "MarkdownRenderer",
    "PdfRenderer",
    # Options
    "BaseParserOptions",
    "BaseRendererOptions",
    "DocxRendererOptions",
    "HtmlParserOptions",
    "MarkdownRendererOptions",
    "PdfRendererOptions",
    # Exceptions
    "DependencyError",
    "Html2AllError",
    "InvalidOptionsError",
    "OutputWriteError",
    "ParsingError",
    "RenderingError",
    "ValidationError",
]
