#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for html2all library.

This module centralizes the hardcoded values, lookup tables and default
configuration constants used across the html2all library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Dependency Specifications - Packages checked by @requires_dependencies
3. Markup Conventions - Size codes, font faces and colour defaults
4. Format-Specific Constants - Settings for each renderer
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

HtmlParserName = Literal["html.parser", "lxml", "html5lib"]
PageSize = Literal["letter", "a4", "legal"]
OutputFormat = Literal["markdown", "docx", "pdf"]
RGB = tuple[int, int, int]

# =============================================================================
# Dependency Specifications for @requires_dependencies decorator
# =============================================================================
# Each spec is a list of tuples: (pip_package, import_name, version_constraint)

DEPS_HTML = [("beautifulsoup4", "bs4", ">=4.12.0")]
DEPS_DOCX_RENDER = [("python-docx", "docx", ">=1.1.0")]
DEPS_PDF_RENDER = [("fpdf2", "fpdf", ">=2.7.6")]

# =============================================================================
# Markup Conventions
# =============================================================================

# <font size="N"> codes, shared by the DOCX and PDF renderers
FONT_SIZE_CODES: dict[str, float] = {
    "1": 8,
    "2": 10,
    "3": 12,
    "4": 14,
    "5": 18,
    "6": 24,
    "7": 36,
}

# Lower-cased <font face> values and the standard PDF family they map to
FONT_FACE_FAMILIES: dict[str, str] = {
    "arial": "Helvetica",
    "helvetica": "Helvetica",
    "times": "Times",
    "times new roman": "Times",
    "courier": "Courier",
    "courier new": "Courier",
}
DEFAULT_FONT_FACE_FAMILY = "Helvetica"

DEFAULT_TEXT_COLOR: RGB = (0, 0, 0)
DEFAULT_LINK_COLOR: RGB = (0, 0, 255)
DEFAULT_RULE_COLOR = "808080"

# Tags whose content is never visible
SKIPPED_TAGS = frozenset({"head", "title", "style", "script", "meta", "link"})

# Element designations promoted to page regions
HEADER_REGION_MARKERS = frozenset({"header", "banner"})
FOOTER_REGION_MARKERS = frozenset({"footer", "contentinfo"})

# =============================================================================
# HTML Parser Constants
# =============================================================================

DEFAULT_HTML_PARSER: HtmlParserName = "html.parser"
DEFAULT_UNESCAPE_UNICODE_SEQUENCES = False

# =============================================================================
# Markdown Renderer Constants
# =============================================================================

DEFAULT_MARKDOWN_DOCUMENT_SEPARATOR = "---"
DEFAULT_MARKDOWN_UNDERLINE_TAG = "u"
DEFAULT_MARKDOWN_COLLAPSE_BLANK_LINES = True
MARKDOWN_LIST_INDENT = "  "

# =============================================================================
# DOCX Renderer Constants
# =============================================================================

DEFAULT_DOCX_FONT = "Calibri"
DEFAULT_DOCX_FONT_SIZE = 11
DEFAULT_DOCX_CODE_FONT = "Courier New"
DEFAULT_DOCX_MARGIN_INCHES = 1.0
DEFAULT_DOCX_BULLET = "•"

DOCX_HEADING_SIZES: dict[int, float] = {1: 24, 2: 18, 3: 14, 4: 12, 5: 10, 6: 8}

# Horizontal rule border width in eighths of a point
DOCX_RULE_DEFAULT_THICKNESS = 4
DOCX_TABLE_BORDER_SIZE = 8

# =============================================================================
# PDF (Canvas) Renderer Constants
# =============================================================================

PT_PER_MM = 72 / 25.4
# Core PDF fonts cover this code page only
PDF_CORE_FONTS_ENCODING = "windows-1252"

DEFAULT_PDF_PAGE_SIZE: PageSize = "a4"
DEFAULT_PDF_MARGIN = 42.52  # 15 mm
DEFAULT_PDF_FONT_FAMILY = "Helvetica"
DEFAULT_PDF_FONT_SIZE = 11
DEFAULT_PDF_LINE_SPACING = 1.2
DEFAULT_PDF_BULLET = "•"
DEFAULT_PDF_TABLE_ROW_HEIGHT = 19.84  # 7 mm
DEFAULT_PDF_LIST_INDENT = 28.35  # 10 mm
DEFAULT_PDF_FOOTER_FONT_SIZE = 9
DEFAULT_PDF_FOOTER_OFFSET = 56.69  # 20 mm from the page bottom
DEFAULT_PDF_FOOTER_LINE_HEIGHT = 11.34  # 4 mm

PDF_HEADING_SIZES: dict[int, float] = {1: 22, 2: 18, 3: 14, 4: 12, 5: 10, 6: 9}

# Vertical spacing in millimetres, converted with PT_PER_MM
PDF_HEADING_SPACE_BEFORE_MM = 6
PDF_HEADING_SPACE_AFTER_MM = 2
PDF_PARAGRAPH_SPACE_BEFORE_MM = 2
PDF_PARAGRAPH_SPACE_AFTER_MM = 3
PDF_RULE_SPACING_MM = 4
PDF_LIST_SPACING_MM = 2
PDF_LIST_ITEM_GAP_MM = 1
PDF_TABLE_SPACING_MM = 4

PDF_RULE_COLOR: RGB = (128, 128, 128)
PDF_RULE_WIDTH = 0.85  # 0.3 mm

DEFAULT_CREATOR = "html2all"
