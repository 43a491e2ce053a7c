#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2all/options/docx.py
"""Configuration options for rendering DOCX documents."""

from __future__ import annotations

from dataclasses import dataclass, field

from html2all.constants import (
    DEFAULT_DOCX_BULLET,
    DEFAULT_DOCX_CODE_FONT,
    DEFAULT_DOCX_FONT,
    DEFAULT_DOCX_FONT_SIZE,
    DEFAULT_DOCX_MARGIN_INCHES,
    DEFAULT_LINK_COLOR,
    RGB,
)
from html2all.options.base import BaseRendererOptions


@dataclass(frozen=True)
class DocxRendererOptions(BaseRendererOptions):
    """Configuration options for the DOCX renderer.

    Parameters
    ----------
    default_font : str, default "Calibri"
        Font of the Normal style.
    default_font_size : int, default 11
        Size of the Normal style in points.
    code_font : str, default "Courier New"
        Font for ``<code>`` and ``<pre>`` content.
    margin_inches : float, default 1.0
        Page margin applied to all four sides.
    use_heading_styles : bool, default True
        Assign the built-in "Heading N" paragraph styles to headings in
        addition to the direct bold/size formatting.
    bullet : str, default "•"
        Marker prefixed to unordered list items.
    link_color : tuple of int, default (0, 0, 255)
        RGB colour of anchor text.

    """

    default_font: str = field(
        default=DEFAULT_DOCX_FONT, metadata={"help": "Default font for body text", "importance": "core"}
    )
    default_font_size: int = field(
        default=DEFAULT_DOCX_FONT_SIZE,
        metadata={"help": "Default font size in points", "type": int, "importance": "core"},
    )
    code_font: str = field(
        default=DEFAULT_DOCX_CODE_FONT, metadata={"help": "Font for code spans and blocks", "importance": "advanced"}
    )
    margin_inches: float = field(
        default=DEFAULT_DOCX_MARGIN_INCHES,
        metadata={"help": "Page margin in inches", "type": float, "importance": "advanced"},
    )
    use_heading_styles: bool = field(
        default=True, metadata={"help": "Apply built-in Heading N styles to headings", "importance": "advanced"}
    )
    bullet: str = field(
        default=DEFAULT_DOCX_BULLET, metadata={"help": "Marker for unordered list items", "importance": "advanced"}
    )
    link_color: RGB = field(
        default=DEFAULT_LINK_COLOR, metadata={"help": "RGB colour of link text", "importance": "advanced"}
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges for DOCX renderer options.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.default_font_size <= 0:
            raise ValueError(f"default_font_size must be positive, got {self.default_font_size}")
        if self.margin_inches < 0:
            raise ValueError(f"margin_inches must be non-negative, got {self.margin_inches}")
