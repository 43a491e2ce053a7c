#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2all/options/markdown.py
"""Configuration options for rendering Markdown."""

from __future__ import annotations

from dataclasses import dataclass, field

from html2all.constants import (
    DEFAULT_MARKDOWN_COLLAPSE_BLANK_LINES,
    DEFAULT_MARKDOWN_DOCUMENT_SEPARATOR,
    DEFAULT_MARKDOWN_UNDERLINE_TAG,
)
from html2all.options.base import BaseRendererOptions


@dataclass(frozen=True)
class MarkdownRendererOptions(BaseRendererOptions):
    """Configuration options for the Markdown renderer.

    Parameters
    ----------
    document_separator : str, default "---"
        Thematic break placed between consecutive input documents.
    underline_tag : str, default "u"
        HTML tag used to wrap underlined text, since Markdown has no
        native underline syntax.
    collapse_blank_lines : bool, default True
        Collapse runs of three or more newlines to a single blank line and
        strip the final text.

    """

    document_separator: str = field(
        default=DEFAULT_MARKDOWN_DOCUMENT_SEPARATOR,
        metadata={"help": "Thematic break between input documents", "importance": "core"},
    )
    underline_tag: str = field(
        default=DEFAULT_MARKDOWN_UNDERLINE_TAG,
        metadata={"help": "HTML tag wrapping underlined text", "importance": "advanced"},
    )
    collapse_blank_lines: bool = field(
        default=DEFAULT_MARKDOWN_COLLAPSE_BLANK_LINES,
        metadata={"help": "Collapse consecutive blank lines and strip the output", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If the separator or underline tag is empty.

        """
        if not self.document_separator.strip():
            raise ValueError("document_separator must not be blank")
        if not self.underline_tag.strip():
            raise ValueError("underline_tag must not be blank")
