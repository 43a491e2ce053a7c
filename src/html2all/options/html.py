#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2all/options/html.py
"""Configuration options for parsing HTML input."""

from __future__ import annotations

from dataclasses import dataclass, field

from html2all.constants import DEFAULT_HTML_PARSER, DEFAULT_UNESCAPE_UNICODE_SEQUENCES, HtmlParserName
from html2all.options.base import BaseParserOptions


@dataclass(frozen=True)
class HtmlParserOptions(BaseParserOptions):
    """Configuration options for the HTML parser.

    Parameters
    ----------
    html_parser : {"html.parser", "lxml", "html5lib"}, default "html.parser"
        BeautifulSoup tree builder. "html.parser" ships with Python; the
        others require their packages to be installed.
    unescape_unicode_sequences : bool, default False
        Decode literal ``\\uXXXX`` escape sequences (as produced by JSON
        encoders) before parsing.

    """

    html_parser: HtmlParserName = field(
        default=DEFAULT_HTML_PARSER,
        metadata={
            "help": "BeautifulSoup parser to use: 'html.parser', 'lxml' or 'html5lib'",
            "choices": ["html.parser", "lxml", "html5lib"],
            "importance": "core",
        },
    )
    unescape_unicode_sequences: bool = field(
        default=DEFAULT_UNESCAPE_UNICODE_SEQUENCES,
        metadata={"help": "Decode literal \\uXXXX escape sequences before parsing", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate the parser name.

        Raises
        ------
        ValueError
            If ``html_parser`` is not a supported tree builder.

        """
        if self.html_parser not in ("html.parser", "lxml", "html5lib"):
            raise ValueError(f"html_parser must be 'html.parser', 'lxml' or 'html5lib', got {self.html_parser!r}")
