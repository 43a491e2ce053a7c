#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2all/parsers/html.py
"""HTML parser wrapping BeautifulSoup.

The renderers walk BeautifulSoup trees directly. This module turns raw
markup into such trees and normalizes mixed batches of raw strings and
already-parsed trees into one list, tagging failures with the index of the
offending document.

"""

from __future__ import annotations

import logging
import re
from typing import Sequence, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from html2all.constants import DEPS_HTML
from html2all.exceptions import DependencyError, InvalidOptionsError, ParsingError
from html2all.options.html import HtmlParserOptions
from html2all.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

HtmlInput = Union[str, bytes, Tag]
HtmlDocuments = Union[HtmlInput, Sequence[HtmlInput]]

_UNICODE_ESCAPE_RE = re.compile(r"\\u([0-9a-fA-F]{4})")


def unescape_unicode_sequences(text: str) -> str:
    r"""Replace literal ``\uXXXX`` escape sequences with their characters.

    Examples
    --------
        >>> unescape_unicode_sequences("\\u003cb\\u003ehi\\u003c/b\\u003e")
        '<b>hi</b>'

    """
    return _UNICODE_ESCAPE_RE.sub(lambda match: chr(int(match.group(1), 16)), text)


class HtmlParser:
    """Parse raw HTML into BeautifulSoup trees.

    Parameters
    ----------
    options : HtmlParserOptions or None, default None
        Parser configuration; defaults are used when None

    Examples
    --------
        >>> parser = HtmlParser()
        >>> soup = parser.parse("<p>Hello</p>")
        >>> soup.p.get_text()
        'Hello'

    """

    def __init__(self, options: HtmlParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        if options is not None and not isinstance(options, HtmlParserOptions):
            raise InvalidOptionsError(
                converter_name="html", expected_type=HtmlParserOptions, received_type=type(options)
            )
        self.options: HtmlParserOptions = options or HtmlParserOptions()

    @requires_dependencies("html", DEPS_HTML)
    def parse(self, html_content: str | bytes, document_index: int | None = None) -> BeautifulSoup:
        """Parse one HTML document.

        Parameters
        ----------
        html_content : str or bytes
            Markup to parse. Bytes are decoded as UTF-8.
        document_index : int or None, default None
            Position of the document in a batch, recorded on errors

        Returns
        -------
        BeautifulSoup
            The parsed tree. Malformed markup is repaired by the tree
            builder and never raises.

        Raises
        ------
        ParsingError
            If the content cannot be decoded or the tree builder fails
        DependencyError
            If the configured tree builder is not installed

        """
        from bs4.exceptions import FeatureNotFound

        if isinstance(html_content, bytes):
            try:
                html_content = html_content.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ParsingError(
                    f"Failed to decode document {document_index} as UTF-8",
                    parsing_stage="decoding",
                    document_index=document_index,
                    original_error=e,
                ) from e

        if self.options.unescape_unicode_sequences:
            html_content = unescape_unicode_sequences(html_content)

        try:
            soup = BeautifulSoup(html_content, self.options.html_parser)
        except FeatureNotFound as e:
            raise DependencyError(
                converter_name="html",
                missing_packages=[(self.options.html_parser, "")],
                message=f"Selected html_parser {self.options.html_parser!r} is not available: {e}",
            ) from e
        except Exception as e:
            raise ParsingError(
                f"Failed to parse document {document_index}: {e}",
                parsing_stage="tree_building",
                document_index=document_index,
                original_error=e,
            ) from e

        logger.debug(f"Parsed document {document_index} with {self.options.html_parser} ({len(html_content)} chars)")
        return soup

    def parse_all(self, documents: HtmlDocuments) -> list[Tag]:
        """Normalize a document or a batch of documents into parsed trees.

        Parameters
        ----------
        documents : str, bytes, Tag or sequence of these
            A single document or an ordered batch. Already-parsed trees are
            passed through untouched.

        Returns
        -------
        list of Tag
            One tree per input document, in input order

        Raises
        ------
        ParsingError
            If any document fails to parse or has an unsupported type

        """
        if isinstance(documents, (str, bytes, Tag)):
            documents = [documents]

        trees: list[Tag] = []
        for index, document in enumerate(documents):
            if isinstance(document, Tag):
                trees.append(document)
            elif isinstance(document, (str, bytes)):
                trees.append(self.parse(document, document_index=index))
            else:
                raise ParsingError(
                    f"Unsupported input type for document {index}: {type(document).__name__}",
                    parsing_stage="input_validation",
                    document_index=index,
                )
        return trees


__all__ = ["HtmlDocuments", "HtmlInput", "HtmlParser", "unescape_unicode_sequences"]
