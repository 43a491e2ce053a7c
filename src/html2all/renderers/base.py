#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2all/renderers/base.py
"""Base classes for HTML renderers.

This module defines the abstract base class that the Markdown, DOCX and PDF
renderers inherit from. The BaseRenderer owns input normalization (raw
markup is parsed, trees are passed through), per-document error tagging and
the persistence step shared by every output format.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from io import BytesIO
from pathlib import Path
from typing import IO, Any, Callable, Union

from bs4.element import Tag

from html2all.exceptions import Html2AllError, InvalidOptionsError, RenderingError
from html2all.options.base import BaseRendererOptions
from html2all.options.html import HtmlParserOptions
from html2all.parsers.html import HtmlDocuments, HtmlParser
from html2all.utils.io_utils import write_content

logger = logging.getLogger(__name__)


class BaseRenderer(ABC):
    """Abstract base class for all HTML renderers.

    Every renderer walks one or more parsed HTML trees and produces a single
    artifact. Subclasses implement :meth:`convert`, which returns the
    in-memory artifact, and :meth:`render`, which persists it.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options
    parser_options : HtmlParserOptions or None, default = None
        Options for parsing raw markup inputs

    Examples
    --------
    Creating a custom renderer:

        >>> from html2all.renderers.base import BaseRenderer
        >>>
        >>> class TextRenderer(BaseRenderer):
        ...     def convert(self, documents):
        ...         trees = self._prepare_documents(documents)
        ...         return "\\n".join(tree.get_text() for tree in trees)
        ...
        ...     def render(self, documents, output):
        ...         write_content(self.convert(documents), output)

    """

    def __init__(self, options: BaseRendererOptions | None = None, parser_options: HtmlParserOptions | None = None):
        """Initialize the renderer with optional configuration.

        Parameters
        ----------
        options : BaseRendererOptions or None, default = None
            Format-specific rendering options. If None, default options will be used.
        parser_options : HtmlParserOptions or None, default = None
            Options for the parser used on raw markup inputs.

        """
        self.options = options
        self.parser = HtmlParser(parser_options)

    @abstractmethod
    def convert(self, documents: HtmlDocuments) -> Any:
        """Walk the documents and return the in-memory artifact.

        Parameters
        ----------
        documents : str, bytes, Tag or sequence of these
            One document or an ordered batch of documents

        Raises
        ------
        ParsingError
            If a raw markup input cannot be parsed
        RenderingError
            If the walk fails unexpectedly

        """

    @abstractmethod
    def render(self, documents: HtmlDocuments, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Convert the documents and write the result to ``output``.

        The artifact is built completely before anything is written.

        Raises
        ------
        OutputWriteError
            If the output cannot be written

        """

    def render_to_string(self, documents: HtmlDocuments) -> str:
        """Render the documents to a string (if applicable).

        Raises
        ------
        NotImplementedError
            If the renderer does not support string output

        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support rendering to a string.")

    def render_to_bytes(self, documents: HtmlDocuments) -> bytes:
        """Render the documents to bytes.

        Creates a BytesIO buffer, calls :meth:`render` with it and returns
        the bytes.

        Examples
        --------
            >>> from html2all.renderers.docx import DocxRenderer
            >>> content = DocxRenderer().render_to_bytes("<p>test</p>")
            >>> content.startswith(b"PK")  # DOCX is a ZIP file
            True

        """
        buffer = BytesIO()
        self.render(documents, buffer)
        return buffer.getvalue()

    def _prepare_documents(self, documents: HtmlDocuments) -> list[Tag]:
        """Parse raw inputs and return one tree per document."""
        trees = self.parser.parse_all(documents)
        logger.debug(f"{self.__class__.__name__} received {len(trees)} document(s)")
        return trees

    def _render_each(
        self,
        trees: list[Tag],
        render_one: Callable[[Tag], None],
        between: Callable[[], None] | None = None,
    ) -> None:
        """Walk every tree, calling ``between`` before each tree after the first.

        Unexpected exceptions are wrapped in :class:`RenderingError` tagged
        with the index of the document being walked.
        """
        for index, tree in enumerate(trees):
            if index and between is not None:
                between()
            try:
                render_one(tree)
            except Html2AllError:
                raise
            except Exception as e:
                raise RenderingError(
                    f"Failed to render document {index}: {e!r}",
                    rendering_stage="walk",
                    document_index=index,
                    original_error=e,
                ) from e

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_output(content: Union[str, bytes], output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write finished output to a path or stream."""
        write_content(content, output)
