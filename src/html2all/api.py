#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2all/api.py
"""Public conversion functions for html2all.

Each function accepts one HTML document or an ordered batch of documents
(raw markup strings, bytes or already parsed BeautifulSoup trees) and
produces a single artifact. When ``output`` is given the artifact is written
there and nothing is returned; otherwise the in-memory artifact is returned.

Keyword arguments are split between the parser and renderer options by field
name, so ``html_to_pdf(html, page_size="letter", html_parser="lxml")`` works
without building options objects by hand.

"""

from __future__ import annotations

import logging
from dataclasses import fields
from typing import TYPE_CHECKING, Any, Optional, TypeVar, Union, get_args

from html2all.constants import OutputFormat
from html2all.exceptions import ValidationError
from html2all.options.base import CloneFrozenMixin
from html2all.options.docx import DocxRendererOptions
from html2all.options.html import HtmlParserOptions
from html2all.options.markdown import MarkdownRendererOptions
from html2all.options.pdf import PdfRendererOptions
from html2all.parsers.html import HtmlDocuments
from html2all.renderers.base import BaseRenderer
from html2all.renderers.docx import DocxRenderer
from html2all.renderers.markdown import MarkdownRenderer
from html2all.renderers.pdf import PdfRenderer
from html2all.utils.io_utils import OutputTarget

if TYPE_CHECKING:
    from docx.document import Document

    from html2all.canvas import PageCanvas

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", bound=CloneFrozenMixin)

_RENDERERS: dict[str, tuple[type[BaseRenderer], type]] = {
    "markdown": (MarkdownRenderer, MarkdownRendererOptions),
    "docx": (DocxRenderer, DocxRendererOptions),
    "pdf": (PdfRenderer, PdfRendererOptions),
}


def _split_kwargs(options_class: type, kwargs: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split ``kwargs`` into the fields of ``options_class`` and the rest."""
    names = {f.name for f in fields(options_class)}
    matched = {k: v for k, v in kwargs.items() if k in names}
    remaining = {k: v for k, v in kwargs.items() if k not in names}
    return matched, remaining


def _create_options_from_kwargs(
    options_class: type[OptionsT],
    base_options: Optional[OptionsT],
    options_type_name: str,
    **kwargs: Any,
) -> Optional[OptionsT]:
    """Create or update an options object from keyword arguments.

    Parameters
    ----------
    options_class : type
        The options class to instantiate
    base_options : options instance or None
        Pre-configured options; keyword arguments override its fields
    options_type_name : str
        Name of the options type for logging (e.g., "parser" or "renderer")
    **kwargs
        Field values for the options class

    Returns
    -------
    options instance or None
        ``base_options`` unchanged when there are no kwargs, otherwise a new
        instance with the kwargs applied

    """
    if not kwargs:
        return base_options
    logger.debug(f"Applying {options_type_name} options from kwargs: {sorted(kwargs)}")
    if base_options is None:
        return options_class(**kwargs)
    return base_options.create_updated(**kwargs)


def _build_renderer(
    target_format: str,
    parser_options: Optional[HtmlParserOptions],
    renderer_options: Any,
    kwargs: dict[str, Any],
) -> BaseRenderer:
    if target_format not in _RENDERERS:
        raise ValidationError(
            f"Unsupported output format: {target_format!r}. Expected one of {list(get_args(OutputFormat))}.",
            parameter_name="target_format",
            parameter_value=target_format,
        )
    renderer_class, options_class = _RENDERERS[target_format]

    renderer_kwargs, remaining = _split_kwargs(options_class, kwargs)
    parser_kwargs, unknown = _split_kwargs(HtmlParserOptions, remaining)
    if unknown:
        logger.debug(f"Skipping unknown options: {sorted(unknown)}")

    if renderer_options is not None and not isinstance(renderer_options, options_class):
        # Renderer raises InvalidOptionsError
        return renderer_class(renderer_options, parser_options)

    renderer_options = _create_options_from_kwargs(options_class, renderer_options, "renderer", **renderer_kwargs)
    parser_options = _create_options_from_kwargs(HtmlParserOptions, parser_options, "parser", **parser_kwargs)
    return renderer_class(renderer_options, parser_options)


def html_to_markdown(
    documents: HtmlDocuments,
    output: Optional[OutputTarget] = None,
    *,
    parser_options: Optional[HtmlParserOptions] = None,
    renderer_options: Optional[MarkdownRendererOptions] = None,
    **kwargs: Any,
) -> Optional[str]:
    """Convert HTML to Markdown.

    Parameters
    ----------
    documents : str, bytes, Tag or sequence of these
        One document or an ordered batch of documents. A batch is joined with
        a thematic break.
    output : str, Path, IO[bytes] or IO[str], optional
        Destination to write the Markdown to. When omitted the text is returned.
    parser_options : HtmlParserOptions, optional
        Options for parsing raw markup inputs
    renderer_options : MarkdownRendererOptions, optional
        Markdown formatting options
    kwargs : Any
        Individual option fields; they override fields of the options objects

    Returns
    -------
    str or None
        The Markdown text, or None when written to ``output``

    Raises
    ------
    ParsingError
        If an input document cannot be parsed
    OutputWriteError
        If ``output`` cannot be written

    Examples
    --------
        >>> html_to_markdown("<h1>Title</h1><p>Body.</p>")
        '# Title\\n\\nBody.'

    """
    renderer = _build_renderer("markdown", parser_options, renderer_options, kwargs)
    if output is None:
        return renderer.render_to_string(documents)
    renderer.render(documents, output)
    return None


def html_to_docx(
    documents: HtmlDocuments,
    output: Optional[OutputTarget] = None,
    *,
    parser_options: Optional[HtmlParserOptions] = None,
    renderer_options: Optional[DocxRendererOptions] = None,
    **kwargs: Any,
) -> Optional["Document"]:
    """Convert HTML to a Word document.

    Consecutive documents are separated by page breaks. Header and footer
    regions fill the section header and footer.

    Parameters
    ----------
    documents : str, bytes, Tag or sequence of these
        One document or an ordered batch of documents
    output : str, Path or IO[bytes], optional
        Destination for the .docx file. When omitted the python-docx
        ``Document`` is returned.
    parser_options : HtmlParserOptions, optional
        Options for parsing raw markup inputs
    renderer_options : DocxRendererOptions, optional
        Word document formatting options
    kwargs : Any
        Individual option fields; they override fields of the options objects

    Returns
    -------
    docx.document.Document or None
        The in-memory document, or None when written to ``output``

    Raises
    ------
    DependencyError
        If python-docx is not installed
    ParsingError
        If an input document cannot be parsed
    OutputWriteError
        If ``output`` cannot be written

    """
    renderer = _build_renderer("docx", parser_options, renderer_options, kwargs)
    if output is None:
        return renderer.convert(documents)
    renderer.render(documents, output)
    return None


def html_to_pdf(
    documents: HtmlDocuments,
    output: Optional[OutputTarget] = None,
    *,
    parser_options: Optional[HtmlParserOptions] = None,
    renderer_options: Optional[PdfRendererOptions] = None,
    **kwargs: Any,
) -> Optional["PageCanvas"]:
    """Convert HTML to PDF.

    Parameters
    ----------
    documents : str, bytes, Tag or sequence of these
        One document or an ordered batch of documents; each starts on a new page
    output : str, Path or IO[bytes], optional
        Destination for the PDF file. When omitted the finished
        :class:`~html2all.canvas.PageCanvas` is returned; call its
        ``to_bytes()`` or ``save()`` to produce the PDF.
    parser_options : HtmlParserOptions, optional
        Options for parsing raw markup inputs
    renderer_options : PdfRendererOptions, optional
        Page layout and font options
    kwargs : Any
        Individual option fields; they override fields of the options objects

    Returns
    -------
    PageCanvas or None
        The page canvas, or None when written to ``output``

    Raises
    ------
    DependencyError
        If fpdf2 is not installed
    ParsingError
        If an input document cannot be parsed
    OutputWriteError
        If ``output`` cannot be written

    """
    renderer = _build_renderer("pdf", parser_options, renderer_options, kwargs)
    if output is None:
        return renderer.convert(documents)
    renderer.render(documents, output)
    return None


def convert(
    documents: HtmlDocuments,
    target_format: OutputFormat,
    output: Optional[OutputTarget] = None,
    *,
    parser_options: Optional[HtmlParserOptions] = None,
    renderer_options: Optional[Union[MarkdownRendererOptions, DocxRendererOptions, PdfRendererOptions]] = None,
    **kwargs: Any,
) -> Any:
    """Convert HTML to any supported output format.

    Parameters
    ----------
    documents : str, bytes, Tag or sequence of these
        One document or an ordered batch of documents
    target_format : {"markdown", "docx", "pdf"}
        Output format
    output : str, Path or IO, optional
        Destination to write to. When omitted the in-memory artifact is returned.
    parser_options : HtmlParserOptions, optional
        Options for parsing raw markup inputs
    renderer_options : MarkdownRendererOptions, DocxRendererOptions or PdfRendererOptions, optional
        Options matching ``target_format``
    kwargs : Any
        Individual option fields

    Returns
    -------
    str, docx.document.Document, PageCanvas or None
        The artifact, or None when written to ``output``

    Raises
    ------
    ValidationError
        If ``target_format`` is not supported
    InvalidOptionsError
        If ``renderer_options`` does not match ``target_format``

    Examples
    --------
        >>> convert("<p>Hello</p>", "markdown")
        'Hello'
        >>> convert(["<h1>A</h1>", "<h1>B</h1>"], "pdf", "out.pdf")

    """
    if target_format == "markdown":
        return html_to_markdown(
            documents, output, parser_options=parser_options, renderer_options=renderer_options, **kwargs
        )
    if target_format == "docx":
        return html_to_docx(
            documents, output, parser_options=parser_options, renderer_options=renderer_options, **kwargs
        )
    if target_format == "pdf":
        return html_to_pdf(documents, output, parser_options=parser_options, renderer_options=renderer_options, **kwargs)
    raise ValidationError(
        f"Unsupported output format: {target_format!r}. Expected one of {list(get_args(OutputFormat))}.",
        parameter_name="target_format",
        parameter_value=target_format,
    )


__all__ = ["convert", "html_to_docx", "html_to_markdown", "html_to_pdf"]
