#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_api.py
"""Integration tests for the public conversion API.

These tests run whole documents through :func:`html2all.convert` and the
per-format helpers, covering option handling and output destinations.

"""

from io import BytesIO

import pytest

try:
    import docx  # noqa: F401

    DOCX_AVAILABLE = True
except ImportError:
    DOCX_AVAILABLE = False

try:
    import fpdf  # noqa: F401

    FPDF_AVAILABLE = True
except ImportError:
    FPDF_AVAILABLE = False

from html2all import (
    HtmlParserOptions,
    MarkdownRendererOptions,
    PdfRendererOptions,
    convert,
    html_to_docx,
    html_to_markdown,
    html_to_pdf,
)
from html2all.exceptions import InvalidOptionsError, OutputWriteError, ValidationError

requires_docx = pytest.mark.skipif(not DOCX_AVAILABLE, reason="python-docx not installed")
requires_fpdf = pytest.mark.skipif(not FPDF_AVAILABLE, reason="fpdf2 not installed")


@pytest.mark.integration
class TestMarkdownApi:
    """End-to-end Markdown conversion."""

    def test_sample_page(self, sample_html):
        result = html_to_markdown(sample_html)
        assert "# Quarterly report" in result
        assert "Revenue grew **12%** compared to *last quarter*." in result
        assert "- North region\n- South region" in result
        assert "| Region | Sales |\n| --- | --- |\n| North | 120 |" in result
        assert "p { color" not in result
        assert "\n\n\n" not in result

    def test_write_to_file_returns_none(self, tmp_path):
        target = tmp_path / "out.md"
        assert html_to_markdown("<h2>Saved</h2>", target) is None
        assert target.read_text(encoding="utf-8") == "## Saved"

    def test_kwargs_override_options(self):
        options = MarkdownRendererOptions(underline_tag="ins")
        result = html_to_markdown(
            ["<p><u>a</u></p>", "<p>b</p>"],
            renderer_options=options,
            document_separator="***",
        )
        assert result == "<ins>a</ins>\n\n***\n\nb"

    def test_parser_kwargs_routed_to_parser(self):
        escaped = "\\u003cb\\u003ebold\\u003c/b\\u003e"
        assert html_to_markdown(escaped, unescape_unicode_sequences=True) == "**bold**"

    def test_parser_options_object(self):
        options = HtmlParserOptions(unescape_unicode_sequences=True)
        assert html_to_markdown("\\u003ci\\u003ex\\u003c/i\\u003e", parser_options=options) == "*x*"

    def test_unknown_kwargs_ignored(self):
        assert html_to_markdown("<p>x</p>", not_an_option=True) == "x"

    def test_wrong_renderer_options_type(self):
        with pytest.raises(InvalidOptionsError):
            html_to_markdown("<p>x</p>", renderer_options=PdfRendererOptions())

    def test_unwritable_output(self, tmp_path):
        with pytest.raises(OutputWriteError):
            html_to_markdown("<p>x</p>", tmp_path / "missing" / "out.md")


@pytest.mark.integration
@pytest.mark.docx
@requires_docx
class TestDocxApi:
    """End-to-end DOCX conversion."""

    def test_sample_page(self, sample_html):
        document = html_to_docx(sample_html)
        body_text = [p.text for p in document.paragraphs if p.text.strip()]
        assert "Quarterly report" in body_text
        assert "• North region" in body_text
        assert "Confidential" not in body_text
        assert len(document.tables) == 1
        assert document.tables[0].cell(1, 0).text == "North"

        section = document.sections[0]
        assert [p.text for p in section.header.paragraphs if p.text] == ["ACME Corp"]
        assert [p.text for p in section.footer.paragraphs if p.text] == ["Confidential"]

    def test_write_to_stream(self):
        buffer = BytesIO()
        assert html_to_docx("<p>x</p>", buffer) is None
        assert buffer.getvalue().startswith(b"PK")

    def test_kwargs(self):
        document = html_to_docx("<p>x</p>", default_font="Arial", default_font_size=10)
        normal = document.styles["Normal"]
        assert normal.font.name == "Arial"
        assert normal.font.size.pt == 10


@pytest.mark.integration
@pytest.mark.pdf
@requires_fpdf
class TestPdfApi:
    """End-to-end PDF conversion."""

    def test_sample_page(self, sample_html):
        canvas = html_to_pdf(sample_html)
        canvas.to_bytes()
        page = canvas.records[0]
        assert "Quarterly report" in page.text
        assert "• North region" in page.text
        assert len(page.bordered_cells) == 6
        assert any(op.text == "Confidential" for op in page.text_ops)

    def test_kwargs_select_page_size(self):
        canvas = html_to_pdf("<p>x</p>", page_size="letter")
        assert canvas.w == pytest.approx(612)

    def test_write_to_file(self, tmp_path):
        target = tmp_path / "out.pdf"
        assert html_to_pdf(["<p>one</p>", "<p>two</p>"], target) is None
        assert target.read_bytes().startswith(b"%PDF")


@pytest.mark.integration
class TestConvertDispatch:
    """Tests for the format-dispatching entry point."""

    def test_markdown(self):
        assert convert("<h1>T</h1>", "markdown") == "# T"

    @requires_docx
    def test_docx(self):
        document = convert("<p>x</p>", "docx")
        assert [p.text for p in document.paragraphs if p.text] == ["x"]

    @requires_fpdf
    def test_pdf(self, tmp_path):
        target = tmp_path / "out.pdf"
        convert("<p>x</p>", "pdf", target, margin_left=72.0)
        assert target.read_bytes().startswith(b"%PDF")

    def test_unknown_format(self):
        with pytest.raises(ValidationError):
            convert("<p>x</p>", "rtf")

    def test_batch_order_preserved(self):
        result = convert(["<p>first</p>", "<p>second</p>", "<p>third</p>"], "markdown")
        assert result.index("first") < result.index("second") < result.index("third")
