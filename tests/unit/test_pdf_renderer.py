#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_pdf_renderer.py
"""Unit tests for PdfRenderer.

Tests cover:
- Text placement, fonts and colours on the page canvas
- Centered content, explicit paragraph and heading alignment
- Bordered table grids and layout tables
- Lists, rules, footers and pagination

Note: These tests require fpdf2 to be installed.

"""

import pytest

try:
    import fpdf  # noqa: F401

    FPDF_AVAILABLE = True
except ImportError:
    FPDF_AVAILABLE = False

from html2all.exceptions import InvalidOptionsError
from html2all.options import MarkdownRendererOptions, PdfRendererOptions
from html2all.renderers.pdf import PdfRenderer

pytestmark = pytest.mark.skipif(not FPDF_AVAILABLE, reason="fpdf2 not installed")


def layout(html, **options):
    return PdfRenderer(PdfRendererOptions(**options)).convert(html)


def find_op(page, text):
    for op in page.text_ops:
        if op.text.strip() == text:
            return op
    raise AssertionError(f"No text op {text!r} in {[op.text for op in page.text_ops]}")


@pytest.mark.unit
@pytest.mark.pdf
class TestText:
    """Tests for text placement and fonts."""

    def test_paragraph_text_at_left_margin(self):
        canvas = layout("<p>Hello world</p>")
        op = find_op(canvas.records[0], "Hello world")
        assert op.x == pytest.approx(canvas.l_margin)
        assert op.align == "L"
        assert op.font_name == "Helvetica"
        assert op.font_size == 11

    def test_paragraphs_stack_vertically(self):
        canvas = layout("<p>First</p><p>Second</p>")
        page = canvas.records[0]
        assert find_op(page, "Second").y > find_op(page, "First").y

    def test_heading_bold_with_size_table(self):
        canvas = layout("<h1>Big</h1><h2>Smaller</h2>")
        page = canvas.records[0]
        big, smaller = find_op(page, "Big"), find_op(page, "Smaller")
        assert big.font_name == "Helvetica-Bold"
        assert big.font_size == 22
        assert smaller.font_size == 18

    def test_emphasis_style_mask(self):
        canvas = layout("<p><b>bold</b> <i><b>both</b></i> plain</p>")
        page = canvas.records[0]
        assert find_op(page, "bold").font_name == "Helvetica-Bold"
        assert find_op(page, "both").font_name == "Helvetica-BoldOblique"
        assert find_op(page, "plain").font_name == "Helvetica"

    def test_inline_runs_share_a_line(self):
        canvas = layout("<p>one <b>two</b> three</p>")
        page = canvas.records[0]
        one, two = find_op(page, "one"), find_op(page, "two")
        assert one.y == two.y
        assert two.x > one.x

    def test_anchor_underlined_and_coloured(self):
        canvas = layout('<p><a href="/x">link</a></p>')
        op = find_op(canvas.records[0], "link")
        assert op.underline
        assert op.color == (0, 0, 255)

    def test_font_overrides(self):
        canvas = layout('<p><font size="6" color="#FF0000" face="times new roman">styled</font></p>')
        op = find_op(canvas.records[0], "styled")
        assert op.font_size == 24
        assert op.color == (255, 0, 0)
        assert op.font_name == "Times-Roman"

    def test_font_fallbacks(self):
        canvas = layout('<p><font size="x" color="#F00" face="Wingdings">odd</font></p>')
        op = find_op(canvas.records[0], "odd")
        assert op.font_size == 11
        assert op.color == (0, 0, 0)
        assert op.font_name == "Helvetica"

    def test_overrides_do_not_leak_to_siblings(self):
        canvas = layout('<p><font size="7">big</font> normal</p>')
        page = canvas.records[0]
        assert find_op(page, "big").font_size == 36
        assert find_op(page, "normal").font_size == 11

    def test_code_uses_courier(self):
        canvas = layout("<p><code>inline</code></p><pre>line one\nline two</pre>")
        page = canvas.records[0]
        assert find_op(page, "inline").font_name == "Courier"
        one, two = find_op(page, "line one"), find_op(page, "line two")
        assert one.font_name == "Courier"
        assert two.y > one.y

    def test_skipped_and_images_not_drawn(self):
        canvas = layout('<head><title>Hidden</title></head><p>Shown</p><img src="a.png" alt="alt"><script>x</script>')
        text = canvas.records[0].text
        assert "Shown" in text
        assert "Hidden" not in text
        assert "alt" not in text
        assert "x" not in text.replace("Shown", "")

    def test_line_break_moves_down(self):
        canvas = layout("<p>a<br>b</p>")
        page = canvas.records[0]
        assert find_op(page, "b").y > find_op(page, "a").y

    def test_unencodable_characters_replaced(self):
        canvas = layout("<p>café → bar</p>")
        assert find_op(canvas.records[0], "café ? bar")
        assert canvas.to_bytes().startswith(b"%PDF")


@pytest.mark.unit
@pytest.mark.pdf
class TestAlignment:
    """Tests for <center> and align attributes."""

    def test_center_between_left_aligned_siblings(self):
        canvas = layout("<p>Before</p><center>Middle</center><p>After</p>")
        page = canvas.records[0]
        before, middle, after = find_op(page, "Before"), find_op(page, "Middle"), find_op(page, "After")

        assert (before.align, middle.align, after.align) == ("L", "C", "L")
        assert middle.x == pytest.approx(canvas.l_margin)
        assert middle.width == pytest.approx(canvas.epw)
        assert after.x == pytest.approx(canvas.l_margin)
        assert before.y < middle.y < after.y

    def test_centered_heading(self):
        canvas = layout("<center><h1>Title</h1></center>")
        op = find_op(canvas.records[0], "Title")
        assert op.align == "C"
        assert op.width == pytest.approx(canvas.epw)

    def test_heading_align_attribute(self):
        canvas = layout('<h1 align="center">Title</h1><h2 align="right">Sub</h2><h3>Plain</h3>')
        page = canvas.records[0]
        assert find_op(page, "Title").align == "C"
        assert find_op(page, "Sub").align == "R"
        assert find_op(page, "Plain").align == "L"

    def test_heading_align_below_center(self):
        canvas = layout('<center><h2 align="left">Left</h2><h2>Still centered</h2></center>')
        page = canvas.records[0]
        assert find_op(page, "Left").align == "L"
        assert find_op(page, "Still centered").align == "C"

    def test_right_aligned_paragraph(self):
        canvas = layout('<p align="right">Right</p>')
        op = find_op(canvas.records[0], "Right")
        assert op.align == "R"
        assert op.x == pytest.approx(canvas.l_margin)
        assert op.width == pytest.approx(canvas.epw)

    def test_paragraph_align_below_center(self):
        canvas = layout('<center><p align="right">Right</p><p>Centered</p></center>')
        page = canvas.records[0]
        assert find_op(page, "Right").align == "R"
        assert find_op(page, "Centered").align == "C"

    def test_left_paragraph_below_center_flows_inline_runs(self):
        canvas = layout('<center><p align="left"><b>bold</b> tail</p></center>')
        page = canvas.records[0]
        bold, tail = find_op(page, "bold"), find_op(page, "tail")
        assert bold.align == tail.align == "L"
        assert bold.x == pytest.approx(canvas.l_margin)
        assert tail.y == bold.y

    def test_center_inside_aligned_paragraph(self):
        canvas = layout('<p align="right">a<center>b</center>c</p>')
        page = canvas.records[0]
        assert find_op(page, "a").align == "R"
        assert find_op(page, "b").align == "C"
        assert find_op(page, "c").align == "R"


@pytest.mark.unit
@pytest.mark.pdf
class TestTables:
    """Tests for bordered grids and layout tables."""

    def test_column_count_invariant(self):
        html = (
            '<table border="1">'
            "<tr><td>a</td><td>b</td><td>c</td></tr>"
            "<tr><td>d</td></tr>"
            "<tr><td>e</td><td>f</td></tr>"
            "</table>"
        )
        canvas = layout(html)
        cells = canvas.records[0].bordered_cells
        column_width = canvas.epw / 3

        assert len(cells) == 6
        assert all(cell.width == pytest.approx(column_width) for cell in cells)
        rows = sorted({cell.y for cell in cells})
        assert len(rows) == 3
        # Every row starts at the same x; short rows leave trailing positions empty
        for y in rows:
            row_cells = sorted((cell for cell in cells if cell.y == y), key=lambda cell: cell.x)
            for index, cell in enumerate(row_cells):
                assert cell.x == pytest.approx(canvas.l_margin + index * column_width)

    def test_row_height_from_options(self):
        canvas = layout('<table border="1"><tr><td>a</td></tr></table>', table_row_height=30)
        assert canvas.records[0].bordered_cells[0].height == 30

    def test_percentage_width_centered(self):
        canvas = layout('<table border="1" width="50%"><tr><td>a</td><td>b</td></tr></table>')
        cells = sorted(canvas.records[0].bordered_cells, key=lambda cell: cell.x)
        assert cells[0].width == pytest.approx(canvas.epw / 4)
        assert cells[0].x == pytest.approx(canvas.l_margin + canvas.epw / 4)

    def test_header_cells_bold(self):
        canvas = layout('<table border="1"><tr><th>Head</th></tr><tr><td>Data</td></tr></table>')
        page = canvas.records[0]
        assert find_op(page, "Head").font_name == "Helvetica-Bold"
        assert find_op(page, "Data").font_name == "Helvetica"

    def test_long_cell_text_clipped_to_column(self):
        long_text = "word " * 60
        canvas = layout(f'<table border="1"><tr><td>{long_text}</td><td>b</td></tr></table>')
        canvas.use_font("Helvetica", "", 11)
        for cell in canvas.records[0].bordered_cells:
            assert canvas.get_string_width(cell.text) <= cell.width - 2 * canvas.c_margin + 0.01

    def test_layout_table_flows_content(self):
        canvas = layout("<table><tr><td>left</td><td>right</td></tr></table>")
        page = canvas.records[0]
        assert page.bordered_cells == []
        assert "left" in page.text and "right" in page.text

    def test_table_without_rows(self):
        canvas = layout('<table border="1"></table><p>after</p>')
        assert canvas.records[0].bordered_cells == []


@pytest.mark.unit
@pytest.mark.pdf
class TestListsRulesFooters:
    """Tests for lists, rules, footers and pagination."""

    def test_unordered_list_markers(self):
        canvas = layout("<ul><li>Alpha</li><li>Beta</li></ul>")
        page = canvas.records[0]
        assert "• Alpha" in page.text
        alpha, beta = find_op(page, "Alpha"), find_op(page, "Beta")
        assert beta.y > alpha.y
        marker = find_op(page, "•")
        assert marker.x == pytest.approx(canvas.l_margin + PdfRendererOptions().list_indent)

    def test_ordered_list_markers(self):
        canvas = layout("<ol><li>One</li><li>Two</li></ol>")
        text = canvas.records[0].text
        assert "1. One" in text
        assert "2. Two" in text

    def test_rule_drawn_across_usable_width(self):
        canvas = layout("<p>a</p><hr><p>b</p>")
        line = canvas.records[0].line_ops[0]
        assert line.x1 == pytest.approx(canvas.l_margin)
        assert line.x2 == pytest.approx(canvas.w - canvas.r_margin)
        assert line.y1 == line.y2
        assert line.color == (128, 128, 128)

    def test_documents_start_on_new_pages(self):
        canvas = layout(["<h1>One</h1>", "<h1>Two</h1>", "<h1>Three</h1>"])
        assert canvas.page_count == 3
        assert "Two" in canvas.records[1].text

    def test_footer_on_every_page(self):
        canvas = layout(["<p>Page one</p><footer>Confidential<br>Internal</footer>", "<p>Page two</p>"])
        canvas.to_bytes()
        offset = PdfRendererOptions().footer_offset
        for page in canvas.records:
            footer_ops = [op for op in page.text_ops if op.text in ("Confidential", "Internal")]
            assert len(footer_ops) == 2
            assert all(op.font_size == 9 and op.align == "C" for op in footer_ops)
            assert footer_ops[0].y == pytest.approx(canvas.h - offset)
            assert footer_ops[1].y > footer_ops[0].y

    def test_footer_applies_from_its_page_on(self):
        canvas = layout(["<p>One</p>", "<p>Two</p><footer>Late</footer>", "<p>Three</p>"])
        canvas.to_bytes()
        assert ["Late" in page.text for page in canvas.records] == [False, True, True]

    def test_footer_not_drawn_in_flow(self):
        canvas = layout("<footer>Bottom</footer><p>Body</p>")
        assert "Bottom" not in canvas.records[0].text
        body = find_op(canvas.records[0], "Body")
        assert body.y < canvas.h / 2

    def test_long_content_breaks_pages(self):
        html = "".join(f"<p>Paragraph {i}</p>" for i in range(120))
        canvas = layout(html)
        assert canvas.page_count > 1
        for page in canvas.records:
            for op in page.text_ops:
                assert op.y + op.height <= canvas.page_break_trigger + 0.01
        assert "Paragraph 119" in canvas.records[-1].text


@pytest.mark.unit
@pytest.mark.pdf
class TestRendererInterface:
    """Tests for the BaseRenderer entry points."""

    def test_render_to_bytes(self):
        data = PdfRenderer().render_to_bytes("<h1>Report</h1><p>Body</p>")
        assert data.startswith(b"%PDF")

    def test_render_to_file(self, tmp_path):
        target = tmp_path / "out.pdf"
        PdfRenderer(PdfRendererOptions(page_size="letter")).render("<p>x</p>", target)
        assert target.read_bytes().startswith(b"%PDF")

    def test_page_size_option(self):
        canvas = layout("<p>x</p>", page_size="letter")
        assert (canvas.w, canvas.h) == pytest.approx((612.0, 792.0))

    def test_wrong_options_type(self):
        with pytest.raises(InvalidOptionsError):
            PdfRenderer(MarkdownRendererOptions())

    def test_render_to_string_not_supported(self):
        with pytest.raises(NotImplementedError):
            PdfRenderer().render_to_string("<p>x</p>")
