#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_markdown_renderer.py
"""Unit tests for MarkdownRenderer.

Tests cover:
- Headings, paragraphs and emphasis
- Lists, including nesting and numbering
- Tables and their separator rows
- Multi-document batches
- Pruned and unknown elements

"""

from io import BytesIO, StringIO

import pytest
from bs4 import BeautifulSoup

from html2all.exceptions import InvalidOptionsError, ParsingError
from html2all.options import DocxRendererOptions, MarkdownRendererOptions
from html2all.renderers.markdown import MarkdownRenderer


def render(html, **options):
    return MarkdownRenderer(MarkdownRendererOptions(**options)).convert(html)


@pytest.mark.unit
class TestBlocks:
    """Tests for block-level elements."""

    def test_heading_and_paragraph_are_separate_blocks(self):
        assert render("<h1>Title</h1><p>Body.</p>") == "# Title\n\nBody."

    @pytest.mark.parametrize("level", range(1, 7))
    def test_heading_levels(self, level):
        assert render(f"<h{level}>T</h{level}>") == "#" * level + " T"

    def test_paragraphs(self):
        assert render("<p>One</p><p>Two</p>") == "One\n\nTwo"

    def test_block_containers(self):
        assert render("<section>A</section><article>B</article>") == "A\n\nB"

    def test_rule(self):
        assert render("<p>a</p><hr><p>b</p>") == "a\n\n---\n\nb"

    def test_quote(self):
        assert render("<blockquote>Quoted</blockquote>") == "> Quoted"

    def test_code_block_uses_raw_text(self):
        result = render("<pre><code>x = 1\n  y = 2</code></pre>")
        assert result == "```\nx = 1\n  y = 2\n```"

    def test_line_break(self):
        assert render("<p>a<br>b</p>") == "a  \nb"

    def test_no_triple_newlines(self):
        result = render("<div><p>a</p></div><p></p><p></p><h2>b</h2><ul><li>c</li></ul><hr>")
        assert "\n\n\n" not in result

    def test_collapse_disabled_keeps_raw_spacing(self):
        result = render("<h1>Title</h1>", collapse_blank_lines=False)
        assert result == "\n# Title\n\n"


@pytest.mark.unit
class TestInline:
    """Tests for inline formatting."""

    def test_emphasis(self):
        assert render("<p>a <b>bold</b> and <i>italic</i></p>") == "a **bold** and *italic*"

    def test_nested_same_emphasis_not_rewrapped(self):
        assert render("<b><strong>x</strong></b>") == "**x**"

    def test_bold_italic(self):
        assert render("<b><em>x</em></b>") == "***x***"

    def test_underline_default_and_custom_tag(self):
        assert render("<u>x</u>") == "<u>x</u>"
        assert render("<u>x</u>", underline_tag="ins") == "<ins>x</ins>"

    def test_anchor(self):
        assert render('<a href="https://example.com">link</a>') == "[link](https://example.com)"

    def test_anchor_case_insensitive_attribute(self):
        tree = BeautifulSoup("<a>x</a>", "html.parser")
        tree.a.attrs["HREF"] = "/page"
        assert render(tree) == "[x](/page)"

    def test_image(self):
        assert render('<img src="chart.png" alt="Chart">') == "![Chart](chart.png)"

    def test_inline_code(self):
        assert render("<p>run <code>make</code></p>") == "run `make`"

    def test_unknown_tags_are_transparent(self):
        assert render("<p><custom-tag>kept</custom-tag></p>") == "kept"

    def test_font_and_center_pass_through(self):
        assert render('<center><font color="#FF0000">red</font></center>') == "red"


@pytest.mark.unit
class TestLists:
    """Tests for list rendering."""

    def test_unordered_items_on_separate_lines(self):
        result = render("<ul><li>A</li><li>B</li></ul>")
        assert result.splitlines() == ["- A", "- B"]

    def test_ordered_numbering(self):
        assert render("<ol><li>A</li><li>B</li><li>C</li></ol>") == "1. A\n2. B\n3. C"

    def test_each_list_restarts_numbering(self):
        result = render("<ol><li>A</li></ol><ol><li>B</li></ol>")
        assert result == "1. A\n\n1. B"

    def test_nested_list_indented(self):
        result = render("<ul><li>A<ul><li>B</li></ul></li><li>C</li></ul>")
        assert "- A\n  - B" in result
        assert "\n- C" in result

    def test_non_item_children_ignored(self):
        assert render("<ul>junk<li>A</li></ul>") == "- A"

    def test_stray_list_item(self):
        assert render("<li>alone</li>") == "alone"


@pytest.mark.unit
class TestTables:
    """Tests for table rendering."""

    def test_header_separator_data_order(self):
        lines = render("<table><tr><th>X</th></tr><tr><td>1</td></tr></table>").splitlines()
        assert lines == ["| X |", "| --- |", "| 1 |"]

    def test_separator_after_first_row_without_headers(self):
        lines = render("<table><tr><td>a</td><td>b</td></tr><tr><td>c</td><td>d</td></tr></table>").splitlines()
        assert lines == ["| a | b |", "| --- | --- |", "| c | d |"]

    def test_separator_width_uses_longest_row(self):
        lines = render("<table><tr><td>a</td></tr><tr><td>b</td><td>c</td></tr></table>").splitlines()
        assert lines[1] == "| --- | --- |"

    def test_wrapped_rows_found(self):
        html = "<table><thead><tr><th>H</th></tr></thead><tbody><tr><td>v</td></tr></tbody></table>"
        assert render(html).splitlines() == ["| H |", "| --- |", "| v |"]

    def test_cell_content_formatted_and_escaped(self):
        result = render("<table><tr><td><b>a|b</b>\n  c</td></tr></table>")
        assert result.splitlines()[0] == "| **a\\|b** c |"

    def test_empty_table_renders_nothing(self):
        assert render("<p>x</p><table></table>") == "x"


@pytest.mark.unit
class TestDocuments:
    """Tests for batches and pruning."""

    def test_two_documents_separated_by_thematic_break(self):
        result = render(["<h1>First</h1>", "<h1>Second</h1>"])
        assert result == "# First\n\n---\n\n# Second"
        assert "\n\n\n" not in result

    def test_custom_separator(self):
        assert render(["<p>a</p>", "<p>b</p>"], document_separator="***") == "a\n\n***\n\nb"

    def test_skipped_elements_pruned(self):
        html = "<html><head><title>T</title><style>p{}</style></head><body><p>B</p><script>x()</script></body></html>"
        assert render(html) == "B"

    def test_regions_render_inline_content(self):
        assert render("<header>Top</header><p>Body</p><footer>Bottom</footer>") == "TopBody\n\nBottom"

    def test_comments_ignored(self):
        assert render("<p>a<!-- note -->b</p>") == "ab"

    def test_parsed_tree_not_mutated(self):
        tree = BeautifulSoup("<h1>T</h1><p>x</p>", "html.parser")
        before = str(tree)
        render(tree)
        render(tree)
        assert str(tree) == before

    def test_parse_failure_reports_document_index(self):
        with pytest.raises(ParsingError) as exc_info:
            render(["<p>ok</p>", object()])
        assert exc_info.value.document_index == 1


@pytest.mark.unit
class TestRendererInterface:
    """Tests for the BaseRenderer entry points."""

    def test_render_to_string_and_bytes(self):
        renderer = MarkdownRenderer()
        assert renderer.render_to_string("<p>é</p>") == "é"
        assert renderer.render_to_bytes("<p>é</p>") == "é".encode("utf-8")

    def test_render_to_path(self, tmp_path):
        target = tmp_path / "out.md"
        MarkdownRenderer().render("<h2>Saved</h2>", target)
        assert target.read_text(encoding="utf-8") == "## Saved"

    def test_render_to_streams(self):
        text_stream, byte_stream = StringIO(), BytesIO()
        MarkdownRenderer().render("<p>x</p>", text_stream)
        MarkdownRenderer().render("<p>x</p>", byte_stream)
        assert text_stream.getvalue() == "x"
        assert byte_stream.getvalue() == b"x"

    def test_wrong_options_type(self):
        with pytest.raises(InvalidOptionsError):
            MarkdownRenderer(DocxRendererOptions())

    def test_renderer_reusable(self):
        renderer = MarkdownRenderer()
        assert renderer.convert("<ul><li>A</li></ul>") == "- A"
        assert renderer.convert("<p>B</p>") == "B"
