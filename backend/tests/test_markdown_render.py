"""
Unit tests for the markdown renderer.

Covers the three layers separately (inline spans, block segmentation and
classification, HTML assembly) plus the properties the result cards rely
on: pipe blocks without a separator stay paragraphs, heading markers are
matched most-specific first, and a bare URL after a link is never
wrapped twice.
"""

import re

from content_analyzer.services.markdown_blocks import (
    BlockKind,
    classify_block,
    parse_blocks,
    segment_blocks,
    split_table_row,
    strip_code_fence,
)
from content_analyzer.services.markdown_inline import (
    LINK_ATTRIBUTES,
    SpanKind,
    render_inline,
    tokenize_inline,
)
from content_analyzer.services.markdown_render import render_markdown


def _hrefs(html: str) -> list[str]:
    return re.findall(r'href="([^"]+)"', html)


# --- Inline spans ---

def test_bold_and_italic():
    assert render_inline("**bold** and _it_") == "<strong>bold</strong> and <em>it</em>"


def test_markdown_link():
    html = render_inline("[Docs](https://example.com/docs)")
    assert html == f'<a href="https://example.com/docs" {LINK_ATTRIBUTES}>Docs</a>'


def test_links_open_in_new_context_without_referrer():
    html = render_inline("https://example.com")
    assert 'target="_blank"' in html
    assert 'rel="noopener noreferrer"' in html


def test_bare_url_after_link_is_not_double_wrapped():
    """[x](http://a.com) http://b.com → exactly two anchors."""
    html = render_inline("[x](http://a.com) http://b.com")

    assert html.count("<a ") == 2
    assert _hrefs(html) == ["http://a.com", "http://b.com"]
    assert ">x</a>" in html
    assert ">http://b.com</a>" in html


def test_bare_url_uses_url_as_label():
    spans = tokenize_inline("visit https://example.com today")
    assert [s.kind for s in spans] == [SpanKind.TEXT, SpanKind.AUTOLINK, SpanKind.TEXT]
    assert spans[1].href == spans[1].text == "https://example.com"


def test_trailing_punctuation_is_not_part_of_url():
    html = render_inline("See https://example.com/a_b_c.")
    assert _hrefs(html) == ["https://example.com/a_b_c"]
    assert html.endswith("</a>.")


def test_parenthesized_url():
    html = render_inline("(see https://example.com)")
    assert _hrefs(html) == ["https://example.com"]
    assert html.endswith("</a>)")


def test_underscores_inside_words_are_not_emphasis():
    assert render_inline("call my_func_name now") == "call my_func_name now"


def test_link_label_is_not_autolinked():
    html = render_inline("[http://a.com](http://a.com)")
    assert html.count("<a ") == 1


def test_bold_wrapping_a_link():
    html = render_inline("**[x](http://a.com)**")
    assert html.startswith("<strong><a href=\"http://a.com\"")
    assert html.endswith("</a></strong>")


def test_existing_html_anchor_passes_through():
    raw = '<a href="http://a.com">a</a>'
    assert render_inline(raw) == raw


def test_plain_text_is_unchanged():
    assert render_inline("nothing to see here") == "nothing to see here"


# --- Block segmentation ---

def test_segment_strips_wrapping_code_fence():
    text = "```markdown\n# Title\n\nBody text\n```"
    assert segment_blocks(text) == ["# Title", "Body text"]


def test_strip_code_fence_leaves_unfenced_text():
    assert strip_code_fence("# Title") == "# Title"


def test_segment_strips_md_fence():
    assert segment_blocks("```md\n## Notes\n\n- one\n```") == ["## Notes", "- one"]


def test_inner_code_fence_is_left_alone():
    text = "# T\n\n```py\nx\n```"
    assert strip_code_fence(text) == text
    assert segment_blocks(text) == ["# T", "```py\nx\n```"]


def test_fence_with_other_language_is_left_alone():
    text = "```py\nx = 1\n```"
    assert strip_code_fence(text) == text


def test_segment_splits_on_blank_lines_and_drops_empties():
    text = "\n\nfirst\n\n\n\nsecond\n   \nthird\n\n"
    assert segment_blocks(text) == ["first", "second", "third"]


def test_segment_handles_windows_line_endings():
    assert segment_blocks("a\r\n\r\nb") == ["a", "b"]


def test_segment_keeps_single_newlines_inside_a_block():
    assert segment_blocks("line one\nline two") == ["line one\nline two"]


def test_segment_empty_input():
    assert segment_blocks("") == []
    assert segment_blocks("   \n\n  ") == []


# --- Tables ---

def test_well_formed_table():
    block = classify_block("| A | B |\n|---|---|\n| x | y |")

    assert block.kind is BlockKind.TABLE
    assert block.header == ("A", "B")
    assert block.rows == (("x", "y"),)


def test_well_formed_table_html():
    html = render_markdown("| A | B |\n|---|---|\n| x | y |")

    assert html == (
        '<div class="table-wrapper"><table>'
        "<thead><tr><th>A</th><th>B</th></tr></thead>"
        "<tbody><tr><td>x</td><td>y</td></tr></tbody>"
        "</table></div>"
    )


def test_pipe_block_without_separator_is_a_paragraph():
    html = render_markdown("| A | B |\n| x | y |")

    assert "<table" not in html
    assert html.startswith("<p>")


def test_separator_as_first_row_is_not_a_table():
    block = classify_block("|---|---|\n| x | y |")
    assert block.kind is BlockKind.PARAGRAPH


def test_table_with_alignment_colons():
    block = classify_block("| Name | Count |\n|:-----|------:|\n| apples | 3 |")
    assert block.kind is BlockKind.TABLE
    assert block.rows == (("apples", "3"),)


def test_table_drops_rows_with_only_empty_cells():
    block = classify_block("| A | B |\n|---|---|\n|  |  |\n| x | y |")
    assert block.rows == (("x", "y"),)


def test_table_cells_get_inline_rendering():
    html = render_markdown("| Tool | URL |\n|---|---|\n| **Gusto** | https://gusto.com |")
    assert "<td><strong>Gusto</strong></td>" in html
    assert _hrefs(html) == ["https://gusto.com"]


def test_split_table_row_splits_naively_on_pipes():
    assert split_table_row("| a | b |") == ["a", "b"]
    assert split_table_row("| a|b | c |") == ["a", "b", "c"]


# --- Headings, quotes, lists, paragraphs ---

def test_heading_levels():
    assert classify_block("# One").level == 1
    assert classify_block("## Two").level == 2
    assert classify_block("### Three").level == 3


def test_level_two_heading_is_never_level_one_or_three():
    block = classify_block("## Title")

    assert block.kind is BlockKind.HEADING
    assert block.level == 2
    assert block.text == "Title"
    assert render_markdown("## Title") == "<h2>Title</h2>"


def test_heading_marker_needs_a_space():
    assert classify_block("#hashtag").kind is BlockKind.PARAGRAPH
    assert classify_block("#### Deep").kind is BlockKind.PARAGRAPH


def test_blockquote_lines_are_joined():
    block = classify_block("> first line\n> second line")

    assert block.kind is BlockKind.BLOCKQUOTE
    assert block.text == "first line second line"
    assert render_markdown("> **quoted**") == "<blockquote><strong>quoted</strong></blockquote>"


def test_partial_quote_is_a_paragraph():
    assert classify_block("> quoted\nnot quoted").kind is BlockKind.PARAGRAPH


def test_unordered_list():
    html = render_markdown("- first\n* **second**")
    assert html == "<ul><li>first</li><li><strong>second</strong></li></ul>"


def test_bold_paragraph_is_not_a_list():
    assert classify_block("**Note:** read this").kind is BlockKind.PARAGRAPH


def test_ordered_list():
    block = classify_block("1. one\n2. two\n10. ten")

    assert block.kind is BlockKind.ORDERED_LIST
    assert block.items == ("one", "two", "ten")
    assert render_markdown("1. one\n2. two") == "<ol><li>one</li><li>two</li></ol>"


def test_paragraph_line_breaks():
    assert render_markdown("line one\nline two") == "<p>line one<br />line two</p>"


# --- Assembly ---

def test_blocks_render_in_source_order():
    html = render_markdown("# A\n\nsome text\n\n- x")
    assert html == "<h1>A</h1>\n<p>some text</p>\n<ul><li>x</li></ul>"


def test_render_empty_markdown():
    assert render_markdown("") == ""


def test_full_report_renders_every_section():
    from conftest import SAMPLE_REPORT

    kinds = [block.kind for block in parse_blocks(SAMPLE_REPORT)]
    assert kinds.count(BlockKind.HEADING) == 5
    assert BlockKind.TABLE in kinds
    assert BlockKind.ORDERED_LIST in kinds

    html = render_markdown(SAMPLE_REPORT)
    assert "<h1>Video Analysis Report</h1>" in html
    assert "https://www.skipgrants.com" in _hrefs(html)
    assert "https://gusto.com" in _hrefs(html)
