"""
Markdown → HTML fragment renderer for reports and articles.

Pipeline:
    report text → segment_blocks() → classify_block() → render_block()
                → render_inline() for each leaf text run → joined HTML

Every block renders independently; there is no state shared between
blocks. Output is an HTML fragment (no <html>/<body>) meant to be
dropped into a result card by the frontend.
"""

from content_analyzer.services.markdown_blocks import Block, BlockKind, parse_blocks
from content_analyzer.services.markdown_inline import render_inline


def _render_table(block: Block) -> str:
    header_cells = "".join(f"<th>{render_inline(cell)}</th>" for cell in block.header)
    body_rows = "".join(
        "<tr>" + "".join(f"<td>{render_inline(cell)}</td>" for cell in row) + "</tr>"
        for row in block.rows
    )
    return (
        '<div class="table-wrapper"><table>'
        f"<thead><tr>{header_cells}</tr></thead>"
        f"<tbody>{body_rows}</tbody>"
        "</table></div>"
    )


def _render_list(block: Block, tag: str) -> str:
    items = "".join(f"<li>{render_inline(item)}</li>" for item in block.items)
    return f"<{tag}>{items}</{tag}>"


def render_block(block: Block) -> str:
    """Render a single classified block as HTML."""
    if block.kind is BlockKind.TABLE:
        return _render_table(block)
    if block.kind is BlockKind.HEADING:
        return f"<h{block.level}>{render_inline(block.text)}</h{block.level}>"
    if block.kind is BlockKind.BLOCKQUOTE:
        return f"<blockquote>{render_inline(block.text)}</blockquote>"
    if block.kind is BlockKind.UNORDERED_LIST:
        return _render_list(block, "ul")
    if block.kind is BlockKind.ORDERED_LIST:
        return _render_list(block, "ol")
    # Paragraph: single newlines inside the block become line breaks
    html = render_inline(block.text).replace("\n", "<br />")
    return f"<p>{html}</p>"


def render_markdown(markdown: str) -> str:
    """Render a full markdown report into an HTML fragment.

    Never raises on malformed markdown — anything unrecognized is
    rendered as a paragraph.
    """
    if not markdown:
        return ""
    return "\n".join(render_block(block) for block in parse_blocks(markdown))
