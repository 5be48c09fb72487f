"""
Inline markdown spans — tokenizer and HTML renderer.

Model output uses a small subset of inline markdown:
    **bold**            → <strong>
    _italic_            → <em>
    [label](url)        → <a href="url">label</a>
    https://bare.url    → <a href="https://bare.url">https://bare.url</a>

Instead of running one regex substitution after another over the same
string (where an earlier substitution can produce text a later one
re-matches), we scan each text run once, left to right, and emit a flat
list of spans. Rendering is a separate pass over those spans. That keeps
a bare URL right after a markdown link from being wrapped twice: the link
is consumed as a single token, so its target never reaches the URL rule.

The PDF exporter reuses tokenize_inline() and renders the same spans into
ReportLab markup.

Note: text is NOT HTML-escaped. The renderer trusts the model output, and
any HTML already present in it passes through unchanged.
"""

import re
from dataclasses import dataclass
from enum import Enum


class SpanKind(str, Enum):
    TEXT = "text"
    STRONG = "strong"
    EMPHASIS = "emphasis"
    LINK = "link"
    AUTOLINK = "autolink"


@dataclass(frozen=True)
class Span:
    """One inline token. Strong/emphasis/link spans carry nested children."""
    kind: SpanKind
    text: str = ""
    href: str = ""
    children: tuple["Span", ...] = ()


# Alternatives are tried left to right at each position; the earliest
# match in the string wins, so "[x](http://a.com)" is always a link.
_INLINE_PATTERN = re.compile(
    r"\[(?P<label>[^\]]+)\]\((?P<href>[^)]+)\)"
    # Raw anchors already present in the text keep their URLs untouched
    r"|(?<!href=\")(?<!href=')(?P<url>https?://[^\s<>\"']+)"
    r"|\*\*(?P<strong>.+?)\*\*"
    # Underscores inside words (snake_case, URLs) are not emphasis
    r"|(?<!\w)_(?P<em>.+?)_(?!\w)"
)

_TRAILING_PUNCTUATION = ".,;:!?"

LINK_ATTRIBUTES = 'target="_blank" rel="noopener noreferrer"'


def _split_url(url: str) -> tuple[str, str]:
    """Separate sentence punctuation that trails a bare URL.

    "see https://a.com." → ("https://a.com", ".")
    Closing parens are kept only when the URL opened one itself.
    """
    end = len(url)
    while end > 0:
        char = url[end - 1]
        if char in _TRAILING_PUNCTUATION:
            end -= 1
        elif char == ")" and url[:end].count("(") < url[:end].count(")"):
            end -= 1
        else:
            break
    return url[:end], url[end:]


def tokenize_inline(text: str, autolink: bool = True) -> list[Span]:
    """Split a text run into inline spans.

    Args:
        text: A single leaf text run (heading text, list item, table cell...).
        autolink: Turn bare URLs into links. Disabled inside link labels so
            anchors never nest.
    """
    spans: list[Span] = []
    position = 0

    for match in _INLINE_PATTERN.finditer(text):
        if match.start() > position:
            spans.append(Span(SpanKind.TEXT, text=text[position:match.start()]))
        position = match.end()

        if match.group("label") is not None:
            spans.append(Span(
                SpanKind.LINK,
                href=match.group("href").strip(),
                children=tuple(tokenize_inline(match.group("label"), autolink=False)),
            ))
        elif match.group("url") is not None:
            url, trailing = _split_url(match.group("url"))
            if autolink and url:
                spans.append(Span(SpanKind.AUTOLINK, text=url, href=url))
            else:
                spans.append(Span(SpanKind.TEXT, text=url))
            if trailing:
                spans.append(Span(SpanKind.TEXT, text=trailing))
        elif match.group("strong") is not None:
            spans.append(Span(
                SpanKind.STRONG,
                children=tuple(tokenize_inline(match.group("strong"), autolink)),
            ))
        else:
            spans.append(Span(
                SpanKind.EMPHASIS,
                children=tuple(tokenize_inline(match.group("em"), autolink)),
            ))

    if position < len(text):
        spans.append(Span(SpanKind.TEXT, text=text[position:]))

    return spans


def render_spans(spans) -> str:
    """Render inline spans as an HTML fragment."""
    parts = []
    for span in spans:
        if span.kind is SpanKind.TEXT:
            parts.append(span.text)
        elif span.kind is SpanKind.STRONG:
            parts.append(f"<strong>{render_spans(span.children)}</strong>")
        elif span.kind is SpanKind.EMPHASIS:
            parts.append(f"<em>{render_spans(span.children)}</em>")
        elif span.kind is SpanKind.LINK:
            parts.append(
                f'<a href="{span.href}" {LINK_ATTRIBUTES}>'
                f"{render_spans(span.children)}</a>"
            )
        else:
            parts.append(
                f'<a href="{span.href}" {LINK_ATTRIBUTES} class="autolink">'
                f"{span.text}</a>"
            )
    return "".join(parts)


def render_inline(text: str) -> str:
    """Tokenize and render one text run. Pure; no escaping."""
    return render_spans(tokenize_inline(text))
