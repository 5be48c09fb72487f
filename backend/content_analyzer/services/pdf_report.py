"""
PDF export — converts markdown reports and articles into PDFs.

Uses ReportLab's Platypus (Page Layout and Typography Using Scripts) engine.
Platypus is a high-level layout system where you build a list of "flowables"
(paragraphs, tables, spacers, etc.) and ReportLab handles pagination,
line breaks, and page flow automatically.

The markdown is parsed with the same block/inline parser the HTML renderer
uses (markdown_blocks + markdown_inline), so both outputs always agree on
what is a table, a heading, a list, or a link. Only the final rendering
step differs:
- Headings, paragraphs, list items, quotes → Paragraph
- Tables → Table with a styled header row
- Inline spans → ReportLab paragraph markup (<b>, <i>, <link>)
"""

from datetime import datetime
from io import BytesIO

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    HRFlowable,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from content_analyzer.services.markdown_blocks import Block, BlockKind, parse_blocks
from content_analyzer.services.markdown_inline import SpanKind, tokenize_inline


# --- Brand Colors ---
BRAND_PRIMARY = colors.HexColor("#1a365d")     # Deep navy — headings
BRAND_SECONDARY = colors.HexColor("#2b6cb0")   # Medium blue — subheadings, links
BRAND_LIGHT_BG = colors.HexColor("#f7fafc")     # Light gray — table backgrounds
BRAND_TEXT = colors.HexColor("#2d3748")          # Dark gray — body text
BRAND_MUTED = colors.HexColor("#718096")         # Medium gray — captions, quotes

PAGE_MARGIN = 0.75 * inch
CONTENT_WIDTH = letter[0] - 2 * PAGE_MARGIN


def _build_styles() -> dict:
    """Create all paragraph styles used in the exported documents.

    Returns a dict of style_name → ParagraphStyle.
    """
    base = getSampleStyleSheet()

    styles = {
        "title": ParagraphStyle(
            "DocumentTitle",
            parent=base["Title"],
            fontSize=22,
            textColor=BRAND_PRIMARY,
            spaceAfter=6,
            alignment=TA_LEFT,
        ),
        "subtitle": ParagraphStyle(
            "DocumentSubtitle",
            parent=base["Normal"],
            fontSize=11,
            textColor=BRAND_MUTED,
            spaceAfter=16,
        ),
        "h1": ParagraphStyle(
            "Heading1",
            parent=base["Heading1"],
            fontSize=18,
            textColor=BRAND_PRIMARY,
            spaceBefore=16,
            spaceAfter=8,
        ),
        "h2": ParagraphStyle(
            "Heading2",
            parent=base["Heading2"],
            fontSize=15,
            textColor=BRAND_PRIMARY,
            spaceBefore=14,
            spaceAfter=6,
        ),
        "h3": ParagraphStyle(
            "Heading3",
            parent=base["Heading3"],
            fontSize=12,
            textColor=BRAND_SECONDARY,
            spaceBefore=10,
            spaceAfter=4,
        ),
        "body": ParagraphStyle(
            "BodyText",
            parent=base["Normal"],
            fontSize=10,
            textColor=BRAND_TEXT,
            leading=14,
            spaceAfter=6,
        ),
        "quote": ParagraphStyle(
            "BlockQuote",
            parent=base["Normal"],
            fontSize=10,
            textColor=BRAND_MUTED,
            leading=14,
            leftIndent=16,
            spaceBefore=4,
            spaceAfter=8,
            fontName="Helvetica-Oblique",
        ),
        "bullet": ParagraphStyle(
            "BulletPoint",
            parent=base["Normal"],
            fontSize=10,
            textColor=BRAND_TEXT,
            leading=14,
            leftIndent=20,
            spaceAfter=3,
            bulletIndent=8,
        ),
        "table_header": ParagraphStyle(
            "TableHeader",
            parent=base["Normal"],
            fontSize=9,
            textColor=colors.white,
            fontName="Helvetica-Bold",
        ),
        "table_cell": ParagraphStyle(
            "TableCell",
            parent=base["Normal"],
            fontSize=9,
            textColor=BRAND_TEXT,
            leading=12,
        ),
        "footer": ParagraphStyle(
            "Footer",
            parent=base["Normal"],
            fontSize=8,
            textColor=BRAND_MUTED,
            alignment=TA_CENTER,
        ),
    }

    return styles


class PDFReportGenerator:
    """Generates PDFs from markdown reports and articles.

    Usage:
        generator = PDFReportGenerator()
        pdf_bytes = generator.generate(report_markdown, title="Video Analysis Report")
    """

    def __init__(self):
        self.styles = _build_styles()

    # ------------------------------------------------------------------
    # PUBLIC API
    # ------------------------------------------------------------------

    def generate(self, markdown: str, title: str = "Video Analysis Report") -> bytes:
        """Render markdown into a PDF document and return the raw bytes."""
        buffer = BytesIO()

        doc = SimpleDocTemplate(
            buffer,
            pagesize=letter,
            topMargin=PAGE_MARGIN,
            bottomMargin=PAGE_MARGIN,
            leftMargin=PAGE_MARGIN,
            rightMargin=PAGE_MARGIN,
            title=title,
            author="Learning Machine",
        )

        story = []

        # --- Header ---
        story.append(Paragraph(self._safe(title), self.styles["title"]))
        story.append(Paragraph(
            f"Generated {datetime.now().strftime('%B %d, %Y')}",
            self.styles["subtitle"],
        ))
        story.append(HRFlowable(
            width="100%", thickness=2, color=BRAND_PRIMARY,
            spaceAfter=12, spaceBefore=4,
        ))

        # --- Body: one or more flowables per block, in source order ---
        for block in parse_blocks(markdown):
            story.extend(self._render_block(block))

        # --- Footer ---
        story.append(Spacer(1, 0.3 * inch))
        story.append(HRFlowable(
            width="100%", thickness=1, color=BRAND_MUTED,
            spaceAfter=8, spaceBefore=8,
        ))
        story.append(Paragraph(
            "Generated by Learning Machine  •  AI Content Analyzer",
            self.styles["footer"],
        ))

        doc.build(story, onFirstPage=self._add_page_number,
                  onLaterPages=self._add_page_number)

        return buffer.getvalue()

    # ------------------------------------------------------------------
    # BLOCK RENDERERS
    # ------------------------------------------------------------------

    def _render_block(self, block: Block) -> list:
        if block.kind is BlockKind.TABLE:
            return [self._render_table(block), Spacer(1, 0.1 * inch)]

        if block.kind is BlockKind.HEADING:
            return [Paragraph(self._markup(block.text), self.styles[f"h{block.level}"])]

        if block.kind is BlockKind.BLOCKQUOTE:
            return [Paragraph(self._markup(block.text), self.styles["quote"])]

        if block.kind is BlockKind.UNORDERED_LIST:
            return [
                Paragraph(self._markup(item), self.styles["bullet"], bulletText="•")
                for item in block.items
            ]

        if block.kind is BlockKind.ORDERED_LIST:
            return [
                Paragraph(self._markup(item), self.styles["bullet"], bulletText=f"{i}.")
                for i, item in enumerate(block.items, 1)
            ]

        text = self._markup(block.text).replace("\n", "<br/>")
        return [Paragraph(text, self.styles["body"])]

    def _render_table(self, block: Block) -> Table:
        """Render a markdown table with a navy header and zebra rows."""
        column_count = max([1, len(block.header)] + [len(row) for row in block.rows])

        def to_row(cells, style):
            padded = list(cells) + [""] * (column_count - len(cells))
            return [Paragraph(self._markup(cell), style) for cell in padded]

        table_data = [to_row(block.header, self.styles["table_header"])]
        table_data.extend(to_row(row, self.styles["table_cell"]) for row in block.rows)

        col_width = CONTENT_WIDTH / column_count
        table = Table(table_data, colWidths=[col_width] * column_count, repeatRows=1)

        table.setStyle(TableStyle([
            # Header row
            ("BACKGROUND", (0, 0), (-1, 0), BRAND_PRIMARY),
            ("BOTTOMPADDING", (0, 0), (-1, 0), 7),
            ("TOPPADDING", (0, 0), (-1, 0), 7),

            # Data rows
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("BOTTOMPADDING", (0, 1), (-1, -1), 5),
            ("TOPPADDING", (0, 1), (-1, -1), 5),

            # Alternating row colors
            *[("BACKGROUND", (0, i), (-1, i), BRAND_LIGHT_BG)
              for i in range(2, len(table_data), 2)],

            # Grid
            ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#e2e8f0")),
            ("LINEBELOW", (0, 0), (-1, 0), 2, BRAND_PRIMARY),
        ]))

        return table

    # ------------------------------------------------------------------
    # HELPERS
    # ------------------------------------------------------------------

    def _markup(self, text: str) -> str:
        """Convert one inline text run into ReportLab paragraph markup."""
        return self._spans_to_markup(tokenize_inline(text))

    def _spans_to_markup(self, spans) -> str:
        parts = []
        for span in spans:
            if span.kind is SpanKind.TEXT:
                parts.append(self._safe(span.text))
            elif span.kind is SpanKind.STRONG:
                parts.append(f"<b>{self._spans_to_markup(span.children)}</b>")
            elif span.kind is SpanKind.EMPHASIS:
                parts.append(f"<i>{self._spans_to_markup(span.children)}</i>")
            else:
                label = (self._spans_to_markup(span.children)
                         if span.kind is SpanKind.LINK else self._safe(span.text))
                parts.append(
                    f'<link href="{self._safe_attribute(span.href)}" '
                    f'color="{BRAND_SECONDARY.hexval()}">{label}</link>'
                )
        return "".join(parts)

    @staticmethod
    def _safe(text: str) -> str:
        """Escape text for ReportLab's XML-based paragraph parser.

        ReportLab paragraphs use an HTML-like markup system.
        Raw text with <, >, & characters will break the parser.
        """
        text = text.replace("&", "&amp;")
        text = text.replace("<", "&lt;")
        text = text.replace(">", "&gt;")
        return text

    @classmethod
    def _safe_attribute(cls, value: str) -> str:
        return cls._safe(value).replace('"', "&quot;")

    @staticmethod
    def _add_page_number(canvas, doc):
        """Add page numbers to the bottom of each page."""
        canvas.saveState()
        canvas.setFont("Helvetica", 8)
        canvas.setFillColor(BRAND_MUTED)
        page_num = canvas.getPageNumber()
        canvas.drawCentredString(
            letter[0] / 2, 0.4 * inch,
            f"Page {page_num}",
        )
        canvas.restoreState()
