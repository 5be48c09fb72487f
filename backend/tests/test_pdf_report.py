"""
Tests for PDF export.
"""

from content_analyzer.services.pdf_report import PDFReportGenerator


def test_pdf_generates_valid_pdf():
    """Verify PDFReportGenerator produces valid PDF bytes for a full report."""
    from conftest import SAMPLE_REPORT

    pdf_bytes = PDFReportGenerator().generate(SAMPLE_REPORT, title="Video Analysis Report")

    # PDF files start with %PDF
    assert pdf_bytes[:4] == b"%PDF"
    assert len(pdf_bytes) > 1000


def test_pdf_handles_empty_markdown():
    pdf_bytes = PDFReportGenerator().generate("")
    assert pdf_bytes[:4] == b"%PDF"


def test_pdf_handles_ragged_table_and_quotes():
    markdown = (
        "| A | B |\n|---|---|\n| only one |\n| x | y | extra |\n\n"
        "> a <quoted> & escaped line\n\n"
        "| not | a table |"
    )
    pdf_bytes = PDFReportGenerator().generate(markdown)
    assert pdf_bytes[:4] == b"%PDF"


def test_markup_escapes_text_and_keeps_formatting():
    markup = PDFReportGenerator()._markup("a < b & **c** _d_")
    assert markup == "a &lt; b &amp; <b>c</b> <i>d</i>"


def test_markup_links():
    markup = PDFReportGenerator()._markup("[Docs](http://a.com?x=1&y=2) http://b.com")

    assert '<link href="http://a.com?x=1&amp;y=2"' in markup
    assert ">Docs</link>" in markup
    assert '<link href="http://b.com"' in markup
    assert markup.count("<link ") == 2
