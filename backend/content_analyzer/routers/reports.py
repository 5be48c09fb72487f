"""
Report and article API endpoints.

1. POST /reports — Generate a report from a video upload or pasted text
2. POST /articles — Expand the current report into an SEO article
3. GET /reports/pdf — Download the current report as a PDF
4. GET /articles/pdf — Download the current article as a PDF

Design notes:
- Routers are THIN — they parse HTTP requests and call services
- File validation happens here (type, size) because it's an HTTP concern
- The Workspace owns the state machine (idle / generating_report /
  generating_article); routers only translate its errors to HTTP codes
- Generation requests block until the model answers (tens of seconds for
  long videos). There's one user and one request at a time, so there's
  no job queue or polling.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from content_analyzer.config import settings
from content_analyzer.dependencies import get_analysis_service, get_workspace
from content_analyzer.schemas.reports import ArticleRequest, ArticleResponse, ReportResponse
from content_analyzer.services.analysis import ContentAnalysisService, GenerationFailed
from content_analyzer.services.markdown_render import render_markdown
from content_analyzer.services.pdf_report import PDFReportGenerator
from content_analyzer.services.uploads import (
    UnsupportedFileTypeError,
    UploadTooLargeError,
    read_video_upload,
)
from content_analyzer.services.workspace import (
    InputValidationError,
    Workspace,
    WorkspaceBusyError,
)

router = APIRouter(prefix="/api/v1", tags=["reports"])


@router.post("/reports", response_model=ReportResponse)
async def create_report(
    text: str = Form(""),
    file: Optional[UploadFile] = File(None),
    workspace: Workspace = Depends(get_workspace),
    service: ContentAnalysisService = Depends(get_analysis_service),
):
    """Generate a structured analysis report.

    Send either a video file or pasted text (multipart form):
    - file: a video/* upload. When present, `text` becomes extra
      instructions for the video analysis.
    - text: a transcript or other content. Analyzed with web search
      grounding; cited pages are appended as a "Sources" section.

    Replaces the previous report and clears the previous article.
    """
    video = None
    if file is not None and file.filename:
        try:
            video = await read_video_upload(file, settings.MAX_UPLOAD_BYTES)
        except UnsupportedFileTypeError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except UploadTooLargeError as e:
            raise HTTPException(status_code=413, detail=str(e))

    try:
        result = await workspace.generate_report(service, text=text, video=video)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except WorkspaceBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except GenerationFailed:
        raise HTTPException(status_code=502, detail=workspace.error)

    return ReportResponse(
        report_markdown=result.text,
        report_html=render_markdown(result.text),
        source=workspace.report_source,
        model=result.model,
        sources=result.sources,
        processing_time_seconds=result.processing_time_seconds,
    )


@router.post("/articles", response_model=ArticleResponse)
async def create_article(
    request: ArticleRequest,
    workspace: Workspace = Depends(get_workspace),
    service: ContentAnalysisService = Depends(get_analysis_service),
):
    """Expand the current report into a long-form SEO article.

    Args:
        request: thinking_mode=True asks the model for an extended
            reasoning budget (slower, higher quality).
    """
    try:
        result = await workspace.generate_article(service, thinking_mode=request.thinking_mode)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except WorkspaceBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except GenerationFailed:
        raise HTTPException(status_code=502, detail=workspace.error)

    return ArticleResponse(
        article_markdown=result.text,
        article_html=render_markdown(result.text),
        model=result.model,
        thinking_mode=request.thinking_mode,
        processing_time_seconds=result.processing_time_seconds,
    )


@router.get("/reports/pdf")
async def download_report_pdf(workspace: Workspace = Depends(get_workspace)):
    """Download the current report as a PDF.

    Generated on the fly from the markdown; nothing is stored.
    """
    if not workspace.report:
        raise HTTPException(status_code=404, detail="No report has been generated yet")

    pdf_bytes = PDFReportGenerator().generate(workspace.report, title="Video Analysis Report")
    return _pdf_response(pdf_bytes, "video_analysis_report.pdf")


@router.get("/articles/pdf")
async def download_article_pdf(workspace: Workspace = Depends(get_workspace)):
    """Download the current article as a PDF."""
    if not workspace.article:
        raise HTTPException(status_code=404, detail="No article has been generated yet")

    pdf_bytes = PDFReportGenerator().generate(workspace.article, title="SEO Article")
    return _pdf_response(pdf_bytes, "seo_article.pdf")


def _pdf_response(pdf_bytes: bytes, filename: str) -> Response:
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
