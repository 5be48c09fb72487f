"""
Pydantic schemas for the report, article, and workspace API.

Every response carries both the raw markdown (what the model wrote) and
the rendered HTML fragment, so the frontend never parses markdown itself.
"""

from typing import Optional

from pydantic import BaseModel


# --- Request Schemas ---

class ArticleRequest(BaseModel):
    """Options for expanding the current report into an article."""
    thinking_mode: bool = True


class RenderRequest(BaseModel):
    """Arbitrary markdown to render."""
    markdown: str


# --- Response Schemas ---

class ReportResponse(BaseModel):
    """Returned after a successful report generation."""
    report_markdown: str
    report_html: str
    source: str                      # "video" or "text"
    model: str
    sources: list[str] = []
    processing_time_seconds: float


class ArticleResponse(BaseModel):
    """Returned after a successful article generation."""
    article_markdown: str
    article_html: str
    model: str
    thinking_mode: bool
    processing_time_seconds: float


class WorkspaceResponse(BaseModel):
    """Current result slots and activity state."""
    state: str
    report_markdown: str
    report_html: str
    report_source: Optional[str] = None
    article_markdown: str
    article_html: str
    error: Optional[str] = None


class RenderResponse(BaseModel):
    html: str
