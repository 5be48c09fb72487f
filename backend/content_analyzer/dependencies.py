"""
FastAPI dependencies for the process-wide singletons.

Both objects are created once in main.lifespan() and kept on app.state:
- the ContentAnalysisService (built from the read-only ProviderConfig)
- the Workspace (the single user's result slots)

Usage in a route:
    @router.post("/reports")
    async def create_report(
        workspace: Workspace = Depends(get_workspace),
        service: ContentAnalysisService = Depends(get_analysis_service),
    ):
        ...

Tests replace them through app.dependency_overrides.
"""

from fastapi import HTTPException, Request

from content_analyzer.services.analysis import ContentAnalysisService
from content_analyzer.services.workspace import Workspace


def get_workspace(request: Request) -> Workspace:
    return request.app.state.workspace


def get_analysis_service(request: Request) -> ContentAnalysisService:
    """Return the provider, or 503 when no API key was configured."""
    service = getattr(request.app.state, "analysis_service", None)
    if service is None:
        raise HTTPException(
            status_code=503,
            detail="Content analysis is not configured. Set GEMINI_API_KEY.",
        )
    return service
