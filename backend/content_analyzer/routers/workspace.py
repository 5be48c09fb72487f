"""
Workspace and rendering API endpoints.

1. GET /workspace — Current state plus report/article (markdown + HTML)
2. DELETE /workspace — Clear both result slots
3. POST /render — Render arbitrary markdown to an HTML fragment

The frontend polls GET /workspace to show the loading indicator for
whichever request is in flight and to disable the matching button.
"""

from fastapi import APIRouter, Depends, HTTPException

from content_analyzer.dependencies import get_workspace
from content_analyzer.schemas.reports import RenderRequest, RenderResponse, WorkspaceResponse
from content_analyzer.services.markdown_render import render_markdown
from content_analyzer.services.workspace import Workspace, WorkspaceBusyError

router = APIRouter(prefix="/api/v1", tags=["workspace"])


@router.get("/workspace", response_model=WorkspaceResponse)
async def get_workspace_state(workspace: Workspace = Depends(get_workspace)):
    """Return the activity state and both result slots."""
    snapshot = workspace.snapshot()
    return WorkspaceResponse(
        state=snapshot["state"],
        report_markdown=snapshot["report"],
        report_html=render_markdown(snapshot["report"]),
        report_source=snapshot["report_source"],
        article_markdown=snapshot["article"],
        article_html=render_markdown(snapshot["article"]),
        error=snapshot["error"],
    )


@router.delete("/workspace")
async def reset_workspace(workspace: Workspace = Depends(get_workspace)):
    """Clear the report, the article, and any error message."""
    try:
        workspace.reset()
    except WorkspaceBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return {"message": "Workspace cleared", "state": workspace.state.value}


@router.post("/render", response_model=RenderResponse)
async def render(request: RenderRequest):
    """Render markdown to the same HTML fragment the result cards use."""
    return RenderResponse(html=render_markdown(request.markdown))
