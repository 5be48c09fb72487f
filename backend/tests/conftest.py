"""
Test fixtures shared across all tests.

Architecture:
- The HTTP test client uses the real FastAPI app via httpx's ASGITransport.
- ASGITransport does not run the lifespan, so the provider and the
  workspace are injected through app.dependency_overrides instead.
- The provider is a FakeProvider: it records every call and returns
  canned markdown. Nothing here ever talks to Gemini.
- Each test gets a fresh Workspace, so result slots never leak between tests.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from content_analyzer.dependencies import get_analysis_service, get_workspace
from content_analyzer.main import app
from content_analyzer.services.analysis import GenerationFailed, GenerationResult
from content_analyzer.services.workspace import Workspace

SAMPLE_REPORT = """# Video Analysis Report

## Video Identification

- **Title**: Building a Grant Pipeline
- **Source**: User-Provided Transcript

## Executive Summary

The speaker walks through finding and tracking small-business grants.

## Mentioned URLs & Resources

| Resource Name | URL | Context |
|---------------|-----|---------|
| Skip Grants | https://www.skipgrants.com | Grant search tool |
| Gusto | [gusto.com](https://gusto.com) | Payroll |

## Actionable Takeaways

1. Shortlist three grants this week
2. Set up a tracking spreadsheet"""

SAMPLE_ARTICLE = """# How to Build a Grant Pipeline

Finding grants is a _process_, not a lottery."""


class FakeProvider:
    """Stands in for ContentAnalysisService and records every call.

    Flip `fail` to make every call raise GenerationFailed. Set `block_on`
    to a threading.Event to hold a call open until the test releases it.
    """

    def __init__(self):
        self.calls = []
        self.report = SAMPLE_REPORT
        self.article = SAMPLE_ARTICLE
        self.fail = False
        self.block_on = None

    def _respond(self, text: str, model: str) -> GenerationResult:
        if self.block_on is not None:
            self.block_on.wait(timeout=5)
        if self.fail:
            raise GenerationFailed("provider unavailable")
        return GenerationResult(text=text, model=model, processing_time_seconds=0.1)

    def analyze_video(self, video_bytes, mime_type, user_instructions=""):
        self.calls.append(("analyze_video", video_bytes, mime_type, user_instructions))
        return self._respond(self.report, "fake-video-model")

    def analyze_text_content(self, text_content):
        self.calls.append(("analyze_text_content", text_content))
        return self._respond(self.report, "fake-report-model")

    def generate_article(self, summary, thinking_mode):
        self.calls.append(("generate_article", summary, thinking_mode))
        return self._respond(self.article, "fake-text-model")


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def workspace():
    return Workspace()


@pytest_asyncio.fixture
async def client(provider, workspace):
    """Async HTTP test client wired to the fake provider and a fresh workspace."""
    app.dependency_overrides[get_analysis_service] = lambda: provider
    app.dependency_overrides[get_workspace] = lambda: workspace

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
