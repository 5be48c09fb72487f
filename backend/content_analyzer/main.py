"""
AI Content Analyzer — FastAPI Application

This is the entry point for the backend. It:
1. Creates the FastAPI app instance
2. Configures CORS (so the frontend can talk to us)
3. Registers route handlers
4. Builds the content analysis provider and the workspace at startup

Run with:
    uvicorn content_analyzer.main:app --reload --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from content_analyzer.config import settings
from content_analyzer.routers import reports, workspace
from content_analyzer.services.analysis import ContentAnalysisService
from content_analyzer.services.workspace import Workspace

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown logic.

    Code before 'yield' runs on startup.
    Code after 'yield' runs on shutdown.

    The provider config is read once here and is read-only from then on.
    Without an API key the app still starts, but generation endpoints
    answer 503.
    """
    # --- Startup ---
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logger.info("🚀 Starting AI Content Analyzer API...")

    provider_config = settings.provider_config()
    if provider_config.api_key:
        app.state.analysis_service = ContentAnalysisService(provider_config)
        logger.info(
            "✅ Gemini client ready (video=%s, report=%s, text=%s)",
            provider_config.video_analysis_model,
            provider_config.report_model,
            provider_config.text_model,
        )
    else:
        app.state.analysis_service = None
        logger.warning("GEMINI_API_KEY is not set; generation endpoints are disabled")

    app.state.workspace = Workspace()

    yield  # App is running, handling requests

    # --- Shutdown ---
    logger.info("👋 Shutting down...")


app = FastAPI(
    title="AI Content Analyzer API",
    description="Video and transcript analysis reports, grounded sources, and SEO articles",
    version="1.0.0",
    lifespan=lifespan,
)

# --- CORS Middleware ---
# Without this, the browser frontend can't call the API from another origin.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(reports.router)
app.include_router(workspace.router)


# --- Health Check Endpoints ---

@app.get("/", tags=["health"])
async def root():
    """Root endpoint — confirms the API is alive."""
    return {
        "service": "AI Content Analyzer",
        "status": "running",
        "version": "1.0.0",
    }


@app.get("/health", tags=["health"])
async def health_check():
    """Health check — reports whether the AI provider is configured."""
    configured = getattr(app.state, "analysis_service", None) is not None

    return {
        "status": "healthy" if configured else "degraded",
        "provider": "configured" if configured else "missing API key",
        "environment": settings.APP_ENV,
    }
