"""
Content analysis service — sends videos and transcripts to Gemini.

This service:
1. Analyzes an uploaded video (sent inline with the request)
2. Analyzes pasted text with Google Search grounding, then appends a
   deduplicated "Sources" section built from the grounding citations
3. Expands a finished report into a long-form SEO article, optionally
   with an extended thinking budget

Key Gemini API details:
- Video analysis: gemini-2.5-pro (multimodal, long context)
- Text reports: gemini-2.5-pro + the google_search tool
- Articles: gemini-2.5-flash, thinking_budget=24576 when thinking mode is on

All three calls are BLOCKING (the sync google-genai client). Routers run
them via asyncio.to_thread() so the event loop stays free.

Every provider or transport failure surfaces as GenerationFailed. There
are no retries and no partial results; the caller shows an error and the
user tries again.
"""

import logging
import time
from dataclasses import dataclass, field

from google import genai
from google.genai import types

from content_analyzer.config import ProviderConfig
from content_analyzer.services.prompts import (
    REPORT_SYSTEM_INSTRUCTION,
    build_article_prompt,
    build_video_prompt,
)

logger = logging.getLogger(__name__)


class GenerationFailed(Exception):
    """The provider could not produce a result (any cause)."""


@dataclass
class GenerationResult:
    """Structured output from a generation call."""
    text: str                        # Markdown produced by the model
    model: str = ""
    sources: list = field(default_factory=list)  # "[title](uri)" entries
    processing_time_seconds: float = 0.0


def format_sources(citations) -> list[str]:
    """Turn grounding citations into unique "[title](uri)" entries.

    Citations without a URI (missing or blank) are dropped. A missing title
    falls back to the URI. Duplicates collapse to their first occurrence.

    Args:
        citations: Objects with `title` and `uri` attributes
            (google.genai.types.GroundingChunkWeb).
    """
    sources = []
    for citation in citations:
        uri = getattr(citation, "uri", None)
        if not uri or not uri.strip():
            continue
        title = getattr(citation, "title", None) or uri
        entry = f"[{title}]({uri})"
        if entry not in sources:
            sources.append(entry)
    return sources


def append_sources_section(report: str, sources: list[str]) -> str:
    """Append a "## Sources" section when there is anything to list."""
    if not sources:
        return report
    return report + "\n\n## Sources\n" + "\n".join(sources)


def _grounding_citations(response) -> list:
    """Pull the web citations out of the first candidate's grounding metadata."""
    if not response.candidates:
        return []
    metadata = response.candidates[0].grounding_metadata
    if not metadata or not metadata.grounding_chunks:
        return []
    return [chunk.web for chunk in metadata.grounding_chunks if chunk.web]


class ContentAnalysisService:
    """Wraps the google-genai client for the three generation calls.

    Usage:
        service = ContentAnalysisService(settings.provider_config())
        result = service.analyze_text_content(transcript)
        print(result.text)

    Args:
        config: Read-only provider configuration (API key, model names).
        client: Optional pre-built client. Tests pass a fake here.
    """

    def __init__(self, config: ProviderConfig, client=None):
        self.config = config
        self.client = client or genai.Client(api_key=config.api_key)

    def analyze_video(
        self,
        video_bytes: bytes,
        mime_type: str,
        user_instructions: str = "",
    ) -> GenerationResult:
        """Generate a report from a video file.

        The video goes inline (base64 in the request body), so it must stay
        under the API's inline request limit — see MAX_UPLOAD_BYTES.

        Args:
            video_bytes: Raw video file content.
            mime_type: The upload's MIME type (e.g. "video/mp4").
            user_instructions: Optional free text appended to the prompt.
        """
        model = self.config.video_analysis_model
        contents = [
            types.Part.from_bytes(data=video_bytes, mime_type=mime_type),
            build_video_prompt(user_instructions),
        ]

        start_time = time.time()
        try:
            response = self.client.models.generate_content(
                model=model,
                contents=contents,
            )
        except Exception as e:
            logger.exception("Error in analyze_video (model=%s)", model)
            raise GenerationFailed("Failed to generate content from video.") from e

        elapsed = time.time() - start_time
        logger.info("Video analyzed with %s in %.1fs", model, elapsed)
        return GenerationResult(
            text=response.text or "",
            model=model,
            processing_time_seconds=elapsed,
        )

    def analyze_text_content(self, text_content: str) -> GenerationResult:
        """Generate a report from pasted text, grounded with Google Search.

        The search tool lets the model look up official URLs for resources
        that are only named in the transcript. Whatever pages it cited come
        back as grounding metadata and are listed under "## Sources".
        """
        model = self.config.report_model
        config = types.GenerateContentConfig(
            system_instruction=REPORT_SYSTEM_INSTRUCTION,
            tools=[types.Tool(google_search=types.GoogleSearch())],
        )

        start_time = time.time()
        try:
            response = self.client.models.generate_content(
                model=model,
                contents=text_content,
                config=config,
            )
            sources = format_sources(_grounding_citations(response))
            report = append_sources_section(response.text or "", sources)
        except Exception as e:
            logger.exception("Error in analyze_text_content (model=%s)", model)
            raise GenerationFailed("Failed to generate report from text content.") from e

        elapsed = time.time() - start_time
        logger.info(
            "Text report generated with %s in %.1fs (%d sources)",
            model, elapsed, len(sources),
        )
        return GenerationResult(
            text=report,
            model=model,
            sources=sources,
            processing_time_seconds=elapsed,
        )

    def generate_article(self, summary: str, thinking_mode: bool) -> GenerationResult:
        """Expand a report into a long-form SEO article.

        Args:
            summary: The previously generated report.
            thinking_mode: Request the extended thinking budget. Slower,
                but noticeably better structured articles.
        """
        model = self.config.text_model
        config = None
        if thinking_mode:
            config = types.GenerateContentConfig(
                thinking_config=types.ThinkingConfig(
                    thinking_budget=self.config.thinking_budget,
                ),
            )

        start_time = time.time()
        try:
            response = self.client.models.generate_content(
                model=model,
                contents=build_article_prompt(summary),
                config=config,
            )
        except Exception as e:
            logger.exception("Error in generate_article (model=%s)", model)
            raise GenerationFailed("Failed to generate article from summary.") from e

        elapsed = time.time() - start_time
        logger.info(
            "Article generated with %s in %.1fs (thinking=%s)",
            model, elapsed, thinking_mode,
        )
        return GenerationResult(
            text=response.text or "",
            model=model,
            processing_time_seconds=elapsed,
        )
