"""
Workspace — the single user's result slots and activity state.

There is exactly one workspace per process (no multi-user support). It
holds the latest report, the latest article, the last user-facing error,
and what is currently being generated:

    idle ──generate_report()──▶ generating_report ──▶ idle
    idle ──generate_article()─▶ generating_article ─▶ idle

Only one provider request is outstanding at a time. The state check and
the transition happen on the event loop without an await in between, so
two requests cannot both get past the check.

Result slots are replaced wholesale when a request completes; on failure
the slot stays empty and `error` holds the message to show the user.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from content_analyzer.services.analysis import GenerationFailed, GenerationResult

logger = logging.getLogger(__name__)

NO_INPUT_MESSAGE = "Please paste a transcript or upload a video file to analyze."
NO_REPORT_MESSAGE = "Please generate a report first."
REPORT_FAILED_MESSAGE = "Failed to generate the report. Please check the logs for details."
ARTICLE_FAILED_MESSAGE = "Failed to generate the article. Please check the logs for details."


class WorkspaceState(str, Enum):
    IDLE = "idle"
    GENERATING_REPORT = "generating_report"
    GENERATING_ARTICLE = "generating_article"


class InputValidationError(Exception):
    """Nothing to work on: no input for a report, or no report for an article."""


class WorkspaceBusyError(Exception):
    """A generation request is already in flight."""


@dataclass(frozen=True)
class VideoUpload:
    """A validated video file, ready to forward to the provider."""
    data: bytes
    mime_type: str
    filename: str = ""


class Workspace:
    """Result slots plus the explicit activity state.

    Usage:
        workspace = Workspace()
        await workspace.generate_report(service, text=transcript)
        await workspace.generate_article(service, thinking_mode=True)
        print(workspace.article)
    """

    def __init__(self):
        self.state = WorkspaceState.IDLE
        self.report = ""
        self.report_source: Optional[str] = None  # "video" or "text"
        self.article = ""
        self.error = ""

    def _ensure_idle(self) -> None:
        if self.state is not WorkspaceState.IDLE:
            raise WorkspaceBusyError(
                f"Already busy ({self.state.value}). Wait for it to finish."
            )

    def _begin(self, state: WorkspaceState) -> None:
        self._ensure_idle()
        self.state = state

    def snapshot(self) -> dict:
        """Plain-data view of the state and both result slots."""
        return {
            "state": self.state.value,
            "report": self.report,
            "report_source": self.report_source,
            "article": self.article,
            "error": self.error or None,
        }

    async def generate_report(
        self,
        provider,
        text: str = "",
        video: Optional[VideoUpload] = None,
    ) -> GenerationResult:
        """Generate a new report, replacing the previous report and article.

        With a video, the text is passed along as user instructions and the
        video path is used. Without one, the text itself is analyzed.

        Raises:
            InputValidationError: Neither a video nor non-blank text.
            WorkspaceBusyError: Another request is running.
            GenerationFailed: The provider call failed.
        """
        # A running request owns the error slot
        self._ensure_idle()
        if video is None and not text.strip():
            self.error = NO_INPUT_MESSAGE
            raise InputValidationError(NO_INPUT_MESSAGE)

        self._begin(WorkspaceState.GENERATING_REPORT)
        self.error = ""
        self.report = ""
        self.report_source = None
        self.article = ""

        try:
            if video is not None:
                logger.info("Analyzing video %r (%d bytes)", video.filename, len(video.data))
                result = await asyncio.to_thread(
                    provider.analyze_video, video.data, video.mime_type, text,
                )
                source = "video"
            else:
                logger.info("Analyzing pasted text (%d chars)", len(text))
                result = await asyncio.to_thread(provider.analyze_text_content, text)
                source = "text"
        except GenerationFailed:
            self.error = REPORT_FAILED_MESSAGE
            raise
        finally:
            self.state = WorkspaceState.IDLE

        self.report = result.text
        self.report_source = source
        return result

    async def generate_article(self, provider, thinking_mode: bool = True) -> GenerationResult:
        """Expand the current report into an article.

        Raises:
            InputValidationError: No report yet.
            WorkspaceBusyError: Another request is running.
            GenerationFailed: The provider call failed.
        """
        self._ensure_idle()
        if not self.report:
            self.error = NO_REPORT_MESSAGE
            raise InputValidationError(NO_REPORT_MESSAGE)

        self._begin(WorkspaceState.GENERATING_ARTICLE)
        self.error = ""
        self.article = ""

        try:
            result = await asyncio.to_thread(
                provider.generate_article, self.report, thinking_mode,
            )
        except GenerationFailed:
            self.error = ARTICLE_FAILED_MESSAGE
            raise
        finally:
            self.state = WorkspaceState.IDLE

        self.article = result.text
        return result

    def reset(self) -> None:
        """Clear both slots and the error. Refused while a request runs."""
        self._ensure_idle()
        self.report = ""
        self.report_source = None
        self.article = ""
        self.error = ""
