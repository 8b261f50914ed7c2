"""Transcript retrieval through ``youtube-transcript-api``."""
from __future__ import annotations

import asyncio
import logging
import re
from typing import Iterable, Optional, Sequence

from youtube_transcript_api import YouTubeTranscriptApi

from src.core.config import ApiSettings
from src.core.errors import TranscriptFetchFailed

logger = logging.getLogger(__name__)


def join_segments(segments: Iterable[object]) -> str:
    """Flatten timed transcript segments into one line of text."""

    parts = []
    for segment in segments:
        text = getattr(segment, "text", None)
        if text is None and isinstance(segment, dict):
            text = segment.get("text")
        if text:
            parts.append(text.replace("\n", " ").strip())
    return re.sub(r"\s{2,}", " ", " ".join(parts)).strip()


class TranscriptFetcher:
    """Fetch transcripts for individual videos.

    The underlying library is blocking, so each fetch runs in a worker thread.
    Any provider error is re-raised as ``TranscriptFetchFailed``.
    """

    def __init__(
        self,
        *,
        languages: Sequence[str] = ("en",),
        char_limit: Optional[int] = 20000,
        api: Optional[YouTubeTranscriptApi] = None,
    ) -> None:
        self.languages = list(languages)
        self.char_limit = char_limit
        self._api = api or YouTubeTranscriptApi()

    def _fetch_sync(self, video_id: str) -> str:
        fetched = self._api.fetch(video_id, languages=self.languages)
        return join_segments(fetched)

    async def fetch(self, video_id: str) -> str:
        try:
            text = await asyncio.to_thread(self._fetch_sync, video_id)
        except Exception as exc:
            raise TranscriptFetchFailed(video_id, f"{type(exc).__name__}: {exc}") from exc

        if not text:
            raise TranscriptFetchFailed(video_id, "empty transcript")
        if self.char_limit and len(text) > self.char_limit:
            logger.debug(f"Truncating transcript for {video_id} from {len(text)} chars")
            text = text[: self.char_limit]
        return text


def create_transcript_fetcher(settings: ApiSettings) -> TranscriptFetcher:
    return TranscriptFetcher(
        languages=settings.transcript_languages,
        char_limit=settings.transcript_char_limit,
    )
