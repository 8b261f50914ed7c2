"""Evidence gathering: turn trip parameters into text pulled from travel videos.

The gatherer searches with a specific query first and only falls back to a
broad destination-only query when the specific one yields no usable text.
Per-video transcript failures are captured and skipped, never raised.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

from src.core.errors import NoEvidenceFound, NoVideosFound, TranscriptFetchFailed
from src.core.schemas import (
    EvidenceBlob,
    EvidenceFragment,
    EvidenceKind,
    SkippedVideo,
    TripRequest,
    VideoCandidate,
)
from src.services.youtube import TranscriptFetcher, YouTubeSearch

logger = logging.getLogger(__name__)

FetchText = Callable[[str], Awaitable[str]]


def specific_query(trip: TripRequest) -> str:
    return (
        f"{trip.duration} day {trip.trip_type} trip to {trip.destination} "
        f"from {trip.start_location} travel guide"
    )


def broad_query(trip: TripRequest) -> str:
    # Style and origin are not part of the broad query.
    return f"{trip.destination} travel guide"


async def attempt_all(
    candidates: Sequence[VideoCandidate],
    fetch: FetchText,
) -> Tuple[List[Tuple[VideoCandidate, str]], List[SkippedVideo]]:
    """Run ``fetch`` for every candidate concurrently and split the outcomes.

    Returns the successful ``(candidate, text)`` pairs in candidate order and a
    list of skipped videos with the reason. One failure never cancels the
    others.
    """

    async def _attempt(candidate: VideoCandidate) -> Tuple[VideoCandidate, Optional[str], Optional[str]]:
        try:
            return candidate, await fetch(candidate.id), None
        except TranscriptFetchFailed as exc:
            return candidate, None, exc.reason
        except Exception as exc:
            return candidate, None, f"{type(exc).__name__}: {exc}"

    outcomes = await asyncio.gather(*(_attempt(candidate) for candidate in candidates))

    succeeded: List[Tuple[VideoCandidate, str]] = []
    skipped: List[SkippedVideo] = []
    for candidate, text, reason in outcomes:
        if reason is None and text is not None:
            succeeded.append((candidate, text))
        else:
            skipped.append(SkippedVideo(video_id=candidate.id, reason=reason or "no text"))
    return succeeded, skipped


class EvidenceGatherer:
    """Search videos and collect their snippets or transcripts into one blob."""

    def __init__(
        self,
        search_client: YouTubeSearch,
        *,
        transcript_fetcher: Optional[TranscriptFetcher] = None,
        source: EvidenceKind = "snippet",
        max_results: int = 5,
        fallback_max_results: int = 10,
    ) -> None:
        if source == "transcript" and transcript_fetcher is None:
            raise ValueError("Transcript evidence requires a transcript fetcher")
        self.search_client = search_client
        self.transcript_fetcher = transcript_fetcher
        self.source = source
        self.max_results = max_results
        self.fallback_max_results = fallback_max_results

    async def search(self, query: str, max_results: int) -> List[VideoCandidate]:
        return list(await self.search_client.search(query, max_results))

    def collect_snippet_text(self, candidates: Sequence[VideoCandidate]) -> EvidenceBlob:
        fragments = tuple(
            EvidenceFragment(
                video_id=candidate.id,
                title=candidate.title or "",
                text=candidate.description or "",
                kind="snippet",
            )
            for candidate in candidates
        )
        if fragments:
            logger.info(f"Gathered titles and descriptions for {len(fragments)} videos")
        return EvidenceBlob(kind="snippet", fragments=fragments)

    async def collect_transcript_text(self, candidates: Sequence[VideoCandidate]) -> EvidenceBlob:
        if self.transcript_fetcher is None:
            raise ValueError("Transcript evidence requires a transcript fetcher")

        succeeded, skipped = await attempt_all(candidates, self.transcript_fetcher.fetch)
        for item in skipped:
            logger.warning(f"Skipping video {item.video_id}: {item.reason}")

        fragments = tuple(
            EvidenceFragment(video_id=candidate.id, title=candidate.title, text=text, kind="transcript")
            for candidate, text in succeeded
        )
        logger.info(f"Gathered transcripts for {len(fragments)} of {len(candidates)} videos")
        return EvidenceBlob(kind="transcript", fragments=fragments, skipped=tuple(skipped))

    async def collect(self, candidates: Sequence[VideoCandidate]) -> EvidenceBlob:
        if self.source == "transcript":
            return await self.collect_transcript_text(candidates)
        return self.collect_snippet_text(candidates)

    async def _attempt_query(self, query: str, max_results: int) -> Tuple[int, EvidenceBlob]:
        candidates = await self.search(query, max_results)
        evidence = await self.collect(candidates)
        return len(candidates), EvidenceBlob(
            kind=evidence.kind,
            fragments=evidence.fragments,
            skipped=evidence.skipped,
            query=query,
        )

    async def gather_with_fallback(self, trip: TripRequest) -> EvidenceBlob:
        """Collect evidence for ``trip``, broadening the query once if needed.

        Raises:
            NoVideosFound: neither query returned a video
            NoEvidenceFound: videos were found but none yielded text
        """

        found_videos, evidence = await self._attempt_query(specific_query(trip), self.max_results)
        if not evidence.is_empty:
            return evidence

        query = broad_query(trip)
        logger.warning(f"No usable evidence for specific query, falling back to {query!r}")
        fallback_videos, evidence = await self._attempt_query(query, self.fallback_max_results)
        if not evidence.is_empty:
            return evidence

        if found_videos == 0 and fallback_videos == 0:
            raise NoVideosFound()
        raise NoEvidenceFound()
