from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from langchain_core.language_models.chat_models import BaseChatModel

from src.core.config import ApiSettings
from src.core.errors import PipelineTimeout
from src.core.prompts import build_itinerary_prompt
from src.core.schemas import GenerationResult, TripRequest
from src.pipelines.evidence import EvidenceGatherer
from src.pipelines.generation import ItineraryGenerator
from src.services import (
    TranscriptFetcher,
    YouTubeSearch,
    create_chat_model,
    create_transcript_fetcher,
    create_youtube_client,
)

logger = logging.getLogger(__name__)


class ItineraryService:
    """Container for the itinerary pipeline and its collaborators.

    Collaborators are built once from ``ApiSettings`` unless supplied
    explicitly, which is how tests substitute stubs. Nothing here holds
    per-request state, so one instance serves all requests.

    Attributes:
        settings: Provider credentials and pipeline tuning
        search_client: Video search collaborator
        transcript_fetcher: Transcript collaborator (transcript mode only)
        llm: Chat model used for generation
        gatherer: Evidence gathering stage
        generator: Generation stage
    """

    def __init__(
        self,
        settings: ApiSettings,
        *,
        search_client: Optional[YouTubeSearch] = None,
        transcript_fetcher: Optional[TranscriptFetcher] = None,
        llm: Optional[BaseChatModel] = None,
    ) -> None:
        self.settings = settings
        self.timeout_s = settings.request_timeout_s

        self.search_client = search_client if search_client is not None else create_youtube_client(settings)
        if transcript_fetcher is None and settings.evidence_source == "transcript":
            transcript_fetcher = create_transcript_fetcher(settings)
        self.transcript_fetcher = transcript_fetcher
        self.llm = llm if llm is not None else create_chat_model(settings)

        self.gatherer = EvidenceGatherer(
            self.search_client,
            transcript_fetcher=self.transcript_fetcher,
            source=settings.evidence_source,
            max_results=settings.max_results,
            fallback_max_results=settings.fallback_max_results,
        )
        self.generator = ItineraryGenerator(self.llm, mode=settings.delivery_mode)

    def __repr__(self) -> str:
        return (
            f"ItineraryService(model='{self.settings.model_name}', "
            f"delivery_mode='{self.settings.delivery_mode}', "
            f"evidence_source='{self.settings.evidence_source}')"
        )

    def describe(self) -> Dict[str, Any]:
        """Return the pipeline configuration without credentials."""

        return {
            "llm_provider": self.settings.llm_provider,
            "llm_model": self.settings.model_name,
            "delivery_mode": self.settings.delivery_mode,
            "evidence_source": self.settings.evidence_source,
            "max_results": self.settings.max_results,
            "fallback_max_results": self.settings.fallback_max_results,
            "request_timeout_s": self.timeout_s,
        }

    async def close(self) -> None:
        aclose = getattr(self.search_client, "aclose", None)
        if aclose is not None:
            await aclose()

    async def _run(self, trip: TripRequest, deadline: float) -> GenerationResult:
        evidence = await self.gatherer.gather_with_fallback(trip)
        logger.info(
            f"Collected {len(evidence.fragments)} {evidence.kind} fragments "
            f"({len(evidence.skipped)} skipped) from query {evidence.query!r}"
        )
        prompt = build_itinerary_prompt(trip, evidence)
        return await self.generator.generate(prompt, deadline=deadline)

    async def plan_itinerary(self, trip: TripRequest) -> GenerationResult:
        """Run the pipeline for one trip.

        The deadline covers evidence gathering and, when streaming, the wait
        for the first fragment; the rest of the stream is cut off at the same
        point in time.

        Raises:
            NoEvidenceFound: nothing usable after the fallback query
            GenerationFailed: the model call failed before any output
            PipelineTimeout: the deadline expired before any output
        """

        logger.info(
            f"Planning {trip.duration} day {trip.trip_type} trip to {trip.destination} "
            f"from {trip.start_location} (budget {trip.budget})"
        )
        deadline = asyncio.get_running_loop().time() + self.timeout_s
        try:
            return await asyncio.wait_for(self._run(trip, deadline), timeout=self.timeout_s)
        except asyncio.TimeoutError as exc:
            logger.error(f"Itinerary request exceeded {self.timeout_s:g}s")
            raise PipelineTimeout(self.timeout_s) from exc
