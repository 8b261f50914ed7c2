"""Data models for the video-grounded itinerary pipeline.

All values are request-scoped and immutable once produced:

- TripRequest: validated trip parameters
- VideoCandidate: one search hit from the video provider
- EvidenceFragment / SkippedVideo / EvidenceBlob: text gathered from videos
- ItineraryPrompt: rendered instruction document
- CompleteItinerary / StreamedItinerary: the two GenerationResult cases
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from src.core.types import FragmentStream, NonEmptyText

EvidenceKind = Literal["snippet", "transcript"]

FRAGMENT_DELIMITER = "\n\n---\n\n"

REQUIRED_TRIP_FIELDS = ("destination", "startLocation", "duration", "tripType", "budget")


class TripRequest(BaseModel):
    """Trip parameters supplied by the caller.

    Every field is carried as text: ``duration`` is interpolated into the
    prompt as ``"{duration} days"`` and never parsed as a number.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    destination: NonEmptyText = Field(description="Target place name")
    start_location: NonEmptyText = Field(alias="startLocation", description="Origin place name")
    duration: NonEmptyText = Field(description="Trip length in days")
    trip_type: NonEmptyText = Field(alias="tripType", description="Trip style label, e.g. foodie or budget")
    budget: NonEmptyText = Field(description="Approximate total budget, e.g. $1000")


class VideoCandidate(BaseModel):
    """A single ranked search hit."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    description: str = ""


@dataclass(frozen=True, slots=True)
class EvidenceFragment:
    """Text contributed by one video."""

    video_id: str
    title: str
    text: str
    kind: EvidenceKind

    @property
    def has_text(self) -> bool:
        return bool(self.title.strip() or self.text.strip())

    def render(self) -> str:
        label = "Video Description" if self.kind == "snippet" else "Transcript"
        return f"Video Title: {self.title}\n{label}: {self.text}"


@dataclass(frozen=True, slots=True)
class SkippedVideo:
    """A candidate that contributed nothing, kept for logging only."""

    video_id: str
    reason: str


@dataclass(frozen=True, slots=True)
class EvidenceBlob:
    """Ordered per-video fragments joined by ``FRAGMENT_DELIMITER``."""

    kind: EvidenceKind
    fragments: Tuple[EvidenceFragment, ...] = ()
    skipped: Tuple[SkippedVideo, ...] = ()
    query: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not any(fragment.has_text for fragment in self.fragments)

    @property
    def text(self) -> str:
        return FRAGMENT_DELIMITER.join(fragment.render() for fragment in self.fragments)


@dataclass(frozen=True, slots=True)
class ItineraryPrompt:
    """Rendered prompt document handed to the language model."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class CompleteItinerary:
    """Buffered generation result."""

    text: str


@dataclass(frozen=True, slots=True)
class StreamedItinerary:
    """Streaming generation result: a single-pass source of text fragments."""

    fragments: FragmentStream


GenerationResult = Union[CompleteItinerary, StreamedItinerary]


__all__: List[str] = [
    "CompleteItinerary",
    "EvidenceBlob",
    "EvidenceFragment",
    "EvidenceKind",
    "FRAGMENT_DELIMITER",
    "GenerationResult",
    "ItineraryPrompt",
    "REQUIRED_TRIP_FIELDS",
    "SkippedVideo",
    "StreamedItinerary",
    "TripRequest",
    "VideoCandidate",
]
