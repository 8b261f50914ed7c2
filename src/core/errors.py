"""Failure taxonomy for the itinerary pipeline.

Every pipeline-level failure derives from ``ItineraryError`` and knows the HTTP
status and JSON body it maps to. ``TranscriptFetchFailed`` is the exception:
it never leaves the evidence gatherer.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence


class ItineraryError(Exception):
    """Base class for failures that terminate an itinerary request."""

    status_code: int = 500

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidRequest(ItineraryError):
    """Raised when required trip parameters are missing or empty."""

    status_code = 400

    def __init__(self, missing: Sequence[str] = (), *, message: Optional[str] = None) -> None:
        self.missing: List[str] = list(missing)
        if message is None:
            message = f"Missing required parameters: {', '.join(self.missing)}."
        super().__init__(message)

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        if self.missing:
            payload["missing"] = self.missing
        return payload


class NoEvidenceFound(ItineraryError):
    """Raised when neither the specific nor the broad query produced usable text."""

    status_code = 404

    def __init__(self, message: str = "Could not find any relevant video data.", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class NoVideosFound(NoEvidenceFound):
    """Raised when neither search returned a single video."""

    def __init__(self, message: str = "Could not find any relevant videos.", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class TranscriptFetchFailed(Exception):
    """Per-video transcript failure, always recovered by skipping the video."""

    def __init__(self, video_id: str, reason: str) -> None:
        super().__init__(f"Transcript unavailable for {video_id}: {reason}")
        self.video_id = video_id
        self.reason = reason


class GenerationFailed(ItineraryError):
    """Raised when the language model call fails."""

    status_code = 500

    def __init__(self, details: str) -> None:
        super().__init__("Failed to generate itinerary.", details=details)


class PipelineTimeout(ItineraryError):
    """Raised when the request exceeds its overall deadline."""

    status_code = 504

    def __init__(self, timeout_s: float) -> None:
        super().__init__(
            "Itinerary generation timed out.",
            details=f"Exceeded the {timeout_s:g}s request deadline",
        )
        self.timeout_s = timeout_s
