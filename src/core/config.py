"""Configuration helpers for API keys and environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

LLM_PROVIDERS = ("google", "openai", "xai")
DELIVERY_MODES = ("stream", "buffered")
EVIDENCE_SOURCES = ("snippet", "transcript")

DEFAULT_MODELS = {
    "google": "gemini-2.5-flash",
    "openai": "gpt-4o-mini",
    "xai": "grok-4-fast-reasoning",
}

# Settings field holding the credential for each model provider.
PROVIDER_KEY_FIELDS = {
    "google": "google_api_key",
    "openai": "openai_api_key",
    "xai": "xai_api_key",
}


def _split_csv(raw: Optional[str], default: List[str]) -> List[str]:
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(slots=True)
class ApiSettings:
    """Centralised container for provider credentials and pipeline tuning."""

    youtube_api_key: Optional[str] = None
    google_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    xai_api_key: Optional[str] = None

    llm_provider: str = "google"
    llm_model: Optional[str] = None
    llm_temperature: float = 0.7

    delivery_mode: str = "stream"
    evidence_source: str = "snippet"
    max_results: int = 5
    fallback_max_results: int = 10
    transcript_char_limit: int = 20000
    transcript_languages: List[str] = field(default_factory=lambda: ["en"])
    request_timeout_s: float = 60.0
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])

    def __post_init__(self) -> None:
        if self.llm_provider not in LLM_PROVIDERS:
            raise ValueError(
                f"Unsupported LLM provider '{self.llm_provider}', expected one of {', '.join(LLM_PROVIDERS)}"
            )
        if self.delivery_mode not in DELIVERY_MODES:
            raise ValueError(
                f"Unsupported delivery mode '{self.delivery_mode}', expected one of {', '.join(DELIVERY_MODES)}"
            )
        if self.evidence_source not in EVIDENCE_SOURCES:
            raise ValueError(
                f"Unsupported evidence source '{self.evidence_source}', expected one of {', '.join(EVIDENCE_SOURCES)}"
            )
        if self.max_results < 1 or self.fallback_max_results < 1:
            raise ValueError("Search result caps must be positive")

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Load settings from environment variables (and a .env file if loaded)."""

        return cls(
            youtube_api_key=os.getenv("YOUTUBE_API_KEY"),
            google_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY"),
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            xai_api_key=os.getenv("XAI_API_KEY"),
            llm_provider=os.getenv("ITINERARY_LLM_PROVIDER", "google").lower(),
            llm_model=os.getenv("ITINERARY_LLM_MODEL") or None,
            llm_temperature=float(os.getenv("ITINERARY_LLM_TEMPERATURE", "0.7")),
            delivery_mode=os.getenv("ITINERARY_DELIVERY_MODE", "stream").lower(),
            evidence_source=os.getenv("ITINERARY_EVIDENCE_SOURCE", "snippet").lower(),
            max_results=int(os.getenv("ITINERARY_MAX_RESULTS", "5")),
            fallback_max_results=int(os.getenv("ITINERARY_FALLBACK_MAX_RESULTS", "10")),
            transcript_char_limit=int(os.getenv("ITINERARY_TRANSCRIPT_CHAR_LIMIT", "20000")),
            transcript_languages=_split_csv(os.getenv("ITINERARY_TRANSCRIPT_LANGUAGES"), ["en"]),
            request_timeout_s=float(os.getenv("ITINERARY_REQUEST_TIMEOUT_S", "60")),
            allowed_origins=_split_csv(os.getenv("CORS_ALLOW_ORIGINS"), ["*"]),
        )

    @property
    def model_name(self) -> str:
        """Configured model, or the provider's default."""

        return self.llm_model or DEFAULT_MODELS[self.llm_provider]

    def ensure(self, field: str) -> str:
        """Return the requested field and fail fast if it is missing."""

        value = getattr(self, field)
        if not value:
            raise RuntimeError(f"Missing configuration value: {field}")
        return value

    def ensure_model_key(self) -> str:
        """Return the credential for the configured model provider."""

        return self.ensure(PROVIDER_KEY_FIELDS[self.llm_provider])
