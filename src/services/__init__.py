"""External service integrations for itinerary generation.

This package wraps the collaborators used by the pipeline:

- YouTube: video search (Data API v3) and transcript retrieval
- LLM: chat model construction for the configured provider

Each service module exports:
    - create_*: Factory building the collaborator from ``ApiSettings``
    - the collaborator class itself, for direct construction in tests

Example Usage:
    >>> from src.services import create_youtube_client
    >>> from src.core.config import ApiSettings
    >>>
    >>> settings = ApiSettings.from_env()
    >>> client = create_youtube_client(settings)
    >>> videos = await client.search("Lisbon travel guide", 5)
"""

# YouTube search and transcripts
from src.services.youtube import (
    TranscriptFetcher,
    VideoSearchInput,
    YouTubeSearch,
    create_transcript_fetcher,
    create_youtube_client,
    join_segments,
)

# Language models
from src.services.llm import content_to_text, create_chat_model

__all__ = [
    # YouTube
    "YouTubeSearch",
    "create_youtube_client",
    "TranscriptFetcher",
    "create_transcript_fetcher",
    "join_segments",
    "VideoSearchInput",
    # LLM
    "create_chat_model",
    "content_to_text",
]
