"""YouTube integrations used as evidence sources.

Public API:
    - YouTubeSearch / create_youtube_client: async search over the Data API v3
    - TranscriptFetcher / create_transcript_fetcher: per-video transcript retrieval
    - VideoSearchInput: Pydantic schema for search parameters
"""
from src.services.youtube.client import YouTubeSearch, create_youtube_client
from src.services.youtube.transcripts import TranscriptFetcher, create_transcript_fetcher, join_segments
from src.services.youtube.schemas import VideoSearchInput

__all__ = [
    "YouTubeSearch",
    "create_youtube_client",
    "TranscriptFetcher",
    "create_transcript_fetcher",
    "join_segments",
    "VideoSearchInput",
]
