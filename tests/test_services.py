"""Tests for service modules."""
from __future__ import annotations

from types import SimpleNamespace

import httpx
import pytest
from unittest.mock import AsyncMock, Mock, patch

from src.core.config import ApiSettings
from src.core.errors import TranscriptFetchFailed
from src.services.llm import client as llm_module
from src.services.llm import content_to_text, create_chat_model
from src.services.youtube import TranscriptFetcher, YouTubeSearch, join_segments


def _search_payload():
    return {
        "items": [
            {
                "id": {"kind": "youtube#video", "videoId": "abc123"},
                "snippet": {"title": "Tokyo food tour", "description": "Ramen, sushi and more"},
            },
            {
                "id": {"kind": "youtube#video", "videoId": "def456"},
                "snippet": {"title": "Tokyo on a budget", "description": None},
            },
            {
                "id": {"kind": "youtube#channel", "channelId": "chan"},
                "snippet": {"title": "A channel"},
            },
        ]
    }


class TestYouTubeSearch:
    """Test suite for the YouTube search client."""

    @pytest.fixture
    def mock_client(self):
        """Create a mock HTTPX client for testing."""
        mock_client = AsyncMock(spec=httpx.AsyncClient)
        mock_response = Mock()  # httpx Response methods are sync
        mock_response.json.return_value = _search_payload()
        mock_response.is_error = False
        mock_client.get.return_value = mock_response
        return mock_client

    @pytest.fixture
    def youtube_client(self, mock_client):
        """Create a search client with mocked HTTP client."""
        with patch("httpx.AsyncClient", return_value=mock_client):
            client = YouTubeSearch(api_key="test-key")
            client._client = mock_client
            return client

    def test_init_with_defaults(self):
        with patch("httpx.AsyncClient") as mock_httpx:
            client = YouTubeSearch(api_key="test-key")
            mock_httpx.assert_called_once()
            assert client.api_key == "test-key"
            assert client.api_url == "https://www.googleapis.com/youtube/v3/search"

    @pytest.mark.asyncio
    async def test_search_sends_expected_params(self, youtube_client, mock_client):
        await youtube_client.search("Tokyo travel guide", 5)

        mock_client.get.assert_called_once()
        args, kwargs = mock_client.get.call_args
        assert args[0] == "https://www.googleapis.com/youtube/v3/search"
        assert kwargs["params"] == {
            "q": "Tokyo travel guide",
            "maxResults": 5,
            "part": "snippet",
            "type": "video",
            "order": "relevance",
        }

    @pytest.mark.asyncio
    async def test_search_parses_videos_in_order(self, youtube_client):
        videos = await youtube_client.search("Tokyo travel guide", 5)

        assert [video.id for video in videos] == ["abc123", "def456"]
        assert videos[0].title == "Tokyo food tour"
        assert videos[1].description == ""

    @pytest.mark.asyncio
    async def test_search_truncates_to_max_results(self, youtube_client):
        videos = await youtube_client.search("Tokyo travel guide", 1)
        assert [video.id for video in videos] == ["abc123"]

    @pytest.mark.asyncio
    async def test_search_without_items_returns_empty(self, youtube_client, mock_client):
        mock_client.get.return_value.json.return_value = {"items": []}
        assert await youtube_client.search("Nowhere travel guide", 5) == []

    @pytest.mark.asyncio
    async def test_search_sends_key_as_header_not_query(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_search_payload())

        async with YouTubeSearch(api_key="test-key", transport=httpx.MockTransport(handler)) as client:
            await client.search("Tokyo travel guide", 5)

        assert seen[0].headers["x-goog-api-key"] == "test-key"
        assert "key" not in seen[0].url.params
        assert "test-key" not in str(seen[0].url)

    @pytest.mark.asyncio
    async def test_search_http_error_carries_provider_message_only(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"error": {"code": 403, "message": "quotaExceeded"}})

        async with YouTubeSearch(api_key="test-key", transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(httpx.HTTPStatusError) as excinfo:
                await client.search("Tokyo travel guide", 5)

        assert str(excinfo.value) == "YouTube search failed with status 403: quotaExceeded"
        assert excinfo.value.response.status_code == 403

    @pytest.mark.asyncio
    async def test_search_http_error_without_json_body_uses_reason(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="upstream unavailable")

        async with YouTubeSearch(api_key="test-key", transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(httpx.HTTPStatusError, match="status 503: Service Unavailable"):
                await client.search("Tokyo travel guide", 5)

    @pytest.mark.asyncio
    async def test_async_context_manager_closes_client(self, youtube_client, mock_client):
        async with youtube_client:
            pass
        mock_client.aclose.assert_awaited_once()


class TestTranscriptFetcher:
    """Test suite for transcript retrieval."""

    @pytest.mark.asyncio
    async def test_fetch_joins_segments(self):
        api = Mock()
        api.fetch.return_value = [
            SimpleNamespace(text="Welcome to", start=0.0, duration=1.0),
            SimpleNamespace(text="Tokyo!\nLet's eat", start=1.0, duration=2.0),
        ]
        fetcher = TranscriptFetcher(languages=["en", "ja"], api=api)

        text = await fetcher.fetch("abc123")

        assert text == "Welcome to Tokyo! Let's eat"
        api.fetch.assert_called_once_with("abc123", languages=["en", "ja"])

    @pytest.mark.asyncio
    async def test_fetch_truncates_long_transcripts(self):
        api = Mock()
        api.fetch.return_value = [SimpleNamespace(text="a" * 50)]
        fetcher = TranscriptFetcher(char_limit=10, api=api)

        assert await fetcher.fetch("abc123") == "a" * 10

    @pytest.mark.asyncio
    async def test_fetch_wraps_provider_errors(self):
        api = Mock()
        api.fetch.side_effect = RuntimeError("Subtitles are disabled for this video")
        fetcher = TranscriptFetcher(api=api)

        with pytest.raises(TranscriptFetchFailed) as excinfo:
            await fetcher.fetch("abc123")

        assert excinfo.value.video_id == "abc123"
        assert "Subtitles are disabled" in excinfo.value.reason

    @pytest.mark.asyncio
    async def test_fetch_rejects_empty_transcript(self):
        api = Mock()
        api.fetch.return_value = []
        fetcher = TranscriptFetcher(api=api)

        with pytest.raises(TranscriptFetchFailed) as excinfo:
            await fetcher.fetch("abc123")

        assert excinfo.value.reason == "empty transcript"


def test_join_segments_accepts_raw_dicts():
    assert join_segments([{"text": "one"}, {"text": ""}, {"text": "two  three"}]) == "one two three"


def test_content_to_text_variants():
    assert content_to_text("plain") == "plain"
    assert content_to_text(None) == ""
    assert content_to_text(["a", {"type": "text", "text": "b"}, {"type": "image_url"}]) == "ab"


@pytest.mark.parametrize(
    "provider, key_field, factory_name",
    [
        ("google", "google_api_key", "ChatGoogleGenerativeAI"),
        ("openai", "openai_api_key", "ChatOpenAI"),
        ("xai", "xai_api_key", "ChatXAI"),
    ],
)
def test_create_chat_model_selects_provider(monkeypatch, provider, key_field, factory_name):
    factory = Mock(return_value="model")
    monkeypatch.setattr(llm_module, factory_name, factory)
    settings = ApiSettings(llm_provider=provider, **{key_field: "secret"})

    assert create_chat_model(settings) == "model"

    kwargs = factory.call_args.kwargs
    assert kwargs["model"] == settings.model_name
    assert kwargs["temperature"] == 0.7


def test_create_chat_model_requires_provider_key():
    with pytest.raises(RuntimeError, match="google_api_key"):
        create_chat_model(ApiSettings(llm_provider="google"))
