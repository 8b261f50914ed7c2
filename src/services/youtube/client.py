from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from src.core.config import ApiSettings
from src.core.schemas import VideoCandidate
from src.services.youtube.schemas import VideoSearchInput

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-goog-api-key"


def _provider_error_message(response: httpx.Response) -> str:
    """Extract ``error.message`` from a Google API error body."""

    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return response.reason_phrase


class YouTubeSearch:
    """Thin async wrapper around the YouTube Data API v3 search endpoint.

    The API key is sent in the ``x-goog-api-key`` header, never in the URL.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://www.googleapis.com/youtube/v3",
        timeout_s: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.api_url = f"{base_url.rstrip('/')}/search"
        self._client = httpx.AsyncClient(
            headers={"accept": "application/json", API_KEY_HEADER: api_key},
            timeout=httpx.Timeout(timeout_s, connect=10.0),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "YouTubeSearch":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def _aget(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """GET ``url`` and return the parsed JSON body.

        Raises:
            httpx.HTTPStatusError: with the status code and the provider's own
                error message only.
        """

        response = await self._client.get(url, params=params)
        if response.is_error:
            reason = _provider_error_message(response)
            raise httpx.HTTPStatusError(
                f"YouTube search failed with status {response.status_code}: {reason}",
                request=response.request,
                response=response,
            )
        return response.json()

    async def search(self, query: str, max_results: int = 5) -> List[VideoCandidate]:
        """Return videos for ``query`` in provider relevance order.

        An empty list is a normal outcome. HTTP errors propagate as
        ``httpx.HTTPStatusError``.
        """

        payload = VideoSearchInput(q=query, maxResults=max_results)
        params = payload.model_dump()
        logger.info(f"Searching for videos with query: {query!r} (max {max_results})")
        data = await self._aget(self.api_url, params)

        candidates: List[VideoCandidate] = []
        for item in data.get("items") or []:
            video_id = (item.get("id") or {}).get("videoId")
            if not video_id:
                continue
            snippet = item.get("snippet") or {}
            candidates.append(
                VideoCandidate(
                    id=video_id,
                    title=snippet.get("title") or "",
                    description=snippet.get("description") or "",
                )
            )

        # The API occasionally returns more items than requested.
        candidates = candidates[:max_results]
        if not candidates:
            logger.info(f"No videos found for query: {query!r}")
        return candidates


def create_youtube_client(settings: ApiSettings) -> YouTubeSearch:
    """Instantiate the search client using project configuration."""

    return YouTubeSearch(api_key=settings.ensure("youtube_api_key"))
