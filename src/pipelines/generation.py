"""Itinerary generation in buffered or streaming mode."""
from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Optional

from langchain_core.language_models.chat_models import BaseChatModel

from src.core.errors import GenerationFailed
from src.core.schemas import (
    CompleteItinerary,
    GenerationResult,
    ItineraryPrompt,
    StreamedItinerary,
)
from src.services.llm import content_to_text

logger = logging.getLogger(__name__)


class ItineraryGenerator:
    """Forward a rendered prompt to the chat model.

    In ``stream`` mode the first fragment is awaited before a result is
    returned, so a model that fails up front surfaces as ``GenerationFailed``
    while the caller can still answer with an error status. Later failures end
    the stream abruptly.
    """

    def __init__(self, llm: BaseChatModel, *, mode: str = "stream") -> None:
        if mode not in ("stream", "buffered"):
            raise ValueError(f"Unsupported delivery mode: {mode}")
        self.llm = llm
        self.mode = mode

    async def generate(self, prompt: ItineraryPrompt, *, deadline: Optional[float] = None) -> GenerationResult:
        """Return the model output for ``prompt``.

        Args:
            prompt: Rendered itinerary prompt.
            deadline: Event-loop time after which a running stream is cut off.
        """

        if self.mode == "buffered":
            return await self._complete(prompt)
        return await self._open_stream(prompt, deadline)

    async def _complete(self, prompt: ItineraryPrompt) -> CompleteItinerary:
        try:
            message = await self.llm.ainvoke(prompt.text)
        except Exception as exc:
            logger.error(f"Itinerary generation failed: {exc}")
            raise GenerationFailed(str(exc)) from exc

        text = content_to_text(getattr(message, "content", message))
        logger.info(f"Generated itinerary ({len(text)} chars)")
        return CompleteItinerary(text=text)

    async def _fragments(self, prompt: ItineraryPrompt) -> AsyncIterator[str]:
        async for chunk in self.llm.astream(prompt.text):
            text = content_to_text(getattr(chunk, "content", chunk))
            if text:
                yield text

    async def _open_stream(self, prompt: ItineraryPrompt, deadline: Optional[float]) -> StreamedItinerary:
        fragments = self._fragments(prompt)
        try:
            first: Optional[str] = await fragments.__anext__()
        except StopAsyncIteration:
            first = None
        except Exception as exc:
            await fragments.aclose()
            logger.error(f"Itinerary stream failed before the first fragment: {exc}")
            raise GenerationFailed(str(exc)) from exc
        except BaseException:
            await fragments.aclose()
            raise

        return StreamedItinerary(fragments=self._forward(first, fragments, deadline))

    @staticmethod
    async def _next_fragment(fragments: AsyncIterator[str], deadline: Optional[float]) -> str:
        if deadline is None:
            return await fragments.__anext__()
        remaining = deadline - asyncio.get_running_loop().time()
        if remaining <= 0:
            raise asyncio.TimeoutError()
        return await asyncio.wait_for(fragments.__anext__(), timeout=remaining)

    async def _forward(
        self,
        first: Optional[str],
        fragments: AsyncIterator[str],
        deadline: Optional[float],
    ) -> AsyncIterator[str]:
        forwarded = 0
        try:
            if first is not None:
                forwarded += 1
                yield first
            while True:
                try:
                    fragment = await self._next_fragment(fragments, deadline)
                except StopAsyncIteration:
                    break
                forwarded += 1
                yield fragment
            logger.info(f"Itinerary stream completed after {forwarded} fragments")
        except asyncio.CancelledError:
            logger.info(f"Client disconnected after {forwarded} fragments, aborting generation")
            raise
        except asyncio.TimeoutError as exc:
            logger.error(f"Itinerary stream exceeded the request deadline after {forwarded} fragments")
            raise GenerationFailed("Generation exceeded the request deadline") from exc
        except Exception as exc:
            logger.error(f"Itinerary stream failed after {forwarded} fragments: {exc}", exc_info=True)
            raise GenerationFailed(str(exc)) from exc
        finally:
            await fragments.aclose()
