from __future__ import annotations

import logging
from typing import Any

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI
from langchain_xai import ChatXAI

from src.core.config import ApiSettings

logger = logging.getLogger(__name__)


def create_chat_model(settings: ApiSettings) -> BaseChatModel:
    """Build the chat model for the configured provider.

    The model is stateless between calls and shared across requests.
    """

    api_key = settings.ensure_model_key()
    model = settings.model_name
    logger.info(f"Using {settings.llm_provider} model {model}")

    if settings.llm_provider == "google":
        return ChatGoogleGenerativeAI(
            model=model,
            google_api_key=api_key,
            temperature=settings.llm_temperature,
        )
    if settings.llm_provider == "openai":
        return ChatOpenAI(
            model=model,
            api_key=api_key,
            temperature=settings.llm_temperature,
        )
    return ChatXAI(
        model=model,
        api_key=api_key,
        temperature=settings.llm_temperature,
    )


def content_to_text(content: Any) -> str:
    """Normalise message or chunk content into plain text.

    Providers return either a string or a list of content parts.
    """

    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        text_chunks = []
        for chunk in content:
            if isinstance(chunk, str):
                text_chunks.append(chunk)
            elif isinstance(chunk, dict) and chunk.get("type") == "text":
                text_chunks.append(chunk.get("text", ""))
        return "".join(text_chunks)
    return str(content)
