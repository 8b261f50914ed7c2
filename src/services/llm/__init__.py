"""Chat model construction for itinerary generation.

Public API:
    - create_chat_model: Factory returning a LangChain chat model for the configured provider
    - content_to_text: Helper flattening message content into text
"""
from src.services.llm.client import content_to_text, create_chat_model

__all__ = [
    "create_chat_model",
    "content_to_text",
]
