from typing import List, Optional
from pydantic import BaseModel, Field


class ItineraryResponse(BaseModel):
    """Buffered-mode success body."""

    itinerary: str = Field(..., description="Markdown itinerary")


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    error: str = Field(..., description="Human readable error")
    details: Optional[str] = Field(default=None, description="Underlying collaborator error")
    missing: Optional[List[str]] = Field(default=None, description="Missing request parameters")
