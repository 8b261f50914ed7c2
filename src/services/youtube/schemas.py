from pydantic import BaseModel, Field
from typing import Literal


class VideoSearchInput(BaseModel):
    """Search parameters forwarded to the YouTube Data API ``search.list`` endpoint."""

    q: str = Field(description="Free text search query")
    maxResults: int = Field(default=5, ge=1, le=50, description="Number of videos to return")
    part: str = Field(default="snippet", description="Resource parts to include")
    type: Literal["video"] = Field(default="video", description="Restrict results to videos")
    order: Literal["relevance", "date", "rating", "viewCount"] = Field(
        default="relevance", description="Ranking used by the provider"
    )
