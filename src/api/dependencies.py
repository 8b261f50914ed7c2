from src.api.itinerary_service import ItineraryService
from src.core.config import ApiSettings
from fastapi import FastAPI
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from functools import lru_cache


@lru_cache(maxsize=1)
def get_itinerary_service() -> ItineraryService:
    settings = ApiSettings.from_env()
    return ItineraryService(settings)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    try:
        yield
    finally:
        # Only tear down a service that was actually built.
        if get_itinerary_service.cache_info().currsize:
            service = get_itinerary_service()
            await service.close()
            get_itinerary_service.cache_clear()
