from typing import Optional

from fastapi.responses import JSONResponse, Response, StreamingResponse

from src.api.schemas import ErrorResponse, ItineraryResponse
from src.core.errors import ItineraryError
from src.core.schemas import CompleteItinerary, GenerationResult, StreamedItinerary

STREAM_MEDIA_TYPE = "text/plain; charset=utf-8"


def _error_response(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _exception_to_response(exc: Exception) -> JSONResponse:
    if isinstance(exc, ItineraryError):
        body = ErrorResponse(**exc.to_payload())
        return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))
    return _error_response(500, "Failed to generate itinerary.", str(exc))


def _result_to_response(result: GenerationResult) -> Response:
    if isinstance(result, CompleteItinerary):
        return JSONResponse(content=ItineraryResponse(itinerary=result.text).model_dump())
    if isinstance(result, StreamedItinerary):
        return StreamingResponse(result.fragments, media_type=STREAM_MEDIA_TYPE)
    raise TypeError(f"Unsupported generation result: {type(result).__name__}")
