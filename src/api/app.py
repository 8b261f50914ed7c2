"""FastAPI surface for the video-grounded itinerary generator."""
from __future__ import annotations

import json
import os
# Load environment variables from .env file
from dotenv import load_dotenv

# Load .env file before any other imports that might need environment variables
load_dotenv()


from typing import Any, Dict
from fastapi import FastAPI, Request
from fastapi.responses import Response
import logging
import sentry_sdk
from fastapi.middleware.cors import CORSMiddleware

from src.api.dependencies import lifespan, get_itinerary_service
from src.api.response_builder import _exception_to_response, _result_to_response
from src.api.schemas import ErrorResponse, ItineraryResponse
from src.core.config import ApiSettings
from src.core.errors import InvalidRequest, ItineraryError, NoEvidenceFound
from src.core.validation import validate_trip_request

logger = logging.getLogger(__name__)

if os.getenv("SENTRY_DSN"):  # pragma: no cover - runtime configuration
    sentry_sdk.init(
        dsn=os.getenv("SENTRY_DSN"),
        enable_logs=True,
        send_default_pii=False,
        traces_sample_rate=1.0,
    )

ITINERARY_PATH = "/api/generate-itinerary"

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

app = FastAPI(title="Itinerary API", version="0.1.0", lifespan=lifespan)

origins = ApiSettings.from_env().allowed_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def allow_any_origin(request: Request, call_next):
    """Mark every response as readable cross-origin when all origins are allowed.

    ``CORSMiddleware`` only answers requests that carry an ``Origin`` header.
    """

    response = await call_next(request)
    if "*" in origins:
        response.headers.setdefault("Access-Control-Allow-Origin", "*")
    return response


async def _read_params(request: Request) -> Dict[str, Any]:
    """Collect trip parameters from the query string and, for POST, a JSON body."""

    params: Dict[str, Any] = dict(request.query_params)
    if request.method != "POST":
        return params

    body = await request.body()
    if not body.strip():
        return params
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as exc:
        raise InvalidRequest(message="Request body must be a JSON object.") from exc
    if not isinstance(payload, dict):
        raise InvalidRequest(message="Request body must be a JSON object.")
    params.update(payload)
    return params


@app.options(ITINERARY_PATH, include_in_schema=False)
async def itinerary_preflight() -> Response:
    """Answer bare OPTIONS requests without touching the pipeline."""

    return Response(status_code=204, headers=PREFLIGHT_HEADERS)


@app.api_route(
    ITINERARY_PATH,
    methods=["GET", "POST"],
    responses={
        200: {"model": ItineraryResponse, "description": "JSON body when buffered, plain text stream otherwise"},
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def generate_itinerary(request: Request) -> Response:
    """Generate a markdown itinerary grounded in travel videos.

    Parameters come from the query string (GET) or a JSON object body (POST):
    ``destination``, ``startLocation``, ``duration``, ``tripType`` and
    ``budget``, all required.

    Depending on deployment configuration the itinerary is returned as
    ``{"itinerary": "..."}`` or streamed as ``text/plain`` while the model is
    still writing it.

    Example:
        ``GET /api/generate-itinerary?destination=Tokyo&startLocation=Seattle&duration=3&tripType=foodie&budget=$1000``
    """

    try:
        trip = validate_trip_request(await _read_params(request))
    except InvalidRequest as exc:
        return _exception_to_response(exc)

    try:
        service = get_itinerary_service()
        result = await service.plan_itinerary(trip)
    except NoEvidenceFound as exc:
        logger.warning(f"No evidence for trip to {trip.destination}: {exc.message}")
        return _exception_to_response(exc)
    except ItineraryError as exc:
        logger.error(f"Itinerary pipeline failed: {exc.message} ({exc.details})")
        return _exception_to_response(exc)
    except Exception as exc:
        logger.error(f"Unexpected error during itinerary generation: {str(exc)}", exc_info=True)
        return _exception_to_response(exc)

    return _result_to_response(result)


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Simple health endpoint used for readiness probes."""

    return {"status": "healthy", "service": "itinerary-api"}


@app.get("/pipeline/info")
async def get_pipeline_info() -> Dict[str, Any]:
    """Get the active pipeline configuration."""
    service = get_itinerary_service()

    return {"pipeline_info": service.describe()}
