"""Presence checks for incoming trip parameters."""
from __future__ import annotations

import logging
from typing import Any, List, Mapping

from src.core.errors import InvalidRequest
from src.core.schemas import REQUIRED_TRIP_FIELDS, TripRequest

logger = logging.getLogger(__name__)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return not str(value).strip()


def validate_trip_request(params: Mapping[str, Any]) -> TripRequest:
    """Return a ``TripRequest`` or raise ``InvalidRequest`` naming the missing fields.

    Values are only checked for presence. Non-string values (e.g. a JSON
    number for ``duration``) are converted to text, nothing else.
    """

    missing: List[str] = [name for name in REQUIRED_TRIP_FIELDS if _is_blank(params.get(name))]
    if missing:
        logger.info(f"Rejecting trip request, missing: {', '.join(missing)}")
        raise InvalidRequest(missing)

    return TripRequest.model_validate({name: str(params[name]).strip() for name in REQUIRED_TRIP_FIELDS})
