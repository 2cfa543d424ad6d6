"""Timeline parsing endpoints"""

import json
import logging

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from core.config import settings
from services.geocoding import EnrichedPoint, NominatimService
from services.timeline import extract_points

logger = logging.getLogger(__name__)

router = APIRouter(tags=["timeline"])

# Global Nominatim service (created on first use)
_nominatim_service = None


def get_nominatim_service() -> NominatimService:
    """Get Nominatim service instance"""
    global _nominatim_service
    if _nominatim_service is None:
        _nominatim_service = NominatimService(
            timeout=settings.GEOCODE_TIMEOUT_SECONDS,
            user_agent=settings.NOMINATIM_USER_AGENT,
        )
    return _nominatim_service


class TimelineResponse(BaseModel):
    """Points extracted from a timeline export"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    count: int
    points: list[EnrichedPoint]


async def read_json_body(request: Request):
    """Read and decode the request body, enforcing MAX_BODY_SIZE"""
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > settings.MAX_BODY_SIZE:
        raise HTTPException(status_code=413, detail="Request body too large")

    body = await request.body()
    if len(body) > settings.MAX_BODY_SIZE:
        raise HTTPException(status_code=413, detail="Request body too large")

    try:
        data = json.loads(body) if body else None
    except (ValueError, RecursionError):
        data = None

    if not data:
        raise HTTPException(status_code=400, detail="Request body is empty or not valid JSON")
    return data


@router.post("/parse-timeline", response_model=TimelineResponse)
async def parse_timeline(request: Request):
    """
    Parse a timeline export and return every valid point.

    Each point is enriched with district and country names from Nominatim.
    Points whose lookup failed have localityData set to null.

    Example body:
    {"timelineEdits": [{"rawSignal": {"signal": {"position": {"point":
        {"latE7": -255982063, "lngE7": -545841325}}}}}]}
    """
    data = await read_json_body(request)

    try:
        points = extract_points(data, settings.E7_MIN_DIGITS, settings.NOMINATIM_REVERSE_URL)
        logger.info(f"Extracted {len(points)} points, fetching locality data")

        service = get_nominatim_service()
        enriched = await service.enrich_points(points)

        return TimelineResponse(count=len(enriched), points=enriched)
    except Exception as e:
        logger.exception(f"Error processing timeline: {e}")
        raise HTTPException(
            status_code=500,
            detail={"error": "Internal server error", "message": str(e)}
        )
