"""Geocoding search proxy and road distance lookup."""

import logging

from fastapi import APIRouter, HTTPException, Query

from app.schemas.geocode import GeocodeCandidate, RoadDistanceResponse
from app.schemas.travel import GeoPoint
from app.services.geocoding_client import GeocodingError, search_places
from app.services.road_distance import road_distance_km

logger = logging.getLogger(__name__)

router = APIRouter(tags=["geocode"])

LAT_MIN, LAT_MAX = -90.0, 90.0
LNG_MIN, LNG_MAX = -180.0, 180.0


@router.get("/geocode/search", response_model=list[GeocodeCandidate])
async def geocode_search(q: str = Query("", description="Free-text place query")):
    """
    Ranked place candidates for a free-text query.

    Queries shorter than three characters return an empty list.
    """
    try:
        return await search_places(q)
    except GeocodingError as e:
        logger.error(f"Geocode search error: {e}")
        raise HTTPException(status_code=502, detail="Geocode service error")


@router.get("/distance/road", response_model=RoadDistanceResponse)
async def road_distance(
    from_lat: float = Query(..., ge=LAT_MIN, le=LAT_MAX),
    from_lng: float = Query(..., ge=LNG_MIN, le=LNG_MAX),
    to_lat: float = Query(..., ge=LAT_MIN, le=LAT_MAX),
    to_lng: float = Query(..., ge=LNG_MIN, le=LNG_MAX),
):
    """Driving distance between two points (great-circle fallback)."""
    return await road_distance_km(
        GeoPoint(latitude=from_lat, longitude=from_lng),
        GeoPoint(latitude=to_lat, longitude=to_lng),
    )
