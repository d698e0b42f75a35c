"""Driving distance via OSRM, falling back to great-circle distance."""

import logging

import httpx

from app.core.config import settings
from app.core.geo import great_circle_km
from app.schemas.geocode import RoadDistanceResponse
from app.schemas.travel import GeoPoint

logger = logging.getLogger(__name__)


async def _osrm_distance_km(origin: GeoPoint, target: GeoPoint) -> float:
    """Query OSRM for the driving distance. Raises on any failure."""
    # OSRM takes lng,lat pairs
    coords = f"{origin.longitude},{origin.latitude};{target.longitude},{target.latitude}"
    url = f"{settings.osrm_base_url.rstrip('/')}/route/v1/driving/{coords}"

    async with httpx.AsyncClient(timeout=settings.road_distance_timeout_seconds) as client:
        response = await client.get(url, params={"overview": "false"})

    if response.status_code != 200:
        raise ValueError(f"OSRM responded with {response.status_code}")

    routes = response.json().get("routes") or []
    distance_m = routes[0].get("distance") if routes else None
    if not distance_m:
        raise ValueError("No route found")
    return distance_m / 1000


async def road_distance_km(origin: GeoPoint, target: GeoPoint) -> RoadDistanceResponse:
    """Road distance between two points; great-circle distance when OSRM is unavailable."""
    try:
        distance_km = await _osrm_distance_km(origin, target)
        return RoadDistanceResponse(distance_km=distance_km, source="osrm")
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"OSRM road distance unavailable, using great-circle: {e}")
        return RoadDistanceResponse(distance_km=great_circle_km(origin, target), source="haversine")
