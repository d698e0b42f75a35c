"""Schemas for geocoding search results and road distance."""

from typing import Literal, Optional

from pydantic import BaseModel

from app.schemas.travel import GeoPoint


class GeocodeCandidate(BaseModel):
    """
    One geocoding candidate, in the shape the search-as-you-type picker expects.

    lat/lon stay strings as returned upstream; `label` is a short "City, State"
    style name synthesized from the address components.
    """
    display_name: str
    lat: str
    lon: str
    type: Optional[str] = None
    address: dict[str, str] = {}
    label: Optional[str] = None

    def to_point(self) -> GeoPoint:
        return GeoPoint(latitude=float(self.lat), longitude=float(self.lon))


class RoadDistanceResponse(BaseModel):
    """Response for GET /distance/road."""
    distance_km: float
    source: Literal["osrm", "haversine"]
