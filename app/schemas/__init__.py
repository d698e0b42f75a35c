from app.schemas.user import UserCreate, UserRead, HomeLocationUpdate
from app.schemas.trip import TripCreate, TripRead, TripGeocodeResult
from app.schemas.geocode import GeocodeCandidate, RoadDistanceResponse
from app.schemas.travel import (
    GeoPoint,
    HomeLocation,
    TripSnapshot,
    Leg,
    Route,
    DistanceSummary,
    MapView,
    TravelMapRequest,
    TravelMapResponse,
)

__all__ = [
    "UserCreate",
    "UserRead",
    "HomeLocationUpdate",
    "TripCreate",
    "TripRead",
    "TripGeocodeResult",
    "GeocodeCandidate",
    "RoadDistanceResponse",
    "GeoPoint",
    "HomeLocation",
    "TripSnapshot",
    "Leg",
    "Route",
    "DistanceSummary",
    "MapView",
    "TravelMapRequest",
    "TravelMapResponse",
]
