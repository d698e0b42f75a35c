"""Schemas for trip snapshots, computed routes and map descriptors."""

from datetime import date, datetime
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator


_DATETIME_ADAPTER = TypeAdapter(datetime)


class TripStatus(str, Enum):
    DRAFT = "DRAFT"
    PLANNED = "PLANNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class TransportMode(str, Enum):
    FLIGHT = "FLIGHT"
    CAR = "CAR"


class LegKind(str, Enum):
    OUTBOUND = "OUTBOUND"
    CONNECTING = "CONNECTING"
    RETURN = "RETURN"
    FALLBACK = "FALLBACK"


class GeoPoint(BaseModel):
    """A (latitude, longitude) pair. Immutable value type."""
    latitude: float
    longitude: float

    model_config = ConfigDict(frozen=True)


class HomeLocation(BaseModel):
    """The user's home base; zero or one per user."""
    point: GeoPoint
    label: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class TripSnapshot(BaseModel):
    """
    Read-only view of a trip as the route engine sees it.

    Dates are calendar dates: datetime input is truncated to its date so the
    overlap check never depends on time of day.
    """
    id: str
    title: Optional[str] = None
    destination: Optional[str] = None
    destination_point: Optional[GeoPoint] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: TripStatus = TripStatus.PLANNED
    transport_mode: Optional[TransportMode] = None
    departure_airport: Optional[GeoPoint] = None
    arrival_airport: Optional[GeoPoint] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def truncate_to_date(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10:
            try:
                return _DATETIME_ADAPTER.validate_python(value).date()
            except ValidationError:
                # Leave it for the date field to reject
                return value
        return value


class Leg(BaseModel):
    """One computed segment of a route. Serialized with "from"/"to" keys."""
    from_point: GeoPoint = Field(alias="from")
    to_point: GeoPoint = Field(alias="to")
    kind: LegKind
    mode: Optional[TransportMode] = None
    distance_km: float
    trip_id: Optional[str] = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Route(BaseModel):
    """Ordered legs of one run of the route builder."""
    legs: list[Leg] = []
    total_km: float = 0.0


class DistanceSummary(BaseModel):
    """Traveled vs planned mileage and trip counts for the map sidebar."""
    traveled_miles: float
    planned_miles: float
    traveled_display: str
    planned_display: str
    unique_destinations: int
    completed_trips: int
    geo_trip_count: int


class PathOptions(BaseModel):
    color: str
    weight: int
    opacity: float
    dash_array: Optional[str] = None


class RouteLine(BaseModel):
    """Polyline descriptor consumed by the map renderer."""
    points: list[GeoPoint]
    style_class: str
    path_options: PathOptions
    kind: LegKind
    mode: Optional[TransportMode] = None


class MapMarker(BaseModel):
    """Point marker descriptor. Trip markers are coloured by status; at most one home marker."""
    marker_type: Literal["trip", "home"]
    position: GeoPoint
    color: str
    trip_id: Optional[str] = None
    status: Optional[TripStatus] = None
    status_label: Optional[str] = None
    title: Optional[str] = None
    destination: Optional[str] = None
    date_range: Optional[str] = None
    label: Optional[str] = None


class MapViewport(BaseModel):
    center: GeoPoint
    zoom: int


class MapView(BaseModel):
    lines: list[RouteLine]
    markers: list[MapMarker]
    viewport: MapViewport


class TravelMapRequest(BaseModel):
    """Request body for POST /travel-map/compute."""
    trips: list[TripSnapshot] = []
    home: Optional[HomeLocation] = None


class TravelMapResponse(BaseModel):
    """Distance summary, both routes and the map view for one trip snapshot."""
    summary: DistanceSummary
    traveled_route: Route
    planned_route: Route
    map: MapView
