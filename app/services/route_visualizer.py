"""Map descriptors: route legs to styled polylines, trips and home to markers."""

from datetime import date
from typing import Iterable, Optional

from app.schemas.travel import (
    GeoPoint,
    HomeLocation,
    Leg,
    LegKind,
    MapMarker,
    MapView,
    MapViewport,
    PathOptions,
    RouteLine,
    TransportMode,
    TripSnapshot,
    TripStatus,
)
from app.services.route_builder import build_route, filter_geo_trips

STATUS_COLORS = {
    TripStatus.PLANNED: "#f59e0b",
    TripStatus.COMPLETED: "#22c55e",
    TripStatus.IN_PROGRESS: "#3b82f6",
    TripStatus.DRAFT: "#64748b",
    TripStatus.CANCELLED: "#ef4444",
}

STATUS_LABELS = {
    TripStatus.PLANNED: "Planned",
    TripStatus.COMPLETED: "Completed",
    TripStatus.IN_PROGRESS: "In Progress",
    TripStatus.DRAFT: "Draft",
    TripStatus.CANCELLED: "Cancelled",
}

DEFAULT_MARKER_COLOR = "#64748b"
HOME_MARKER_COLOR = "#0f172a"

# Style class -> renderer path options
LINE_STYLES = {
    "outbound-car": PathOptions(color="#0ea5e9", weight=3, opacity=0.8),
    "outbound": PathOptions(color="#f59e0b", weight=2, opacity=0.8),
    "connecting": PathOptions(color="#8b5cf6", weight=2, opacity=0.8),
    "return": PathOptions(color="#94a3b8", weight=2, opacity=0.6, dash_array="6 4"),
    "fallback": PathOptions(color="#f59e0b", weight=2, opacity=0.5, dash_array="6 4"),
}

DEFAULT_CENTER = GeoPoint(latitude=20.0, longitude=0.0)
SINGLE_TRIP_ZOOM = 6
MULTI_TRIP_ZOOM = 3


def style_class_for_leg(leg: Leg) -> str:
    """Style class derived from the leg's kind and, for outbound legs, its mode."""
    if leg.kind == LegKind.OUTBOUND:
        return "outbound-car" if leg.mode == TransportMode.CAR else "outbound"
    if leg.kind == LegKind.CONNECTING:
        return "connecting"
    if leg.kind == LegKind.RETURN:
        return "return"
    return "fallback"


def legs_to_lines(legs: Iterable[Leg]) -> list[RouteLine]:
    """One two-point polyline per leg, in route order."""
    lines = []
    for leg in legs:
        style_class = style_class_for_leg(leg)
        lines.append(
            RouteLine(
                points=[leg.from_point, leg.to_point],
                style_class=style_class,
                path_options=LINE_STYLES[style_class],
                kind=leg.kind,
                mode=leg.mode,
            )
        )
    return lines


def _format_date(value: Optional[date]) -> str:
    if value is None:
        return ""
    return f"{value:%b} {value.day}, {value.year}"


def format_date_range(start: Optional[date], end: Optional[date]) -> Optional[str]:
    """Popup date text, e.g. "Jun 1, 2026 - Jun 5, 2026"; None when neither date is set."""
    if start is None and end is None:
        return None
    text = _format_date(start)
    if end is not None:
        text = f"{text} - {_format_date(end)}" if text else _format_date(end)
    return text


def trip_markers(geo_trips: Iterable[TripSnapshot]) -> list[MapMarker]:
    """One marker per geocoded trip, coloured by status."""
    markers = []
    for trip in geo_trips:
        if trip.destination_point is None:
            continue
        markers.append(
            MapMarker(
                marker_type="trip",
                position=trip.destination_point,
                color=STATUS_COLORS.get(trip.status, DEFAULT_MARKER_COLOR),
                trip_id=trip.id,
                status=trip.status,
                status_label=STATUS_LABELS.get(trip.status, trip.status.value),
                title=trip.title,
                destination=trip.destination,
                date_range=format_date_range(trip.start_date, trip.end_date),
            )
        )
    return markers


def home_marker(home: Optional[HomeLocation]) -> Optional[MapMarker]:
    """The distinguished home marker, or None without a home location."""
    if home is None:
        return None
    return MapMarker(
        marker_type="home",
        position=home.point,
        color=HOME_MARKER_COLOR,
        label=home.label or "Home",
    )


def map_viewport(geo_trips: list[TripSnapshot]) -> MapViewport:
    """Centre on the mean trip position; zoom in closer when there is a single trip."""
    points = [t.destination_point for t in geo_trips if t.destination_point is not None]
    if not points:
        return MapViewport(center=DEFAULT_CENTER, zoom=MULTI_TRIP_ZOOM)
    center = GeoPoint(
        latitude=sum(p.latitude for p in points) / len(points),
        longitude=sum(p.longitude for p in points) / len(points),
    )
    return MapViewport(center=center, zoom=SINGLE_TRIP_ZOOM if len(points) == 1 else MULTI_TRIP_ZOOM)


def build_map_view(
    trips: Iterable[TripSnapshot],
    home: Optional[HomeLocation] = None,
    legs: Optional[list[Leg]] = None,
) -> MapView:
    """
    Assemble lines, markers and viewport for the map renderer.

    `legs` lets a caller that already built the planned route reuse it; otherwise
    the route is built here over all geocoded trips.
    """
    geo_trips = filter_geo_trips(trips)
    if legs is None:
        legs = build_route(geo_trips, home).legs
    markers = trip_markers(geo_trips)
    home_pin = home_marker(home)
    if home_pin is not None:
        markers.append(home_pin)
    return MapView(lines=legs_to_lines(legs), markers=markers, viewport=map_viewport(geo_trips))
