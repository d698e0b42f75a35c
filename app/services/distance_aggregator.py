"""Traveled vs planned mileage for the map summary."""

from typing import Iterable, Optional

from app.core.geo import format_distance, km_to_miles
from app.schemas.travel import DistanceSummary, HomeLocation, Route, TripSnapshot, TripStatus
from app.services.route_builder import build_route, filter_geo_trips

TRAVELED_STATUSES = frozenset({TripStatus.COMPLETED, TripStatus.IN_PROGRESS})


def traveled_route(geo_trips: list[TripSnapshot], home: Optional[HomeLocation]) -> Route:
    """Route over trips that are completed or under way."""
    return build_route([t for t in geo_trips if t.status in TRAVELED_STATUSES], home)


def planned_route(geo_trips: list[TripSnapshot], home: Optional[HomeLocation]) -> Route:
    """Route over every geocoded trip regardless of status."""
    return build_route(geo_trips, home)


def summarize(
    geo_trips: list[TripSnapshot],
    traveled: Route,
    planned: Route,
) -> DistanceSummary:
    """Convert both route totals to miles and derive the trip counts."""
    traveled_miles = km_to_miles(traveled.total_km)
    planned_miles = km_to_miles(planned.total_km)
    return DistanceSummary(
        traveled_miles=traveled_miles,
        planned_miles=planned_miles,
        traveled_display=format_distance(traveled_miles),
        planned_display=format_distance(planned_miles),
        unique_destinations=len({t.destination for t in geo_trips if t.destination}),
        completed_trips=sum(1 for t in geo_trips if t.status == TripStatus.COMPLETED),
        geo_trip_count=len(geo_trips),
    )


def aggregate_distances(
    trips: Iterable[TripSnapshot],
    home: Optional[HomeLocation] = None,
) -> DistanceSummary:
    """
    Build the traveled and planned routes independently and summarize them.

    Both runs re-sort and re-chain their own trip set, so planned mileage is
    not computed by extending the traveled route.
    """
    geo_trips = filter_geo_trips(trips)
    return summarize(geo_trips, traveled_route(geo_trips, home), planned_route(geo_trips, home))
