"""
Route builder: turns a user's geocoded trips into an ordered list of classified legs.

Without a home location the route is a plain chain between consecutive trips
(FALLBACK legs). With a home location every trip is reached from home or, when
its dates touch the previous trip's, directly from the previous destination;
the route always closes with a RETURN leg to home.
"""

import logging
from functools import cmp_to_key
from typing import Iterable, Optional

from app.core.geo import great_circle_km
from app.schemas.travel import (
    GeoPoint,
    HomeLocation,
    Leg,
    LegKind,
    Route,
    TransportMode,
    TripSnapshot,
)

logger = logging.getLogger(__name__)


def filter_geo_trips(trips: Iterable[TripSnapshot]) -> list[TripSnapshot]:
    """Keep only trips whose destination has been geocoded to a point."""
    return [t for t in trips if t.destination_point is not None]


def _compare_start_dates(a: TripSnapshot, b: TripSnapshot) -> int:
    # Missing dates compare equal to anything: the trip keeps its input position.
    if a.start_date is None or b.start_date is None:
        return 0
    if a.start_date < b.start_date:
        return -1
    if a.start_date > b.start_date:
        return 1
    return 0


def sort_trips_by_start(trips: Iterable[TripSnapshot]) -> list[TripSnapshot]:
    """
    Stable ascending sort by start date.

    Trips without a start date are not assigned a synthetic date; the comparator
    treats them as equal to every other trip, so they stay in input order.
    """
    return sorted(trips, key=cmp_to_key(_compare_start_dates))


def _leg(
    origin: GeoPoint,
    target: GeoPoint,
    kind: LegKind,
    mode: Optional[TransportMode],
    trip_id: Optional[str],
) -> Leg:
    return Leg(
        from_point=origin,
        to_point=target,
        kind=kind,
        mode=mode,
        distance_km=great_circle_km(origin, target),
        trip_id=trip_id,
    )


def outbound_legs(origin: GeoPoint, trip: TripSnapshot, kind: LegKind) -> list[Leg]:
    """
    Legs from origin to the trip's destination.

    A flight with both airports known becomes origin -> departure airport ->
    arrival airport -> destination; the ground transfers carry no mode. Anything
    else is a single leg tagged with the trip's transport mode.
    """
    destination = trip.destination_point
    if (
        trip.transport_mode == TransportMode.FLIGHT
        and trip.departure_airport is not None
        and trip.arrival_airport is not None
    ):
        return [
            _leg(origin, trip.departure_airport, kind, None, trip.id),
            _leg(trip.departure_airport, trip.arrival_airport, kind, TransportMode.FLIGHT, trip.id),
            _leg(trip.arrival_airport, destination, kind, None, trip.id),
        ]
    return [_leg(origin, destination, kind, trip.transport_mode, trip.id)]


def trips_overlap(previous: TripSnapshot, current: TripSnapshot) -> bool:
    """True when the current trip starts on or before the day the previous one ends."""
    return (
        previous.end_date is not None
        and current.start_date is not None
        and previous.end_date >= current.start_date
    )


def build_route(geo_trips: Iterable[TripSnapshot], home: Optional[HomeLocation] = None) -> Route:
    """
    Build the ordered, classified route for a set of geocoded trips.

    Trips without a destination point are skipped. The result is a pure function
    of the inputs: same trips and home always give the same legs and total.
    """
    ordered = sort_trips_by_start(filter_geo_trips(geo_trips))
    legs: list[Leg] = []

    if not ordered:
        return Route(legs=[], total_km=0.0)

    if home is None:
        for previous, current in zip(ordered, ordered[1:]):
            legs.append(
                _leg(previous.destination_point, current.destination_point, LegKind.FALLBACK, None, current.id)
            )
    else:
        home_point = home.point
        legs.extend(outbound_legs(home_point, ordered[0], LegKind.OUTBOUND))
        for previous, current in zip(ordered, ordered[1:]):
            if trips_overlap(previous, current):
                legs.extend(outbound_legs(previous.destination_point, current, LegKind.CONNECTING))
            else:
                legs.append(_leg(previous.destination_point, home_point, LegKind.RETURN, None, previous.id))
                legs.extend(outbound_legs(home_point, current, LegKind.OUTBOUND))
        last = ordered[-1]
        legs.append(_leg(last.destination_point, home_point, LegKind.RETURN, None, last.id))

    total_km = sum(leg.distance_km for leg in legs)
    logger.debug("Built route: trips=%d legs=%d home=%s total_km=%.1f", len(ordered), len(legs), home is not None, total_km)
    return Route(legs=legs, total_km=total_km)
