"""Tests for trip ordering, the no-home chain and home-anchored route building."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from app.core.geo import great_circle_km
from app.schemas.travel import GeoPoint, LegKind, TransportMode, TripSnapshot, TripStatus
from app.services.route_builder import (
    build_route,
    filter_geo_trips,
    outbound_legs,
    sort_trips_by_start,
    trips_overlap,
)

from tests.conftest import CDG, HOME, JFK, LONDON, PARIS, ROME, make_trip


def _kinds(route):
    return [leg.kind for leg in route.legs]


def test_filter_geo_trips_drops_trips_without_point():
    trips = [make_trip("a", PARIS), make_trip("b", None), make_trip("c", ROME)]
    assert [t.id for t in filter_geo_trips(trips)] == ["a", "c"]


def test_sort_by_start_date():
    trips = [
        make_trip("b", ROME, date(2026, 2, 1)),
        make_trip("a", PARIS, date(2026, 1, 1)),
        make_trip("c", LONDON, date(2026, 3, 1)),
    ]
    assert [t.id for t in sort_trips_by_start(trips)] == ["a", "b", "c"]


def test_sort_keeps_input_order_when_dates_missing():
    trips = [make_trip("x", PARIS), make_trip("y", ROME), make_trip("z", LONDON)]
    assert [t.id for t in sort_trips_by_start(trips)] == ["x", "y", "z"]


def test_sort_never_drops_undated_trip():
    trips = [
        make_trip("b", ROME, date(2026, 2, 1)),
        make_trip("a", PARIS, date(2026, 1, 1)),
        make_trip("x", LONDON),
    ]
    ordered = sort_trips_by_start(trips)
    assert sorted(t.id for t in ordered) == ["a", "b", "x"]
    assert sort_trips_by_start(trips) == ordered


def test_empty_input_has_no_legs_with_and_without_home():
    for home in (None, HOME):
        route = build_route([], home)
        assert route.legs == []
        assert route.total_km == 0.0


def test_only_ungeocoded_trips_behave_like_empty_input():
    route = build_route([make_trip("a", None, date(2026, 1, 1))], HOME)
    assert route.legs == []
    assert route.total_km == 0.0


def test_no_home_builds_consecutive_fallback_chain():
    trips = [
        make_trip("r", ROME, date(2026, 2, 1)),
        make_trip("p", PARIS, date(2026, 1, 1)),
        make_trip("l", LONDON, date(2026, 3, 1)),
    ]
    route = build_route(trips)
    assert _kinds(route) == [LegKind.FALLBACK, LegKind.FALLBACK]
    assert route.legs[0].from_point == PARIS and route.legs[0].to_point == ROME
    assert route.legs[1].from_point == ROME and route.legs[1].to_point == LONDON
    assert all(leg.mode is None for leg in route.legs)
    assert route.total_km == pytest.approx(great_circle_km(PARIS, ROME) + great_circle_km(ROME, LONDON))


def test_no_home_single_trip_has_no_legs():
    route = build_route([make_trip("p", PARIS, date(2026, 1, 1))])
    assert route.legs == []
    assert route.total_km == 0.0


def test_single_trip_with_home_is_round_trip():
    route = build_route([make_trip("p", PARIS, date(2026, 6, 1), date(2026, 6, 5))], HOME)
    assert _kinds(route) == [LegKind.OUTBOUND, LegKind.RETURN]
    assert route.legs[0].from_point == HOME.point
    assert route.legs[-1].to_point == HOME.point
    assert route.total_km == pytest.approx(2 * great_circle_km(HOME.point, PARIS))


def test_shared_boundary_day_counts_as_overlap():
    a = make_trip("a", PARIS, date(2026, 6, 1), date(2026, 6, 10))
    b = make_trip("b", ROME, date(2026, 6, 10), date(2026, 6, 15))
    assert trips_overlap(a, b)

    route = build_route([a, b], HOME)
    assert _kinds(route) == [LegKind.OUTBOUND, LegKind.CONNECTING, LegKind.RETURN]
    connecting = route.legs[1]
    assert connecting.from_point == PARIS
    assert connecting.to_point == ROME


def test_gap_between_trips_returns_home_first():
    a = make_trip("a", PARIS, date(2026, 6, 1), date(2026, 6, 10))
    b = make_trip("b", ROME, date(2026, 6, 12), date(2026, 6, 15))
    assert not trips_overlap(a, b)

    route = build_route([a, b], HOME)
    assert _kinds(route) == [LegKind.OUTBOUND, LegKind.RETURN, LegKind.OUTBOUND, LegKind.RETURN]
    assert route.legs[1].from_point == PARIS and route.legs[1].to_point == HOME.point
    assert route.legs[2].from_point == HOME.point and route.legs[2].to_point == ROME


def test_missing_dates_never_overlap():
    a = make_trip("a", PARIS, date(2026, 6, 1), None)
    b = make_trip("b", ROME, date(2026, 6, 2), date(2026, 6, 5))
    assert not trips_overlap(a, b)
    assert not trips_overlap(b, make_trip("c", LONDON, None, None))


def test_route_is_closed_loop_for_any_nonempty_home_route():
    trips = [
        make_trip("a", PARIS, date(2026, 6, 1), date(2026, 6, 10)),
        make_trip("b", ROME, date(2026, 6, 10), date(2026, 6, 12)),
        make_trip("c", LONDON, None, None),
        make_trip("d", CDG, date(2026, 8, 1), date(2026, 8, 3), status=TripStatus.IN_PROGRESS),
    ]
    route = build_route(trips, HOME)
    assert route.legs[0].from_point == HOME.point
    assert route.legs[-1].to_point == HOME.point
    assert route.legs[-1].kind == LegKind.RETURN


def test_flight_with_both_airports_decomposes_into_three_legs():
    trip = make_trip(
        "p",
        PARIS,
        date(2026, 6, 1),
        date(2026, 6, 5),
        transport_mode=TransportMode.FLIGHT,
        departure_airport=JFK,
        arrival_airport=CDG,
    )
    legs = outbound_legs(HOME.point, trip, LegKind.OUTBOUND)
    assert len(legs) == 3
    assert [(leg.from_point, leg.to_point) for leg in legs] == [
        (HOME.point, JFK),
        (JFK, CDG),
        (CDG, PARIS),
    ]
    assert [leg.mode for leg in legs] == [None, TransportMode.FLIGHT, None]

    route = build_route([trip], HOME)
    assert _kinds(route) == [LegKind.OUTBOUND] * 3 + [LegKind.RETURN]


@pytest.mark.parametrize("missing", ["departure_airport", "arrival_airport"])
def test_flight_missing_an_airport_collapses_to_single_leg(missing):
    airports = {"departure_airport": JFK, "arrival_airport": CDG}
    airports[missing] = None
    trip = make_trip("p", PARIS, date(2026, 6, 1), transport_mode=TransportMode.FLIGHT, **airports)
    legs = outbound_legs(HOME.point, trip, LegKind.OUTBOUND)
    assert len(legs) == 1
    assert legs[0].mode == TransportMode.FLIGHT
    assert legs[0].to_point == PARIS


def test_airports_ignored_unless_mode_is_flight():
    trip = make_trip(
        "p", PARIS, date(2026, 6, 1), transport_mode=TransportMode.CAR, departure_airport=JFK, arrival_airport=CDG
    )
    legs = outbound_legs(HOME.point, trip, LegKind.OUTBOUND)
    assert len(legs) == 1
    assert legs[0].mode == TransportMode.CAR


def test_total_is_sum_of_leg_distances():
    trips = [
        make_trip("a", PARIS, date(2026, 6, 1), date(2026, 6, 10),
                  transport_mode=TransportMode.FLIGHT, departure_airport=JFK, arrival_airport=CDG),
        make_trip("b", ROME, date(2026, 6, 20), date(2026, 6, 25)),
    ]
    route = build_route(trips, HOME)
    assert route.total_km == pytest.approx(sum(leg.distance_km for leg in route.legs))
    assert route.total_km > 0


def test_build_is_deterministic():
    trips = [
        make_trip("b", ROME, date(2026, 6, 12), date(2026, 6, 15)),
        make_trip("a", PARIS, date(2026, 6, 1), date(2026, 6, 10)),
        make_trip("x", LONDON),
        make_trip("g", GeoPoint(latitude=35.68, longitude=139.69), date(2026, 6, 15), date(2026, 6, 30)),
    ]
    first = build_route(trips, HOME)
    second = build_route(list(trips), HOME)
    assert first.legs == second.legs
    assert first.total_km == second.total_km


def test_connecting_flight_uses_same_decomposition():
    a = make_trip("a", PARIS, date(2026, 6, 1), date(2026, 6, 10))
    b = make_trip(
        "b",
        LONDON,
        date(2026, 6, 10),
        date(2026, 6, 14),
        transport_mode=TransportMode.FLIGHT,
        departure_airport=CDG,
        arrival_airport=GeoPoint(latitude=51.47, longitude=-0.4543),
    )
    route = build_route([a, b], HOME)
    assert _kinds(route) == [LegKind.OUTBOUND, LegKind.CONNECTING, LegKind.CONNECTING, LegKind.CONNECTING, LegKind.RETURN]
    assert route.legs[1].from_point == PARIS
    assert route.legs[3].to_point == LONDON


@pytest.mark.parametrize(
    "raw",
    ["2026-06-10T09:30:00.12Z", "2026-06-10T09:30:00Z", "2026-06-10T23:59:59+02:00"],
)
def test_snapshot_truncates_datetime_strings_to_calendar_day(raw):
    trip = TripSnapshot(id="t", title="t", start_date=raw, end_date=raw)
    assert trip.start_date == date(2026, 6, 10)
    assert trip.end_date == date(2026, 6, 10)


def test_snapshot_truncates_datetime_objects():
    trip = TripSnapshot(id="t", title="t", start_date=datetime(2026, 6, 10, 9, 30))
    assert trip.start_date == date(2026, 6, 10)


def test_snapshot_rejects_unparseable_date():
    with pytest.raises(ValidationError):
        TripSnapshot(id="t", title="t", start_date="not-a-date-at-all")
