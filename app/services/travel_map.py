"""Travel map facade: summary, both routes and map view, memoized on input content."""

import hashlib
import json
import logging
from collections import OrderedDict
from threading import Lock
from typing import Iterable, Optional

from app.core.config import settings
from app.schemas.travel import HomeLocation, TravelMapResponse, TripSnapshot
from app.services.distance_aggregator import planned_route, summarize, traveled_route
from app.services.route_builder import filter_geo_trips
from app.services.route_visualizer import build_map_view

logger = logging.getLogger(__name__)

_cache: "OrderedDict[str, TravelMapResponse]" = OrderedDict()
_cache_lock = Lock()


def route_cache_key(trips: Iterable[TripSnapshot], home: Optional[HomeLocation]) -> str:
    """SHA-256 over the canonical JSON of the trip snapshot and home location."""
    payload = {
        "trips": [t.model_dump(mode="json") for t in trips],
        "home": home.model_dump(mode="json") if home is not None else None,
    }
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


def build_travel_map(trips: Iterable[TripSnapshot], home: Optional[HomeLocation] = None) -> TravelMapResponse:
    """Compute the travel map without consulting the cache."""
    geo_trips = filter_geo_trips(trips)
    traveled = traveled_route(geo_trips, home)
    planned = planned_route(geo_trips, home)
    return TravelMapResponse(
        summary=summarize(geo_trips, traveled, planned),
        traveled_route=traveled,
        planned_route=planned,
        map=build_map_view(geo_trips, home, legs=planned.legs),
    )


def compute_travel_map(trips: Iterable[TripSnapshot], home: Optional[HomeLocation] = None) -> TravelMapResponse:
    """
    Memoized travel map.

    Results are kept in a bounded LRU keyed by route_cache_key, so an unchanged
    (trips, home) pair is never recomputed. Callers get a deep copy; the cached
    entry is never handed out.
    """
    trips = list(trips)
    key = route_cache_key(trips, home)
    with _cache_lock:
        cached = _cache.get(key)
        if cached is not None:
            _cache.move_to_end(key)
            return cached.model_copy(deep=True)

    result = build_travel_map(trips, home)

    with _cache_lock:
        _cache[key] = result
        _cache.move_to_end(key)
        while len(_cache) > settings.route_cache_size:
            _cache.popitem(last=False)
    logger.info(
        "Travel map computed: trips=%d planned_legs=%d cache_size=%d",
        len(trips),
        len(result.planned_route.legs),
        len(_cache),
    )
    return result.model_copy(deep=True)


def clear_travel_map_cache() -> None:
    with _cache_lock:
        _cache.clear()
