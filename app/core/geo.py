"""Geo utilities: great-circle distance (Haversine), unit conversion and display formatting."""

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.schemas.travel import GeoPoint

EARTH_RADIUS_KM = 6371.0
KM_TO_MILES = 0.621371


def haversine_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Compute great-circle distance between two (lat, lon) points in kilometers.
    Uses the Haversine formula over a fixed-radius sphere; NaN inputs yield NaN.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def great_circle_km(a: "GeoPoint", b: "GeoPoint") -> float:
    """Great-circle distance between two GeoPoints in kilometers."""
    return haversine_distance_km(a.latitude, a.longitude, b.latitude, b.longitude)


def km_to_miles(km: float) -> float:
    """Convert kilometers to miles."""
    return km * KM_TO_MILES


def format_distance(miles: float) -> str:
    """
    Short display form of a mileage figure.

    Above 1000 miles: thousands with one decimal and a "k" suffix (e.g. "8.3k").
    Otherwise: rounded to the nearest integer (e.g. "742").
    """
    if miles > 1000:
        return f"{miles / 1000:.1f}k"
    # Round half up
    return str(int(math.floor(miles + 0.5)))
