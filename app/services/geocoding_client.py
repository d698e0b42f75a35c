"""Nominatim geocoding client: free-text place search for home locations and trip destinations."""

import asyncio
import logging
import traceback
from typing import Awaitable, Callable

import httpx
from aiolimiter import AsyncLimiter

from app.core.config import settings
from app.schemas.geocode import GeocodeCandidate
from app.schemas.travel import GeoPoint

logger = logging.getLogger(__name__)

# Address keys tried in order for the locality part of a short label
LOCALITY_KEYS = ("city", "town", "village", "municipality", "hamlet", "county")

# Nominatim usage policy: at most one request per interval, process-wide
geocode_rate_limiter = AsyncLimiter(1, settings.geocode_min_interval_seconds)


class GeocodingError(Exception):
    """Upstream geocoding request failed or returned a non-200 status."""


async def _call_nominatim(params: dict) -> list:
    """Call the Nominatim search endpoint. Returns parsed JSON or raises GeocodingError."""
    url = f"{settings.nominatim_base_url.rstrip('/')}/search"
    headers = {"User-Agent": settings.geocode_user_agent}

    async with geocode_rate_limiter:
        logger.info(f"Geocoding service calling: {url} q={params.get('q')!r}")
        try:
            async with httpx.AsyncClient(timeout=settings.geocode_timeout_seconds) as client:
                response = await client.get(url, params=params, headers=headers)
        except httpx.HTTPError as e:
            raise GeocodingError(f"Geocoding request failed: {e}") from e

    if response.status_code != 200:
        truncated_body = response.text[:500] if response.text else "(empty)"
        raise GeocodingError(f"Geocoding HTTP {response.status_code}: {truncated_body}")

    data = response.json()
    return data if isinstance(data, list) else []


def short_label(address: dict | None, display_name: str | None = None) -> str | None:
    """
    Synthesize a short label from address components.

    "City, State" when a state is known, else "City, Country"; falls back to the
    first segment of the display name.
    """
    address = address or {}
    locality = next((address[k] for k in LOCALITY_KEYS if address.get(k)), None)
    region = address.get("state") or address.get("country")
    if locality and region:
        return f"{locality}, {region}"
    if locality or region:
        return locality or region
    if display_name:
        return display_name.split(",")[0].strip() or None
    return None


def _normalize_candidate(item: dict) -> GeocodeCandidate:
    address = {k: str(v) for k, v in (item.get("address") or {}).items()}
    display_name = item.get("display_name", "")
    return GeocodeCandidate(
        display_name=display_name,
        lat=str(item.get("lat", "")),
        lon=str(item.get("lon", "")),
        type=item.get("type"),
        address=address,
        label=short_label(address, display_name),
    )


async def search_places(query: str) -> list[GeocodeCandidate]:
    """
    Ranked candidates for a free-text query.

    Queries shorter than geocode_min_query_length return [] without a lookup.
    Raises GeocodingError when the upstream call fails.
    """
    query = (query or "").strip()
    if len(query) < settings.geocode_min_query_length:
        return []

    params = {
        "q": query,
        "format": "json",
        "limit": settings.geocode_result_limit,
        "addressdetails": 1,
    }
    data = await _call_nominatim(params)
    candidates = [_normalize_candidate(item) for item in data if item.get("lat") and item.get("lon")]
    logger.info(f"Geocoding returned {len(candidates)} candidates for {query!r}")
    return candidates


async def geocode_destination(destination: str) -> GeoPoint | None:
    """
    Resolve a trip destination to its top-ranked point.

    Returns None when nothing matches or the lookup fails.
    """
    try:
        candidates = await search_places(destination)
    except GeocodingError as e:
        logger.error(f"Geocoding destination failed: {e}\n{traceback.format_exc()}")
        return None
    if not candidates:
        logger.info(f"No geocoding candidates for destination {destination!r}")
        return None
    try:
        return candidates[0].to_point()
    except ValueError:
        logger.warning(f"Unparseable coordinates for {destination!r}: {candidates[0].lat}, {candidates[0].lon}")
        return None


SearchFn = Callable[[str], Awaitable[list[GeocodeCandidate]]]


class GeocodeSearchSession:
    """
    Search-as-you-type state for one picker.

    Every search() call takes a new request token. After the debounce delay the
    call gives up if a newer token exists; when its lookup returns, results are
    published only if its token is still the latest. Lookup failures publish an
    empty result set and leave any saved home location untouched.
    """

    def __init__(self, search: SearchFn = search_places, debounce_seconds: float | None = None):
        self._search = search
        self._debounce_seconds = (
            settings.geocode_debounce_seconds if debounce_seconds is None else debounce_seconds
        )
        self._latest_token = 0
        self.query: str | None = None
        self.results: list[GeocodeCandidate] = []

    @property
    def latest_token(self) -> int:
        return self._latest_token

    def issue_token(self) -> int:
        self._latest_token += 1
        return self._latest_token

    def is_current(self, token: int) -> bool:
        return token == self._latest_token

    def publish(self, token: int, query: str, results: list[GeocodeCandidate]) -> bool:
        """Make results visible if token is the latest issued. Returns whether they were applied."""
        if not self.is_current(token):
            logger.debug(f"Discarding stale geocoding results for {query!r} (token {token} < {self._latest_token})")
            return False
        self.query = query
        self.results = results
        return True

    async def search(self, query: str) -> list[GeocodeCandidate] | None:
        """Debounced, last-write-wins search. Returns None when superseded by a newer query."""
        token = self.issue_token()
        if self._debounce_seconds > 0:
            await asyncio.sleep(self._debounce_seconds)
        if not self.is_current(token):
            return None

        try:
            results = await self._search(query)
        except GeocodingError as e:
            logger.warning(f"Geocoding lookup failed for {query!r}: {e}")
            results = []

        if not self.publish(token, query, results):
            return None
        return results
