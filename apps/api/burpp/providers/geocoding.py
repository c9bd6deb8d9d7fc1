import logging
import re
from abc import ABC, abstractmethod
from functools import lru_cache

import httpx
from redis.asyncio import Redis

from burpp.core import get_settings
from burpp.geo import GeoPoint
from burpp.providers.geocode_cache import GeocodeCache, InMemoryGeocodeCache, RedisGeocodeCache

logger = logging.getLogger(__name__)

_US_ZIP_RE = re.compile(r"^\d{5}(-\d{4})?$")


class GeocodingServiceError(Exception):
    """Raised when the geocoding API is unavailable or returns an unexpected response."""


class Geocoder(ABC):
    @abstractmethod
    async def lookup(self, query: str) -> GeoPoint | None:
        """Resolve query without caching. Raises GeocodingServiceError on provider failure."""

    @abstractmethod
    async def geocode(self, query: str, bypass_cache: bool = False) -> GeoPoint | None:
        """Best-effort resolve: None when unresolvable or the provider fails."""


def normalize_location_query(query: str) -> str:
    """Bare US ZIP codes resolve more reliably with a country suffix."""
    q = (query or "").strip()
    if _US_ZIP_RE.match(q):
        return f"{q}, USA"
    return q


class NominatimGeocoder(Geocoder):
    """OpenStreetMap Nominatim /search endpoint."""

    def __init__(
        self,
        base_url: str,
        user_agent: str,
        cache: GeocodeCache,
        timeout: float = 5.0,
        country_codes: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.cache = cache
        self.timeout = timeout
        self.country_codes = country_codes
        self._transport = transport

    async def lookup(self, query: str) -> GeoPoint | None:
        params = {"format": "json", "q": normalize_location_query(query), "limit": "1"}
        if self.country_codes:
            params["countrycodes"] = self.country_codes
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.get(f"{self.base_url}/search", params=params, headers=headers)
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPStatusError as e:
            raise GeocodingServiceError(
                f"Geocoding API returned {e.response.status_code}."
            ) from e
        except httpx.RequestError as e:
            raise GeocodingServiceError(
                "Geocoding service unavailable (timeout or connection error)."
            ) from e
        except ValueError as e:
            raise GeocodingServiceError("Geocoding API returned invalid JSON.") from e

        if not isinstance(data, list) or not data:
            return None
        try:
            return GeoPoint(lat=float(data[0]["lat"]), lng=float(data[0]["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodingServiceError("Geocoding API returned unexpected response format.") from e

    async def geocode(self, query: str, bypass_cache: bool = False) -> GeoPoint | None:
        if not bypass_cache:
            cached = await self.cache.get(query)
            if cached is not None:
                return cached.coords
        try:
            coords = await self.lookup(query)
        except GeocodingServiceError as e:
            logger.warning("Geocoding failed for %r: %s", query, e)
            return None
        await self.cache.set(query, coords)
        return coords


def build_geocode_cache() -> GeocodeCache:
    s = get_settings()
    if s.redis_url:
        return RedisGeocodeCache(
            Redis.from_url(s.redis_url, decode_responses=True),
            ttl_seconds=s.geocode_cache_ttl_seconds,
        )
    return InMemoryGeocodeCache(
        ttl_seconds=s.geocode_cache_ttl_seconds,
        max_entries=s.geocode_cache_max_entries,
    )


@lru_cache
def get_geocoder() -> Geocoder:
    s = get_settings()
    return NominatimGeocoder(
        base_url=s.geocoder_base_url,
        user_agent=s.geocoder_user_agent,
        cache=build_geocode_cache(),
        timeout=s.geocoder_timeout_seconds,
        country_codes=s.geocoder_country_codes,
    )
