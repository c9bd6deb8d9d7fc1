"""Geocode result caches: in-process LRU with TTL, or Redis with SETEX expiry."""

import json
import logging
import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable

from redis.asyncio import Redis
from redis.exceptions import RedisError

from burpp.geo import GeoPoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """A resolved lookup. coords is None when the provider had no match."""

    coords: GeoPoint | None
    stored_at: float


class GeocodeCache(ABC):
    @abstractmethod
    async def get(self, key: str) -> CacheEntry | None:
        """Return a fresh entry, or None on miss or expiry."""

    @abstractmethod
    async def set(self, key: str, coords: GeoPoint | None) -> None:
        pass


class InMemoryGeocodeCache(GeocodeCache):
    """Process-local cache bounded by max_entries (least recently used evicted first)."""

    def __init__(
        self,
        ttl_seconds: float = 3600,
        max_entries: int = 5000,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return entry

    async def set(self, key: str, coords: GeoPoint | None) -> None:
        self._entries[key] = CacheEntry(coords=coords, stored_at=self._clock())
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()


class RedisGeocodeCache(GeocodeCache):
    """Shared cache for multi-instance deployments. Redis being down is a cache miss."""

    def __init__(self, client: Redis, ttl_seconds: int = 3600, prefix: str = "geocode:"):
        self.client = client
        self.ttl_seconds = ttl_seconds
        self.prefix = prefix

    async def get(self, key: str) -> CacheEntry | None:
        try:
            raw = await self.client.get(self.prefix + key)
        except RedisError as e:
            logger.warning("Geocode cache read failed, treating as miss: %s", e)
            return None
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except ValueError:
            return None
        if not isinstance(data, dict) or "lat" not in data or "lng" not in data:
            logger.warning("Ignoring malformed geocode cache entry for %r", key)
            return None
        lat, lng = data["lat"], data["lng"]
        coords = GeoPoint(lat=lat, lng=lng) if lat is not None and lng is not None else None
        return CacheEntry(coords=coords, stored_at=data.get("stored_at", 0.0))

    async def set(self, key: str, coords: GeoPoint | None) -> None:
        payload = {
            "lat": coords.lat if coords else None,
            "lng": coords.lng if coords else None,
            "stored_at": time.time(),
        }
        try:
            await self.client.setex(self.prefix + key, self.ttl_seconds, json.dumps(payload))
        except RedisError as e:
            logger.warning("Geocode cache write failed: %s", e)
