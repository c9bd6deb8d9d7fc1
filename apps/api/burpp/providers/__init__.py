from .geocode_cache import CacheEntry, GeocodeCache, InMemoryGeocodeCache, RedisGeocodeCache
from .geocoding import Geocoder, GeocodingServiceError, NominatimGeocoder, get_geocoder
from .moderation import (
    ModerationConfigError,
    ModerationResult,
    ModerationServiceError,
    OpenAICompatibleModerationProvider,
    get_moderation_provider,
)

__all__ = [
    "CacheEntry",
    "GeocodeCache",
    "InMemoryGeocodeCache",
    "RedisGeocodeCache",
    "Geocoder",
    "GeocodingServiceError",
    "NominatimGeocoder",
    "get_geocoder",
    "ModerationConfigError",
    "ModerationResult",
    "ModerationServiceError",
    "OpenAICompatibleModerationProvider",
    "get_moderation_provider",
]
