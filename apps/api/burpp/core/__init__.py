"""Core configuration, auth, and shared infrastructure."""

from burpp.core.config import Settings, get_settings
from burpp.core.constants import (
    EARTH_RADIUS_MILES,
    FEATURED_CATEGORY_COUNT,
    NO_STORE_HEADERS,
    UUID_PATTERN,
)
from burpp.core.auth import decode_access_token
from burpp.core.limiter import limiter
from burpp.core.logging import setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "EARTH_RADIUS_MILES",
    "FEATURED_CATEGORY_COUNT",
    "NO_STORE_HEADERS",
    "UUID_PATTERN",
    "decode_access_token",
    "limiter",
    "setup_logging",
]
