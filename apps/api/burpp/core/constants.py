"""Shared API constants."""

# Mean Earth radius used for service-area distances
EARTH_RADIUS_MILES = 3959.0

FEATURED_CATEGORY_COUNT = 8

NO_STORE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate",
    "Pragma": "no-cache",
}

# Primary keys are UUIDs; ids in paths and bodies must match before reaching Postgres
UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
