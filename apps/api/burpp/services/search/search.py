"""Search service facade.

Business logic is split across:
- vendor search pipeline: burpp.services.search.search_logic
- category / service-area predicates: burpp.services.search.vendor_filter
- admin visibility diagnostics: burpp.services.search.search_debug
"""

from sqlalchemy.ext.asyncio import AsyncSession

from burpp.providers import Geocoder
from burpp.schemas import SearchDebugResponse, VendorSearchResponse
from .search_logic import run_search
from .search_debug import debug_vendor_search


class SearchService:
    """Facade for search operations."""

    @staticmethod
    async def search_vendors(
        db: AsyncSession,
        geocoder: Geocoder,
        category: str | None,
        q: str | None,
        page: int,
        limit: int,
        bypass_cache: bool = False,
    ) -> VendorSearchResponse:
        return await run_search(db, category, q, page, limit, bypass_cache, geocoder)

    @staticmethod
    async def debug_vendor(
        db: AsyncSession,
        geocoder: Geocoder,
        vendor_id: str,
        location: str | None,
        category: str | None,
    ) -> SearchDebugResponse:
        return await debug_vendor_search(db, vendor_id, location, category, geocoder)


search_service = SearchService()
