"""Vendor search: geocode the location, load approved vendors, filter, paginate.

Without a resolvable location the category-filtered set is paginated in the
database. With one, every approved vendor in the category is loaded and the
service-area split runs in Python before slicing the page.
"""

import logging
import time

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from burpp.db.models import VendorProfile
from burpp.geo import GeoPoint
from burpp.providers import Geocoder
from burpp.schemas import VendorSearchResponse
from burpp.serializers import vendor_to_response
from .pagination import Page, offset_for, paginate
from .vendor_filter import filter_by_category, filter_by_location

logger = logging.getLogger(__name__)


def _approved_vendors_query(category_id: str | None):
    stmt = select(VendorProfile).where(VendorProfile.admin_approved.is_(True))
    if category_id:
        stmt = stmt.where(VendorProfile.service_categories.contains([category_id]))
    return stmt


async def fetch_approved_vendors(db: AsyncSession, category_id: str | None) -> list[VendorProfile]:
    stmt = _approved_vendors_query(category_id).order_by(
        VendorProfile.created_at.desc(), VendorProfile.id
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def count_approved_vendors(db: AsyncSession, category_id: str | None) -> int:
    stmt = select(func.count()).select_from(_approved_vendors_query(category_id).subquery())
    result = await db.execute(stmt)
    return int(result.scalar_one() or 0)


async def fetch_approved_vendors_page(
    db: AsyncSession,
    category_id: str | None,
    offset: int,
    limit: int,
) -> list[VendorProfile]:
    stmt = (
        _approved_vendors_query(category_id)
        .order_by(VendorProfile.created_at.desc(), VendorProfile.id)
        .offset(offset)
        .limit(limit)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def resolve_location(geocoder: Geocoder, q: str | None, bypass_cache: bool) -> GeoPoint | None:
    location = (q or "").strip()
    if not location:
        return None
    t0 = time.perf_counter()
    point = await geocoder.geocode(location, bypass_cache=bypass_cache)
    logger.info("Geocoded %r in %.1f ms -> %s", location, (time.perf_counter() - t0) * 1000, point)
    if point is None:
        logger.warning("Location %r could not be resolved; searching without a location constraint", location)
    return point


async def _search_without_location(
    db: AsyncSession,
    category_id: str | None,
    page: int,
    limit: int,
) -> Page[VendorProfile]:
    total = await count_approved_vendors(db, category_id)
    rows = await fetch_approved_vendors_page(db, category_id, offset_for(page, limit), limit)
    # Rows dropped by the membership re-check were already counted; accept the small overcount.
    return Page(items=filter_by_category(rows, category_id), total=total, page=page, limit=limit)


async def _search_with_location(
    db: AsyncSession,
    category_id: str | None,
    point: GeoPoint,
    page: int,
    limit: int,
) -> Page[VendorProfile]:
    t0 = time.perf_counter()
    rows = await fetch_approved_vendors(db, category_id)
    t1 = time.perf_counter()
    matches = filter_by_location(filter_by_category(rows, category_id), point)
    logger.info(
        "Vendor query %.1f ms (%d rows), filter %.1f ms (%d matches)",
        (t1 - t0) * 1000, len(rows), (time.perf_counter() - t1) * 1000, len(matches),
    )
    return paginate(matches, page, limit)


async def run_search(
    db: AsyncSession,
    category: str | None,
    q: str | None,
    page: int,
    limit: int,
    bypass_cache: bool,
    geocoder: Geocoder,
) -> VendorSearchResponse:
    category_id = (category or "").strip() or None
    point = await resolve_location(geocoder, q, bypass_cache)
    if point is None:
        result = await _search_without_location(db, category_id, page, limit)
    else:
        result = await _search_with_location(db, category_id, point, page, limit)
    return VendorSearchResponse(
        vendors=[vendor_to_response(v) for v in result.items],
        count=result.total,
        page=result.page,
        limit=result.limit,
        has_more=result.has_more,
    )
