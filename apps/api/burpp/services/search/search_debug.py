"""Admin diagnostics: why a vendor does or does not appear for a search."""

import logging

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from burpp.db.models import VendorProfile
from burpp.geo import GeoPoint
from burpp.providers import Geocoder
from burpp.schemas import Coordinates, DistanceCheck, SearchDebugCheck, SearchDebugResponse
from .vendor_filter import has_category, has_service_area, is_virtual_bypass, vendor_distance

logger = logging.getLogger(__name__)


def _check(value, passed: bool, ok: str, fail: str, required: bool = True) -> SearchDebugCheck:
    return SearchDebugCheck(value=value, required=required, passed=passed, message=ok if passed else fail)


def build_checks(vendor: VendorProfile, category_id: str | None) -> dict[str, SearchDebugCheck]:
    # Service-area fields are not required for vendors listed through the virtual bypass.
    area_required = not is_virtual_bypass(vendor)
    radius_ok = vendor.service_radius is not None and vendor.service_radius > 0
    checks = {
        "admin_approved": _check(
            vendor.admin_approved,
            vendor.admin_approved is True,
            "Approved",
            "Not approved - vendor will not appear in search",
        ),
        "offers_in_person_services": _check(
            vendor.offers_in_person_services,
            bool(vendor.offers_in_person_services),
            "Offers in-person services",
            "Does not offer in-person services - only listed if it offers virtual services",
            required=area_required,
        ),
        "has_latitude": _check(
            vendor.latitude,
            vendor.latitude is not None,
            f"Has latitude: {vendor.latitude}",
            "Missing latitude - vendor location not geocoded",
            required=area_required,
        ),
        "has_longitude": _check(
            vendor.longitude,
            vendor.longitude is not None,
            f"Has longitude: {vendor.longitude}",
            "Missing longitude - vendor location not geocoded",
            required=area_required,
        ),
        "has_service_radius": _check(
            vendor.service_radius,
            radius_ok,
            f"Has service radius: {vendor.service_radius} miles",
            "Missing or zero service radius",
            required=area_required,
        ),
    }
    if category_id:
        current = ", ".join(vendor.service_categories or []) or "none"
        checks["has_category"] = _check(
            vendor.service_categories or [],
            has_category(vendor, category_id),
            f'Has category "{category_id}" in service_categories',
            f'Missing category "{category_id}" in service_categories. Current categories: {current}',
        )
    else:
        checks["has_category"] = SearchDebugCheck(
            value=vendor.service_categories or [],
            required=False,
            passed=True,
            message="Category check skipped (no category specified)",
        )
    return checks


def build_distance_check(vendor: VendorProfile, location: str, point: GeoPoint | None) -> DistanceCheck:
    if point is None:
        return DistanceCheck(search_location=location, error="Could not geocode search location")
    if vendor.latitude is None or vendor.longitude is None:
        return DistanceCheck(
            search_location=location,
            search_coords=Coordinates(lat=point.lat, lng=point.lng),
            error="Vendor has no stored coordinates",
        )
    try:
        distance = vendor_distance(vendor, point)
    except (TypeError, ValueError) as e:
        logger.warning("Distance check failed for vendor %s: %s", vendor.id, e)
        return DistanceCheck(search_location=location, error="Vendor coordinates are malformed")
    radius = vendor.service_radius
    within = bool(radius) and distance <= radius
    op = "<=" if within else ">"
    return DistanceCheck(
        search_location=location,
        search_coords=Coordinates(lat=point.lat, lng=point.lng),
        vendor_coords=Coordinates(lat=vendor.latitude, lng=vendor.longitude),
        distance_miles=round(distance, 2),
        service_radius=radius,
        within_radius=within,
        passed=within,
        message=(
            f"{'Within' if within else 'Outside'} service radius "
            f"({distance:.2f} miles {op} {radius} miles)"
        ),
    )


def will_appear(vendor: VendorProfile, category_id: str | None, point: GeoPoint | None) -> bool:
    """Same predicates search applies to a single vendor."""
    if vendor.admin_approved is not True:
        return False
    if category_id and not has_category(vendor, category_id):
        return False
    if point is None:
        return True
    if is_virtual_bypass(vendor):
        return True
    try:
        return has_service_area(vendor) and vendor_distance(vendor, point) <= float(vendor.service_radius)
    except (TypeError, ValueError):
        return False


async def debug_vendor_search(
    db: AsyncSession,
    vendor_id: str,
    location: str | None,
    category: str | None,
    geocoder: Geocoder,
) -> SearchDebugResponse:
    result = await db.execute(select(VendorProfile).where(VendorProfile.id == vendor_id))
    vendor = result.scalar_one_or_none()
    if not vendor:
        raise HTTPException(status_code=404, detail="Vendor not found")

    category_id = (category or "").strip() or None
    location = (location or "").strip()
    checks = build_checks(vendor, category_id)

    point = None
    distance_check = None
    if location:
        point = await geocoder.geocode(location)
        distance_check = build_distance_check(vendor, location, point)

    all_pass = all(c.passed for c in checks.values() if c.required)
    if distance_check is not None and not is_virtual_bypass(vendor) and distance_check.passed is False:
        all_pass = False

    return SearchDebugResponse(
        vendor_id=vendor.id,
        business_name=vendor.business_name,
        all_checks_pass=all_pass,
        will_appear_in_search=will_appear(vendor, category_id, point),
        checks=checks,
        distance_check=distance_check,
    )
