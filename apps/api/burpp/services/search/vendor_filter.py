"""Category and service-area predicates applied to approved vendor rows.

Location split:
- virtual bypass: offers virtual service and has no qualifying in-person
  service area; listed regardless of distance.
- service area: offers in-person service with stored coordinates and a
  positive radius; listed only when the search point is inside the radius.
A vendor offering both with a service area is judged by the radius alone.
"""

import logging
from typing import Iterable, Sequence

from burpp.db.models import VendorProfile
from burpp.geo import GeoPoint, distance_miles

logger = logging.getLogger(__name__)


def has_category(vendor: VendorProfile, category_id: str) -> bool:
    return category_id in (vendor.service_categories or [])


def filter_by_category(vendors: Iterable[VendorProfile], category_id: str | None) -> list[VendorProfile]:
    """Re-check array membership in Python; the query operator is not trusted alone."""
    if not category_id:
        return list(vendors)
    return [v for v in vendors if has_category(v, category_id)]


def has_service_area(vendor: VendorProfile) -> bool:
    if not vendor.offers_in_person_services:
        return False
    if vendor.latitude is None or vendor.longitude is None:
        return False
    try:
        return vendor.service_radius is not None and float(vendor.service_radius) > 0
    except (TypeError, ValueError):
        return False


def is_virtual_bypass(vendor: VendorProfile) -> bool:
    return bool(vendor.offers_virtual_services) and not has_service_area(vendor)


def vendor_distance(vendor: VendorProfile, point: GeoPoint) -> float:
    """Miles from point to the vendor's stored coordinates. Raises on malformed values."""
    return distance_miles(point.lat, point.lng, float(vendor.latitude), float(vendor.longitude))


def within_service_area(vendor: VendorProfile, point: GeoPoint) -> bool:
    if not has_service_area(vendor):
        return False
    try:
        return vendor_distance(vendor, point) <= float(vendor.service_radius)
    except (TypeError, ValueError) as e:
        logger.warning("Skipping vendor %s: bad service area (%s)", vendor.id, e)
        return False


def filter_by_location(vendors: Sequence[VendorProfile], point: GeoPoint) -> list[VendorProfile]:
    """Virtual-bypass vendors first, then in-radius vendors, each in input order."""
    virtual = [v for v in vendors if is_virtual_bypass(v)]
    in_area = [v for v in vendors if not is_virtual_bypass(v) and within_service_area(v, point)]
    logger.debug(
        "Location filter: %d virtual, %d within radius of %s out of %d",
        len(virtual), len(in_area), point, len(vendors),
    )
    return virtual + in_area
