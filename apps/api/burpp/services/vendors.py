"""Vendor profiles: public detail, self-service edits, admin moderation."""

import logging
from datetime import datetime, timezone

from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from burpp.db.models import Review, UserProfile, VendorProduct, VendorProfile
from burpp.providers import Geocoder
from burpp.schemas import (
    AdminVendorListResponse,
    AdminVendorProfileUpdate,
    AdminVendorResponse,
    VendorDetailResponse,
    VendorProfileResponse,
    VendorProductResponse,
    VendorProfileUpdate,
    VendorStatusUpdate,
)
from burpp.serializers import vendor_to_admin_response, vendor_to_response
from burpp.services.admin_activity import log_admin_activity

logger = logging.getLogger(__name__)


def _jsonable(values: dict) -> dict:
    return {k: v.isoformat() if isinstance(v, datetime) else v for k, v in values.items()}


async def get_vendor_or_404(db: AsyncSession, vendor_id: str) -> VendorProfile:
    result = await db.execute(select(VendorProfile).where(VendorProfile.id == vendor_id))
    vendor = result.scalar_one_or_none()
    if not vendor:
        raise HTTPException(status_code=404, detail="Vendor not found")
    return vendor


async def apply_profile_update(
    vendor: VendorProfile,
    body: VendorProfileUpdate,
    geocoder: Geocoder,
) -> tuple[dict, dict]:
    """Set the fields present in body. A new zip_code sent without coordinates is
    re-geocoded. Returns (old_values, new_values) of the changed fields."""
    changes = body.model_dump(exclude_unset=True)
    zip_changed = "zip_code" in changes and changes["zip_code"] != vendor.zip_code
    coords_sent = "latitude" in changes or "longitude" in changes
    if zip_changed and not coords_sent:
        zip_code = (changes["zip_code"] or "").strip()
        point = await geocoder.geocode(zip_code) if zip_code else None
        if point is None and zip_code:
            logger.warning("Could not geocode zip %r for vendor %s; clearing coordinates", zip_code, vendor.id)
        changes["latitude"] = point.lat if point else None
        changes["longitude"] = point.lng if point else None

    old = {k: getattr(vendor, k) for k in changes}
    for key, value in changes.items():
        setattr(vendor, key, value)
    return _jsonable(old), _jsonable(changes)


def can_preview(vendor: VendorProfile, viewer: UserProfile | None) -> bool:
    """Owners and admins see unapproved profiles and the phone number."""
    if viewer is None:
        return False
    return viewer.is_admin or (vendor.user_id is not None and vendor.user_id == viewer.id)


async def get_vendor_detail(
    db: AsyncSession,
    vendor_id: str,
    viewer: UserProfile | None = None,
) -> VendorDetailResponse:
    vendor = (
        await db.execute(select(VendorProfile).where(VendorProfile.id == vendor_id))
    ).scalar_one_or_none()
    preview = vendor is not None and can_preview(vendor, viewer)
    if not vendor or (vendor.admin_approved is not True and not preview):
        raise HTTPException(status_code=404, detail="Vendor not found")
    stats = await db.execute(
        select(func.count(Review.id), func.avg(Review.rating)).where(
            Review.vendor_id == vendor_id, Review.approved.is_(True)
        )
    )
    count, avg = stats.one()
    products = await db.execute(
        select(VendorProduct)
        .where(VendorProduct.vendor_id == vendor_id, VendorProduct.is_active.is_(True))
        .order_by(VendorProduct.display_order.asc(), VendorProduct.created_at.asc())
    )
    if preview:
        base = VendorProfileResponse.model_validate(vendor).model_dump()
    else:
        base = vendor_to_response(vendor).model_dump()
    return VendorDetailResponse(
        **base,
        review_count=int(count or 0),
        average_rating=round(float(avg), 2) if avg is not None else None,
        products=[VendorProductResponse.model_validate(p) for p in products.scalars().all()],
    )


async def own_vendor_profile(db: AsyncSession, user: UserProfile) -> VendorProfile:
    result = await db.execute(select(VendorProfile).where(VendorProfile.user_id == user.id))
    vendor = result.scalar_one_or_none()
    if not vendor:
        raise HTTPException(status_code=404, detail="Vendor profile not found")
    return vendor


async def get_my_vendor_profile(db: AsyncSession, user: UserProfile) -> VendorProfileResponse:
    vendor = await own_vendor_profile(db, user)
    # Owners always see their own phone number.
    return VendorProfileResponse.model_validate(vendor)


async def update_my_vendor_profile(
    db: AsyncSession,
    user: UserProfile,
    body: VendorProfileUpdate,
    geocoder: Geocoder,
) -> VendorProfileResponse:
    vendor = await own_vendor_profile(db, user)
    await apply_profile_update(vendor, body, geocoder)
    await db.flush()
    await db.refresh(vendor)
    return VendorProfileResponse.model_validate(vendor)


async def list_vendors_admin(db: AsyncSession) -> AdminVendorListResponse:
    result = await db.execute(select(VendorProfile).order_by(VendorProfile.created_at.desc()))
    return AdminVendorListResponse(vendors=[vendor_to_admin_response(v) for v in result.scalars().all()])


async def update_vendor_status(
    db: AsyncSession,
    admin: UserProfile,
    vendor_id: str,
    body: VendorStatusUpdate,
) -> AdminVendorResponse:
    vendor = await get_vendor_or_404(db, vendor_id)
    old = {"admin_approved": vendor.admin_approved}
    vendor.admin_approved = body.admin_approved
    if body.admin_approved:
        vendor.approved_at = datetime.now(timezone.utc)
        vendor.approved_by = admin.id
    else:
        vendor.approved_at = None
        vendor.approved_by = None
    await log_admin_activity(
        db, admin.id, "approve_vendor" if body.admin_approved else "unapprove_vendor",
        "vendor_profiles", vendor.id,
        old_values=old, new_values={"admin_approved": body.admin_approved},
    )
    await db.flush()
    await db.refresh(vendor)
    return vendor_to_admin_response(vendor)


async def update_vendor_profile_admin(
    db: AsyncSession,
    admin: UserProfile,
    vendor_id: str,
    body: AdminVendorProfileUpdate,
    geocoder: Geocoder,
) -> AdminVendorResponse:
    vendor = await get_vendor_or_404(db, vendor_id)
    old, new = await apply_profile_update(vendor, body, geocoder)
    await log_admin_activity(
        db, admin.id, "update_vendor_profile", "vendor_profiles", vendor.id,
        old_values=old, new_values=new,
    )
    await db.flush()
    await db.refresh(vendor)
    return vendor_to_admin_response(vendor)


class VendorService:
    """Facade for vendor profile operations."""

    get_vendor_detail = staticmethod(get_vendor_detail)
    get_my_vendor_profile = staticmethod(get_my_vendor_profile)
    update_my_vendor_profile = staticmethod(update_my_vendor_profile)
    list_vendors_admin = staticmethod(list_vendors_admin)
    update_vendor_status = staticmethod(update_vendor_status)
    update_vendor_profile_admin = staticmethod(update_vendor_profile_admin)


vendor_service = VendorService()
