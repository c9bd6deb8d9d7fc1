from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from burpp.db.models import UserProfile
from burpp.dependencies import PathId, get_current_user, get_current_user_optional, get_db
from burpp.providers import Geocoder, get_geocoder
from burpp.schemas import VendorDetailResponse, VendorProfileResponse, VendorProfileUpdate
from burpp.services import vendor_service

router = APIRouter(prefix="/vendors", tags=["vendors"])


@router.get("/me", response_model=VendorProfileResponse)
async def get_my_vendor_profile(
    current_user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await vendor_service.get_my_vendor_profile(db, current_user)


@router.patch("/me", response_model=VendorProfileResponse)
async def patch_my_vendor_profile(
    body: VendorProfileUpdate,
    current_user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    geocoder: Geocoder = Depends(get_geocoder),
):
    return await vendor_service.update_my_vendor_profile(db, current_user, body, geocoder)


@router.get("/{vendor_id}", response_model=VendorDetailResponse)
async def get_vendor(
    vendor_id: PathId,
    viewer: UserProfile | None = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    """Approved vendor with review summary. Owners and admins may preview an unapproved profile."""
    return await vendor_service.get_vendor_detail(db, vendor_id, viewer)
