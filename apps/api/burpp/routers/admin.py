from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from burpp.db.models import UserProfile
from burpp.dependencies import PathId, get_db, require_admin
from burpp.providers import Geocoder, get_geocoder
from burpp.schemas import (
    AdminReviewListResponse,
    AdminVendorListResponse,
    AdminVendorProfileUpdate,
    AdminVendorResponse,
    ReviewResponse,
    SearchDebugResponse,
    SuccessResponse,
    VendorProductCreate,
    VendorProductResponse,
    VendorProductUpdate,
    VendorStatusUpdate,
)
from burpp.services import product_service, review_service, search_service, vendor_service

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/vendors", response_model=AdminVendorListResponse)
async def list_vendors(
    _admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await vendor_service.list_vendors_admin(db)


@router.patch("/vendors/{vendor_id}/status", response_model=AdminVendorResponse)
async def update_vendor_status(
    vendor_id: PathId,
    body: VendorStatusUpdate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await vendor_service.update_vendor_status(db, admin, vendor_id, body)


@router.patch("/vendors/{vendor_id}/profile", response_model=AdminVendorResponse)
async def update_vendor_profile(
    vendor_id: PathId,
    body: AdminVendorProfileUpdate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    geocoder: Geocoder = Depends(get_geocoder),
):
    return await vendor_service.update_vendor_profile_admin(db, admin, vendor_id, body, geocoder)


@router.get("/vendors/{vendor_id}/search-debug", response_model=SearchDebugResponse)
async def search_debug(
    vendor_id: PathId,
    location: str | None = Query(None),
    category: str | None = Query(None),
    _admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    geocoder: Geocoder = Depends(get_geocoder),
):
    """Explain whether the vendor would be listed for the given location and category."""
    return await search_service.debug_vendor(db, geocoder, vendor_id, location, category)


@router.get("/vendors/{vendor_id}/products", response_model=list[VendorProductResponse])
async def list_vendor_products(
    vendor_id: PathId,
    _admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """All of the vendor's products, hidden ones included."""
    return await product_service.list_vendor_products_admin(db, vendor_id)


@router.post(
    "/vendors/{vendor_id}/products",
    response_model=VendorProductResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_vendor_product(
    vendor_id: PathId,
    body: VendorProductCreate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await product_service.create_vendor_product_admin(db, admin, vendor_id, body)


@router.patch("/vendors/{vendor_id}/products/{product_id}", response_model=VendorProductResponse)
async def update_vendor_product(
    vendor_id: PathId,
    product_id: PathId,
    body: VendorProductUpdate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await product_service.update_vendor_product_admin(db, admin, vendor_id, product_id, body)


@router.delete("/vendors/{vendor_id}/products/{product_id}", response_model=SuccessResponse)
async def delete_vendor_product(
    vendor_id: PathId,
    product_id: PathId,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await product_service.delete_vendor_product_admin(db, admin, vendor_id, product_id)
    return SuccessResponse()


@router.get("/reviews", response_model=AdminReviewListResponse)
async def list_reviews(
    _admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await review_service.list_reviews_admin(db)


@router.post("/reviews/{review_id}/approve", response_model=ReviewResponse)
async def approve_review(
    review_id: PathId,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await review_service.approve_review(db, admin, review_id)


@router.delete("/reviews/{review_id}", response_model=SuccessResponse)
async def delete_review(
    review_id: PathId,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await review_service.delete_review(db, admin, review_id)
    return SuccessResponse()
