from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from burpp.db.models import UserProfile
from burpp.dependencies import PathId, get_current_user, get_db
from burpp.schemas import (
    SuccessResponse,
    VendorProductCreate,
    VendorProductResponse,
    VendorProductUpdate,
)
from burpp.services import product_service

router = APIRouter(prefix="/vendors", tags=["products"])


# /me routes are declared before /{vendor_id} so "me" is not read as an id
@router.get("/me/products", response_model=list[VendorProductResponse])
async def list_my_products(
    current_user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await product_service.list_my_products(db, current_user)


@router.post("/me/products", response_model=VendorProductResponse, status_code=status.HTTP_201_CREATED)
async def create_my_product(
    body: VendorProductCreate,
    current_user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await product_service.create_my_product(db, current_user, body)


@router.patch("/me/products/{product_id}", response_model=VendorProductResponse)
async def update_my_product(
    product_id: PathId,
    body: VendorProductUpdate,
    current_user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await product_service.update_my_product(db, current_user, product_id, body)


@router.delete("/me/products/{product_id}", response_model=SuccessResponse)
async def delete_my_product(
    product_id: PathId,
    current_user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await product_service.delete_my_product(db, current_user, product_id)
    return SuccessResponse()


@router.get("/{vendor_id}/products", response_model=list[VendorProductResponse])
async def list_vendor_products(vendor_id: PathId, db: AsyncSession = Depends(get_db)):
    """Active products only, in display order."""
    return await product_service.list_active_products(db, vendor_id)
