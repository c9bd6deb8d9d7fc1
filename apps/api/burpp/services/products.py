"""Vendor products: the services a vendor lists on their profile.

Owners manage their own list through /vendors/me/products; admins manage any
vendor's list and every admin change is written to the activity log. Lists are
ordered by display_order, oldest first within the same position.
"""

import logging

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from burpp.db.models import UserProfile, VendorProduct
from burpp.schemas import VendorProductCreate, VendorProductResponse, VendorProductUpdate
from burpp.services.admin_activity import log_admin_activity
from burpp.services.vendors import get_vendor_or_404, own_vendor_profile

logger = logging.getLogger(__name__)

# columns that cannot be cleared by sending null
_REQUIRED_FIELDS = ("title", "is_active", "display_order")


def _product_values(p: VendorProduct) -> dict:
    return {
        "title": p.title,
        "description": p.description,
        "starting_price": p.starting_price,
        "image_url": p.image_url,
        "is_active": p.is_active,
        "display_order": p.display_order,
    }


def apply_product_update(product: VendorProduct, body: VendorProductUpdate) -> tuple[dict, dict]:
    """Set the fields present in body. Returns (old_values, new_values) of the changed fields."""
    changes = body.model_dump(exclude_unset=True)
    for key in _REQUIRED_FIELDS:
        if key in changes and changes[key] is None:
            raise HTTPException(status_code=400, detail=f"{key} cannot be null")
    if "title" in changes:
        changes["title"] = changes["title"].strip()
        if not changes["title"]:
            raise HTTPException(status_code=400, detail="Product title is required")
    old = {k: getattr(product, k) for k in changes}
    for key, value in changes.items():
        setattr(product, key, value)
    return old, changes


async def _list(db: AsyncSession, vendor_id: str, active_only: bool = False) -> list[VendorProductResponse]:
    stmt = select(VendorProduct).where(VendorProduct.vendor_id == vendor_id)
    if active_only:
        stmt = stmt.where(VendorProduct.is_active.is_(True))
    stmt = stmt.order_by(VendorProduct.display_order.asc(), VendorProduct.created_at.asc())
    result = await db.execute(stmt)
    return [VendorProductResponse.model_validate(p) for p in result.scalars().all()]


async def _get_product_or_404(db: AsyncSession, vendor_id: str, product_id: str) -> VendorProduct:
    result = await db.execute(
        select(VendorProduct).where(
            VendorProduct.id == product_id, VendorProduct.vendor_id == vendor_id
        )
    )
    product = result.scalar_one_or_none()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


async def _create(db: AsyncSession, vendor_id: str, body: VendorProductCreate) -> VendorProduct:
    title = body.title.strip()
    if not title:
        raise HTTPException(status_code=400, detail="Product title is required")
    product = VendorProduct(
        vendor_id=vendor_id,
        title=title,
        description=body.description or None,
        starting_price=body.starting_price,
        image_url=body.image_url or None,
        is_active=body.is_active,
        display_order=body.display_order,
    )
    db.add(product)
    await db.flush()
    await db.refresh(product)
    return product


async def list_active_products(db: AsyncSession, vendor_id: str) -> list[VendorProductResponse]:
    return await _list(db, vendor_id, active_only=True)


async def list_my_products(db: AsyncSession, user: UserProfile) -> list[VendorProductResponse]:
    vendor = await own_vendor_profile(db, user)
    return await _list(db, vendor.id)


async def create_my_product(
    db: AsyncSession,
    user: UserProfile,
    body: VendorProductCreate,
) -> VendorProductResponse:
    vendor = await own_vendor_profile(db, user)
    product = await _create(db, vendor.id, body)
    logger.info("Vendor %s added product %s", vendor.id, product.id)
    return VendorProductResponse.model_validate(product)


async def update_my_product(
    db: AsyncSession,
    user: UserProfile,
    product_id: str,
    body: VendorProductUpdate,
) -> VendorProductResponse:
    vendor = await own_vendor_profile(db, user)
    product = await _get_product_or_404(db, vendor.id, product_id)
    apply_product_update(product, body)
    await db.flush()
    await db.refresh(product)
    return VendorProductResponse.model_validate(product)


async def delete_my_product(db: AsyncSession, user: UserProfile, product_id: str) -> None:
    vendor = await own_vendor_profile(db, user)
    product = await _get_product_or_404(db, vendor.id, product_id)
    await db.delete(product)
    logger.info("Vendor %s deleted product %s", vendor.id, product_id)


async def list_vendor_products_admin(db: AsyncSession, vendor_id: str) -> list[VendorProductResponse]:
    await get_vendor_or_404(db, vendor_id)
    return await _list(db, vendor_id)


async def create_vendor_product_admin(
    db: AsyncSession,
    admin: UserProfile,
    vendor_id: str,
    body: VendorProductCreate,
) -> VendorProductResponse:
    await get_vendor_or_404(db, vendor_id)
    product = await _create(db, vendor_id, body)
    await log_admin_activity(
        db, admin.id, "create_product", "vendor_products", product.id,
        new_values=_product_values(product),
    )
    return VendorProductResponse.model_validate(product)


async def update_vendor_product_admin(
    db: AsyncSession,
    admin: UserProfile,
    vendor_id: str,
    product_id: str,
    body: VendorProductUpdate,
) -> VendorProductResponse:
    product = await _get_product_or_404(db, vendor_id, product_id)
    old, new = apply_product_update(product, body)
    await log_admin_activity(
        db, admin.id, "update_product", "vendor_products", product.id,
        old_values=old, new_values=new,
    )
    await db.flush()
    await db.refresh(product)
    return VendorProductResponse.model_validate(product)


async def delete_vendor_product_admin(
    db: AsyncSession,
    admin: UserProfile,
    vendor_id: str,
    product_id: str,
) -> None:
    product = await _get_product_or_404(db, vendor_id, product_id)
    old = _product_values(product)
    await db.delete(product)
    await log_admin_activity(db, admin.id, "delete_product", "vendor_products", product_id, old_values=old)


class ProductService:
    """Facade for vendor product operations."""

    list_active_products = staticmethod(list_active_products)
    list_my_products = staticmethod(list_my_products)
    create_my_product = staticmethod(create_my_product)
    update_my_product = staticmethod(update_my_product)
    delete_my_product = staticmethod(delete_my_product)
    list_vendor_products_admin = staticmethod(list_vendor_products_admin)
    create_vendor_product_admin = staticmethod(create_vendor_product_admin)
    update_vendor_product_admin = staticmethod(update_vendor_product_admin)
    delete_vendor_product_admin = staticmethod(delete_vendor_product_admin)


product_service = ProductService()
