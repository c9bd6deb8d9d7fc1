from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from burpp.db.models import UserProfile, UserVendorFavorite, VendorProfile
from burpp.schemas import FavoriteResponse
from burpp.serializers import vendor_to_summary


def _favorite_response(fav: UserVendorFavorite, vendor: VendorProfile | None) -> FavoriteResponse:
    return FavoriteResponse(
        id=fav.id,
        vendor_id=fav.vendor_id,
        created_at=fav.created_at,
        vendor=vendor_to_summary(vendor) if vendor else None,
    )


async def list_favorites(db: AsyncSession, user: UserProfile) -> list[FavoriteResponse]:
    result = await db.execute(
        select(UserVendorFavorite)
        .options(selectinload(UserVendorFavorite.vendor))
        .where(UserVendorFavorite.user_id == user.id)
        .order_by(UserVendorFavorite.created_at.desc())
    )
    return [_favorite_response(f, f.vendor) for f in result.scalars().all()]


async def add_favorite(db: AsyncSession, user: UserProfile, vendor_id: str) -> FavoriteResponse:
    """Idempotent: an existing favorite is returned unchanged."""
    vendor = (
        await db.execute(select(VendorProfile).where(VendorProfile.id == vendor_id))
    ).scalar_one_or_none()
    if not vendor:
        raise HTTPException(status_code=404, detail="Vendor not found")
    existing = (
        await db.execute(
            select(UserVendorFavorite).where(
                UserVendorFavorite.user_id == user.id,
                UserVendorFavorite.vendor_id == vendor_id,
            )
        )
    ).scalar_one_or_none()
    if existing:
        return _favorite_response(existing, vendor)
    fav = UserVendorFavorite(user_id=user.id, vendor_id=vendor_id)
    db.add(fav)
    await db.flush()
    await db.refresh(fav, attribute_names=["created_at"])
    return _favorite_response(fav, vendor)


async def remove_favorite(db: AsyncSession, user: UserProfile, vendor_id: str) -> None:
    result = await db.execute(
        select(UserVendorFavorite).where(
            UserVendorFavorite.user_id == user.id,
            UserVendorFavorite.vendor_id == vendor_id,
        )
    )
    fav = result.scalar_one_or_none()
    if not fav:
        raise HTTPException(status_code=404, detail="Favorite not found")
    await db.delete(fav)


class FavoriteService:
    """Facade for favorite operations."""

    list_favorites = staticmethod(list_favorites)
    add_favorite = staticmethod(add_favorite)
    remove_favorite = staticmethod(remove_favorite)


favorite_service = FavoriteService()
