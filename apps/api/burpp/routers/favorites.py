from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from burpp.db.models import UserProfile
from burpp.dependencies import PathId, get_current_user, get_db
from burpp.schemas import FavoriteCreate, FavoriteResponse, SuccessResponse
from burpp.services import favorite_service

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("", response_model=list[FavoriteResponse])
async def list_favorites(
    current_user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await favorite_service.list_favorites(db, current_user)


@router.post("", response_model=FavoriteResponse, status_code=status.HTTP_201_CREATED)
async def add_favorite(
    body: FavoriteCreate,
    current_user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await favorite_service.add_favorite(db, current_user, body.vendor_id)


@router.delete("/{vendor_id}", response_model=SuccessResponse)
async def remove_favorite(
    vendor_id: PathId,
    current_user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await favorite_service.remove_favorite(db, current_user, vendor_id)
    return SuccessResponse()
