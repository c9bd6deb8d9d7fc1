from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from burpp.db.models import UserProfile
from burpp.dependencies import PathId, get_db, require_admin
from burpp.schemas import (
    CategoryCreate,
    CategoryDeletedResponse,
    CategoryResponse,
    CategoryUpdate,
)
from burpp.services import category_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    return await category_service.list_categories(db)


@router.get("/featured", response_model=list[CategoryResponse])
async def featured_categories(db: AsyncSession = Depends(get_db)):
    """Up to eight active categories for the home page, featured ones first in the draw."""
    return await category_service.list_featured(db)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: PathId, db: AsyncSession = Depends(get_db)):
    return await category_service.get_category(db, category_id)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CategoryCreate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await category_service.create_category(db, admin, body)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: PathId,
    body: CategoryUpdate,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await category_service.update_category(db, admin, category_id, body)


@router.delete("/{category_id}", response_model=CategoryDeletedResponse)
async def delete_category(
    category_id: PathId,
    admin: UserProfile = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await category_service.delete_category(db, admin, category_id)
    return CategoryDeletedResponse(message="Category deleted successfully")
