"""Category reference data: listing, featured selection, admin CRUD."""

import logging
import random
from typing import Sequence, TypeVar

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from burpp.core import FEATURED_CATEGORY_COUNT
from burpp.db.models import Category, UserProfile
from burpp.schemas import CategoryCreate, CategoryResponse, CategoryUpdate
from burpp.services.admin_activity import log_admin_activity

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _category_values(c: Category) -> dict:
    return {
        "name": c.name,
        "description": c.description,
        "icon_url": c.icon_url,
        "is_active": c.is_active,
        "is_featured": c.is_featured,
        "parent_id": c.parent_id,
    }


def select_featured(
    featured: Sequence[T],
    non_featured: Sequence[T],
    count: int = FEATURED_CATEGORY_COUNT,
    rng: random.Random | None = None,
) -> list[T]:
    """All featured items (a random `count` if there are more), topped up with random
    non-featured ones, returned in shuffled order."""
    rng = rng or random.Random()
    if len(featured) >= count:
        return rng.sample(list(featured), count)
    fill = rng.sample(list(non_featured), min(count - len(featured), len(non_featured)))
    result = list(featured) + fill
    rng.shuffle(result)
    return result


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Category name is required")
    return name


async def _get_or_404(db: AsyncSession, category_id: str) -> Category:
    result = await db.execute(select(Category).where(Category.id == category_id))
    category = result.scalar_one_or_none()
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


async def _require_parent(db: AsyncSession, parent_id: str) -> None:
    result = await db.execute(select(Category.id).where(Category.id == parent_id))
    if result.scalar_one_or_none() is None:
        raise HTTPException(status_code=400, detail="Parent category not found")


async def list_categories(db: AsyncSession) -> list[CategoryResponse]:
    result = await db.execute(select(Category).order_by(Category.name.asc()))
    return [CategoryResponse.model_validate(c) for c in result.scalars().all()]


async def list_featured(db: AsyncSession, rng: random.Random | None = None) -> list[CategoryResponse]:
    result = await db.execute(
        select(Category).where(Category.is_active.is_(True)).order_by(Category.name.asc())
    )
    active = list(result.scalars().all())
    featured = [c for c in active if c.is_featured]
    others = [c for c in active if not c.is_featured]
    return [CategoryResponse.model_validate(c) for c in select_featured(featured, others, rng=rng)]


async def get_category(db: AsyncSession, category_id: str) -> CategoryResponse:
    return CategoryResponse.model_validate(await _get_or_404(db, category_id))


async def create_category(db: AsyncSession, admin: UserProfile, body: CategoryCreate) -> CategoryResponse:
    name = _clean_name(body.name)
    if body.parent_id:
        await _require_parent(db, body.parent_id)
    category = Category(
        name=name,
        description=body.description or None,
        icon_url=body.icon_url or None,
        is_active=body.is_active,
        is_featured=body.is_featured,
        parent_id=body.parent_id or None,
        created_by=admin.id,
        updated_by=admin.id,
    )
    db.add(category)
    await db.flush()
    await log_admin_activity(
        db, admin.id, "create_category", "categories", category.id,
        new_values=_category_values(category),
    )
    await db.refresh(category)
    return CategoryResponse.model_validate(category)


async def update_category(
    db: AsyncSession,
    admin: UserProfile,
    category_id: str,
    body: CategoryUpdate,
) -> CategoryResponse:
    name = _clean_name(body.name)
    if body.parent_id and body.parent_id == category_id:
        raise HTTPException(status_code=400, detail="Category cannot be its own parent")
    category = await _get_or_404(db, category_id)
    old = _category_values(category)

    category.name = name
    category.icon_url = body.icon_url or None
    category.is_active = body.is_active
    category.is_featured = body.is_featured
    category.updated_by = admin.id
    # parent_id / description only change when the client sent them
    if "parent_id" in body.model_fields_set:
        if body.parent_id:
            await _require_parent(db, body.parent_id)
        category.parent_id = body.parent_id or None
    if "description" in body.model_fields_set:
        category.description = body.description or None

    await db.flush()
    await log_admin_activity(
        db, admin.id, "update_category", "categories", category.id,
        old_values=old, new_values=_category_values(category),
    )
    await db.refresh(category)
    return CategoryResponse.model_validate(category)


async def delete_category(db: AsyncSession, admin: UserProfile, category_id: str) -> None:
    category = await _get_or_404(db, category_id)
    old = _category_values(category)
    await db.delete(category)
    await log_admin_activity(db, admin.id, "delete_category", "categories", category_id, old_values=old)


class CategoryService:
    """Facade for category operations."""

    list_categories = staticmethod(list_categories)
    list_featured = staticmethod(list_featured)
    get_category = staticmethod(get_category)
    create_category = staticmethod(create_category)
    update_category = staticmethod(update_category)
    delete_category = staticmethod(delete_category)


category_service = CategoryService()
