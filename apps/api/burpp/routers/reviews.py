import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from burpp.core import get_settings, limiter
from burpp.db.models import UserProfile
from burpp.dependencies import PathId, get_current_user, get_db
from burpp.providers import (
    ModerationConfigError,
    ModerationServiceError,
    OpenAICompatibleModerationProvider,
    get_moderation_provider,
)
from burpp.schemas import ReviewCreate, ReviewResponse
from burpp.services import review_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["reviews"])


def get_review_moderator() -> OpenAICompatibleModerationProvider | None:
    """Configured moderation provider, or None to store reviews unscreened."""
    try:
        return get_moderation_provider()
    except ModerationConfigError:
        return None


@router.get("/vendors/{vendor_id}/reviews", response_model=list[ReviewResponse])
async def list_vendor_reviews(vendor_id: PathId, db: AsyncSession = Depends(get_db)):
    return await review_service.list_vendor_reviews(db, vendor_id)


@router.post(
    "/vendors/{vendor_id}/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(get_settings().review_rate_limit)
async def create_review(
    request: Request,
    vendor_id: PathId,
    body: ReviewCreate,
    current_user: UserProfile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    moderator: OpenAICompatibleModerationProvider | None = Depends(get_review_moderator),
):
    try:
        return await review_service.create_review(db, current_user, vendor_id, body, moderator)
    except ModerationServiceError as e:
        logger.warning("Review moderation unavailable: %s", e)
        raise HTTPException(status_code=503, detail=str(e))
