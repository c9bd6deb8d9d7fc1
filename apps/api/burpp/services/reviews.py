"""Vendor reviews: public listing, screened submission, admin approval."""

import logging
from datetime import datetime, timezone

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from burpp.db.models import Review, UserProfile, VendorProfile
from burpp.providers import OpenAICompatibleModerationProvider
from burpp.schemas import AdminReviewListResponse, ReviewCreate, ReviewResponse
from burpp.serializers import review_to_admin_response, review_to_response
from burpp.services.admin_activity import log_admin_activity

logger = logging.getLogger(__name__)


def _review_text(body: ReviewCreate) -> str:
    return "\n".join(p.strip() for p in (body.title, body.comment) if p and p.strip())


async def _get_review_or_404(db: AsyncSession, review_id: str) -> Review:
    result = await db.execute(select(Review).where(Review.id == review_id))
    review = result.scalar_one_or_none()
    if not review:
        raise HTTPException(status_code=404, detail="Review not found")
    return review


async def list_vendor_reviews(db: AsyncSession, vendor_id: str) -> list[ReviewResponse]:
    result = await db.execute(
        select(Review)
        .options(selectinload(Review.user))
        .where(Review.vendor_id == vendor_id, Review.approved.is_(True))
        .order_by(Review.created_at.desc())
    )
    return [review_to_response(r, r.user) for r in result.scalars().all()]


async def create_review(
    db: AsyncSession,
    user: UserProfile,
    vendor_id: str,
    body: ReviewCreate,
    moderator: OpenAICompatibleModerationProvider | None = None,
) -> ReviewResponse:
    """Store a review pending admin approval. Raises ModerationServiceError when the
    configured moderator is unreachable."""
    vendor = (
        await db.execute(select(VendorProfile).where(VendorProfile.id == vendor_id))
    ).scalar_one_or_none()
    if not vendor:
        raise HTTPException(status_code=404, detail="Vendor not found")

    existing = (
        await db.execute(
            select(Review.id).where(Review.user_id == user.id, Review.vendor_id == vendor_id)
        )
    ).scalar_one_or_none()
    if existing:
        raise HTTPException(status_code=409, detail="You have already reviewed this vendor")

    if moderator is not None:
        verdict = await moderator.moderate(_review_text(body))
        if not verdict.approved:
            logger.info("Review by %s for vendor %s rejected: %s", user.id, vendor_id, verdict.reason)
            raise HTTPException(status_code=422, detail=verdict.reason or "Review rejected by moderation")

    review = Review(
        user_id=user.id,
        vendor_id=vendor_id,
        rating=body.rating,
        title=(body.title or "").strip() or None,
        comment=(body.comment or "").strip() or None,
        approved=False,
    )
    db.add(review)
    await db.flush()
    await db.refresh(review)
    return review_to_response(review, user)


async def list_reviews_admin(db: AsyncSession) -> AdminReviewListResponse:
    result = await db.execute(
        select(Review)
        .options(selectinload(Review.user), selectinload(Review.vendor))
        .order_by(Review.created_at.desc())
    )
    return AdminReviewListResponse(
        reviews=[review_to_admin_response(r, r.user, r.vendor) for r in result.scalars().all()]
    )


async def approve_review(db: AsyncSession, admin: UserProfile, review_id: str) -> ReviewResponse:
    review = await _get_review_or_404(db, review_id)
    review.approved = True
    review.approved_at = datetime.now(timezone.utc)
    review.approved_by = admin.id
    await log_admin_activity(
        db, admin.id, "approve_review", "reviews", review.id,
        old_values={"approved": False}, new_values={"approved": True},
    )
    await db.flush()
    await db.refresh(review)
    return review_to_response(review)


async def delete_review(db: AsyncSession, admin: UserProfile, review_id: str) -> None:
    review = await _get_review_or_404(db, review_id)
    old = {
        "user_id": review.user_id,
        "vendor_id": review.vendor_id,
        "rating": review.rating,
        "approved": review.approved,
    }
    await db.delete(review)
    await log_admin_activity(db, admin.id, "delete_review", "reviews", review_id, old_values=old)


class ReviewService:
    """Facade for review operations."""

    list_vendor_reviews = staticmethod(list_vendor_reviews)
    create_review = staticmethod(create_review)
    list_reviews_admin = staticmethod(list_reviews_admin)
    approve_review = staticmethod(approve_review)
    delete_review = staticmethod(delete_review)


review_service = ReviewService()
