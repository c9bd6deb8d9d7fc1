"""ORM row -> response schema conversions shared by services."""

from burpp.db.models import Review, UserProfile, VendorProfile
from burpp.schemas import (
    AdminReviewResponse,
    AdminVendorResponse,
    ReviewerInfo,
    ReviewResponse,
    ReviewVendorInfo,
    VendorProfileResponse,
    VendorSummary,
)


def vendor_to_response(vendor: VendorProfile) -> VendorProfileResponse:
    """Public view: phone number is withheld unless the vendor allows phone contact."""
    out = VendorProfileResponse.model_validate(vendor)
    if not vendor.allow_phone_contact:
        out.phone_number = None
    return out


def vendor_to_admin_response(vendor: VendorProfile) -> AdminVendorResponse:
    return AdminVendorResponse.model_validate(vendor)


def vendor_to_summary(vendor: VendorProfile) -> VendorSummary:
    return VendorSummary.model_validate(vendor)


def reviewer_info(user: UserProfile | None, include_email: bool = False) -> ReviewerInfo | None:
    if user is None:
        return None
    return ReviewerInfo(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email if include_email else None,
    )


def review_to_response(review: Review, user: UserProfile | None = None) -> ReviewResponse:
    return ReviewResponse(
        id=review.id,
        user_id=review.user_id,
        vendor_id=review.vendor_id,
        rating=review.rating,
        title=review.title,
        comment=review.comment,
        approved=bool(review.approved),
        approved_at=review.approved_at,
        created_at=review.created_at,
        updated_at=review.updated_at,
        user=reviewer_info(user),
    )


def review_to_admin_response(
    review: Review,
    user: UserProfile | None = None,
    vendor: VendorProfile | None = None,
) -> AdminReviewResponse:
    base = review_to_response(review).model_dump(exclude={"user"})
    return AdminReviewResponse(
        **base,
        approved_by=review.approved_by,
        user=reviewer_info(user, include_email=True),
        vendor=ReviewVendorInfo(id=vendor.id, business_name=vendor.business_name) if vendor else None,
    )
