from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ReviewCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    rating: int = Field(ge=1, le=5)
    title: Optional[str] = Field(None, max_length=255)
    comment: Optional[str] = Field(None, max_length=5000)

    @model_validator(mode="after")
    def require_content(self) -> "ReviewCreate":
        if not (self.title or "").strip() and not (self.comment or "").strip():
            raise ValueError("title or comment is required")
        return self


class ReviewerInfo(BaseModel):
    id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None


class ReviewVendorInfo(BaseModel):
    id: str
    business_name: Optional[str] = None


class ReviewResponse(BaseModel):
    id: str
    user_id: str
    vendor_id: str
    rating: int
    title: Optional[str] = None
    comment: Optional[str] = None
    approved: bool = False
    approved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: Optional[ReviewerInfo] = None


class AdminReviewResponse(ReviewResponse):
    approved_by: Optional[str] = None
    vendor: Optional[ReviewVendorInfo] = None


class AdminReviewListResponse(BaseModel):
    reviews: list[AdminReviewResponse]


class SuccessResponse(BaseModel):
    success: bool = True
