from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator

from burpp.schemas.product import VendorProductResponse


def _none_to_list(v):
    return [] if v is None else v


class VendorProfileResponse(BaseModel):
    """Public vendor card / profile fields."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: Optional[str] = None
    business_name: Optional[str] = None
    profile_title: Optional[str] = None
    about: Optional[str] = None
    profile_photo_url: Optional[str] = None
    cover_photo_url: Optional[str] = None
    offers_virtual_services: Optional[bool] = None
    offers_in_person_services: Optional[bool] = None
    hourly_rate: Optional[float] = None
    zip_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    service_radius: Optional[int] = None
    service_categories: list[str] = []
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None  # only when allow_phone_contact
    allow_phone_contact: Optional[bool] = None
    admin_approved: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    normalize_categories = field_validator("service_categories", mode="before")(_none_to_list)


class AdminVendorResponse(VendorProfileResponse):
    admin_notes: Optional[str] = None
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None


class VendorDetailResponse(VendorProfileResponse):
    review_count: int = 0
    average_rating: Optional[float] = None
    products: list[VendorProductResponse] = []  # active only, in display order


class VendorSummary(BaseModel):
    """Compact vendor card used in favorites and conversation lists."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    business_name: Optional[str] = None
    profile_title: Optional[str] = None
    profile_photo_url: Optional[str] = None
    zip_code: Optional[str] = None
    hourly_rate: Optional[float] = None
    service_categories: list[str] = []
    offers_virtual_services: Optional[bool] = None
    offers_in_person_services: Optional[bool] = None
    admin_approved: Optional[bool] = None

    normalize_categories = field_validator("service_categories", mode="before")(_none_to_list)


class VendorProfileUpdate(BaseModel):
    """Fields a vendor may change on their own profile. Unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")

    business_name: Optional[str] = Field(None, max_length=255)
    profile_title: Optional[str] = Field(None, max_length=255)
    about: Optional[str] = None
    profile_photo_url: Optional[str] = Field(None, max_length=1000)
    cover_photo_url: Optional[str] = Field(None, max_length=1000)
    offers_virtual_services: Optional[bool] = None
    offers_in_person_services: Optional[bool] = None
    hourly_rate: Optional[float] = Field(None, ge=0)
    zip_code: Optional[str] = Field(None, max_length=20)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    service_radius: Optional[int] = Field(None, ge=0, le=500)
    service_categories: Optional[list[str]] = None
    first_name: Optional[str] = Field(None, max_length=255)
    last_name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=50)
    allow_phone_contact: Optional[bool] = None


class AdminVendorProfileUpdate(VendorProfileUpdate):
    admin_notes: Optional[str] = None


class VendorStatusUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    admin_approved: StrictBool


class AdminVendorListResponse(BaseModel):
    vendors: list[AdminVendorResponse]
