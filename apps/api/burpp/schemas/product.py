from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class VendorProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    vendor_id: str
    title: str
    description: Optional[str] = None
    starting_price: Optional[float] = None
    image_url: Optional[str] = None
    is_active: bool = True
    display_order: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class VendorProductCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    starting_price: Optional[float] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=1000)
    is_active: bool = True
    display_order: int = Field(0, ge=0)


class VendorProductUpdate(BaseModel):
    """Partial update; only the fields sent are changed."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    starting_price: Optional[float] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=1000)
    is_active: Optional[bool] = None
    display_order: Optional[int] = Field(None, ge=0)
