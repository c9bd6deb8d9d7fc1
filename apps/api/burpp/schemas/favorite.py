from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from burpp.core.constants import UUID_PATTERN
from burpp.schemas.vendor import VendorSummary


class FavoriteCreate(BaseModel):
    vendor_id: str = Field(pattern=UUID_PATTERN)


class FavoriteResponse(BaseModel):
    id: str
    vendor_id: str
    created_at: Optional[datetime] = None
    vendor: Optional[VendorSummary] = None
