from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from burpp.core.constants import UUID_PATTERN


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    icon_url: Optional[str] = None
    is_active: bool = True
    is_featured: bool = False
    parent_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CategoryCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    icon_url: Optional[str] = Field(None, max_length=1000)
    is_active: bool = True
    is_featured: bool = False
    parent_id: Optional[str] = Field(None, pattern=UUID_PATTERN)

    blank_parent = field_validator("parent_id", mode="before")(_blank_to_none)


class CategoryUpdate(BaseModel):
    """Full replace of name/flags; parent_id and description only change when sent."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=255)
    icon_url: Optional[str] = Field(None, max_length=1000)
    is_active: bool = True
    is_featured: bool = False
    parent_id: Optional[str] = Field(None, pattern=UUID_PATTERN)
    description: Optional[str] = None

    blank_parent = field_validator("parent_id", mode="before")(_blank_to_none)


class CategoryDeletedResponse(BaseModel):
    message: str
