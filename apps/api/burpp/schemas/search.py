from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from burpp.schemas.vendor import VendorProfileResponse


class VendorSearchResponse(BaseModel):
    """One page of vendor search results. Serialized with the camelCase hasMore key."""

    model_config = ConfigDict(populate_by_name=True)

    vendors: list[VendorProfileResponse]
    count: int
    page: int
    limit: int
    has_more: bool = Field(alias="hasMore")


class VendorSearchErrorResponse(BaseModel):
    error: str
    vendors: list[VendorProfileResponse] = []
    count: int = 0


class SearchDebugCheck(BaseModel):
    value: Any = None
    required: bool = True
    passed: bool = Field(alias="pass")
    message: str

    model_config = ConfigDict(populate_by_name=True)


class Coordinates(BaseModel):
    lat: float
    lng: float


class DistanceCheck(BaseModel):
    search_location: str
    search_coords: Optional[Coordinates] = None
    vendor_coords: Optional[Coordinates] = None
    distance_miles: Optional[float] = None
    service_radius: Optional[int] = None
    within_radius: Optional[bool] = None
    passed: Optional[bool] = Field(None, alias="pass")
    message: Optional[str] = None
    error: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class SearchDebugResponse(BaseModel):
    """Why a vendor does or does not show up for a given search."""

    vendor_id: str
    business_name: Optional[str] = None
    all_checks_pass: bool
    will_appear_in_search: bool
    checks: dict[str, SearchDebugCheck]
    distance_check: Optional[DistanceCheck] = None
