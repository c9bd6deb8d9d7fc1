"""Pydantic request/response schemas."""

from burpp.schemas.product import (
    VendorProductResponse,
    VendorProductCreate,
    VendorProductUpdate,
)
from burpp.schemas.vendor import (
    VendorProfileResponse,
    AdminVendorResponse,
    AdminVendorListResponse,
    VendorDetailResponse,
    VendorSummary,
    VendorProfileUpdate,
    AdminVendorProfileUpdate,
    VendorStatusUpdate,
)
from burpp.schemas.search import (
    VendorSearchResponse,
    VendorSearchErrorResponse,
    SearchDebugCheck,
    SearchDebugResponse,
    DistanceCheck,
    Coordinates,
)
from burpp.schemas.geocode import GeocodeRequest, GeocodeResponse
from burpp.schemas.category import (
    CategoryResponse,
    CategoryCreate,
    CategoryUpdate,
    CategoryDeletedResponse,
)
from burpp.schemas.favorite import FavoriteCreate, FavoriteResponse
from burpp.schemas.review import (
    ReviewCreate,
    ReviewResponse,
    ReviewerInfo,
    ReviewVendorInfo,
    AdminReviewResponse,
    AdminReviewListResponse,
    SuccessResponse,
)
from burpp.schemas.messaging import (
    ConversationCreate,
    ConversationResponse,
    MessageCreate,
    MessageResponse,
    MarkReadResponse,
)

__all__ = [
    "VendorProfileResponse",
    "AdminVendorResponse",
    "AdminVendorListResponse",
    "VendorDetailResponse",
    "VendorSummary",
    "VendorProfileUpdate",
    "AdminVendorProfileUpdate",
    "VendorStatusUpdate",
    "VendorSearchResponse",
    "VendorSearchErrorResponse",
    "SearchDebugCheck",
    "SearchDebugResponse",
    "DistanceCheck",
    "Coordinates",
    "GeocodeRequest",
    "GeocodeResponse",
    "CategoryResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryDeletedResponse",
    "FavoriteCreate",
    "FavoriteResponse",
    "ReviewCreate",
    "ReviewResponse",
    "ReviewerInfo",
    "ReviewVendorInfo",
    "AdminReviewResponse",
    "AdminReviewListResponse",
    "SuccessResponse",
    "ConversationCreate",
    "ConversationResponse",
    "MessageCreate",
    "MessageResponse",
    "MarkReadResponse",
    "VendorProductResponse",
    "VendorProductCreate",
    "VendorProductUpdate",
]
