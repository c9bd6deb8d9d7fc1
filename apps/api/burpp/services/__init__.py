from .categories import category_service
from .favorites import favorite_service
from .messaging import messaging_service
from .products import product_service
from .reviews import review_service
from .search import search_service
from .vendors import vendor_service

__all__ = [
    "category_service",
    "favorite_service",
    "messaging_service",
    "product_service",
    "review_service",
    "search_service",
    "vendor_service",
]
