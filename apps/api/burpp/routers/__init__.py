from .search import router as search_router
from .geocode import router as geocode_router
from .categories import router as categories_router
from .vendors import router as vendors_router
from .reviews import router as reviews_router
from .favorites import router as favorites_router
from .messages import router as messages_router
from .products import router as products_router
from .admin import router as admin_router

ROUTERS = (
    search_router,
    geocode_router,
    categories_router,
    vendors_router,
    reviews_router,
    favorites_router,
    messages_router,
    products_router,
    admin_router,
)

__all__ = [
    "ROUTERS",
    "search_router",
    "geocode_router",
    "categories_router",
    "vendors_router",
    "reviews_router",
    "favorites_router",
    "messages_router",
    "products_router",
    "admin_router",
]
