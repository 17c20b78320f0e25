from .categories_route import router as category_router
from .listings_route import router as listings_router
from .locations_route import router as locations_router
from .users_route import router as users_router

__all__ = ["category_router", "listings_router", "locations_router", "users_router"]
