"""HTTP routers.

Combines all sub-routers into a single router mounted by the application.
"""

from fastapi import APIRouter

from .auth import router as auth_router
from .cart import router as cart_router
from .pages import router as pages_router
from .products import router as products_router
from .search import router as search_router

router = APIRouter()

router.include_router(auth_router)
router.include_router(cart_router)
router.include_router(search_router)
router.include_router(products_router)
router.include_router(pages_router)

__all__ = ["router"]
