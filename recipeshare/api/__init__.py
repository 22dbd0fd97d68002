"""
HTTP routers, one per area, mounted by ``recipeshare.app``.
"""
from .admin import router as admin_router
from .ai import router as ai_router
from .auth import router as auth_router
from .complaints import router as complaints_router
from .recipes import router as recipes_router
from .uploads import router as uploads_router

__all__ = [
    "admin_router",
    "ai_router",
    "auth_router",
    "complaints_router",
    "recipes_router",
    "uploads_router",
]
