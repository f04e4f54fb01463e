"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .auth import router as auth_router
from .comments import router as comments_router
from .fanworks import router as fanworks_router
from .interactions import router as interactions_router
from .reports import router as reports_router
from .tags import router as tags_router

__all__ = [
    "admin_router",
    "auth_router",
    "comments_router",
    "fanworks_router",
    "interactions_router",
    "reports_router",
    "tags_router",
]
