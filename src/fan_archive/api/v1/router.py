"""API router wiring.

Composes the API surface from the endpoint modules, which declare their own
prefixes and tags. Downstream code should import and mount `api_router` only.
"""
from __future__ import annotations

from typing import Final

from fastapi import APIRouter

from .endpoints import (
    admin_router,
    auth_router,
    comments_router,
    fanworks_router,
    interactions_router,
    reports_router,
    tags_router,
)

api_router: Final[APIRouter] = APIRouter(prefix="/api")
api_router.include_router(auth_router)
api_router.include_router(fanworks_router)
api_router.include_router(interactions_router)
api_router.include_router(comments_router)
api_router.include_router(reports_router)
api_router.include_router(admin_router)
api_router.include_router(tags_router)

__all__ = ["api_router"]
