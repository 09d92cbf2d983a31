"""API v1 routers.

Resources:
    /api/v1/trips/{trip_id}/participants  - Trip membership management
"""

from fastapi import APIRouter

from trip_authz.core.config import settings
from trip_authz.presentation.routers.api.v1.participants import (
    router as participants_router,
)

v1_router = APIRouter(prefix=settings.api_v1_prefix)
v1_router.include_router(participants_router)

__all__ = [
    "v1_router",
]
