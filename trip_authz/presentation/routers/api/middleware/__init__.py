"""FastAPI dependencies guarding API routes."""

from trip_authz.presentation.routers.api.middleware.actor_dependencies import (
    CurrentActor,
    get_current_actor,
)
from trip_authz.presentation.routers.api.middleware.authorization_dependencies import (
    require_permission,
)

__all__ = [
    "CurrentActor",
    "get_current_actor",
    "require_permission",
]
