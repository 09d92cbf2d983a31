"""Authorization dependencies for FastAPI routes.

Usage:
    @router.patch(
        "/{user_id}",
        dependencies=[Depends(require_permission("Trip", "participants.manage"))],
    )
    async def update_participant(...): ...

Every protected route passes through the AuthorizationGateway before its
handler runs. Gateway failures map to:
    AuthenticationError -> 401
    ValidationError     -> 400
    AuthorizationError  -> 403
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from trip_authz.application.services import AuthorizationGateway
from trip_authz.core.container import get_authorization_gateway
from trip_authz.core.errors import AuthenticationError, ValidationError
from trip_authz.core.result import Failure
from trip_authz.domain.value_objects import AuthorizationRequest
from trip_authz.presentation.routers.api.middleware.actor_dependencies import (
    CurrentActor,
)


def require_permission(
    resource_type: str, action: str
) -> Callable[..., Awaitable[None]]:
    """Create a dependency that authorizes ``action`` on ``resource_type``.

    The resource id is resolved by the gateway from the route's path
    parameters (``trip_id``, ``expense_id``) or from configuration.

    Args:
        resource_type: Resource type name ("Trip", "Expense", ...).
        action: Action from the permission vocabulary.

    Returns:
        Async dependency raising HTTPException when the request is not
        authorized.
    """

    async def permission_checker(
        request: Request,
        actor: CurrentActor,
        gateway: Annotated[
            AuthorizationGateway, Depends(get_authorization_gateway)
        ],
    ) -> None:
        result = await gateway.authorize(
            AuthorizationRequest(
                actor=actor,
                resource_type=resource_type,
                action=action,
                path_params=dict(request.path_params),
            )
        )
        if not isinstance(result, Failure):
            return

        error = result.error
        if isinstance(error, AuthenticationError):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=error.message,
            )
        if isinstance(error, ValidationError):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=error.message,
            )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=error.message,
        )

    return permission_checker
