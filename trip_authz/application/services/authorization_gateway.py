"""Authorization gateway for protected operations.

Single entry point every protected operation passes through before its
business logic runs:

    1. No actor                      -> AuthenticationError (401)
    2. Unknown resource type         -> ValidationError (400)
    3. Resolve resource id           -> ValidationError (400) if missing
    4. Evaluate (active strategy)    -> ValidationError (400) for illegal actions
    5. DENY                          -> AuthorizationError (403)
    6. ALLOW                         -> Success(Decision.ALLOW)

Resource ids come from a resolver registry keyed by resource type:
    Trip          path parameter "trip_id"
    Expense       path parameter "expense_id"
    Organization  configured default organization id
    User          the actor's own id
"""

from collections.abc import Callable

from trip_authz.core.enums import ErrorCode
from trip_authz.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ValidationError,
)
from trip_authz.core.result import Failure, Result, Success
from trip_authz.domain.enums import Decision, ResourceType
from trip_authz.domain.protocols import LoggerProtocol, PermissionEvaluatorProtocol
from trip_authz.domain.value_objects import Actor, AuthorizationRequest

type ResourceIdResolver = Callable[[AuthorizationRequest, Actor], str | None]
type GatewayError = AuthenticationError | ValidationError | AuthorizationError


def path_param(name: str) -> ResourceIdResolver:
    """Resolver reading a non-empty route parameter."""

    def resolve(request: AuthorizationRequest, _actor: Actor) -> str | None:
        return request.path_params.get(name) or None

    return resolve


def constant(value: str) -> ResourceIdResolver:
    """Resolver returning a fixed id."""

    def resolve(_request: AuthorizationRequest, _actor: Actor) -> str | None:
        return value

    return resolve


def actor_id(_request: AuthorizationRequest, actor: Actor) -> str | None:
    return actor.user_id


def default_resolvers(default_organization_id: str) -> dict[ResourceType, ResourceIdResolver]:
    """Standard resolver registry."""
    return {
        ResourceType.TRIP: path_param("trip_id"),
        ResourceType.EXPENSE: path_param("expense_id"),
        ResourceType.ORGANIZATION: constant(default_organization_id),
        ResourceType.USER: actor_id,
    }


class AuthorizationGateway:
    """Turns a request into a decision or a typed rejection.

    Example:
        >>> result = await gateway.authorize(
        ...     AuthorizationRequest(
        ...         actor=Actor(user_id="u1"),
        ...         resource_type="Trip",
        ...         action="participants.manage",
        ...         path_params={"trip_id": "t1"},
        ...     )
        ... )
        >>> isinstance(result, Success)
        True
    """

    def __init__(
        self,
        *,
        evaluator: PermissionEvaluatorProtocol,
        resolvers: dict[ResourceType, ResourceIdResolver],
        logger: LoggerProtocol,
    ) -> None:
        self._evaluator = evaluator
        self._resolvers = resolvers
        self._logger = logger

    async def authorize(
        self, request: AuthorizationRequest
    ) -> Result[Decision, GatewayError]:
        """Authorize one protected operation.

        Args:
            request: Actor, target resource type, action and route parameters.

        Returns:
            Success(Decision.ALLOW), or Failure with the rejection.
        """
        actor = request.actor
        if actor is None:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.AUTHENTICATION_REQUIRED,
                    message="Unauthorized",
                )
            )

        try:
            resource_type = ResourceType(request.resource_type)
        except ValueError:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.UNSUPPORTED_RESOURCE_TYPE,
                    message=f'Unsupported resource type "{request.resource_type}"',
                    field="resource_type",
                )
            )

        resolver = self._resolvers.get(resource_type)
        resource_id = resolver(request, actor) if resolver is not None else None
        if not resource_id:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.RESOURCE_ID_REQUIRED,
                    message=f"{resource_type.value} ID is required",
                    field="resource_id",
                )
            )

        evaluation = await self._evaluator.evaluate(
            actor.user_id, request.action, resource_type, resource_id
        )
        if isinstance(evaluation, Failure):
            return evaluation

        if evaluation.value is Decision.DENY:
            self._logger.info(
                "authorization_denied",
                actor_id=actor.user_id,
                action=request.action,
                resource_type=resource_type.value,
                resource_id=resource_id,
            )
            return Failure(
                error=AuthorizationError(
                    code=ErrorCode.PERMISSION_DENIED,
                    message="Forbidden",
                    required_permission=f"{resource_type.value}:{request.action}",
                )
            )

        return Success(value=Decision.ALLOW)
