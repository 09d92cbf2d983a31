"""Permission evaluation strategies.

Two interchangeable strategies answer the same question, "may actor X
perform action A on resource R?":

- LocalRoleEvaluator: trip_roles assignments plus the casbin
  role/permission table.
- RemotePolicyEvaluator: the remote policy service.

Exactly one is active per deployment (``Settings.authorization_strategy``).
Both reject actions outside the permission vocabulary and deny empty
actor or resource ids before any I/O. Both fail closed: an unreachable
store or service yields DENY together with a distinct error log, never an
exception.
"""

from typing import Protocol

from trip_authz.core.constants import ORGANIZATION_MEMBER_ROLE
from trip_authz.core.enums import ErrorCode
from trip_authz.core.errors import ValidationError
from trip_authz.core.result import Failure, Result, Success
from trip_authz.domain.enums import Decision, ResourceType, is_valid_action
from trip_authz.domain.protocols import (
    LoggerProtocol,
    PolicyClientProtocol,
    StoreTransactionFactory,
)
from trip_authz.domain.value_objects import resource_value, user_value
from trip_authz.application.services.role_directory import RoleDirectory


class RolePermissionTable(Protocol):
    """Role → permission mapping (casbin in production)."""

    def allows(self, role_name: str, resource_type: ResourceType, action: str) -> bool: ...


def validate_action(
    resource_type: ResourceType, action: str
) -> Result[None, ValidationError]:
    """Reject an action that is not declared for the resource type."""
    if is_valid_action(resource_type, action):
        return Success(value=None)
    return Failure(
        error=ValidationError(
            code=ErrorCode.INVALID_ACTION,
            message=f'Invalid action "{action}" for resource "{resource_type.value}"',
            field="action",
        )
    )


class _StoreUnavailable(Exception):
    """Internal signal: the role directory could not be loaded."""


class LocalRoleEvaluator:
    """Evaluates permissions from trip_roles and the role table.

    Scope resolution:
        Trip: the trip itself.
        Expense: the expense's owning trip.
        Organization: the configured default organization; every
            authenticated actor holds the implicit ``member`` role there.
        User: no permissions.
    """

    def __init__(
        self,
        *,
        store: StoreTransactionFactory,
        role_directory: RoleDirectory,
        role_table: RolePermissionTable,
        default_organization_id: str,
        logger: LoggerProtocol,
    ) -> None:
        self._store = store
        self._role_directory = role_directory
        self._role_table = role_table
        self._default_organization_id = default_organization_id
        self._logger = logger

    async def evaluate(
        self,
        actor_id: str,
        action: str,
        resource_type: ResourceType,
        resource_id: str,
    ) -> Result[Decision, ValidationError]:
        validation = validate_action(resource_type, action)
        if isinstance(validation, Failure):
            return validation
        if not actor_id or not resource_id:
            return Success(value=Decision.DENY)

        try:
            role_name = await self._resolve_role(actor_id, resource_type, resource_id)
        except Exception as e:
            self._logger.error(
                "authorization_store_unavailable",
                error=e,
                actor_id=actor_id,
                action=action,
                resource_type=resource_type.value,
                resource_id=resource_id,
            )
            return Success(value=Decision.DENY)

        if role_name is None:
            return Success(value=Decision.DENY)

        allowed = self._role_table.allows(role_name, resource_type, action)
        return Success(value=Decision.ALLOW if allowed else Decision.DENY)

    async def _resolve_role(
        self,
        actor_id: str,
        resource_type: ResourceType,
        resource_id: str,
    ) -> str | None:
        """Return the actor's role name in the resource's scope, if any."""
        match resource_type:
            case ResourceType.ORGANIZATION:
                if resource_id == self._default_organization_id:
                    return ORGANIZATION_MEMBER_ROLE
                return None
            case ResourceType.USER:
                return None

        async with self._store() as tx:
            if resource_type is ResourceType.EXPENSE:
                trip_id = await tx.trips.get_expense_trip_id(resource_id)
                if trip_id is None:
                    return None
            else:
                trip_id = resource_id

            assignment = await tx.assignments.get_for_user(trip_id, actor_id)

        if assignment is None:
            return None

        role_result = await self._role_directory.role_by_id(assignment.role_id)
        if isinstance(role_result, Failure):
            raise _StoreUnavailable(role_result.error.message)
        role = role_result.value
        return role.name if role is not None else None


class RemotePolicyEvaluator:
    """Delegates decisions to the remote policy service."""

    def __init__(self, *, client: PolicyClientProtocol, logger: LoggerProtocol) -> None:
        self._client = client
        self._logger = logger

    async def evaluate(
        self,
        actor_id: str,
        action: str,
        resource_type: ResourceType,
        resource_id: str,
    ) -> Result[Decision, ValidationError]:
        validation = validate_action(resource_type, action)
        if isinstance(validation, Failure):
            return validation
        if not actor_id or not resource_id:
            return Success(value=Decision.DENY)

        result = await self._client.authorize(
            user_value(actor_id),
            action,
            resource_value(resource_type, resource_id),
        )

        match result:
            case Success(value=allowed):
                return Success(value=Decision.ALLOW if allowed else Decision.DENY)
            case Failure(error=error):
                self._logger.error(
                    "authorization_remote_unavailable",
                    actor_id=actor_id,
                    action=action,
                    resource_type=resource_type.value,
                    resource_id=resource_id,
                    error_code=error.code.value,
                    reason=error.message,
                )
                return Success(value=Decision.DENY)
