"""Policy fact synchronization.

Mirrors committed local changes into the remote policy service. Every
method is called only AFTER the local transaction has committed; a failure
here never rolls the local change back. Instead it is reported as
``Failure(PolicySyncError)``, logged as ``policy_sync_failed`` and recorded
in the sync failure log so the reconciler can repair the drift.

Role facts:
    creation  -> insert has_role(User u, String role, Trip t)
    change    -> one batch: delete has_role(User u, *, Trip t), then insert
    removal   -> delete has_role(User u, *, Trip t)
    same role -> no call

Usage:
    result = await synchronizer.on_assignment_changed(
        trip_id, user_id, old_role_id=previous.role_id, new_role_id=role.id
    )
    policy_synced = isinstance(result, Success)
"""

from trip_authz.core.enums import ErrorCode
from trip_authz.core.result import Failure, Result, Success
from trip_authz.domain.entities import SyncFailure
from trip_authz.domain.errors import PolicyServiceError, PolicySyncError
from trip_authz.domain.protocols import (
    LoggerProtocol,
    PolicyClientProtocol,
    SyncFailureLog,
)
from trip_authz.domain.value_objects import (
    FactBatch,
    expense_relations_pattern,
    expense_trip,
    has_role,
    organization_member,
    trip_expenses_pattern,
    trip_organization,
    trip_relations_pattern,
    trip_roles_pattern,
)
from trip_authz.application.services.role_directory import RoleDirectory


class FactSynchronizer:
    """Writes policy facts that follow committed local changes.

    Dependencies (injected via constructor):
        - PolicyClientProtocol: remote fact store
        - RoleDirectory: role id → role name
        - SyncFailureLog: durable drift records
        - LoggerProtocol: structured logging
    """

    def __init__(
        self,
        *,
        client: PolicyClientProtocol,
        role_directory: RoleDirectory,
        failure_log: SyncFailureLog,
        logger: LoggerProtocol,
    ) -> None:
        self._client = client
        self._role_directory = role_directory
        self._failure_log = failure_log
        self._logger = logger

    async def on_assignment_changed(
        self,
        trip_id: str,
        user_id: str,
        old_role_id: str | None = None,
        new_role_id: str | None = None,
    ) -> Result[None, PolicySyncError]:
        """Mirror a role assignment change.

        Args:
            trip_id: Trip whose membership changed.
            user_id: User whose role changed.
            old_role_id: Role held before the change (None on creation).
            new_role_id: Role held after the change (None on removal).

        Returns:
            Success(None) when facts match the new state (or nothing to do).
        """
        operation = "assignment_changed"
        if old_role_id == new_role_id:
            return Success(value=None)

        new_role_name: str | None = None
        if new_role_id is not None:
            role_result = await self._role_directory.role_by_id(new_role_id)
            if isinstance(role_result, Failure) or role_result.value is None:
                reason = (
                    role_result.error.message
                    if isinstance(role_result, Failure)
                    else f"Unknown role id {new_role_id}"
                )
                return await self._fail(
                    operation, reason, trip_id=trip_id, user_id=user_id
                )
            new_role_name = role_result.value.name

        if old_role_id is None and new_role_name is not None:
            result = await self._client.insert_fact(
                has_role(user_id=user_id, role_name=new_role_name, trip_id=trip_id)
            )
        elif new_role_name is None:
            result = await self._client.delete_fact(
                trip_roles_pattern(trip_id=trip_id, user_id=user_id)
            )
        else:
            role_name = new_role_name

            def build(batch: FactBatch) -> None:
                batch.delete(trip_roles_pattern(trip_id=trip_id, user_id=user_id))
                batch.insert(
                    has_role(user_id=user_id, role_name=role_name, trip_id=trip_id)
                )

            result = await self._client.batch(build)

        return await self._finish(
            operation,
            result,
            trip_id=trip_id,
            user_id=user_id,
            old_role_id=old_role_id,
            new_role_id=new_role_id,
        )

    async def on_trip_created(
        self, trip_id: str, organization_id: str
    ) -> Result[None, PolicySyncError]:
        """Link a new trip to its organization."""
        result = await self._client.insert_fact(
            trip_organization(trip_id=trip_id, organization_id=organization_id)
        )
        return await self._finish("trip_created", result, trip_id=trip_id)

    async def on_trip_deleted(self, trip_id: str) -> Result[None, PolicySyncError]:
        """Remove every role and relation fact about a deleted trip and its expenses."""

        def build(batch: FactBatch) -> None:
            batch.delete(trip_roles_pattern(trip_id=trip_id))
            batch.delete(trip_relations_pattern(trip_id=trip_id))
            batch.delete(trip_expenses_pattern(trip_id=trip_id))

        result = await self._client.batch(build)
        return await self._finish("trip_deleted", result, trip_id=trip_id)

    async def on_user_registered(
        self, user_id: str, organization_id: str
    ) -> Result[None, PolicySyncError]:
        """Grant a new user organization membership."""
        result = await self._client.insert_fact(
            organization_member(user_id=user_id, organization_id=organization_id)
        )
        return await self._finish("user_registered", result, user_id=user_id)

    async def on_expense_created(
        self, expense_id: str, trip_id: str
    ) -> Result[None, PolicySyncError]:
        """Link a new expense to its trip."""
        result = await self._client.insert_fact(
            expense_trip(expense_id=expense_id, trip_id=trip_id)
        )
        return await self._finish(
            "expense_created", result, trip_id=trip_id, expense_id=expense_id
        )

    async def on_expense_deleted(self, expense_id: str) -> Result[None, PolicySyncError]:
        """Remove a deleted expense's relation facts."""
        result = await self._client.delete_fact(
            expense_relations_pattern(expense_id=expense_id)
        )
        return await self._finish("expense_deleted", result, expense_id=expense_id)

    async def _finish(
        self,
        operation: str,
        result: Result[None, PolicyServiceError],
        *,
        trip_id: str | None = None,
        user_id: str | None = None,
        expense_id: str | None = None,
        **context: str | None,
    ) -> Result[None, PolicySyncError]:
        if isinstance(result, Success):
            self._logger.debug(
                "policy_facts_synced",
                operation=operation,
                trip_id=trip_id,
                user_id=user_id,
                expense_id=expense_id,
                **context,
            )
            return Success(value=None)
        return await self._fail(
            operation,
            result.error.message,
            trip_id=trip_id,
            user_id=user_id,
            expense_id=expense_id,
            cause=result.error,
            **context,
        )

    async def _fail(
        self,
        operation: str,
        reason: str,
        *,
        trip_id: str | None = None,
        user_id: str | None = None,
        expense_id: str | None = None,
        cause: PolicyServiceError | None = None,
        **context: str | None,
    ) -> Failure[PolicySyncError]:
        self._logger.error(
            "policy_sync_failed",
            operation=operation,
            trip_id=trip_id,
            user_id=user_id,
            expense_id=expense_id,
            reason=reason,
            **context,
        )

        try:
            await self._failure_log.record(
                SyncFailure(
                    operation=operation,
                    reason=reason,
                    trip_id=trip_id,
                    user_id=user_id,
                    expense_id=expense_id,
                )
            )
        except Exception as e:
            # Drift is now only visible in logs
            self._logger.critical(
                "policy_sync_failure_not_recorded",
                error=e,
                operation=operation,
                trip_id=trip_id,
                user_id=user_id,
            )

        return Failure(
            error=PolicySyncError(
                code=ErrorCode.POLICY_SYNC_FAILED,
                message=f"Policy facts not synchronized: {reason}",
                operation=operation,
                trip_id=trip_id,
                cause=cause,
            )
        )
