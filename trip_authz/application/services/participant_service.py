"""Trip participant management.

Every mutation follows the same sequence:

    1. Resolve the role name through the RoleDirectory
    2. Open a store transaction, lock the user's assignment row
    3. Create / replace / delete the assignment and commit
    4. Synchronize policy facts (after commit, never before)

Step 4 cannot undo step 3. A sync failure is returned as
``ParticipantChange(policy_synced=False)``; the synchronizer has already
logged and recorded it for reconciliation.
"""

from trip_authz.core.enums import ErrorCode
from trip_authz.core.errors import NotFoundError, ValidationError
from trip_authz.core.result import Failure, Result, Success
from trip_authz.domain.entities import Participant, ParticipantChange, Role
from trip_authz.domain.errors import StoreUnavailableError
from trip_authz.domain.protocols import (
    LoggerProtocol,
    StoreTransaction,
    StoreTransactionFactory,
)
from trip_authz.application.services.fact_synchronizer import FactSynchronizer
from trip_authz.application.services.role_directory import RoleDirectory

ORGANIZER_ROLE = "organizer"

type ParticipantError = ValidationError | NotFoundError | StoreUnavailableError


class ParticipantService:
    """Adds, changes and removes trip role assignments.

    Dependencies (injected via constructor):
        - StoreTransactionFactory: local transactions over trip_roles
        - FactSynchronizer: post-commit policy fact writes
        - RoleDirectory: role name → role id
        - LoggerProtocol: structured logging
    """

    def __init__(
        self,
        *,
        store: StoreTransactionFactory,
        synchronizer: FactSynchronizer,
        role_directory: RoleDirectory,
        logger: LoggerProtocol,
    ) -> None:
        self._store = store
        self._synchronizer = synchronizer
        self._role_directory = role_directory
        self._logger = logger

    async def list_participants(
        self, trip_id: str
    ) -> Result[list[Participant], StoreUnavailableError]:
        """List a trip's members with their role names."""
        try:
            async with self._store() as tx:
                participants = await tx.assignments.list_participants(trip_id)
        except Exception as e:
            return self._store_failure("list_participants", e, trip_id=trip_id)
        return Success(value=participants)

    async def add_participant(
        self, trip_id: str, user_id: str, role_name: str
    ) -> Result[ParticipantChange, ParticipantError]:
        """Add a user to a trip, or change the role they already hold.

        Args:
            trip_id: Trip identifier.
            user_id: User to add.
            role_name: Role to grant ("organizer", "participant", "viewer").

        Returns:
            Success(ParticipantChange) once the local change is committed.
            Failure(ValidationError) for an unknown role, Failure(NotFoundError)
            for an unknown trip or user, Failure(StoreUnavailableError) if
            the store failed.
        """
        return await self._assign(trip_id, user_id, role_name, require_existing=False)

    async def update_participant_role(
        self, trip_id: str, user_id: str, role_name: str
    ) -> Result[ParticipantChange, ParticipantError]:
        """Change an existing member's role (NotFoundError if not a member)."""
        return await self._assign(trip_id, user_id, role_name, require_existing=True)

    async def remove_participant(
        self, trip_id: str, user_id: str
    ) -> Result[ParticipantChange, NotFoundError | StoreUnavailableError]:
        """Remove a member from a trip.

        Returns:
            Success(ParticipantChange) with ``assignment=None``, or
            Failure(NotFoundError) if the user holds no role on the trip.
        """
        try:
            async with self._store() as tx:
                removed = await tx.assignments.remove(trip_id, user_id)
        except Exception as e:
            return self._store_failure(
                "remove_participant", e, trip_id=trip_id, user_id=user_id
            )

        if isinstance(removed, Failure):
            return removed

        sync = await self._synchronizer.on_assignment_changed(
            trip_id, user_id, old_role_id=removed.value.role_id, new_role_id=None
        )
        self._logger.info(
            "participant_removed",
            trip_id=trip_id,
            user_id=user_id,
            policy_synced=isinstance(sync, Success),
        )
        return Success(
            value=ParticipantChange(
                trip_id=trip_id,
                user_id=user_id,
                assignment=None,
                previous_role_id=removed.value.role_id,
                policy_synced=isinstance(sync, Success),
            )
        )

    async def register_trip_organizer(
        self, trip_id: str, user_id: str, organization_id: str
    ) -> Result[ParticipantChange, ParticipantError]:
        """Trip creation hook: make the creator organizer and link the trip.

        Args:
            trip_id: Newly created trip.
            user_id: Creating user.
            organization_id: Organization owning the trip.

        Returns:
            Same as ``add_participant``; ``policy_synced`` covers both the
            role fact and the trip → organization relation.
        """
        result = await self._assign(
            trip_id, user_id, ORGANIZER_ROLE, require_existing=False
        )
        if isinstance(result, Failure):
            return result

        relation = await self._synchronizer.on_trip_created(trip_id, organization_id)
        change = result.value
        if change.policy_synced and isinstance(relation, Success):
            return result

        return Success(
            value=ParticipantChange(
                trip_id=change.trip_id,
                user_id=change.user_id,
                assignment=change.assignment,
                previous_role_id=change.previous_role_id,
                policy_synced=False,
            )
        )

    async def _assign(
        self,
        trip_id: str,
        user_id: str,
        role_name: str,
        *,
        require_existing: bool,
    ) -> Result[ParticipantChange, ParticipantError]:
        role_result = await self._resolve_role(role_name)
        if isinstance(role_result, Failure):
            return role_result
        role = role_result.value

        try:
            async with self._store() as tx:
                missing = await self._check_scope(tx, trip_id, user_id)
                if missing is not None:
                    return Failure(error=missing)

                current = await tx.assignments.get_for_user(
                    trip_id, user_id, for_update=True
                )
                if current is None and require_existing:
                    return Failure(
                        error=NotFoundError(
                            code=ErrorCode.ROLE_ASSIGNMENT_NOT_FOUND,
                            message="Participant not found",
                            resource_type="RoleAssignment",
                            resource_id=f"{trip_id}:{user_id}",
                        )
                    )

                if current is not None and current.role_id == role.id:
                    assignment = current
                else:
                    assignment = await tx.assignments.upsert(trip_id, user_id, role.id)
        except Exception as e:
            return self._store_failure(
                "assign_participant", e, trip_id=trip_id, user_id=user_id
            )

        previous_role_id = current.role_id if current is not None else None
        sync = await self._synchronizer.on_assignment_changed(
            trip_id, user_id, old_role_id=previous_role_id, new_role_id=role.id
        )

        self._logger.info(
            "participant_added" if previous_role_id is None else "participant_role_changed",
            trip_id=trip_id,
            user_id=user_id,
            role=role.name,
            previous_role_id=previous_role_id,
            policy_synced=isinstance(sync, Success),
        )
        return Success(
            value=ParticipantChange(
                trip_id=trip_id,
                user_id=user_id,
                assignment=assignment,
                previous_role_id=previous_role_id,
                policy_synced=isinstance(sync, Success),
            )
        )

    async def _resolve_role(
        self, role_name: str
    ) -> Result[Role, ValidationError | StoreUnavailableError]:
        result = await self._role_directory.role_by_name(role_name)
        if isinstance(result, Failure):
            return result
        if result.value is None:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.ROLE_NOT_FOUND,
                    message=f'Unknown role "{role_name}"',
                    field="role",
                )
            )
        return Success(value=result.value)

    @staticmethod
    async def _check_scope(
        tx: StoreTransaction, trip_id: str, user_id: str
    ) -> NotFoundError | None:
        if await tx.trips.get_trip_organization_id(trip_id) is None:
            return NotFoundError(
                code=ErrorCode.TRIP_NOT_FOUND,
                message="Trip not found",
                resource_type="Trip",
                resource_id=trip_id,
            )
        if not await tx.trips.user_exists(user_id):
            return NotFoundError(
                code=ErrorCode.USER_NOT_FOUND,
                message="User not found",
                resource_type="User",
                resource_id=user_id,
            )
        return None

    def _store_failure(
        self, operation: str, error: Exception, **context: str
    ) -> Failure[StoreUnavailableError]:
        self._logger.error(
            "participant_store_error", error=error, operation=operation, **context
        )
        return Failure(
            error=StoreUnavailableError(
                code=ErrorCode.STORE_UNAVAILABLE,
                message="Participant store unavailable",
                operation=operation,
            )
        )
