"""Fact reconciliation.

Repairs drift between the local store and the policy service after failed
synchronizations (and on demand, for whole-dataset resyncs).

Trip resync rebuilds every fact about a trip from local truth in ONE
batch: the delete change sets (role facts, the trip's relations, expense
relations pointing at the trip) always precede the insert change set.
While the batch is applied, a concurrent remote check may transiently see
the trip without role facts and deny.

Participant changes commit and sync while a resync is in flight, so the
batch may be built from a snapshot that is already stale. After each batch
the trip is read again; if it changed, the facts are rebuilt from the new
state. A trip that keeps changing for MAX_RESYNC_ATTEMPTS batches is
recorded as a sync failure and picked up by the next pass.

Pending-failure replay:
    trip_id recorded      -> resync_trip(trip_id) (covers role, trip and expense-created drift)
    user_registered       -> re-assert organization membership
    expense_deleted       -> delete the expense's relation facts
Records whose replay succeeds are marked resolved; the rest stay pending.
"""

import asyncio
from collections import defaultdict
from dataclasses import dataclass

from trip_authz.core.enums import ErrorCode
from trip_authz.core.errors import DomainError
from trip_authz.core.result import Failure, Result, Success
from trip_authz.domain.entities import SyncFailure
from trip_authz.domain.errors import PolicySyncError, StoreUnavailableError
from trip_authz.domain.protocols import (
    LoggerProtocol,
    PolicyClientProtocol,
    StoreTransactionFactory,
    SyncFailureLog,
)
from trip_authz.domain.value_objects import (
    FactBatch,
    PolicyFact,
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

MAX_RESYNC_ATTEMPTS = 3


@dataclass(frozen=True, slots=True, kw_only=True)
class _TripState:
    """Local facts about one trip, compared between resync batches."""

    assignments: frozenset[tuple[str, str]]
    organization_id: str | None
    expense_ids: frozenset[str]


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconcileReport:
    """Outcome of a reconciliation pass.

    Attributes:
        trips_resynced: Trips whose facts were rebuilt.
        records_resolved: Sync failure records marked resolved.
        records_pending: Records left pending (replay failed or unsupported).
    """

    trips_resynced: int = 0
    records_resolved: int = 0
    records_pending: int = 0


class FactReconciler:
    """Rebuilds policy facts from local truth."""

    def __init__(
        self,
        *,
        store: StoreTransactionFactory,
        client: PolicyClientProtocol,
        role_directory: RoleDirectory,
        failure_log: SyncFailureLog,
        default_organization_id: str,
        batch_size: int,
        logger: LoggerProtocol,
    ) -> None:
        self._store = store
        self._client = client
        self._role_directory = role_directory
        self._failure_log = failure_log
        self._default_organization_id = default_organization_id
        self._batch_size = batch_size
        self._logger = logger

    async def resync_trip(self, trip_id: str) -> Result[int, DomainError]:
        """Replace every fact about a trip with facts derived from the store.

        Args:
            trip_id: Trip to rebuild (may no longer exist; its facts are then
                only deleted).

        Returns:
            Success with the number of facts inserted, or Failure with
            StoreUnavailableError, the policy service error, or
            PolicySyncError when the trip kept changing under the resync.
        """
        roles_result = await self._role_directory.get()
        if isinstance(roles_result, Failure):
            return roles_result
        role_names = {role.id: role.name for role in roles_result.value}

        state_result = await self._read_trip_state(trip_id)
        if isinstance(state_result, Failure):
            return state_result
        state = state_result.value

        for attempt in range(1, MAX_RESYNC_ATTEMPTS + 1):
            facts = self._trip_facts(trip_id, state, role_names)

            def build(batch: FactBatch) -> None:
                batch.delete(trip_roles_pattern(trip_id=trip_id))
                batch.delete(trip_relations_pattern(trip_id=trip_id))
                batch.delete(trip_expenses_pattern(trip_id=trip_id))
                for fact in facts:
                    batch.insert(fact)

            result = await self._client.batch(build)
            if isinstance(result, Failure):
                self._logger.warning(
                    "trip_resync_failed",
                    trip_id=trip_id,
                    reason=result.error.message,
                )
                return result

            state_result = await self._read_trip_state(trip_id)
            if isinstance(state_result, Failure):
                return state_result
            if state_result.value == state:
                self._logger.info("trip_resynced", trip_id=trip_id, facts=len(facts))
                return Success(value=len(facts))

            self._logger.info("trip_changed_during_resync", trip_id=trip_id, attempt=attempt)
            state = state_result.value

        return await self._unsettled(trip_id)

    async def _read_trip_state(
        self, trip_id: str
    ) -> Result[_TripState, StoreUnavailableError]:
        try:
            async with self._store() as tx:
                assignments = await tx.assignments.get(trip_id)
                organization_id = await tx.trips.get_trip_organization_id(trip_id)
                expense_ids = (
                    await tx.trips.list_expense_ids(trip_id)
                    if organization_id is not None
                    else []
                )
        except Exception as e:
            self._logger.error("trip_resync_store_unavailable", error=e, trip_id=trip_id)
            return Failure(
                error=StoreUnavailableError(
                    code=ErrorCode.STORE_UNAVAILABLE,
                    message="Trip state could not be read",
                    operation="resync_trip",
                )
            )

        return Success(
            value=_TripState(
                assignments=frozenset((a.user_id, a.role_id) for a in assignments),
                organization_id=organization_id,
                expense_ids=frozenset(expense_ids),
            )
        )

    @staticmethod
    def _trip_facts(
        trip_id: str, state: _TripState, role_names: dict[str, str]
    ) -> list[PolicyFact]:
        facts: list[PolicyFact] = [
            has_role(user_id=user_id, role_name=role_names[role_id], trip_id=trip_id)
            for user_id, role_id in sorted(state.assignments)
            if role_id in role_names
        ]
        if state.organization_id is not None:
            facts.append(
                trip_organization(trip_id=trip_id, organization_id=state.organization_id)
            )
        facts.extend(
            expense_trip(expense_id=expense_id, trip_id=trip_id)
            for expense_id in sorted(state.expense_ids)
        )
        return facts

    async def _unsettled(self, trip_id: str) -> Failure[PolicySyncError]:
        reason = f"Trip kept changing during {MAX_RESYNC_ATTEMPTS} resync attempts"
        self._logger.warning("trip_resync_unsettled", trip_id=trip_id, reason=reason)
        try:
            await self._failure_log.record(
                SyncFailure(operation="trip_resync", reason=reason, trip_id=trip_id)
            )
        except Exception as e:
            self._logger.critical(
                "policy_sync_failure_not_recorded",
                error=e,
                operation="trip_resync",
                trip_id=trip_id,
            )
        return Failure(
            error=PolicySyncError(
                code=ErrorCode.POLICY_SYNC_FAILED,
                message=reason,
                operation="trip_resync",
                trip_id=trip_id,
            )
        )

    async def reconcile_pending(self) -> Result[ReconcileReport, DomainError]:
        """Replay up to ``batch_size`` unresolved sync failures.

        Returns:
            Success(ReconcileReport), or Failure(StoreUnavailableError) when
            the failure log cannot be read.
        """
        try:
            pending = await self._failure_log.list_pending(self._batch_size)
        except Exception as e:
            self._logger.error("sync_failure_log_unavailable", error=e)
            return Failure(
                error=StoreUnavailableError(
                    code=ErrorCode.STORE_UNAVAILABLE,
                    message="Sync failure log could not be read",
                    operation="list_pending",
                )
            )

        if not pending:
            return Success(value=ReconcileReport())

        by_trip: dict[str, list[SyncFailure]] = defaultdict(list)
        others: list[SyncFailure] = []
        for failure in pending:
            if failure.trip_id is not None:
                by_trip[failure.trip_id].append(failure)
            else:
                others.append(failure)

        resolved: list[str] = []
        trips_resynced = 0

        for trip_id, failures in by_trip.items():
            if isinstance(await self.resync_trip(trip_id), Success):
                trips_resynced += 1
                resolved.extend(failure.id for failure in failures)

        for failure in others:
            if await self._replay(failure):
                resolved.append(failure.id)

        try:
            await self._failure_log.mark_resolved(resolved)
        except Exception as e:
            # Replays are idempotent; the records are retried next pass
            self._logger.error(
                "sync_failure_resolve_failed", error=e, record_count=len(resolved)
            )
            resolved = []

        report = ReconcileReport(
            trips_resynced=trips_resynced,
            records_resolved=len(resolved),
            records_pending=len(pending) - len(resolved),
        )
        self._logger.info(
            "reconciliation_completed",
            trips_resynced=report.trips_resynced,
            records_resolved=report.records_resolved,
            records_pending=report.records_pending,
        )
        return Success(value=report)

    async def resync_all(self) -> Result[ReconcileReport, DomainError]:
        """Rebuild the facts of every trip that has role assignments."""
        try:
            async with self._store() as tx:
                trip_ids = await tx.assignments.list_trip_ids()
        except Exception as e:
            self._logger.error("resync_all_store_unavailable", error=e)
            return Failure(
                error=StoreUnavailableError(
                    code=ErrorCode.STORE_UNAVAILABLE,
                    message="Trip list could not be read",
                    operation="list_trip_ids",
                )
            )

        resynced = 0
        for trip_id in trip_ids:
            if isinstance(await self.resync_trip(trip_id), Success):
                resynced += 1

        return Success(value=ReconcileReport(trips_resynced=resynced))

    async def run_reconciliation_loop(self, interval_seconds: float) -> None:
        """Replay pending failures every ``interval_seconds`` until cancelled."""
        self._logger.info("reconciliation_loop_started", interval_seconds=interval_seconds)
        while True:
            try:
                await self.reconcile_pending()
            except Exception as e:
                self._logger.error("reconciliation_loop_error", error=e)
            await asyncio.sleep(interval_seconds)

    async def _replay(self, failure: SyncFailure) -> bool:
        """Replay a failure that is not scoped to a trip."""
        match failure.operation:
            case "user_registered" if failure.user_id is not None:
                fact = organization_member(
                    user_id=failure.user_id,
                    organization_id=self._default_organization_id,
                )

                def build(batch: FactBatch) -> None:
                    batch.delete(fact)
                    batch.insert(fact)

                result = await self._client.batch(build)
            case "expense_deleted" if failure.expense_id is not None:
                result = await self._client.delete_fact(
                    expense_relations_pattern(expense_id=failure.expense_id)
                )
            case _:
                self._logger.warning(
                    "sync_failure_not_replayable",
                    failure_id=failure.id,
                    operation=failure.operation,
                )
                return False

        return isinstance(result, Success)

