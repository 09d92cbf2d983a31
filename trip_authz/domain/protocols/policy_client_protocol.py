"""Policy client protocol (port) for the remote policy-decision service.

Infrastructure provides the HTTP adapter (PolicyClient); tests provide an
in-memory service. Every call is time-bounded and returns a Result; no
call raises for transport or service failures.

Usage:
    from trip_authz.domain.protocols import PolicyClientProtocol

    result = await client.batch(lambda b: (b.delete(pattern), b.insert(fact)))
    match result:
        case Success():
            ...
        case Failure(error=PolicyServiceUnavailableError()):
            ...
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from trip_authz.core.errors import ValidationError
from trip_authz.core.result import Result
from trip_authz.domain.errors import PolicyServiceError
from trip_authz.domain.value_objects import (
    FactBatch,
    FactPattern,
    PolicyFact,
    PolicyValue,
)

type BatchBuilder = Callable[[FactBatch], None | Awaitable[None]]


class PolicyClientProtocol(Protocol):
    """Protocol for the remote policy service."""

    async def authorize(
        self,
        actor: PolicyValue | None,
        action: str,
        resource: PolicyValue | None,
    ) -> Result[bool, PolicyServiceError | ValidationError]:
        """Ask the service whether ``actor`` may perform ``action`` on ``resource``.

        Args:
            actor: Concrete actor value. None (wildcard) is rejected.
            action: Action name.
            resource: Concrete resource value. None (wildcard) is rejected.

        Returns:
            Success(True/False) with the service decision; Failure with
            ValidationError for wildcards (no network call) or a
            PolicyServiceError subtype for transport/service failures.
        """
        ...

    async def insert_fact(self, fact: PolicyFact) -> Result[None, PolicyServiceError]:
        """Insert one fact (single-change batch)."""
        ...

    async def delete_fact(
        self, pattern: FactPattern | PolicyFact
    ) -> Result[None, PolicyServiceError]:
        """Delete every fact matching ``pattern`` (single-change batch)."""
        ...

    async def batch(self, build: BatchBuilder) -> Result[None, PolicyServiceError]:
        """Apply an ordered set of inserts and deletes in one request.

        Args:
            build: Callback (sync or async) that queues changes on a FactBatch.

        Returns:
            Success(None) once the service accepted the batch (or the batch
            was empty and no request was made).
        """
        ...
