"""HTTP client for the remote policy-decision service.

Handles:
- Bearer authentication on every call
- Time-bounded requests (httpx timeout plus an overall asyncio deadline)
- Fact and batch serialization
- Status code interpretation into PolicyServiceError values

Wire format:
    POST {base}/api/authorize
        {"actor_type", "actor_id", "action", "resource_type", "resource_id"}
        -> {"allowed": bool}
    POST {base}/api/batch
        [{"inserts": [fact, ...]}, {"deletes": [fact, ...]}, ...]
    fact = {"predicate": str, "args": [{"type": str|null, "id": str|null}, ...]}

A wildcard argument serializes as {"type": null, "id": null}.

Architecture:
    - Infrastructure layer (adapter for PolicyClientProtocol)
    - Uses httpx for async HTTP
    - Returns Result types; never raises for transport or service failures
"""

import asyncio
import inspect
from typing import Any

import httpx
import structlog

from trip_authz.core.constants import RESPONSE_BODY_MAX_LENGTH
from trip_authz.core.enums import ErrorCode
from trip_authz.core.errors import ValidationError
from trip_authz.core.result import Failure, Result, Success
from trip_authz.domain.errors import (
    PolicyServiceError,
    PolicyServiceRejectedError,
    PolicyServiceUnavailableError,
)
from trip_authz.domain.protocols import BatchBuilder
from trip_authz.domain.value_objects import (
    FactBatch,
    FactChangeSet,
    FactPattern,
    PolicyFact,
    PolicyValue,
)

AUTHORIZE_PATH = "/api/authorize"
BATCH_PATH = "/api/batch"


def serialize_value(value: PolicyValue | None) -> dict[str, str | None]:
    if value is None:
        return {"type": None, "id": None}
    return {"type": value.type, "id": value.id}


def serialize_fact(fact: PolicyFact | FactPattern) -> dict[str, Any]:
    return {
        "predicate": fact.predicate,
        "args": [serialize_value(arg) for arg in fact.args],
    }


def serialize_changes(changes: list[FactChangeSet]) -> list[dict[str, Any]]:
    """Serialize change sets in order; each becomes a single-key object."""
    return [
        {change.kind.value: [serialize_fact(item) for item in change.items]}
        for change in changes
    ]


class PolicyClient:
    """Policy service client implementing PolicyClientProtocol.

    One ``httpx.AsyncClient`` is shared across calls; close it with
    ``aclose()`` on shutdown.

    Attributes:
        _base_url: Service base URL (without trailing slash).
        _timeout: Upper bound in seconds for a single call.
        _http: Shared HTTP client.
        _logger: Structured logger.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        timeout: float,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize policy client.

        Args:
            base_url: Service base URL (e.g., "https://cloud.example.com").
            api_key: Bearer credential.
            timeout: Upper bound in seconds for a single call.
            http_client: Optional preconfigured client (tests).
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }
        self._logger = structlog.get_logger("policy_service")

    async def authorize(
        self,
        actor: PolicyValue | None,
        action: str,
        resource: PolicyValue | None,
    ) -> Result[bool, PolicyServiceError | ValidationError]:
        """Ask the service for a decision.

        Args:
            actor: Concrete actor value; wildcards are rejected.
            action: Action name.
            resource: Concrete resource value; wildcards are rejected.

        Returns:
            Success(bool) with the decision, or Failure.
        """
        if actor is None or resource is None:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.WILDCARD_NOT_ALLOWED,
                    message="authorize requires a concrete actor and resource",
                    field="actor" if actor is None else "resource",
                )
            )

        body = {
            "actor_type": actor.type,
            "actor_id": actor.id,
            "action": action,
            "resource_type": resource.type,
            "resource_id": resource.id,
        }
        response_result = await self._post(AUTHORIZE_PATH, body, operation="authorize")
        if isinstance(response_result, Failure):
            return response_result

        response = response_result.value
        try:
            data = response.json()
        except ValueError:
            data = None

        allowed = data.get("allowed") if isinstance(data, dict) else None
        if not isinstance(allowed, bool):
            self._logger.warning(
                "policy_service_unexpected_format",
                operation="authorize",
                response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
            )
            return Failure(
                error=PolicyServiceRejectedError(
                    code=ErrorCode.POLICY_SERVICE_REJECTED,
                    message="Policy service returned an invalid authorize response",
                    endpoint=AUTHORIZE_PATH,
                    status_code=response.status_code,
                )
            )

        return Success(value=allowed)

    async def insert_fact(self, fact: PolicyFact) -> Result[None, PolicyServiceError]:
        """Insert one fact."""
        return await self.batch(lambda batch: batch.insert(fact))

    async def delete_fact(
        self, pattern: FactPattern | PolicyFact
    ) -> Result[None, PolicyServiceError]:
        """Delete every fact matching ``pattern``."""
        return await self.batch(lambda batch: batch.delete(pattern))

    async def batch(self, build: BatchBuilder) -> Result[None, PolicyServiceError]:
        """Apply ordered fact changes in one request.

        Args:
            build: Sync or async callback that queues changes.

        Returns:
            Success(None) on acceptance or when nothing was queued.
        """
        fact_batch = FactBatch()
        outcome = build(fact_batch)
        if inspect.isawaitable(outcome):
            await outcome

        if fact_batch.is_empty:
            return Success(value=None)

        changes = fact_batch.changes
        response_result = await self._post(
            BATCH_PATH, serialize_changes(changes), operation="batch"
        )
        if isinstance(response_result, Failure):
            return response_result

        self._logger.debug(
            "policy_service_batch_applied",
            change_sets=len(changes),
            operations=sum(len(change.items) for change in changes),
        )
        return Success(value=None)

    async def aclose(self) -> None:
        """Close the shared HTTP client."""
        await self._http.aclose()

    async def _post(
        self,
        path: str,
        body: Any,
        *,
        operation: str,
    ) -> Result[httpx.Response, PolicyServiceError]:
        """POST with deadline, transport handling and status checking."""
        url = f"{self._base_url}{path}"

        try:
            async with asyncio.timeout(self._timeout):
                response = await self._http.post(url, json=body, headers=self._headers)

        except (httpx.TimeoutException, TimeoutError) as e:
            self._logger.warning(
                "policy_service_timeout",
                operation=operation,
                timeout_seconds=self._timeout,
                error=str(e),
            )
            return Failure(
                error=PolicyServiceUnavailableError(
                    code=ErrorCode.POLICY_SERVICE_UNAVAILABLE,
                    message="Policy service request timed out",
                    endpoint=path,
                    is_timeout=True,
                )
            )

        except httpx.RequestError as e:
            self._logger.warning(
                "policy_service_connection_error",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=PolicyServiceUnavailableError(
                    code=ErrorCode.POLICY_SERVICE_UNAVAILABLE,
                    message=f"Failed to connect to policy service: {e}",
                    endpoint=path,
                )
            )

        error_result = self._check_error_response(response, path, operation)
        if error_result is not None:
            return error_result

        return Success(value=response)

    def _check_error_response(
        self,
        response: httpx.Response,
        path: str,
        operation: str,
    ) -> Failure[PolicyServiceError] | None:
        """Map a non-2xx response to PolicyServiceRejectedError."""
        status = response.status_code
        if 200 <= status < 300:
            return None

        message = self._error_message(response)
        self._logger.warning(
            "policy_service_rejected",
            operation=operation,
            status_code=status,
            message=message,
        )
        return Failure(
            error=PolicyServiceRejectedError(
                code=ErrorCode.POLICY_SERVICE_REJECTED,
                message=message,
                endpoint=path,
                status_code=status,
                details={"response_body": response.text[:RESPONSE_BODY_MAX_LENGTH]},
            )
        )

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict) and isinstance(data.get("message"), str):
            return data["message"]
        return f"Policy service returned {response.status_code}"
