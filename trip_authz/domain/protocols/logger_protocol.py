"""LoggerProtocol definition for structured logging.

Every log call is an event name plus key-value context. Decision-path and
synchronization failures use distinct event names so operators can alert
on them separately:

    - authorization_store_unavailable: local evaluator could not read the store
    - authorization_remote_unavailable: remote evaluator could not reach the service
    - policy_sync_failed: facts were not written after a committed change
    - trip_resync_unsettled: a trip kept changing while its facts were rebuilt

Security:
    NEVER log the policy service API key.

Usage:
    from trip_authz.core.container import get_logger

    logger = get_logger()
    logger.error("policy_sync_failed", trip_id=trip_id, reason=error.message)

    scoped = logger.bind(trip_id=trip_id)
    scoped.info("trip_resync_started")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    Implementations may enrich logs with timestamp and level.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level event."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level event."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level event."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level event.

        Args:
            message: Event name.
            error: Optional exception; implementations add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level event (e.g. drift that could not be recorded)."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a new logger with permanently bound context.

        The original logger is unchanged.
        """
        ...
