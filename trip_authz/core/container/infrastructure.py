"""Infrastructure dependency factories.

Application-scoped singletons for:
- Logging (structlog console adapter)
- Database (SQLAlchemy async engine)
- Store transactions (repositories sharing one session)
- Sync failure log
- Policy service client (shared httpx client)

Usage:
    # Application code (direct use)
    logger = get_logger()

    # Presentation layer (FastAPI Depends)
    database: Database = Depends(get_database)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from trip_authz.core.config import settings
from trip_authz.core.enums import Environment
from trip_authz.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from trip_authz.domain.protocols import (
        LoggerProtocol,
        StoreTransactionFactory,
        SyncFailureLog,
    )
    from trip_authz.infrastructure.policy import PolicyClient


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)
    """
    from trip_authz.infrastructure.logging import ConsoleAdapter

    use_json = settings.environment is not Environment.DEVELOPMENT
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped)."""
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_store_transaction_factory() -> "StoreTransactionFactory":
    """Get the factory opening role/assignment/trip store transactions."""
    from trip_authz.infrastructure.persistence.store_transaction import (
        SqlStoreTransactionFactory,
    )

    return SqlStoreTransactionFactory(get_database())


@lru_cache()
def get_sync_failure_log() -> "SyncFailureLog":
    """Get the durable sync failure log (own sessions per call)."""
    from trip_authz.infrastructure.persistence.repositories import (
        SyncFailureRepository,
    )

    return SyncFailureRepository(get_database())


@lru_cache()
def get_policy_client() -> "PolicyClient":
    """Get policy service client singleton.

    One httpx.AsyncClient is shared by every call; the lifespan closes it
    on shutdown via ``aclose()``.
    """
    from trip_authz.infrastructure.policy import PolicyClient

    return PolicyClient(
        base_url=settings.policy_service_url,
        api_key=settings.policy_service_api_key,
        timeout=settings.policy_service_timeout_seconds,
    )
