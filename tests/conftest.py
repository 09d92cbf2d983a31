"""Shared pytest fixtures.

Settings are read from the environment at import time, so the required
variables are set here before anything from trip_authz is imported.

Fixtures:
- mock_logger: MagicMock standing in for LoggerProtocol
- database: file-backed SQLite database with tables created and roles seeded
- store: StoreTransactionFactory over ``database``
- role_directory / role_table: real role lookups
- policy_service: in-memory policy service (see tests/fakes.py)
"""

import os

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./trip_authz_test.db")
os.environ.setdefault("POLICY_SERVICE_URL", "https://policy.test")
os.environ.setdefault("POLICY_SERVICE_API_KEY", "test-api-key")

from collections.abc import AsyncGenerator  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from trip_authz.application.services import RoleDirectory  # noqa: E402
from trip_authz.domain.protocols import LoggerProtocol  # noqa: E402
from trip_authz.infrastructure.authorization import (  # noqa: E402
    CasbinRolePermissionTable,
)
from trip_authz.infrastructure.persistence import Database  # noqa: E402
from trip_authz.infrastructure.persistence.seeds import init_database  # noqa: E402
from trip_authz.infrastructure.persistence.store_transaction import (  # noqa: E402
    SqlStoreTransactionFactory,
)
from tests.fakes import FakePolicyService  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: isolated tests with mocked collaborators")
    config.addinivalue_line("markers", "integration: tests against a real database")
    config.addinivalue_line("markers", "api: HTTP tests through the FastAPI app")


@pytest.fixture
def mock_logger() -> MagicMock:
    """Logger double; assert on ``mock_logger.error.call_args`` etc."""
    return MagicMock(spec=LoggerProtocol)


@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    """Fresh SQLite database per test.

    File-backed rather than ``:memory:`` because every pooled connection to
    an in-memory SQLite URL would see its own empty database.
    """
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'trip_authz.db'}")
    await init_database(db)
    yield db
    await db.close()


@pytest.fixture
def store(database: Database) -> SqlStoreTransactionFactory:
    return SqlStoreTransactionFactory(database)


@pytest.fixture
def role_directory(
    store: SqlStoreTransactionFactory, mock_logger: MagicMock
) -> RoleDirectory:
    async def load_roles():
        async with store() as tx:
            return await tx.roles.list_all()

    return RoleDirectory(loader=load_roles, logger=mock_logger)


@pytest.fixture(scope="session")
def role_table() -> CasbinRolePermissionTable:
    return CasbinRolePermissionTable.from_default_policy(logger=MagicMock())


@pytest.fixture
def policy_service(role_table: CasbinRolePermissionTable) -> FakePolicyService:
    return FakePolicyService(role_table)
