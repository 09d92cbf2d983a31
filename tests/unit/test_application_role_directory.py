"""Unit tests for RoleDirectory (lazy, single-flight role cache)."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from trip_authz.application.services import RoleDirectory
from trip_authz.core.enums import ErrorCode
from trip_authz.core.result import Failure, Success
from trip_authz.domain.entities import Role
from trip_authz.domain.errors import StoreUnavailableError

pytestmark = pytest.mark.unit

ROLES = [
    Role(id="r-org", name="organizer"),
    Role(id="r-part", name="participant"),
    Role(id="r-view", name="viewer"),
]


class TestRoleDirectoryGet:
    """Loading and caching."""

    async def test_loads_once_and_serves_same_snapshot(self, mock_logger):
        loader = AsyncMock(return_value=ROLES)
        directory = RoleDirectory(loader=loader, logger=mock_logger)

        first = await directory.get()
        second = await directory.get()

        assert isinstance(first, Success)
        assert first.value is second.value
        loader.assert_awaited_once()

    async def test_concurrent_first_calls_share_one_load(self, mock_logger):
        calls = 0

        async def slow_loader():
            nonlocal calls
            calls += 1
            await asyncio.sleep(0.01)
            return ROLES

        directory = RoleDirectory(loader=slow_loader, logger=mock_logger)

        results = await asyncio.gather(*(directory.get() for _ in range(10)))

        assert calls == 1
        assert all(r.value is results[0].value for r in results)

    async def test_failed_load_is_not_cached(self, mock_logger):
        loader = AsyncMock(side_effect=[ConnectionError("db down"), ROLES])
        directory = RoleDirectory(loader=loader, logger=mock_logger)

        failed = await directory.get()
        recovered = await directory.get()

        assert isinstance(failed, Failure)
        assert isinstance(failed.error, StoreUnavailableError)
        assert failed.error.code == ErrorCode.STORE_UNAVAILABLE
        assert isinstance(recovered, Success)
        assert loader.await_count == 2
        assert mock_logger.error.call_args.args[0] == "role_directory_load_failed"

    async def test_reset_forces_reload(self, mock_logger):
        loader = AsyncMock(return_value=ROLES)
        directory = RoleDirectory(loader=loader, logger=mock_logger)

        await directory.get()
        directory.reset()
        await directory.get()

        assert loader.await_count == 2


class TestRoleLookups:
    """role_by_id / role_by_name."""

    @pytest.fixture
    def directory(self, mock_logger):
        return RoleDirectory(loader=AsyncMock(return_value=ROLES), logger=mock_logger)

    async def test_role_by_name(self, directory):
        result = await directory.role_by_name("viewer")

        assert result == Success(value=Role(id="r-view", name="viewer"))

    async def test_role_by_id(self, directory):
        result = await directory.role_by_id("r-org")

        assert result.value.name == "organizer"

    async def test_unknown_name_is_none(self, directory):
        result = await directory.role_by_name("admin")

        assert result == Success(value=None)

    async def test_lookup_propagates_load_failure(self, mock_logger):
        directory = RoleDirectory(
            loader=AsyncMock(side_effect=OSError("unreachable")), logger=mock_logger
        )

        result = await directory.role_by_id("r-org")

        assert isinstance(result, Failure)
