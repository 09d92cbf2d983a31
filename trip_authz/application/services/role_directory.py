"""Process-wide role directory.

Roles are seeded once and never change at runtime, so the full set is
loaded on first use and served from memory afterwards.

Concurrency:
    Concurrent first calls share one load (asyncio.Lock with a
    double-checked cache slot). A failed load is not cached; the next call
    tries again.

Usage:
    directory = RoleDirectory(loader=load_roles, logger=logger)

    match await directory.get():
        case Success(value=roles):
            ...
        case Failure(error=StoreUnavailableError()):
            ...
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence

from trip_authz.core.enums import ErrorCode
from trip_authz.core.result import Failure, Result, Success
from trip_authz.domain.entities import Role
from trip_authz.domain.errors import StoreUnavailableError
from trip_authz.domain.protocols import LoggerProtocol

type RoleLoader = Callable[[], Awaitable[Sequence[Role]]]


class RoleDirectory:
    """Lazily loaded, immutable snapshot of all roles.

    Attributes:
        _loader: Async callable returning every role from the store.
        _roles: Cached snapshot (None until the first successful load).
        _lock: Serializes first loads.
    """

    def __init__(self, *, loader: RoleLoader, logger: LoggerProtocol) -> None:
        self._loader = loader
        self._logger = logger
        self._roles: tuple[Role, ...] | None = None
        self._lock = asyncio.Lock()

    async def get(self) -> Result[tuple[Role, ...], StoreUnavailableError]:
        """Return every role, loading them on first use.

        Returns:
            Success with the same tuple on every call after the first
            successful load; Failure(StoreUnavailableError) if loading failed.
        """
        if self._roles is not None:
            return Success(value=self._roles)

        async with self._lock:
            # Another task may have finished the load while we waited
            if self._roles is not None:
                return Success(value=self._roles)

            try:
                roles = tuple(await self._loader())
            except Exception as e:
                self._logger.error(
                    "role_directory_load_failed",
                    error=e,
                )
                return Failure(
                    error=StoreUnavailableError(
                        code=ErrorCode.STORE_UNAVAILABLE,
                        message="Role directory could not be loaded",
                        operation="load_roles",
                    )
                )

            self._roles = roles
            self._logger.info(
                "role_directory_loaded",
                role_count=len(roles),
                roles=[role.name for role in roles],
            )
            return Success(value=roles)

    async def role_by_id(
        self, role_id: str
    ) -> Result[Role | None, StoreUnavailableError]:
        """Look up a role by id (None when unknown)."""
        result = await self.get()
        if isinstance(result, Failure):
            return result
        return Success(value=next((r for r in result.value if r.id == role_id), None))

    async def role_by_name(
        self, name: str
    ) -> Result[Role | None, StoreUnavailableError]:
        """Look up a role by name (None when unknown)."""
        result = await self.get()
        if isinstance(result, Failure):
            return result
        return Success(value=next((r for r in result.value if r.name == name), None))

    def reset(self) -> None:
        """Drop the cached snapshot; the next ``get`` reloads."""
        self._roles = None
