"""Idempotent reference-data seeding.

Roles are near-static: they are created here once per database and never
mutated at runtime. Safe to run on every startup.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trip_authz.infrastructure.persistence.database import Database
from trip_authz.infrastructure.persistence.models import Role

TRIP_ROLE_NAMES: tuple[str, ...] = ("organizer", "participant", "viewer")


async def seed_roles(session: AsyncSession) -> list[str]:
    """Insert any missing trip roles.

    Args:
        session: Session whose transaction the caller commits.

    Returns:
        Names of the roles that were created (empty when already seeded).
    """
    result = await session.execute(select(Role.name))
    existing = set(result.scalars().all())

    created = [name for name in TRIP_ROLE_NAMES if name not in existing]
    for name in created:
        session.add(Role(name=name))
    await session.flush()

    return created


async def init_database(database: Database) -> list[str]:
    """Create tables (if missing) and seed roles.

    Args:
        database: Target database.

    Returns:
        Names of the roles that were created.
    """
    await database.create_all()
    async with database.get_session() as session:
        return await seed_roles(session)
