"""Trip scope lookups used during permission evaluation."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trip_authz.infrastructure.persistence.models import Expense, Trip, User


class TripScopeRepository:
    """SQLAlchemy implementation of TripScopeRepository protocol."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_expense_trip_id(self, expense_id: str) -> str | None:
        stmt = select(Expense.trip_id).where(Expense.id == expense_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_trip_organization_id(self, trip_id: str) -> str | None:
        stmt = select(Trip.organization_id).where(Trip.id == trip_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_expense_ids(self, trip_id: str) -> list[str]:
        stmt = select(Expense.id).where(Expense.trip_id == trip_id).order_by(Expense.id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def user_exists(self, user_id: str) -> bool:
        stmt = select(User.id).where(User.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None
