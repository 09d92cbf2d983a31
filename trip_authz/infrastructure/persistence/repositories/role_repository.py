"""Role repository implementation.

Maps between the Role domain entity and the roles table.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trip_authz.domain.entities import Role
from trip_authz.infrastructure.persistence.models import Role as RoleModel


class RoleRepository:
    """SQLAlchemy implementation of RoleRepository protocol.

    Roles are seeded once; callers cache the result (RoleDirectory).
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> list[Role]:
        """List every seeded role ordered by name.

        Returns:
            List of Role entities.
        """
        stmt = select(RoleModel).order_by(RoleModel.name)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    def _to_entity(self, model: RoleModel) -> Role:
        return Role(id=model.id, name=model.name)
