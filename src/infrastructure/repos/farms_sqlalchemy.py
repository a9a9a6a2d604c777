from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.models.farm import Farm
from src.infrastructure.db.orm.farm import FarmORM


class FarmsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: FarmORM) -> Farm:
        return Farm(
            id=orm.id,
            name=orm.name,
            location=orm.location,
            is_active=orm.is_active,
            is_deleted=orm.is_deleted,
            created_at=orm.created_at,
        )

    async def add(self, farm: Farm) -> Farm:
        orm = FarmORM(
            id=farm.id,
            name=farm.name,
            location=farm.location,
            is_active=farm.is_active,
            is_deleted=farm.is_deleted,
        )
        self.session.add(orm)
        await self.session.flush()
        await self.session.refresh(orm)
        return self._to_domain(orm)

    async def get(self, farm_id: UUID) -> Farm | None:
        stmt = select(FarmORM).where(FarmORM.id == farm_id).where(FarmORM.is_deleted.is_(False))
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None
