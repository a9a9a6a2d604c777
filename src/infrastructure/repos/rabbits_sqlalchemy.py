from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError
from src.domain.models.rabbit import Rabbit
from src.infrastructure.db.orm.rabbit import RabbitORM


class RabbitsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: RabbitORM) -> Rabbit:
        return Rabbit(
            id=orm.id,
            farm_id=orm.farm_id,
            rabbit_id=orm.rabbit_id,
            gender=orm.gender,
            name=orm.name,
            breed=orm.breed,
            is_pregnant=orm.is_pregnant,
            pregnancy_start_date=orm.pregnancy_start_date,
            expected_birth_date=orm.expected_birth_date,
            is_deleted=orm.is_deleted,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def add(self, rabbit: Rabbit) -> Rabbit:
        orm = RabbitORM(
            id=rabbit.id,
            farm_id=rabbit.farm_id,
            rabbit_id=rabbit.rabbit_id,
            gender=rabbit.gender,
            name=rabbit.name,
            breed=rabbit.breed,
            is_pregnant=rabbit.is_pregnant,
            pregnancy_start_date=rabbit.pregnancy_start_date,
            expected_birth_date=rabbit.expected_birth_date,
            is_deleted=rabbit.is_deleted,
            created_at=rabbit.created_at,
            updated_at=rabbit.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(f"Rabbit {rabbit.rabbit_id} already exists on this farm") from exc
        return self._to_domain(orm)

    async def get(
        self, farm_id: UUID, rabbit_id: str, *, for_update: bool = False
    ) -> Rabbit | None:
        stmt = (
            select(RabbitORM)
            .where(RabbitORM.farm_id == farm_id)
            .where(RabbitORM.rabbit_id == rabbit_id)
            .where(RabbitORM.is_deleted.is_(False))
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def update(self, rabbit: Rabbit) -> Rabbit:
        orm = await self.session.get(RabbitORM, rabbit.id)
        if not orm:
            raise ValueError(f"Rabbit {rabbit.id} not found")
        orm.name = rabbit.name
        orm.breed = rabbit.breed
        orm.is_pregnant = rabbit.is_pregnant
        orm.pregnancy_start_date = rabbit.pregnancy_start_date
        orm.expected_birth_date = rabbit.expected_birth_date
        orm.is_deleted = rabbit.is_deleted
        orm.updated_at = rabbit.updated_at
        await self.session.flush()
        return self._to_domain(orm)
