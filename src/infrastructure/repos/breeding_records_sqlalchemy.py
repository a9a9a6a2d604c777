from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.models.breeding_record import BreedingRecord
from src.infrastructure.db.orm.breeding_record import BreedingRecordORM


class BreedingRecordsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: BreedingRecordORM) -> BreedingRecord:
        return BreedingRecord(
            id=orm.id,
            farm_id=orm.farm_id,
            doe_id=orm.doe_id,
            buck_id=orm.buck_id,
            mating_date=orm.mating_date,
            expected_birth_date=orm.expected_birth_date,
            alert_date=orm.alert_date,
            actual_birth_date=orm.actual_birth_date,
            number_of_kits=orm.number_of_kits,
            notes=orm.notes,
            is_deleted=orm.is_deleted,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    def _active(self, farm_id: UUID):
        return (
            select(BreedingRecordORM)
            .where(BreedingRecordORM.farm_id == farm_id)
            .where(BreedingRecordORM.is_deleted.is_(False))
        )

    async def add(self, record: BreedingRecord) -> BreedingRecord:
        orm = BreedingRecordORM(
            id=record.id,
            farm_id=record.farm_id,
            doe_id=record.doe_id,
            buck_id=record.buck_id,
            mating_date=record.mating_date,
            expected_birth_date=record.expected_birth_date,
            alert_date=record.alert_date,
            actual_birth_date=record.actual_birth_date,
            number_of_kits=record.number_of_kits,
            notes=record.notes,
            is_deleted=record.is_deleted,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, record_id: UUID) -> BreedingRecord | None:
        stmt = self._active(farm_id).where(BreedingRecordORM.id == record_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(self, farm_id: UUID) -> list[BreedingRecord]:
        stmt = self._active(farm_id).order_by(BreedingRecordORM.created_at.desc())
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def update(self, record: BreedingRecord) -> BreedingRecord:
        orm = await self.session.get(BreedingRecordORM, record.id)
        if not orm:
            raise ValueError(f"Breeding record {record.id} not found")
        orm.actual_birth_date = record.actual_birth_date
        orm.number_of_kits = record.number_of_kits
        orm.notes = record.notes
        orm.is_deleted = record.is_deleted
        orm.updated_at = record.updated_at
        await self.session.flush()
        return self._to_domain(orm)

    async def buck_has_mating_since(self, farm_id: UUID, buck_id: str, since: date) -> bool:
        stmt = (
            self._active(farm_id)
            .with_only_columns(BreedingRecordORM.id)
            .where(BreedingRecordORM.buck_id == buck_id)
            .where(BreedingRecordORM.mating_date >= since)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def recent_births(
        self, farm_id: UUID, doe_id: str, limit: int = 3
    ) -> list[BreedingRecord]:
        stmt = (
            self._active(farm_id)
            .where(BreedingRecordORM.doe_id == doe_id)
            .where(BreedingRecordORM.actual_birth_date.is_not(None))
            .order_by(BreedingRecordORM.actual_birth_date.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]
