from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.models.kit_record import KitRecord
from src.infrastructure.db.orm.breeding_record import BreedingRecordORM
from src.infrastructure.db.orm.kit_record import KitRecordORM


class KitRecordsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: KitRecordORM) -> KitRecord:
        return KitRecord(
            id=orm.id,
            breeding_record_id=orm.breeding_record_id,
            kit_number=orm.kit_number,
            birth_weight=orm.birth_weight,
            gender=orm.gender,
            color=orm.color,
            weaning_date=orm.weaning_date,
            status=orm.status,
            weaning_weight=orm.weaning_weight,
            notes=orm.notes,
            is_deleted=orm.is_deleted,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def add(self, kit: KitRecord) -> KitRecord:
        orm = KitRecordORM(
            id=kit.id,
            breeding_record_id=kit.breeding_record_id,
            kit_number=kit.kit_number,
            birth_weight=kit.birth_weight,
            gender=kit.gender,
            color=kit.color,
            status=kit.status,
            weaning_date=kit.weaning_date,
            weaning_weight=kit.weaning_weight,
            notes=kit.notes,
            is_deleted=kit.is_deleted,
            created_at=kit.created_at,
            updated_at=kit.updated_at,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, kit_id: UUID) -> KitRecord | None:
        # Kits carry no farm id; scope through the owning breeding record
        stmt = (
            select(KitRecordORM)
            .join(BreedingRecordORM, BreedingRecordORM.id == KitRecordORM.breeding_record_id)
            .where(KitRecordORM.id == kit_id)
            .where(KitRecordORM.is_deleted.is_(False))
            .where(BreedingRecordORM.farm_id == farm_id)
            .where(BreedingRecordORM.is_deleted.is_(False))
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def update(self, kit: KitRecord) -> KitRecord:
        orm = await self.session.get(KitRecordORM, kit.id)
        if not orm:
            raise ValueError(f"Kit record {kit.id} not found")
        orm.weaning_weight = kit.weaning_weight
        orm.status = kit.status
        orm.notes = kit.notes
        orm.updated_at = kit.updated_at
        await self.session.flush()
        return self._to_domain(orm)

    async def list_for_records(self, record_ids: list[UUID]) -> dict[UUID, list[KitRecord]]:
        if not record_ids:
            return {}
        stmt = (
            select(KitRecordORM)
            .where(KitRecordORM.breeding_record_id.in_(record_ids))
            .where(KitRecordORM.is_deleted.is_(False))
            .order_by(KitRecordORM.created_at, KitRecordORM.kit_number)
        )
        result = await self.session.execute(stmt)
        grouped: dict[UUID, list[KitRecord]] = defaultdict(list)
        for orm in result.scalars().all():
            grouped[orm.breeding_record_id].append(self._to_domain(orm))
        return dict(grouped)

    async def soft_delete_for_record(self, record_id: UUID) -> int:
        stmt = (
            update(KitRecordORM)
            .where(KitRecordORM.breeding_record_id == record_id)
            .where(KitRecordORM.is_deleted.is_(False))
            .values(is_deleted=True, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return int(result.rowcount or 0)
