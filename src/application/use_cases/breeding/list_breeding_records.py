from __future__ import annotations

from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.breeding_record import BreedingRecord


async def execute(uow: UnitOfWork, farm_id: UUID) -> list[BreedingRecord]:
    records = await uow.breeding_records.list(farm_id)
    if not records:
        return []
    kits = await uow.kit_records.list_for_records([record.id for record in records])
    for record in records:
        record.kits = kits.get(record.id, [])
    return records
