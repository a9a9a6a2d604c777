from __future__ import annotations

import logging
from uuid import UUID

from src.application.errors import RecordNotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.breeding_record import BreedingRecord

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, farm_id: UUID, record_id: UUID) -> BreedingRecord:
    record = await uow.breeding_records.get(farm_id, record_id)
    if not record:
        logger.warning("Breeding record %s not found for farm %s", record_id, farm_id)
        raise RecordNotFound("Breeding record not found")
    kits = await uow.kit_records.list_for_records([record.id])
    record.kits = kits.get(record.id, [])
    return record
