from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from src.application.errors import RecordNotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.transactions import atomic
from src.domain.models.kit_record import KitRecord

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateKitRecordInput:
    breeding_record_id: UUID | None
    kit_number: int | None
    birth_weight: Decimal | None
    gender: str | None
    color: str | None
    status: str | None = None
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: CreateKitRecordInput,
    actor_user_id: UUID | None = None,
) -> KitRecord:
    if not (
        payload.breeding_record_id
        and payload.kit_number
        and payload.birth_weight
        and payload.gender
        and payload.color
    ):
        raise ValidationError("Missing required kit record fields")

    async with atomic(
        uow,
        "creating kit record",
        breeding_record_id=payload.breeding_record_id,
        user_id=actor_user_id,
    ):
        record = await uow.breeding_records.get(farm_id, payload.breeding_record_id)
        if not record:
            raise RecordNotFound("Breeding record not found")
        if not record.has_birth:
            raise ValidationError("Cannot add kits until actual birth date is set")

        kit = KitRecord.create(
            breeding_record_id=record.id,
            litter_birth_date=record.actual_birth_date,
            kit_number=payload.kit_number,
            birth_weight=payload.birth_weight,
            gender=payload.gender,
            color=payload.color,
            status=payload.status,
            notes=payload.notes,
        )
        created = await uow.kit_records.add(kit)

    logger.info(
        "Kit record %s created for breeding record %s by user %s",
        payload.kit_number,
        payload.breeding_record_id,
        actor_user_id,
    )
    return created
