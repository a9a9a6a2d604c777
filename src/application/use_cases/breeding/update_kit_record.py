from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from src.application.errors import RecordNotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.transactions import atomic
from src.domain.models.kit_record import KitRecord

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UpdateKitRecordInput:
    weaning_weight: Decimal | None = None
    status: str | None = None
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    kit_id: UUID,
    payload: UpdateKitRecordInput,
    actor_user_id: UUID | None = None,
) -> KitRecord:
    async with atomic(uow, "updating kit record", kit_id=kit_id, user_id=actor_user_id):
        kit = await uow.kit_records.get(farm_id, kit_id)
        if not kit:
            raise RecordNotFound("Kit record not found")
        kit.apply_update(
            weaning_weight=payload.weaning_weight,
            status=payload.status,
            notes=payload.notes,
        )
        updated = await uow.kit_records.update(kit)

    logger.info("Kit record %s updated by user %s", kit_id, actor_user_id)
    return updated
