from __future__ import annotations

import logging
from uuid import UUID

from src.application.errors import RecordNotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.transactions import atomic

logger = logging.getLogger(__name__)


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    record_id: UUID,
    actor_user_id: UUID | None = None,
) -> dict[str, UUID]:
    async with atomic(
        uow, "deleting breeding record", record_id=record_id, user_id=actor_user_id
    ):
        record = await uow.breeding_records.get(farm_id, record_id)
        if not record:
            raise RecordNotFound("Breeding record not found")

        record.soft_delete()
        await uow.breeding_records.update(record)
        kits_deleted = await uow.kit_records.soft_delete_for_record(record.id)

        # An unresolved pregnancy no longer has a record backing it
        if not record.has_birth:
            doe = await uow.rabbits.get(farm_id, record.doe_id)
            if doe:
                doe.clear_pregnancy()
                await uow.rabbits.update(doe)

    logger.info(
        "Breeding record %s soft deleted (%d kits) by user %s",
        record_id,
        kits_deleted,
        actor_user_id,
    )
    return {"id": record_id}
