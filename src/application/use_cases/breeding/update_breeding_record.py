from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.errors import RecordNotFound
from src.application.events.models import DoeCullingRecommendedEvent
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.transactions import atomic
from src.domain.models.breeding_record import BreedingRecord
from src.domain.value_objects.culling import (
    LITTER_HISTORY_SIZE,
    CullingRecommendation,
    evaluate_culling,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UpdateBreedingRecordInput:
    actual_birth_date: date | None = None
    number_of_kits: int | None = None
    notes: str | None = None


@dataclass(slots=True)
class UpdateBreedingRecordOutput:
    record: BreedingRecord
    culling: CullingRecommendation | None = None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    record_id: UUID,
    payload: UpdateBreedingRecordInput,
    actor_user_id: UUID | None = None,
) -> UpdateBreedingRecordOutput:
    culling: CullingRecommendation | None = None
    async with atomic(
        uow, "updating breeding record", record_id=record_id, user_id=actor_user_id
    ):
        record = await uow.breeding_records.get(farm_id, record_id)
        if not record:
            raise RecordNotFound("Breeding record not found")

        # Zero kits counts as "not supplied", same as the field merge below
        if payload.actual_birth_date and payload.number_of_kits:
            history = await uow.breeding_records.recent_births(
                farm_id, record.doe_id, limit=LITTER_HISTORY_SIZE
            )
            culling = evaluate_culling(
                record.doe_id,
                payload.number_of_kits,
                [past.number_of_kits for past in history],
            )
            if culling:
                logger.info(
                    "Doe %s marked for culling (%s): litter of %s, recent litters %s",
                    record.doe_id,
                    culling.reason.value,
                    culling.number_of_kits,
                    list(culling.recent_litters),
                )
                uow.add_event(
                    DoeCullingRecommendedEvent(
                        farm_id=farm_id,
                        actor_user_id=actor_user_id,
                        breeding_record_id=record.id,
                        doe_id=record.doe_id,
                        reason=culling.reason.value,
                        number_of_kits=culling.number_of_kits,
                        recent_litters=culling.recent_litters,
                        birth_date=payload.actual_birth_date,
                    )
                )

            doe = await uow.rabbits.get(farm_id, record.doe_id)
            if doe:
                doe.clear_pregnancy()
                await uow.rabbits.update(doe)

        record.apply_update(
            actual_birth_date=payload.actual_birth_date,
            number_of_kits=payload.number_of_kits,
            notes=payload.notes,
        )
        updated = await uow.breeding_records.update(record)

    logger.info("Breeding record %s updated by user %s", record_id, actor_user_id)
    return UpdateBreedingRecordOutput(record=updated, culling=culling)
