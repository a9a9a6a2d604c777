from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.transactions import atomic
from src.domain.models.breeding_record import BreedingRecord
from src.domain.models.rabbit import Gender
from src.domain.value_objects.breeding_calendar import (
    buck_rest_window_start,
    earliest_remating_date,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateBreedingRecordInput:
    doe_id: str | None
    buck_id: str | None
    mating_date: date | None
    expected_birth_date: date | None
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID | None,
    payload: CreateBreedingRecordInput,
    actor_user_id: UUID | None = None,
) -> BreedingRecord:
    if not (
        farm_id
        and payload.doe_id
        and payload.buck_id
        and payload.mating_date
        and payload.expected_birth_date
    ):
        raise ValidationError("Missing required breeding record fields")

    async with atomic(
        uow,
        "creating breeding record",
        farm_id=farm_id,
        doe_id=payload.doe_id,
        user_id=actor_user_id,
    ):
        # Row locks keep concurrent matings for the same pair from racing the spacing rules
        doe = await uow.rabbits.get(farm_id, payload.doe_id, for_update=True)
        if not doe or doe.gender != Gender.FEMALE.value:
            raise ValidationError("Doe not found or invalid")
        buck = await uow.rabbits.get(farm_id, payload.buck_id, for_update=True)
        if not buck or buck.gender != Gender.MALE.value:
            raise ValidationError("Buck not found or invalid")

        if await uow.breeding_records.buck_has_mating_since(
            farm_id, payload.buck_id, buck_rest_window_start(payload.mating_date)
        ):
            raise ValidationError("Buck has served within the last 3 days")

        last_births = await uow.breeding_records.recent_births(farm_id, payload.doe_id, limit=1)
        if last_births:
            available_from = earliest_remating_date(last_births[0].actual_birth_date)
            if payload.mating_date < available_from:
                raise ValidationError(
                    "Doe cannot be served within 1 week of weaning",
                    details={"available_from": available_from.isoformat()},
                )

        record = BreedingRecord.create(
            farm_id=farm_id,
            doe_id=payload.doe_id,
            buck_id=payload.buck_id,
            mating_date=payload.mating_date,
            expected_birth_date=payload.expected_birth_date,
            notes=payload.notes,
        )
        created = await uow.breeding_records.add(record)

        doe.mark_pregnant(payload.mating_date, payload.expected_birth_date)
        await uow.rabbits.update(doe)

    logger.info("Breeding record created for doe %s by user %s", payload.doe_id, actor_user_id)
    return created
