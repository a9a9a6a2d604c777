from __future__ import annotations

from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

import pytest

from src.application.errors import InfrastructureError, RecordNotFound, ValidationError
from src.application.events.models import DoeCullingRecommendedEvent
from src.application.use_cases.breeding import (
    create_breeding_record,
    create_kit_record,
    delete_breeding_record,
    get_breeding_record,
    list_breeding_records,
    update_breeding_record,
    update_kit_record,
)
from src.domain.models.breeding_record import BreedingRecord
from src.domain.models.kit_record import KitRecord
from src.domain.models.rabbit import Rabbit

FARM_ID = uuid4()


class StubRabbits:
    def __init__(self, rabbits: list[Rabbit]) -> None:
        self.items = {r.rabbit_id: r for r in rabbits}
        self.locked: list[str] = []

    async def add(self, rabbit):
        self.items[rabbit.rabbit_id] = rabbit
        return rabbit

    async def get(self, farm_id, rabbit_id, *, for_update=False):
        if for_update:
            self.locked.append(rabbit_id)
        rabbit = self.items.get(rabbit_id)
        if rabbit and rabbit.farm_id == farm_id and not rabbit.is_deleted:
            return rabbit
        return None

    async def update(self, rabbit):
        self.items[rabbit.rabbit_id] = rabbit
        return rabbit


class StubBreedingRecords:
    def __init__(self) -> None:
        self.items: dict = {}

    def _active(self, farm_id):
        return [r for r in self.items.values() if r.farm_id == farm_id and not r.is_deleted]

    async def add(self, record):
        self.items[record.id] = record
        return record

    async def get(self, farm_id, record_id):
        record = self.items.get(record_id)
        if record and record.farm_id == farm_id and not record.is_deleted:
            return record
        return None

    async def list(self, farm_id):
        return sorted(self._active(farm_id), key=lambda r: r.created_at, reverse=True)

    async def update(self, record):
        self.items[record.id] = record
        return record

    async def buck_has_mating_since(self, farm_id, buck_id, since):
        return any(
            r.buck_id == buck_id and r.mating_date >= since for r in self._active(farm_id)
        )

    async def recent_births(self, farm_id, doe_id, limit=3):
        births = [
            r for r in self._active(farm_id) if r.doe_id == doe_id and r.actual_birth_date
        ]
        births.sort(key=lambda r: r.actual_birth_date, reverse=True)
        return births[:limit]


class StubKitRecords:
    def __init__(self, records: StubBreedingRecords) -> None:
        self.items: dict = {}
        self.records = records

    async def add(self, kit):
        self.items[kit.id] = kit
        return kit

    async def get(self, farm_id, kit_id):
        kit = self.items.get(kit_id)
        if not kit or kit.is_deleted:
            return None
        if not await self.records.get(farm_id, kit.breeding_record_id):
            return None
        return kit

    async def update(self, kit):
        self.items[kit.id] = kit
        return kit

    async def list_for_records(self, record_ids):
        grouped: dict = {}
        for kit in self.items.values():
            if kit.breeding_record_id in record_ids and not kit.is_deleted:
                grouped.setdefault(kit.breeding_record_id, []).append(kit)
        return grouped

    async def soft_delete_for_record(self, record_id):
        count = 0
        for kit in self.items.values():
            if kit.breeding_record_id == record_id and not kit.is_deleted:
                kit.is_deleted = True
                count += 1
        return count


def make_uow(rabbits: list[Rabbit] | None = None):
    breeding_records = StubBreedingRecords()
    calls = {"commit": 0, "rollback": 0}

    async def commit():
        calls["commit"] += 1

    async def rollback():
        calls["rollback"] += 1

    events: list = []

    def add_event(event):
        events.append(event)

    def drain_events():
        nonlocal events
        evts, events = events, []
        return evts

    return SimpleNamespace(
        rabbits=StubRabbits(rabbits or []),
        breeding_records=breeding_records,
        kit_records=StubKitRecords(breeding_records),
        calls=calls,
        commit=commit,
        rollback=rollback,
        add_event=add_event,
        drain_events=drain_events,
    )


def herd() -> list[Rabbit]:
    return [
        Rabbit.create(FARM_ID, "D1", "female"),
        Rabbit.create(FARM_ID, "D2", "female"),
        Rabbit.create(FARM_ID, "B1", "male"),
        Rabbit.create(FARM_ID, "B2", "male"),
    ]


def mating(doe="D1", buck="B1", on=date(2024, 1, 1), birth=date(2024, 2, 1)):
    return create_breeding_record.CreateBreedingRecordInput(
        doe_id=doe, buck_id=buck, mating_date=on, expected_birth_date=birth
    )


def past_litter(doe: str, born: date, kits: int, buck: str = "B9") -> BreedingRecord:
    record = BreedingRecord.create(
        farm_id=FARM_ID,
        doe_id=doe,
        buck_id=buck,
        mating_date=date(2020, 1, 1),
        expected_birth_date=date(2020, 2, 1),
    )
    record.actual_birth_date = born
    record.number_of_kits = kits
    return record


@pytest.mark.asyncio
async def test_create_breeding_record_sets_alert_date_and_marks_doe_pregnant():
    uow = make_uow(herd())
    record = await create_breeding_record.execute(uow, FARM_ID, mating(), actor_user_id=uuid4())

    assert record.alert_date == date(2024, 1, 22)
    assert record.doe_id == "D1"
    assert record.actual_birth_date is None
    doe = uow.rabbits.items["D1"]
    assert doe.is_pregnant is True
    assert doe.pregnancy_start_date == date(2024, 1, 1)
    assert doe.expected_birth_date == date(2024, 2, 1)
    assert uow.rabbits.locked == ["D1", "B1"]
    assert uow.calls["commit"] == 1


@pytest.mark.asyncio
async def test_create_breeding_record_requires_all_fields():
    uow = make_uow(herd())
    payload = create_breeding_record.CreateBreedingRecordInput(
        doe_id="D1", buck_id="", mating_date=date(2024, 1, 1), expected_birth_date=None
    )
    with pytest.raises(ValidationError, match="Missing required"):
        await create_breeding_record.execute(uow, FARM_ID, payload)
    assert uow.breeding_records.items == {}


@pytest.mark.asyncio
async def test_create_breeding_record_requires_farm():
    uow = make_uow(herd())
    with pytest.raises(ValidationError):
        await create_breeding_record.execute(uow, None, mating())


@pytest.mark.asyncio
async def test_create_breeding_record_rejects_wrong_gender():
    uow = make_uow(herd())
    with pytest.raises(ValidationError, match="Doe not found or invalid"):
        await create_breeding_record.execute(uow, FARM_ID, mating(doe="B2"))
    with pytest.raises(ValidationError, match="Buck not found or invalid"):
        await create_breeding_record.execute(uow, FARM_ID, mating(buck="D2"))
    assert uow.calls["rollback"] == 2
    assert uow.rabbits.items["D1"].is_pregnant is False


@pytest.mark.asyncio
async def test_create_breeding_record_rejects_rabbit_from_other_farm():
    uow = make_uow([Rabbit.create(uuid4(), "D1", "female"), Rabbit.create(FARM_ID, "B1", "male")])
    with pytest.raises(ValidationError, match="Doe not found"):
        await create_breeding_record.execute(uow, FARM_ID, mating())


@pytest.mark.asyncio
async def test_buck_rest_blocks_mating_within_three_days():
    uow = make_uow(herd())
    await create_breeding_record.execute(uow, FARM_ID, mating(doe="D1", on=date(2024, 1, 1)))

    with pytest.raises(ValidationError, match="Buck has served"):
        await create_breeding_record.execute(uow, FARM_ID, mating(doe="D2", on=date(2024, 1, 3)))
    with pytest.raises(ValidationError, match="Buck has served"):
        await create_breeding_record.execute(uow, FARM_ID, mating(doe="D2", on=date(2024, 1, 4)))

    record = await create_breeding_record.execute(
        uow, FARM_ID, mating(doe="D2", on=date(2024, 1, 5))
    )
    assert record.buck_id == "B1"


@pytest.mark.asyncio
async def test_buck_rest_window_has_no_upper_bound():
    uow = make_uow(herd())
    await create_breeding_record.execute(uow, FARM_ID, mating(doe="D1", on=date(2024, 6, 1)))

    with pytest.raises(ValidationError, match="Buck has served"):
        await create_breeding_record.execute(uow, FARM_ID, mating(doe="D2", on=date(2024, 1, 1)))


@pytest.mark.asyncio
async def test_doe_rest_blocks_mating_until_week_after_weaning():
    uow = make_uow(herd())
    previous = past_litter("D1", date(2024, 1, 30), 6)
    uow.breeding_records.items[previous.id] = previous

    with pytest.raises(ValidationError, match="within 1 week of weaning") as exc_info:
        await create_breeding_record.execute(uow, FARM_ID, mating(on=date(2024, 3, 15)))
    assert exc_info.value.details == {"available_from": "2024-03-19"}

    record = await create_breeding_record.execute(uow, FARM_ID, mating(on=date(2024, 3, 19)))
    assert record.alert_date == date(2024, 4, 9)


@pytest.mark.asyncio
async def test_update_with_normal_litter_clears_pregnancy_without_culling():
    uow = make_uow(herd())
    record = await create_breeding_record.execute(uow, FARM_ID, mating())

    result = await update_breeding_record.execute(
        uow,
        FARM_ID,
        record.id,
        update_breeding_record.UpdateBreedingRecordInput(
            actual_birth_date=date(2024, 1, 30), number_of_kits=6
        ),
    )

    assert result.culling is None
    assert result.record.actual_birth_date == date(2024, 1, 30)
    assert result.record.number_of_kits == 6
    assert uow.rabbits.items["D1"].is_pregnant is False
    assert uow.drain_events() == []


@pytest.mark.asyncio
async def test_update_flags_doe_with_three_small_litters():
    uow = make_uow(herd())
    for born in (date(2022, 1, 1), date(2022, 6, 1), date(2023, 1, 1)):
        litter = past_litter("D1", born, 4)
        uow.breeding_records.items[litter.id] = litter
    record = await create_breeding_record.execute(uow, FARM_ID, mating())

    result = await update_breeding_record.execute(
        uow,
        FARM_ID,
        record.id,
        update_breeding_record.UpdateBreedingRecordInput(
            actual_birth_date=date(2024, 1, 30), number_of_kits=7
        ),
        actor_user_id=uuid4(),
    )

    assert result.culling is not None
    assert result.culling.reason.value == "low_litter_history"
    assert result.culling.recent_litters == (4, 4, 4)
    events = uow.drain_events()
    assert len(events) == 1
    assert isinstance(events[0], DoeCullingRecommendedEvent)
    assert events[0].doe_id == "D1"
    assert events[0].number_of_kits == 7


@pytest.mark.asyncio
async def test_update_flags_litter_outside_range():
    uow = make_uow(herd())
    record = await create_breeding_record.execute(uow, FARM_ID, mating())

    result = await update_breeding_record.execute(
        uow,
        FARM_ID,
        record.id,
        update_breeding_record.UpdateBreedingRecordInput(
            actual_birth_date=date(2024, 1, 30), number_of_kits=11
        ),
    )

    assert result.culling.reason.value == "litter_size_out_of_range"
    assert result.record.number_of_kits == 11


@pytest.mark.asyncio
async def test_update_with_zero_kits_keeps_stored_count_and_skips_culling():
    uow = make_uow(herd())
    record = await create_breeding_record.execute(uow, FARM_ID, mating())
    await update_breeding_record.execute(
        uow,
        FARM_ID,
        record.id,
        update_breeding_record.UpdateBreedingRecordInput(
            actual_birth_date=date(2024, 1, 30), number_of_kits=6
        ),
    )

    result = await update_breeding_record.execute(
        uow,
        FARM_ID,
        record.id,
        update_breeding_record.UpdateBreedingRecordInput(number_of_kits=0, notes="recount"),
    )

    assert result.record.number_of_kits == 6
    assert result.record.notes == "recount"
    assert result.culling is None


@pytest.mark.asyncio
async def test_update_notes_only_leaves_pregnancy_untouched():
    uow = make_uow(herd())
    record = await create_breeding_record.execute(uow, FARM_ID, mating())

    await update_breeding_record.execute(
        uow,
        FARM_ID,
        record.id,
        update_breeding_record.UpdateBreedingRecordInput(notes="checked"),
    )

    assert uow.rabbits.items["D1"].is_pregnant is True


@pytest.mark.asyncio
async def test_update_missing_record_raises_not_found():
    uow = make_uow(herd())
    with pytest.raises(RecordNotFound):
        await update_breeding_record.execute(
            uow, FARM_ID, uuid4(), update_breeding_record.UpdateBreedingRecordInput(notes="x")
        )


@pytest.mark.asyncio
async def test_delete_soft_deletes_record_and_kits():
    uow = make_uow(herd())
    record = await create_breeding_record.execute(uow, FARM_ID, mating())
    await update_breeding_record.execute(
        uow,
        FARM_ID,
        record.id,
        update_breeding_record.UpdateBreedingRecordInput(
            actual_birth_date=date(2024, 1, 30), number_of_kits=6
        ),
    )
    kit = await create_kit_record.execute(
        uow,
        FARM_ID,
        create_kit_record.CreateKitRecordInput(
            breeding_record_id=record.id,
            kit_number=1,
            birth_weight=Decimal("55.5"),
            gender="female",
            color="white",
        ),
    )

    result = await delete_breeding_record.execute(uow, FARM_ID, record.id)

    assert result == {"id": record.id}
    assert uow.breeding_records.items[record.id].is_deleted is True
    assert uow.kit_records.items[kit.id].is_deleted is True
    with pytest.raises(RecordNotFound):
        await get_breeding_record.execute(uow, FARM_ID, record.id)
    with pytest.raises(RecordNotFound):
        await update_kit_record.execute(
            uow, FARM_ID, kit.id, update_kit_record.UpdateKitRecordInput(status="weaned")
        )
    assert await list_breeding_records.execute(uow, FARM_ID) == []


@pytest.mark.asyncio
async def test_delete_pending_record_clears_pregnancy():
    uow = make_uow(herd())
    record = await create_breeding_record.execute(uow, FARM_ID, mating())

    await delete_breeding_record.execute(uow, FARM_ID, record.id)

    assert uow.rabbits.items["D1"].is_pregnant is False
    with pytest.raises(RecordNotFound):
        await delete_breeding_record.execute(uow, FARM_ID, record.id)


@pytest.mark.asyncio
async def test_kit_creation_requires_recorded_birth():
    uow = make_uow(herd())
    record = await create_breeding_record.execute(uow, FARM_ID, mating())
    payload = create_kit_record.CreateKitRecordInput(
        breeding_record_id=record.id,
        kit_number=1,
        birth_weight=Decimal("50"),
        gender="male",
        color="grey",
    )

    with pytest.raises(ValidationError, match="actual birth date"):
        await create_kit_record.execute(uow, FARM_ID, payload)
    assert uow.kit_records.items == {}


@pytest.mark.asyncio
async def test_kit_creation_computes_weaning_date_and_default_status():
    uow = make_uow(herd())
    record = await create_breeding_record.execute(uow, FARM_ID, mating())
    await update_breeding_record.execute(
        uow,
        FARM_ID,
        record.id,
        update_breeding_record.UpdateBreedingRecordInput(
            actual_birth_date=date(2024, 1, 30), number_of_kits=6
        ),
    )

    kit = await create_kit_record.execute(
        uow,
        FARM_ID,
        create_kit_record.CreateKitRecordInput(
            breeding_record_id=record.id,
            kit_number=2,
            birth_weight=Decimal("61.2"),
            gender="male",
            color="black",
        ),
    )

    assert kit.weaning_date == date(2024, 3, 12)
    assert kit.status == "alive"
    fetched = await get_breeding_record.execute(uow, FARM_ID, record.id)
    assert [k.id for k in fetched.kits] == [kit.id]


@pytest.mark.asyncio
async def test_kit_creation_requires_fields_and_existing_record():
    uow = make_uow(herd())
    with pytest.raises(ValidationError, match="Missing required kit record fields"):
        await create_kit_record.execute(
            uow,
            FARM_ID,
            create_kit_record.CreateKitRecordInput(
                breeding_record_id=uuid4(),
                kit_number=None,
                birth_weight=Decimal("50"),
                gender="male",
                color="grey",
            ),
        )
    with pytest.raises(RecordNotFound):
        await create_kit_record.execute(
            uow,
            FARM_ID,
            create_kit_record.CreateKitRecordInput(
                breeding_record_id=uuid4(),
                kit_number=1,
                birth_weight=Decimal("50"),
                gender="male",
                color="grey",
            ),
        )


@pytest.mark.asyncio
async def test_update_kit_merges_supplied_fields():
    uow = make_uow(herd())
    record = past_litter("D1", date(2024, 1, 30), 6)
    uow.breeding_records.items[record.id] = record
    kit = KitRecord.create(
        breeding_record_id=record.id,
        litter_birth_date=record.actual_birth_date,
        kit_number=1,
        birth_weight=Decimal("50"),
        gender="female",
        color="white",
        notes="small",
    )
    uow.kit_records.items[kit.id] = kit

    updated = await update_kit_record.execute(
        uow,
        FARM_ID,
        kit.id,
        update_kit_record.UpdateKitRecordInput(weaning_weight=Decimal("820"), status="weaned"),
    )

    assert updated.weaning_weight == Decimal("820")
    assert updated.status == "weaned"
    assert updated.notes == "small"


@pytest.mark.asyncio
async def test_update_kit_from_other_farm_is_not_found():
    uow = make_uow(herd())
    record = past_litter("D1", date(2024, 1, 30), 6)
    uow.breeding_records.items[record.id] = record
    kit = KitRecord.create(record.id, record.actual_birth_date, 1, Decimal("50"), "male", "red")
    uow.kit_records.items[kit.id] = kit

    with pytest.raises(RecordNotFound, match="Kit record not found"):
        await update_kit_record.execute(
            uow, uuid4(), kit.id, update_kit_record.UpdateKitRecordInput(status="sold")
        )


@pytest.mark.asyncio
async def test_list_breeding_records_attaches_empty_kit_lists():
    uow = make_uow(herd())
    await create_breeding_record.execute(uow, FARM_ID, mating(doe="D1", buck="B1"))
    await create_breeding_record.execute(uow, FARM_ID, mating(doe="D2", buck="B2"))

    records = await list_breeding_records.execute(uow, FARM_ID)

    assert {r.doe_id for r in records} == {"D1", "D2"}
    assert all(r.kits == [] for r in records)
    assert await list_breeding_records.execute(uow, uuid4()) == []


@pytest.mark.asyncio
async def test_unexpected_repository_failure_rolls_back_as_infrastructure_error():
    uow = make_uow(herd())

    async def broken_add(record):
        raise RuntimeError("disk full")

    uow.breeding_records.add = broken_add

    with pytest.raises(InfrastructureError) as exc_info:
        await create_breeding_record.execute(uow, FARM_ID, mating())
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert uow.calls["rollback"] == 1
    assert uow.calls["commit"] == 0
