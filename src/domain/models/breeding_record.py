from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID, uuid4

from src.domain.models.kit_record import KitRecord
from src.domain.value_objects.breeding_calendar import alert_date_for
from src.utils.optional_merge import merge_optional


@dataclass(slots=True)
class BreedingRecord:
    id: UUID
    farm_id: UUID
    doe_id: str
    buck_id: str
    mating_date: date
    expected_birth_date: date
    alert_date: date

    actual_birth_date: date | None = None
    number_of_kits: int | None = None
    notes: str | None = None
    # Populated by read projections only
    kits: list[KitRecord] = field(default_factory=list)

    is_deleted: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        doe_id: str,
        buck_id: str,
        mating_date: date,
        expected_birth_date: date,
        notes: str | None = None,
    ) -> BreedingRecord:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            doe_id=doe_id,
            buck_id=buck_id,
            mating_date=mating_date,
            expected_birth_date=expected_birth_date,
            alert_date=alert_date_for(mating_date),
            notes=notes or None,
            created_at=now,
            updated_at=now,
        )

    @property
    def has_birth(self) -> bool:
        return self.actual_birth_date is not None

    def apply_update(
        self,
        actual_birth_date: date | None = None,
        number_of_kits: int | None = None,
        notes: str | None = None,
    ) -> None:
        self.actual_birth_date = merge_optional(actual_birth_date, self.actual_birth_date)
        self.number_of_kits = merge_optional(number_of_kits, self.number_of_kits)
        self.notes = merge_optional(notes, self.notes)
        self.touch()

    def soft_delete(self) -> None:
        self.is_deleted = True
        self.touch()

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
