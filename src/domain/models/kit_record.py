from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4

from src.domain.value_objects.breeding_calendar import weaning_date_for
from src.utils.optional_merge import merge_optional


class KitStatus(str, Enum):
    ALIVE = "alive"
    DEAD = "dead"
    WEANED = "weaned"
    SOLD = "sold"
    CULLED = "culled"


@dataclass(slots=True)
class KitRecord:
    id: UUID
    breeding_record_id: UUID
    kit_number: int
    birth_weight: Decimal
    gender: str
    color: str
    weaning_date: date
    status: str = KitStatus.ALIVE.value
    weaning_weight: Decimal | None = None
    notes: str | None = None

    is_deleted: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        breeding_record_id: UUID,
        litter_birth_date: date,
        kit_number: int,
        birth_weight: Decimal,
        gender: str,
        color: str,
        status: str | None = None,
        notes: str | None = None,
    ) -> KitRecord:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            breeding_record_id=breeding_record_id,
            kit_number=kit_number,
            birth_weight=birth_weight,
            gender=gender,
            color=color,
            weaning_date=weaning_date_for(litter_birth_date),
            status=status or KitStatus.ALIVE.value,
            notes=notes or None,
            created_at=now,
            updated_at=now,
        )

    def apply_update(
        self,
        weaning_weight: Decimal | None = None,
        status: str | None = None,
        notes: str | None = None,
    ) -> None:
        self.weaning_weight = merge_optional(weaning_weight, self.weaning_weight)
        self.status = merge_optional(status, self.status)
        self.notes = merge_optional(notes, self.notes)
        self.updated_at = datetime.now(timezone.utc)
