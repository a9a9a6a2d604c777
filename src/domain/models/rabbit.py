from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


@dataclass(slots=True)
class Rabbit:
    id: UUID
    farm_id: UUID
    rabbit_id: str
    gender: str
    name: str | None = None
    breed: str | None = None

    is_pregnant: bool = False
    pregnancy_start_date: date | None = None
    expected_birth_date: date | None = None

    is_deleted: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        rabbit_id: str,
        gender: str,
        name: str | None = None,
        breed: str | None = None,
    ) -> Rabbit:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            rabbit_id=rabbit_id,
            gender=gender,
            name=name,
            breed=breed,
            created_at=now,
            updated_at=now,
        )

    def mark_pregnant(self, start_date: date, expected_birth_date: date) -> None:
        self.is_pregnant = True
        self.pregnancy_start_date = start_date
        self.expected_birth_date = expected_birth_date
        self.touch()

    def clear_pregnancy(self) -> None:
        self.is_pregnant = False
        self.pregnancy_start_date = None
        self.expected_birth_date = None
        self.touch()

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
