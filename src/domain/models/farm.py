from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass(slots=True)
class Farm:
    id: UUID
    name: str
    location: str | None = None
    is_active: bool = True
    is_deleted: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, name: str, location: str | None = None, farm_id: UUID | None = None) -> Farm:
        return cls(id=farm_id or uuid4(), name=name, location=location)

    @property
    def is_usable(self) -> bool:
        return self.is_active and not self.is_deleted
