from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class DoeCullingRecommendedEvent:
    farm_id: UUID
    actor_user_id: UUID | None
    breeding_record_id: UUID
    doe_id: str
    reason: str
    number_of_kits: int
    recent_litters: tuple[int, ...] = ()
    birth_date: date | None = None
