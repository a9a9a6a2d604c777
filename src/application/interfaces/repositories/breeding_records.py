from __future__ import annotations

from datetime import date
from typing import Protocol
from uuid import UUID

from src.domain.models.breeding_record import BreedingRecord


class BreedingRecordsRepository(Protocol):
    async def add(self, record: BreedingRecord) -> BreedingRecord: ...

    async def get(self, farm_id: UUID, record_id: UUID) -> BreedingRecord | None: ...

    async def list(self, farm_id: UUID) -> list[BreedingRecord]: ...

    async def update(self, record: BreedingRecord) -> BreedingRecord: ...

    async def buck_has_mating_since(self, farm_id: UUID, buck_id: str, since: date) -> bool: ...

    async def recent_births(
        self, farm_id: UUID, doe_id: str, limit: int = 3
    ) -> list[BreedingRecord]: ...
