from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.kit_record import KitRecord


class KitRecordsRepository(Protocol):
    async def add(self, kit: KitRecord) -> KitRecord: ...

    async def get(self, farm_id: UUID, kit_id: UUID) -> KitRecord | None: ...

    async def update(self, kit: KitRecord) -> KitRecord: ...

    async def list_for_records(self, record_ids: list[UUID]) -> dict[UUID, list[KitRecord]]: ...

    async def soft_delete_for_record(self, record_id: UUID) -> int: ...
