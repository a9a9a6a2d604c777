from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.rabbit import Rabbit


class RabbitsRepository(Protocol):
    async def add(self, rabbit: Rabbit) -> Rabbit: ...

    async def get(
        self, farm_id: UUID, rabbit_id: str, *, for_update: bool = False
    ) -> Rabbit | None: ...

    async def update(self, rabbit: Rabbit) -> Rabbit: ...
