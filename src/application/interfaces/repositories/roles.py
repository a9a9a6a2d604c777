from __future__ import annotations

from typing import Protocol

from src.domain.models.role import Role


class RolesRepository(Protocol):
    async def ensure_defaults(self) -> int: ...

    async def get(self, role_id: int) -> Role | None: ...

    async def get_by_name(self, name: str) -> Role | None: ...
