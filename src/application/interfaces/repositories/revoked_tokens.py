from __future__ import annotations

from typing import Protocol

from src.domain.models.revoked_token import RevokedToken


class RevokedTokensRepository(Protocol):
    async def add(self, revoked: RevokedToken) -> RevokedToken: ...

    async def is_revoked(self, token: str) -> bool: ...
