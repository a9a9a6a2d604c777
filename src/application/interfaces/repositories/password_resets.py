from __future__ import annotations

from typing import Protocol

from src.domain.models.password_reset import PasswordReset


class PasswordResetsRepository(Protocol):
    async def add(self, reset: PasswordReset) -> PasswordReset: ...

    async def get_by_token(self, token: str) -> PasswordReset | None: ...

    async def update(self, reset: PasswordReset) -> PasswordReset: ...
