from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError
from src.domain.models.password_reset import PasswordReset
from src.infrastructure.db.orm.password_reset import PasswordResetORM


class PasswordResetsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: PasswordResetORM) -> PasswordReset:
        return PasswordReset(
            id=orm.id,
            user_id=orm.user_id,
            token=orm.token,
            expires_at=orm.expires_at,
            used=orm.used,
            is_deleted=orm.is_deleted,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def add(self, reset: PasswordReset) -> PasswordReset:
        orm = PasswordResetORM(
            id=reset.id,
            user_id=reset.user_id,
            token=reset.token,
            expires_at=reset.expires_at,
            used=reset.used,
            is_deleted=reset.is_deleted,
            created_at=reset.created_at,
            updated_at=reset.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Token already exists") from exc
        return self._to_domain(orm)

    async def get_by_token(self, token: str) -> PasswordReset | None:
        stmt = (
            select(PasswordResetORM)
            .where(PasswordResetORM.token == token)
            .where(PasswordResetORM.is_deleted.is_(False))
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def update(self, reset: PasswordReset) -> PasswordReset:
        orm = await self.session.get(PasswordResetORM, reset.id)
        if not orm:
            raise ValueError(f"Password reset {reset.id} not found")
        orm.used = reset.used
        orm.updated_at = reset.updated_at
        await self.session.flush()
        return self._to_domain(orm)
