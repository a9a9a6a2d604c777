from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.models.revoked_token import RevokedToken
from src.infrastructure.db.orm.revoked_token import RevokedTokenORM


class RevokedTokensSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, revoked: RevokedToken) -> RevokedToken:
        self.session.add(
            RevokedTokenORM(
                id=revoked.id,
                token=revoked.token,
                user_id=revoked.user_id,
                expires_at=revoked.expires_at,
                created_at=revoked.created_at,
            )
        )
        await self.session.flush()
        return revoked

    async def is_revoked(self, token: str) -> bool:
        stmt = select(RevokedTokenORM.id).where(RevokedTokenORM.token == token).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None
