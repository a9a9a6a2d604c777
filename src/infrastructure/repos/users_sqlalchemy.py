from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import NotFound, ValidationError
from src.application.interfaces.repositories.users import UserRepository
from src.domain.models.user import User
from src.infrastructure.db.orm.user import UserORM


class UsersSQLAlchemyRepository(UserRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: UserORM) -> User:
        return User(
            id=orm.id,
            email=orm.email,
            hashed_password=orm.hashed_password,
            name=orm.name,
            phone=orm.phone,
            role_id=orm.role_id,
            farm_id=orm.farm_id,
            email_verified=orm.email_verified,
            is_active=orm.is_active,
            is_deleted=orm.is_deleted,
            login_count=orm.login_count,
            last_login=orm.last_login,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def add(self, user: User) -> User:
        orm = UserORM(
            id=user.id,
            email=user.email,
            hashed_password=user.hashed_password,
            name=user.name,
            phone=user.phone,
            role_id=user.role_id,
            farm_id=user.farm_id,
            email_verified=user.email_verified,
            is_active=user.is_active,
            is_deleted=user.is_deleted,
            login_count=user.login_count,
            last_login=user.last_login,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ValidationError("Email is already registered") from exc
        return self._to_domain(orm)

    async def get(self, user_id: UUID) -> User | None:
        stmt = select(UserORM).where(UserORM.id == user_id).where(UserORM.is_deleted.is_(False))
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_by_email(self, email: str) -> User | None:
        stmt = (
            select(UserORM)
            .where(UserORM.email == email.lower())
            .where(UserORM.is_deleted.is_(False))
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def update(self, user: User) -> User:
        orm = await self.session.get(UserORM, user.id)
        if not orm:
            raise NotFound("User not found")
        orm.name = user.name
        orm.phone = user.phone
        orm.role_id = user.role_id
        orm.farm_id = user.farm_id
        orm.email_verified = user.email_verified
        orm.is_active = user.is_active
        orm.login_count = user.login_count
        orm.last_login = user.last_login
        orm.updated_at = user.updated_at
        await self.session.flush()
        return self._to_domain(orm)

    async def update_password(self, user_id: UUID, hashed_password: str) -> None:
        stmt = (
            update(UserORM)
            .where(UserORM.id == user_id)
            .where(UserORM.is_deleted.is_(False))
            .values(hashed_password=hashed_password, updated_at=datetime.now(timezone.utc))
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            raise NotFound("User not found")
