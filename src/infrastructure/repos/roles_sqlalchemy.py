from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.models.role import Role
from src.domain.value_objects.permissions import Permissions
from src.domain.value_objects.role import DEFAULT_ROLES
from src.infrastructure.db.orm.role import RoleORM


class RolesSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: RoleORM) -> Role:
        # Raises ValueError on corrupted permission data
        return Role(
            id=orm.id,
            name=orm.name,
            permissions=Permissions.parse(orm.permissions),
            description=orm.description,
            is_active=orm.is_active,
            is_deleted=orm.is_deleted,
            created_at=orm.created_at,
        )

    async def ensure_defaults(self) -> int:
        """Insert any missing default role by name. Returns how many were added."""
        result = await self.session.execute(select(RoleORM.name))
        existing = set(result.scalars().all())
        added = 0
        for name, description, permissions in DEFAULT_ROLES:
            if name.value in existing:
                continue
            self.session.add(
                RoleORM(
                    name=name.value,
                    description=description,
                    permissions=permissions.to_list(),
                    is_active=True,
                    is_deleted=False,
                )
            )
            added += 1
        if added:
            await self.session.flush()
        return added

    async def get(self, role_id: int) -> Role | None:
        stmt = select(RoleORM).where(RoleORM.id == role_id).where(RoleORM.is_deleted.is_(False))
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_by_name(self, name: str) -> Role | None:
        stmt = select(RoleORM).where(RoleORM.name == name).where(RoleORM.is_deleted.is_(False))
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None
