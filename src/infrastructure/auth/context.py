from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import PermissionDenied
from src.domain.models.role import Role
from src.domain.models.user import User
from src.domain.value_objects.permissions import MANAGE_FARMS
from src.infrastructure.repos.revoked_tokens_sqlalchemy import RevokedTokensSQLAlchemyRepository
from src.infrastructure.repos.roles_sqlalchemy import RolesSQLAlchemyRepository
from src.infrastructure.repos.users_sqlalchemy import UsersSQLAlchemyRepository


@dataclass(slots=True)
class AuthContext:
    user_id: UUID
    email: str
    farm_id: UUID
    role: Role
    claims: dict[str, Any]

    def require_permission(self, capability: str) -> None:
        if not self.role.grants(capability):
            raise PermissionDenied(
                "Role not allowed for this action", details={"required": capability}
            )


async def fetch_user(session: AsyncSession, user_id: UUID) -> User | None:
    return await UsersSQLAlchemyRepository(session).get(user_id)


async def fetch_role(session: AsyncSession, role_id: int) -> Role | None:
    return await RolesSQLAlchemyRepository(session).get(role_id)


async def is_token_revoked(session: AsyncSession, token: str) -> bool:
    return await RevokedTokensSQLAlchemyRepository(session).is_revoked(token)


def select_active_farm(user: User, role: Role, farm_id: UUID) -> UUID:
    if user.farm_id == farm_id or role.grants(MANAGE_FARMS):
        return farm_id
    raise PermissionDenied("User does not belong to farm")
