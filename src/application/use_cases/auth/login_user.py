from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from src.application.errors import AuthError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.transactions import atomic
from src.infrastructure.auth.jwt_service import JWTService
from src.infrastructure.auth.password import PasswordHasher

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LoginInput:
    email: str
    password: str


@dataclass(slots=True)
class LoginResult:
    access_token: str
    token_type: str
    user: dict[str, Any]


async def execute(
    *,
    uow: UnitOfWork,
    payload: LoginInput,
    password_hasher: PasswordHasher,
    jwt_service: JWTService,
) -> LoginResult:
    async with atomic(uow, "logging in", email=payload.email):
        user = await uow.users.get_by_email(payload.email.lower())
        if not user or not user.can_sign_in:
            raise AuthError("Invalid email or password")
        role = await uow.roles.get(user.role_id)
        if not role or not role.is_usable:
            raise AuthError("Invalid email or password")
        if not password_hasher.verify(payload.password, user.hashed_password):
            raise AuthError("Invalid email or password")

        extra_claims: dict[str, Any] = {"role_id": role.id}
        if user.farm_id:
            extra_claims["farm_id"] = str(user.farm_id)
        token = jwt_service.create_access_token(subject=user.id, extra_claims=extra_claims)

        user.record_login()
        await uow.users.update(user)

    logger.info("User logged in: %s", user.email)
    return LoginResult(
        access_token=token,
        token_type="bearer",
        user={
            "id": user.id,
            "email": user.email,
            "name": user.name,
            "role_id": user.role_id,
            "farm_id": user.farm_id,
            "permissions": role.permissions.to_list(),
        },
    )
