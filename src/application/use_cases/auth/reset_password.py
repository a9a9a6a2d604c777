from __future__ import annotations

import logging
from dataclasses import dataclass

from src.application.errors import AuthError, NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.transactions import atomic
from src.infrastructure.auth.password import PasswordHasher

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ResetPasswordInput:
    token: str
    current_password: str
    password: str
    new_password: str


async def execute(
    *,
    uow: UnitOfWork,
    payload: ResetPasswordInput,
    password_hasher: PasswordHasher,
) -> dict[str, str]:
    if payload.password != payload.new_password:
        raise ValidationError("New password and confirmation do not match")

    async with atomic(uow, "resetting password"):
        reset = await uow.password_resets.get_by_token(payload.token)
        if not reset or not reset.is_valid():
            raise ValidationError("Invalid or expired reset token")

        user = await uow.users.get(reset.user_id)
        if not user or not user.can_sign_in:
            raise NotFound("User not found")
        if not password_hasher.verify(payload.current_password, user.hashed_password):
            raise AuthError("Incorrect current password")

        await uow.users.update_password(user.id, password_hasher.hash(payload.password))
        reset.mark_used()
        await uow.password_resets.update(reset)

    logger.info("Password reset for user: %s", user.id)
    return {"message": "Password reset successfully"}
