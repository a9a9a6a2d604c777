from __future__ import annotations

import logging
from dataclasses import dataclass

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.transactions import atomic
from src.domain.models.password_reset import PasswordReset
from src.infrastructure.email.models import EmailMessage, EmailService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ForgotPasswordInput:
    email: str


async def execute(
    *,
    uow: UnitOfWork,
    payload: ForgotPasswordInput,
    email_service: EmailService,
    reset_url_base: str,
    expires_in_minutes: int = 60,
    from_email: str | None = None,
    from_name: str | None = None,
) -> dict[str, str]:
    async with atomic(uow, "requesting password reset", email=payload.email):
        user = await uow.users.get_by_email(payload.email.lower())
        if not user or not user.can_sign_in:
            raise NotFound("User not found")

        reset = PasswordReset.issue(user.id, expires_in_minutes=expires_in_minutes)
        await uow.password_resets.add(reset)

        reset_url = f"{reset_url_base.rstrip('/')}/reset-password?token={reset.token}"
        # Sent before commit: a delivery failure leaves no dangling token behind
        await email_service.send(
            EmailMessage(
                subject="Password Reset Request",
                to=[user.email],
                text=(
                    f"Click here to reset your password: {reset_url}\n"
                    f"This link expires in {expires_in_minutes} minutes."
                ),
                from_email=from_email,
                from_name=from_name,
            )
        )

    logger.info("Password reset requested for: %s", user.email)
    return {"message": "Password reset email sent"}
