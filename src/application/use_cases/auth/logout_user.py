from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import UUID

from src.application.errors import AuthError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.transactions import atomic
from src.domain.models.revoked_token import RevokedToken
from src.infrastructure.auth.jwt_service import JWTService

logger = logging.getLogger(__name__)


async def execute(*, uow: UnitOfWork, token: str, jwt_service: JWTService) -> dict[str, str]:
    claims = jwt_service.decode(token)
    subject = claims.get("sub")
    try:
        user_id = UUID(str(subject)) if subject else None
    except ValueError as exc:
        raise AuthError("Token subject is not a valid UUID") from exc
    exp = claims.get("exp")
    if exp is None:
        raise AuthError("Token missing expiry")
    expires_at = datetime.fromtimestamp(int(exp), tz=timezone.utc)

    async with atomic(uow, "logging out", user_id=user_id):
        if not await uow.revoked_tokens.is_revoked(token):
            await uow.revoked_tokens.add(RevokedToken.create(token, user_id, expires_at))

    logger.info("User logged out: %s", user_id)
    return {"message": "Logged out successfully"}
