from __future__ import annotations

import logging
from typing import Iterable
from uuid import UUID

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from src.application.errors import AuthError, PermissionDenied
from src.config.settings import Settings
from src.infrastructure.auth.context import (
    AuthContext,
    fetch_role,
    fetch_user,
    is_token_revoked,
    select_active_farm,
)
from src.interfaces.http.deps import get_bearer_token

logger = logging.getLogger(__name__)

PUBLIC_PATHS: Iterable[str] = (
    "/api/v1/health",
    "/api/v1/auth/register",
    "/api/v1/auth/login",
    "/api/v1/auth/forgot-password",
    "/api/v1/auth/reset-password",
    # logout reads the bearer token itself and needs no farm header
    "/api/v1/auth/logout",
    "/docs",
    "/openapi.json",
    "/redoc",
)


class AuthMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, *, settings: Settings) -> None:
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next) -> Response:
        # Let CORS preflight pass without auth checks
        if request.method == "OPTIONS":
            return await call_next(request)
        if any(request.url.path.startswith(path) for path in PUBLIC_PATHS):
            return await call_next(request)

        try:
            token = get_bearer_token(request)
            farm_value = request.headers.get(self.settings.farm_header)
            if not farm_value:
                raise PermissionDenied("Missing farm header")
            try:
                farm_id = UUID(farm_value)
            except ValueError as exc:
                raise PermissionDenied("Invalid farm identifier") from exc
            jwt_service = getattr(request.app.state, "jwt_service", None)
            if jwt_service is None:
                raise RuntimeError("JWT service not configured")
            claims = jwt_service.decode(token)

            subject = claims.get("sub")
            if not subject:
                raise AuthError("Token missing subject")
            try:
                user_id = UUID(str(subject))
            except ValueError as exc:
                raise AuthError("Token subject is not a valid UUID") from exc
            session_factory = getattr(request.app.state, "session_factory", None)
            if session_factory is None:
                raise RuntimeError("Session factory not configured")
            async with session_factory() as session:
                if await is_token_revoked(session, token):
                    raise AuthError("Token has been revoked")
                user = await fetch_user(session, user_id)
                if not user or not user.can_sign_in:
                    raise AuthError("Inactive or missing user")
                role = await fetch_role(session, user.role_id)
                if not role or not role.is_usable:
                    raise AuthError("User role is inactive")
            active_farm = select_active_farm(user, role, farm_id)
            request.state.auth_context = AuthContext(
                user_id=user_id,
                email=user.email,
                farm_id=active_farm,
                role=role,
                claims=claims,
            )
            return await call_next(request)
        except (AuthError, PermissionDenied) as exc:
            logger.info("Rejected request to %s: %s", request.url.path, exc.message)
            payload = {"code": exc.code, "message": exc.message}
            if exc.details is not None:
                payload["details"] = exc.details
            return JSONResponse(status_code=exc.status_code, content=payload)
