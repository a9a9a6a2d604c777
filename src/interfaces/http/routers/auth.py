from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status

from src.application.use_cases.auth import (
    forgot_password,
    login_user,
    logout_user,
    register_user,
    reset_password,
)
from src.config.settings import Settings
from src.domain.models.user import User
from src.infrastructure.auth.context import AuthContext
from src.infrastructure.auth.jwt_service import JWTService
from src.infrastructure.auth.password import PasswordHasher
from src.infrastructure.email.models import EmailService
from src.interfaces.http.deps import (
    get_app_settings,
    get_auth_context,
    get_bearer_token,
    get_email_service,
    get_jwt_service,
    get_password_hasher,
    get_uow,
)
from src.interfaces.http.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
)

router = APIRouter(prefix="", tags=["auth"])
logger = logging.getLogger(__name__)


def _to_register_input(payload: RegisterRequest) -> register_user.RegisterUserInput:
    return register_user.RegisterUserInput(
        email=payload.email,
        name=payload.name,
        phone=payload.phone,
        password=payload.password,
        role_id=payload.role_id,
        farm_id=payload.farm_id,
    )


def _to_register_response(user: User) -> RegisterResponse:
    return RegisterResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        role_id=user.role_id,
        farm_id=user.farm_id,
        email_verified=user.email_verified,
        is_active=user.is_active,
    )


@router.post(
    "/auth/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    payload: RegisterRequest,
    uow=Depends(get_uow),
    hasher: PasswordHasher = Depends(get_password_hasher),
    settings: Settings = Depends(get_app_settings),
) -> RegisterResponse:
    user = await register_user.execute(
        uow=uow,
        payload=_to_register_input(payload),
        password_hasher=hasher,
        default_role_id=settings.default_role_id,
    )
    return _to_register_response(user)


@router.post("/users", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: RegisterRequest,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    hasher: PasswordHasher = Depends(get_password_hasher),
    settings: Settings = Depends(get_app_settings),
) -> RegisterResponse:
    user = await register_user.execute(
        uow=uow,
        payload=_to_register_input(payload),
        password_hasher=hasher,
        default_role_id=settings.default_role_id,
        requester_role_id=context.role.id,
    )
    logger.info("User %s created by %s", user.email, context.user_id)
    return _to_register_response(user)


@router.post("/auth/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    uow=Depends(get_uow),
    hasher: PasswordHasher = Depends(get_password_hasher),
    jwt_service: JWTService = Depends(get_jwt_service),
) -> LoginResponse:
    result = await login_user.execute(
        uow=uow,
        payload=login_user.LoginInput(email=payload.email, password=payload.password),
        password_hasher=hasher,
        jwt_service=jwt_service,
    )
    return LoginResponse(
        access_token=result.access_token,
        token_type=result.token_type,
        user=result.user,
    )


@router.post("/auth/forgot-password", response_model=MessageResponse)
async def request_password_reset(
    payload: ForgotPasswordRequest,
    uow=Depends(get_uow),
    email_service: EmailService = Depends(get_email_service),
    settings: Settings = Depends(get_app_settings),
) -> MessageResponse:
    result = await forgot_password.execute(
        uow=uow,
        payload=forgot_password.ForgotPasswordInput(email=payload.email),
        email_service=email_service,
        reset_url_base=settings.base_url,
        expires_in_minutes=settings.password_reset_expires_minutes,
        from_email=settings.email_from_address,
        from_name=settings.email_from_name,
    )
    return MessageResponse(**result)


@router.post("/auth/reset-password", response_model=MessageResponse)
async def confirm_password_reset(
    payload: ResetPasswordRequest,
    uow=Depends(get_uow),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> MessageResponse:
    result = await reset_password.execute(
        uow=uow,
        payload=reset_password.ResetPasswordInput(
            token=payload.token,
            current_password=payload.current_password,
            password=payload.password,
            new_password=payload.new_password,
        ),
        password_hasher=hasher,
    )
    return MessageResponse(**result)


@router.post("/auth/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    uow=Depends(get_uow),
    jwt_service: JWTService = Depends(get_jwt_service),
) -> MessageResponse:
    token = get_bearer_token(request)
    result = await logout_user.execute(uow=uow, token=token, jwt_service=jwt_service)
    return MessageResponse(**result)
