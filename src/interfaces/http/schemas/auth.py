from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, EmailStr


class RegisterRequest(BaseModel):
    # Format is validated by the use case so the error shape matches other rules
    email: str | None = None
    password: str | None = None
    name: str | None = None
    phone: str | None = None
    role_id: int | None = None
    farm_id: UUID | None = None


class RegisterResponse(BaseModel):
    id: UUID
    email: str
    name: str
    role_id: int
    farm_id: UUID | None
    email_verified: bool
    is_active: bool


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class LoginUser(BaseModel):
    id: UUID
    email: str
    name: str
    role_id: int
    farm_id: UUID | None
    permissions: list[str]


class LoginResponse(BaseModel):
    access_token: str
    token_type: str
    user: LoginUser


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str
    current_password: str
    password: str
    new_password: str


class MessageResponse(BaseModel):
    message: str
