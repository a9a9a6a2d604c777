from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from uuid import UUID

from src.application.errors import PermissionDenied, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.transactions import atomic
from src.domain.models.user import User
from src.infrastructure.auth.password import PasswordHasher

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(slots=True)
class RegisterUserInput:
    email: str | None
    name: str | None
    phone: str | None
    password: str | None = None
    role_id: int | None = None
    farm_id: UUID | None = None
    email_verified: bool = False
    is_active: bool = True


async def execute(
    *,
    uow: UnitOfWork,
    payload: RegisterUserInput,
    password_hasher: PasswordHasher,
    default_role_id: int,
    requester_role_id: int | None = None,
) -> User:
    async with atomic(
        uow,
        "registering user",
        fallback_message="An unexpected error occurred during registration",
        email=payload.email,
    ):
        seeded = await uow.roles.ensure_defaults()
        if seeded:
            logger.info("Inserted %d default roles", seeded)

        if not payload.email or not payload.name or not payload.phone:
            raise ValidationError("Email, name, and phone are required fields")
        if not EMAIL_PATTERN.match(payload.email):
            raise ValidationError("Invalid email format")

        role_id = payload.role_id or default_role_id
        role = await uow.roles.get(role_id)
        if not role or not role.is_usable:
            raise ValidationError(f"Invalid or inactive role with ID {role_id}")

        if requester_role_id:
            requester_role = await uow.roles.get(requester_role_id)
            if not requester_role or not requester_role.is_usable:
                raise PermissionDenied("Invalid current user role")
            if not requester_role.can_assign(role):
                raise PermissionDenied("Insufficient permissions to assign this role")
        elif role.id != default_role_id:
            raise PermissionDenied("Insufficient permissions to assign this role")

        if payload.farm_id:
            farm = await uow.farms.get(payload.farm_id)
            if not farm or not farm.is_usable:
                raise ValidationError("Invalid or inactive farm specified")

        if await uow.users.get_by_email(payload.email):
            raise ValidationError("Email is already registered")
        if not payload.password:
            raise ValidationError("Password is required for registration")

        user = User.create(
            email=payload.email,
            hashed_password=password_hasher.hash(payload.password),
            name=payload.name,
            phone=payload.phone,
            role_id=role.id,
            farm_id=payload.farm_id,
            email_verified=payload.email_verified,
            is_active=payload.is_active,
        )
        created = await uow.users.add(user)

    logger.info("User registered successfully: %s with role_id %s", created.email, created.role_id)
    return created
