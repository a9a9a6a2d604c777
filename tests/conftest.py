from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator, Callable
from pathlib import Path
from typing import cast
from uuid import UUID, uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from src.config.settings import Settings
from src.domain.models.rabbit import Rabbit
from src.domain.value_objects.role import RoleName
from src.infrastructure.auth.password import PasswordHasher
from src.infrastructure.db.base import Base
from src.infrastructure.db.orm import (  # noqa: F401
    breeding_record,
    kit_record,
    password_reset,
    revoked_token,
)
from src.infrastructure.db.orm.farm import FarmORM
from src.infrastructure.db.orm.user import UserORM
from src.infrastructure.email.models import EmailMessage
from src.infrastructure.email.providers.logging_provider import LoggingEmailService
from src.infrastructure.repos.rabbits_sqlalchemy import RabbitsSQLAlchemyRepository
from src.infrastructure.repos.roles_sqlalchemy import RolesSQLAlchemyRepository
from src.interfaces.http.main import create_app

PASSWORD = "secret-pass"


class CapturingEmailService(LoggingEmailService):
    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []

    async def send(self, message: EmailMessage) -> None:
        self.sent.append(message)
        await super().send(message)


@pytest.fixture()
def farm_id() -> UUID:
    return uuid4()


@pytest.fixture()
def other_farm_id() -> UUID:
    return uuid4()


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "jwt_secret_key": "integration-secret",
            "farm_header": "X-Farm-ID",
            "log_level": "INFO",
            "environment": "test",
            "breeding_alert_recipients": "vet@example.com",
            "base_url": "https://farm.example.com",
        }
    )


@pytest.fixture()
def password_hasher() -> PasswordHasher:
    return PasswordHasher(schemes=("pbkdf2_sha256",))


@pytest.fixture()
def email_service() -> CapturingEmailService:
    return CapturingEmailService()


@pytest.fixture()
def app(test_settings: Settings, password_hasher: PasswordHasher, email_service):
    return create_app(
        settings=test_settings, password_hasher=password_hasher, email_service=email_service
    )


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    engine = app.state.engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client
    await engine.dispose()


@pytest.fixture()
async def seeded(
    app, client, farm_id: UUID, other_farm_id: UUID, password_hasher: PasswordHasher
) -> dict[str, UUID]:
    users = {"admin": uuid4(), "viewer": uuid4(), "outsider": uuid4()}
    async with app.state.session_factory() as session:  # type: ignore[attr-defined]
        async_session = cast(AsyncSession, session)
        roles = RolesSQLAlchemyRepository(async_session)
        await roles.ensure_defaults()
        admin_role = await roles.get_by_name(RoleName.ADMIN.value)
        user_role = await roles.get_by_name(RoleName.USER.value)
        async_session.add_all(
            [
                FarmORM(id=farm_id, name="North Barn"),
                FarmORM(id=other_farm_id, name="South Barn"),
            ]
        )
        await async_session.flush()
        hashed = password_hasher.hash(PASSWORD)
        async_session.add_all(
            [
                UserORM(
                    id=users["admin"],
                    email="admin@example.com",
                    hashed_password=hashed,
                    name="Admin",
                    phone="555-0001",
                    role_id=admin_role.id,
                    farm_id=farm_id,
                ),
                UserORM(
                    id=users["viewer"],
                    email="viewer@example.com",
                    hashed_password=hashed,
                    name="Viewer",
                    phone="555-0002",
                    role_id=user_role.id,
                    farm_id=farm_id,
                ),
                UserORM(
                    id=users["outsider"],
                    email="outsider@example.com",
                    hashed_password=hashed,
                    name="Outsider",
                    phone="555-0003",
                    role_id=user_role.id,
                    farm_id=other_farm_id,
                ),
            ]
        )
        rabbits = RabbitsSQLAlchemyRepository(async_session)
        herd = (("D1", "female"), ("D2", "female"), ("B1", "male"), ("B2", "male"))
        for rabbit_id, gender in herd:
            await rabbits.add(Rabbit.create(farm_id, rabbit_id, gender))
        await async_session.commit()
    return users


@pytest.fixture()
def auth_headers(app, seeded, farm_id: UUID) -> Callable[..., dict[str, str]]:
    def build(user: str = "admin", farm: UUID | None = None) -> dict[str, str]:
        token = app.state.jwt_service.create_access_token(subject=seeded[user])
        return {"Authorization": f"Bearer {token}", "X-Farm-ID": str(farm or farm_id)}

    return build
