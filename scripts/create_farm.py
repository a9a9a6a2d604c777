#!/usr/bin/env python3
"""
Create a farm and its admin user.

This script:
1. Seeds the default roles if they are missing
2. Creates the farm
3. Registers an Admin user bound to that farm
4. Prints a generated password when none is given

Usage:
  python scripts/create_farm.py --name "North Barn" --email admin@example.com [--password ...]
"""

import argparse
import asyncio
import secrets
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.application.errors import AppError
from src.application.transactions import atomic
from src.application.use_cases.auth import register_user
from src.config.settings import get_settings
from src.domain.models.farm import Farm
from src.domain.value_objects.role import RoleName
from src.infrastructure.auth.password import PasswordHasher
from src.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)


async def create_farm_with_admin(
    name: str, email: str, phone: str, password: str | None, location: str | None
) -> None:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    password_hasher = PasswordHasher(schemes=settings.password_schemes_list)
    generated = password is None
    password = password or secrets.token_urlsafe(16)

    try:
        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            async with atomic(uow, "creating farm", name=name):
                await uow.roles.ensure_defaults()
                farm = await uow.farms.add(Farm.create(name, location=location))
                admin_role = await uow.roles.get_by_name(RoleName.ADMIN.value)
                root_role = await uow.roles.get_by_name(RoleName.SUPER_ADMIN.value)

        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            user = await register_user.execute(
                uow=uow,
                payload=register_user.RegisterUserInput(
                    email=email,
                    name=f"{name} admin",
                    phone=phone,
                    password=password,
                    role_id=admin_role.id,
                    farm_id=farm.id,
                    email_verified=True,
                ),
                password_hasher=password_hasher,
                default_role_id=settings.default_role_id,
                requester_role_id=root_role.id,
            )
    except AppError as exc:
        print(f"Error creating farm: {exc.message}")
        sys.exit(1)
    finally:
        await engine.dispose()

    print("Farm created successfully")
    print(f"   Farm ID: {farm.id}")
    print(f"   Admin user ID: {user.id}")
    print(f"   Email: {user.email}")
    if generated:
        print(f"   Generated password: {password}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create a farm with an admin user")
    parser.add_argument("--name", required=True, help="Farm name")
    parser.add_argument("--email", required=True, help="Email of the farm admin")
    parser.add_argument("--phone", default="000000000", help="Phone of the farm admin")
    parser.add_argument("--password", help="Admin password (generated when omitted)")
    parser.add_argument("--location", help="Farm location")
    args = parser.parse_args()

    asyncio.run(
        create_farm_with_admin(args.name, args.email, args.phone, args.password, args.location)
    )
