from __future__ import annotations

from typing import Protocol

from src.application.interfaces.repositories.breeding_records import BreedingRecordsRepository
from src.application.interfaces.repositories.farms import FarmsRepository
from src.application.interfaces.repositories.kit_records import KitRecordsRepository
from src.application.interfaces.repositories.password_resets import PasswordResetsRepository
from src.application.interfaces.repositories.rabbits import RabbitsRepository
from src.application.interfaces.repositories.revoked_tokens import RevokedTokensRepository
from src.application.interfaces.repositories.roles import RolesRepository
from src.application.interfaces.repositories.users import UserRepository


class UnitOfWork(Protocol):
    rabbits: RabbitsRepository
    breeding_records: BreedingRecordsRepository
    kit_records: KitRecordsRepository
    users: UserRepository
    roles: RolesRepository
    farms: FarmsRepository
    password_resets: PasswordResetsRepository
    revoked_tokens: RevokedTokensRepository
    # Domain events collected during the transaction
    events: list

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    # Record a domain event during the transaction
    def add_event(self, event: object) -> None: ...

    # Drain collected events (used for post-commit dispatch)
    def drain_events(self) -> list: ...
