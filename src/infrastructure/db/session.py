from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.application.interfaces.unit_of_work import UnitOfWork

_REPOSITORY_ATTRS = (
    "rabbits",
    "breeding_records",
    "kit_records",
    "users",
    "roles",
    "farms",
    "password_resets",
    "revoked_tokens",
)


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True, pool_pre_ping=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    """One pooled connection and one transaction per request.

    The session begins its transaction lazily on first use; ``commit`` or
    ``rollback`` ends it, and leaving the context always returns the connection
    to the pool.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self.events: list = []
        self._clear_repositories()

    def _clear_repositories(self) -> None:
        for attr in _REPOSITORY_ATTRS:
            setattr(self, attr, None)

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from src.infrastructure.repos.breeding_records_sqlalchemy import (
            BreedingRecordsSQLAlchemyRepository,
        )
        from src.infrastructure.repos.farms_sqlalchemy import FarmsSQLAlchemyRepository
        from src.infrastructure.repos.kit_records_sqlalchemy import KitRecordsSQLAlchemyRepository
        from src.infrastructure.repos.password_resets_sqlalchemy import (
            PasswordResetsSQLAlchemyRepository,
        )
        from src.infrastructure.repos.rabbits_sqlalchemy import RabbitsSQLAlchemyRepository
        from src.infrastructure.repos.revoked_tokens_sqlalchemy import (
            RevokedTokensSQLAlchemyRepository,
        )
        from src.infrastructure.repos.roles_sqlalchemy import RolesSQLAlchemyRepository
        from src.infrastructure.repos.users_sqlalchemy import UsersSQLAlchemyRepository

        self.rabbits = RabbitsSQLAlchemyRepository(self.session)
        self.breeding_records = BreedingRecordsSQLAlchemyRepository(self.session)
        self.kit_records = KitRecordsSQLAlchemyRepository(self.session)
        self.users = UsersSQLAlchemyRepository(self.session)
        self.roles = RolesSQLAlchemyRepository(self.session)
        self.farms = FarmsSQLAlchemyRepository(self.session)
        self.password_resets = PasswordResetsSQLAlchemyRepository(self.session)
        self.revoked_tokens = RevokedTokensSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self._clear_repositories()

    async def commit(self) -> None:
        if not self.session:
            return
        await self.session.commit()

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()

    def add_event(self, event: object) -> None:
        self.events.append(event)

    def drain_events(self) -> list:
        events, self.events = self.events, []
        return events
