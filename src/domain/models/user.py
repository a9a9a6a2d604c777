from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass(slots=True)
class User:
    id: UUID
    email: str
    hashed_password: str
    name: str
    phone: str
    role_id: int
    farm_id: UUID | None = None
    email_verified: bool = False
    is_active: bool = True
    is_deleted: bool = False
    login_count: int = 0
    last_login: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        email: str,
        hashed_password: str,
        name: str,
        phone: str,
        role_id: int,
        *,
        farm_id: UUID | None = None,
        email_verified: bool = False,
        is_active: bool = True,
    ) -> User:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            email=email.lower(),
            hashed_password=hashed_password,
            name=name,
            phone=phone,
            role_id=role_id,
            farm_id=farm_id,
            email_verified=email_verified,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )

    @property
    def can_sign_in(self) -> bool:
        return self.is_active and not self.is_deleted

    def record_login(self) -> None:
        now = datetime.now(timezone.utc)
        self.login_count += 1
        self.last_login = now
        self.updated_at = now
