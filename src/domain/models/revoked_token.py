from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass(slots=True)
class RevokedToken:
    id: UUID
    token: str
    user_id: UUID | None
    expires_at: datetime
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, token: str, user_id: UUID | None, expires_at: datetime) -> RevokedToken:
        return cls(id=uuid4(), token=token, user_id=user_id, expires_at=expires_at)
