from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are always UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass(slots=True)
class PasswordReset:
    """Single-use password reset token with a hard expiry."""

    id: UUID
    user_id: UUID
    token: str
    expires_at: datetime
    used: bool = False
    is_deleted: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def issue(cls, user_id: UUID, *, expires_in_minutes: int = 60) -> PasswordReset:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            user_id=user_id,
            token=str(uuid4()),
            expires_at=now + timedelta(minutes=expires_in_minutes),
            created_at=now,
            updated_at=now,
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return _aware(self.expires_at) <= now

    def is_valid(self, now: datetime | None = None) -> bool:
        return not self.used and not self.is_deleted and not self.is_expired(now)

    def mark_used(self) -> None:
        self.used = True
        self.updated_at = datetime.now(timezone.utc)
