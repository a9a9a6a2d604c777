from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence


@dataclass(slots=True)
class EmailMessage:
    subject: str
    to: Sequence[str]
    text: str | None = None
    html: str | None = None
    from_email: str | None = None
    from_name: str | None = None
    # Free-form label for log correlation, e.g. "password_reset" or "culling_alert"
    category: str | None = None


class EmailService(Protocol):
    async def send(self, message: EmailMessage) -> None: ...
