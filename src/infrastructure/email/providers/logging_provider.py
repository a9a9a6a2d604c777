from __future__ import annotations

import logging

from src.infrastructure.email.models import EmailMessage, EmailService

logger = logging.getLogger(__name__)


class LoggingEmailService(EmailService):
    """Writes outgoing mail to the log instead of delivering it."""

    async def send(self, message: EmailMessage) -> None:
        logger.info(
            "Sending email (logging provider): category=%s subject=%s to=%s from=%s <%s> "
            "text_len=%s",
            message.category or "-",
            message.subject,
            ",".join(message.to),
            message.from_name or "",
            message.from_email or "",
            len(message.text or ""),
        )
