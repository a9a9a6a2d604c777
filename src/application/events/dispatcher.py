from __future__ import annotations

import logging
from typing import Iterable, Sequence

from src.application.events.models import DoeCullingRecommendedEvent
from src.infrastructure.email.models import EmailMessage, EmailService

logger = logging.getLogger(__name__)

_REASON_TEXT = {
    "low_litter_history": "three consecutive litters below five kits",
    "litter_size_out_of_range": "litter size outside the 5-10 kit range",
}


async def dispatch_events(
    events: Iterable[object],
    *,
    email_service: EmailService,
    alert_recipients: Sequence[str],
    from_email: str | None = None,
    from_name: str | None = None,
) -> None:
    """
    Dispatch events post-commit. Failures are logged per event and never raised,
    so this is safe to run in a background task after the response is sent.
    """
    for event in events:
        try:
            if isinstance(event, DoeCullingRecommendedEvent):
                await _handle_culling_recommended(
                    event, email_service, alert_recipients, from_email, from_name
                )
            else:
                logger.debug("No handler for event %s", type(event).__name__)
        except Exception as e:
            logger.error("Error dispatching event %s: %s", type(event).__name__, e, exc_info=True)


async def _handle_culling_recommended(
    event: DoeCullingRecommendedEvent,
    email_service: EmailService,
    alert_recipients: Sequence[str],
    from_email: str | None,
    from_name: str | None,
) -> None:
    reason = _REASON_TEXT.get(event.reason, event.reason)
    logger.info(
        "Culling alert for doe %s on farm %s (%s)", event.doe_id, event.farm_id, event.reason
    )
    if not alert_recipients:
        return
    born = f" born {event.birth_date.isoformat()}" if event.birth_date else ""
    litters = ", ".join(str(n) for n in event.recent_litters) or "none recorded"
    await email_service.send(
        EmailMessage(
            subject=f"Culling recommended for doe {event.doe_id}",
            to=list(alert_recipients),
            text=(
                f"Doe {event.doe_id} is recommended for culling: {reason}.\n"
                f"Latest litter: {event.number_of_kits} kits{born}.\n"
                f"Previous litters: {litters}.\n"
                f"Breeding record: {event.breeding_record_id}"
            ),
            from_email=from_email,
            from_name=from_name,
            category="culling_alert",
        )
    )
