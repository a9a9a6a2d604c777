from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from src.application.errors import AppError, InfrastructureError
from src.application.interfaces.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


def _format_context(context: dict[str, Any]) -> str:
    return " ".join(f"{key}={value}" for key, value in context.items() if value is not None)


@asynccontextmanager
async def atomic(
    uow: UnitOfWork,
    action: str,
    *,
    fallback_message: str | None = None,
    **context: Any,
) -> AsyncIterator[UnitOfWork]:
    """Run the body as one transaction and commit it.

    Any failure rolls the transaction back first. Application errors are re-raised
    unchanged; anything else is logged with its traceback and surfaced as a generic
    ``InfrastructureError``. Pending domain events are dropped on failure.
    """
    try:
        yield uow
        await uow.commit()
    except AppError as exc:
        await uow.rollback()
        uow.drain_events()
        logger.warning("%s failed: %s %s", action, exc.message, _format_context(context))
        raise
    except Exception as exc:
        await uow.rollback()
        uow.drain_events()
        logger.exception("Unexpected error while %s %s", action, _format_context(context))
        raise InfrastructureError(fallback_message or f"Unexpected error while {action}") from exc
