from __future__ import annotations

from datetime import date, timedelta

PREGNANCY_ALERT_DAYS = 21
WEANING_DAYS = 42
POST_WEANING_REST_DAYS = 7
BUCK_REST_DAYS = 3


def alert_date_for(mating_date: date) -> date:
    """Pregnancy-confirmation reminder date for a mating."""
    return mating_date + timedelta(days=PREGNANCY_ALERT_DAYS)


def weaning_date_for(birth_date: date) -> date:
    return birth_date + timedelta(days=WEANING_DAYS)


def earliest_remating_date(last_birth_date: date) -> date:
    """First day a doe may be served again after her last litter is weaned."""
    return weaning_date_for(last_birth_date) + timedelta(days=POST_WEANING_REST_DAYS)


def buck_rest_window_start(mating_date: date) -> date:
    # Only the lower bound applies: any mating on or after this day blocks the buck,
    # including records dated after ``mating_date``.
    return mating_date - timedelta(days=BUCK_REST_DAYS)
