from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

MIN_LITTER_SIZE = 5
MAX_LITTER_SIZE = 10
LITTER_HISTORY_SIZE = 3


class CullingReason(str, Enum):
    LOW_LITTER_HISTORY = "low_litter_history"
    LITTER_SIZE_OUT_OF_RANGE = "litter_size_out_of_range"


@dataclass(frozen=True, slots=True)
class CullingRecommendation:
    doe_id: str
    reason: CullingReason
    number_of_kits: int
    recent_litters: tuple[int, ...] = ()


def evaluate_culling(
    doe_id: str,
    number_of_kits: int,
    recent_litter_sizes: Sequence[int | None],
) -> CullingRecommendation | None:
    """Decide whether a doe should be recommended for culling after a birth.

    ``recent_litter_sizes`` are the doe's latest recorded litters, newest first, as
    stored before the birth being recorded. Empty or zero counts are ignored. A poor
    history takes precedence over the size of the new litter.
    """
    litters = tuple(n for n in (size or 0 for size in recent_litter_sizes) if n > 0)
    if len(litters) >= LITTER_HISTORY_SIZE and all(n < MIN_LITTER_SIZE for n in litters):
        return CullingRecommendation(
            doe_id=doe_id,
            reason=CullingReason.LOW_LITTER_HISTORY,
            number_of_kits=number_of_kits,
            recent_litters=litters,
        )
    if number_of_kits < MIN_LITTER_SIZE or number_of_kits > MAX_LITTER_SIZE:
        return CullingRecommendation(
            doe_id=doe_id,
            reason=CullingReason.LITTER_SIZE_OUT_OF_RANGE,
            number_of_kits=number_of_kits,
            recent_litters=litters,
        )
    return None
