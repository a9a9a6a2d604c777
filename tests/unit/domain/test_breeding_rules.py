from __future__ import annotations

from datetime import date

from src.domain.value_objects.breeding_calendar import (
    alert_date_for,
    buck_rest_window_start,
    earliest_remating_date,
    weaning_date_for,
)
from src.domain.value_objects.culling import CullingReason, evaluate_culling
from src.utils.optional_merge import merge_optional


def test_calendar_offsets():
    assert alert_date_for(date(2024, 1, 1)) == date(2024, 1, 22)
    assert weaning_date_for(date(2024, 1, 30)) == date(2024, 3, 12)
    assert earliest_remating_date(date(2024, 1, 30)) == date(2024, 3, 19)
    assert buck_rest_window_start(date(2024, 1, 2)) == date(2023, 12, 30)


def test_normal_litter_is_not_flagged():
    assert evaluate_culling("D1", 6, [8, 7]) is None
    assert evaluate_culling("D1", 5, []) is None
    assert evaluate_culling("D1", 10, [4, 4]) is None


def test_three_small_litters_flag_regardless_of_new_litter():
    result = evaluate_culling("D1", 8, [4, 3, 2])
    assert result is not None
    assert result.reason is CullingReason.LOW_LITTER_HISTORY
    assert result.recent_litters == (4, 3, 2)


def test_one_good_litter_in_history_falls_back_to_size_check():
    assert evaluate_culling("D1", 7, [4, 6, 3]) is None
    result = evaluate_culling("D1", 4, [4, 6, 3])
    assert result.reason is CullingReason.LITTER_SIZE_OUT_OF_RANGE


def test_empty_and_zero_counts_are_ignored_in_history():
    assert evaluate_culling("D1", 6, [4, None, 0, 4]) is None


def test_litter_size_bounds():
    assert evaluate_culling("D1", 4, []).reason is CullingReason.LITTER_SIZE_OUT_OF_RANGE
    assert evaluate_culling("D1", 11, []).reason is CullingReason.LITTER_SIZE_OUT_OF_RANGE


def test_merge_optional_treats_falsy_as_absent():
    assert merge_optional("new", "old") == "new"
    assert merge_optional(None, "old") == "old"
    assert merge_optional("", "old") == "old"
    assert merge_optional(0, 6) == 6
    assert merge_optional(3, None) == 3
