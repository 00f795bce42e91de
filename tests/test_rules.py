from __future__ import annotations

import pytest

from falling_blocks.game import ScoringRules


@pytest.mark.parametrize(
    "score, level",
    [(0, 1), (99, 1), (100, 2), (450, 5), (899, 9), (905, 10), (1500, 10)],
)
def test_level_for_score(score, level):
    assert ScoringRules().level_for_score(score) == level


def test_level_is_non_decreasing():
    rules = ScoringRules()
    levels = [rules.level_for_score(s) for s in range(0, 2000, 7)]
    assert levels == sorted(levels)


def test_step_delay():
    rules = ScoringRules()
    assert rules.step_delay(1) == 10
    assert rules.step_delay(10) == 1
    assert rules.step_delay(3, soft_drop=True) == 1


def test_row_points_default_to_width():
    assert ScoringRules().points_for_row(10) == 10
    assert ScoringRules(row_points=40).points_for_row(10) == 40
