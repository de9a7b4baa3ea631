"""Tests for warm-up ladder generation."""
import math

import pytest

from analytics.warmups import (
    WARMUP_STRATEGIES,
    ascending_below,
    clamp_offset,
    fixed_step,
    generate_warmup_ladder,
    progressive_ramp,
)
from utils.progression_schema import BAR_KG, WarmupSet, WarmupStrategy


def _pairs(ladder):
    return [(w.reps, w.weight) for w in ladder]


class TestClampOffset:

    @pytest.mark.parametrize(
        "raw,expected",
        [(2, 5.0), (5, 5.0), (7.5, 7.5), (10, 10.0), (20, 10.0), (-3, 5.0)],
    )
    def test_within_bounds(self, raw, expected):
        assert clamp_offset(raw) == expected

    @pytest.mark.parametrize("raw", [None, math.nan, "", "heavy"])
    def test_non_numeric_uses_default(self, raw):
        assert clamp_offset(raw) == 7.5


class TestProgressiveRamp:

    def test_standard_day(self):
        ladder = generate_warmup_ladder(97.5, 4, False, 7.5)
        assert _pairs(ladder) == [(6, 60.0), (4, 80.0), (2, 90.0)]

    def test_last_warmup_is_offset_under_working_set_at_half_reps(self):
        ladder = generate_warmup_ladder(97.5, 4, False, 7.5)
        assert ladder[-1].weight == 90.0
        assert ladder[-1].reps == 2

    def test_heavy_day_adds_single_before_last(self):
        ladder = generate_warmup_ladder(97.5, 4, True, 7.5)
        assert _pairs(ladder) == [(6, 60.0), (4, 80.0), (1, 82.5), (2, 90.0)]

    def test_light_working_weight_starts_at_bar(self):
        ladder = generate_warmup_ladder(40.0, 5, False, 7.5)
        assert _pairs(ladder) == [(7, 20.0), (4, 27.5), (2, 32.5)]

    def test_heavy_single_colliding_with_last_warmup_is_dropped(self):
        ladder = generate_warmup_ladder(40.0, 5, True, 7.5)
        assert _pairs(ladder) == [(7, 20.0), (4, 27.5), (1, 32.5)]

    def test_barely_above_bar_keeps_one_set(self):
        ladder = generate_warmup_ladder(25.0, 3, False, 7.5)
        assert _pairs(ladder) == [(6, 20.0)]

    def test_bar_weight_needs_no_warmup(self):
        assert generate_warmup_ladder(20.0, 5, False, 7.5) == []

    def test_offset_is_clamped(self):
        assert generate_warmup_ladder(100.0, 5, False, 2) == generate_warmup_ladder(100.0, 5, False, 5)
        assert generate_warmup_ladder(97.5, 4, False, 20)[-1].weight == 87.5

    def test_rep_counts(self):
        candidates = progressive_ramp(150.0, 8, False, 7.5)
        assert [c.reps for c in candidates] == [8, 6, 4]

    def test_single_rep_working_set(self):
        ladder = generate_warmup_ladder(180.0, 1, False, 10)
        assert ladder[-1].reps == 1
        assert ladder[0].reps == 6


class TestFixedStep:

    def test_standard_day(self):
        ladder = generate_warmup_ladder(97.5, 4, False, 7.5, WarmupStrategy.FIXED_STEP)
        assert _pairs(ladder) == [(5, 80.0), (3, 85.0), (2, 90.0)]

    def test_heavy_day(self):
        ladder = generate_warmup_ladder(97.5, 4, True, 7.5, "fixed_step")
        assert _pairs(ladder) == [(5, 75.0), (3, 80.0), (1, 85.0), (2, 90.0)]

    def test_candidates_stop_at_bar(self):
        candidates = fixed_step(30.0, 5, False, 7.5)
        assert _pairs(candidates) == [(5, 20.0), (3, 20.0), (2, 22.5)]

    def test_duplicate_bar_sets_filtered(self):
        ladder = generate_warmup_ladder(30.0, 5, False, 7.5, WarmupStrategy.FIXED_STEP)
        assert _pairs(ladder) == [(5, 20.0), (2, 22.5)]


class TestGenerateWarmupLadder:

    @pytest.mark.parametrize(
        "weight,reps",
        [(0, 5), (97.5, 0), (None, 5), (97.5, None), (math.nan, 5), (0.0, 0)],
    )
    def test_missing_working_set_gives_empty_ladder(self, weight, reps):
        assert generate_warmup_ladder(weight, reps, False, 7.5) == []

    def test_unknown_strategy_falls_back_to_progressive(self):
        assert generate_warmup_ladder(97.5, 4, False, 7.5, "zigzag") == generate_warmup_ladder(97.5, 4, False, 7.5)

    def test_every_strategy_registered(self):
        assert set(WARMUP_STRATEGIES) == set(WarmupStrategy)

    def test_ascending_below_filter(self):
        candidates = [
            WarmupSet(5, 40.0),
            WarmupSet(5, 40.0),
            WarmupSet(3, 35.0),
            WarmupSet(3, 60.0),
            WarmupSet(1, 100.0),
        ]
        assert _pairs(ascending_below(candidates, 100.0)) == [(5, 40.0), (3, 60.0)]

    @pytest.mark.parametrize("strategy", list(WarmupStrategy))
    @pytest.mark.parametrize("heavy", [False, True])
    @pytest.mark.parametrize("offset", [2, 5, 7.5, 10, 20])
    def test_ladder_invariants(self, strategy, heavy, offset):
        for i in range(0, 93):
            first_weight = 20.0 + 2.5 * i
            for first_reps in range(1, 13):
                ladder = generate_warmup_ladder(first_weight, first_reps, heavy, offset, strategy)
                weights = [w.weight for w in ladder]
                assert all(w >= BAR_KG for w in weights)
                assert all(a < b for a, b in zip(weights, weights[1:]))
                assert all(w < first_weight for w in weights)
                assert all(w.reps >= 1 for w in ladder)
