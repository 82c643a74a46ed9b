"""
Tests for the co-firing weight modifier.
"""

import math

import numpy as np
import pytest

from hebbian import apply_weight_change, basic_weight_modifier


class TestBasicWeightModifier:

    @pytest.mark.parametrize("m", [0.0, 0.25, 0.5, 1.0])
    def test_equal_measures_give_one(self, m):
        assert basic_weight_modifier(m, m) == pytest.approx(1.0)

    def test_range(self):
        grid = np.linspace(0.0, 1.0, 41)
        for a in grid:
            for b in grid:
                delta = basic_weight_modifier(a, b)
                assert -1.0 < delta <= 1.0 + 1e-12

    def test_symmetric(self):
        assert basic_weight_modifier(0.2, 0.7) == pytest.approx(basic_weight_modifier(0.7, 0.2))

    def test_zero_crossing(self):
        assert basic_weight_modifier(0.3, 0.4) == pytest.approx(0.0, abs=1e-12)
        assert basic_weight_modifier(0.3, 0.35) > 0.0
        assert basic_weight_modifier(0.3, 0.5) < 0.0

    def test_decreases_with_distance(self):
        deltas = [basic_weight_modifier(0.0, x) for x in np.linspace(0.0, 1.0, 21)]
        assert all(a > b for a, b in zip(deltas, deltas[1:]))

    def test_floor(self):
        floor = (math.exp(-15.0) - math.exp(-1.5)) / (1.0 - math.exp(-1.5))
        assert basic_weight_modifier(0.0, 1.0) == pytest.approx(floor)
        assert basic_weight_modifier(0.0, 1.0) == pytest.approx(-0.287, abs=1e-3)


class TestApplyWeightChange:

    def test_adds_delta(self):
        assert apply_weight_change(3.0, 0.5) == pytest.approx(3.5)
        assert apply_weight_change(3.0, -0.25) == pytest.approx(2.75)

    def test_clamps_at_zero(self):
        assert apply_weight_change(0.1, -0.3) == 0.0
        assert apply_weight_change(0.0, -1.0) == 0.0
