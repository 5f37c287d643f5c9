"""Tests for finance/tco.py — discounted total cost of ownership.

  TCO = capital + Σ_{t=1..H} (maint + energy)/(1+r)^t − salvage/(1+r)^H

Rammed Earth at 30 years / 3 %:
  annuity factor = (1 − 1.03^−30) / 0.03 ≈ 19.6004
  85 + 2.0 × 19.6004 − 5 / 1.03^30 ≈ 122.14
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from material_impact.errors import InvalidParameter
from material_impact.finance.tco import (
    compute_tco_breakdown,
    discount_factors,
    total_cost_of_ownership,
)


class TestTotalCostOfOwnership:

    def test_rammed_earth_reference_value(self, rammed_earth):
        assert total_cost_of_ownership(rammed_earth, 30, 3.0) == pytest.approx(122.14, abs=0.01)

    def test_zero_horizon_is_capital_minus_salvage(self, rammed_earth):
        assert total_cost_of_ownership(rammed_earth, 0, 3.0) == pytest.approx(80.0)

    def test_zero_rate_is_undiscounted(self, wall_2x6):
        # 120 + 4.0 × 10 − 8
        assert total_cost_of_ownership(wall_2x6, 10, 0.0) == pytest.approx(152.0)

    def test_higher_rate_lowers_tco_when_operating_dominates(self, wall_2x6):
        low = total_cost_of_ownership(wall_2x6, 30, 2.0)
        high = total_cost_of_ownership(wall_2x6, 30, 8.0)
        assert high < low

    def test_monotone_in_horizon_without_salvage(self, make_record):
        record = make_record(salvage_value=0.0)
        values = [total_cost_of_ownership(record, h, 5.0) for h in range(0, 40)]
        assert all(b > a for a, b in zip(values, values[1:]))

    def test_negative_rate_is_allowed(self, drywall):
        tco = total_cost_of_ownership(drywall, 10, -2.0)
        assert math.isfinite(tco)
        assert tco > total_cost_of_ownership(drywall, 10, 0.0)

    def test_minus_100_rejected(self, rammed_earth):
        with pytest.raises(InvalidParameter):
            total_cost_of_ownership(rammed_earth, 30, -100.0)

    def test_nan_rate_rejected(self, rammed_earth):
        with pytest.raises(InvalidParameter):
            total_cost_of_ownership(rammed_earth, 30, float("nan"))

    def test_overflowing_rate_rejected(self, rammed_earth):
        with pytest.raises(InvalidParameter):
            total_cost_of_ownership(rammed_earth, 200, -99.999)

    def test_very_high_rate_leaves_capital(self, rammed_earth):
        # Operating annuity collapses to 2/(51 - 1); salvage discounts to zero.
        tco = total_cost_of_ownership(rammed_earth, 200, 5000.0)
        assert tco == pytest.approx(85.0 + 2.0 / 50, abs=0.01)

    def test_negative_horizon_rejected(self, rammed_earth):
        with pytest.raises(InvalidParameter):
            total_cost_of_ownership(rammed_earth, -1, 3.0)

    def test_bool_horizon_rejected(self, rammed_earth):
        with pytest.raises(InvalidParameter):
            total_cost_of_ownership(rammed_earth, True, 3.0)


class TestDiscountFactors:

    def test_shape_and_values(self):
        dfs = discount_factors(10.0, 3)
        assert isinstance(dfs, np.ndarray)
        assert dfs.tolist() == pytest.approx([1 / 1.1, 1 / 1.21, 1 / 1.331])

    def test_empty_for_zero_horizon(self):
        assert discount_factors(3.0, 0).size == 0


class TestBreakdown:

    def test_components_add_up(self, hempcrete):
        b = compute_tco_breakdown(hempcrete, 25, 4.0)
        assert b.total == pytest.approx(
            b.capital_cost + b.pv_maintenance + b.pv_energy - b.pv_salvage
        )
        assert b.total == pytest.approx(total_cost_of_ownership(hempcrete, 25, 4.0))

    def test_yearly_cumulative(self, hempcrete):
        b = compute_tco_breakdown(hempcrete, 5, 0.0)
        assert b.yearly_cumulative == pytest.approx([96.5, 98.0, 99.5, 101.0, 102.5])

    def test_undiscounted_total(self, hempcrete):
        b = compute_tco_breakdown(hempcrete, 20, 5.0)
        assert b.undiscounted_total == pytest.approx(95 + 1.5 * 20 - 6)

    def test_zero_horizon_breakdown(self, drywall):
        b = compute_tco_breakdown(drywall, 0, 3.0)
        assert b.yearly_cumulative == []
        assert b.pv_maintenance == 0.0
        assert b.total == pytest.approx(43.0)

    def test_very_high_rate_breakdown(self, rammed_earth):
        b = compute_tco_breakdown(rammed_earth, 200, 5000.0)
        assert b.pv_salvage == 0.0
        assert b.total == pytest.approx(total_cost_of_ownership(rammed_earth, 200, 5000.0))
        assert len(b.yearly_cumulative) == 200

    def test_invalid_rate_propagates(self, drywall):
        with pytest.raises(InvalidParameter):
            compute_tco_breakdown(drywall, 10, -100.0)
