"""Tests for finance/sensitivity.py — TCO tornado sweeps and rate curve."""

from __future__ import annotations

import logging

import pytest

from material_impact.finance.sensitivity import (
    DEFAULT_SWEEPS,
    run_tco_sensitivity,
    tco_rate_curve,
)
from material_impact.finance.tco import total_cost_of_ownership


class TestTornado:

    def test_default_sweeps_produce_all_bars(self, wall_2x6):
        res = run_tco_sensitivity(wall_2x6, 30, 3.0)
        assert res.material_name == "2x6 Wall"
        assert len(res.bars) == len(DEFAULT_SWEEPS)
        assert res.base_tco == pytest.approx(total_cost_of_ownership(wall_2x6, 30, 3.0), abs=1e-4)

    def test_sorted_by_swing(self, wall_2x6):
        deltas = [b.delta_tco for b in run_tco_sensitivity(wall_2x6, 30, 3.0).bars]
        assert deltas == sorted(deltas, reverse=True)

    def test_capital_swing_is_linear(self, wall_2x6):
        bars = {b.param_path: b for b in run_tco_sensitivity(wall_2x6, 30, 3.0).bars}
        capital = bars["capital_cost"]
        # ±15 % of $120 moves TCO one-for-one.
        assert capital.delta_tco == pytest.approx(36.0, abs=1e-3)
        assert capital.low_value == pytest.approx(102.0)
        assert capital.high_value == pytest.approx(138.0)

    def test_higher_rate_gives_lower_tco(self, wall_2x6):
        bars = {b.param_path: b for b in run_tco_sensitivity(wall_2x6, 30, 3.0).bars}
        rate = bars["discount_rate_pct"]
        assert rate.low_value == pytest.approx(1.5)
        assert rate.tco_at_high < rate.tco_at_low

    def test_zero_cost_field_has_no_swing(self, make_record):
        record = make_record(annual_energy_cost=0.0)
        bars = {b.param_path: b for b in run_tco_sensitivity(record, 20, 3.0).bars}
        assert bars["annual_energy_cost"].delta_tco == 0.0

    def test_custom_sweeps_and_unknown_paths(self, rammed_earth, caplog):
        sweeps = [
            ("Capital", "capital_cost", -0.5, 0.5),
            ("Bogus", "not_a_field", -0.1, 0.1),
            ("Name", "name", -0.1, 0.1),
        ]
        with caplog.at_level(logging.WARNING, logger="material_impact.finance.sensitivity"):
            res = run_tco_sensitivity(rammed_earth, 10, 3.0, sweeps=sweeps)
        assert [b.param_path for b in res.bars] == ["capital_cost"]
        assert "not_a_field" in caplog.text
        assert "not numeric" in caplog.text

    def test_record_is_not_mutated(self, hempcrete):
        before = hempcrete.model_dump()
        run_tco_sensitivity(hempcrete, 30, 3.0)
        assert hempcrete.model_dump() == before


class TestRateCurve:

    def test_default_grid(self, drywall):
        curve = tco_rate_curve(drywall, 25)
        assert len(curve) == 21
        assert curve[0][0] == 0.0
        assert curve[-1][0] == pytest.approx(10.0)

    def test_custom_grid_matches_point_values(self, drywall):
        curve = tco_rate_curve(drywall, 25, [1.0, 5.0])
        assert curve[1][1] == pytest.approx(total_cost_of_ownership(drywall, 25, 5.0))

    def test_tco_falls_as_rate_rises(self, drywall):
        tcos = [tco for _, tco in tco_rate_curve(drywall, 25)]
        assert all(b < a for a, b in zip(tcos, tcos[1:]))
