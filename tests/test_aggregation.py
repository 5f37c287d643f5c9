"""Tests for engine/aggregation.py — phase totals, percentages, cost per impact.

  total      = Σ phase[i]
  pct[i]     = phase[i] / total × 100        (all 0 when total = 0)
  cpi[i]     = cost_per_area × phase[i] / total
  cpi total  = cost_per_area / total         (0 + has_impact=False when total = 0)
"""

from __future__ import annotations

import pytest

from material_impact.config import LIFECYCLE_PHASES, DisplayParameters
from material_impact.engine.aggregation import (
    cost_per_impact_series,
    display_series,
    dominant_phase,
    phase_contributions,
    phase_series,
    phase_values,
    total_impact,
)
from material_impact.errors import DataIntegrityError, InvalidParameter


class TestTotals:

    def test_rammed_earth_co2e_total(self, rammed_earth):
        assert total_impact(rammed_earth, "CO2e") == pytest.approx(66.0)

    def test_each_category_sums_its_own_vector(self, wall_2x6):
        assert total_impact(wall_2x6, "Water") == pytest.approx(403.0)
        assert total_impact(wall_2x6, "Energy") == pytest.approx(1640.0)

    def test_unknown_category_rejected(self, rammed_earth):
        with pytest.raises(DataIntegrityError, match="unknown impact category"):
            total_impact(rammed_earth, "Noise")

    def test_missing_category_rejected(self, make_record):
        record = make_record().model_copy(update={"phase_impacts": {"CO2e": [1, 1, 1, 1, 1]}})
        with pytest.raises(DataIntegrityError, match="no 'Water' impact data"):
            phase_values(record, "Water")


class TestPhaseSeries:

    def test_absolute_is_raw_values(self, rammed_earth):
        assert phase_series(rammed_earth, "CO2e", "absolute") == [38, 6, 14, 3, 5]

    def test_percentage_sums_to_100(self, samples):
        for record in samples:
            pct = phase_series(record, "CO2e", "percentage")
            assert sum(pct) == pytest.approx(100.0)
            assert all(p >= 0 for p in pct)

    def test_percentage_values(self, rammed_earth):
        pct = phase_series(rammed_earth, "CO2e", "percentage")
        assert pct[0] == pytest.approx(38 / 66 * 100)

    def test_zero_total_gives_zeros(self, zero_impact):
        assert phase_series(zero_impact, "CO2e", "percentage") == [0.0] * 5

    def test_unknown_mode_rejected(self, rammed_earth):
        with pytest.raises(InvalidParameter):
            phase_series(rammed_earth, "CO2e", "log")

    def test_series_length_matches_phase_order(self, drywall):
        assert len(phase_series(drywall, "Energy")) == len(LIFECYCLE_PHASES)


class TestCostPerImpact:

    def test_values_allocate_cost(self, rammed_earth):
        cpi = cost_per_impact_series(rammed_earth, "CO2e")
        assert cpi.has_impact is True
        assert cpi.values[0] == pytest.approx(55 * 38 / 66)
        assert sum(cpi.values) == pytest.approx(55.0)

    def test_aggregate(self, rammed_earth):
        cpi = cost_per_impact_series(rammed_earth, "CO2e")
        assert cpi.total == pytest.approx(55 / 66)

    def test_zero_total_sentinel(self, zero_impact):
        cpi = cost_per_impact_series(zero_impact, "CO2e")
        assert cpi.has_impact is False
        assert cpi.total == 0.0
        assert cpi.values == [0.0] * 5

    def test_zero_cost_is_real_zero(self, make_record):
        record = make_record(cost_per_area=0.0)
        cpi = cost_per_impact_series(record, "CO2e")
        assert cpi.has_impact is True
        assert cpi.total == 0.0


class TestDisplaySeries:

    def test_impact_absolute(self, hempcrete):
        d = DisplayParameters()
        assert display_series(hempcrete, d) == [22, 7, 16, 5, 4]

    def test_cpi_absolute(self, hempcrete):
        d = DisplayParameters(view_mode="cost_per_impact")
        series = display_series(hempcrete, d)
        assert sum(series) == pytest.approx(47.0)

    def test_cpi_percentage_matches_impact_percentage(self, hempcrete):
        cpi_pct = display_series(hempcrete, DisplayParameters(view_mode="cost_per_impact", chart_mode="percentage"))
        impact_pct = display_series(hempcrete, DisplayParameters(chart_mode="percentage"))
        assert cpi_pct == pytest.approx(impact_pct)

    def test_category_switch(self, drywall):
        d = DisplayParameters(impact_category="Water")
        assert display_series(drywall, d) == [145, 12, 28, 6, 16]


class TestContributions:

    def test_labels_and_shares(self, wall_2x6):
        contribs = phase_contributions(wall_2x6, "CO2e")
        assert [c.phase for c in contribs] == list(LIFECYCLE_PHASES)
        assert contribs[0].label == "Point of Origin → Production"
        assert sum(c.share_pct for c in contribs) == pytest.approx(100.0)

    def test_dominant_phase(self, samples):
        for record in samples:
            assert dominant_phase(record, "CO2e") == "PointOfOriginProduction"

    def test_dominant_phase_tie_goes_to_earliest(self, make_record):
        record = make_record(co2e=[1, 5, 5, 0, 0])
        assert dominant_phase(record, "CO2e") == "Transport"

    def test_dominant_phase_none_for_zero_total(self, zero_impact):
        assert dominant_phase(zero_impact, "CO2e") is None
