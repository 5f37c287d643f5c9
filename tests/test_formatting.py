"""Tests for engine/formatting.py — presentation helpers."""

from __future__ import annotations

import pytest

from material_impact.engine.formatting import (
    ABSENT,
    format_currency,
    format_impact,
    format_optional,
    format_payback,
    qualitative_label,
    round_series,
)
from material_impact.errors import InvalidParameter


class TestImpact:

    def test_kilograms_below_a_tonne(self):
        assert format_impact(66, "kg CO₂e") == ("66.0", "kg CO₂e")

    def test_switches_to_tonnes(self):
        assert format_impact(1250, "kg CO₂e") == ("1.25", "t CO₂e")

    def test_exactly_one_tonne(self):
        assert format_impact(1000, "kg SO₂e") == ("1.00", "t SO₂e")

    def test_non_mass_units_never_convert(self):
        assert format_impact(2500, "MJ") == ("2500.0", "MJ")
        assert format_impact(1500, "L") == ("1500.0", "L")


class TestCurrency:

    def test_thousands_separator(self):
        assert format_currency(1234.5) == "$1,234.50"

    def test_negative(self):
        assert format_currency(-12) == "-$12.00"

    def test_decimals(self):
        assert format_currency(0.77778, decimals=3) == "$0.778"

    def test_optional_none_is_placeholder(self):
        assert format_optional(None) == ABSENT

    def test_optional_zero_is_not_placeholder(self):
        assert format_optional(0.0) == "$0.00"

    def test_optional_custom_formatter(self):
        assert format_optional(3.14159, lambda v: f"{v:.1f}") == "3.1"


class TestPayback:

    @pytest.mark.parametrize("value, expected", [
        (None, ABSENT),
        (-17.5, "Immediate"),
        (0.0, "Immediate"),
        (4.24, "4.2 yrs"),
    ])
    def test_payback_text(self, value, expected):
        assert format_payback(value) == expected


class TestQualitative:

    @pytest.mark.parametrize("value, expected", [
        (85, "High"),
        (70, "High"),
        (55, "Medium"),
        (40, "Medium"),
        (39.9, "Low"),
        (0, "Low"),
    ])
    def test_thresholds(self, value, expected):
        assert qualitative_label(value, 100) == expected

    def test_relative_to_max(self):
        assert qualitative_label(8, 10) == "High"

    def test_non_positive_max_rejected(self):
        with pytest.raises(InvalidParameter):
            qualitative_label(5, 0)


def test_round_series():
    assert round_series([1.23456, 2.0, 57.5757]) == [1.23, 2.0, 57.58]
    assert round_series([1.23456], 3) == [1.235]
