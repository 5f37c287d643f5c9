"""Tests for api/export.py — DataFrame and CSV export of a comparison."""

from __future__ import annotations

import io

import pandas as pd
import pytest

from material_impact.api.export import comparison_to_frame, export_comparison_csv
from material_impact.config import LIFECYCLE_PHASES, AnalysisConfig, DisplayParameters, SelectionConfig
from material_impact.engine.orchestrator import run_comparison


def test_frame_columns_and_rows():
    df = comparison_to_frame(run_comparison(AnalysisConfig()))
    assert list(df.columns) == [
        "material", *LIFECYCLE_PHASES, "total_impact", "cost_per_impact",
        "tco", "mac", "payback_years", "is_baseline",
    ]
    assert len(df) == 4
    assert df.loc[0, "PointOfOriginProduction"] == pytest.approx(38.0)


def test_undefined_values_are_missing_not_zero():
    df = comparison_to_frame(run_comparison(AnalysisConfig()))
    assert df["mac"].isna().all()
    assert df["payback_years"].isna().all()


def test_zero_impact_cost_per_impact_is_missing(make_record):
    config = AnalysisConfig(materials=[make_record(name="Inert", co2e=[0, 0, 0, 0, 0])])
    df = comparison_to_frame(run_comparison(config))
    assert pd.isna(df.loc[0, "cost_per_impact"])


def test_csv_round_trips_through_pandas():
    config = AnalysisConfig(display=DisplayParameters(baseline_name="2x6 Wall"))
    text = export_comparison_csv(run_comparison(config))
    df = pd.read_csv(io.StringIO(text))
    baseline = df[df["material"] == "2x6 Wall"].iloc[0]
    assert bool(baseline["is_baseline"]) is True
    assert pd.isna(baseline["mac"])
    rammed = df[df["material"] == "Rammed Earth"].iloc[0]
    assert rammed["mac"] == pytest.approx(-0.7778, abs=1e-4)


def test_empty_selection_exports_header_only():
    config = AnalysisConfig(selection=SelectionConfig(selected_names=[]))
    text = export_comparison_csv(run_comparison(config))
    assert text.strip().splitlines() == [
        "material," + ",".join(LIFECYCLE_PHASES)
        + ",total_impact,cost_per_impact,tco,mac,payback_years,is_baseline"
    ]
