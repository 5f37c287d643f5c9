"""Comparison orchestrator — one call from AnalysisConfig to ComparisonResult.

Sequence:
  build table → filter selection → resolve baseline (full table)
  → per material: series, CPI, TCO, MAC, payback
  → MAC curve + insights across the visible set

Each material is computed independently of the others.

Entry point: ``run_comparison(config)``
"""

from __future__ import annotations

import logging

from material_impact.config.analysis import AnalysisConfig
from material_impact.config.display import DisplayParameters
from material_impact.config.material import CATEGORY_UNITS, LIFECYCLE_PHASES, MaterialRecord
from material_impact.engine.aggregation import (
    cost_per_impact_series,
    display_series,
    dominant_phase,
    total_impact,
)
from material_impact.engine.dataset import build_material_table
from material_impact.engine.insights import compute_insights
from material_impact.engine.selection import filter_materials, resolve_baseline
from material_impact.finance.abatement import (
    build_mac_curve,
    classify_payback,
    marginal_abatement_cost,
    payback_years,
)
from material_impact.finance.tco import compute_tco_breakdown
from material_impact.models.results import ComparisonResult, MaterialResult

logger = logging.getLogger(__name__)


def compute_material_result(
    record: MaterialRecord,
    display: DisplayParameters,
    baseline: MaterialRecord | None = None,
) -> MaterialResult:
    """Every derived metric for one material."""
    category = display.impact_category
    cpi = cost_per_impact_series(record, category)
    payback = payback_years(record, baseline)

    return MaterialResult(
        name=record.name,
        total_impact=total_impact(record, category),
        series=display_series(record, display),
        cost_per_impact=cpi.total,
        has_impact=cpi.has_impact,
        dominant_phase=dominant_phase(record, category),
        tco=compute_tco_breakdown(record, display.horizon_years, display.discount_rate_pct),
        mac=marginal_abatement_cost(record, baseline),
        payback_years=payback,
        payback_status=classify_payback(payback),
        is_baseline=baseline is not None and record.name == baseline.name,
    )


def run_comparison(config: AnalysisConfig) -> ComparisonResult:
    """Run a full comparison for the selected materials.

    Raises
    ------
    DataIntegrityError
        Duplicate names, or a baseline name that is not in the table.
    InvalidParameter
        A discount rate or horizon the TCO math cannot use.
    """
    display = config.display
    table = build_material_table(config.materials)
    visible = filter_materials(table, config.selection)
    baseline = resolve_baseline(table, display.baseline_name)

    logger.debug(
        "Comparing %d of %d materials (category=%s, baseline=%s)",
        len(visible), len(table), display.impact_category, display.baseline_name,
    )

    materials = [compute_material_result(r, display, baseline) for r in visible]

    return ComparisonResult(
        impact_category=display.impact_category,
        unit=CATEGORY_UNITS[display.impact_category],
        chart_mode=display.chart_mode,
        view_mode=display.view_mode,
        horizon_years=display.horizon_years,
        discount_rate_pct=display.discount_rate_pct,
        baseline_name=baseline.name if baseline is not None else None,
        phases=list(LIFECYCLE_PHASES),
        materials=materials,
        mac_curve=build_mac_curve(visible, baseline),
        insights=compute_insights(visible, display.impact_category),
    )
