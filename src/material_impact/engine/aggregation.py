"""Phase aggregation.

Pure arithmetic over one MaterialRecord: lifecycle totals, percentage
breakdowns, and the cost-per-impact ("CPI") allocation.

Zero-total policy: when a category's total impact is 0, every percentage
and CPI value is 0.  The CPI aggregate is also 0, flagged by
``has_impact=False`` so callers can tell it from a literal $0/unit.
"""

from __future__ import annotations

from material_impact.config.display import DisplayParameters
from material_impact.config.material import (
    IMPACT_CATEGORIES,
    LIFECYCLE_PHASES,
    PHASE_LABELS,
    MaterialRecord,
)
from material_impact.errors import DataIntegrityError, InvalidParameter
from material_impact.models.results import CostPerImpactSeries, PhaseContribution


def phase_values(record: MaterialRecord, category: str) -> list[float]:
    """Raw per-phase values for ``category``; fails fast if absent."""
    if category not in IMPACT_CATEGORIES:
        raise DataIntegrityError(f"unknown impact category '{category}'")
    try:
        return list(record.phase_impacts[category])
    except KeyError:
        raise DataIntegrityError(
            f"material '{record.name}' has no '{category}' impact data"
        ) from None


def total_impact(record: MaterialRecord, category: str) -> float:
    """Sum of the five phase values for ``category``."""
    return sum(phase_values(record, category))


def _as_percentages(values: list[float]) -> list[float]:
    total = sum(values)
    if total == 0:
        return [0.0] * len(values)
    return [v / total * 100 for v in values]


def phase_series(record: MaterialRecord, category: str, mode: str = "absolute") -> list[float]:
    """Per-phase series in ``absolute`` or ``percentage`` mode.

    Percentage values sum to 100 whenever the total is positive and are all
    0 when it is zero.
    """
    values = phase_values(record, category)
    if mode == "absolute":
        return values
    if mode == "percentage":
        return _as_percentages(values)
    raise InvalidParameter(f"unknown chart mode '{mode}' (expected 'absolute' or 'percentage')")


def cost_per_impact_series(record: MaterialRecord, category: str) -> CostPerImpactSeries:
    """Allocate ``cost_per_area`` across phases by impact share.

      value[i] = cost_per_area × phase[i] / total
      total    = cost_per_area / total_impact
    """
    values = phase_values(record, category)
    total = sum(values)
    if total <= 0:
        return CostPerImpactSeries(values=[0.0] * len(values), total=0.0, has_impact=False)

    cost = record.cost_per_area
    return CostPerImpactSeries(
        values=[cost * v / total for v in values],
        total=cost / total,
        has_impact=True,
    )


def display_series(record: MaterialRecord, display: DisplayParameters) -> list[float]:
    """The five segment values to chart for the given view and chart mode."""
    category = display.impact_category
    if display.view_mode == "cost_per_impact":
        values = cost_per_impact_series(record, category).values
        if display.chart_mode == "percentage":
            return _as_percentages(values)
        return values
    return phase_series(record, category, display.chart_mode)


def phase_contributions(record: MaterialRecord, category: str) -> list[PhaseContribution]:
    """Value and share of each phase, in fixed phase order."""
    values = phase_values(record, category)
    shares = _as_percentages(values)
    return [
        PhaseContribution(phase=phase, label=PHASE_LABELS[phase], value=value, share_pct=share)
        for phase, value, share in zip(LIFECYCLE_PHASES, values, shares)
    ]


def dominant_phase(record: MaterialRecord, category: str) -> str | None:
    """Phase with the largest value (earliest wins ties); None when total is 0."""
    values = phase_values(record, category)
    if sum(values) == 0:
        return None
    best = max(range(len(values)), key=lambda i: (values[i], -i))
    return LIFECYCLE_PHASES[best]
