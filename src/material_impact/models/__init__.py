"""Result models — engine output contracts."""

from material_impact.models.results import (
    ComparisonResult,
    CostPerImpactSeries,
    InsightSummary,
    MACCurve,
    MACEntry,
    MaterialResult,
    MaterialTotal,
    PhaseContribution,
    TCOBreakdown,
)

__all__ = [
    "ComparisonResult",
    "CostPerImpactSeries",
    "InsightSummary",
    "MACCurve",
    "MACEntry",
    "MaterialResult",
    "MaterialTotal",
    "PhaseContribution",
    "TCOBreakdown",
]
