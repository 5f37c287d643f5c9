"""Tabular export of a comparison — pandas DataFrame and CSV."""

from __future__ import annotations

import pandas as pd

from material_impact.config.material import LIFECYCLE_PHASES
from material_impact.models.results import ComparisonResult


def comparison_to_frame(result: ComparisonResult) -> pd.DataFrame:
    """One row per material: phase series columns followed by scalar metrics.

    Undefined MAC / payback stay empty (NaN in the frame, blank in CSV).
    """
    rows = []
    for m in result.materials:
        row: dict[str, object] = {"material": m.name}
        for phase, value in zip(LIFECYCLE_PHASES, m.series):
            row[phase] = value
        row.update({
            "total_impact": m.total_impact,
            "cost_per_impact": m.cost_per_impact if m.has_impact else None,
            "tco": m.tco.total,
            "mac": m.mac,
            "payback_years": m.payback_years,
            "is_baseline": m.is_baseline,
        })
        rows.append(row)

    columns = [
        "material", *LIFECYCLE_PHASES, "total_impact", "cost_per_impact",
        "tco", "mac", "payback_years", "is_baseline",
    ]
    return pd.DataFrame(rows, columns=columns)


def export_comparison_csv(result: ComparisonResult, float_format: str = "%.4f") -> str:
    """CSV text for a comparison (header row included)."""
    return comparison_to_frame(result).to_csv(index=False, float_format=float_format)
