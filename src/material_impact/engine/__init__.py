"""Engine — phase aggregation, table loading, selection, and insights.

The comparison entry point lives in ``material_impact.engine.orchestrator``
(it depends on ``material_impact.finance``, which imports from here).
"""

from material_impact.engine.aggregation import (
    cost_per_impact_series,
    display_series,
    dominant_phase,
    phase_contributions,
    phase_series,
    total_impact,
)
from material_impact.engine.dataset import (
    MaterialTable,
    build_material_table,
    load_materials,
    load_materials_csv,
    load_materials_json,
)
from material_impact.engine.selection import filter_materials, resolve_baseline, toggle_selection
from material_impact.engine.insights import compute_insights

__all__ = [
    "total_impact",
    "phase_series",
    "cost_per_impact_series",
    "display_series",
    "phase_contributions",
    "dominant_phase",
    "MaterialTable",
    "build_material_table",
    "load_materials",
    "load_materials_csv",
    "load_materials_json",
    "filter_materials",
    "toggle_selection",
    "resolve_baseline",
    "compute_insights",
]
