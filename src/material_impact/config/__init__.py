"""Configuration models — material records and per-call parameters."""

from material_impact.config.material import (
    CATEGORY_UNITS,
    IMPACT_CATEGORIES,
    LIFECYCLE_PHASES,
    PHASE_LABELS,
    ImpactCategory,
    LifecyclePhase,
    MaterialComponent,
    MaterialRecord,
    ScoreTier,
)
from material_impact.config.display import DisplayParameters
from material_impact.config.selection import SelectionConfig
from material_impact.config.samples import sample_materials
from material_impact.config.analysis import AnalysisConfig

__all__ = [
    "CATEGORY_UNITS",
    "IMPACT_CATEGORIES",
    "LIFECYCLE_PHASES",
    "PHASE_LABELS",
    "ImpactCategory",
    "LifecyclePhase",
    "ScoreTier",
    "MaterialComponent",
    "MaterialRecord",
    "DisplayParameters",
    "SelectionConfig",
    "AnalysisConfig",
    "sample_materials",
]
