"""Material record — one row per comparable building assembly."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

ImpactCategory = Literal["CO2e", "Water", "Acidification", "Resource", "Energy"]
LifecyclePhase = Literal[
    "PointOfOriginProduction", "Transport", "Construction", "Maintenance", "EndOfLife",
]
ScoreTier = Literal["Gold", "Silver", "Bronze", "Problematic"]

IMPACT_CATEGORIES: tuple[str, ...] = ("CO2e", "Water", "Acidification", "Resource", "Energy")

# Fixed order: segment i of every series maps to LIFECYCLE_PHASES[i].
LIFECYCLE_PHASES: tuple[str, ...] = (
    "PointOfOriginProduction",
    "Transport",
    "Construction",
    "Maintenance",
    "EndOfLife",
)

PHASE_LABELS: dict[str, str] = {
    "PointOfOriginProduction": "Point of Origin → Production",
    "Transport": "Transport",
    "Construction": "Construction",
    "Maintenance": "Maintenance",
    "EndOfLife": "End of Life",
}

CATEGORY_UNITS: dict[str, str] = {
    "CO2e": "kg CO₂e",
    "Water": "L",
    "Acidification": "kg SO₂e",
    "Resource": "kg Sb eq",
    "Energy": "MJ",
}

PhaseValue = Annotated[float, Field(ge=0, allow_inf_nan=False)]
PhaseVector = Annotated[list[PhaseValue], Field(min_length=5, max_length=5)]


class MaterialComponent(BaseModel):
    """One constituent of an assembly and the phase it mainly loads."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Component label (e.g. 'Gypsum Core')")
    share: float = Field(ge=0, le=1.0, description="Fraction of the assembly (0–1)")
    phase: LifecyclePhase = Field(
        default="PointOfOriginProduction",
        description="Lifecycle phase this component contributes to most",
    )


class MaterialRecord(BaseModel):
    """One building assembly, loaded once and never mutated.

    All money fields are per unit area (e.g. $/m²).  ``phase_impacts`` holds,
    per impact category, exactly five non-negative values in
    ``LIFECYCLE_PHASES`` order.
    """

    model_config = ConfigDict(frozen=True)

    # --- Identity ---
    name: str = Field(min_length=1, description="Unique human-readable identifier (join key)")

    # --- Lifecycle impacts ---
    phase_impacts: dict[ImpactCategory, PhaseVector] = Field(
        description="Impact category → 5 per-phase values "
                    "(Production, Transport, Construction, Maintenance, End of Life).",
    )

    # --- Costs ---
    cost_per_area: float = Field(
        ge=0, allow_inf_nan=False,
        description="Installed cost per unit area, used by the cost-per-impact view",
    )
    capital_cost: float = Field(ge=0, allow_inf_nan=False, description="Up-front capital cost per unit area")
    annual_maintenance_cost: float = Field(
        default=0.0, ge=0, allow_inf_nan=False,
        description="Maintenance cost per unit area per year",
    )
    annual_energy_cost: float = Field(
        default=0.0, ge=0, allow_inf_nan=False,
        description="Operational energy cost per unit area per year",
    )
    salvage_value: float = Field(
        default=0.0, ge=0, allow_inf_nan=False,
        description="Recoverable value at end of horizon, per unit area",
    )
    service_life_years: int = Field(gt=0, description="Expected service life (years)")

    # --- Scores (optional, supplied with the dataset) ---
    lifecycle_impact_score: float | None = Field(
        default=None, ge=0, le=100,
        description="Lifecycle Impact Score: overall environmental performance (0–100)",
    )
    regenerative_impact_score: float | None = Field(
        default=None, ge=0, le=100,
        description="Regenerative Impact Score: carbon + durability + circularity (0–100)",
    )
    score_tier: ScoreTier | None = Field(default=None, description="Tier for the regenerative score")

    # --- Composition ---
    composition: list[MaterialComponent] = Field(
        default_factory=list,
        description="Constituent components; shares must not exceed 1 in total.",
    )

    @model_validator(mode="after")
    def _composition_shares_within_one(self) -> "MaterialRecord":
        total_share = sum(c.share for c in self.composition)
        if total_share > 1.0 + 1e-9:
            raise ValueError(
                f"composition shares of '{self.name}' sum to {total_share:.4f} (> 1)"
            )
        return self
