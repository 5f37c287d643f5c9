"""Display parameters — supplied per call, never stored by the engine."""

from typing import Literal

from pydantic import BaseModel, Field

from material_impact.config.material import ImpactCategory


class DisplayParameters(BaseModel):
    """Which category, mode and financial horizon to compute for.

    ``discount_rate_pct`` is unconstrained here; the TCO functions reject
    −100 % with ``InvalidParameter``.
    """

    impact_category: ImpactCategory = Field(default="CO2e", description="Impact category to aggregate")
    chart_mode: Literal["absolute", "percentage"] = Field(
        default="absolute",
        description="'absolute' = raw phase values; 'percentage' = share of total × 100",
    )
    view_mode: Literal["impact", "cost_per_impact"] = Field(
        default="impact",
        description="'impact' = environmental impact; 'cost_per_impact' = cost "
                    "allocated across phases by impact share",
    )
    horizon_years: int = Field(default=30, ge=0, le=200, description="TCO horizon (years)")
    discount_rate_pct: float = Field(default=3.0, description="Annual discount rate in percent (3 = 3%)")
    baseline_name: str | None = Field(
        default=None,
        description="Reference material for MAC and payback. None = no baseline.",
    )
