"""Result types — the contract between engine, finance, API, and dashboard.

Scalars that can be undefined (MAC, payback) are ``float | None``: ``None``
means "cannot compute" and must be rendered distinctly from 0.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field


# ═══════════════════════════════════════════════════════════════════════════
# Phase aggregation
# ═══════════════════════════════════════════════════════════════════════════

class CostPerImpactSeries(BaseModel):
    """Cost allocated across phases by each phase's share of total impact."""

    values: list[float]
    """Per-phase cost: cost_per_area × phase / total (0 when total == 0)."""

    total: float
    """Aggregate cost per unit impact = cost_per_area / total (0 when total == 0)."""

    has_impact: bool
    """False when the category total is 0 — ``total`` is then a sentinel,
    not a literal $0/unit."""


class PhaseContribution(BaseModel):
    """One phase's contribution to a material's total in one category."""

    phase: str
    label: str
    value: float
    share_pct: float
    """value / total × 100 (0 when total == 0)."""


# ═══════════════════════════════════════════════════════════════════════════
# Finance
# ═══════════════════════════════════════════════════════════════════════════

class TCOBreakdown(BaseModel):
    """Discounted total cost of ownership over a horizon.

    Key formula:
      TCO = capital + Σ_{t=1..H} (maint + energy)/(1+r)^t − salvage/(1+r)^H
    """

    material_name: str
    horizon_years: int
    discount_rate_pct: float

    capital_cost: float
    """Year-0 capital, undiscounted."""

    pv_maintenance: float
    """Present value of annual maintenance over the horizon."""

    pv_energy: float
    """Present value of annual energy cost over the horizon."""

    pv_salvage: float
    """Salvage discounted from year H (subtracted from the total)."""

    total: float
    """capital + pv_maintenance + pv_energy − pv_salvage."""

    undiscounted_total: float
    """Same terms at face value (rate = 0)."""

    yearly_cumulative: list[float] = Field(default_factory=list)
    """Running discounted cost at the end of years 1..H (salvage excluded)."""


class MACEntry(BaseModel):
    """One bar of the marginal abatement cost curve."""

    name: str
    mac: float
    """($ candidate − $ baseline) / (CO₂e baseline − CO₂e candidate)."""

    co2e_reduction: float
    """Baseline CO₂e − candidate CO₂e (negative = candidate emits more)."""

    classification: Literal["cost_saving", "cost_incurring"]
    """cost_saving when MAC ≤ 0."""


class MACCurve(BaseModel):
    """MAC ranking against one baseline, sorted by MAC ascending."""

    baseline_name: str | None
    entries: list[MACEntry] = Field(default_factory=list)
    excluded: list[str] = Field(default_factory=list)
    """Candidates whose MAC is undefined (no baseline, or equal CO₂e)."""

    @computed_field
    @property
    def cost_saving(self) -> list[MACEntry]:
        return [e for e in self.entries if e.classification == "cost_saving"]

    @computed_field
    @property
    def cost_incurring(self) -> list[MACEntry]:
        return [e for e in self.entries if e.classification == "cost_incurring"]


# ═══════════════════════════════════════════════════════════════════════════
# Insights
# ═══════════════════════════════════════════════════════════════════════════

class MaterialTotal(BaseModel):
    name: str
    total: float


class InsightSummary(BaseModel):
    """Headline takeaways across a selection for one impact category."""

    impact_category: str
    unit: str
    lowest: MaterialTotal
    highest: MaterialTotal
    """The hotspot material."""

    average: float
    hotspot_pct_above_lowest: float | None
    """(highest − lowest) / lowest × 100; None when the lowest total is 0."""


# ═══════════════════════════════════════════════════════════════════════════
# Comparison (orchestrator output)
# ═══════════════════════════════════════════════════════════════════════════

class MaterialResult(BaseModel):
    """Every derived metric for one material under one set of display parameters."""

    name: str
    total_impact: float
    series: list[float]
    """Five values, segment i ↔ LIFECYCLE_PHASES[i], per view and chart mode."""

    cost_per_impact: float
    has_impact: bool
    dominant_phase: str | None
    tco: TCOBreakdown
    mac: float | None
    payback_years: float | None
    payback_status: Literal["none", "immediate", "years"]
    is_baseline: bool = False


class ComparisonResult(BaseModel):
    """Full output of one comparison run."""

    impact_category: str
    unit: str
    chart_mode: str
    view_mode: str
    horizon_years: int
    discount_rate_pct: float
    baseline_name: str | None
    phases: list[str]
    materials: list[MaterialResult] = Field(default_factory=list)
    mac_curve: MACCurve
    insights: InsightSummary | None = None
