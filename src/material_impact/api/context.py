"""Context manifest generator — makes the engine API self-describing.

Produces structured context at two detail levels:
  - ``compact``: parameter schemas + descriptions
  - ``full``:    adds the method summary, formulas, and interpretation guide
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from material_impact.config import (
    AnalysisConfig,
    DisplayParameters,
    MaterialRecord,
    SelectionConfig,
)

API_NAME = "Material Lifecycle Impact & Cost Engine"
API_VERSION = "1.0"


# ═══════════════════════════════════════════════════════════════════════════
# Public response models
# ═══════════════════════════════════════════════════════════════════════════

class ParameterInfo(BaseModel):
    """One configurable parameter, machine-readable."""
    name: str
    type: str
    default: Any
    description: str
    constraints: dict[str, Any] = Field(default_factory=dict)


class SectionSchema(BaseModel):
    """Schema for one input section (e.g. display, selection)."""
    section: str
    description: str
    parameters: list[ParameterInfo]


class OutputFieldInfo(BaseModel):
    """One output field, machine-readable."""
    name: str
    type: str
    description: str
    unit: str = ""


class EndpointInfo(BaseModel):
    """Description of one API endpoint."""
    method: str
    path: str
    description: str
    request_body: str = ""
    response: str = ""


class EngineContext(BaseModel):
    """Full self-describing context."""
    name: str
    version: str
    description: str
    method_summary: str
    key_formulas: list[dict[str, str]]
    input_sections: list[SectionSchema]
    key_outputs: list[OutputFieldInfo]
    endpoints: list[EndpointInfo]
    interpretation_guide: str


# ═══════════════════════════════════════════════════════════════════════════
# Schema extraction from Pydantic models
# ═══════════════════════════════════════════════════════════════════════════

def _extract_params(model_cls: type[BaseModel]) -> list[ParameterInfo]:
    """Extract parameter info from a Pydantic model class."""
    params: list[ParameterInfo] = []
    for name, field_info in model_cls.model_fields.items():
        constraints: dict[str, Any] = {}
        for attr in ("ge", "gt", "le", "lt", "min_length", "max_length"):
            meta_val = _get_field_metadata(field_info, attr)
            if meta_val is not None:
                constraints[attr] = meta_val

        default = field_info.default
        if field_info.is_required() or callable(default):
            default_val = None
        else:
            default_val = default

        type_str = str(field_info.annotation) if field_info.annotation else "Any"
        type_str = type_str.replace("typing.", "").replace("<class '", "").replace("'>", "")

        params.append(ParameterInfo(
            name=name,
            type=type_str,
            default=default_val,
            description=field_info.description or "",
            constraints=constraints,
        ))
    return params


def _get_field_metadata(field_info: Any, attr: str) -> Any:
    """Extract constraint metadata from Pydantic field info."""
    for m in getattr(field_info, "metadata", []):
        if hasattr(m, attr):
            return getattr(m, attr)
    return None


# ═══════════════════════════════════════════════════════════════════════════
# Context builders
# ═══════════════════════════════════════════════════════════════════════════

_METHOD_SUMMARY = """
Compares building assemblies on environmental lifecycle impact and cost.

Each material carries, per impact category (CO2e, Water, Acidification,
Resource, Energy), five per-area values — one per lifecycle phase:
Point of Origin → Production, Transport, Construction, Maintenance, End of Life.

From these the engine derives lifecycle totals, percentage breakdowns,
cost-per-impact allocations, discounted total cost of ownership, marginal
abatement cost versus a baseline material, and simple payback.
"""

_INTERPRETATION_GUIDE = """
1. TOTAL IMPACT: sum of the five phases. Lower is better.
2. PERCENTAGE MODE: phase shares of the total; they sum to 100 (or all 0 when
   the total is 0).
3. COST PER IMPACT: cost_per_area / total impact. When has_impact is false the
   value 0 means "no impact data", not "free".
4. TCO: capital + discounted operating costs − discounted salvage. Compare
   materials at the same horizon and discount rate.
5. MAC: capital premium per kg CO2e avoided versus the baseline. MAC ≤ 0 is a
   cost-saving option; MAC > 0 costs extra per unit of carbon avoided.
   null means undefined (no baseline, or identical CO2e).
6. PAYBACK: years of operating savings needed to recover the capital premium.
   null means no payback (the candidate saves nothing per year); ≤ 0 means
   immediate.
"""

_KEY_FORMULAS = [
    {
        "name": "Percentage share",
        "formula": "phase[i] / Σ phase × 100  (0 when Σ phase = 0)",
        "meaning": "Share of the lifecycle total carried by each phase",
    },
    {
        "name": "Cost per impact (per phase)",
        "formula": "cost_per_area × phase[i] / Σ phase",
        "meaning": "Installed cost allocated by impact share",
    },
    {
        "name": "Total cost of ownership",
        "formula": "capital + Σ_{t=1..H} (maint + energy)/(1+r)^t − salvage/(1+r)^H",
        "meaning": "Discounted lifetime cost per unit area over horizon H",
    },
    {
        "name": "Marginal abatement cost",
        "formula": "(capital − capital_baseline) / (CO2e_baseline − CO2e)",
        "meaning": "Cost premium per unit CO2e avoided versus the baseline",
    },
    {
        "name": "Simple payback",
        "formula": "(capital − capital_baseline) / ((maint+energy)_baseline − (maint+energy))",
        "meaning": "Years of operating savings to recover the premium",
    },
]

_KEY_OUTPUTS = [
    OutputFieldInfo(name="materials[].total_impact", type="float", description="Lifecycle total in the chosen category", unit="per m²"),
    OutputFieldInfo(name="materials[].series", type="list[float]", description="Five phase values for the chosen view and chart mode"),
    OutputFieldInfo(name="materials[].cost_per_impact", type="float", description="Cost per unit impact (see has_impact)", unit="$/unit"),
    OutputFieldInfo(name="materials[].tco.total", type="float", description="Discounted total cost of ownership", unit="$/m²"),
    OutputFieldInfo(name="materials[].mac", type="float|None", description="Marginal abatement cost versus baseline", unit="$/kg CO₂e"),
    OutputFieldInfo(name="materials[].payback_years", type="float|None", description="Simple payback versus baseline", unit="years"),
    OutputFieldInfo(name="mac_curve.entries", type="list[MACEntry]", description="Candidates sorted by MAC ascending"),
    OutputFieldInfo(name="insights", type="InsightSummary|None", description="Lowest, hotspot, and average totals"),
]

_ENDPOINTS = [
    EndpointInfo(method="GET", path="/context", description="This manifest.", response="EngineContext"),
    EndpointInfo(method="GET", path="/schema", description="JSON Schema for AnalysisConfig.", response="JSON Schema object"),
    EndpointInfo(method="GET", path="/materials", description="The configured material table.", response="list[MaterialRecord]"),
    EndpointInfo(
        method="POST", path="/compare",
        description="Run a comparison. Missing display/selection fields use defaults; "
                    "materials default to the configured table.",
        request_body="AnalysisConfig (partial)", response="ComparisonResult + narrative",
    ),
    EndpointInfo(method="POST", path="/tco", description="TCO breakdown for one material.",
                 request_body="TCORequest", response="TCOBreakdown"),
    EndpointInfo(method="POST", path="/mac-curve", description="MAC ranking against a baseline.",
                 request_body="MACRequest", response="MACCurve"),
    EndpointInfo(method="POST", path="/sensitivity", description="TCO tornado sweep for one material.",
                 request_body="TCORequest", response="Tornado bars sorted by TCO swing"),
    EndpointInfo(method="POST", path="/export/csv", description="Comparison as CSV.",
                 request_body="AnalysisConfig (partial)", response="text/csv"),
]

_INPUT_SECTIONS = [
    ("materials", MaterialRecord, "Material records — per-phase impacts and per-area costs"),
    ("display", DisplayParameters, "Display parameters — category, chart/view mode, horizon, discount rate, baseline"),
    ("selection", SelectionConfig, "Selection — which materials are visible"),
]


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def build_context(detail_level: Literal["compact", "full"] = "full") -> EngineContext:
    """Build the self-describing context manifest."""
    sections = [
        SectionSchema(section=name, description=desc, parameters=_extract_params(model_cls))
        for name, model_cls, desc in _INPUT_SECTIONS
    ]
    full = detail_level == "full"
    return EngineContext(
        name=API_NAME,
        version=API_VERSION,
        description=(
            "Lifecycle impact and cost comparison for building assemblies: phase breakdowns, "
            "cost per impact, discounted TCO, marginal abatement cost, and payback."
        ),
        method_summary=_METHOD_SUMMARY.strip() if full else "",
        key_formulas=_KEY_FORMULAS if full else [],
        input_sections=sections,
        key_outputs=_KEY_OUTPUTS,
        endpoints=_ENDPOINTS,
        interpretation_guide=_INTERPRETATION_GUIDE.strip() if full else "",
    )


def get_analysis_schema() -> dict:
    """Return the full JSON Schema for AnalysisConfig."""
    return AnalysisConfig.model_json_schema()
