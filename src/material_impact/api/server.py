"""FastAPI server — JSON API for the material impact & cost engine.

Run with:
    uvicorn material_impact.api.server:app --reload --port 8000

Or:
    python -m material_impact.api.server

Endpoints:
    GET  /context      — self-describing manifest (method + schemas)
    GET  /schema       — JSON Schema for AnalysisConfig
    GET  /materials    — the configured material table
    POST /compare      — run a comparison (partial AnalysisConfig)
    POST /tco          — TCO breakdown for one material
    POST /mac-curve    — MAC ranking against a baseline
    POST /sensitivity  — TCO tornado sweep for one material
    POST /export/csv   — comparison as CSV

The material table is the bundled sample unless ``MATERIAL_IMPACT_DATASET``
points to a JSON or CSV file.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Any, Literal

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field, ValidationError

from material_impact.api.context import API_NAME, API_VERSION, build_context, get_analysis_schema
from material_impact.api.export import export_comparison_csv
from material_impact.api.narrative import generate_narrative
from material_impact.config.analysis import AnalysisConfig
from material_impact.config.display import DisplayParameters
from material_impact.config.material import MaterialRecord
from material_impact.config.samples import sample_materials
from material_impact.config.selection import SelectionConfig
from material_impact.engine.dataset import MaterialTable, build_material_table, load_materials
from material_impact.engine.orchestrator import run_comparison
from material_impact.engine.selection import resolve_baseline
from material_impact.errors import DataIntegrityError, InvalidParameter
from material_impact.finance.abatement import build_mac_curve
from material_impact.finance.sensitivity import run_tco_sensitivity
from material_impact.finance.tco import compute_tco_breakdown
from material_impact.models.results import ComparisonResult, MACCurve, TCOBreakdown

logger = logging.getLogger(__name__)

DATASET_ENV_VAR = "MATERIAL_IMPACT_DATASET"


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title=f"{API_NAME} API",
    version=API_VERSION,
    description=(
        "Lifecycle impact and cost comparison for building assemblies. "
        "Start by calling GET /context to see inputs, formulas, and outputs."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DataIntegrityError)
def _data_integrity_handler(request: Request, exc: DataIntegrityError) -> JSONResponse:
    logger.warning("Data integrity error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(InvalidParameter)
def _invalid_parameter_handler(request: Request, exc: InvalidParameter) -> JSONResponse:
    logger.warning("Invalid parameter on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class CompareRequest(BaseModel):
    """Request body for /compare and /export/csv. All fields optional."""
    display: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial DisplayParameters. Example: {'impact_category': 'Energy', "
                    "'baseline_name': '2x6 Wall'}",
    )
    selection: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial SelectionConfig. Example: {'search_query': 'wall'}",
    )
    materials: list[dict[str, Any]] | None = Field(
        default=None,
        description="Replacement material table. None = the configured table.",
    )


class CompareResponse(BaseModel):
    """Response from /compare."""
    result: dict[str, Any]
    narrative: str = ""


class TCORequest(BaseModel):
    """Request body for /tco and /sensitivity."""
    material: str = Field(description="Material name")
    horizon_years: int = Field(default=30, ge=0, le=200)
    discount_rate_pct: float = Field(default=3.0)


class MACRequest(BaseModel):
    """Request body for /mac-curve."""
    baseline_name: str | None = Field(default=None, description="Baseline material; None = no baseline")
    names: list[str] | None = Field(default=None, description="Candidates; None = every material")


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

@lru_cache(maxsize=1)
def get_material_table() -> MaterialTable:
    """Material table for this process, loaded once."""
    path = os.environ.get(DATASET_ENV_VAR)
    if path:
        logger.info("Loading material table from %s", path)
        return load_materials(path)
    return build_material_table(sample_materials())


def _deep_merge(base: dict, overrides: dict) -> dict:
    """Recursively merge overrides into base dict."""
    for key, val in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(val, dict):
            _deep_merge(base[key], val)
        else:
            base[key] = val
    return base


def _build_analysis(req: CompareRequest) -> AnalysisConfig:
    """Build an AnalysisConfig from partial overrides merged onto defaults."""
    payload: dict[str, Any] = {
        "display": _deep_merge(DisplayParameters().model_dump(), req.display),
        "selection": _deep_merge(SelectionConfig().model_dump(), req.selection),
    }
    try:
        if req.materials is None:
            return AnalysisConfig(materials=list(get_material_table()), **payload)
        return AnalysisConfig(materials=req.materials, **payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _find_material(name: str) -> MaterialRecord:
    record = get_material_table().get(name)
    if record is None:
        raise HTTPException(status_code=404, detail=f"unknown material '{name}'")
    return record


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/")
def root():
    """API root — returns a welcome message and pointer to /context."""
    return {
        "name": API_NAME,
        "version": API_VERSION,
        "start_here": "GET /context?detail_level=full",
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/context")
def get_context(
    detail_level: Literal["compact", "full"] = Query(
        default="full",
        description="'compact' for schemas only, 'full' adds method, formulas and guide",
    ),
):
    """Self-describing context manifest."""
    return build_context(detail_level)


@app.get("/schema")
def get_schema():
    """Full JSON Schema for AnalysisConfig."""
    return get_analysis_schema()


@app.get("/materials")
def get_materials():
    """The configured material table."""
    return [r.model_dump() for r in get_material_table()]


@app.post("/compare", response_model=CompareResponse)
def compare(req: CompareRequest):
    """Run a comparison with the given display and selection overrides."""
    config = _build_analysis(req)
    logger.info(
        "Compare: category=%s view=%s baseline=%s",
        config.display.impact_category, config.display.view_mode, config.display.baseline_name,
    )
    result: ComparisonResult = run_comparison(config)
    return CompareResponse(result=result.model_dump(), narrative=generate_narrative(result))


@app.post("/tco", response_model=TCOBreakdown)
def tco(req: TCORequest):
    """TCO breakdown for one material."""
    record = _find_material(req.material)
    return compute_tco_breakdown(record, req.horizon_years, req.discount_rate_pct)


@app.post("/mac-curve", response_model=MACCurve)
def mac_curve(req: MACRequest):
    """MAC ranking of the requested candidates against a baseline."""
    table = get_material_table()
    baseline = resolve_baseline(table, req.baseline_name)
    if req.names is None:
        candidates = list(table)
    else:
        candidates = [_find_material(n) for n in req.names]
    return build_mac_curve(candidates, baseline)


@app.post("/sensitivity")
def sensitivity(req: TCORequest):
    """TCO tornado sweep: which cost input moves TCO the most."""
    record = _find_material(req.material)
    res = run_tco_sensitivity(record, req.horizon_years, req.discount_rate_pct)
    return {
        "material": res.material_name,
        "base_tco": res.base_tco,
        "tornado_bars": [
            {
                "param_name": bar.param_name,
                "param_path": bar.param_path,
                "base_value": bar.base_value,
                "low_value": bar.low_value,
                "high_value": bar.high_value,
                "tco_at_low": bar.tco_at_low,
                "tco_at_high": bar.tco_at_high,
                "delta_tco": bar.delta_tco,
            }
            for bar in res.bars
        ],
    }


@app.post("/export/csv", response_class=PlainTextResponse)
def export_csv(req: CompareRequest):
    """Comparison as CSV, one row per material."""
    result = run_comparison(_build_analysis(req))
    return PlainTextResponse(
        export_comparison_csv(result),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="comparison.csv"'},
    )


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(
        "material_impact.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
