"""Material Lifecycle Impact & Cost — Streamlit Dashboard.

Layout: sidebar inputs → main area with three tabs (Breakdown | Cost | Insights).
Presentation only: every number comes from the engine; undefined MAC and
payback are shown as "—", never as $0.

Run with:
    streamlit run src/material_impact/dashboard/app.py
"""

from __future__ import annotations

import os

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from material_impact.api.export import export_comparison_csv
from material_impact.api.narrative import generate_narrative
from material_impact.config import (
    CATEGORY_UNITS,
    IMPACT_CATEGORIES,
    LIFECYCLE_PHASES,
    PHASE_LABELS,
    AnalysisConfig,
    DisplayParameters,
    SelectionConfig,
    sample_materials,
)
from material_impact.engine.dataset import build_material_table, load_materials
from material_impact.engine.formatting import (
    format_currency,
    format_impact,
    format_optional,
    format_payback,
    qualitative_label,
)
from material_impact.engine.orchestrator import run_comparison
from material_impact.errors import DataIntegrityError, InvalidParameter
from material_impact.finance.sensitivity import run_tco_sensitivity

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
_DEF_D = DisplayParameters()

_PHASE_COLORS = {
    "PointOfOriginProduction": "#B4E197",
    "Transport": "#5CB3FF",
    "Construction": "#FF7F50",
    "Maintenance": "#FFB347",
    "EndOfLife": "#C96DD8",
}
_SAVING_COLOR = "#10b981"

st.set_page_config(page_title="Material Lifecycle Impact", page_icon="🧱", layout="wide")


# ---------------------------------------------------------------------------
# Data
# ---------------------------------------------------------------------------

@st.cache_data
def _load_table_rows() -> list[dict]:
    path = os.environ.get("MATERIAL_IMPACT_DATASET")
    table = load_materials(path) if path else build_material_table(sample_materials())
    return [r.model_dump() for r in table]


try:
    material_rows = _load_table_rows()
except DataIntegrityError as exc:
    st.error(f"Material data could not be loaded: {exc}")
    st.stop()

all_names = [row["name"] for row in material_rows]


# ---------------------------------------------------------------------------
# SIDEBAR: Inputs
# ---------------------------------------------------------------------------
st.sidebar.header("Analysis Inputs")

with st.sidebar.expander("Materials", expanded=True):
    search_query = st.text_input("Search", "")
    selected_names = st.multiselect("Selected materials", all_names, default=all_names)

with st.sidebar.expander("Display", expanded=True):
    impact_category = st.selectbox(
        "Impact category", IMPACT_CATEGORIES,
        index=IMPACT_CATEGORIES.index(_DEF_D.impact_category),
    )
    view_mode = st.radio(
        "View", ["impact", "cost_per_impact"], horizontal=True,
        format_func=lambda v: "Impact" if v == "impact" else "Cost per impact",
    )
    chart_mode = st.radio(
        "Chart mode", ["absolute", "percentage"], horizontal=True,
        format_func=str.capitalize,
    )

with st.sidebar.expander("Finance", expanded=True):
    horizon_years = st.slider("Horizon (years)", 0, 100, _DEF_D.horizon_years)
    discount_rate_pct = st.number_input("Discount rate (%)", -50.0, 50.0, _DEF_D.discount_rate_pct, 0.5)
    baseline_choice = st.selectbox("Baseline", ["(none)", *all_names])

config = AnalysisConfig(
    materials=material_rows,
    display=DisplayParameters(
        impact_category=impact_category,
        chart_mode=chart_mode,
        view_mode=view_mode,
        horizon_years=horizon_years,
        discount_rate_pct=discount_rate_pct,
        baseline_name=None if baseline_choice == "(none)" else baseline_choice,
    ),
    selection=SelectionConfig(selected_names=selected_names, search_query=search_query),
)

try:
    result = run_comparison(config)
except (DataIntegrityError, InvalidParameter) as exc:
    st.error(str(exc))
    st.stop()

unit = CATEGORY_UNITS[impact_category]

st.title("Material Lifecycle Impact & Cost")
if not result.materials:
    st.info("No materials match the current selection.")
    st.stop()

breakdown_tab, cost_tab, insights_tab = st.tabs(["Breakdown", "Cost", "Insights"])


# ═══════════════════════════════════════════════════════════════════════════
# Breakdown tab: stacked bars, segment i ↔ LIFECYCLE_PHASES[i]
# ═══════════════════════════════════════════════════════════════════════════
with breakdown_tab:
    if view_mode == "cost_per_impact":
        axis_title = "% of cost" if chart_mode == "percentage" else "$ per m² (allocated by impact)"
    else:
        axis_title = "% of total" if chart_mode == "percentage" else f"{unit} per m²"

    names = [m.name for m in result.materials]
    fig = go.Figure()
    for i, phase in enumerate(LIFECYCLE_PHASES):
        fig.add_trace(go.Bar(
            y=names,
            x=[m.series[i] for m in result.materials],
            name=PHASE_LABELS[phase],
            orientation="h",
            marker_color=_PHASE_COLORS[phase],
        ))
    fig.update_layout(barmode="stack", xaxis_title=axis_title, height=120 + 60 * len(names),
                      legend=dict(orientation="h", y=-0.2))
    st.plotly_chart(fig, use_container_width=True)

    rows = []
    for m in result.materials:
        value, shown_unit = format_impact(m.total_impact, unit)
        rows.append({
            "Material": m.name,
            "Total": f"{value} {shown_unit}",
            "Cost / impact": format_currency(m.cost_per_impact) if m.has_impact else "—",
            "Largest phase": PHASE_LABELS[m.dominant_phase] if m.dominant_phase else "—",
        })
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)


# ═══════════════════════════════════════════════════════════════════════════
# Cost tab: TCO and abatement
# ═══════════════════════════════════════════════════════════════════════════
with cost_tab:
    st.subheader(f"Total cost of ownership — {horizon_years} years at {discount_rate_pct:g}%")
    tco_rows = [
        {
            "Material": m.name,
            "Capital": format_currency(m.tco.capital_cost),
            "PV maintenance": format_currency(m.tco.pv_maintenance),
            "PV energy": format_currency(m.tco.pv_energy),
            "PV salvage": format_currency(-m.tco.pv_salvage),
            "TCO": format_currency(m.tco.total),
            "MAC ($/kg CO₂e)": format_optional(m.mac),
            "Payback": "Baseline" if m.is_baseline else format_payback(m.payback_years),
        }
        for m in result.materials
    ]
    st.dataframe(pd.DataFrame(tco_rows), use_container_width=True, hide_index=True)

    if horizon_years > 0:
        fig_tco = go.Figure()
        for m in result.materials:
            fig_tco.add_trace(go.Scatter(
                x=list(range(1, horizon_years + 1)), y=m.tco.yearly_cumulative,
                mode="lines", name=m.name,
            ))
        fig_tco.update_layout(xaxis_title="Year", yaxis_title="Cumulative discounted cost ($/m²)")
        st.plotly_chart(fig_tco, use_container_width=True)

    st.subheader("Marginal abatement cost curve")
    curve = result.mac_curve
    if curve.baseline_name is None:
        st.caption("Select a baseline to compute MAC and payback.")
    elif not curve.entries:
        st.caption("No candidate has a defined MAC against this baseline.")
    else:
        fig_mac = go.Figure(go.Bar(
            x=[e.name for e in curve.entries],
            y=[e.mac for e in curve.entries],
            marker_color=[_SAVING_COLOR if e.classification == "cost_saving" else _PHASE_COLORS["PointOfOriginProduction"]
                          for e in curve.entries],
        ))
        fig_mac.update_layout(yaxis_title="$/kg CO₂e")
        st.plotly_chart(fig_mac, use_container_width=True)
        c1, c2 = st.columns(2)
        c1.markdown("**Cost-saving (MAC ≤ 0)**")
        for e in curve.cost_saving:
            c1.write(f"{e.name}: {format_currency(e.mac)}/kg CO₂e")
        c2.markdown("**Cost-incurring (MAC > 0)**")
        for e in curve.cost_incurring:
            c2.write(f"{e.name}: {format_currency(e.mac)}/kg CO₂e")
        if curve.excluded:
            st.caption(f"MAC undefined for: {', '.join(curve.excluded)}")

    with st.expander("TCO sensitivity"):
        target = st.selectbox("Material", [m.name for m in result.materials], key="sens_material")
        record = next(r for r in config.materials if r.name == target)
        sens = run_tco_sensitivity(record, horizon_years, discount_rate_pct)
        fig_tornado = go.Figure()
        fig_tornado.add_trace(go.Bar(
            y=[b.param_name for b in sens.bars], x=[b.tco_at_low - sens.base_tco for b in sens.bars],
            orientation="h", name="Low",
        ))
        fig_tornado.add_trace(go.Bar(
            y=[b.param_name for b in sens.bars], x=[b.tco_at_high - sens.base_tco for b in sens.bars],
            orientation="h", name="High",
        ))
        fig_tornado.update_layout(barmode="overlay", xaxis_title="Δ TCO ($/m²)",
                                  yaxis=dict(autorange="reversed"))
        st.plotly_chart(fig_tornado, use_container_width=True)


# ═══════════════════════════════════════════════════════════════════════════
# Insights tab
# ═══════════════════════════════════════════════════════════════════════════
with insights_tab:
    ins = result.insights
    if ins is not None:
        c1, c2, c3 = st.columns(3)
        low_val, low_unit = format_impact(ins.lowest.total, unit)
        high_val, high_unit = format_impact(ins.highest.total, unit)
        avg_val, avg_unit = format_impact(ins.average, unit)
        c1.metric("Lowest impact", f"{low_val} {low_unit}", ins.lowest.name, delta_color="off")
        above = (
            f"{ins.hotspot_pct_above_lowest:.0f}% above lowest"
            if ins.hotspot_pct_above_lowest is not None else ins.highest.name
        )
        c2.metric(f"Hotspot — {ins.highest.name}", f"{high_val} {high_unit}", above, delta_color="off")
        c3.metric("Benchmark average", f"{avg_val} {avg_unit}")

    score_rows = []
    for r in config.materials:
        if r.name not in {m.name for m in result.materials}:
            continue
        score_rows.append({
            "Material": r.name,
            "LIS": "—" if r.lifecycle_impact_score is None else
                   f"{r.lifecycle_impact_score:.0f} ({qualitative_label(r.lifecycle_impact_score, 100)})",
            "RIS": "—" if r.regenerative_impact_score is None else
                   f"{r.regenerative_impact_score:.0f} ({qualitative_label(r.regenerative_impact_score, 100)})",
            "Tier": r.score_tier or "—",
        })
    st.dataframe(pd.DataFrame(score_rows), use_container_width=True, hide_index=True)

    with st.expander("Narrative"):
        st.text(generate_narrative(result))

    st.download_button(
        "Export as CSV",
        export_comparison_csv(result),
        file_name="comparison.csv",
        mime="text/csv",
        use_container_width=True,
    )
