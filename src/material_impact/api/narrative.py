"""Narrative generator — plain-English interpretation of a comparison.

Converts a ``ComparisonResult`` into a structured text block.  Undefined
values (no baseline, no payback) are written as "—", never as $0.
"""

from __future__ import annotations

from material_impact.config.material import PHASE_LABELS
from material_impact.engine.formatting import (
    format_currency,
    format_impact,
    format_optional,
    format_payback,
)
from material_impact.models.results import ComparisonResult


def _rule(title: str) -> list[str]:
    return ["=" * 60, title, "=" * 60]


def generate_narrative(result: ComparisonResult) -> str:
    """Generate a plain-English narrative from a comparison result.

    Returns a structured text block covering:
      1. Impact summary (lowest, hotspot, benchmark average)
      2. Cost of ownership
      3. Abatement versus the baseline
    """
    if not result.materials:
        return "No materials match the current selection."

    sections: list[str] = []
    unit = result.unit

    # ── 1. Impact summary ──
    sections += _rule(f"IMPACT SUMMARY ({result.impact_category})")
    ins = result.insights
    if ins is not None:
        low_val, low_unit = format_impact(ins.lowest.total, unit)
        high_val, high_unit = format_impact(ins.highest.total, unit)
        avg_val, avg_unit = format_impact(ins.average, unit)
        sections.append(f"Lowest impact: {ins.lowest.name} at {low_val} {low_unit}/m²")
        hotspot = f"Hotspot: {ins.highest.name} at {high_val} {high_unit}/m²"
        if ins.hotspot_pct_above_lowest is not None:
            hotspot += f" ({ins.hotspot_pct_above_lowest:.0f}% above the lowest)"
        sections.append(hotspot)
        sections.append(f"Benchmark average: {avg_val} {avg_unit}/m²")

    for m in result.materials:
        if m.dominant_phase is not None:
            sections.append(f"  {m.name:32s} largest phase: {PHASE_LABELS[m.dominant_phase]}")

    # ── 2. Cost of ownership ──
    sections.append("")
    sections += _rule(
        f"COST OF OWNERSHIP ({result.horizon_years} years at {result.discount_rate_pct:g}%)"
    )
    by_tco = sorted(result.materials, key=lambda m: m.tco.total)
    for m in by_tco:
        sections.append(f"  {m.name:32s} {format_currency(m.tco.total):>12s}/m²")
    sections.append(f"Lowest TCO: {by_tco[0].name}")

    # ── 3. Abatement ──
    sections.append("")
    sections += _rule("ABATEMENT VERSUS BASELINE")
    if result.baseline_name is None:
        sections.append("No baseline selected — MAC and payback are not computed.")
        return "\n".join(sections)

    sections.append(f"Baseline: {result.baseline_name}")
    curve = result.mac_curve
    saving = curve.cost_saving
    incurring = curve.cost_incurring
    if saving:
        sections.append("Cost-saving options (MAC ≤ 0):")
        for e in saving:
            sections.append(f"  {e.name:32s} {format_currency(e.mac)}/kg CO₂e")
    if incurring:
        sections.append("Cost-incurring options (MAC > 0):")
        for e in incurring:
            sections.append(f"  {e.name:32s} {format_currency(e.mac)}/kg CO₂e")
    if curve.excluded:
        sections.append(f"MAC undefined (same CO₂e as baseline): {', '.join(curve.excluded)}")

    sections.append("Payback versus baseline:")
    for m in result.materials:
        if m.is_baseline:
            continue
        sections.append(
            f"  {m.name:32s} {format_payback(m.payback_years):>10s}  "
            f"MAC {format_optional(m.mac)}"
        )

    return "\n".join(sections)
