"""Marginal abatement cost and simple payback versus a baseline.

  MAC     = (capital_candidate − capital_baseline) / (CO₂e_baseline − CO₂e_candidate)
  payback = capital_delta / annual_savings,   only when annual_savings > 0

Both return ``None`` for "undefined": no baseline selected, a zero MAC
denominator, or no finite payback.  ``None`` is never 0.
"""

from __future__ import annotations

from collections.abc import Iterable

from material_impact.config.material import MaterialRecord
from material_impact.engine.aggregation import total_impact
from material_impact.models.results import MACCurve, MACEntry


def co2e_reduction(record: MaterialRecord, baseline: MaterialRecord) -> float:
    """CO₂e avoided by choosing ``record`` instead of ``baseline``."""
    return total_impact(baseline, "CO2e") - total_impact(record, "CO2e")


def marginal_abatement_cost(
    record: MaterialRecord,
    baseline: MaterialRecord | None,
) -> float | None:
    """Capital premium per unit of CO₂e avoided.  MAC ≤ 0 = cost-saving."""
    if baseline is None:
        return None
    reduction = co2e_reduction(record, baseline)
    if reduction == 0:
        return None
    return (record.capital_cost - baseline.capital_cost) / reduction


def payback_years(
    record: MaterialRecord,
    baseline: MaterialRecord | None,
) -> float | None:
    """Years of operating savings needed to recoup the capital premium.

    Returns None when there is no baseline or the candidate saves nothing
    per year.  A value ≤ 0 means the candidate is cheaper up-front and also
    cheaper to run (immediate payback).
    """
    if baseline is None:
        return None
    capital_delta = record.capital_cost - baseline.capital_cost
    annual_savings = (
        (baseline.annual_maintenance_cost + baseline.annual_energy_cost)
        - (record.annual_maintenance_cost + record.annual_energy_cost)
    )
    if annual_savings <= 0:
        return None
    return capital_delta / annual_savings


def classify_payback(value: float | None) -> str:
    """Display policy: 'none' (no payback), 'immediate' (≤ 0), or 'years'."""
    if value is None:
        return "none"
    if value <= 0:
        return "immediate"
    return "years"


def build_mac_curve(
    records: Iterable[MaterialRecord],
    baseline: MaterialRecord | None,
) -> MACCurve:
    """Rank candidates by MAC ascending against one baseline.

    The baseline itself is skipped.  Candidates with an undefined MAC go to
    ``excluded``.  Ties on MAC are ordered by name so the ranking is
    reproducible for any input order.
    """
    entries: list[MACEntry] = []
    excluded: list[str] = []

    for record in records:
        if baseline is not None and record.name == baseline.name:
            continue
        mac = marginal_abatement_cost(record, baseline)
        if mac is None:
            excluded.append(record.name)
            continue
        entries.append(MACEntry(
            name=record.name,
            mac=mac,
            co2e_reduction=co2e_reduction(record, baseline),
            classification="cost_saving" if mac <= 0 else "cost_incurring",
        ))

    entries.sort(key=lambda e: (e.mac, e.name))
    return MACCurve(
        baseline_name=baseline.name if baseline is not None else None,
        entries=entries,
        excluded=sorted(excluded),
    )
