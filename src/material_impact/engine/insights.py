"""Comparison insights — lowest impact, hotspot, benchmark average."""

from __future__ import annotations

from collections.abc import Sequence

from material_impact.config.material import CATEGORY_UNITS, MaterialRecord
from material_impact.engine.aggregation import total_impact
from material_impact.models.results import InsightSummary, MaterialTotal


def compute_insights(
    records: Sequence[MaterialRecord],
    category: str = "CO2e",
) -> InsightSummary | None:
    """Headline takeaways for ``category`` across ``records``.

    Returns None for an empty selection.  Ties go to the earliest record.
    ``hotspot_pct_above_lowest`` is None when the lowest total is 0.
    """
    if not records:
        return None

    totals = [(r.name, total_impact(r, category)) for r in records]
    lowest = min(totals, key=lambda t: t[1])
    highest = max(totals, key=lambda t: t[1])
    average = sum(t for _, t in totals) / len(totals)

    pct_above = None
    if lowest[1] > 0:
        pct_above = (highest[1] - lowest[1]) / lowest[1] * 100

    return InsightSummary(
        impact_category=category,
        unit=CATEGORY_UNITS[category],
        lowest=MaterialTotal(name=lowest[0], total=lowest[1]),
        highest=MaterialTotal(name=highest[0], total=highest[1]),
        average=average,
        hotspot_pct_above_lowest=pct_above,
    )
