"""Total cost of ownership with discounting.

Key formula (annual periods, r = discount_rate_pct / 100):
  TCO = capital + Σ_{t=1..H} (maint + energy) / (1 + r)^t − salvage / (1 + r)^H

Capital is spent at year 0 (no discounting).  Operating costs fall at the end
of each year.  Salvage is recovered at the end of the horizon.  Nothing is
rounded here; rounding is a presentation concern.
"""

from __future__ import annotations

import math

import numpy as np

from material_impact.config.material import MaterialRecord
from material_impact.errors import InvalidParameter
from material_impact.models.results import TCOBreakdown


def _validate_horizon(horizon_years: int) -> int:
    if isinstance(horizon_years, bool) or not isinstance(horizon_years, (int, np.integer)):
        raise InvalidParameter(f"horizon_years must be an integer, got {horizon_years!r}")
    if horizon_years < 0:
        raise InvalidParameter(f"horizon_years must be >= 0, got {horizon_years}")
    return int(horizon_years)


def _growth_factor(discount_rate_pct: float) -> float:
    """1 + r, rejecting rates that make discounting undefined."""
    if not math.isfinite(discount_rate_pct):
        raise InvalidParameter(f"discount_rate_pct must be finite, got {discount_rate_pct!r}")
    base = 1 + discount_rate_pct / 100
    if base == 0:
        raise InvalidParameter("discount_rate_pct of -100 makes (1 + r) zero")
    return base


def discount_factors(discount_rate_pct: float, horizon_years: int) -> np.ndarray:
    """Discount factor (1+r)^-t for t = 1..H (empty for H = 0)."""
    horizon = _validate_horizon(horizon_years)
    base = _growth_factor(discount_rate_pct)
    years = np.arange(1, horizon + 1, dtype=float)
    return np.power(base, -years)


def total_cost_of_ownership(
    record: MaterialRecord,
    horizon_years: int,
    discount_rate_pct: float,
) -> float:
    """Discounted TCO per unit area.

    ``horizon_years = 0`` gives ``capital_cost − salvage_value``.  A rate of
    −100 % raises ``InvalidParameter`` instead of returning inf/NaN, as does
    a rate so far below zero that the discounted terms overflow.  Very high
    rates discount every future term toward zero and leave the capital cost.
    """
    horizon = _validate_horizon(horizon_years)
    base = _growth_factor(discount_rate_pct)

    annual = record.annual_maintenance_cost + record.annual_energy_cost
    try:
        pv_operating = 0.0
        for t in range(1, horizon + 1):
            pv_operating += annual * base ** -t
        pv_salvage = record.salvage_value * base ** -horizon
        tco = record.capital_cost + pv_operating - pv_salvage
    except (ZeroDivisionError, OverflowError):
        tco = math.nan

    if not math.isfinite(tco):
        raise InvalidParameter(
            f"TCO for '{record.name}' is not finite at {discount_rate_pct}% over {horizon} years"
        )
    return tco


def compute_tco_breakdown(
    record: MaterialRecord,
    horizon_years: int,
    discount_rate_pct: float,
) -> TCOBreakdown:
    """TCO split into its present-value components plus a yearly trajectory.

    ``total`` is computed term by term exactly as ``total_cost_of_ownership``.
    """
    horizon = _validate_horizon(horizon_years)
    total = total_cost_of_ownership(record, horizon, discount_rate_pct)
    dfs = discount_factors(discount_rate_pct, horizon)
    base = _growth_factor(discount_rate_pct)

    pv_maintenance = float(np.sum(record.annual_maintenance_cost * dfs))
    pv_energy = float(np.sum(record.annual_energy_cost * dfs))
    pv_salvage = record.salvage_value * base ** -horizon

    annual = record.annual_maintenance_cost + record.annual_energy_cost
    yearly_cumulative = (record.capital_cost + np.cumsum(annual * dfs)).tolist()

    undiscounted = (
        record.capital_cost + annual * horizon - record.salvage_value
    )

    return TCOBreakdown(
        material_name=record.name,
        horizon_years=horizon,
        discount_rate_pct=discount_rate_pct,
        capital_cost=record.capital_cost,
        pv_maintenance=pv_maintenance,
        pv_energy=pv_energy,
        pv_salvage=pv_salvage,
        total=total,
        undiscounted_total=undiscounted,
        yearly_cumulative=yearly_cumulative,
    )
