"""TCO sensitivity / tornado analysis.

One-at-a-time sweeps: vary one input, hold the rest, measure the TCO swing.
Produces tornado chart data sorted by impact on TCO.

Default sweep set:
  - capital_cost ± 15%
  - annual_maintenance_cost ± 20%
  - annual_energy_cost ± 20%
  - salvage_value ± 25%
  - discount_rate_pct ± 50%
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from material_impact.config.material import MaterialRecord
from material_impact.finance.tco import total_cost_of_ownership

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TornadoBar:
    """One bar in the tornado chart."""

    param_name: str
    """Human-readable parameter name."""

    param_path: str
    """Record field name, or 'discount_rate_pct'."""

    base_value: float
    low_value: float
    high_value: float

    tco_at_low: float
    tco_at_high: float

    delta_tco: float
    """abs(tco_at_high − tco_at_low) — total swing width."""


@dataclass
class SensitivityResult:
    """Complete sensitivity analysis output for one material."""

    material_name: str
    base_tco: float
    bars: list[TornadoBar] = field(default_factory=list)
    """Tornado bars sorted by delta_tco (descending)."""


DEFAULT_SWEEPS: list[tuple[str, str, float, float]] = [
    ("Capital cost", "capital_cost", -0.15, 0.15),
    ("Maintenance cost", "annual_maintenance_cost", -0.20, 0.20),
    ("Energy cost", "annual_energy_cost", -0.20, 0.20),
    ("Salvage value", "salvage_value", -0.25, 0.25),
    ("Discount rate", "discount_rate_pct", -0.50, 0.50),
]

_RATE_PATH = "discount_rate_pct"


def _tco_with(
    record: MaterialRecord,
    path: str,
    value: float,
    horizon_years: int,
    discount_rate_pct: float,
) -> float:
    if path == _RATE_PATH:
        return total_cost_of_ownership(record, horizon_years, value)
    # Cost fields cannot go negative.
    swept = record.model_copy(update={path: max(value, 0.0)})
    return total_cost_of_ownership(swept, horizon_years, discount_rate_pct)


def run_tco_sensitivity(
    record: MaterialRecord,
    horizon_years: int,
    discount_rate_pct: float,
    sweeps: list[tuple[str, str, float, float]] | None = None,
) -> SensitivityResult:
    """Run a TCO tornado sweep for one material.

    Parameters
    ----------
    record : MaterialRecord
        Base material.
    horizon_years : int
        TCO horizon.
    discount_rate_pct : float
        Base discount rate in percent.
    sweeps : list[tuple[name, path, low_pct, high_pct]] | None
        Parameter sweeps. None = use DEFAULT_SWEEPS.  Unknown paths are skipped.
    """
    if sweeps is None:
        sweeps = DEFAULT_SWEEPS

    base_tco = total_cost_of_ownership(record, horizon_years, discount_rate_pct)
    bars: list[TornadoBar] = []

    for name, path, low_pct, high_pct in sweeps:
        if path == _RATE_PATH:
            base_val = discount_rate_pct
        elif path in MaterialRecord.model_fields and path != "service_life_years":
            base_val = getattr(record, path)
            if not isinstance(base_val, (int, float)):
                logger.warning("Sensitivity sweep '%s' skipped: '%s' is not numeric", name, path)
                continue
            base_val = float(base_val)
        else:
            logger.warning("Sensitivity sweep '%s' skipped: unknown path '%s'", name, path)
            continue

        low_val = base_val * (1 + low_pct)
        high_val = base_val * (1 + high_pct)
        if path != _RATE_PATH:
            low_val, high_val = max(low_val, 0.0), max(high_val, 0.0)

        tco_low = _tco_with(record, path, low_val, horizon_years, discount_rate_pct)
        tco_high = _tco_with(record, path, high_val, horizon_years, discount_rate_pct)

        bars.append(TornadoBar(
            param_name=name,
            param_path=path,
            base_value=round(base_val, 4),
            low_value=round(low_val, 4),
            high_value=round(high_val, 4),
            tco_at_low=round(tco_low, 4),
            tco_at_high=round(tco_high, 4),
            delta_tco=round(abs(tco_high - tco_low), 4),
        ))

    # Largest swing first
    bars.sort(key=lambda b: b.delta_tco, reverse=True)

    return SensitivityResult(material_name=record.name, base_tco=round(base_tco, 4), bars=bars)


def tco_rate_curve(
    record: MaterialRecord,
    horizon_years: int,
    rates_pct: list[float] | np.ndarray | None = None,
) -> list[tuple[float, float]]:
    """TCO across a grid of discount rates (default 0–10 % in 0.5 steps)."""
    if rates_pct is None:
        rates_pct = np.linspace(0.0, 10.0, 21)
    return [
        (float(rate), total_cost_of_ownership(record, horizon_years, float(rate)))
        for rate in np.asarray(rates_pct, dtype=float)
    ]
