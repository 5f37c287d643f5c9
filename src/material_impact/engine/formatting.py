"""Formatting and rounding helpers for presentation.

The engine never rounds; these helpers are applied only when a value is
shown to a person.  ``None`` always renders as the placeholder, never "$0".
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from material_impact.errors import InvalidParameter

ABSENT = "—"


def format_impact(value: float, unit: str) -> tuple[str, str]:
    """Format an impact value, switching kg to tonnes at 1,000 kg.

    >>> format_impact(1250, "kg CO₂e")
    ('1.25', 't CO₂e')
    >>> format_impact(66, "kg CO₂e")
    ('66.0', 'kg CO₂e')
    """
    if "kg" in unit and value >= 1000:
        return f"{value / 1000:.2f}", unit.replace("kg", "t", 1)
    return f"{value:.1f}", unit


def format_currency(value: float, decimals: int = 2) -> str:
    """``$1,234.56``; negatives as ``-$12.00``."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.{decimals}f}"


def format_optional(value: float | None, formatter: Callable[[float], str] = format_currency) -> str:
    """Apply ``formatter``, or the absent placeholder for None."""
    if value is None:
        return ABSENT
    return formatter(value)


def format_payback(value: float | None) -> str:
    if value is None:
        return ABSENT
    if value <= 0:
        return "Immediate"
    return f"{value:.1f} yrs"


def qualitative_label(value: float, max_value: float) -> str:
    """High (≥ 70 % of max), Medium (≥ 40 %), or Low."""
    if max_value <= 0:
        raise InvalidParameter(f"max_value must be positive, got {max_value}")
    pct = value / max_value * 100
    if pct >= 70:
        return "High"
    if pct >= 40:
        return "Medium"
    return "Low"


def round_series(values: Sequence[float], digits: int = 2) -> list[float]:
    return [round(v, digits) for v in values]
