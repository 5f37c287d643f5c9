"""Shared test fixtures — sample records matching the bundled table."""

from __future__ import annotations

import pytest

from material_impact.config import MaterialRecord, sample_materials


def _build_record(name: str = "Test Wall", co2e: list[float] | None = None, **overrides) -> MaterialRecord:
    """Minimal valid record; every category gets the same CO2e-shaped vector."""
    vector = co2e if co2e is not None else [10, 2, 3, 1, 4]
    fields = {
        "name": name,
        "phase_impacts": {
            "CO2e": vector,
            "Water": [v * 2 for v in vector],
            "Acidification": [v / 100 for v in vector],
            "Resource": vector,
            "Energy": [v * 10 for v in vector],
        },
        "cost_per_area": 50.0,
        "capital_cost": 100.0,
        "annual_maintenance_cost": 1.0,
        "annual_energy_cost": 1.0,
        "salvage_value": 5.0,
        "service_life_years": 30,
    }
    fields.update(overrides)
    return MaterialRecord(**fields)


@pytest.fixture
def samples() -> list[MaterialRecord]:
    return sample_materials()


@pytest.fixture
def rammed_earth(samples) -> MaterialRecord:
    return samples[0]


@pytest.fixture
def wall_2x6(samples) -> MaterialRecord:
    return samples[1]


@pytest.fixture
def hempcrete(samples) -> MaterialRecord:
    return samples[2]


@pytest.fixture
def drywall(samples) -> MaterialRecord:
    return samples[3]


@pytest.fixture
def zero_impact() -> MaterialRecord:
    return _build_record(name="Inert Panel", co2e=[0, 0, 0, 0, 0])


@pytest.fixture
def make_record():
    """Factory for minimal valid records."""
    return _build_record
