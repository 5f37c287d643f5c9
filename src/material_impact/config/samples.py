"""Bundled sample table — four wall assemblies, values per m².

Used as the default material table for the API and dashboard when no
external dataset is configured.
"""

from material_impact.config.material import MaterialComponent, MaterialRecord

_SAMPLE_ROWS: list[dict] = [
    {
        "name": "Rammed Earth",
        "phase_impacts": {
            "CO2e": [38, 6, 14, 3, 5],
            "Water": [120, 15, 35, 8, 12],
            "Acidification": [0.8, 0.2, 0.4, 0.1, 0.15],
            "Resource": [45, 8, 18, 5, 7],
            "Energy": [580, 95, 220, 45, 75],
        },
        "cost_per_area": 55,
        "capital_cost": 85,
        "annual_maintenance_cost": 1.2,
        "annual_energy_cost": 0.8,
        "salvage_value": 5,
        "service_life_years": 50,
        "lifecycle_impact_score": 78,
        "regenerative_impact_score": 85,
        "score_tier": "Gold",
        "composition": [
            MaterialComponent(name="Earth/Clay", share=0.6, phase="PointOfOriginProduction"),
            MaterialComponent(name="Stabilizer", share=0.25, phase="PointOfOriginProduction"),
            MaterialComponent(name="Finish", share=0.15, phase="Maintenance"),
        ],
    },
    {
        "name": "2x6 Wall",
        "phase_impacts": {
            "CO2e": [64, 9, 18, 12, 8],
            "Water": [280, 22, 48, 35, 18],
            "Acidification": [1.6, 0.3, 0.6, 0.4, 0.25],
            "Resource": [85, 12, 24, 16, 10],
            "Energy": [920, 135, 280, 185, 120],
        },
        "cost_per_area": 120,
        "capital_cost": 120,
        "annual_maintenance_cost": 2.5,
        "annual_energy_cost": 1.5,
        "salvage_value": 8,
        "service_life_years": 30,
        "lifecycle_impact_score": 54,
        "regenerative_impact_score": 58,
        "score_tier": "Bronze",
        "composition": [
            MaterialComponent(name="Studs", share=0.4, phase="PointOfOriginProduction"),
            MaterialComponent(name="Insulation", share=0.3, phase="Maintenance"),
            MaterialComponent(name="Siding", share=0.3, phase="EndOfLife"),
        ],
    },
    {
        "name": 'Hempcrete (6" infill)',
        "phase_impacts": {
            "CO2e": [22, 7, 16, 5, 4],
            "Water": [95, 18, 38, 12, 9],
            "Acidification": [0.5, 0.25, 0.5, 0.15, 0.1],
            "Resource": [35, 9, 20, 8, 6],
            "Energy": [340, 105, 245, 75, 60],
        },
        "cost_per_area": 47,
        "capital_cost": 95,
        "annual_maintenance_cost": 1.0,
        "annual_energy_cost": 0.5,
        "salvage_value": 6,
        "service_life_years": 40,
        "lifecycle_impact_score": 72,
        "regenerative_impact_score": 76,
        "score_tier": "Silver",
        "composition": [
            MaterialComponent(name="Hemp Shiv", share=0.5, phase="PointOfOriginProduction"),
            MaterialComponent(name="Lime Binder", share=0.35, phase="PointOfOriginProduction"),
            MaterialComponent(name="Water", share=0.15, phase="Construction"),
        ],
    },
    {
        "name": 'Drywall 4x8 (1/2")',
        "phase_impacts": {
            "CO2e": [31, 5, 10, 2, 7],
            "Water": [145, 12, 28, 6, 16],
            "Acidification": [0.9, 0.15, 0.3, 0.08, 0.2],
            "Resource": [52, 7, 14, 4, 9],
            "Energy": [475, 75, 155, 30, 105],
        },
        "cost_per_area": 45,
        "capital_cost": 45,
        "annual_maintenance_cost": 0.8,
        "annual_energy_cost": 0.3,
        "salvage_value": 2,
        "service_life_years": 25,
        "lifecycle_impact_score": 62,
        "regenerative_impact_score": 65,
        "score_tier": "Silver",
        "composition": [
            MaterialComponent(name="Gypsum Core", share=0.7, phase="PointOfOriginProduction"),
            MaterialComponent(name="Paper Facing", share=0.2, phase="PointOfOriginProduction"),
            MaterialComponent(name="Adhesives", share=0.1, phase="Construction"),
        ],
    },
]


def sample_materials() -> list[MaterialRecord]:
    """Fresh list of the bundled sample records."""
    return [MaterialRecord(**row) for row in _SAMPLE_ROWS]
