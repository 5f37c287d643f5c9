"""Material table loading and validation.

Records are validated once at the boundary and then treated as read-only:
  1. ``build_material_table`` — rows → validated, name-unique MaterialTable
  2. ``load_materials_json`` — JSON array (or {"materials": [...]})
  3. ``load_materials_csv``  — long format, one row per material × category
  4. ``load_materials``      — dispatch on file suffix

Every violation raises ``DataIntegrityError``; no row is silently skipped.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from material_impact.config.material import IMPACT_CATEGORIES, MaterialRecord
from material_impact.errors import DataIntegrityError

logger = logging.getLogger(__name__)

CSV_PHASE_COLUMNS: tuple[str, ...] = (
    "production", "transport", "construction", "maintenance", "end_of_life",
)
CSV_SCALAR_COLUMNS: tuple[str, ...] = (
    "cost_per_area",
    "capital_cost",
    "annual_maintenance_cost",
    "annual_energy_cost",
    "salvage_value",
    "service_life_years",
)


class MaterialTable:
    """Immutable, name-indexed collection of validated records.

    Iteration yields records in load order.
    """

    def __init__(self, records: Iterable[MaterialRecord]):
        self._records: tuple[MaterialRecord, ...] = tuple(records)
        self._by_name: dict[str, MaterialRecord] = {}
        for record in self._records:
            if record.name in self._by_name:
                raise DataIntegrityError(f"duplicate material name '{record.name}'")
            self._by_name[record.name] = record

    def __iter__(self) -> Iterator[MaterialRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def names(self) -> list[str]:
        return [r.name for r in self._records]

    @property
    def records(self) -> tuple[MaterialRecord, ...]:
        return self._records

    def get(self, name: str) -> MaterialRecord | None:
        """Record by name, or None when absent."""
        return self._by_name.get(name)


def _describe(row: Any, index: int) -> str:
    if isinstance(row, Mapping) and row.get("name"):
        return f"row {index} ('{row['name']}')"
    if isinstance(row, MaterialRecord):
        return f"row {index} ('{row.name}')"
    return f"row {index}"


def build_material_table(rows: Iterable[Mapping[str, Any] | MaterialRecord]) -> MaterialTable:
    """Validate rows into a MaterialTable.

    Raises
    ------
    DataIntegrityError
        On the first invalid row (chained from pydantic's ValidationError)
        or on a duplicate name.
    """
    records: list[MaterialRecord] = []
    for index, row in enumerate(rows):
        if isinstance(row, MaterialRecord):
            records.append(row)
            continue
        if not isinstance(row, Mapping):
            raise DataIntegrityError(f"{_describe(row, index)}: expected an object, got {type(row).__name__}")
        try:
            records.append(MaterialRecord.model_validate(dict(row)))
        except ValidationError as exc:
            raise DataIntegrityError(f"{_describe(row, index)} is invalid: {exc}") from exc
    return MaterialTable(records)


# ═══════════════════════════════════════════════════════════════════════════
# JSON
# ═══════════════════════════════════════════════════════════════════════════

def load_materials_json(source: str | Path | io.StringIO) -> MaterialTable:
    """Load a material table from JSON.

    ``source`` may be a file path, a JSON string, or a StringIO.  The payload
    is either an array of material objects or ``{"materials": [...]}``.
    """
    if isinstance(source, io.StringIO):
        source.seek(0)
        text = source.read()
        origin = "<stream>"
    elif isinstance(source, Path) or (isinstance(source, str) and not source.lstrip().startswith(("[", "{"))):
        path = Path(source)
        text = path.read_text(encoding="utf-8")
        origin = str(path)
    else:
        text = source
        origin = "<string>"

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataIntegrityError(f"material data in {origin} is not valid JSON: {exc}") from exc

    if isinstance(payload, Mapping):
        payload = payload.get("materials")
    if not isinstance(payload, list):
        raise DataIntegrityError(f"material data in {origin} must be a list of materials")

    table = build_material_table(payload)
    logger.info("Loaded %d materials from %s", len(table), origin)
    return table


# ═══════════════════════════════════════════════════════════════════════════
# CSV
# ═══════════════════════════════════════════════════════════════════════════

def _read_csv(source: str | Path | io.StringIO) -> list[dict[str, str]]:
    """Read CSV from file path or StringIO, returning list of dicts."""
    if isinstance(source, io.StringIO):
        source.seek(0)
        reader = csv.DictReader(source)
        return list(reader)
    path = Path(source)
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        return list(reader)


def _parse_number(row: dict[str, str], column: str, line: int) -> float:
    raw = row.get(column)
    if raw is None or str(raw).strip() == "":
        raise DataIntegrityError(f"CSV line {line}: missing value for '{column}'")
    try:
        return float(raw)
    except ValueError:
        raise DataIntegrityError(f"CSV line {line}: '{column}' is not a number ({raw!r})") from None


def load_materials_csv(source: str | Path | io.StringIO) -> MaterialTable:
    """Load a material table from long-format CSV.

    Expected columns (header row required):
      name, category, production, transport, construction, maintenance,
      end_of_life, cost_per_area, capital_cost, annual_maintenance_cost,
      annual_energy_cost, salvage_value, service_life_years

    Each material appears once per impact category; its scalar columns must
    agree across those rows.
    """
    rows = _read_csv(source)
    merged: dict[str, dict[str, Any]] = {}

    # Header is line 1
    for line, row in enumerate(rows, start=2):
        name = (row.get("name") or "").strip()
        if not name:
            raise DataIntegrityError(f"CSV line {line}: missing material name")
        category = (row.get("category") or "").strip()
        if category not in IMPACT_CATEGORIES:
            raise DataIntegrityError(f"CSV line {line}: unknown impact category '{category}'")

        scalars = {col: _parse_number(row, col, line) for col in CSV_SCALAR_COLUMNS}
        phases = [_parse_number(row, col, line) for col in CSV_PHASE_COLUMNS]

        entry = merged.get(name)
        if entry is None:
            entry = {"name": name, "phase_impacts": {}, **scalars}
            merged[name] = entry
        else:
            for col, value in scalars.items():
                if entry[col] != value:
                    raise DataIntegrityError(
                        f"CSV line {line}: '{col}' for '{name}' conflicts with an earlier row "
                        f"({value} != {entry[col]})"
                    )
        if category in entry["phase_impacts"]:
            raise DataIntegrityError(f"CSV line {line}: duplicate '{category}' row for '{name}'")
        entry["phase_impacts"][category] = phases

    for entry in merged.values():
        years = entry["service_life_years"]
        entry["service_life_years"] = int(years) if float(years).is_integer() else years

    table = build_material_table(merged.values())
    origin = "<stream>" if isinstance(source, io.StringIO) else str(source)
    logger.info("Loaded %d materials from %s", len(table), origin)
    return table


def load_materials(path: str | Path) -> MaterialTable:
    """Load a material table from a ``.json`` or ``.csv`` file."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        return load_materials_json(path)
    if suffix == ".csv":
        return load_materials_csv(path)
    raise DataIntegrityError(f"unsupported material data format '{suffix}' ({path})")
