"""Selection / filter layer — which records a comparison sees.

Plain predicate and set operations.  Nothing here mutates its inputs.
"""

from __future__ import annotations

from collections.abc import Iterable

from material_impact.config.material import MaterialRecord
from material_impact.config.selection import SelectionConfig
from material_impact.errors import DataIntegrityError


def filter_materials(
    records: Iterable[MaterialRecord],
    selection: SelectionConfig,
) -> list[MaterialRecord]:
    """Selected records whose name contains the search query, in table order."""
    query = selection.search_query.lower()
    selected = None if selection.selected_names is None else set(selection.selected_names)
    return [
        r for r in records
        if (selected is None or r.name in selected) and query in r.name.lower()
    ]


def toggle_selection(selected: list[str], name: str) -> list[str]:
    """New selection with ``name`` removed if present, appended otherwise."""
    if name in selected:
        return [n for n in selected if n != name]
    return [*selected, name]


def resolve_baseline(
    records: Iterable[MaterialRecord],
    baseline_name: str | None,
) -> MaterialRecord | None:
    """Look up the baseline record by name.

    None selects no baseline.  A name that is not in the table raises
    ``DataIntegrityError`` rather than silently falling back to "no baseline".
    """
    if baseline_name is None:
        return None
    for record in records:
        if record.name == baseline_name:
            return record
    raise DataIntegrityError(f"baseline material '{baseline_name}' is not in the material table")
