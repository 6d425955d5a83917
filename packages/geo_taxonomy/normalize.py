from __future__ import annotations

import unicodedata
from typing import Dict, Iterable, List, Tuple

from packages.geo_taxonomy.types import GeoTaxonomy, State


def collation_key(value: str) -> Tuple[str, str, str]:
    # Accents and case only break ties, as a root-locale compare would.
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), value.casefold(), value)


def dedupe_case_insensitive(names: Iterable[str]) -> List[str]:
    """Drop later case variants, keeping the first-seen spelling of each name."""
    seen: Dict[str, str] = {}
    for name in names:
        key = name.lower()
        if key not in seen:
            seen[key] = name
    return list(seen.values())


def _clean_districts(districts: Iterable[str]) -> List[str]:
    trimmed = [str(item or "").strip() for item in districts]
    unique = dedupe_case_insensitive(item for item in trimmed if item)
    return sorted(unique, key=collation_key)


def normalize_taxonomy(raw: GeoTaxonomy) -> GeoTaxonomy:
    cleaned = [
        State(name=str(state.name or "").strip(), districts=_clean_districts(state.districts))
        for state in raw.states
    ]

    merged: Dict[str, State] = {}
    for state in cleaned:
        key = state.name.lower()
        existing = merged.get(key)
        if existing is None:
            merged[key] = State(name=state.name, districts=list(state.districts))
            continue
        combined = dedupe_case_insensitive(existing.districts + state.districts)
        existing.districts = sorted(combined, key=collation_key)

    states = sorted(merged.values(), key=lambda item: collation_key(item.name))
    return GeoTaxonomy(states=states)


def districts_for_state(taxonomy: GeoTaxonomy, state_name: str) -> List[str]:
    """District options for the edit form's state picker; empty for an unknown state."""
    key = str(state_name or "").strip().lower()
    if not key:
        return []
    for state in taxonomy.states:
        if state.name.lower() == key:
            return list(state.districts)
    return []
