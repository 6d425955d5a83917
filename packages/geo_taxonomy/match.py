from __future__ import annotations

import re
from typing import Dict, Optional, Set

from packages.geo_taxonomy.types import ExtractedLocation, GeoTaxonomy

_POSTAL_CODE = re.compile(r"\b\d{6}\b", re.ASCII)


def extract_postal_code(address: Optional[str]) -> Optional[str]:
    if not address:
        return None
    match = _POSTAL_CODE.search(address)
    return match.group(0) if match else None


def build_state_lookup(taxonomy: GeoTaxonomy) -> Dict[str, str]:
    return {state.name.lower(): state.name for state in taxonomy.states}


def build_district_index(taxonomy: GeoTaxonomy) -> Set[str]:
    # Flat across all states: a district counts as recognized wherever it lives.
    index: Set[str] = set()
    for state in taxonomy.states:
        for district in state.districts:
            if district:
                index.add(district.lower())
                index.add(district)
    return index


class AddressMatcher:
    """Extracts a state and district from comma-delimited free-text addresses.

    Every fragment is checked against both indices. When several fragments
    match, the later one wins.
    """

    def __init__(self, taxonomy: GeoTaxonomy) -> None:
        self._states = build_state_lookup(taxonomy)
        self._canonical_states = set(self._states.values())
        self._districts = build_district_index(taxonomy)

    def match(self, address: Optional[str]) -> ExtractedLocation:
        location = ExtractedLocation()
        if not address:
            return location

        for part in (item.strip() for item in address.split(",")):
            if not part:
                continue
            lowered = part.lower()

            if lowered in self._states:
                location.state = self._states[lowered]
            elif part in self._canonical_states:
                location.state = part

            if lowered in self._districts or part in self._districts:
                location.district = part

        return location


def match_location(address: Optional[str], taxonomy: GeoTaxonomy) -> ExtractedLocation:
    return AddressMatcher(taxonomy).match(address)
