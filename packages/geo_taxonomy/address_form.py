"""Helpers behind the hospital edit form: lane split, address compose and PIN code checks."""
from __future__ import annotations

import re
from typing import Optional, Tuple

from packages.geo_taxonomy.match import extract_postal_code

_PIN_CODE = re.compile(r"^\d{6}$", re.ASCII)


def is_valid_pin_code(value: Optional[str]) -> bool:
    return bool(value) and _PIN_CODE.match(str(value)) is not None


def backfill_pin_code(record_pin: Optional[str], address: Optional[str]) -> Optional[str]:
    """Prefer the stored pin code; otherwise pull one out of the legacy address."""
    if record_pin:
        return record_pin
    return extract_postal_code(address)


def split_address_lanes(address: Optional[str], district: Optional[str] = None) -> Tuple[str, str]:
    parts = str(address or "").split(",")
    lane1 = parts[0].strip() if parts else ""
    second = parts[1].strip() if len(parts) > 1 else ""
    # The second fragment is usually the district when lane 2 was never filled in.
    lane2 = second if second and second != district else ""
    return lane1, lane2


def compose_address(
    lane1: str,
    lane2: Optional[str],
    district: str,
    state: str,
    pin_code: Optional[str] = None,
) -> str:
    head = lane1.strip()
    if lane2 and lane2.strip():
        head = f"{head}, {lane2.strip()}"
    return f"{head}, {district.strip()}, {state.strip()} {pin_code or ''}".strip()
