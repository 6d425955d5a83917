from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class State(BaseModel):
    name: str
    districts: List[str] = Field(default_factory=list)

    @field_validator("districts", mode="before")
    @classmethod
    def _coerce_districts(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return ["" if item is None else item for item in value]
        return value


class GeoTaxonomy(BaseModel):
    states: List[State] = Field(default_factory=list)

    def state_names(self) -> List[str]:
        return [state.name for state in self.states]

    def district_count(self) -> int:
        return sum(len(state.districts) for state in self.states)


@dataclass
class AddressRecord:
    id: Any
    address: str
    state: Optional[str] = None
    district: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "AddressRecord":
        return cls(
            id=row["id"],
            address=str(row.get("address") or ""),
            state=row.get("state"),
            district=row.get("district"),
        )


@dataclass
class ExtractedLocation:
    state: Optional[str] = None
    district: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.state and not self.district
