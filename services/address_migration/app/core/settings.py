from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel

from src.common.env_bootstrap import PROJECT_ROOT, bootstrap_env

DEFAULT_DATABASE_URL = "sqlite:///healthcare.db"
DEFAULT_TAXONOMY_PATH = PROJECT_ROOT / "shared" / "india-states-districts.json"
DEFAULT_TABLE = "hospitals"


class Settings(BaseModel):
    database_url: str = DEFAULT_DATABASE_URL
    taxonomy_path: Path = DEFAULT_TAXONOMY_PATH
    table: str = DEFAULT_TABLE


def _resolve_path(value: str) -> Path:
    path = Path(value)
    return path if path.is_absolute() else PROJECT_ROOT / path


def load_settings(bootstrap: bool = True) -> Settings:
    if bootstrap:
        bootstrap_env()
    taxonomy_path = str(os.getenv("GEO_TAXONOMY_PATH") or "").strip()
    return Settings(
        database_url=str(os.getenv("HOSPITAL_DATABASE_URL") or "").strip() or DEFAULT_DATABASE_URL,
        taxonomy_path=_resolve_path(taxonomy_path) if taxonomy_path else DEFAULT_TAXONOMY_PATH,
        table=str(os.getenv("HOSPITAL_TABLE") or "").strip() or DEFAULT_TABLE,
    )
