from __future__ import annotations

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _parse_env_file(path: Path) -> dict[str, str]:
    if not path.is_file():
        return {}
    values: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        key, sep, value = line.strip().partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        values[key] = value.strip().strip("\"'")
    return values


def bootstrap_env(root: Path | None = None) -> None:
    """Load migration env vars from project-level files if process env is empty."""
    root = root or PROJECT_ROOT
    candidates = [
        root / ".env.local",
        root / ".env",
        root / "config" / "address_migration.env",
    ]

    for env_path in candidates:
        for key, value in _parse_env_file(env_path).items():
            os.environ.setdefault(key, value)

    db_url = str(os.getenv("HOSPITAL_DATABASE_URL") or "").strip()
    if not db_url:
        fallback = str(os.getenv("DATABASE_URL") or "").strip()
        if fallback:
            os.environ["HOSPITAL_DATABASE_URL"] = fallback
