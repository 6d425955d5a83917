import json
import sqlite3
from pathlib import Path

import pytest

TAXONOMY = {
    "states": [
        {"name": "Delhi", "districts": ["South Delhi", "Central Delhi"]},
        {"name": "Kerala", "districts": ["Wayanad", "Ernakulam"]},
        {"name": "kerala", "districts": ["ernakulam", "Thrissur"]},
        {"name": "Maharashtra", "districts": ["Pune", "Aurangabad"]},
    ]
}


def create_hospitals(db_path: Path, rows: list, with_location_columns: bool = True) -> None:
    conn = sqlite3.connect(db_path)
    try:
        if with_location_columns:
            conn.execute(
                "CREATE TABLE hospitals (id INTEGER PRIMARY KEY, hospital_name TEXT, address TEXT NOT NULL, "
                "state TEXT, district TEXT)"
            )
            conn.executemany(
                "INSERT INTO hospitals (id, hospital_name, address, state, district) VALUES (?, ?, ?, ?, ?)",
                rows,
            )
        else:
            conn.execute("CREATE TABLE hospitals (id INTEGER PRIMARY KEY, hospital_name TEXT, address TEXT NOT NULL)")
            conn.executemany("INSERT INTO hospitals (id, hospital_name, address) VALUES (?, ?, ?)", rows)
        conn.commit()
    finally:
        conn.close()


def read_locations(db_path: Path) -> dict:
    conn = sqlite3.connect(db_path)
    try:
        rows = conn.execute("SELECT id, state, district FROM hospitals ORDER BY id").fetchall()
    finally:
        conn.close()
    return {row[0]: (row[1], row[2]) for row in rows}


@pytest.fixture
def taxonomy_path(tmp_path) -> Path:
    path = tmp_path / "india-states-districts.json"
    path.write_text(json.dumps(TAXONOMY), encoding="utf-8")
    return path


@pytest.fixture
def hospital_db(tmp_path) -> Path:
    db_path = tmp_path / "healthcare.db"
    create_hospitals(
        db_path,
        [
            (1, "City Care", "12 MG Road, Pune, Maharashtra", None, None),
            (2, "Hill View", "4 Lake Rd, Wayanad, Kerala", "Kerala", ""),
            (3, "Capital Clinic", "123 MG Road, New Delhi, Delhi", "", None),
            (4, "Nowhere Hospital", "Plot 9, Unknown Town", None, None),
            (5, "Complete Care", "1 Ring Rd, South Delhi, Delhi", "Delhi", "South Delhi"),
            (6, "Blank Address", "", None, None),
            (7, "Kept State", "7 Beach Rd, Ernakulam, Kerala", "Tamil Nadu", None),
        ],
    )
    return db_path
