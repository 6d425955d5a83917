from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from packages.geo_taxonomy.errors import RecordUpdateError, StoreUnavailableError
from packages.geo_taxonomy.types import AddressRecord

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

ADDRESS_COLUMNS = ("address_lane1", "address_lane2", "state", "district", "pin_code")
LOCATION_COLUMNS = ("state", "district")


def _sqlite_file(database_url: str) -> Optional[Path]:
    url = make_url(database_url)
    if not url.drivername.startswith("sqlite"):
        return None
    database = url.database or ""
    if not database or database == ":memory:" or database.startswith("file:"):
        return None
    return Path(database)


class AddressRecordRepository:
    """Reads candidate address rows and writes back state/district columns.

    Every update runs in its own transaction, so rows written before a
    failure stay committed.
    """

    def __init__(self, database_url: str, table: str = "hospitals") -> None:
        if not _IDENTIFIER.match(table or ""):
            raise StoreUnavailableError(f"invalid table name: {table!r}")
        self.table = table
        self.database_url = database_url
        self._engine = self._open(database_url)

    def _open(self, database_url: str) -> Engine:
        try:
            sqlite_path = _sqlite_file(database_url)
        except ArgumentError as exc:
            raise StoreUnavailableError(f"invalid database url: {exc}") from exc
        # sqlite would silently create an empty database file.
        if sqlite_path is not None and not sqlite_path.is_file():
            raise StoreUnavailableError(f"database file not found: {sqlite_path}")

        try:
            engine = create_engine(database_url)
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            has_table = inspect(engine).has_table(self.table)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"cannot open record store: {exc}") from exc
        if not has_table:
            engine.dispose()
            raise StoreUnavailableError(f"table {self.table!r} not found in record store")
        return engine

    def close(self) -> None:
        self._engine.dispose()

    def __enter__(self) -> "AddressRecordRepository":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def existing_columns(self) -> List[str]:
        try:
            return [column["name"] for column in inspect(self._engine).get_columns(self.table)]
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"cannot inspect table {self.table!r}: {exc}") from exc

    def ensure_address_columns(self) -> List[str]:
        """Add any missing structured address columns. Never alters existing ones."""
        present = set(self.existing_columns())
        added: List[str] = []
        try:
            with self._engine.begin() as conn:
                for column in ADDRESS_COLUMNS:
                    if column in present:
                        continue
                    conn.execute(text(f"ALTER TABLE {self.table} ADD COLUMN {column} TEXT"))
                    added.append(column)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"cannot add address columns to {self.table!r}: {exc}") from exc
        if added:
            logger.info("Added columns to %s: %s", self.table, ", ".join(added))
        return added

    def fetch_candidates(self) -> List[AddressRecord]:
        sql = f"""
            SELECT id, address, state, district
            FROM {self.table}
            WHERE (state IS NULL OR state = '' OR district IS NULL OR district = '')
              AND address IS NOT NULL AND address != ''
            ORDER BY id
        """
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(text(sql)).mappings().all()
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"cannot read candidates from {self.table!r}: {exc}") from exc
        return [AddressRecord.from_row(dict(row)) for row in rows]

    def get(self, record_id: Any) -> Optional[AddressRecord]:
        sql = f"SELECT id, address, state, district FROM {self.table} WHERE id = :id"
        try:
            with self._engine.connect() as conn:
                row = conn.execute(text(sql), {"id": record_id}).mappings().first()
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"cannot read record {record_id}: {exc}") from exc
        return AddressRecord.from_row(dict(row)) if row else None

    def update_location(
        self,
        record_id: Any,
        state: Optional[str] = None,
        district: Optional[str] = None,
    ) -> None:
        values: Dict[str, str] = {}
        if state:
            values["state"] = state
        if district:
            values["district"] = district
        if not values:
            raise RecordUpdateError(record_id, "no columns staged")

        assignments = ", ".join(f"{column} = :{column}" for column in LOCATION_COLUMNS if column in values)
        sql = f"UPDATE {self.table} SET {assignments} WHERE id = :id"
        try:
            with self._engine.begin() as conn:
                result = conn.execute(text(sql), {**values, "id": record_id})
        except SQLAlchemyError as exc:
            raise RecordUpdateError(record_id, str(exc)) from exc
        if result.rowcount == 0:
            raise RecordUpdateError(record_id, "row not found")
