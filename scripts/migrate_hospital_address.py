#!/usr/bin/env python3
"""Fill empty hospital state/district columns from the free-text address."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from packages.geo_taxonomy.errors import GeoTaxonomyError, RecordUpdateError
from packages.geo_taxonomy.store import TaxonomyStore
from services.address_migration.app.core.settings import load_settings
from services.address_migration.app.jobs.migration_job import MigrationPolicy
from services.address_migration.app.repositories.address_repository import AddressRecordRepository

logger = logging.getLogger("migrate_hospital_address")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--taxonomy", type=Path, default=None, help="State/district JSON file.")
    parser.add_argument("--database-url", default=None, help="SQLAlchemy URL of the hospital store.")
    parser.add_argument("--table", default=None, help="Table holding hospital addresses.")
    parser.add_argument("--dry-run", action="store_true", help="Log extractions without writing.")
    parser.add_argument(
        "--ensure-columns",
        action="store_true",
        help="Add missing address_lane1/address_lane2/state/district/pin_code columns first.",
    )
    parser.add_argument("--verbose", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )

    settings = load_settings()
    store = TaxonomyStore(args.taxonomy or settings.taxonomy_path)
    logger.info("Starting hospital address migration...")

    try:
        repository = AddressRecordRepository(
            args.database_url or settings.database_url,
            table=args.table or settings.table,
        )
    except GeoTaxonomyError as exc:
        logger.error("Migration error: %s", exc)
        return 1

    try:
        summary = MigrationPolicy(
            store,
            repository,
            dry_run=args.dry_run,
            ensure_columns=args.ensure_columns,
        ).run()
    except RecordUpdateError as exc:
        logger.error("Migration aborted: %s", exc)
        return 1
    except GeoTaxonomyError as exc:
        logger.error("Migration error: %s", exc)
        return 1
    finally:
        repository.close()

    if summary.scanned == 0:
        logger.info("No hospitals need migration")
    logger.info(
        "Migration complete! Scanned %d hospitals, updated %d%s",
        summary.scanned,
        summary.updated,
        " (dry run, nothing written)" if summary.dry_run else "",
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
