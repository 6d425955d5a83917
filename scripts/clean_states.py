#!/usr/bin/env python3
"""Rewrite the state/district reference file in canonical form."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from packages.geo_taxonomy.errors import GeoTaxonomyError
from packages.geo_taxonomy.store import TaxonomyStore
from services.address_migration.app.core.settings import load_settings
from services.address_migration.app.jobs.taxonomy_job import clean_taxonomy

logger = logging.getLogger("clean_states")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--taxonomy", type=Path, default=None, help="State/district JSON file.")
    parser.add_argument("--check", action="store_true", help="Only report; exit 1 if the file is not canonical.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )

    store = TaxonomyStore(args.taxonomy or load_settings().taxonomy_path)
    try:
        report = clean_taxonomy(store, check_only=args.check)
    except GeoTaxonomyError as exc:
        logger.error("Invalid file format: %s", exc)
        return 1

    logger.info(
        "States %d -> %d, districts %d -> %d",
        report.states_before,
        report.states_after,
        report.districts_before,
        report.districts_after,
    )
    if args.check and report.changed:
        logger.error("%s is not in canonical form; run without --check to rewrite it", store.path)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
