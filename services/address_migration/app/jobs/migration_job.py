from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict

from packages.geo_taxonomy.errors import RecordUpdateError
from packages.geo_taxonomy.match import AddressMatcher
from packages.geo_taxonomy.normalize import normalize_taxonomy
from packages.geo_taxonomy.store import TaxonomyStore
from packages.geo_taxonomy.types import AddressRecord
from services.address_migration.app.repositories.address_repository import AddressRecordRepository

logger = logging.getLogger(__name__)


@dataclass
class MigrationSummary:
    scanned: int = 0
    updated: int = 0
    dry_run: bool = False

    def as_dict(self) -> Dict[str, object]:
        return {"scanned": self.scanned, "updated": self.updated, "dry_run": self.dry_run}


class MigrationPolicy:
    """One batch pass filling empty state/district columns from the free-text address."""

    def __init__(
        self,
        store: TaxonomyStore,
        repository: AddressRecordRepository,
        dry_run: bool = False,
        ensure_columns: bool = False,
    ) -> None:
        self.store = store
        self.repository = repository
        self.dry_run = dry_run
        self.ensure_columns = ensure_columns

    def stage(self, record: AddressRecord, matcher: AddressMatcher) -> Dict[str, str]:
        """Columns to write: empty on the record and successfully extracted."""
        matched = matcher.match(record.address)
        staged: Dict[str, str] = {}
        if not record.state and matched.state:
            staged["state"] = matched.state
        if not record.district and matched.district:
            staged["district"] = matched.district
        return staged

    def run(self) -> MigrationSummary:
        taxonomy = normalize_taxonomy(self.store.load())
        matcher = AddressMatcher(taxonomy)
        if self.ensure_columns and not self.dry_run:
            self.repository.ensure_address_columns()
        candidates = self.repository.fetch_candidates()
        logger.info("Found %d hospitals to check", len(candidates))

        summary = MigrationSummary(scanned=len(candidates), dry_run=self.dry_run)
        for record in candidates:
            staged = self.stage(record, matcher)
            if not staged:
                logger.debug("Hospital %s: nothing new extracted", record.id)
                continue

            if not self.dry_run:
                try:
                    self.repository.update_location(record.id, **staged)
                except RecordUpdateError:
                    logger.error("Hospital %s: update failed after %d rows written", record.id, summary.updated)
                    raise
            summary.updated += 1
            logger.info(
                "%sHospital %s: state=%r, district=%r",
                "[dry-run] " if self.dry_run else "",
                record.id,
                staged.get("state"),
                staged.get("district"),
            )
        return summary


def run(
    store: TaxonomyStore,
    repository: AddressRecordRepository,
    dry_run: bool = False,
) -> MigrationSummary:
    return MigrationPolicy(store, repository, dry_run=dry_run).run()
