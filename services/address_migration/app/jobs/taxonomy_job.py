from __future__ import annotations

import logging
from dataclasses import dataclass

from packages.geo_taxonomy.normalize import normalize_taxonomy
from packages.geo_taxonomy.store import TaxonomyStore, render_taxonomy

logger = logging.getLogger(__name__)


@dataclass
class TaxonomyCleanReport:
    states_before: int
    states_after: int
    districts_before: int
    districts_after: int
    changed: bool
    written: bool


def clean_taxonomy(store: TaxonomyStore, check_only: bool = False) -> TaxonomyCleanReport:
    raw = store.load()
    cleaned = normalize_taxonomy(raw)
    # Compare rendered output so formatting drift also counts as a change.
    current = store.read_text()
    changed = render_taxonomy(cleaned) != current

    written = False
    if changed and not check_only:
        store.save(cleaned)
        written = True
        logger.info("Cleaned and wrote %s", store.path)
    elif not changed:
        logger.info("%s is already in canonical form", store.path)

    return TaxonomyCleanReport(
        states_before=len(raw.states),
        states_after=len(cleaned.states),
        districts_before=raw.district_count(),
        districts_after=cleaned.district_count(),
        changed=changed,
        written=written,
    )
