from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from packages.geo_taxonomy.errors import TaxonomyLoadError, TaxonomyWriteError
from packages.geo_taxonomy.types import GeoTaxonomy

logger = logging.getLogger(__name__)


class TaxonomyStore:
    """Whole-file JSON persistence for the state/district reference."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def read_text(self) -> str:
        if not self.path.exists() or not self.path.is_file():
            raise TaxonomyLoadError(f"taxonomy file not found: {self.path}")
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise TaxonomyLoadError(f"cannot read taxonomy file {self.path}: {exc}") from exc

    def load(self) -> GeoTaxonomy:
        raw = self.read_text()
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise TaxonomyLoadError(f"taxonomy file {self.path} is not valid JSON: {exc}") from exc

        # The top level must be an object carrying a states array.
        if not isinstance(payload, dict) or not isinstance(payload.get("states"), list):
            raise TaxonomyLoadError(f"invalid taxonomy format in {self.path}: expected an object with a 'states' array")
        try:
            taxonomy = GeoTaxonomy.model_validate(payload)
        except ValidationError as exc:
            raise TaxonomyLoadError(f"invalid taxonomy format in {self.path}: {exc}") from exc

        logger.debug("Loaded %d states from %s", len(taxonomy.states), self.path)
        return taxonomy

    def save(self, taxonomy: GeoTaxonomy) -> None:
        content = render_taxonomy(taxonomy)
        directory = self.path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=str(directory),
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as fh:
                tmp_name = fh.name
                fh.write(content)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise TaxonomyWriteError(f"cannot write taxonomy file {self.path}: {exc}") from exc
        logger.debug("Wrote %d states to %s", len(taxonomy.states), self.path)


def render_taxonomy(taxonomy: GeoTaxonomy) -> str:
    return json.dumps(taxonomy.model_dump(), ensure_ascii=False, indent=2) + "\n"
