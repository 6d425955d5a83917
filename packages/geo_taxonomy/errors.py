class GeoTaxonomyError(Exception):
    """Base error for taxonomy maintenance and address migration."""


class TaxonomyLoadError(GeoTaxonomyError):
    """Raised when the taxonomy file is missing, unreadable or malformed."""


class TaxonomyWriteError(GeoTaxonomyError):
    """Raised when the taxonomy file cannot be rewritten."""


class StoreUnavailableError(GeoTaxonomyError):
    """Raised when the address record store cannot be opened."""


class RecordUpdateError(GeoTaxonomyError):
    """Raised when a single row update fails."""

    def __init__(self, record_id: object, message: str) -> None:
        super().__init__(f"update of record {record_id} failed: {message}")
        self.record_id = record_id
