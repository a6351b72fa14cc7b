"""Exception types raised by druid_ingestion."""


class IngestionSpecError(Exception):
    """Base class for all druid_ingestion errors."""


class UnsupportedResultShape(IngestionSpecError):
    """Raised when a query result is not an instant vector."""


class SpecDecodeError(IngestionSpecError):
    """Raised when a serialized ingestion spec cannot be decoded."""


class PrometheusQueryError(IngestionSpecError):
    """Raised when the Prometheus HTTP API query fails."""
