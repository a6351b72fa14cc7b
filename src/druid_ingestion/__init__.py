"""Generate Apache Druid Kafka ingestion specs from Prometheus query results."""

from druid_ingestion.core.errors import (
    IngestionSpecError,
    PrometheusQueryError,
    SpecDecodeError,
    UnsupportedResultShape,
)
from druid_ingestion.core.ingestion import (
    SpecOptions,
    build_kafka_ingestion_spec,
    default_kafka_ingestion_spec,
)
from druid_ingestion.core.labels import extract_unique_labels

__all__ = [
    "IngestionSpecError",
    "PrometheusQueryError",
    "SpecDecodeError",
    "SpecOptions",
    "UnsupportedResultShape",
    "build_kafka_ingestion_spec",
    "default_kafka_ingestion_spec",
    "extract_unique_labels",
]
