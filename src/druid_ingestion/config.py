"""Settings for the druid-spec command."""

from dataclasses import dataclass

from druid_ingestion.adapters.prometheus import DEFAULT_TIMEOUT
from druid_ingestion.core.ingestion import (
    DEFAULT_BROKERS,
    DEFAULT_DATA_SOURCE,
    DEFAULT_TOPIC,
    SpecOptions,
)
from druid_ingestion.core.models import LabelSet

DEFAULT_ADDRESS = "http://prometheus:9090"
DEFAULT_QUERY = '{__name__=~"job:.+"}'


@dataclass(frozen=True)
class Settings:
    """Parsed command-line configuration.

    Attributes:
        address: Prometheus server to send the query to.
        query: PromQL expression whose result supplies the labels.
        tls_skip_verify: Skip TLS certificate verification.
        tls_cert_path: CA bundle for verifying the Prometheus server.
        timeout: Query timeout in seconds.
        output: File to write the spec to, or None.
        stdout: Also print the spec to standard output.
        data_source: Druid dataSource name.
        topic: Kafka topic to ingest from.
        brokers: Comma-separated Kafka broker list.
        ssl: Add the SSL consumer properties block.
        labels_only: Print discovered labels instead of a spec.
        verbose: Enable debug logging.
    """

    address: str = DEFAULT_ADDRESS
    query: str = DEFAULT_QUERY
    tls_skip_verify: bool = False
    tls_cert_path: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    output: str | None = None
    stdout: bool = True
    data_source: str = DEFAULT_DATA_SOURCE
    topic: str = DEFAULT_TOPIC
    brokers: str = DEFAULT_BROKERS
    ssl: bool = False
    labels_only: bool = False
    verbose: bool = False

    def spec_options(self, labels: LabelSet) -> SpecOptions:
        """Combine these settings with discovered labels."""
        return SpecOptions(
            data_source=self.data_source,
            topic=self.topic,
            brokers=self.brokers,
            labels=labels,
            ssl=self.ssl,
        )
