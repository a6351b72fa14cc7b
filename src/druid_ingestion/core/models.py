"""Core domain models for query results and Druid ingestion specs."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# Label holding the metric name in Prometheus results
METRIC_NAME_LABEL = "__name__"

LabelSet = tuple[str, ...]


def _read_only(labels: Mapping[str, str]) -> Mapping[str, str]:
    """Copy labels into a read-only mapping, keeping their order."""
    return MappingProxyType(dict(labels))


@dataclass(frozen=True)
class Sample:
    """A single instant-vector sample.

    Attributes:
        labels: Label names mapped to values, including ``__name__``.
        value: The sample value.
        timestamp: Unix timestamp in seconds.
    """

    labels: Mapping[str, str] = field(default_factory=dict)
    value: float = 0.0
    timestamp: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", _read_only(self.labels))

    @property
    def name(self) -> str:
        """Metric name taken from the reserved ``__name__`` label."""
        return self.labels.get(METRIC_NAME_LABEL, "")


@dataclass(frozen=True)
class Series:
    """A range-vector series: one label set with many (timestamp, value) points."""

    labels: Mapping[str, str] = field(default_factory=dict)
    values: tuple[tuple[float, float], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", _read_only(self.labels))


@dataclass(frozen=True)
class Vector:
    """Instant-vector query result."""

    samples: tuple[Sample, ...] = ()


@dataclass(frozen=True)
class Matrix:
    """Range-vector query result."""

    series: tuple[Series, ...] = ()


@dataclass(frozen=True)
class Scalar:
    """Scalar query result."""

    timestamp: float = 0.0
    value: float = 0.0


@dataclass(frozen=True)
class String:
    """String query result."""

    timestamp: float = 0.0
    value: str = ""


QueryResult = Vector | Matrix | Scalar | String


@dataclass(frozen=True)
class Field:
    """A flattenSpec field mapping a record location to a column.

    Attributes:
        type: Either "path" (JSONPath expression) or "root" (top-level key).
        name: Output column name.
        expr: Extraction expression.
    """

    type: str
    name: str
    expr: str


@dataclass(frozen=True)
class TimestampSpec:
    column: str = "timestamp"
    format: str = "iso"


@dataclass(frozen=True)
class FlattenSpec:
    fields: tuple[Field, ...] = ()


@dataclass(frozen=True)
class DimensionsSpec:
    dimensions: tuple[str, ...] = ()


@dataclass(frozen=True)
class ParseSpec:
    format: str = "json"
    timestamp_spec: TimestampSpec = field(default_factory=TimestampSpec)
    flatten_spec: FlattenSpec = field(default_factory=FlattenSpec)
    dimensions_spec: DimensionsSpec = field(default_factory=DimensionsSpec)


@dataclass(frozen=True)
class Parser:
    """Parser section of the legacy Druid dataSchema."""

    type: str = "string"
    parse_spec: ParseSpec = field(default_factory=ParseSpec)


@dataclass(frozen=True)
class Metric:
    """An aggregator applied at ingestion time.

    Attributes:
        name: Output metric name.
        type: Druid aggregator type (e.g., count, doubleMax).
        field_name: Input column; omitted from the document when None.
    """

    name: str
    type: str
    field_name: str | None = None


@dataclass(frozen=True)
class GranularitySpec:
    type: str = "uniform"
    segment_granularity: str = "HOUR"
    query_granularity: str = "MINUTE"


@dataclass(frozen=True)
class DataSchema:
    data_source: str
    parser: Parser = field(default_factory=Parser)
    metrics_spec: tuple[Metric, ...] = ()
    granularity_spec: GranularitySpec = field(default_factory=GranularitySpec)


@dataclass(frozen=True)
class PasswordProvider:
    """Reference to a secret held in an environment variable."""

    variable: str
    type: str = "environment"


@dataclass(frozen=True)
class KafkaConsumerProperties:
    """Properties passed to the Kafka consumer.

    The ssl/security fields are either all set or all None.
    """

    bootstrap_servers: str
    security_protocol: str | None = None
    ssl_truststore_type: str | None = None
    ssl_enabled_protocols: str | None = None
    ssl_truststore_location: str | None = None
    ssl_truststore_password: PasswordProvider | None = None
    ssl_keystore_location: str | None = None
    ssl_keystore_password: PasswordProvider | None = None


@dataclass(frozen=True)
class IOConfig:
    topic: str
    consumer_properties: KafkaConsumerProperties
    task_duration: str = "PT10M"
    use_earliest_offset: bool = True


@dataclass(frozen=True)
class KafkaIngestionSpec:
    """Root of a Druid Kafka supervisor ingestion spec."""

    data_schema: DataSchema
    io_config: IOConfig
    type: str = "kafka"
