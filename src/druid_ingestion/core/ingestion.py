"""Construction of Druid Kafka ingestion specs from a label set."""

from dataclasses import dataclass, replace

from druid_ingestion.core.models import (
    DataSchema,
    DimensionsSpec,
    Field,
    FlattenSpec,
    IOConfig,
    KafkaConsumerProperties,
    KafkaIngestionSpec,
    LabelSet,
    Metric,
    PasswordProvider,
)

DEFAULT_DATA_SOURCE = "prometheus"
DEFAULT_TOPIC = "prometheus"
DEFAULT_BROKERS = "kafka01:9090,kafka02:9090,kafka03:9090"

# Root-level keys written by prometheus-kafka-adapter
ROOT_FIELDS = (
    Field(type="root", name="name", expr="name"),
    Field(type="root", name="value", expr="value"),
)

DEFAULT_METRICS_SPEC = (
    Metric(name="count", type="count"),
    Metric(name="value", type="doubleMax", field_name="value"),
)

TRUSTSTORE_LOCATION = "/var/private/ssl/truststore.p12"
KEYSTORE_LOCATION = "/var/private/ssl/keystore.p12"
TRUSTSTORE_PASSWORD_ENV = "DRUID_TRUSTSTORE_PASSWORD"
KEYSTORE_PASSWORD_ENV = "DRUID_KEYSTORE_PASSWORD"


@dataclass(frozen=True)
class SpecOptions:
    """Inputs for build_kafka_ingestion_spec.

    Attributes:
        data_source: Name of the Druid dataSource.
        topic: Kafka topic to consume from.
        brokers: Comma-separated broker addresses, passed through verbatim.
        labels: Label names to flatten and index as dimensions.
        ssl: Whether to add the fixed SSL consumer properties.
    """

    data_source: str = DEFAULT_DATA_SOURCE
    topic: str = DEFAULT_TOPIC
    brokers: str = DEFAULT_BROKERS
    labels: LabelSet = ()
    ssl: bool = False


def to_field_list(labels: LabelSet) -> tuple[Field, ...]:
    """Build flattenSpec fields: one path field per label, then name and value.

    Label names are interpolated into the JSONPath expression unescaped.
    """
    path_fields = tuple(
        Field(type="path", name=label, expr=f"$.labels.{label}") for label in labels
    )
    return path_fields + ROOT_FIELDS


def to_dimensions(labels: LabelSet) -> tuple[str, ...]:
    """Build the dimension list: "name" followed by the labels.

    An empty label set yields no dimensions at all, not ("name",).
    """
    if not labels:
        return ()
    return ("name", *labels)


def apply_ssl_config(properties: KafkaConsumerProperties) -> KafkaConsumerProperties:
    """Return properties with the fixed SSL settings used to reach Kafka.

    Only bootstrap_servers is kept from the input.
    """
    return KafkaConsumerProperties(
        bootstrap_servers=properties.bootstrap_servers,
        security_protocol="SSL",
        ssl_truststore_type="PKCS12",
        ssl_enabled_protocols="TLSv1.2",
        ssl_truststore_location=TRUSTSTORE_LOCATION,
        ssl_truststore_password=PasswordProvider(variable=TRUSTSTORE_PASSWORD_ENV),
        ssl_keystore_location=KEYSTORE_LOCATION,
        ssl_keystore_password=PasswordProvider(variable=KEYSTORE_PASSWORD_ENV),
    )


def default_kafka_ingestion_spec() -> KafkaIngestionSpec:
    """Return the baseline spec with every constant field populated."""
    return KafkaIngestionSpec(
        data_schema=DataSchema(
            data_source=DEFAULT_DATA_SOURCE,
            metrics_spec=DEFAULT_METRICS_SPEC,
        ),
        io_config=IOConfig(
            topic=DEFAULT_TOPIC,
            consumer_properties=KafkaConsumerProperties(
                bootstrap_servers=DEFAULT_BROKERS
            ),
        ),
    )


def build_kafka_ingestion_spec(options: SpecOptions | None = None) -> KafkaIngestionSpec:
    """Build a complete Kafka ingestion spec.

    Args:
        options: Data source, topic, brokers, labels and SSL toggle.
            Defaults to SpecOptions().

    Returns:
        A new KafkaIngestionSpec. Never raises for any option values.
    """
    options = options or SpecOptions()
    spec = default_kafka_ingestion_spec()

    parse_spec = replace(
        spec.data_schema.parser.parse_spec,
        flatten_spec=FlattenSpec(fields=to_field_list(options.labels)),
        dimensions_spec=DimensionsSpec(dimensions=to_dimensions(options.labels)),
    )
    data_schema = replace(
        spec.data_schema,
        data_source=options.data_source,
        parser=replace(spec.data_schema.parser, parse_spec=parse_spec),
    )

    properties = KafkaConsumerProperties(bootstrap_servers=options.brokers)
    if options.ssl:
        properties = apply_ssl_config(properties)
    io_config = replace(
        spec.io_config, topic=options.topic, consumer_properties=properties
    )

    return replace(spec, data_schema=data_schema, io_config=io_config)
