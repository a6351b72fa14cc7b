"""BDD step definitions for ingestion spec generation."""

from dataclasses import dataclass, field, replace

import pytest
from pytest_bdd import given, parsers, then, when

from druid_ingestion.core.encoding.json_spec import decode_spec, encode_spec, spec_to_dict
from druid_ingestion.core.errors import UnsupportedResultShape
from druid_ingestion.core.ingestion import SpecOptions, build_kafka_ingestion_spec
from druid_ingestion.core.labels import extract_unique_labels
from druid_ingestion.core.models import (
    Field,
    KafkaIngestionSpec,
    LabelSet,
    Matrix,
    QueryResult,
    Sample,
    Scalar,
    String,
    Vector,
)

SECURITY_KEYS = (
    "security.protocol",
    "ssl.truststore.type",
    "ssl.enabled.protocols",
    "ssl.truststore.location",
    "ssl.truststore.password",
    "ssl.keystore.location",
    "ssl.keystore.password",
)

NON_VECTOR_RESULTS: dict[str, QueryResult] = {
    "matrix": Matrix(),
    "scalar": Scalar(),
    "string": String(),
}


@dataclass
class SpecScenarioContext:
    """Shared state between steps in a spec generation scenario."""

    options: SpecOptions = field(default_factory=SpecOptions)
    result: QueryResult | None = None
    labels: LabelSet | None = None
    error: Exception | None = None
    spec: KafkaIngestionSpec | None = None
    decoded: KafkaIngestionSpec | None = None


@pytest.fixture
def ctx() -> SpecScenarioContext:
    """Fresh scenario context for each test."""
    return SpecScenarioContext()


def _split(value: str) -> tuple[str, ...]:
    return tuple(value.split(","))


def _consumer_properties(ctx: SpecScenarioContext) -> dict[str, object]:
    assert ctx.spec is not None
    return spec_to_dict(ctx.spec)["ioConfig"]["consumerProperties"]


# === Given ===
@given(parsers.parse('a spec for data source "{data_source}", topic "{topic}" and brokers "{brokers}"'))
def step_spec_options(
    ctx: SpecScenarioContext, data_source: str, topic: str, brokers: str
) -> None:
    ctx.options = SpecOptions(data_source=data_source, topic=topic, brokers=brokers)


@given("a query result with samples:")
def step_vector(ctx: SpecScenarioContext, datatable: list[list[str]]) -> None:
    header, *rows = datatable
    ctx.result = Vector(
        samples=tuple(Sample(labels=dict(zip(header, row))) for row in rows)
    )


@given(parsers.parse("a {shape} query result"))
def step_non_vector(ctx: SpecScenarioContext, shape: str) -> None:
    ctx.result = NON_VECTOR_RESULTS[shape]


@given("SSL is enabled")
def step_ssl(ctx: SpecScenarioContext) -> None:
    ctx.options = replace(ctx.options, ssl=True)


# === When ===
@when("the labels are extracted")
def step_extract(ctx: SpecScenarioContext) -> None:
    assert ctx.result is not None
    try:
        ctx.labels = extract_unique_labels(ctx.result)
    except UnsupportedResultShape as e:
        ctx.error = e


@when("the spec is built")
def step_build(ctx: SpecScenarioContext) -> None:
    assert ctx.labels is not None
    ctx.spec = build_kafka_ingestion_spec(replace(ctx.options, labels=ctx.labels))


@when("the spec is encoded and decoded again")
def step_round_trip(ctx: SpecScenarioContext) -> None:
    assert ctx.spec is not None
    ctx.decoded = decode_spec(encode_spec(ctx.spec))


# === Then ===
@then(parsers.parse('the labels should be "{labels}"'))
def step_labels(ctx: SpecScenarioContext, labels: str) -> None:
    assert ctx.labels == _split(labels)


@then("the labels should be empty")
def step_labels_empty(ctx: SpecScenarioContext) -> None:
    assert ctx.labels == ()


@then("the flatten fields should be:")
def step_fields(ctx: SpecScenarioContext, datatable: list[list[str]]) -> None:
    assert ctx.spec is not None
    expected = tuple(Field(type=t, name=n, expr=e) for t, n, e in datatable[1:])
    assert ctx.spec.data_schema.parser.parse_spec.flatten_spec.fields == expected


@then(parsers.parse('the dimensions should be "{dimensions}"'))
def step_dimensions(ctx: SpecScenarioContext, dimensions: str) -> None:
    assert ctx.spec is not None
    actual = ctx.spec.data_schema.parser.parse_spec.dimensions_spec.dimensions
    assert actual == _split(dimensions)


@then("the dimensions should be empty")
def step_dimensions_empty(ctx: SpecScenarioContext) -> None:
    assert ctx.spec is not None
    assert ctx.spec.data_schema.parser.parse_spec.dimensions_spec.dimensions == ()


@then("no security properties should be present")
def step_no_security(ctx: SpecScenarioContext) -> None:
    props = _consumer_properties(ctx)
    assert not any(key in props for key in SECURITY_KEYS)


@then("the security properties should be:")
def step_security(ctx: SpecScenarioContext, datatable: list[list[str]]) -> None:
    props = _consumer_properties(ctx)
    assert all(key in props for key in SECURITY_KEYS)
    for key, value in datatable[1:]:
        assert props[key] == value


@then(parsers.parse('the "{key}" credential should read variable "{variable}"'))
def step_credential(ctx: SpecScenarioContext, key: str, variable: str) -> None:
    assert _consumer_properties(ctx)[key] == {"type": "environment", "variable": variable}


@then(parsers.parse('extraction should fail with "{message}"'))
def step_extraction_failed(ctx: SpecScenarioContext, message: str) -> None:
    assert isinstance(ctx.error, UnsupportedResultShape)
    assert str(ctx.error) == message
    assert ctx.labels is None


@then("the decoded spec should equal the built spec")
def step_decoded_equal(ctx: SpecScenarioContext) -> None:
    assert ctx.decoded == ctx.spec
