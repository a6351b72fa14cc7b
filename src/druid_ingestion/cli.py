"""Command-line entry point: generate a Druid ingestion spec from Prometheus."""

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from druid_ingestion.adapters.logging import configure_logging
from druid_ingestion.adapters.prometheus import PrometheusClient
from druid_ingestion.config import Settings
from druid_ingestion.core.encoding.json_spec import encode_spec
from druid_ingestion.core.errors import IngestionSpecError
from druid_ingestion.core.ingestion import build_kafka_ingestion_spec
from druid_ingestion.core.labels import extract_unique_labels
from druid_ingestion.core.ports import QueryPort

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Settings], QueryPort]


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for druid-spec."""
    defaults = Settings()
    p = argparse.ArgumentParser(
        prog="druid-spec",
        description="Generate a Druid.io IngestionSpec from a Prometheus query result.",
    )
    p.add_argument("-a", "--address", default=defaults.address, help="the address of the Prometheus server to send the query to")
    p.add_argument("-q", "--query", default=defaults.query, help="the query to send to the Prometheus server")
    p.add_argument("--tls-skip-verify", action="store_true", help="skip TLS certificate verification")
    p.add_argument("--tls-cert-path", default=defaults.tls_cert_path, help="path to the TLS certificate")
    p.add_argument("--timeout", type=float, default=defaults.timeout, help="query timeout in seconds")
    p.add_argument("-o", "--output", default=defaults.output, help="write the spec to this file")
    p.add_argument("--no-stdout", action="store_true", help="do not print the spec to stdout (requires --output)")
    p.add_argument("--data-source", default=defaults.data_source, help="name of the Druid dataSource")
    p.add_argument("--topic", default=defaults.topic, help="Kafka topic to consume data from")
    p.add_argument("--brokers", default=defaults.brokers, help="comma-separated Kafka broker addresses")
    p.add_argument("--ssl", action="store_true", help="add SSL consumer properties for Kafka")
    p.add_argument("--labels-only", action="store_true", help="print the unique label names and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return p


def parse_settings(argv: Sequence[str] | None = None) -> Settings:
    """Parse command-line arguments into Settings."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.no_stdout and not args.output:
        parser.error("--no-stdout requires --output")
    return Settings(
        address=args.address,
        query=args.query,
        tls_skip_verify=args.tls_skip_verify,
        tls_cert_path=args.tls_cert_path,
        timeout=args.timeout,
        output=args.output,
        stdout=not args.no_stdout,
        data_source=args.data_source,
        topic=args.topic,
        brokers=args.brokers,
        ssl=args.ssl,
        labels_only=args.labels_only,
        verbose=args.verbose,
    )


def _prometheus_client(settings: Settings) -> PrometheusClient:
    return PrometheusClient(
        settings.address,
        timeout=settings.timeout,
        tls_skip_verify=settings.tls_skip_verify,
        tls_cert_path=settings.tls_cert_path,
    )


def render(settings: Settings, client: QueryPort) -> str:
    """Query, extract labels and return the text to output.

    Raises:
        IngestionSpecError: If the query or label extraction fails.
    """
    result = client.query(settings.query)
    labels = extract_unique_labels(result)
    logger.info("discovered %d unique labels", len(labels), extra={"query": settings.query})
    logger.debug("labels: %s", ", ".join(labels))

    if settings.labels_only:
        return "\n".join(labels)
    spec = build_kafka_ingestion_spec(settings.spec_options(labels))
    return encode_spec(spec)


def run(settings: Settings, client_factory: ClientFactory | None = None) -> int:
    """Generate output for settings and write it. Returns the exit code."""
    factory = client_factory or _prometheus_client
    try:
        client = factory(settings)
        try:
            text = render(settings, client)
        finally:
            close = getattr(client, "close", None)
            if close is not None:
                close()
    except (IngestionSpecError, OSError) as e:
        logger.error("error: %s", e)
        return 1

    if settings.output:
        try:
            Path(settings.output).write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            logger.error("error: writing %s: %s", settings.output, e)
            return 1
        logger.info("spec written", extra={"path": settings.output})
    if settings.stdout:
        sys.stdout.write(text + "\n")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run druid-spec with argv and return the exit code."""
    settings = parse_settings(argv)
    configure_logging(settings.verbose)
    return run(settings)


if __name__ == "__main__":
    sys.exit(main())
