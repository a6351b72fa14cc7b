"""Prometheus HTTP API adapter.

Runs instant queries via ``/api/v1/query`` using httpx and decodes the
response envelope into core query result models.
"""

import logging
import ssl
from typing import Any

import httpx

from druid_ingestion.core.errors import PrometheusQueryError
from druid_ingestion.core.models import (
    Matrix,
    QueryResult,
    Sample,
    Scalar,
    Series,
    String,
    Vector,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
QUERY_PATH = "/api/v1/query"


def _decode_point(point: list[Any]) -> tuple[float, float]:
    timestamp, value = point
    return float(timestamp), float(value)


def decode_query_result(payload: dict[str, Any]) -> QueryResult:
    """Decode the ``data`` section of a Prometheus query response.

    Args:
        payload: Dict with "resultType" and "result" keys.

    Returns:
        Vector, Matrix, Scalar or String matching resultType.

    Raises:
        PrometheusQueryError: If resultType is unknown or result is malformed.
    """
    if not isinstance(payload, dict):
        raise PrometheusQueryError("malformed query result: expected an object")
    result_type = payload.get("resultType")
    result = payload.get("result")
    try:
        if result_type == "vector":
            return Vector(
                samples=tuple(
                    Sample(
                        labels=dict(item.get("metric", {})),
                        value=float(item["value"][1]),
                        timestamp=float(item["value"][0]),
                    )
                    for item in result
                )
            )
        if result_type == "matrix":
            return Matrix(
                series=tuple(
                    Series(
                        labels=dict(item.get("metric", {})),
                        values=tuple(_decode_point(p) for p in item["values"]),
                    )
                    for item in result
                )
            )
        if result_type == "scalar":
            timestamp, value = _decode_point(result)
            return Scalar(timestamp=timestamp, value=value)
        if result_type == "string":
            return String(timestamp=float(result[0]), value=str(result[1]))
    except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
        raise PrometheusQueryError(f"malformed {result_type} result: {e!r}") from e
    raise PrometheusQueryError(f"unknown result type: {result_type!r}")


def _verify_setting(tls_skip_verify: bool, tls_cert_path: str | None) -> bool | ssl.SSLContext:
    if tls_skip_verify:
        return False
    if tls_cert_path:
        return ssl.create_default_context(cafile=tls_cert_path)
    return True


class PrometheusClient:
    """QueryPort implementation backed by the Prometheus HTTP API.

    Example:
        ```python
        with PrometheusClient("http://prometheus:9090") as client:
            result = client.query('{__name__=~"job:.+"}')
        ```
    """

    def __init__(
        self,
        address: str,
        timeout: float = DEFAULT_TIMEOUT,
        tls_skip_verify: bool = False,
        tls_cert_path: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            address: Base URL of the Prometheus server.
            timeout: Request timeout in seconds.
            tls_skip_verify: Disable TLS certificate verification.
            tls_cert_path: CA bundle used to verify the server certificate.
            transport: Optional httpx transport, mainly for tests.

        Raises:
            PrometheusQueryError: If address is not a valid URL.
        """
        self.address = address.rstrip("/")
        try:
            self._client = httpx.Client(
                base_url=self.address,
                timeout=timeout,
                verify=_verify_setting(tls_skip_verify, tls_cert_path),
                transport=transport,
            )
        except httpx.InvalidURL as e:
            raise PrometheusQueryError(f"invalid Prometheus address {address!r}: {e}") from e

    def __enter__(self) -> "PrometheusClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def query(self, expr: str, at: float | None = None) -> QueryResult:
        """Run an instant query.

        Args:
            expr: PromQL expression.
            at: Evaluation timestamp; the server's current time when None.

        Returns:
            The decoded query result.

        Raises:
            PrometheusQueryError: On transport failure, HTTP error status,
                an API error response or an undecodable body.
        """
        params: dict[str, str | float] = {"query": expr}
        if at is not None:
            params["time"] = at

        logger.debug("querying prometheus", extra={"address": self.address, "query": expr})
        try:
            response = self._client.get(QUERY_PATH, params=params)
        except httpx.HTTPError as e:
            raise PrometheusQueryError(f"error querying Prometheus: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            raise PrometheusQueryError(
                f"unexpected response from Prometheus (HTTP {response.status_code})"
            )
        if body.get("status") != "success" or response.is_error:
            error_type = body.get("errorType", "unknown")
            message = body.get("error", f"HTTP {response.status_code}")
            raise PrometheusQueryError(f"error querying Prometheus: {error_type}: {message}")

        for warning in body.get("warnings") or []:
            logger.warning("prometheus warning: %s", warning)

        data = body.get("data")
        if not isinstance(data, dict):
            raise PrometheusQueryError("unexpected response from Prometheus: data is not an object")
        return decode_query_result(data)
