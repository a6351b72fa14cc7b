"""Port interfaces for query adapters.

The core depends only on this protocol, not on a concrete HTTP client.
"""

from typing import Protocol, runtime_checkable

from druid_ingestion.core.models import QueryResult


@runtime_checkable
class QueryPort(Protocol):
    """Port for running an instant query against a metrics backend.

    Examples: PrometheusClient, StaticQueryClient.
    """

    def query(self, expr: str) -> QueryResult:
        """Evaluate expr and return the decoded result."""
        ...
