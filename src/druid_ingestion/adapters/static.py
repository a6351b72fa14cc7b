"""In-memory query adapter."""

from druid_ingestion.core.models import QueryResult, Vector


class StaticQueryClient:
    """In-memory implementation of QueryPort.

    Returns the same result for every query and records the expressions
    it was given. Suitable for testing and offline spec generation.
    """

    def __init__(self, result: QueryResult | None = None) -> None:
        self._result: QueryResult = result if result is not None else Vector()
        self.queries: list[str] = []

    def query(self, expr: str) -> QueryResult:
        """Record expr and return the configured result."""
        self.queries.append(expr)
        return self._result
