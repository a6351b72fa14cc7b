"""Label name extraction from Prometheus query results."""

from druid_ingestion.core.errors import UnsupportedResultShape
from druid_ingestion.core.models import METRIC_NAME_LABEL, LabelSet, QueryResult, Vector


def extract_unique_labels(result: QueryResult) -> LabelSet:
    """Collect the distinct label names present in an instant-vector result.

    Names are returned in first-seen order across samples, following each
    sample's own label order. The ``__name__`` label is never included.

    Args:
        result: A decoded query result.

    Returns:
        Tuple of label names, empty if the vector has no samples.

    Raises:
        UnsupportedResultShape: If result is not a Vector.
    """
    if not isinstance(result, Vector):
        raise UnsupportedResultShape("query result is not a Vector")

    # dict preserves insertion order and deduplicates
    seen: dict[str, None] = {}
    for sample in result.samples:
        for name in sample.labels:
            if name == METRIC_NAME_LABEL:
                continue
            seen.setdefault(name, None)
    return tuple(seen)
