"""Adapters implementing core ports."""

from druid_ingestion.adapters.prometheus import PrometheusClient
from druid_ingestion.adapters.static import StaticQueryClient

__all__ = ["PrometheusClient", "StaticQueryClient"]
