"""Core domain: label extraction and ingestion spec construction."""
