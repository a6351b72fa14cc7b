"""Encoders for ingestion spec documents."""

from druid_ingestion.core.encoding.json_spec import (
    decode_spec,
    encode_spec,
    spec_from_dict,
    spec_to_dict,
)

__all__ = ["decode_spec", "encode_spec", "spec_from_dict", "spec_to_dict"]
