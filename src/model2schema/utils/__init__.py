"""Utility functions for common operations."""

from .ir_io import dump_schemas, load_catalog_from_json, save_schemas_to_json

__all__ = [
    "dump_schemas",
    "load_catalog_from_json",
    "save_schemas_to_json",
]
