"""Utilities for loading entity catalogs and saving generated schemas."""

import json
from pathlib import Path
from typing import Any, Dict
from pydantic import TypeAdapter
from model2schema.ir.entity import EntityCatalog


def load_catalog_from_json(catalog_path: Path) -> EntityCatalog:
    """
    Load an EntityCatalog from a JSON file.

    The file holds ``{"entities": [{"name": ..., "attributes": {...},
    "relationships": {...}}, ...]}``.

    Args:
        catalog_path: Path to the JSON file

    Returns:
        Loaded EntityCatalog instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or does not describe a valid catalog
    """
    catalog_path = Path(catalog_path)
    if not catalog_path.exists():
        raise FileNotFoundError(f"Catalog file not found: {catalog_path}")

    file_content = catalog_path.read_text(encoding="utf-8").strip()
    if not file_content:
        raise ValueError(f"Catalog file is empty: {catalog_path}")

    try:
        return TypeAdapter(EntityCatalog).validate_json(file_content)
    except Exception as e:
        raise ValueError(f"Failed to load catalog from {catalog_path}: {e}") from e


def dump_schemas(schemas: Dict[str, Dict[str, Any]], indent: int = 2) -> str:
    """Serialize generated schemas; non-JSON defaults (dates etc.) become strings."""
    return json.dumps(schemas, indent=indent, default=str)


def save_schemas_to_json(schemas: Dict[str, Dict[str, Any]], out_path: Path, indent: int = 2) -> None:
    """
    Save generated schemas to a JSON file.

    Args:
        schemas: Mapping of entity name to entity schema
        out_path: Path where to save the JSON file
        indent: JSON indentation

    Note:
        Creates parent directories if they don't exist.
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(dump_schemas(schemas, indent=indent), encoding="utf-8")
