"""Typer CLI application."""

from pathlib import Path
from typing import List, Optional

import typer

from model2schema.config import get_logger, get_settings, setup_logging
from model2schema.errors import SchemaGenerationError
from model2schema.ir.options import GenerationOptions
from model2schema.mapping.type_mapper import SUPPORTED_TYPES
from model2schema.schema_manager import SchemaManager
from model2schema.strategies import get_strategy
from model2schema.utils.ir_io import dump_schemas, load_catalog_from_json, save_schemas_to_json

app = typer.Typer(help="model2schema: data model attributes to JSON Schema / OpenAPI")

logger = get_logger(__name__)


@app.command()
def generate(
    catalog_json: Path,
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write schemas to this file"),
    entity: Optional[List[str]] = typer.Option(
        None, "--entity", "-e", help="Only generate these entities (repeatable)"
    ),
    strategy: Optional[str] = typer.Option(
        None, "--strategy", "-s", help="Output dialect: openapi or jsonschema"
    ),
    include: Optional[List[str]] = typer.Option(None, "--include", help="Only these attributes"),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", help="Skip these attributes"),
    associations: bool = typer.Option(
        True, "--associations/--no-associations", help="Render relationships"
    ),
    additional_properties: Optional[bool] = typer.Option(
        None,
        "--additional-properties/--no-additional-properties",
        help="Allow properties not declared by the entity",
    ),
):
    """
    Generate schemas for the entities of a catalog.

    Args:
        catalog_json: Path to an entity catalog JSON file
        out: Output path; schemas are printed when omitted
    """
    setup_logging()
    settings = get_settings()

    try:
        catalog = load_catalog_from_json(catalog_json)
        output_strategy = get_strategy(
            strategy or settings.strategy,
            {
                "additional_properties": (
                    settings.additional_properties
                    if additional_properties is None
                    else additional_properties
                ),
                "unknown_rules": settings.unknown_rules,
            },
        )
        options = GenerationOptions(
            include=list(include or []),
            exclude=list(exclude or []),
            associations=associations,
        )

        entities = [catalog.get(name) for name in entity] if entity else catalog.entities
        manager = SchemaManager()
        schemas = {e.name: manager.generate(e, output_strategy, options) for e in entities}
    except (FileNotFoundError, KeyError, ValueError, SchemaGenerationError) as e:
        logger.error(f"Schema generation failed: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if out is None:
        typer.echo(dump_schemas(schemas, indent=settings.indent))
        return

    save_schemas_to_json(schemas, out, indent=settings.indent)
    typer.echo(f"✓ Complete! {len(schemas)} schema(s) written to {out}")


@app.command()
def types():
    """List the supported attribute type keys."""
    for key in SUPPORTED_TYPES:
        typer.echo(key)


if __name__ == "__main__":
    app()
