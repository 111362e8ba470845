"""model2schema: data model attribute metadata to JSON Schema / OpenAPI."""

from model2schema.errors import (
    CustomMetadataError,
    EntityContractError,
    MissingArgumentError,
    MutuallyExclusiveOptionsError,
    OptionTypeError,
    SchemaGenerationError,
    StrategyContractError,
    StrategyTypeError,
)
from model2schema.ir.attribute import AttributeDescriptor, DataType
from model2schema.ir.entity import Entity, EntityCatalog, EntityDescriptor
from model2schema.ir.options import GenerationOptions
from model2schema.ir.relationship import RelationshipDescriptor
from model2schema.schema_manager import SchemaManager
from model2schema.strategies import JsonSchemaStrategy, OpenApiStrategy, OutputStrategy, get_strategy

__version__ = "0.1.0"

__all__ = [
    "AttributeDescriptor",
    "CustomMetadataError",
    "DataType",
    "Entity",
    "EntityCatalog",
    "EntityContractError",
    "EntityDescriptor",
    "GenerationOptions",
    "JsonSchemaStrategy",
    "MissingArgumentError",
    "MutuallyExclusiveOptionsError",
    "OpenApiStrategy",
    "OptionTypeError",
    "OutputStrategy",
    "RelationshipDescriptor",
    "SchemaGenerationError",
    "SchemaManager",
    "StrategyContractError",
    "StrategyTypeError",
    "get_strategy",
]
