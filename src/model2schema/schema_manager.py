"""Assembly of entity schemas from attribute and relationship descriptors."""

from typing import Any, Dict, List, Mapping, Optional, Union
from pydantic import ValidationError
from model2schema.config.logging import get_logger
from model2schema.errors import (
    CustomMetadataError,
    EntityContractError,
    MissingArgumentError,
    MutuallyExclusiveOptionsError,
    OptionTypeError,
    StrategyTypeError,
)
from model2schema.ir.attribute import AttributeDescriptor
from model2schema.ir.entity import Entity
from model2schema.ir.options import GenerationOptions
from model2schema.mapping.relationships import RelationshipMapper
from model2schema.mapping.type_mapper import TypeMapper
from model2schema.mapping.validation import ValidationRuleMapper
from model2schema.strategies.base import OutputStrategy

logger = get_logger(__name__)

OptionsInput = Union[GenerationOptions, Mapping[str, Any], None]


class SchemaManager:
    """
    Generates the schema of one entity at a time.

    The manager keeps no per-call state: strategy, options and entity are
    passed explicitly down every call, so one instance can serve concurrent
    generate() calls.
    """

    def __init__(self):
        self.type_mapper = TypeMapper()
        self.validation_mapper = ValidationRuleMapper()
        self.relationship_mapper = RelationshipMapper()

    def generate(
        self,
        entity: Optional[Entity] = None,
        strategy: Optional[OutputStrategy] = None,
        options: OptionsInput = None,
    ) -> Dict[str, Any]:
        """
        Generate the schema for an entity.

        Args:
            entity: Object implementing the Entity interface
            strategy: Output strategy deciding the schema dialect
            options: GenerationOptions, an equivalent mapping, or None

        Returns:
            ``{"type": "object", "properties": {...}}`` plus ``required`` when
            at least one attribute is mandatory

        Raises:
            MissingArgumentError: If entity or strategy is missing
            OptionTypeError: If an option has the wrong type
            MutuallyExclusiveOptionsError: If exclusive options are both set
            EntityContractError: If entity lacks the introspection interface
            StrategyTypeError: If strategy is not an OutputStrategy
            CustomMetadataError: If an attribute's custom metadata is malformed
            StrategyContractError: If the strategy breaks a postcondition
        """
        if entity is None:
            raise MissingArgumentError("entity")
        if strategy is None:
            raise MissingArgumentError("strategy")

        opts = self.verify_options(options)
        self.verify_entity(entity)
        self.verify_strategy(strategy)

        logger.debug(f"Generating schema for entity '{entity.name}' with {strategy!r}")

        attributes = self.get_attributes(entity, opts)
        result: Dict[str, Any] = {"type": "object", "properties": {}}
        required: List[str] = []

        for attribute_name, descriptor in attributes.items():
            result["properties"][attribute_name] = self.get_attribute_container(
                attribute_name, descriptor, strategy
            )
            if descriptor.is_required:
                required.append(attribute_name)

        if required:
            result["required"] = required

        if strategy.additional_properties:
            result["additionalProperties"] = True

        if not opts.associations:
            return result

        for relationship_name, relationship in entity.relationships.items():
            fragment = self.relationship_mapper.map(relationship_name, relationship, strategy, opts)
            if fragment is not None:
                result["properties"][relationship_name] = fragment

        return result

    def verify_options(self, options: OptionsInput) -> GenerationOptions:
        """
        Validate generation options.

        Returns:
            GenerationOptions instance
        """
        if options is None:
            opts = GenerationOptions()
        elif isinstance(options, GenerationOptions):
            opts = options
        elif isinstance(options, Mapping):
            try:
                opts = GenerationOptions.model_validate(dict(options))
            except ValidationError as e:
                raise OptionTypeError(f"Invalid generation options: {e}") from e
        else:
            raise OptionTypeError(
                f"Generation options must be GenerationOptions or a mapping, "
                f"got '{type(options).__name__}'"
            )

        if opts.include and opts.exclude:
            raise MutuallyExclusiveOptionsError("include", "exclude")

        if opts.include_associations and opts.exclude_associations:
            raise MutuallyExclusiveOptionsError("include_associations", "exclude_associations")

        return opts

    def verify_entity(self, entity: Any) -> None:
        if not isinstance(entity, Entity):
            raise EntityContractError(
                f"Provided entity '{type(entity).__name__}' does not implement the Entity "
                f"interface (name, get_attributes(), relationships)"
            )

    def verify_strategy(self, strategy: Any) -> None:
        if not isinstance(strategy, OutputStrategy):
            raise StrategyTypeError("Strategy must be an instance of 'OutputStrategy'")

    def get_attributes(self, entity: Entity, options: GenerationOptions) -> Dict[str, AttributeDescriptor]:
        """Select attributes according to include/exclude."""
        attributes = entity.get_attributes()

        if options.include:
            return {name: attributes[name] for name in options.include if name in attributes}

        if options.exclude:
            return {name: d for name, d in attributes.items() if name not in options.exclude}

        return dict(attributes)

    def get_attribute_container(
        self, attribute_name: str, descriptor: AttributeDescriptor, strategy: OutputStrategy
    ) -> Dict[str, Any]:
        """Merge every fragment describing one attribute; later ones win."""
        result: Dict[str, Any] = {}

        result.update(self.type_mapper.map(attribute_name, descriptor, strategy))
        result.update(self.validation_mapper.map(descriptor, strategy))
        result.update(self.get_schema_override(attribute_name, descriptor))
        result.update(self.get_description(attribute_name, descriptor))
        result.update(self.get_read_or_write_only(attribute_name, descriptor))
        result.update(self.get_examples(attribute_name, descriptor, strategy))

        return result

    @staticmethod
    def get_custom_value(property_name: str, descriptor: AttributeDescriptor) -> Optional[Any]:
        value = descriptor.custom_metadata.get(property_name)
        if not value:
            return None
        return value

    def get_schema_override(self, attribute_name: str, descriptor: AttributeDescriptor) -> Dict[str, Any]:
        schema = self.get_custom_value("schema", descriptor)
        if schema is None:
            return {}

        if isinstance(schema, Mapping) and isinstance(schema.get("type"), str):
            return dict(schema)

        raise CustomMetadataError(
            f"Custom property 'schema' for attribute '{attribute_name}' "
            f"should be an object with a 'type' key"
        )

    def get_description(self, attribute_name: str, descriptor: AttributeDescriptor) -> Dict[str, Any]:
        description = self.get_custom_value("description", descriptor)
        if description is None:
            return {}

        if not isinstance(description, str):
            raise CustomMetadataError(
                f"Custom property 'description' for attribute '{attribute_name}' "
                f"not of type 'string'"
            )

        return {"description": description}

    def get_read_or_write_only(self, attribute_name: str, descriptor: AttributeDescriptor) -> Dict[str, Any]:
        read_only = self.get_custom_value("readOnly", descriptor)
        write_only = self.get_custom_value("writeOnly", descriptor)

        if not (read_only or write_only):
            return {}

        if read_only and write_only:
            raise CustomMetadataError(
                f"Custom properties 'readOnly' and 'writeOnly' for attribute "
                f"'{attribute_name}' are mutually exclusive"
            )

        key, value = ("readOnly", read_only) if read_only else ("writeOnly", write_only)
        if not isinstance(value, bool):
            raise CustomMetadataError(
                f"Custom property '{key}' for attribute '{attribute_name}' not of type 'boolean'"
            )

        return {key: True}

    def get_examples(
        self, attribute_name: str, descriptor: AttributeDescriptor, strategy: OutputStrategy
    ) -> Dict[str, Any]:
        examples = self.get_custom_value("examples", descriptor)
        if examples is None:
            return {}

        if not isinstance(examples, list):
            raise CustomMetadataError(
                f"Custom property 'examples' for attribute '{attribute_name}' MUST be an array"
            )

        return dict(strategy.render_examples(examples))
