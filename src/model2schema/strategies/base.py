"""Base class for output strategies."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Literal, Mapping, Union
from model2schema.ir.relationship import RelationshipDescriptor
from model2schema.mapping.validation import translate_rules


class OutputStrategy(ABC):
    """
    Dialect-specific rendering decisions shared by all mappers.

    Subclasses decide how nullability, binary encoding, examples and
    references are expressed. Instances hold configuration only and can be
    shared between concurrent generate() calls.
    """

    def __init__(
        self,
        additional_properties: bool = False,
        unknown_rules: Literal["ignore", "warn"] = "ignore",
    ):
        self.additional_properties = additional_properties
        self.unknown_rules = unknown_rules

    @abstractmethod
    def render_nullable(self, type_or_union: Union[str, List[Dict[str, Any]]]) -> Dict[str, Any]:
        """
        Render a type (or an anyOf union) so that it also accepts null.

        The result must contain a ``type`` or an ``anyOf`` key.
        """
        ...

    @abstractmethod
    def render_binary_encoding(self) -> Dict[str, Any]:
        ...

    @abstractmethod
    def render_examples(self, examples: List[Any]) -> Dict[str, Any]:
        ...

    @abstractmethod
    def render_reference(self, entity_name: str) -> Dict[str, Any]:
        """Render a reference to another entity's schema."""
        ...

    def render_has_one(self, name: str, relationship: RelationshipDescriptor) -> Dict[str, Any]:
        return self.render_reference(relationship.target)

    def render_belongs_to(self, name: str, relationship: RelationshipDescriptor) -> Dict[str, Any]:
        return self.render_reference(relationship.target)

    def render_has_many(self, name: str, relationship: RelationshipDescriptor) -> Dict[str, Any]:
        return {
            "type": "array",
            "items": self.render_reference(relationship.target),
        }

    def render_belongs_to_many(
        self, name: str, relationship: RelationshipDescriptor
    ) -> Dict[str, Any]:
        return {
            "type": "array",
            "items": {
                "allOf": [
                    self.render_reference(relationship.target),
                    {
                        "type": "object",
                        "properties": {
                            relationship.through_key: self.render_reference(
                                relationship.through
                            ),
                        },
                    },
                ]
            },
        }

    def render_validation(self, rules: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Render validation rules as schema constraints.

        Args:
            rules: Mapping of rule name to rule argument

        Returns:
            Constraint fragment; always a dict, empty when nothing applies
        """
        return translate_rules(rules, warn_unknown=self.unknown_rules == "warn")

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(additional_properties={self.additional_properties!r}, "
            f"unknown_rules={self.unknown_rules!r})"
        )
