"""Entity descriptors and the introspection interface adapters implement."""

from typing import Dict, List, Mapping, Protocol, runtime_checkable
from pydantic import BaseModel, Field, model_validator
from .attribute import AttributeDescriptor
from .relationship import RelationshipDescriptor


@runtime_checkable
class Entity(Protocol):
    """
    Interface a host data-modeling framework adapter must provide.

    Any object with a ``name``, a ``get_attributes()`` introspection call and
    a ``relationships`` mapping can be handed to SchemaManager.generate().
    """

    name: str
    relationships: Mapping[str, RelationshipDescriptor]

    def get_attributes(self) -> Mapping[str, AttributeDescriptor]:
        ...


class EntityDescriptor(BaseModel):
    """An entity defined directly through descriptors."""

    name: str
    attributes: Dict[str, AttributeDescriptor] = Field(default_factory=dict)
    relationships: Dict[str, RelationshipDescriptor] = Field(default_factory=dict)

    def get_attributes(self) -> Dict[str, AttributeDescriptor]:
        return dict(self.attributes)


class EntityCatalog(BaseModel):
    """A set of entities loaded together, e.g. from a JSON file."""

    entities: List[EntityDescriptor] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_names(self) -> "EntityCatalog":
        """Entity names are used as schema keys and must be unique."""
        seen = set()
        for entity in self.entities:
            if entity.name in seen:
                raise ValueError(f"Duplicate entity name '{entity.name}'")
            seen.add(entity.name)
        return self

    def get(self, name: str) -> EntityDescriptor:
        """
        Look up an entity by name.

        Raises:
            KeyError: If no entity has that name
        """
        for entity in self.entities:
            if entity.name == name:
                return entity
        available = ", ".join(e.name for e in self.entities)
        raise KeyError(f"Entity '{name}' not found. Available entities: {available}")
