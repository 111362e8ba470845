"""Relationship descriptors between entities."""

from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, model_validator

RelationshipKind = Literal[
    "has_one",  # single, owned by this entity
    "belongs_to",  # single, owning this entity
    "has_many",
    "belongs_to_many",  # many-to-many through a junction entity
]


class RelationshipDescriptor(BaseModel):
    """A named association from one entity to another."""

    model_config = ConfigDict(frozen=True)

    kind: RelationshipKind
    target: str
    through: Optional[str] = None
    through_plural: Optional[str] = None

    @model_validator(mode="after")
    def check_through(self) -> "RelationshipDescriptor":
        """Many-to-many relationships need a junction entity."""
        if self.kind == "belongs_to_many" and not self.through:
            raise ValueError("belongs_to_many relationships require 'through'")
        return self

    @property
    def through_key(self) -> str:
        """Property name under which the junction entity is nested."""
        return self.through_plural or f"{self.through}s"
