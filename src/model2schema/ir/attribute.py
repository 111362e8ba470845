"""Attribute descriptors: the unit of translation."""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class DataType(BaseModel):
    """A declared column type plus its type-specific options."""

    model_config = ConfigDict(frozen=True)

    key: str
    length: Optional[int] = None  # STRING(n)
    values: List[Any] = Field(default_factory=list)  # ENUM members
    subtype: Optional[str] = None  # RANGE(INTEGER)
    geometry_type: Optional[str] = None  # POINT | LINESTRING | POLYGON
    srid: Optional[int] = None
    element: Optional[DataType] = None  # ARRAY(element)
    return_type: Optional[DataType] = None  # VIRTUAL(return_type)

    @field_validator("key", "subtype", "geometry_type", mode="before")
    @classmethod
    def normalize_case(cls, v: Any) -> Any:
        """Type keys are matched case-insensitively."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("element", "return_type", mode="before")
    @classmethod
    def coerce_nested(cls, v: Any) -> Any:
        """Allow nested types to be given as a bare key."""
        if isinstance(v, str):
            return {"key": v}
        return v

    @property
    def options(self) -> Dict[str, Any]:
        """Type options that were explicitly provided."""
        return self.model_dump(exclude={"key"}, exclude_unset=True)


class AttributeDescriptor(BaseModel):
    """Metadata describing one attribute of an entity."""

    model_config = ConfigDict(frozen=True)

    type: DataType
    values: List[Any] = Field(default_factory=list)
    allow_null: Optional[bool] = None  # None behaves as nullable
    default_value: Any = None
    validation_rules: Dict[str, Any] = Field(default_factory=dict)
    custom_metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, v: Any) -> Any:
        """Allow the type to be given as a bare key, e.g. "STRING"."""
        if isinstance(v, str):
            return {"key": v}
        return v

    @property
    def type_key(self) -> str:
        return self.type.key

    @property
    def type_options(self) -> Dict[str, Any]:
        return self.type.options

    @property
    def has_default(self) -> bool:
        """True when a default was declared, even an explicit None."""
        return "default_value" in self.model_fields_set

    @property
    def is_nullable(self) -> bool:
        return self.allow_null is not False

    @property
    def is_required(self) -> bool:
        """Mandatory when null is forbidden or a default is declared."""
        return not self.is_nullable or self.has_default

    def with_type(self, data_type: DataType, **overrides: Any) -> AttributeDescriptor:
        """
        Build a descriptor for another type, keeping this one's settings.

        Args:
            data_type: The substituted type
            **overrides: Fields replacing the inherited ones

        Returns:
            New AttributeDescriptor (the default is only carried when declared)
        """
        fields: Dict[str, Any] = {
            "type": data_type,
            "values": self.values,
            "allow_null": self.allow_null,
            "validation_rules": self.validation_rules,
            "custom_metadata": self.custom_metadata,
        }
        if self.has_default:
            fields["default_value"] = self.default_value
        fields.update(overrides)
        return AttributeDescriptor(**fields)
