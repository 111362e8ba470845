"""Mapping of declared attribute types to base schema fragments."""

from typing import Any, Callable, Dict, List, TYPE_CHECKING
from model2schema.config.logging import get_logger
from model2schema.ir.attribute import AttributeDescriptor
from . import fragments
from .composites import geometry_fragment, range_fragment

if TYPE_CHECKING:
    from model2schema.strategies.base import OutputStrategy

logger = get_logger(__name__)

TypeBuilder = Callable[[str, AttributeDescriptor, "OutputStrategy"], Dict[str, Any]]


def _fixed(factory: Callable[[], Dict[str, Any]]) -> TypeBuilder:
    """Builder for types whose fragment does not depend on options."""
    return lambda name, descriptor, strategy: factory()


def _build_array(name: str, descriptor: AttributeDescriptor, strategy: "OutputStrategy") -> Dict[str, Any]:
    element = descriptor.type.element
    if element is None:
        return {"type": "array", "items": fragments.any_value()}
    # Elements are never independently nullable
    item = AttributeDescriptor(type=element, allow_null=False)
    return {"type": "array", "items": map_attribute(name, item, strategy)}


def _build_blob(name: str, descriptor: AttributeDescriptor, strategy: "OutputStrategy") -> Dict[str, Any]:
    result = fragments.string()
    result.update(strategy.render_binary_encoding())
    return result


def _build_string(name: str, descriptor: AttributeDescriptor, strategy: "OutputStrategy") -> Dict[str, Any]:
    result = fragments.string()
    if descriptor.type.length is not None:
        result["maxLength"] = descriptor.type.length
    return result


def _build_enum(name: str, descriptor: AttributeDescriptor, strategy: "OutputStrategy") -> Dict[str, Any]:
    values = descriptor.values or descriptor.type.values
    return fragments.string(enum=list(values))


def _build_inet(name: str, descriptor: AttributeDescriptor, strategy: "OutputStrategy") -> Dict[str, Any]:
    return {"anyOf": [fragments.string(format="ipv4"), fragments.string(format="ipv6")]}


def _build_hstore(name: str, descriptor: AttributeDescriptor, strategy: "OutputStrategy") -> Dict[str, Any]:
    # Keys are strings, values are strings or null
    return {"type": "object", "additionalProperties": fragments.nullable(fragments.string(), strategy)}


def _build_range(name: str, descriptor: AttributeDescriptor, strategy: "OutputStrategy") -> Dict[str, Any]:
    return range_fragment(descriptor.type.subtype, strategy)


def _build_geometry(name: str, descriptor: AttributeDescriptor, strategy: "OutputStrategy") -> Dict[str, Any]:
    return geometry_fragment(descriptor.type.geometry_type, descriptor.type_options.get("srid"))


def _build_any(name: str, descriptor: AttributeDescriptor, strategy: "OutputStrategy") -> Dict[str, Any]:
    return fragments.any_value()


TYPE_BUILDERS: Dict[str, TypeBuilder] = {
    "ARRAY": _build_array,
    "BIGINT": _fixed(lambda: fragments.integer(format="int64")),
    "BLOB": _build_blob,
    "BOOLEAN": _fixed(lambda: fragments.primitive("boolean")),
    "CHAR": _fixed(fragments.string),
    "CIDR": _fixed(fragments.string),
    "CITEXT": _fixed(fragments.string),
    "DATE": _fixed(lambda: fragments.string(format="date-time")),
    "DATEONLY": _fixed(lambda: fragments.string(format="date")),
    "DECIMAL": _fixed(fragments.number),
    "DOUBLE": _fixed(lambda: fragments.number(format="double")),
    "DOUBLE PRECISION": _fixed(lambda: fragments.number(format="double")),
    "ENUM": _build_enum,
    "FLOAT": _fixed(lambda: fragments.number(format="float")),
    "GEOGRAPHY": _build_geometry,
    "GEOMETRY": _build_geometry,
    "HSTORE": _build_hstore,
    "INET": _build_inet,
    "INTEGER": _fixed(fragments.integer),
    "JSON": _build_any,
    "JSONB": _build_any,
    "MACADDR": _fixed(fragments.string),
    "MEDIUMINT": _fixed(fragments.integer),
    "NUMBER": _fixed(fragments.number),
    "RANGE": _build_range,
    "REAL": _fixed(fragments.number),
    "SMALLINT": _fixed(fragments.integer),
    "STRING": _build_string,
    "TEXT": _fixed(fragments.string),
    "TIME": _fixed(lambda: fragments.string(format="time")),
    "TINYINT": _fixed(fragments.number),
    "UUID": _fixed(lambda: fragments.string(format="uuid")),
    "UUIDV1": _fixed(lambda: fragments.string(format="uuid")),
    "UUIDV4": _fixed(lambda: fragments.string(format="uuid")),
    # Only reached without a return type; see map_attribute()
    "VIRTUAL": _build_any,
}

SUPPORTED_TYPES: List[str] = sorted(TYPE_BUILDERS)


def map_attribute(name: str, descriptor: AttributeDescriptor, strategy: "OutputStrategy") -> Dict[str, Any]:
    """
    Map one attribute's type, nullability and default to a schema fragment.

    Args:
        name: Attribute name
        descriptor: Attribute descriptor
        strategy: Active output strategy

    Returns:
        Freshly built schema fragment
    """
    data_type = descriptor.type
    if data_type.key == "VIRTUAL" and data_type.return_type is not None:
        return map_attribute(name, descriptor.with_type(data_type.return_type), strategy)

    builder = TYPE_BUILDERS.get(data_type.key)
    if builder is None:
        logger.debug(f"{name}: unknown type {data_type.key!r}, using permissive schema")
        builder = _build_any

    result = builder(name, descriptor, strategy)

    if descriptor.is_nullable:
        fragments.nullable(result, strategy)
        if "enum" in result and None not in result["enum"]:
            result["enum"] = [*result["enum"], None]

    # An explicit None default is a real default, distinct from no default
    if descriptor.has_default:
        result["default"] = descriptor.default_value

    return result


class TypeMapper:
    """Maps an attribute's declared type to its base schema fragment."""

    def map(self, name: str, descriptor: AttributeDescriptor, strategy: "OutputStrategy") -> Dict[str, Any]:
        return map_attribute(name, descriptor, strategy)
