"""Multi-field schemas for range and geospatial types."""

from typing import Any, Dict, List, Optional, TYPE_CHECKING
from model2schema.config.logging import get_logger
from . import fragments

if TYPE_CHECKING:
    from model2schema.strategies.base import OutputStrategy

logger = get_logger(__name__)

GEOMETRY_KINDS = ("POINT", "LINESTRING", "POLYGON")

# Range subtype -> (bound schema, ordering tag)
#
# BIGINT bounds are digit strings: an "integer" without a "format" is read as
# an arbitrary-precision integer by code generators, never a machine integer.
_RANGE_BOUNDS: Dict[str, tuple] = {
    "INTEGER": (lambda: fragments.integer(), "range"),
    "DECIMAL": (lambda: fragments.number(format="double"), "range"),
    "BIGINT": (lambda: fragments.string(pattern="^[0-9]+$"), "range"),
    "DATE": (lambda: fragments.string(format="date-time"), "daterange"),
    "DATEONLY": (lambda: fragments.string(format="date"), "daterange"),
}


def range_fragment(subtype: Optional[str], strategy: "OutputStrategy") -> Dict[str, Any]:
    """
    Build the schema for a RANGE(subtype) attribute.

    A range is a two element array ``[lower, upper]`` whose bounds are either
    bare values (null meaning unbounded) or ``{"value": ..., "inclusive": bool}``
    objects. The ``range``/``daterange`` keyword is a vendor extension: plain
    JSON Schema cannot express ``lower < upper``, so validators that want to
    enforce ordering register a custom keyword under that name.

    Args:
        subtype: Range subtype key (INTEGER, DECIMAL, BIGINT, DATE, DATEONLY)
        strategy: Active output strategy, used to make bare bounds nullable

    Returns:
        Array fragment
    """
    bound_factory, tag = _RANGE_BOUNDS.get(subtype or "", (None, None))

    if bound_factory is None:
        logger.debug(f"Unknown range subtype {subtype!r}, bounds left unconstrained")
        value_schema: Dict[str, Any] = {}
        bare_bound = fragments.nullable(fragments.any_value(), strategy)
    else:
        value_schema = bound_factory()
        bare_bound = fragments.nullable(bound_factory(), strategy)

    result: Dict[str, Any] = {
        "type": "array",
        "items": {
            "anyOf": [
                {
                    "type": "object",
                    "properties": {
                        "value": value_schema,
                        "inclusive": {"type": "boolean"},
                    },
                    "required": ["value", "inclusive"],
                    "additionalProperties": False,
                },
                bare_bound,
            ]
        },
        "uniqueItems": True,
        "minItems": 2,
        "maxItems": 2,
    }
    if tag:
        result[tag] = True
    return result


def _crs(srid: Optional[int] = None) -> Dict[str, Any]:
    non_empty = fragments.string(minLength=1)
    result: Dict[str, Any] = {
        "type": "object",
        "properties": {
            "type": non_empty,
            "properties": {
                "type": "object",
                "properties": {"name": non_empty},
                "required": ["name"],
            },
        },
        "required": ["type", "properties"],
    }
    if srid is not None:
        # GeoJSON named CRS
        result["default"] = {"type": "name", "properties": {"name": f"EPSG:{srid}"}}
    return result


def geometry_fragment(geometry_type: Optional[str], srid: Optional[int] = None) -> Dict[str, Any]:
    """
    Build the GeoJSON-style schema for a GEOMETRY/GEOGRAPHY attribute.

    Positions are 2D or 3D (with elevation). A linestring needs two
    positions, a polygon ring four (the first repeated as the last). The
    position and ring schemas are built once and shared by the shapes using
    them. Geometry names are upper case, as the database returns them.

    Args:
        geometry_type: POINT, LINESTRING, POLYGON or None for any of them
        srid: Spatial reference id; sets the default of ``crs`` when given

    Returns:
        Object fragment
    """
    position = {"type": "array", "minItems": 2, "maxItems": 3, "items": fragments.number()}
    linestring = {"type": "array", "minItems": 2, "items": position}
    ring = {"type": "array", "minItems": 4, "items": position}
    polygon = {"type": "array", "minItems": 1, "items": ring}

    shapes = {"POINT": position, "LINESTRING": linestring, "POLYGON": polygon}

    kinds: List[str]
    if geometry_type in shapes:
        kinds = [geometry_type]
        coordinates = shapes[geometry_type]
    else:
        if geometry_type:
            logger.debug(f"Unsupported geometry type {geometry_type!r}, allowing any geometry")
        kinds = list(GEOMETRY_KINDS)
        coordinates = {"anyOf": [shapes[kind] for kind in GEOMETRY_KINDS]}

    return {
        "type": "object",
        "properties": {
            "type": fragments.string(enum=kinds),
            "coordinates": coordinates,
            "crs": _crs(srid),
        },
        "required": ["type", "coordinates"],
    }
