"""Builders for primitive schema fragments.

Every call returns a fresh dict, so callers may extend the result freely.
"""

from typing import Any, Dict, List, Mapping, Union, TYPE_CHECKING
from model2schema.errors import StrategyContractError

if TYPE_CHECKING:
    from model2schema.strategies.base import OutputStrategy

PRIMITIVE_TYPES = ("object", "array", "boolean", "integer", "number", "string")


def primitive(type_name: str, **keywords: Any) -> Dict[str, Any]:
    """Build ``{"type": type_name, **keywords}``."""
    return {"type": type_name, **keywords}


def string(**keywords: Any) -> Dict[str, Any]:
    return primitive("string", **keywords)


def integer(**keywords: Any) -> Dict[str, Any]:
    return primitive("integer", **keywords)


def number(**keywords: Any) -> Dict[str, Any]:
    return primitive("number", **keywords)


def any_value() -> Dict[str, Any]:
    """The most permissive legal fragment: a union of every primitive kind."""
    return {"anyOf": [primitive(t) for t in PRIMITIVE_TYPES]}


def get_nullable_type(
    type_or_union: Union[str, List[Dict[str, Any]]], strategy: "OutputStrategy"
) -> Dict[str, Any]:
    """
    Ask the strategy for the nullable form of a type or anyOf union.

    Every caller that makes a fragment nullable goes through here, including
    the bounds of range schemas and the values of HSTORE objects.

    Raises:
        StrategyContractError: If the result is not a mapping exposing
            ``type`` or ``anyOf``
    """
    result = strategy.render_nullable(type_or_union)

    if not isinstance(result, Mapping):
        raise StrategyContractError("render_nullable", "return value not of type 'dict'")

    if "type" not in result and "anyOf" not in result:
        raise StrategyContractError(
            "render_nullable", "return value does not have property 'type' or 'anyOf'"
        )

    return dict(result)


def nullable(fragment: Dict[str, Any], strategy: "OutputStrategy") -> Dict[str, Any]:
    """Merge the strategy's nullable form into ``fragment`` and return it."""
    fragment.update(get_nullable_type(fragment.get("anyOf") or fragment.get("type"), strategy))
    return fragment
