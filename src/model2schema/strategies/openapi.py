"""OpenAPI 3.0 output strategy."""

from typing import Any, Dict, List, Union
from .base import OutputStrategy


class OpenApiStrategy(OutputStrategy):
    """
    Renders OpenAPI 3.0 schema objects.

    Nullability uses the ``nullable`` keyword, binary payloads use
    ``format: byte`` and references point into ``#/components/schemas``.

    Example:
        {
            "nickname": {
                "type": "string",
                "maxLength": 40,
                "nullable": True,
            }
        }
    """

    ref_prefix = "#/components/schemas/"

    def render_nullable(self, type_or_union: Union[str, List[Dict[str, Any]]]) -> Dict[str, Any]:
        if isinstance(type_or_union, list):
            return {"anyOf": type_or_union, "nullable": True}
        return {"type": type_or_union, "nullable": True}

    def render_binary_encoding(self) -> Dict[str, Any]:
        return {"format": "byte"}

    def render_examples(self, examples: List[Any]) -> Dict[str, Any]:
        return {"example": examples}

    def render_reference(self, entity_name: str) -> Dict[str, Any]:
        return {"$ref": f"{self.ref_prefix}{entity_name}"}
