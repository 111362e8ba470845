"""JSON Schema (draft 2020-12) output strategy."""

from typing import Any, Dict, List, Union
from .base import OutputStrategy


class JsonSchemaStrategy(OutputStrategy):
    """
    Renders plain JSON Schema.

    Nullability is a union with the ``"null"`` type, so any standards
    compliant validator accepts null without dialect extensions.
    """

    ref_prefix = "#/$defs/"

    def render_nullable(self, type_or_union: Union[str, List[Dict[str, Any]]]) -> Dict[str, Any]:
        if isinstance(type_or_union, list):
            return {"anyOf": [*type_or_union, {"type": "null"}]}
        return {"type": [type_or_union, "null"]}

    def render_binary_encoding(self) -> Dict[str, Any]:
        return {"contentEncoding": "base64"}

    def render_examples(self, examples: List[Any]) -> Dict[str, Any]:
        return {"examples": examples}

    def render_reference(self, entity_name: str) -> Dict[str, Any]:
        return {"$ref": f"{self.ref_prefix}{entity_name}"}
