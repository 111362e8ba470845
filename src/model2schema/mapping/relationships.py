"""Mapping of entity relationships to reference fragments."""

from typing import Any, Dict, Optional, TYPE_CHECKING
from model2schema.config.logging import get_logger
from model2schema.ir.options import GenerationOptions
from model2schema.ir.relationship import RelationshipDescriptor

if TYPE_CHECKING:
    from model2schema.strategies.base import OutputStrategy

logger = get_logger(__name__)


def is_relationship_selected(name: str, options: GenerationOptions) -> bool:
    """An explicit exclusion wins; a non-empty inclusion list admits only its members."""
    if options.exclude_associations and name in options.exclude_associations:
        return False
    if options.include_associations and name not in options.include_associations:
        return False
    return True


class RelationshipMapper:
    """Maps a relationship to a single or collection reference."""

    def map(
        self,
        name: str,
        relationship: RelationshipDescriptor,
        strategy: "OutputStrategy",
        options: Optional[GenerationOptions] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Map a relationship.

        Args:
            name: Relationship (property) name
            relationship: Relationship descriptor
            strategy: Active output strategy
            options: Generation options used for association selection

        Returns:
            Property fragment, or None when the relationship is not selected
        """
        if options is not None and not is_relationship_selected(name, options):
            logger.debug(f"Skipping relationship '{name}'")
            return None

        if relationship.kind == "has_one":
            return strategy.render_has_one(name, relationship)
        if relationship.kind == "belongs_to":
            return strategy.render_belongs_to(name, relationship)
        if relationship.kind == "has_many":
            return strategy.render_has_many(name, relationship)
        if relationship.kind == "belongs_to_many":
            return strategy.render_belongs_to_many(name, relationship)
        return None
