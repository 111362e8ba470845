"""Options accepted by SchemaManager.generate()."""

from typing import List
from pydantic import BaseModel, ConfigDict, Field


class GenerationOptions(BaseModel):
    """
    Attribute and association selection for one generate() call.

    ``include``/``exclude`` and ``include_associations``/``exclude_associations``
    are pairwise mutually exclusive; SchemaManager enforces this before any
    attribute is processed.
    """

    model_config = ConfigDict(strict=True, frozen=True, extra="forbid")

    include: List[str] = Field(default_factory=list)
    exclude: List[str] = Field(default_factory=list)
    associations: bool = True
    include_associations: List[str] = Field(default_factory=list)
    exclude_associations: List[str] = Field(default_factory=list)
