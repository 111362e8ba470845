"""Output strategies and their registry."""

from typing import Any, Callable, Dict
from .base import OutputStrategy
from .openapi import OpenApiStrategy
from .json_schema import JsonSchemaStrategy
from model2schema.config.logging import get_logger

logger = get_logger(__name__)

# Registry of strategy factories
STRATEGIES: Dict[str, Callable[[Dict[str, Any]], OutputStrategy]] = {
    "openapi": lambda cfg: OpenApiStrategy(**cfg),
    "jsonschema": lambda cfg: JsonSchemaStrategy(**cfg),
}


def get_strategy(name: str, config: Dict[str, Any] | None = None) -> OutputStrategy:
    """
    Get a strategy instance by name.

    Args:
        name: Strategy name ("openapi" or "jsonschema")
        config: Optional constructor keyword arguments

    Returns:
        OutputStrategy instance

    Raises:
        KeyError: If strategy name is not found
    """
    if config is None:
        config = {}

    if name not in STRATEGIES:
        available = ", ".join(sorted(STRATEGIES.keys()))
        raise KeyError(f"Strategy '{name}' not found. Available strategies: {available}")

    strategy = STRATEGIES[name](config)
    logger.debug(f"Created {strategy!r}")
    return strategy


__all__ = [
    "OutputStrategy",
    "OpenApiStrategy",
    "JsonSchemaStrategy",
    "STRATEGIES",
    "get_strategy",
]
