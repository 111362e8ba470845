"""Exceptions raised while generating schemas."""


class SchemaGenerationError(Exception):
    """Base class for every error raised by model2schema."""

    pass


class MissingArgumentError(SchemaGenerationError, ValueError):
    """Raised when a required call argument is missing."""

    def __init__(self, argument: str):
        self.argument = argument
        super().__init__(f"Missing method argument '{argument}'")


class OptionTypeError(SchemaGenerationError, TypeError):
    """Raised when a generation option has the wrong type."""

    pass


class MutuallyExclusiveOptionsError(SchemaGenerationError, ValueError):
    """Raised when two mutually exclusive options are both set."""

    def __init__(self, first: str, second: str):
        self.options = (first, second)
        super().__init__(f"Options '{first}' and '{second}' are mutually exclusive")


class EntityContractError(SchemaGenerationError, TypeError):
    """Raised when an entity does not expose the introspection interface."""

    pass


class StrategyTypeError(SchemaGenerationError, TypeError):
    """Raised when the strategy is not an OutputStrategy instance."""

    pass


class CustomMetadataError(SchemaGenerationError, TypeError):
    """Raised when an attribute's custom metadata is malformed."""

    pass


class StrategyContractError(SchemaGenerationError):
    """Raised when a strategy returns a value breaking its postcondition."""

    def __init__(self, contract: str, message: str):
        self.contract = contract
        super().__init__(f"{contract}() {message}")
