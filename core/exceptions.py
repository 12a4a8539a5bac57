class InvalidInputError(ValueError):
    """Raised when an inbound conversation is rejected before any external call."""


class ConfigError(RuntimeError):
    """Raised at startup when the environment holds an unusable value."""


class PromptTemplateError(RuntimeError):
    """Raised at startup when a prompt template is missing or malformed."""
