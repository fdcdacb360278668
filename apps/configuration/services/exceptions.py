"""Domain-specific exceptions for configuration services."""


class ConfigurationServiceError(Exception):
    """Base exception for configuration services."""
    pass


class InvalidConfigError(ConfigurationServiceError):
    """Raised when a key or value is missing or malformed."""
    pass


class ConfigNotEditableError(ConfigurationServiceError):
    """Raised when updating a locked config entry."""
    pass


class UnknownCategoryError(ConfigurationServiceError):
    """Raised when listing an unknown config category."""
    pass
