"""Services for runtime configuration."""

from .exceptions import (
    ConfigurationServiceError,
    InvalidConfigError,
    ConfigNotEditableError,
    UnknownCategoryError,
)
from .global_config import (
    DEFAULT_CONFIGS,
    get_value,
    set_value,
    get_all,
    get_by_category,
    transaction_config,
    brand_config,
    user_config,
    security_config,
    initialize_defaults,
    clear_cache,
)

__all__ = [
    # Exceptions
    'ConfigurationServiceError',
    'InvalidConfigError',
    'ConfigNotEditableError',
    'UnknownCategoryError',
    # Config access
    'DEFAULT_CONFIGS',
    'get_value',
    'set_value',
    'get_all',
    'get_by_category',
    'transaction_config',
    'brand_config',
    'user_config',
    'security_config',
    'initialize_defaults',
    'clear_cache',
]
