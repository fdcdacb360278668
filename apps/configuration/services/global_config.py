"""
Typed access to GlobalConfig entries.

Values are stored as text and parsed according to their declared
type. Parsed values are cached per key in the Django cache.
"""

import json
import logging
import math
from typing import Any, Optional

from django.core.cache import cache
from django.db import transaction
from django.db.models import QuerySet

from ..models import GlobalConfig, ConfigType, ConfigCategory
from .exceptions import InvalidConfigError, ConfigNotEditableError, UnknownCategoryError

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 5 * 60
CACHE_KEY_PREFIX = 'global_config:'

_MISSING = object()

# key -> (value, category, description)
DEFAULT_CONFIGS = {
    # Transaction
    'MIN_BILL_AMOUNT': (100, ConfigCategory.TRANSACTION, 'Minimum bill amount for earn and redeem requests'),
    'MAX_BILL_AGE_DAYS': (30, ConfigCategory.TRANSACTION, 'Oldest bill date accepted, in days'),
    'FRAUD_PREVENTION_HOURS': (24, ConfigCategory.TRANSACTION, 'Window for duplicate bill checks, in hours'),
    'MIN_TIME_BETWEEN_SUBMISSIONS_MINUTES': (5, ConfigCategory.TRANSACTION, 'Cooldown between earn requests for one brand'),
    # Brand
    'DEFAULT_EARNING_PERCENTAGE': (30, ConfigCategory.BRAND, 'Earning percentage for new brands'),
    'DEFAULT_REDEMPTION_PERCENTAGE': (100, ConfigCategory.BRAND, 'Redemption percentage for new brands'),
    'DEFAULT_OVERALL_MAX_CAP': (2000, ConfigCategory.BRAND, 'Overall redemption cap'),
    'DEFAULT_BRANDWISE_MAX_CAP': (2000, ConfigCategory.BRAND, 'Redemption cap per brand'),
    # User
    'WELCOME_BONUS_AMOUNT': (100, ConfigCategory.USER, 'Coins granted once at signup'),
    'MAX_PENDING_REQUESTS': (5, ConfigCategory.USER, 'Pending requests allowed per user'),
    'MIN_BALANCE_FOR_REDEMPTION': (10, ConfigCategory.USER, 'Balance required before redeeming'),
    # Security
    'JWT_EXPIRY_HOURS': (24, ConfigCategory.SECURITY, 'Access token lifetime, in hours'),
    'REFRESH_TOKEN_EXPIRY_DAYS': (30, ConfigCategory.SECURITY, 'Refresh token lifetime, in days'),
    'MAX_LOGIN_ATTEMPTS': (5, ConfigCategory.SECURITY, 'Failed logins before lockout'),
    'LOCKOUT_DURATION_MINUTES': (15, ConfigCategory.SECURITY, 'Lockout duration, in minutes'),
}


def _cache_key(key: str) -> str:
    return f"{CACHE_KEY_PREFIX}{key}"


def infer_type(value: Any) -> str:
    # bool first: bool is a subclass of int
    if isinstance(value, bool):
        return ConfigType.BOOLEAN
    if isinstance(value, (int, float)):
        return ConfigType.NUMBER
    if isinstance(value, (dict, list)):
        return ConfigType.JSON
    return ConfigType.STRING


def serialize_value(value: Any, config_type: str) -> str:
    if config_type == ConfigType.BOOLEAN:
        return 'true' if value else 'false'
    if config_type == ConfigType.JSON:
        return json.dumps(value)
    return str(value)


def parse_value(raw: str, config_type: str) -> Any:
    """
    Convert stored text to a Python value.

    Numbers come back as int when integral, float otherwise.

    Raises:
        ValueError: If the text doesn't match the declared type
    """
    if config_type == ConfigType.NUMBER:
        number = float(raw)
        if not math.isfinite(number):
            raise ValueError(f"{raw!r} is not a finite number")
        return int(number) if number.is_integer() else number
    if config_type == ConfigType.BOOLEAN:
        return raw.strip().lower() == 'true'
    if config_type == ConfigType.JSON:
        return json.loads(raw)
    return raw


def coerce_value(value: Any, config_type: str) -> Any:
    """
    Convert an incoming value to the Python type a config type stores.

    Strings are parsed for number, boolean and json entries, so a JSON
    body of ``"45"`` still lands as the number 45.

    Raises:
        ValueError: If the value can't represent the type
    """
    if config_type == ConfigType.NUMBER:
        if isinstance(value, bool):
            raise ValueError("Expected a number, got a boolean")
        if isinstance(value, (int, float)):
            return parse_value(str(value), config_type)
        if isinstance(value, str):
            return parse_value(value.strip(), config_type)
        raise ValueError(f"Expected a number, got {type(value).__name__}")

    if config_type == ConfigType.BOOLEAN:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ('true', 'false'):
            return value.strip().lower() == 'true'
        raise ValueError("Expected true or false")

    if config_type == ConfigType.JSON:
        if isinstance(value, str):
            return json.loads(value)
        return value

    if isinstance(value, (dict, list)):
        raise ValueError("Expected a string, got structured data")
    return serialize_value(value, infer_type(value))


def get_value(key: str, default: Any = None) -> Any:
    """
    Get the typed value for a key.

    Args:
        key: Config key
        default: Returned when the key is missing or unparsable

    Returns:
        Parsed value or default
    """
    cached = cache.get(_cache_key(key), _MISSING)
    if cached is not _MISSING:
        return cached

    config = GlobalConfig.objects.filter(key=key).first()
    if config is None:
        logger.debug("Config key %s not found, using default %r", key, default)
        return default

    try:
        value = parse_value(config.value, config.type)
    except ValueError:
        logger.error("Config %s holds invalid %s value %r", key, config.type, config.value)
        return default

    cache.set(_cache_key(key), value, CACHE_TTL_SECONDS)
    return value


@transaction.atomic
def set_value(
    key: str,
    value: Any,
    *,
    type: Optional[str] = None,
    description: Optional[str] = None,
    category: Optional[str] = None,
) -> GlobalConfig:
    """
    Create or update a config entry.

    The stored type is, in order: the explicit ``type``, the existing
    entry's declared type, the type of a known default, or the type
    inferred from the value. The value is coerced to that type before
    it is stored.

    Raises:
        InvalidConfigError: If key or value is empty, the type is unknown,
            or the value doesn't match the type
        ConfigNotEditableError: If the entry is locked
    """
    if not key or not str(key).strip():
        raise InvalidConfigError("Config key is required")
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidConfigError("Value is required")
    if type is not None and type not in ConfigType.values:
        raise InvalidConfigError(f"Unknown config type '{type}'")

    config = GlobalConfig.objects.select_for_update().filter(key=key).first()

    if config is None:
        config = GlobalConfig(key=key, category=category)
        if key in DEFAULT_CONFIGS:
            default, default_category, _ = DEFAULT_CONFIGS[key]
            config.category = category or default_category
            config_type = type or infer_type(default)
        else:
            config_type = type or infer_type(value)
    elif not config.is_editable:
        raise ConfigNotEditableError(f"Configuration '{key}' is not editable")
    else:
        config_type = type or config.type

    try:
        typed_value = coerce_value(value, config_type)
    except ValueError as e:
        logger.warning("Rejected %s value %r for config %s: %s", config_type, value, key, e)
        raise InvalidConfigError(f"Invalid {config_type} value for '{key}': {e}")

    config.value = serialize_value(typed_value, config_type)
    config.type = config_type
    if description is not None:
        config.description = description
    if category is not None:
        config.category = category
    config.save()

    # Readers may re-cache the old value until commit
    cache.delete(_cache_key(key))
    transaction.on_commit(lambda: cache.delete(_cache_key(key)))

    logger.info("Config updated: %s = %s", key, config.value)
    return config


def get_all() -> QuerySet[GlobalConfig]:
    return GlobalConfig.objects.order_by('category', 'key')


def get_by_category(category: str) -> QuerySet[GlobalConfig]:
    """
    Raises:
        UnknownCategoryError: If category isn't a ConfigCategory value
    """
    if category not in ConfigCategory.values:
        raise UnknownCategoryError(f"Unknown config category '{category}'")
    return GlobalConfig.objects.filter(category=category).order_by('key')


def _typed_setting(key: str) -> Any:
    default = DEFAULT_CONFIGS[key][0]
    value = get_value(key, default)
    if infer_type(value) != infer_type(default):
        logger.error("Config %s holds %r, expected a %s; using %r", key, value, infer_type(default), default)
        return default
    return value


def _group(keys: dict) -> dict:
    return {name: _typed_setting(key) for name, key in keys.items()}


def transaction_config() -> dict:
    return _group({
        'min_bill_amount': 'MIN_BILL_AMOUNT',
        'max_bill_age_days': 'MAX_BILL_AGE_DAYS',
        'fraud_prevention_hours': 'FRAUD_PREVENTION_HOURS',
        'min_time_between_submissions_minutes': 'MIN_TIME_BETWEEN_SUBMISSIONS_MINUTES',
    })


def brand_config() -> dict:
    return _group({
        'default_earning_percentage': 'DEFAULT_EARNING_PERCENTAGE',
        'default_redemption_percentage': 'DEFAULT_REDEMPTION_PERCENTAGE',
        'default_overall_max_cap': 'DEFAULT_OVERALL_MAX_CAP',
        'default_brandwise_max_cap': 'DEFAULT_BRANDWISE_MAX_CAP',
    })


def user_config() -> dict:
    return _group({
        'welcome_bonus_amount': 'WELCOME_BONUS_AMOUNT',
        'max_pending_requests': 'MAX_PENDING_REQUESTS',
        'min_balance_for_redemption': 'MIN_BALANCE_FOR_REDEMPTION',
    })


def security_config() -> dict:
    return _group({
        'jwt_expiry_hours': 'JWT_EXPIRY_HOURS',
        'refresh_token_expiry_days': 'REFRESH_TOKEN_EXPIRY_DAYS',
        'max_login_attempts': 'MAX_LOGIN_ATTEMPTS',
        'lockout_duration_minutes': 'LOCKOUT_DURATION_MINUTES',
    })


@transaction.atomic
def initialize_defaults() -> int:
    """
    Seed the default config entries.

    Existing keys keep their current value.

    Returns:
        Number of entries created
    """
    created_count = 0
    for key, (value, category, description) in DEFAULT_CONFIGS.items():
        config_type = infer_type(value)
        _, created = GlobalConfig.objects.get_or_create(
            key=key,
            defaults={
                'value': serialize_value(value, config_type),
                'type': config_type,
                'category': category,
                'description': description,
            },
        )
        created_count += int(created)

    logger.info("Default configs initialized (%d created)", created_count)
    return created_count


def clear_cache() -> None:
    """Drop every cached config value."""
    cache.delete_many([_cache_key(key) for key in GlobalConfig.objects.values_list('key', flat=True)])
    cache.delete_many([_cache_key(key) for key in DEFAULT_CONFIGS])
    logger.info("Config cache cleared")
