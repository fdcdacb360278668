"""
Tests for runtime configuration services.
"""

import pytest
from io import StringIO

from django.core.management import call_command

from apps.configuration.models import GlobalConfig, ConfigType, ConfigCategory
from apps.configuration.services import (
    DEFAULT_CONFIGS,
    get_value,
    set_value,
    get_by_category,
    transaction_config,
    user_config,
    initialize_defaults,
    clear_cache,
    InvalidConfigError,
    ConfigNotEditableError,
    UnknownCategoryError,
)
from apps.configuration.services.global_config import infer_type, parse_value


class TestValueTypes:

    @pytest.mark.parametrize('value,expected', [
        (True, ConfigType.BOOLEAN),
        (3, ConfigType.NUMBER),
        (2.5, ConfigType.NUMBER),
        ({'a': 1}, ConfigType.JSON),
        ('hello', ConfigType.STRING),
    ])
    def test_infer_type(self, value, expected):
        assert infer_type(value) == expected

    def test_parse_numbers(self):
        assert parse_value('100', ConfigType.NUMBER) == 100
        assert isinstance(parse_value('100.0', ConfigType.NUMBER), int)
        assert parse_value('2.5', ConfigType.NUMBER) == 2.5

    def test_parse_boolean_and_json(self):
        assert parse_value('TRUE', ConfigType.BOOLEAN) is True
        assert parse_value('no', ConfigType.BOOLEAN) is False
        assert parse_value('[1, 2]', ConfigType.JSON) == [1, 2]

    def test_parse_bad_number(self):
        with pytest.raises(ValueError):
            parse_value('many', ConfigType.NUMBER)


@pytest.mark.django_db
class TestGetAndSet:

    def test_missing_key_returns_default(self):
        assert get_value('NOT_THERE', 7) == 7

    def test_set_then_get(self):
        config = set_value('MIN_BILL_AMOUNT', 250, category=ConfigCategory.TRANSACTION)

        assert config.value == '250'
        assert config.type == ConfigType.NUMBER
        assert get_value('MIN_BILL_AMOUNT') == 250

    def test_update_invalidates_cache(self):
        set_value('WELCOME_BONUS_AMOUNT', 100)
        assert get_value('WELCOME_BONUS_AMOUNT') == 100

        set_value('WELCOME_BONUS_AMOUNT', 150)
        assert get_value('WELCOME_BONUS_AMOUNT') == 150

    def test_value_is_cached(self):
        set_value('MAX_PENDING_REQUESTS', 5)
        assert get_value('MAX_PENDING_REQUESTS') == 5

        GlobalConfig.objects.filter(key='MAX_PENDING_REQUESTS').update(value='9')
        assert get_value('MAX_PENDING_REQUESTS') == 5

        clear_cache()
        assert get_value('MAX_PENDING_REQUESTS') == 9

    def test_unparsable_value_falls_back(self):
        GlobalConfig.objects.create(key='MIN_BILL_AMOUNT', value='lots', type=ConfigType.NUMBER)
        assert get_value('MIN_BILL_AMOUNT', 100) == 100

    def test_empty_value_rejected(self):
        with pytest.raises(InvalidConfigError):
            set_value('MIN_BILL_AMOUNT', '  ')

    def test_locked_entry(self):
        GlobalConfig.objects.create(key='JWT_EXPIRY_HOURS', value='24', type=ConfigType.NUMBER, is_editable=False)

        with pytest.raises(ConfigNotEditableError):
            set_value('JWT_EXPIRY_HOURS', 48)


@pytest.mark.django_db
class TestDefaults:

    def test_groups_fall_back_to_defaults(self):
        assert transaction_config() == {
            'min_bill_amount': 100,
            'max_bill_age_days': 30,
            'fraud_prevention_hours': 24,
            'min_time_between_submissions_minutes': 5,
        }

    def test_groups_use_stored_values(self):
        set_value('MAX_PENDING_REQUESTS', 2)
        assert user_config()['max_pending_requests'] == 2

    def test_initialize_defaults_is_idempotent(self):
        set_value('MIN_BILL_AMOUNT', 500)

        created = initialize_defaults()

        assert created == len(DEFAULT_CONFIGS) - 1
        assert initialize_defaults() == 0
        assert GlobalConfig.objects.get(key='MIN_BILL_AMOUNT').value == '500'
        assert GlobalConfig.objects.get(key='WELCOME_BONUS_AMOUNT').category == ConfigCategory.USER

    def test_by_category(self):
        initialize_defaults()

        keys = [c.key for c in get_by_category(ConfigCategory.SECURITY)]

        assert keys == ['JWT_EXPIRY_HOURS', 'LOCKOUT_DURATION_MINUTES', 'MAX_LOGIN_ATTEMPTS', 'REFRESH_TOKEN_EXPIRY_DAYS']

    def test_unknown_category(self):
        with pytest.raises(UnknownCategoryError):
            get_by_category('marketing')

    def test_management_command(self):
        out = StringIO()

        call_command('initialize_config', '--clear-cache', stdout=out)

        assert GlobalConfig.objects.count() == len(DEFAULT_CONFIGS)
        assert 'Config cache cleared' in out.getvalue()


@pytest.mark.django_db
class TestTypedUpdates:

    def test_string_for_numeric_key_is_stored_as_number(self):
        initialize_defaults()

        config = set_value('MAX_BILL_AGE_DAYS', '45')

        assert config.type == ConfigType.NUMBER
        assert config.value == '45'
        assert get_value('MAX_BILL_AGE_DAYS') == 45
        assert transaction_config()['max_bill_age_days'] == 45

    def test_known_key_uses_default_type_when_created(self):
        config = set_value('MAX_PENDING_REQUESTS', '3')

        assert config.type == ConfigType.NUMBER
        assert config.category == ConfigCategory.USER
        assert user_config()['max_pending_requests'] == 3

    def test_non_numeric_value_rejected(self):
        initialize_defaults()

        with pytest.raises(InvalidConfigError):
            set_value('MAX_BILL_AGE_DAYS', 'forty')

        assert get_value('MAX_BILL_AGE_DAYS') == 30

    def test_boolean_for_numeric_key_rejected(self):
        initialize_defaults()

        with pytest.raises(InvalidConfigError):
            set_value('MIN_BALANCE_FOR_REDEMPTION', True)

    def test_explicit_type(self):
        config = set_value('SUPPORTED_PAYMENT_METHODS', '["UPI", "BANK"]', type=ConfigType.JSON)

        assert config.type == ConfigType.JSON
        assert get_value('SUPPORTED_PAYMENT_METHODS') == ['UPI', 'BANK']

    def test_unknown_type_rejected(self):
        with pytest.raises(InvalidConfigError):
            set_value('SUPPORT_EMAIL', 'help@clubcorra.com', type='email')

    def test_boolean_strings(self):
        set_value('MAINTENANCE_MODE', False)

        assert set_value('MAINTENANCE_MODE', 'TRUE').value == 'true'
        with pytest.raises(InvalidConfigError):
            set_value('MAINTENANCE_MODE', 'yes')

    def test_mistyped_stored_value_falls_back_to_default(self):
        GlobalConfig.objects.create(key='MAX_BILL_AGE_DAYS', value='45', type=ConfigType.STRING)

        assert transaction_config()['max_bill_age_days'] == 30
