"""
Tests for brands services.
"""

import pytest
from decimal import Decimal
from uuid import uuid4

from apps.accounts.models import User
from apps.brands.models import Brand
from apps.brands.services import (
    validate_brand_rules,
    create_brand,
    get_brand,
    update_brand,
    toggle_brand_status,
    delete_brand,
    search_brands,
    get_active_brands,
    get_brands_by_category,
    create_category,
    update_category,
    delete_category,
    get_category,
    # Exceptions
    BrandNotFoundError,
    DuplicateBrandError,
    InvalidBrandRulesError,
    BrandInUseError,
    CategoryNotFoundError,
    DuplicateCategoryError,
    CategoryInUseError,
)
from apps.coins.models import CoinTransaction, TransactionType


def rules(**overrides):
    values = {
        'earning_percentage': Decimal('10'),
        'redemption_percentage': Decimal('30'),
        'min_redemption_amount': 1,
        'max_redemption_amount': 2000,
        'brandwise_max_cap': 2000,
    }
    values.update(overrides)
    return values


class TestBrandRules:

    def test_valid_rules(self):
        validate_brand_rules(**rules())

    def test_percentages_may_total_100(self):
        validate_brand_rules(**rules(earning_percentage=Decimal('40'), redemption_percentage=Decimal('60')))

    def test_percentages_above_100(self):
        with pytest.raises(InvalidBrandRulesError, match='max 100%'):
            validate_brand_rules(**rules(earning_percentage=Decimal('70'), redemption_percentage=Decimal('40')))

    def test_percentage_out_of_range(self):
        with pytest.raises(InvalidBrandRulesError, match='Earning percentage'):
            validate_brand_rules(**rules(earning_percentage=Decimal('-1')))

    def test_min_above_max(self):
        with pytest.raises(InvalidBrandRulesError, match='min 500 > max 100'):
            validate_brand_rules(**rules(min_redemption_amount=500, max_redemption_amount=100))


@pytest.mark.django_db
class TestBrandManagement:

    def test_create_brand(self, food):
        brand = create_brand(
            name='Burger Barn',
            category_id=food.id,
            earning_percentage=Decimal('15'),
            redemption_percentage=Decimal('20'),
            brandwise_max_cap=1500,
        )

        assert brand.category == food
        assert brand.is_active is True
        assert brand.max_redemption_amount == 1500

    def test_max_redemption_follows_cap(self, db):
        brand = create_brand(name='Noodle Bar', max_redemption_amount=50, brandwise_max_cap=800)
        assert brand.max_redemption_amount == 800

    def test_duplicate_name_case_insensitive(self, brand):
        with pytest.raises(DuplicateBrandError):
            create_brand(name='cafe corra')

    def test_unknown_category(self, db):
        with pytest.raises(CategoryNotFoundError):
            create_brand(name='Nowhere', category_id=uuid4())

    def test_invalid_rules_rejected(self, db):
        with pytest.raises(InvalidBrandRulesError):
            create_brand(name='Greedy', earning_percentage=Decimal('80'), redemption_percentage=Decimal('30'))
        assert not Brand.objects.filter(name='Greedy').exists()

    def test_get_missing_brand(self, db):
        with pytest.raises(BrandNotFoundError):
            get_brand(brand_id=uuid4())

    def test_update_merges_rules(self, brand):
        with pytest.raises(InvalidBrandRulesError):
            update_brand(brand_id=brand.id, data={'earning_percentage': Decimal('75')})

        updated = update_brand(brand_id=brand.id, data={'earning_percentage': Decimal('70')})
        assert updated.earning_percentage == Decimal('70.00')

    def test_update_cap_moves_max_redemption(self, brand):
        updated = update_brand(brand_id=brand.id, data={'brandwise_max_cap': 900})

        assert updated.brandwise_max_cap == 900
        assert updated.max_redemption_amount == 900

    def test_update_to_taken_name(self, brand, inactive_brand):
        with pytest.raises(DuplicateBrandError):
            update_brand(brand_id=inactive_brand.id, data={'name': 'Cafe Corra'})

    def test_update_ignores_unknown_fields(self, brand):
        updated = update_brand(brand_id=brand.id, data={'id': uuid4(), 'description': 'New menu'})

        assert updated.id == brand.id
        assert updated.description == 'New menu'

    def test_toggle_status(self, brand):
        assert toggle_brand_status(brand_id=brand.id).is_active is False
        assert toggle_brand_status(brand_id=brand.id).is_active is True

    def test_delete_brand(self, brand):
        delete_brand(brand_id=brand.id)
        assert not Brand.objects.filter(id=brand.id).exists()

    def test_delete_brand_with_transactions(self, brand):
        user = User.objects.create_user(mobile_number='9876543210', password='TestPass123')
        CoinTransaction.objects.create(user=user, brand=brand, type=TransactionType.EARN, amount=10)

        with pytest.raises(BrandInUseError):
            delete_brand(brand_id=brand.id)


@pytest.mark.django_db
class TestBrandSearch:

    def test_search_paginates_by_name(self, brands):
        result = search_brands(page=1, limit=2)

        assert result['total'] == 3
        assert result['total_pages'] == 2
        assert [b.name for b in result['brands']] == ['Cafe Corra', 'Closed Boutique']

    def test_search_matches_name_or_description(self, brands):
        result = search_brands(query='coffee')
        assert {b.name for b in result['brands']} == {'Cafe Corra', 'Style Street'}

    def test_search_filters(self, brands, fashion):
        result = search_brands(category_id=fashion.id, is_active=True)
        assert [b.name for b in result['brands']] == ['Style Street']

    def test_limit_is_capped(self, brands):
        assert search_brands(limit=500)['limit'] == 100

    def test_active_brands(self, brands):
        assert [b.name for b in get_active_brands()] == ['Cafe Corra', 'Style Street']

    def test_brands_by_category_only_active(self, brands, fashion):
        assert [b.name for b in get_brands_by_category(category_id=fashion.id)] == ['Style Street']


@pytest.mark.django_db
class TestCategoryManagement:

    def test_create_and_get(self, db):
        category = create_category(name='Travel', color='#00AAFF')
        assert get_category(category_id=category.id).color == '#00AAFF'

    def test_duplicate_name(self, food):
        with pytest.raises(DuplicateCategoryError):
            create_category(name='FOOD')

    def test_update(self, food):
        category = update_category(category_id=food.id, data={'icon': 'pizza'})
        assert category.icon == 'pizza'

    def test_update_missing(self, db):
        with pytest.raises(CategoryNotFoundError):
            update_category(category_id=uuid4(), data={'name': 'Ghost'})

    def test_delete_in_use(self, brand, food):
        with pytest.raises(CategoryInUseError):
            delete_category(category_id=food.id)

    def test_delete_empty(self, fashion):
        delete_category(category_id=fashion.id)
        with pytest.raises(CategoryNotFoundError):
            get_category(category_id=fashion.id)
