"""Brand CRUD operations service."""

import logging
from decimal import Decimal
from uuid import UUID
from typing import Optional, Dict, Any

from django.db import transaction

from ..models import Brand, BrandCategory
from .exceptions import (
    BrandNotFoundError,
    DuplicateBrandError,
    InvalidBrandRulesError,
    BrandInUseError,
    CategoryNotFoundError,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    'name',
    'description',
    'logo_url',
    'category_id',
    'earning_percentage',
    'redemption_percentage',
    'min_redemption_amount',
    'max_redemption_amount',
    'brandwise_max_cap',
    'is_active',
)

RULE_FIELDS = (
    'earning_percentage',
    'redemption_percentage',
    'min_redemption_amount',
    'max_redemption_amount',
    'brandwise_max_cap',
)


def validate_brand_rules(
    *,
    earning_percentage: Decimal,
    redemption_percentage: Decimal,
    min_redemption_amount: int,
    max_redemption_amount: int,
    brandwise_max_cap: int,
) -> None:
    """
    Check percentage and redemption limit consistency.

    Raises:
        InvalidBrandRulesError: On the first rule that fails
    """
    earning = Decimal(earning_percentage)
    redemption = Decimal(redemption_percentage)

    if not Decimal('0') <= earning <= Decimal('100'):
        raise InvalidBrandRulesError("Earning percentage must be between 0 and 100")

    if not Decimal('0') <= redemption <= Decimal('100'):
        raise InvalidBrandRulesError("Redemption percentage must be between 0 and 100")

    if earning + redemption > Decimal('100'):
        raise InvalidBrandRulesError(
            f"Invalid percentages: earning {earning}% + redemption {redemption}% "
            f"= {earning + redemption}% (max 100%)"
        )

    if max_redemption_amount < min_redemption_amount:
        raise InvalidBrandRulesError(
            f"Invalid redemption amounts: min {min_redemption_amount} > max {max_redemption_amount}"
        )

    if brandwise_max_cap < 0:
        raise InvalidBrandRulesError("Brandwise max cap cannot be negative")


def _ensure_category_exists(category_id: Optional[UUID]) -> None:
    if category_id is not None and not BrandCategory.objects.filter(id=category_id).exists():
        raise CategoryNotFoundError("Brand category not found")


def _name_taken(name: str, exclude_id: Optional[UUID] = None) -> bool:
    queryset = Brand.objects.filter(name__iexact=name)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    return queryset.exists()


@transaction.atomic
def create_brand(
    *,
    name: str,
    description: str = '',
    logo_url: Optional[str] = None,
    category_id: Optional[UUID] = None,
    earning_percentage: Decimal = Decimal('10'),
    redemption_percentage: Decimal = Decimal('30'),
    min_redemption_amount: int = 1,
    max_redemption_amount: Optional[int] = None,
    brandwise_max_cap: int = 2000,
    is_active: bool = True,
) -> Brand:
    """
    Create a new partner brand.

    The max redemption amount always follows the brandwise cap.

    Args:
        name: Brand name
        description: Free text description
        logo_url: Public logo URL
        category_id: Optional BrandCategory UUID
        earning_percentage: Share of the bill credited as coins
        redemption_percentage: Share of the bill payable with coins
        min_redemption_amount: Smallest redeemable coin amount
        max_redemption_amount: Ignored in favour of brandwise_max_cap
        brandwise_max_cap: Largest redeemable coin amount per request
        is_active: Whether users can transact with the brand

    Returns:
        Created Brand instance

    Raises:
        CategoryNotFoundError: If category doesn't exist
        DuplicateBrandError: If the name is taken
        InvalidBrandRulesError: If the rules are inconsistent
    """
    _ensure_category_exists(category_id)

    if _name_taken(name):
        raise DuplicateBrandError(f"Brand '{name}' already exists")

    max_redemption_amount = brandwise_max_cap

    validate_brand_rules(
        earning_percentage=earning_percentage,
        redemption_percentage=redemption_percentage,
        min_redemption_amount=min_redemption_amount,
        max_redemption_amount=max_redemption_amount,
        brandwise_max_cap=brandwise_max_cap,
    )

    brand = Brand.objects.create(
        name=name,
        description=description,
        logo_url=logo_url,
        category_id=category_id,
        earning_percentage=earning_percentage,
        redemption_percentage=redemption_percentage,
        min_redemption_amount=min_redemption_amount,
        max_redemption_amount=max_redemption_amount,
        brandwise_max_cap=brandwise_max_cap,
        is_active=is_active,
    )
    logger.info("Created brand %s (%s)", brand.name, brand.id)
    return brand


def get_brand(*, brand_id: UUID) -> Brand:
    """
    Get brand by ID.

    Raises:
        BrandNotFoundError: If brand doesn't exist
    """
    try:
        return Brand.objects.select_related('category').get(id=brand_id)
    except Brand.DoesNotExist:
        raise BrandNotFoundError("Brand not found")


def _get_for_update(brand_id: UUID) -> Brand:
    try:
        return Brand.objects.select_for_update().get(id=brand_id)
    except Brand.DoesNotExist:
        raise BrandNotFoundError("Brand not found")


@transaction.atomic
def update_brand(*, brand_id: UUID, data: Dict[str, Any]) -> Brand:
    """
    Update a brand.

    Rules are checked against the current values merged with the update.

    Args:
        brand_id: Brand UUID
        data: Fields to update

    Returns:
        Updated Brand instance

    Raises:
        BrandNotFoundError: If brand doesn't exist
        CategoryNotFoundError: If a new category doesn't exist
        DuplicateBrandError: If the new name belongs to another brand
        InvalidBrandRulesError: If the merged rules are inconsistent
    """
    brand = _get_for_update(brand_id)
    changes = {field: value for field, value in data.items() if field in UPDATABLE_FIELDS}

    if 'category_id' in changes and changes['category_id'] != brand.category_id:
        _ensure_category_exists(changes['category_id'])

    new_name = changes.get('name')
    if new_name and new_name != brand.name and _name_taken(new_name, exclude_id=brand.id):
        raise DuplicateBrandError(f"Brand '{new_name}' already exists")

    if changes.get('brandwise_max_cap') is not None:
        changes['max_redemption_amount'] = changes['brandwise_max_cap']

    if any(field in changes for field in RULE_FIELDS):
        merged = {field: changes.get(field, getattr(brand, field)) for field in RULE_FIELDS}
        validate_brand_rules(**merged)

    for field, value in changes.items():
        setattr(brand, field, value)

    brand.save()
    return get_brand(brand_id=brand.id)


@transaction.atomic
def toggle_brand_status(*, brand_id: UUID) -> Brand:
    """Flip a brand between active and inactive."""
    brand = _get_for_update(brand_id)
    brand.is_active = not brand.is_active
    brand.save(update_fields=['is_active', 'updated_at'])

    logger.info("Brand %s is_active=%s", brand.id, brand.is_active)
    return brand


@transaction.atomic
def delete_brand(*, brand_id: UUID) -> None:
    """
    Delete a brand that has no coin transactions.

    Raises:
        BrandNotFoundError: If brand doesn't exist
        BrandInUseError: If transactions reference the brand
    """
    brand = _get_for_update(brand_id)

    if brand.transactions.exists():
        raise BrandInUseError("Cannot delete brand with existing transactions")

    brand.delete()
    logger.info("Deleted brand %s", brand_id)
