"""Brand category CRUD operations service."""

import logging
from uuid import UUID
from typing import Optional, Dict, Any

from django.db import transaction
from django.db.models import QuerySet

from ..models import BrandCategory
from .exceptions import CategoryNotFoundError, DuplicateCategoryError, CategoryInUseError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('name', 'description', 'icon', 'color')


def _name_taken(name: str, exclude_id: Optional[UUID] = None) -> bool:
    queryset = BrandCategory.objects.filter(name__iexact=name)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    return queryset.exists()


@transaction.atomic
def create_category(
    *,
    name: str,
    description: Optional[str] = None,
    icon: Optional[str] = None,
    color: Optional[str] = None,
) -> BrandCategory:
    """
    Create a new brand category.

    Raises:
        DuplicateCategoryError: If a category with this name exists
    """
    if _name_taken(name):
        raise DuplicateCategoryError("Category with this name already exists")

    category = BrandCategory.objects.create(
        name=name,
        description=description,
        icon=icon,
        color=color,
    )
    logger.info("Created brand category %s (%s)", category.name, category.id)
    return category


def list_categories() -> QuerySet[BrandCategory]:
    return BrandCategory.objects.order_by('name')


def get_category(*, category_id: UUID) -> BrandCategory:
    """
    Get category by ID.

    Raises:
        CategoryNotFoundError: If category doesn't exist
    """
    try:
        return BrandCategory.objects.get(id=category_id)
    except BrandCategory.DoesNotExist:
        raise CategoryNotFoundError("Brand category not found")


@transaction.atomic
def update_category(*, category_id: UUID, data: Dict[str, Any]) -> BrandCategory:
    """
    Update a brand category.

    Args:
        category_id: Category UUID
        data: Fields to update

    Raises:
        CategoryNotFoundError: If category doesn't exist
        DuplicateCategoryError: If the new name belongs to another category
    """
    try:
        category = BrandCategory.objects.select_for_update().get(id=category_id)
    except BrandCategory.DoesNotExist:
        raise CategoryNotFoundError("Brand category not found")

    new_name = data.get('name')
    if new_name and new_name != category.name and _name_taken(new_name, exclude_id=category.id):
        raise DuplicateCategoryError("Category with this name already exists")

    for field, value in data.items():
        if field in UPDATABLE_FIELDS:
            setattr(category, field, value)

    category.save()
    return category


@transaction.atomic
def delete_category(*, category_id: UUID) -> None:
    """
    Delete a category that has no brands.

    Raises:
        CategoryNotFoundError: If category doesn't exist
        CategoryInUseError: If brands still reference the category
    """
    try:
        category = BrandCategory.objects.select_for_update().get(id=category_id)
    except BrandCategory.DoesNotExist:
        raise CategoryNotFoundError("Brand category not found")

    if category.brands.exists():
        raise CategoryInUseError("Cannot delete category with existing brands")

    category.delete()
    logger.info("Deleted brand category %s", category_id)
