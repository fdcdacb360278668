"""Brand search and listing service."""

import math
from uuid import UUID
from typing import Optional

from django.db.models import Q, QuerySet

from ..models import Brand

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def search_brands(
    *,
    query: Optional[str] = None,
    category_id: Optional[UUID] = None,
    is_active: Optional[bool] = None,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> dict:
    """
    Search and filter brands, one page at a time.

    Args:
        query: Case-insensitive match on name or description
        category_id: Filter by category
        is_active: Filter by active flag (None for both)
        page: 1-based page number
        limit: Page size, capped at 100

    Returns:
        dict with brands, total, page, limit, total_pages
    """
    page = max(int(page), 1)
    limit = min(max(int(limit), 1), MAX_PAGE_SIZE)

    queryset = Brand.objects.select_related('category')

    if category_id:
        queryset = queryset.filter(category_id=category_id)

    if is_active is not None:
        queryset = queryset.filter(is_active=is_active)

    if query:
        queryset = queryset.filter(
            Q(name__icontains=query) |
            Q(description__icontains=query)
        )

    queryset = queryset.order_by('name')
    total = queryset.count()
    offset = (page - 1) * limit

    return {
        'brands': list(queryset[offset:offset + limit]),
        'total': total,
        'page': page,
        'limit': limit,
        'total_pages': math.ceil(total / limit),
    }


def get_active_brands() -> QuerySet[Brand]:
    return Brand.objects.select_related('category').filter(is_active=True).order_by('name')


def get_brands_by_category(*, category_id: UUID) -> QuerySet[Brand]:
    """Active brands in a category, ordered by name."""
    return get_active_brands().filter(category_id=category_id)
