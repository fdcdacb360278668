"""Services for brands business logic."""

from .exceptions import (
    BrandsServiceError,
    BrandNotFoundError,
    DuplicateBrandError,
    InvalidBrandRulesError,
    BrandInUseError,
    CategoryNotFoundError,
    DuplicateCategoryError,
    CategoryInUseError,
)
from .category_management import (
    create_category,
    list_categories,
    get_category,
    update_category,
    delete_category,
)
from .brand_management import (
    validate_brand_rules,
    create_brand,
    get_brand,
    update_brand,
    toggle_brand_status,
    delete_brand,
)
from .brand_search import search_brands, get_active_brands, get_brands_by_category

__all__ = [
    # Exceptions
    'BrandsServiceError',
    'BrandNotFoundError',
    'DuplicateBrandError',
    'InvalidBrandRulesError',
    'BrandInUseError',
    'CategoryNotFoundError',
    'DuplicateCategoryError',
    'CategoryInUseError',
    # Categories
    'create_category',
    'list_categories',
    'get_category',
    'update_category',
    'delete_category',
    # Brands
    'validate_brand_rules',
    'create_brand',
    'get_brand',
    'update_brand',
    'toggle_brand_status',
    'delete_brand',
    # Search
    'search_brands',
    'get_active_brands',
    'get_brands_by_category',
]
