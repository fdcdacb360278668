"""Domain-specific exceptions for brands services."""


class BrandsServiceError(Exception):
    """Base exception for brands services."""
    pass


class BrandNotFoundError(BrandsServiceError):
    """Raised when brand does not exist."""
    pass


class DuplicateBrandError(BrandsServiceError):
    """Raised when a brand with the same name already exists."""
    pass


class InvalidBrandRulesError(BrandsServiceError):
    """Raised when percentages or redemption limits are inconsistent."""
    pass


class BrandInUseError(BrandsServiceError):
    """Raised when deleting a brand that has coin transactions."""
    pass


class CategoryNotFoundError(BrandsServiceError):
    """Raised when brand category does not exist."""
    pass


class DuplicateCategoryError(BrandsServiceError):
    """Raised when a category with the same name already exists."""
    pass


class CategoryInUseError(BrandsServiceError):
    """Raised when deleting a category that still has brands."""
    pass
