"""Services for admin accounts and user administration."""

from .exceptions import (
    AdminsServiceError,
    AdminNotFoundError,
    DuplicateAdminError,
    InvalidAdminCredentialsError,
    InactiveAdminError,
    CannotDeleteSelfError,
    ManagedUserNotFoundError,
)
from .admin_management import (
    create_admin,
    list_admins,
    get_admin,
    update_admin,
    update_own_profile,
    delete_admin,
    get_admin_stats,
)
from .admin_auth import admin_login, issue_admin_tokens
from .user_admin import list_users, get_managed_user, get_user_stats, update_user_status

__all__ = [
    # Exceptions
    'AdminsServiceError',
    'AdminNotFoundError',
    'DuplicateAdminError',
    'InvalidAdminCredentialsError',
    'InactiveAdminError',
    'CannotDeleteSelfError',
    'ManagedUserNotFoundError',
    # Admin accounts
    'create_admin',
    'list_admins',
    'get_admin',
    'update_admin',
    'update_own_profile',
    'delete_admin',
    'get_admin_stats',
    # Auth
    'admin_login',
    'issue_admin_tokens',
    # Users
    'list_users',
    'get_managed_user',
    'get_user_stats',
    'update_user_status',
]
