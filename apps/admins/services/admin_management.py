"""Admin account CRUD operations service."""

import logging
from uuid import UUID
from typing import Optional, Dict, Any

from django.db import transaction
from django.db.models import QuerySet, Count, Q

from ..models import Admin, AdminRole, AdminStatus
from .exceptions import AdminNotFoundError, DuplicateAdminError, CannotDeleteSelfError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    'email',
    'first_name',
    'last_name',
    'role',
    'status',
    'profile_picture',
    'phone_number',
    'department',
    'permissions',
)

# Fields an admin may change on their own account
SELF_UPDATABLE_FIELDS = (
    'first_name',
    'last_name',
    'profile_picture',
    'phone_number',
    'department',
    'password',
)


def _email_taken(email: str, exclude_id: Optional[UUID] = None) -> bool:
    queryset = Admin.objects.filter(email__iexact=email)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    return queryset.exists()


@transaction.atomic
def create_admin(
    *,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    role: str = AdminRole.ADMIN,
    phone_number: Optional[str] = None,
    department: Optional[str] = None,
    permissions: Optional[list] = None,
) -> Admin:
    """
    Create a new admin account.

    Args:
        email: Login email
        password: Plain password (hashed before storage)
        first_name: First name
        last_name: Last name
        role: ADMIN or SUPER_ADMIN
        phone_number: Contact number
        department: Team or department
        permissions: Free-form permission names

    Returns:
        Created Admin instance

    Raises:
        DuplicateAdminError: If the email is taken
    """
    email = email.strip().lower()
    if _email_taken(email):
        raise DuplicateAdminError("Admin with this email already exists")

    admin = Admin(
        email=email,
        first_name=first_name,
        last_name=last_name,
        role=role,
        phone_number=phone_number,
        department=department,
        permissions=permissions or [],
    )
    admin.set_password(password)
    admin.save()

    logger.info("Created admin %s with role %s", admin.id, admin.role)
    return admin


def list_admins() -> QuerySet[Admin]:
    return Admin.objects.order_by('-created_at')


def get_admin(*, admin_id: UUID) -> Admin:
    """
    Get admin by ID.

    Raises:
        AdminNotFoundError: If admin doesn't exist
    """
    try:
        return Admin.objects.get(id=admin_id)
    except Admin.DoesNotExist:
        raise AdminNotFoundError("Admin not found")


@transaction.atomic
def update_admin(
    *,
    admin_id: UUID,
    data: Dict[str, Any],
    allowed_fields: tuple = UPDATABLE_FIELDS + ('password',),
) -> Admin:
    """
    Update an admin account.

    A supplied password is re-hashed.

    Args:
        admin_id: Admin UUID
        data: Fields to update
        allowed_fields: Fields the caller may change

    Raises:
        AdminNotFoundError: If admin doesn't exist
        DuplicateAdminError: If the new email belongs to another admin
    """
    try:
        admin = Admin.objects.select_for_update().get(id=admin_id)
    except Admin.DoesNotExist:
        raise AdminNotFoundError("Admin not found")

    changes = {field: value for field, value in data.items() if field in allowed_fields}

    if changes.get('email'):
        changes['email'] = changes['email'].strip().lower()
        if _email_taken(changes['email'], exclude_id=admin.id):
            raise DuplicateAdminError("Admin with this email already exists")

    password = changes.pop('password', None)
    if password:
        admin.set_password(password)

    for field, value in changes.items():
        setattr(admin, field, value)

    admin.save()
    return admin


def update_own_profile(*, admin: Admin, data: Dict[str, Any]) -> Admin:
    """Update the caller's own account; role and status are never changed here."""
    return update_admin(admin_id=admin.id, data=data, allowed_fields=SELF_UPDATABLE_FIELDS)


@transaction.atomic
def delete_admin(*, admin_id: UUID, deleted_by: Optional[Admin] = None) -> None:
    """
    Delete an admin account.

    Raises:
        AdminNotFoundError: If admin doesn't exist
        CannotDeleteSelfError: If an admin deletes their own account
    """
    if deleted_by is not None and str(deleted_by.id) == str(admin_id):
        raise CannotDeleteSelfError("You cannot delete your own admin account")

    deleted, _ = Admin.objects.filter(id=admin_id).delete()
    if not deleted:
        raise AdminNotFoundError("Admin not found")

    logger.info("Deleted admin %s", admin_id)


def get_admin_stats() -> dict:
    """
    Count admins by status and role.

    Returns:
        dict with total_admins, active_admins, super_admins
    """
    return Admin.objects.aggregate(
        total_admins=Count('id'),
        active_admins=Count('id', filter=Q(status=AdminStatus.ACTIVE)),
        super_admins=Count('id', filter=Q(role=AdminRole.SUPER_ADMIN)),
    )
