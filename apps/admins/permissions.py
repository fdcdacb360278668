from rest_framework import permissions

from .models import Admin, AdminRole


class IsPlatformAdmin(permissions.BasePermission):
    """
    Only active portal admins.

    Anonymous requests get 401, authenticated users 403.
    """

    message = 'Admin access required.'
    allowed_roles = (AdminRole.ADMIN, AdminRole.SUPER_ADMIN)

    def has_permission(self, request, view):
        admin = request.user
        return (
            isinstance(admin, Admin)
            and admin.is_active
            and admin.role in self.allowed_roles
        )


class IsSuperAdmin(IsPlatformAdmin):
    """Only active super admins (admin account management)."""

    message = 'Super admin access required.'
    allowed_roles = (AdminRole.SUPER_ADMIN,)
