from rest_framework import permissions

from .models import User


class IsPlatformUser(permissions.BasePermission):
    """
    Only authenticated app users.

    Admin tokens are authenticated too but carry no user account,
    so they are refused with 403.
    """

    message = 'User account required.'

    def has_permission(self, request, view):
        return isinstance(request.user, User) and request.user.is_authenticated
