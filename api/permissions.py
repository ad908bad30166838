"""
Permissions - administrators run the boarding house, everyone else is read-only
"""
from rest_framework import permissions


class IsAdministrator(permissions.BasePermission):
    """
    Permission to allow staff users only
    """
    message = "Only administrators can perform this action."

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_staff)


class IsAdminOrReadOnly(permissions.BasePermission):
    """
    Authenticated users may read; writes need an administrator
    """
    message = "Only administrators can modify this resource."

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return request.user.is_staff
