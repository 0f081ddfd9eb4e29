# users/permissions.py
from rest_framework import permissions
from django.utils.translation import gettext_lazy as _

from appointments.services.policy import (
    can_manage_users,
    can_manage_catalogs,
    can_manage_psychologists,
    can_manage_settings,
)


class IsAdminRole(permissions.BasePermission):
    """
    Permission for user administration - admins only
    """
    message = _("Only administrators can manage users.")

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        return can_manage_users(request.user.role)


class CanManagePsychologists(permissions.BasePermission):
    """
    Psychologist records: anyone authenticated may read, admins and coordinators may write
    """
    message = _("You don't have permission to manage psychologists.")

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return can_manage_psychologists(request.user.role)


class CanManageCatalogs(permissions.BasePermission):
    """
    Processes and consultation reasons: anyone authenticated may read, admins may write
    """
    message = _("Only administrators can manage processes and consultation reasons.")

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return can_manage_catalogs(request.user.role)


class CanManageSystemSettings(permissions.BasePermission):
    """
    Office settings: admins only, for reading and writing
    """
    message = _("Only administrators can access the system settings.")

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        return can_manage_settings(request.user.role)
