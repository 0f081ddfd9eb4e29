# appointments/permissions.py
from rest_framework import permissions
from django.utils.translation import gettext_lazy as _

from .services.policy import can_view_statistics


class CanViewAppointmentStatistics(permissions.BasePermission):
    """
    Per-psychologist statistics are restricted to admins and coordinators
    """
    message = _("Only administrators and coordinators can view appointment statistics.")

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        return can_view_statistics(request.user.role)
