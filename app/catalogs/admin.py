# catalogs/admin.py
from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Process, ConsultationReason, SystemSettings


class CatalogEntryAdmin(admin.ModelAdmin):
    """Shared admin configuration for reference entries"""

    list_filter = ['is_active']
    search_fields = ['name']
    readonly_fields = ['id', 'created_at', 'created_by', 'updated_at', 'updated_by']
    actions = ['activate', 'deactivate']

    def activate(self, request, queryset):
        updated = queryset.update(is_active=True, updated_by=request.user.email)
        self.message_user(request, f"{updated} entries activated.")
    activate.short_description = _("Activate selected entries")

    def deactivate(self, request, queryset):
        updated = queryset.update(is_active=False, updated_by=request.user.email)
        self.message_user(request, f"{updated} entries deactivated.")
    deactivate.short_description = _("Deactivate selected entries")


@admin.register(Process)
class ProcessAdmin(CatalogEntryAdmin):
    list_display = ['name', 'start_date', 'end_date', 'is_active', 'created_at']


@admin.register(ConsultationReason)
class ConsultationReasonAdmin(CatalogEntryAdmin):
    list_display = ['name', 'is_active', 'created_at']


@admin.register(SystemSettings)
class SystemSettingsAdmin(admin.ModelAdmin):
    list_display = ['center_name', 'center_email', 'default_duration', 'updated_at']
    readonly_fields = ['updated_at', 'updated_by']

    def has_add_permission(self, request):
        return not SystemSettings.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False
