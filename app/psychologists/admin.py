# psychologists/admin.py
from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Psychologist


@admin.register(Psychologist)
class PsychologistAdmin(admin.ModelAdmin):
    """Admin configuration for Psychologist model"""

    list_display = [
        'full_name',
        'dni',
        'institutional_email',
        'phone',
        'user_email',
        'created_at'
    ]
    search_fields = ['full_name', 'dni', 'institutional_email', 'user__email']
    readonly_fields = ['id', 'created_at', 'created_by', 'updated_at', 'updated_by']
    autocomplete_fields = ['user']

    fieldsets = (
        (_('Personal Information'), {
            'fields': ('id', 'full_name', 'dni')
        }),
        (_('Contact'), {
            'fields': ('institutional_email', 'personal_email', 'phone')
        }),
        (_('Login'), {
            'fields': ('user',)
        }),
        (_('Audit'), {
            'fields': ('created_at', 'created_by', 'updated_at', 'updated_by'),
            'classes': ('collapse',)
        }),
    )

    def user_email(self, obj):
        return obj.user.email if obj.user else "-"
    user_email.short_description = _('Login')
