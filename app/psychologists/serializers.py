# psychologists/serializers.py
from rest_framework import serializers
from django.contrib.auth import get_user_model
from django.utils.translation import gettext_lazy as _

from .models import Psychologist

User = get_user_model()


class PsychologistSerializer(serializers.ModelSerializer):
    """
    Psychologist record with its optional login link
    """
    user = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(),
        required=False,
        allow_null=True,
        help_text=_("Login account linked to this psychologist")
    )
    user_email = serializers.EmailField(source='user.email', read_only=True, default=None)

    class Meta:
        model = Psychologist
        fields = [
            'id', 'full_name', 'dni', 'institutional_email', 'personal_email', 'phone',
            'user', 'user_email',
            'created_at', 'created_by', 'updated_at', 'updated_by'
        ]
        read_only_fields = [
            'id', 'user_email', 'created_at', 'created_by', 'updated_at', 'updated_by'
        ]

    def validate_full_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError(_("Full name cannot be blank"))
        return value
