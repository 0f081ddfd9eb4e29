# catalogs/serializers.py
from rest_framework import serializers
from django.utils.translation import gettext_lazy as _

from .models import Process, ConsultationReason, SystemSettings

AUDIT_FIELDS = ['created_at', 'created_by', 'updated_at', 'updated_by']


class ProcessSerializer(serializers.ModelSerializer):
    """
    Serializer for admission processes
    """
    class Meta:
        model = Process
        fields = ['id', 'name', 'start_date', 'end_date', 'is_active'] + AUDIT_FIELDS
        read_only_fields = ['id'] + AUDIT_FIELDS
        extra_kwargs = {'is_active': {'default': True}}

    def validate(self, attrs):
        start_date = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end_date = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start_date and end_date and end_date < start_date:
            raise serializers.ValidationError({
                'end_date': _("End date cannot be before the start date")
            })
        return attrs


class ConsultationReasonSerializer(serializers.ModelSerializer):
    """
    Serializer for consultation reasons
    """
    class Meta:
        model = ConsultationReason
        fields = ['id', 'name', 'description', 'is_active'] + AUDIT_FIELDS
        read_only_fields = ['id'] + AUDIT_FIELDS
        extra_kwargs = {'is_active': {'default': True}}


class ToggleStatusSerializer(serializers.Serializer):
    is_active = serializers.BooleanField(
        help_text=_("New active state")
    )


class SystemSettingsSerializer(serializers.ModelSerializer):
    """
    Serializer for the office settings
    """
    working_hours_start = serializers.TimeField(format='%H:%M', input_formats=['%H:%M', '%H:%M:%S'])
    working_hours_end = serializers.TimeField(format='%H:%M', input_formats=['%H:%M', '%H:%M:%S'])
    working_days = serializers.ListField(
        child=serializers.IntegerField(min_value=0, max_value=6),
        allow_empty=False,
        help_text=_("Weekday numbers, 0 = Sunday to 6 = Saturday")
    )

    class Meta:
        model = SystemSettings
        fields = [
            'center_name', 'center_email', 'center_phone', 'center_address',
            'default_duration', 'min_time_advance', 'max_appointments_per_day',
            'working_hours_start', 'working_hours_end', 'working_days',
            'updated_at', 'updated_by',
        ]
        read_only_fields = ['updated_at', 'updated_by']

    def validate_working_days(self, value):
        return sorted(set(value))

    def validate(self, attrs):
        start = attrs.get('working_hours_start', getattr(self.instance, 'working_hours_start', None))
        end = attrs.get('working_hours_end', getattr(self.instance, 'working_hours_end', None))
        if start and end and end <= start:
            raise serializers.ValidationError({
                'working_hours_end': _("Working hours must end after they start")
            })
        return attrs
