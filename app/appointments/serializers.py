# appointments/serializers.py
from rest_framework import serializers
from django.utils.translation import gettext_lazy as _

from .models import Appointment
from .constants import SITUATION_CHOICES, MODALITY_CHOICES
from .services.payloads import (
    AppointmentDraft,
    ClientInfo,
    CompletionPayload,
    CancellationPayload,
    NoShowPayload,
    DocumentDescriptor,
)

DRAFT_FIELDS = ('process_id', 'reason_id', 'psychologist_id', 'date', 'time', 'modality', 'location')


class ClientSerializer(serializers.Serializer):
    """
    Client snapshot embedded in an appointment
    """
    full_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    dni = serializers.CharField(max_length=20, required=False, allow_blank=True,
                                help_text=_("National identity document, 8 digits"))
    situation = serializers.ChoiceField(choices=SITUATION_CHOICES, required=False)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)


class AppointmentSerializer(serializers.ModelSerializer):
    """
    Full appointment representation
    """
    client = serializers.SerializerMethodField()
    time = serializers.TimeField(format='%H:%M')
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = Appointment
        fields = [
            'appointment_id', 'client',
            'process', 'process_name', 'reason', 'reason_name',
            'psychologist', 'psychologist_name',
            'date', 'time', 'modality', 'location',
            'status', 'status_display',
            'diagnosis', 'recommendations', 'conclusions', 'cancellation_reason',
            'document',
            'created_at', 'created_by', 'updated_at', 'updated_by'
        ]
        read_only_fields = fields

    def get_client(self, obj) -> dict:
        return obj.client


class AppointmentDraftSerializer(serializers.Serializer):
    """
    Input for creating or editing an appointment.

    Only types are checked here; required fields and business rules are
    enforced by the appointment workflow so every rule failure comes back as
    the same typed rejection.
    """
    client = ClientSerializer(required=False)
    process_id = serializers.UUIDField(required=False, allow_null=True)
    reason_id = serializers.UUIDField(required=False, allow_null=True)
    psychologist_id = serializers.UUIDField(required=False, allow_null=True)
    date = serializers.DateField(required=False, allow_null=True)
    time = serializers.TimeField(required=False, allow_null=True, input_formats=['%H:%M', '%H:%M:%S'])
    modality = serializers.ChoiceField(choices=MODALITY_CHOICES, required=False)
    location = serializers.CharField(max_length=512, required=False, allow_blank=True)

    def to_draft(self, base: Appointment = None) -> AppointmentDraft:
        """
        Build the draft, filling fields absent from the request from ``base``
        """
        data = self.validated_data
        client = dict(base.client) if base is not None else {}
        client.update(data.get('client', {}))

        values = {}
        for field in DRAFT_FIELDS:
            if field in data:
                values[field] = data[field]
            elif base is not None:
                values[field] = getattr(base, field)

        return AppointmentDraft(client=ClientInfo(**client), **values)


class CompletionSerializer(serializers.Serializer):
    """
    Session results required to complete an appointment
    """
    diagnosis = serializers.CharField(required=False, allow_blank=True, default='')
    recommendations = serializers.CharField(required=False, allow_blank=True, default='')
    conclusions = serializers.CharField(required=False, allow_blank=True, default='')

    def to_payload(self) -> CompletionPayload:
        return CompletionPayload(**self.validated_data)


class CancellationSerializer(serializers.Serializer):
    """
    Serializer for appointment cancellation
    """
    cancellation_reason = serializers.CharField(
        max_length=1000,
        required=False,
        allow_blank=True,
        help_text=_("Reason for cancelling the appointment")
    )

    def to_payload(self) -> CancellationPayload:
        return CancellationPayload(reason=self.validated_data.get('cancellation_reason'))


class NoShowSerializer(serializers.Serializer):
    """
    Marking a no-show carries no data
    """

    def to_payload(self) -> NoShowPayload:
        return NoShowPayload()


class DocumentSerializer(serializers.Serializer):
    """
    Descriptor of a result document already uploaded to file storage
    """
    id = serializers.CharField(max_length=255)
    file_name = serializers.CharField(max_length=255)
    original_name = serializers.CharField(max_length=255)
    url = serializers.URLField(max_length=1024)
    size = serializers.IntegerField(help_text=_("Size in bytes"))
    mime_type = serializers.CharField(max_length=100)
    uploaded_at = serializers.CharField(required=False, allow_blank=True)
    uploaded_by = serializers.CharField(required=False, allow_blank=True)

    def to_descriptor(self) -> DocumentDescriptor:
        data = dict(self.validated_data)
        data['uploaded_at'] = data.get('uploaded_at') or None
        data['uploaded_by'] = data.get('uploaded_by') or None
        return DocumentDescriptor(**data)


class StatusCountsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    scheduled = serializers.IntegerField()
    completed = serializers.IntegerField()
    cancelled = serializers.IntegerField()
    no_show = serializers.IntegerField()


class PsychologistStatsSerializer(serializers.Serializer):
    """
    Appointment counts and completion rate of one psychologist
    """
    psychologist_id = serializers.CharField()
    psychologist_name = serializers.CharField()
    completed = serializers.IntegerField()
    scheduled = serializers.IntegerField()
    cancelled = serializers.IntegerField()
    no_show = serializers.IntegerField()
    total = serializers.IntegerField()
    completion_rate = serializers.IntegerField(help_text=_("Percentage, rounded"))


class DashboardSerializer(serializers.Serializer):
    today = serializers.DateField()
    counts = StatusCountsSerializer()
    today_appointments = AppointmentSerializer(many=True)
    upcoming_appointments = AppointmentSerializer(many=True)
    psychologist_stats = PsychologistStatsSerializer(many=True, allow_null=True)
