# appointments/models.py
import uuid
from django.db import models
from django.utils.translation import gettext_lazy as _
from django.utils import timezone

from psychologists.models import Psychologist, dni_validator
from catalogs.models import Process, ConsultationReason
from .constants import (
    STATUS_CHOICES,
    STATUS_SCHEDULED,
    STATUS_COMPLETED,
    TERMINAL_STATUSES,
    SITUATION_CHOICES,
    SITUATION_CEPRUNSA,
    MODALITY_CHOICES,
    MODALITY_PRESENTIAL,
)


class Appointment(models.Model):
    """
    Counseling session between a client and a psychologist.

    The client is a snapshot copied into the appointment at creation time.
    Process, reason and psychologist are referenced by id plus a denormalized
    name, so renaming, deactivating or deleting them leaves history intact.
    """

    # Primary key
    appointment_id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text=_("Unique identifier for the appointment")
    )

    # Client snapshot
    client_full_name = models.CharField(
        _('client full name'),
        max_length=200
    )
    client_dni = models.CharField(
        _('client DNI'),
        max_length=8,
        validators=[dni_validator],
        help_text=_("Client's national identity document, 8 digits")
    )
    client_situation = models.CharField(
        _('client situation'),
        max_length=20,
        choices=SITUATION_CHOICES,
        help_text=_("ceprunsa (admissions applicant) or particular")
    )
    client_phone = models.CharField(
        _('client phone'),
        max_length=20,
        blank=True
    )
    client_email = models.EmailField(
        _('client email'),
        blank=True
    )

    # References with denormalized names
    process = models.ForeignKey(
        Process,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='appointments',
        help_text=_("Admission process, only for CEPRUNSA clients")
    )
    process_name = models.CharField(
        _('process name'),
        max_length=200,
        blank=True
    )
    reason = models.ForeignKey(
        ConsultationReason,
        on_delete=models.SET_NULL,
        null=True,
        related_name='appointments',
        help_text=_("Consultation reason")
    )
    reason_name = models.CharField(
        _('reason name'),
        max_length=200
    )
    psychologist = models.ForeignKey(
        Psychologist,
        on_delete=models.SET_NULL,
        null=True,
        related_name='appointments',
        help_text=_("Psychologist attending the session")
    )
    psychologist_name = models.CharField(
        _('psychologist name'),
        max_length=200
    )

    # Scheduling
    date = models.DateField(
        _('date')
    )
    time = models.TimeField(
        _('time')
    )
    modality = models.CharField(
        _('modality'),
        max_length=20,
        choices=MODALITY_CHOICES,
        default=MODALITY_PRESENTIAL
    )
    location = models.CharField(
        _('location'),
        max_length=512,
        blank=True,
        help_text=_("Office address for presential sessions, meeting link for virtual ones")
    )

    # Lifecycle
    status = models.CharField(
        _('status'),
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_SCHEDULED
    )

    # Session results
    diagnosis = models.TextField(
        _('diagnosis'),
        blank=True
    )
    recommendations = models.TextField(
        _('recommendations'),
        blank=True
    )
    conclusions = models.TextField(
        _('conclusions'),
        blank=True
    )
    cancellation_reason = models.TextField(
        _('cancellation reason'),
        blank=True
    )

    # Attached result document descriptor (file itself lives in external storage)
    document = models.JSONField(
        _('document'),
        null=True,
        blank=True
    )

    # Audit
    created_at = models.DateTimeField(
        _('created at'),
        default=timezone.now
    )
    created_by = models.CharField(
        _('created by'),
        max_length=254,
        default='system'
    )
    updated_at = models.DateTimeField(
        _('updated at'),
        null=True,
        blank=True
    )
    updated_by = models.CharField(
        _('updated by'),
        max_length=254,
        blank=True
    )

    class Meta:
        verbose_name = _('Appointment')
        verbose_name_plural = _('Appointments')
        db_table = 'appointments'
        indexes = [
            models.Index(fields=['date', 'time'], name='appointments_schedule_idx'),
            models.Index(fields=['psychologist', 'status'], name='appointments_psy_status_idx'),
            models.Index(fields=['status'], name='appointments_status_idx'),
            models.Index(fields=['client_dni'], name='appointments_client_dni_idx'),
        ]

    def __str__(self):
        return f"{self.client_full_name} - {self.date} {self.time} ({self.status})"

    @property
    def client(self):
        return {
            'full_name': self.client_full_name,
            'dni': self.client_dni,
            'situation': self.client_situation,
            'phone': self.client_phone,
            'email': self.client_email,
        }

    @property
    def is_terminal(self):
        return self.status in TERMINAL_STATUSES

    @property
    def is_completed(self):
        return self.status == STATUS_COMPLETED

    @property
    def is_ceprunsa(self):
        return self.client_situation == SITUATION_CEPRUNSA
