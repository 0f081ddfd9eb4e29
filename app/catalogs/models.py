# catalogs/models.py
import datetime
import uuid
from django.db import models
from django.utils.translation import gettext_lazy as _
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator, MaxValueValidator
from django.utils import timezone


class CatalogEntry(models.Model):
    """
    Reference entity selectable when scheduling appointments.

    Only active entries are offered for new selections; deactivating an entry
    never touches appointments that already reference it.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )
    name = models.CharField(
        _('name'),
        max_length=200
    )
    is_active = models.BooleanField(
        _('active'),
        default=True,
        help_text=_("Only active entries can be chosen for new appointments")
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
        abstract = True
        ordering = ['name']

    def __str__(self):
        state = _('active') if self.is_active else _('inactive')
        return f"{self.name} ({state})"


class Process(CatalogEntry):
    """
    Admission cycle a CEPRUNSA client may be attended under
    """
    start_date = models.DateField(
        _('start date')
    )
    end_date = models.DateField(
        _('end date')
    )

    class Meta(CatalogEntry.Meta):
        verbose_name = _('Process')
        verbose_name_plural = _('Processes')
        db_table = 'processes'
        indexes = [
            models.Index(fields=['is_active'], name='processes_active_idx'),
        ]

    def clean(self):
        """Model validation"""
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError({
                'end_date': _("End date cannot be before the start date")
            })


class ConsultationReason(CatalogEntry):
    """
    Category describing why a session was requested
    """
    description = models.TextField(
        _('description'),
        blank=True
    )

    class Meta(CatalogEntry.Meta):
        verbose_name = _('Consultation reason')
        verbose_name_plural = _('Consultation reasons')
        db_table = 'consultation_reasons'
        indexes = [
            models.Index(fields=['is_active'], name='reasons_active_idx'),
        ]


def default_working_days():
    """Monday to Friday; days are numbered 0 (Sunday) to 6 (Saturday)"""
    return [1, 2, 3, 4, 5]


class SystemSettings(models.Model):
    """
    Office-wide configuration, stored as a single row.

    Read it through ``SystemSettingsService.get_settings``, which creates the
    row with the default values on first access.
    """
    SINGLETON_ID = 1

    center_name = models.CharField(
        _('center name'),
        max_length=200,
        default='Consultorio Psicológico CEPRUNSA'
    )
    center_email = models.EmailField(
        _('center email'),
        default='consultorio.psicologico@ceprunsa.edu.pe'
    )
    center_phone = models.CharField(
        _('center phone'),
        max_length=30,
        blank=True,
        default='054-123456'
    )
    center_address = models.CharField(
        _('center address'),
        max_length=255,
        blank=True,
        default='Local CEPRUNSA'
    )

    # Appointment defaults
    default_duration = models.PositiveIntegerField(
        _('default duration'),
        default=60,
        validators=[MinValueValidator(15), MaxValueValidator(120)],
        help_text=_("Session length in minutes")
    )
    min_time_advance = models.PositiveIntegerField(
        _('minimum advance'),
        default=24,
        validators=[MinValueValidator(1), MaxValueValidator(72)],
        help_text=_("Hours of notice required to book an appointment")
    )
    max_appointments_per_day = models.PositiveIntegerField(
        _('max appointments per day'),
        default=8,
        validators=[MinValueValidator(1), MaxValueValidator(20)]
    )
    working_hours_start = models.TimeField(
        _('working hours start'),
        default=datetime.time(8, 0)
    )
    working_hours_end = models.TimeField(
        _('working hours end'),
        default=datetime.time(18, 0)
    )
    working_days = models.JSONField(
        _('working days'),
        default=default_working_days,
        help_text=_("Weekday numbers, 0 = Sunday to 6 = Saturday")
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
        verbose_name = _('System settings')
        verbose_name_plural = _('System settings')
        db_table = 'system_settings'

    def __str__(self):
        return str(self.center_name)

    def save(self, *args, **kwargs):
        self.pk = self.SINGLETON_ID
        super().save(*args, **kwargs)

    def clean(self):
        """Model validation"""
        if self.working_hours_start and self.working_hours_end and \
                self.working_hours_end <= self.working_hours_start:
            raise ValidationError({
                'working_hours_end': _("Working hours must end after they start")
            })
        if not self.working_days:
            raise ValidationError({
                'working_days': _("Select at least one working day")
            })
