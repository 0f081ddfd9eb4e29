# psychologists/models.py
import uuid
from django.db import models
from django.utils.translation import gettext_lazy as _
from django.core.validators import RegexValidator
from django.utils import timezone

from users.models import User


dni_validator = RegexValidator(
    regex=r'^[0-9]{8}\Z',
    message=_("DNI must be exactly 8 digits")
)


class Psychologist(models.Model):
    """
    Psychologist attending appointments at the office.

    The record is independent from the login: ``user`` is an optional link that
    scopes "my appointments" for users with the psychologist role.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    # Personal Information
    full_name = models.CharField(
        _('full name'),
        max_length=200,
        help_text=_("Psychologist's full name")
    )
    dni = models.CharField(
        _('DNI'),
        max_length=8,
        validators=[dni_validator],
        help_text=_("National identity document, 8 digits")
    )

    # Contact
    institutional_email = models.EmailField(
        _('institutional email'),
        help_text=_("Email address issued by the institution")
    )
    personal_email = models.EmailField(
        _('personal email'),
        blank=True,
        help_text=_("Optional personal email address")
    )
    phone = models.CharField(
        _('phone'),
        max_length=20,
        help_text=_("Contact phone number")
    )

    # Login link
    user = models.OneToOneField(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='psychologist_profile',
        help_text=_("Login account whose appointments are scoped to this psychologist")
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
        verbose_name = _('Psychologist')
        verbose_name_plural = _('Psychologists')
        db_table = 'psychologists'
        ordering = ['full_name']
        indexes = [
            models.Index(fields=['full_name'], name='psychologists_name_idx'),
            models.Index(fields=['dni'], name='psychologists_dni_idx'),
        ]

    def __str__(self):
        return f"{self.full_name} ({self.dni})"
