# users/models.py
import uuid
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.utils.translation import gettext_lazy as _
from django.utils import timezone

from .managers import UserManager


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model where email is the unique identifier.

    The role decides what the user may do with appointments and reference data.
    """

    ROLE_ADMIN = 'admin'
    ROLE_COORDINATOR = 'coordinator'
    ROLE_PSYCHOLOGIST = 'psychologist'
    ROLE_USER = 'user'

    ROLE_CHOICES = [
        (ROLE_ADMIN, _('Administrator')),
        (ROLE_COORDINATOR, _('Coordinator')),
        (ROLE_PSYCHOLOGIST, _('Psychologist')),
        (ROLE_USER, _('User')),
    ]

    # Primary fields
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text=_("Unique identifier for the user")
    )
    email = models.EmailField(
        _('email address'),
        unique=True,
        help_text=_("User's email address, used for login")
    )
    display_name = models.CharField(
        _('display name'),
        max_length=150,
        blank=True,
        help_text=_("Name shown in the application")
    )
    role = models.CharField(
        _('role'),
        max_length=20,
        choices=ROLE_CHOICES,
        default=ROLE_USER,
        help_text=_("Role: admin, coordinator, psychologist or user")
    )

    # Status fields
    is_active = models.BooleanField(
        _('active'),
        default=True,
        help_text=_("Designates whether this user should be treated as active.")
    )
    is_staff = models.BooleanField(
        _('staff status'),
        default=False,
        help_text=_("Designates whether the user can log into the admin site.")
    )

    # Timestamp fields
    created_at = models.DateTimeField(
        _('created at'),
        default=timezone.now
    )
    created_by = models.CharField(
        _('created by'),
        max_length=254,
        blank=True,
        default='system',
        help_text=_("Email of the user who created this account")
    )
    updated_at = models.DateTimeField(
        _('updated at'),
        auto_now=True
    )

    # Custom manager
    objects = UserManager()

    # Django auth settings
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = _('User')
        verbose_name_plural = _('Users')
        db_table = 'users'
        indexes = [
            models.Index(fields=['role'], name='users_role_idx'),
            models.Index(fields=['created_at'], name='users_created_at_idx'),
        ]

    def __str__(self):
        return f"{self.email} ({self.role})"

    @property
    def is_admin(self):
        """Check if user is an administrator"""
        return self.role == self.ROLE_ADMIN

    @property
    def is_coordinator(self):
        """Check if user is a coordinator"""
        return self.role == self.ROLE_COORDINATOR

    @property
    def is_psychologist(self):
        """Check if user is a psychologist"""
        return self.role == self.ROLE_PSYCHOLOGIST
