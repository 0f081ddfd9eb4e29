# catalogs/services.py
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.utils import timezone
import logging
from typing import Optional, Dict, Any, Type

from .models import CatalogEntry, Process, ConsultationReason, SystemSettings

logger = logging.getLogger(__name__)


class CatalogServiceError(Exception):
    """Base exception for reference data errors"""
    pass


class CatalogEntryNotFoundError(CatalogServiceError):
    """Raised when a process or consultation reason does not exist"""
    pass


class CatalogValidationError(CatalogServiceError):
    """Raised when reference data fails validation"""
    pass


class SystemSettingsValidationError(CatalogServiceError):
    """Raised when the office settings fail validation"""
    pass


class ReferenceDataService:
    """
    Service class for processes and consultation reasons
    """

    @staticmethod
    def selectable_entries(model: Type[CatalogEntry]):
        """
        Entries that may be chosen for a new selection
        """
        return model.objects.filter(is_active=True).order_by('name')

    @staticmethod
    def get_entry(model: Type[CatalogEntry], entry_id) -> CatalogEntry:
        try:
            return model.objects.get(id=entry_id)
        except (model.DoesNotExist, DjangoValidationError, ValueError):
            raise CatalogEntryNotFoundError(f"{model._meta.verbose_name} {entry_id} not found")

    @staticmethod
    def _validate(model: Type[CatalogEntry], data: Dict[str, Any], instance: Optional[CatalogEntry] = None):
        name = data.get('name', instance.name if instance else '')
        if not (name or '').strip():
            raise CatalogValidationError("Name is required")

        if model is Process:
            start_date = data.get('start_date', instance.start_date if instance else None)
            end_date = data.get('end_date', instance.end_date if instance else None)
            if not start_date or not end_date:
                raise CatalogValidationError("Start and end dates are required")
            if end_date < start_date:
                raise CatalogValidationError("End date cannot be before the start date")

    @staticmethod
    def create_entry(model: Type[CatalogEntry], data: Dict[str, Any],
                     created_by: Optional[str] = None) -> CatalogEntry:
        """
        Create a process or consultation reason
        """
        ReferenceDataService._validate(model, data)

        with transaction.atomic():
            entry = model.objects.create(created_by=created_by or 'system', **data)

        logger.info(f"{model.__name__} created: {entry.name} by {created_by or 'system'}")
        return entry

    @staticmethod
    def update_entry(entry: CatalogEntry, data: Dict[str, Any],
                     updated_by: Optional[str] = None) -> CatalogEntry:
        """
        Partially update a process or consultation reason
        """
        ReferenceDataService._validate(type(entry), data, entry)

        for field, value in data.items():
            setattr(entry, field, value)
        entry.updated_at = timezone.now()
        entry.updated_by = updated_by or 'system'
        entry.save()

        logger.info(f"{type(entry).__name__} updated: {entry.name} by {updated_by or 'system'}")
        return entry

    @staticmethod
    def toggle_status(model: Type[CatalogEntry], entry_id, is_active: bool,
                      updated_by: Optional[str] = None) -> CatalogEntry:
        """
        Activate or deactivate an entry; appointments referencing it are not touched
        """
        entry = ReferenceDataService.get_entry(model, entry_id)
        entry.is_active = is_active
        entry.updated_at = timezone.now()
        entry.updated_by = updated_by or 'system'
        entry.save(update_fields=['is_active', 'updated_at', 'updated_by'])

        logger.info(
            f"{model.__name__} {entry.name} {'activated' if is_active else 'deactivated'} "
            f"by {updated_by or 'system'}"
        )
        return entry

    @staticmethod
    def delete_entry(model: Type[CatalogEntry], entry_id, deleted_by: Optional[str] = None) -> None:
        """
        Hard delete; appointments keep the denormalized name
        """
        entry = ReferenceDataService.get_entry(model, entry_id)
        entry.delete()
        logger.info(f"{model.__name__} {entry_id} deleted by {deleted_by or 'system'}")


class SystemSettingsService:
    """
    Service class for the office-wide settings row
    """

    @staticmethod
    def get_settings() -> SystemSettings:
        """
        Current settings; the row is seeded with defaults on first read
        """
        settings, created = SystemSettings.objects.get_or_create(pk=SystemSettings.SINGLETON_ID)
        if created:
            logger.info("System settings initialized with default values")
        return settings

    @staticmethod
    def _validate(data: Dict[str, Any], instance: SystemSettings):
        center_name = data.get('center_name', instance.center_name)
        if not (center_name or '').strip():
            raise SystemSettingsValidationError("Center name is required")

        center_email = data.get('center_email', instance.center_email)
        if not (center_email or '').strip():
            raise SystemSettingsValidationError("Center email is required")

        start = data.get('working_hours_start', instance.working_hours_start)
        end = data.get('working_hours_end', instance.working_hours_end)
        if end <= start:
            raise SystemSettingsValidationError("Working hours must end after they start")

        working_days = data.get('working_days', instance.working_days)
        if not working_days:
            raise SystemSettingsValidationError("Select at least one working day")

    @staticmethod
    def update_settings(data: Dict[str, Any], updated_by: Optional[str] = None) -> SystemSettings:
        """
        Partially update the settings
        """
        settings = SystemSettingsService.get_settings()
        SystemSettingsService._validate(data, settings)

        for field, value in data.items():
            setattr(settings, field, value)
        settings.updated_at = timezone.now()
        settings.updated_by = updated_by or 'system'
        settings.save()

        logger.info(f"System settings updated by {updated_by or 'system'}: {', '.join(sorted(data))}")
        return settings
