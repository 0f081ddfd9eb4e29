# psychologists/services.py
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.utils import timezone
import logging
from typing import Optional, Dict, Any

from .models import Psychologist
from users.models import User

logger = logging.getLogger(__name__)


class PsychologistServiceError(Exception):
    """Base exception for psychologist record errors"""
    pass


class PsychologistNotFoundError(PsychologistServiceError):
    """Raised when psychologist record is not found"""
    pass


class PsychologistLinkError(PsychologistServiceError):
    """Raised when a login cannot be linked to a psychologist record"""
    pass


class PsychologistService:
    """
    Service class for psychologist records
    """

    @staticmethod
    def get_psychologist_by_id(psychologist_id) -> Optional[Psychologist]:
        """
        Get psychologist by ID, return None if not found
        """
        try:
            return Psychologist.objects.select_related('user').get(id=psychologist_id)
        except (Psychologist.DoesNotExist, DjangoValidationError, ValueError):
            logger.warning(f"Psychologist {psychologist_id} not found")
            return None

    @staticmethod
    def get_psychologist_by_user(user: User) -> Optional[Psychologist]:
        """
        Get the psychologist record linked to a login, None if there is none
        """
        if not user or not user.is_authenticated:
            return None
        return Psychologist.objects.filter(user=user).first()

    @staticmethod
    def linked_psychologist_id(user: User) -> Optional[str]:
        """
        Id of the psychologist record linked to the login, as a string
        """
        psychologist = PsychologistService.get_psychologist_by_user(user)
        return str(psychologist.id) if psychologist else None

    @staticmethod
    def _check_user_link(user: Optional[User], psychologist: Optional[Psychologist] = None):
        if user is None:
            return
        if not user.is_psychologist:
            raise PsychologistLinkError(f"User {user.email} does not have the psychologist role")
        taken = Psychologist.objects.filter(user=user)
        if psychologist is not None:
            taken = taken.exclude(id=psychologist.id)
        if taken.exists():
            raise PsychologistLinkError(f"User {user.email} is already linked to another psychologist")

    @staticmethod
    def create_psychologist(data: Dict[str, Any], created_by: Optional[str] = None) -> Psychologist:
        """
        Create a psychologist record
        """
        PsychologistService._check_user_link(data.get('user'))

        with transaction.atomic():
            psychologist = Psychologist.objects.create(
                created_by=created_by or 'system',
                **data
            )

        logger.info(f"Psychologist created: {psychologist.full_name} by {created_by or 'system'}")
        return psychologist

    @staticmethod
    def update_psychologist(psychologist: Psychologist, data: Dict[str, Any],
                            updated_by: Optional[str] = None) -> Psychologist:
        """
        Partially update a psychologist record
        """
        if 'user' in data:
            PsychologistService._check_user_link(data['user'], psychologist)

        for field, value in data.items():
            setattr(psychologist, field, value)
        psychologist.updated_at = timezone.now()
        psychologist.updated_by = updated_by or 'system'
        psychologist.save()

        logger.info(f"Psychologist updated: {psychologist.full_name} by {updated_by or 'system'}")
        return psychologist

    @staticmethod
    def delete_psychologist(psychologist_id, deleted_by: Optional[str] = None) -> None:
        """
        Hard delete; appointments keep the denormalized psychologist name
        """
        psychologist = PsychologistService.get_psychologist_by_id(psychologist_id)
        if psychologist is None:
            raise PsychologistNotFoundError(f"Psychologist {psychologist_id} not found")

        psychologist.delete()
        logger.info(f"Psychologist {psychologist_id} deleted by {deleted_by or 'system'}")
