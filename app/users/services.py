# users/services.py
from django.db import transaction
import logging
from typing import Optional, Dict, Any

from .models import User
from .exceptions import (
    EmailAlreadyExistsError,
    InvalidRoleError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

VALID_ROLES = {choice for choice, _label in User.ROLE_CHOICES}


class UserService:
    """
    Service class for user accounts and their roles
    """

    @staticmethod
    def get_user_profile(user: User) -> Dict[str, Any]:
        """
        Build the profile of the authenticated user, including the psychologist
        record linked to the login (if any)
        """
        from psychologists.services import PsychologistService

        return {
            'id': str(user.id),
            'email': user.email,
            'display_name': user.display_name,
            'role': user.role,
            'is_active': user.is_active,
            'psychologist_id': PsychologistService.linked_psychologist_id(user),
            'created_at': user.created_at,
        }

    @staticmethod
    def create_user(email: str, role: str, password: Optional[str] = None,
                    display_name: str = "", created_by: Optional[str] = None) -> User:
        """
        Create a user with the given role
        """
        if role not in VALID_ROLES:
            raise InvalidRoleError(f"Invalid role: {role}")

        if User.objects.filter(email__iexact=email).exists():
            raise EmailAlreadyExistsError(email)

        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                role=role,
                display_name=display_name,
                created_by=created_by or 'system',
            )

        logger.info(f"User created: {user.email} ({role}) by {created_by or 'system'}")
        return user

    @staticmethod
    def update_role(user_id, new_role: str, updated_by: Optional[str] = None) -> User:
        """
        Change a user's role
        """
        if new_role not in VALID_ROLES:
            raise InvalidRoleError(f"Invalid role: {new_role}")

        try:
            user = User.objects.get(id=user_id)
        except User.DoesNotExist:
            raise UserNotFoundError(f"User {user_id} not found")

        old_role = user.role
        user.role = new_role
        user.save(update_fields=['role', 'updated_at'])

        logger.info(f"User {user.email} role changed {old_role} -> {new_role} by {updated_by or 'system'}")
        return user

    @staticmethod
    def delete_user(user_id, deleted_by: Optional[str] = None) -> None:
        """
        Hard delete a user; linked psychologist records keep existing unlinked
        """
        deleted, _details = User.objects.filter(id=user_id).delete()
        if not deleted:
            raise UserNotFoundError(f"User {user_id} not found")

        logger.info(f"User {user_id} deleted by {deleted_by or 'system'}")
