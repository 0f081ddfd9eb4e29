# factories/users.py
import factory
from django.utils import timezone

from users.models import User
from .base import BaseFactory, PasswordMixin


class UserFactory(BaseFactory, PasswordMixin):
    """
    Factory for creating User instances
    """

    class Meta:
        model = User
        django_get_or_create = ('email',)  # Avoid duplicate emails

    # Generate unique email addresses
    email = factory.Sequence(lambda n: f'user{n}@example.com')
    display_name = factory.Faker('name')
    role = User.ROLE_USER
    is_active = True
    created_at = factory.LazyFunction(timezone.now)
    created_by = 'system'


class AdminUserFactory(UserFactory):
    """
    Factory specifically for Admin users
    """
    role = User.ROLE_ADMIN
    is_staff = True
    email = factory.Sequence(lambda n: f'admin{n}@example.com')


class CoordinatorUserFactory(UserFactory):
    role = User.ROLE_COORDINATOR
    email = factory.Sequence(lambda n: f'coordinator{n}@example.com')


class PsychologistUserFactory(UserFactory):
    """
    Factory for logins with the psychologist role; the psychologist record
    itself comes from PsychologistFactory
    """
    role = User.ROLE_PSYCHOLOGIST
    email = factory.Sequence(lambda n: f'psychologist{n}@example.com')


class InactiveUserFactory(UserFactory):
    is_active = False
