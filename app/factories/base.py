# factories/base.py
import factory
from django.contrib.auth.hashers import make_password
from django.utils import timezone
import random


class BaseFactory(factory.django.DjangoModelFactory):
    """
    Base factory with common configurations
    """

    class Meta:
        abstract = True

    @classmethod
    def _setup_next_sequence(cls):
        """Ensure unique sequences for each factory"""
        return getattr(cls._meta.model, '_factory_sequence', 0)


class PasswordMixin:
    """Mixin for handling password generation"""

    @factory.lazy_attribute
    def password(self):
        """Generate a hashed password"""
        return make_password('testpass123')


class AuditMixin:
    """Mixin for the created/updated audit columns"""

    created_at = factory.LazyFunction(timezone.now)
    created_by = 'seed@example.com'


class RandomChoiceMixin:
    """Mixin with helper methods for random choices"""

    @staticmethod
    def random_choice_weighted(choices_weights):
        """
        Choose from weighted options
        Example: [('option1', 0.7), ('option2', 0.3)]
        """
        total = sum(weight for _, weight in choices_weights)
        r = random.uniform(0, total)
        upto = 0
        for choice, weight in choices_weights:
            if upto + weight >= r:
                return choice
            upto += weight
        return choices_weights[-1][0]  # fallback


# Utility functions for realistic data generation

def generate_dni():
    """Generate an 8 digit national identity document number"""
    return f"{random.randint(10000000, 99999999)}"


def generate_phone_number():
    """Generate a Peruvian mobile number"""
    return f"9{random.randint(10000000, 99999999)}"
