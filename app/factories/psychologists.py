# factories/psychologists.py
import factory

from psychologists.models import Psychologist
from .base import BaseFactory, AuditMixin, generate_dni, generate_phone_number


class PsychologistFactory(BaseFactory, AuditMixin):
    """
    Factory for Psychologist records, unlinked to any login by default
    """

    class Meta:
        model = Psychologist

    full_name = factory.Faker('name')
    dni = factory.LazyFunction(generate_dni)
    institutional_email = factory.Sequence(lambda n: f'psy{n}@unsa.edu.pe')
    personal_email = factory.Faker('email')
    phone = factory.LazyFunction(generate_phone_number)
    user = None


class LinkedPsychologistFactory(PsychologistFactory):
    """
    Psychologist record linked to a fresh psychologist login
    """
    user = factory.SubFactory('factories.users.PsychologistUserFactory')
    institutional_email = factory.LazyAttribute(lambda obj: obj.user.email)
