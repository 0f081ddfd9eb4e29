# factories/catalogs.py
import factory
from datetime import timedelta
from django.utils import timezone

from catalogs.models import Process, ConsultationReason
from .base import BaseFactory, AuditMixin


class ProcessFactory(BaseFactory, AuditMixin):
    """
    Factory for admission processes
    """

    class Meta:
        model = Process

    name = factory.Sequence(lambda n: f'CEPRUNSA {2024 + n // 2}-{"I" if n % 2 == 0 else "II"} #{n}')
    is_active = True
    start_date = factory.LazyFunction(lambda: timezone.localdate() - timedelta(days=30))
    end_date = factory.LazyAttribute(lambda obj: obj.start_date + timedelta(days=120))


class ConsultationReasonFactory(BaseFactory, AuditMixin):
    """
    Factory for consultation reasons
    """

    class Meta:
        model = ConsultationReason

    name = factory.Sequence(lambda n: f'Consultation reason {n}')
    description = factory.Faker('sentence')
    is_active = True
