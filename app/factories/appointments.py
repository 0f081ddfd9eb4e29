# factories/appointments.py
import factory
from factory import fuzzy
import datetime
from django.utils import timezone

from appointments.models import Appointment
from appointments.constants import (
    STATUS_SCHEDULED,
    STATUS_COMPLETED,
    STATUS_CANCELLED,
    STATUS_NO_SHOW,
    SITUATION_PARTICULAR,
    SITUATION_CEPRUNSA,
    MODALITY_PRESENTIAL,
)
from .base import BaseFactory, AuditMixin, RandomChoiceMixin, generate_dni, generate_phone_number
from .catalogs import ProcessFactory, ConsultationReasonFactory
from .psychologists import PsychologistFactory


class AppointmentFactory(BaseFactory, AuditMixin):
    """
    Factory for scheduled appointments of private clients
    """

    class Meta:
        model = Appointment

    client_full_name = factory.Faker('name')
    client_dni = factory.LazyFunction(generate_dni)
    client_situation = SITUATION_PARTICULAR
    client_phone = factory.LazyFunction(generate_phone_number)
    client_email = factory.Faker('email')

    reason = factory.SubFactory(ConsultationReasonFactory)
    reason_name = factory.LazyAttribute(lambda obj: obj.reason.name if obj.reason else '')
    psychologist = factory.SubFactory(PsychologistFactory)
    psychologist_name = factory.LazyAttribute(lambda obj: obj.psychologist.full_name if obj.psychologist else '')
    process = None
    process_name = ''

    date = factory.LazyFunction(lambda: timezone.localdate() + datetime.timedelta(days=1))
    time = fuzzy.FuzzyChoice([datetime.time(hour, 0) for hour in range(8, 18)])
    modality = MODALITY_PRESENTIAL
    location = 'Consultorio 1'
    status = STATUS_SCHEDULED


class CeprunsaAppointmentFactory(AppointmentFactory):
    client_situation = SITUATION_CEPRUNSA
    process = factory.SubFactory(ProcessFactory)
    process_name = factory.LazyAttribute(lambda obj: obj.process.name if obj.process else '')


class CompletedAppointmentFactory(AppointmentFactory):
    status = STATUS_COMPLETED
    date = factory.LazyFunction(lambda: timezone.localdate() - datetime.timedelta(days=1))
    diagnosis = factory.Faker('sentence')
    recommendations = factory.Faker('sentence')
    conclusions = factory.Faker('sentence')


class CancelledAppointmentFactory(AppointmentFactory):
    status = STATUS_CANCELLED
    cancellation_reason = 'Client request'


class NoShowAppointmentFactory(AppointmentFactory):
    status = STATUS_NO_SHOW
    date = factory.LazyFunction(lambda: timezone.localdate() - datetime.timedelta(days=1))


def random_status_factory():
    """
    Pick an appointment factory with a realistic status mix
    """
    return RandomChoiceMixin.random_choice_weighted([
        (AppointmentFactory, 0.4),
        (CompletedAppointmentFactory, 0.4),
        (CancelledAppointmentFactory, 0.1),
        (NoShowAppointmentFactory, 0.1),
    ])
