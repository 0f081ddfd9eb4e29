# appointments/services/repository.py
"""
Storage seam of the appointment workflow

The workflow only needs get/list/create/update/delete with at most one
field-equality predicate. The Django implementations below back it with the
ORM; any ``DatabaseError`` becomes a ``RepositoryError`` carrying the cause.
"""
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError

from ..models import Appointment
from .outcomes import RepositoryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldEquals:
    """Single field-equality predicate, e.g. FieldEquals('psychologist_id', some_id)"""
    field: str
    value: Any


@contextmanager
def store_call(action: str):
    try:
        yield
    except DatabaseError as e:
        logger.error(f"Store call failed during {action}: {str(e)}")
        raise RepositoryError(f"Could not {action}, the data store is unavailable", cause=e)


def _filter(manager, predicate: Optional[FieldEquals]):
    if predicate is None:
        return manager.all()
    return manager.filter(**{predicate.field: predicate.value})


class AppointmentRepository(ABC):
    """Abstract appointment store"""

    @abstractmethod
    def list(self, predicate: Optional[FieldEquals] = None) -> List[Appointment]:
        ...

    @abstractmethod
    def get_by_id(self, appointment_id) -> Optional[Appointment]:
        ...

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Appointment:
        ...

    @abstractmethod
    def update(self, appointment_id, delta: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def delete(self, appointment_id) -> None:
        ...


class ReferenceRepository(ABC):
    """Abstract read-only store of processes, consultation reasons or psychologists"""

    @abstractmethod
    def list(self, predicate: Optional[FieldEquals] = None) -> List[Any]:
        ...

    @abstractmethod
    def get_by_id(self, entity_id) -> Optional[Any]:
        ...


class DjangoAppointmentRepository(AppointmentRepository):

    def list(self, predicate: Optional[FieldEquals] = None) -> List[Appointment]:
        with store_call('list appointments'):
            return list(_filter(Appointment.objects, predicate))

    def get_by_id(self, appointment_id) -> Optional[Appointment]:
        with store_call('load the appointment'):
            try:
                return Appointment.objects.get(pk=appointment_id)
            except (Appointment.DoesNotExist, DjangoValidationError, ValueError):
                return None

    def create(self, data: Dict[str, Any]) -> Appointment:
        with store_call('create the appointment'):
            return Appointment.objects.create(**data)

    def update(self, appointment_id, delta: Dict[str, Any]) -> None:
        # writes the delta only, unrelated fields keep their stored values
        with store_call('update the appointment'):
            Appointment.objects.filter(pk=appointment_id).update(**delta)

    def delete(self, appointment_id) -> None:
        with store_call('delete the appointment'):
            Appointment.objects.filter(pk=appointment_id).delete()


class DjangoReferenceRepository(ReferenceRepository):

    def __init__(self, model):
        self.model = model

    def list(self, predicate: Optional[FieldEquals] = None) -> List[Any]:
        with store_call(f'list {self.model._meta.verbose_name_plural}'):
            return list(_filter(self.model.objects, predicate))

    def get_by_id(self, entity_id) -> Optional[Any]:
        with store_call(f'load the {self.model._meta.verbose_name}'):
            try:
                return self.model.objects.get(pk=entity_id)
            except (self.model.DoesNotExist, DjangoValidationError, ValueError):
                return None
