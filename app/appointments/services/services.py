# appointments/services/services.py
from django.conf import settings
from django.utils import timezone
import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from ..models import Appointment
from catalogs.models import Process, ConsultationReason
from psychologists.models import Psychologist
from . import policy, query
from .outcomes import (
    AppointmentNotFoundError,
    AppointmentPermissionError,
    AppointmentServiceError,
    Rejection,
    RejectionCode,
)
from .payloads import ActingUser, AppointmentDraft, DocumentDescriptor
from .reference import ReferenceDataGate
from .repository import (
    AppointmentRepository,
    DjangoAppointmentRepository,
    DjangoReferenceRepository,
    FieldEquals,
    ReferenceRepository,
)
from .state_machine import AppointmentStateMachine

logger = logging.getLogger(__name__)

Outcome = Union[Appointment, Rejection]


class AppointmentWorkflowService:
    """
    Entry point of the appointment workflow for the presentation layer.

    Every operation takes the acting user explicitly and returns either its
    result or a ``Rejection``; workflow exceptions never leave this class.
    """

    def __init__(self, repository: Optional[AppointmentRepository] = None,
                 processes: Optional[ReferenceRepository] = None,
                 reasons: Optional[ReferenceRepository] = None,
                 psychologists: Optional[ReferenceRepository] = None):
        self.repository = repository or DjangoAppointmentRepository()
        self.psychologists = psychologists or DjangoReferenceRepository(Psychologist)
        self.references = ReferenceDataGate(
            processes or DjangoReferenceRepository(Process),
            reasons or DjangoReferenceRepository(ConsultationReason),
            self.psychologists,
        )
        self.state_machine = AppointmentStateMachine(self.repository, self.references)

    # ============================================================================
    # HELPERS
    # ============================================================================

    @staticmethod
    def _rejected(error: AppointmentServiceError, operation: str, acting_user: ActingUser) -> Rejection:
        rejection = error.to_rejection()
        if rejection.code == RejectionCode.REPOSITORY_ERROR:
            logger.error(
                f"{operation} failed for {acting_user.audit_name}: {rejection.message} "
                f"(cause: {rejection.cause!r})"
            )
        else:
            logger.warning(f"{operation} rejected for {acting_user.audit_name}: {rejection.code.value} - {rejection.message}")
        return rejection

    def _load(self, appointment_id, acting_user: ActingUser) -> Appointment:
        appointment = self.repository.get_by_id(appointment_id)
        if appointment is None:
            raise AppointmentNotFoundError(f"Appointment {appointment_id} not found")

        if not policy.visible_appointments(acting_user.role, acting_user.psychologist_id, [appointment]):
            raise AppointmentPermissionError("You cannot access this appointment")
        return appointment

    # ============================================================================
    # MUTATIONS
    # ============================================================================

    def get_appointment(self, appointment_id, acting_user: ActingUser) -> Outcome:
        try:
            return self._load(appointment_id, acting_user)
        except AppointmentServiceError as e:
            return self._rejected(e, "Appointment lookup", acting_user)

    def create_appointment(self, draft: AppointmentDraft, acting_user: ActingUser) -> Outcome:
        try:
            return self.state_machine.create(draft, acting_user)
        except AppointmentServiceError as e:
            return self._rejected(e, "Appointment creation", acting_user)

    def update_appointment(self, appointment_id, draft: AppointmentDraft, acting_user: ActingUser) -> Outcome:
        try:
            appointment = self._load(appointment_id, acting_user)
            return self.state_machine.update(appointment, draft, acting_user)
        except AppointmentServiceError as e:
            return self._rejected(e, f"Appointment {appointment_id} edit", acting_user)

    def transition_appointment(self, appointment_id, target_status: str, payload,
                               acting_user: ActingUser) -> Outcome:
        try:
            appointment = self._load(appointment_id, acting_user)
            return self.state_machine.transition(appointment, target_status, payload, acting_user)
        except AppointmentServiceError as e:
            return self._rejected(e, f"Appointment {appointment_id} change to {target_status}", acting_user)

    def attach_document(self, appointment_id, descriptor: DocumentDescriptor,
                        acting_user: ActingUser) -> Outcome:
        try:
            appointment = self._load(appointment_id, acting_user)
            return self.state_machine.attach_document(appointment, descriptor, acting_user)
        except AppointmentServiceError as e:
            return self._rejected(e, f"Document upload to appointment {appointment_id}", acting_user)

    def delete_appointment(self, appointment_id, acting_user: ActingUser) -> Optional[Rejection]:
        """
        Hard delete; returns None on success
        """
        try:
            appointment = self._load(appointment_id, acting_user)
            self.state_machine.delete(appointment, acting_user)
        except AppointmentServiceError as e:
            return self._rejected(e, f"Appointment {appointment_id} deletion", acting_user)
        return None

    # ============================================================================
    # QUERIES
    # ============================================================================

    def visible_appointments(self, acting_user: ActingUser) -> Union[List[Appointment], Rejection]:
        """
        Appointments the acting user may see; psychologists only load their own
        """
        try:
            if acting_user.role == policy.PSYCHOLOGIST:
                if not acting_user.psychologist_id:
                    return []
                appointments = self.repository.list(FieldEquals('psychologist_id', acting_user.psychologist_id))
            else:
                appointments = self.repository.list()
        except AppointmentServiceError as e:
            return self._rejected(e, "Appointment listing", acting_user)

        return policy.visible_appointments(acting_user.role, acting_user.psychologist_id, appointments)

    @staticmethod
    def query_appointments(visible: Iterable[Appointment], filters: query.AppointmentFilters,
                           page=1, page_size=None) -> Dict[str, Any]:
        return query.query_appointments(visible, filters, page, page_size)

    @staticmethod
    def compute_psychologist_stats(visible: Iterable[Appointment], psychologists: Iterable) -> List[Dict[str, Any]]:
        return query.compute_psychologist_stats(visible, psychologists)

    def psychologist_stats(self, acting_user: ActingUser) -> Union[List[Dict[str, Any]], Rejection]:
        """
        Per-psychologist statistics over every appointment (management view)
        """
        if not policy.can_view_statistics(acting_user.role):
            return self._rejected(
                AppointmentPermissionError("Your role cannot view psychologist statistics"),
                "Psychologist statistics", acting_user
            )

        visible = self.visible_appointments(acting_user)
        if isinstance(visible, Rejection):
            return visible
        try:
            psychologists = self.psychologists.list()
        except AppointmentServiceError as e:
            return self._rejected(e, "Psychologist statistics", acting_user)

        return self.compute_psychologist_stats(visible, psychologists)

    def today_appointments(self, acting_user: ActingUser, today=None) -> Union[List[Appointment], Rejection]:
        """
        Visible appointments dated today, earliest first
        """
        visible = self.visible_appointments(acting_user)
        if isinstance(visible, Rejection):
            return visible
        todays = query.today_appointments(visible, today or timezone.localdate())
        return sorted(todays, key=lambda appointment: appointment.time)

    def upcoming_appointments(self, acting_user: ActingUser, today=None,
                              limit: Optional[int] = None) -> Union[List[Appointment], Rejection]:
        visible = self.visible_appointments(acting_user)
        if isinstance(visible, Rejection):
            return visible
        return query.upcoming_appointments(visible, today or timezone.localdate(), limit)

    def dashboard(self, acting_user: ActingUser, today=None) -> Union[Dict[str, Any], Rejection]:
        """
        Totals by status, today's agenda and the next scheduled appointments;
        management roles also get per-psychologist statistics
        """
        visible = self.visible_appointments(acting_user)
        if isinstance(visible, Rejection):
            return visible

        today = today or timezone.localdate()
        todays = sorted(query.today_appointments(visible, today), key=lambda appointment: appointment.time)
        data = {
            'today': today,
            'counts': query.status_counts(visible),
            'today_appointments': todays,
            'upcoming_appointments': query.upcoming_appointments(
                visible, today, limit=settings.APPOINTMENT_UPCOMING_LIMIT
            ),
            'psychologist_stats': None,
        }

        if policy.can_view_statistics(acting_user.role):
            stats = self.psychologist_stats(acting_user)
            if isinstance(stats, Rejection):
                return stats
            data['psychologist_stats'] = stats

        return data
