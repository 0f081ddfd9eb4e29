# appointments/services/state_machine.py
"""
Appointment state machine

``scheduled`` is the only non-terminal status; it may move to ``completed``,
``cancelled`` or ``no-show`` and nothing moves out of those. Every operation
validates fully before the single repository call it makes, so a rejected
operation never leaves a partial write behind.
"""
import re
import logging
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.utils import timezone

from ..constants import (
    ALL_STATUSES,
    TERMINAL_STATUSES,
    STATUS_SCHEDULED,
    STATUS_COMPLETED,
    STATUS_CANCELLED,
    SITUATION_CHOICES,
    MODALITY_CHOICES,
    MODALITY_VIRTUAL,
    RESULT_FIELDS,
)
from ..models import Appointment
from . import policy
from .outcomes import (
    AppointmentPermissionError,
    AppointmentValidationError,
    IncompleteResultsError,
    InvalidTransitionError,
    NotCompletedError,
)
from .payloads import (
    ActingUser,
    AppointmentDraft,
    CancellationPayload,
    CompletionPayload,
    DocumentDescriptor,
    PAYLOAD_TYPES,
)
from .reference import ReferenceDataGate
from .repository import AppointmentRepository

logger = logging.getLogger(__name__)

DNI_PATTERN = re.compile(r'^[0-9]{8}\Z')

_SITUATIONS = {value for value, _label in SITUATION_CHOICES}
_MODALITIES = {value for value, _label in MODALITY_CHOICES}


def _clean(value) -> str:
    return (value or '').strip()


def validate_draft(draft: AppointmentDraft) -> List[str]:
    """
    Names of the draft fields failing a required-field or format check
    """
    invalid = []
    client = draft.client

    if not _clean(client.full_name):
        invalid.append('client.full_name')
    if not DNI_PATTERN.match(_clean(client.dni)):
        invalid.append('client.dni')
    if client.situation not in _SITUATIONS:
        invalid.append('client.situation')
    if not draft.psychologist_id:
        invalid.append('psychologist_id')
    if not draft.reason_id:
        invalid.append('reason_id')
    if draft.date is None:
        invalid.append('date')
    if draft.time is None:
        invalid.append('time')
    if draft.modality not in _MODALITIES:
        invalid.append('modality')
    elif draft.modality == MODALITY_VIRTUAL and not _clean(draft.location):
        # the meeting link
        invalid.append('location')

    return invalid


def missing_results(payload: CompletionPayload) -> List[str]:
    return [field for field in RESULT_FIELDS if not _clean(getattr(payload, field))]


def validate_document(descriptor: DocumentDescriptor) -> List[str]:
    invalid = []
    if descriptor.mime_type not in settings.APPOINTMENT_DOCUMENT_MIME_TYPES:
        invalid.append('mime_type')
    if not _clean(descriptor.original_name).lower().endswith('.pdf'):
        invalid.append('original_name')
    if not 0 < descriptor.size <= settings.APPOINTMENT_DOCUMENT_MAX_SIZE:
        invalid.append('size')
    if not _clean(descriptor.url):
        invalid.append('url')
    return invalid


class AppointmentStateMachine:
    """
    Validates and applies appointment mutations against a repository
    """

    def __init__(self, repository: AppointmentRepository, references: ReferenceDataGate):
        self.repository = repository
        self.references = references

    # ------------------------------------------------------------------
    # Record lifecycle
    # ------------------------------------------------------------------

    def _draft_fields(self, draft: AppointmentDraft, current: Optional[Appointment] = None) -> Dict[str, Any]:
        invalid = validate_draft(draft)
        if invalid:
            raise AppointmentValidationError(
                "Invalid appointment data: " + ", ".join(invalid),
                fields=invalid
            )

        fields = {
            'client_full_name': _clean(draft.client.full_name),
            'client_dni': _clean(draft.client.dni),
            'client_situation': draft.client.situation,
            'client_phone': _clean(draft.client.phone),
            'client_email': _clean(draft.client.email),
            'date': draft.date,
            'time': draft.time,
            'modality': draft.modality,
            'location': _clean(draft.location),
        }
        fields.update(self.references.resolve(draft, current))
        return fields

    def create(self, draft: AppointmentDraft, acting_user: ActingUser) -> Appointment:
        if not policy.can_create_or_edit(acting_user.role):
            raise AppointmentPermissionError("Your role cannot create appointments")

        data = self._draft_fields(draft)
        data.update({
            'status': STATUS_SCHEDULED,
            'created_at': timezone.now(),
            'created_by': acting_user.audit_name,
        })

        appointment = self.repository.create(data)
        logger.info(f"Appointment {appointment.pk} created by {acting_user.audit_name}")
        return appointment

    def update(self, appointment: Appointment, draft: AppointmentDraft, acting_user: ActingUser) -> Appointment:
        """
        Edit scheduling, client and reference data; status and results are never touched
        """
        if not policy.can_create_or_edit(acting_user.role):
            raise AppointmentPermissionError("Your role cannot edit appointments")
        if appointment.status != STATUS_SCHEDULED:
            raise InvalidTransitionError(
                f"Only scheduled appointments can be edited, this one is {appointment.status}"
            )

        delta = self._draft_fields(draft, current=appointment)
        delta.update({
            'updated_at': timezone.now(),
            'updated_by': acting_user.audit_name,
        })

        return self._write(appointment, delta, f"edited by {acting_user.audit_name}")

    def delete(self, appointment: Appointment, acting_user: ActingUser) -> None:
        if not policy.can_delete(acting_user.role):
            raise AppointmentPermissionError("Your role cannot delete appointments")

        self.repository.delete(appointment.pk)
        logger.info(f"Appointment {appointment.pk} deleted by {acting_user.audit_name}")

    # ------------------------------------------------------------------
    # Status lifecycle
    # ------------------------------------------------------------------

    def transition(self, appointment: Appointment, target_status: str, payload,
                   acting_user: ActingUser) -> Appointment:
        """
        Move a scheduled appointment to a terminal status.

        ``payload`` must be the variant matching the target
        (CompletionPayload, CancellationPayload or NoShowPayload); None stands
        for an empty one.
        """
        if target_status not in ALL_STATUSES:
            raise AppointmentValidationError(f"Unknown status: {target_status}", fields=['status'])

        # terminal statuses have no outgoing transitions, whatever the role
        if appointment.status in TERMINAL_STATUSES or target_status == STATUS_SCHEDULED:
            raise InvalidTransitionError(
                f"Cannot change an appointment from {appointment.status} to {target_status}"
            )

        if not policy.can_transition(acting_user.role, appointment.status, target_status):
            raise AppointmentPermissionError(
                f"Your role cannot change appointments to {target_status}"
            )

        payload_type = PAYLOAD_TYPES[target_status]
        if payload is None:
            payload = payload_type()
        elif not isinstance(payload, payload_type):
            raise AppointmentValidationError(
                f"{type(payload).__name__} does not apply to status {target_status}",
                fields=['payload']
            )

        delta = {'status': target_status}
        if target_status == STATUS_COMPLETED:
            missing = missing_results(payload)
            if missing:
                raise IncompleteResultsError(
                    "Missing session results: " + ", ".join(missing),
                    fields=missing
                )
            delta.update({field: _clean(getattr(payload, field)) for field in RESULT_FIELDS})
        elif target_status == STATUS_CANCELLED and isinstance(payload, CancellationPayload):
            if _clean(payload.reason):
                delta['cancellation_reason'] = _clean(payload.reason)

        delta.update({
            'updated_at': timezone.now(),
            'updated_by': acting_user.audit_name,
        })

        return self._write(
            appointment, delta,
            f"{appointment.status} -> {target_status} by {acting_user.audit_name}"
        )

    def attach_document(self, appointment: Appointment, descriptor: DocumentDescriptor,
                        acting_user: ActingUser) -> Appointment:
        if appointment.status != STATUS_COMPLETED:
            raise NotCompletedError("Documents can only be attached to completed appointments")

        invalid = validate_document(descriptor)
        if invalid:
            raise AppointmentValidationError(
                "Invalid document, a non-empty PDF within the size limit is required",
                fields=invalid
            )

        document = descriptor.to_dict()
        document['uploaded_at'] = document['uploaded_at'] or timezone.now().isoformat()
        document['uploaded_by'] = document['uploaded_by'] or acting_user.audit_name

        delta = {
            'document': document,
            'updated_at': timezone.now(),
            'updated_by': acting_user.audit_name,
        }
        return self._write(appointment, delta, f"document attached by {acting_user.audit_name}")

    def _write(self, appointment: Appointment, delta: Dict[str, Any], description: str) -> Appointment:
        self.repository.update(appointment.pk, delta)
        for field, value in delta.items():
            setattr(appointment, field, value)

        logger.info(f"Appointment {appointment.pk} {description}")
        return appointment
