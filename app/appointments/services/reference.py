# appointments/services/reference.py
"""
Reference data gate

Decides which processes, consultation reasons and psychologists an
appointment may point to, and snapshots their names into the appointment.
"""
from typing import Any, Dict
import logging

from ..constants import SITUATION_CEPRUNSA
from .outcomes import AppointmentValidationError
from .payloads import AppointmentDraft
from .repository import ReferenceRepository

logger = logging.getLogger(__name__)


def _same_reference(current_id, new_id) -> bool:
    return current_id is not None and str(current_id) == str(new_id)


class ReferenceDataGate:

    def __init__(self, processes: ReferenceRepository, reasons: ReferenceRepository,
                 psychologists: ReferenceRepository):
        self.processes = processes
        self.reasons = reasons
        self.psychologists = psychologists

    def resolve(self, draft: AppointmentDraft, current=None) -> Dict[str, Any]:
        """
        Resolve the draft's references into appointment fields.

        Newly chosen processes and reasons must be active; an edit keeping the
        one the appointment already points to is accepted even if it has been
        deactivated since. The process is dropped for non-CEPRUNSA clients.
        """
        invalid = []
        resolved = {}

        reason = self.reasons.get_by_id(draft.reason_id)
        if reason is None:
            invalid.append('reason_id')
        elif not reason.is_active and not _same_reference(getattr(current, 'reason_id', None), reason.pk):
            invalid.append('reason_id')
        else:
            resolved['reason'] = reason
            resolved['reason_name'] = reason.name

        psychologist = self.psychologists.get_by_id(draft.psychologist_id)
        if psychologist is None:
            invalid.append('psychologist_id')
        else:
            resolved['psychologist'] = psychologist
            resolved['psychologist_name'] = psychologist.full_name

        resolved['process'] = None
        resolved['process_name'] = ''
        if draft.client.situation == SITUATION_CEPRUNSA and draft.process_id:
            process = self.processes.get_by_id(draft.process_id)
            if process is None:
                invalid.append('process_id')
            elif not process.is_active and not _same_reference(getattr(current, 'process_id', None), process.pk):
                invalid.append('process_id')
            else:
                resolved['process'] = process
                resolved['process_name'] = process.name

        if invalid:
            logger.warning(f"Appointment references rejected: {', '.join(invalid)}")
            raise AppointmentValidationError(
                "Unknown or inactive reference: " + ", ".join(invalid),
                fields=invalid
            )
        return resolved
