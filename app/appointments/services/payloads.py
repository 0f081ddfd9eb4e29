# appointments/services/payloads.py
"""
Explicit inputs of the appointment workflow: who is acting, what a new or
edited appointment looks like, what accompanies each status change and the
descriptor of an attached document.
"""
from dataclasses import dataclass, asdict
import datetime
from typing import ClassVar, Optional

from ..constants import (
    STATUS_COMPLETED,
    STATUS_CANCELLED,
    STATUS_NO_SHOW,
    SITUATION_PARTICULAR,
    MODALITY_PRESENTIAL,
)


@dataclass(frozen=True)
class ActingUser:
    role: Optional[str]
    email: Optional[str] = None
    psychologist_id: Optional[str] = None

    @property
    def audit_name(self) -> str:
        return self.email or 'system'

    @classmethod
    def from_user(cls, user) -> 'ActingUser':
        """
        Build the acting user from a login, resolving the linked psychologist record
        """
        from psychologists.services import PsychologistService

        if user is None or not user.is_authenticated:
            return cls(role=None)

        psychologist_id = None
        if user.is_psychologist:
            psychologist_id = PsychologistService.linked_psychologist_id(user)
        return cls(role=user.role, email=user.email, psychologist_id=psychologist_id)


# Status change payloads, one variant per target status

@dataclass(frozen=True)
class CompletionPayload:
    target_status: ClassVar[str] = STATUS_COMPLETED

    diagnosis: str = ''
    recommendations: str = ''
    conclusions: str = ''


@dataclass(frozen=True)
class CancellationPayload:
    target_status: ClassVar[str] = STATUS_CANCELLED

    reason: Optional[str] = None


@dataclass(frozen=True)
class NoShowPayload:
    target_status: ClassVar[str] = STATUS_NO_SHOW


PAYLOAD_TYPES = {
    STATUS_COMPLETED: CompletionPayload,
    STATUS_CANCELLED: CancellationPayload,
    STATUS_NO_SHOW: NoShowPayload,
}


@dataclass(frozen=True)
class ClientInfo:
    full_name: str = ''
    dni: str = ''
    situation: str = SITUATION_PARTICULAR
    phone: str = ''
    email: str = ''


@dataclass(frozen=True)
class AppointmentDraft:
    """Caller-supplied appointment data for creation and edits"""
    client: ClientInfo
    reason_id: Optional[str] = None
    psychologist_id: Optional[str] = None
    date: Optional[datetime.date] = None
    time: Optional[datetime.time] = None
    modality: str = MODALITY_PRESENTIAL
    location: str = ''
    process_id: Optional[str] = None


@dataclass(frozen=True)
class DocumentDescriptor:
    """Metadata of a file already stored externally"""
    id: str
    file_name: str
    original_name: str
    url: str
    size: int
    mime_type: str
    uploaded_at: Optional[str] = None
    uploaded_by: Optional[str] = None

    def to_dict(self):
        return asdict(self)
