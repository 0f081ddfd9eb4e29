# appointments/services/__init__.py

from .outcomes import (
    Rejection,
    RejectionCode,
    AppointmentServiceError,
    AppointmentPermissionError,
    AppointmentNotFoundError,
    InvalidTransitionError,
    IncompleteResultsError,
    AppointmentValidationError,
    NotCompletedError,
    RepositoryError,
)
from .payloads import (
    ActingUser,
    AppointmentDraft,
    ClientInfo,
    CompletionPayload,
    CancellationPayload,
    NoShowPayload,
    DocumentDescriptor,
)
from .query import AppointmentFilters
from .repository import (
    FieldEquals,
    AppointmentRepository,
    ReferenceRepository,
    DjangoAppointmentRepository,
    DjangoReferenceRepository,
)
from .reference import ReferenceDataGate
from .state_machine import AppointmentStateMachine
from .services import AppointmentWorkflowService
