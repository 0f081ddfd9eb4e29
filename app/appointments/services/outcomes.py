# appointments/services/outcomes.py
"""
Typed rejections returned by the appointment workflow

Every failed operation ends as a ``Rejection`` carrying a code the
presentation layer can map to a message or an HTTP status. Internally the
workflow raises the ``AppointmentServiceError`` subclasses below; the service
facade converts them at its boundary so callers never see the exception.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from rest_framework import status


class RejectionCode(str, Enum):
    PERMISSION_DENIED = 'PermissionDenied'
    NOT_FOUND = 'NotFound'
    INVALID_TRANSITION = 'InvalidTransition'
    INCOMPLETE_RESULTS = 'IncompleteResults'
    VALIDATION_ERROR = 'ValidationError'
    NOT_COMPLETED = 'NotCompleted'
    REPOSITORY_ERROR = 'RepositoryError'


HTTP_STATUS_BY_CODE = {
    RejectionCode.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    RejectionCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    RejectionCode.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    RejectionCode.NOT_COMPLETED: status.HTTP_409_CONFLICT,
    RejectionCode.INCOMPLETE_RESULTS: status.HTTP_400_BAD_REQUEST,
    RejectionCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    RejectionCode.REPOSITORY_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@dataclass(frozen=True)
class Rejection:
    """A failed appointment operation; the stored record is left unchanged"""
    code: RejectionCode
    message: str
    fields: Tuple[str, ...] = ()
    cause: Optional[BaseException] = None

    @property
    def http_status(self) -> int:
        return HTTP_STATUS_BY_CODE[self.code]

    def to_dict(self):
        data = {'error': self.message, 'code': self.code.value}
        if self.fields:
            data['fields'] = list(self.fields)
        return data


# ============================================================================
# CUSTOM EXCEPTIONS
# ============================================================================

class AppointmentServiceError(Exception):
    """Base exception for appointment workflow errors"""
    code = RejectionCode.VALIDATION_ERROR

    def __init__(self, message: str, fields: Sequence[str] = (), cause: Optional[BaseException] = None):
        super().__init__(message)
        self.fields = tuple(fields)
        self.cause = cause

    def to_rejection(self) -> Rejection:
        return Rejection(self.code, str(self), self.fields, self.cause)


class AppointmentPermissionError(AppointmentServiceError):
    """Raised when the acting role may not perform the operation"""
    code = RejectionCode.PERMISSION_DENIED


class AppointmentNotFoundError(AppointmentServiceError):
    """Raised when appointment is not found"""
    code = RejectionCode.NOT_FOUND


class InvalidTransitionError(AppointmentServiceError):
    """Raised when the target status is unreachable from the current one"""
    code = RejectionCode.INVALID_TRANSITION


class IncompleteResultsError(AppointmentServiceError):
    """Raised when completing without diagnosis, recommendations and conclusions"""
    code = RejectionCode.INCOMPLETE_RESULTS


class AppointmentValidationError(AppointmentServiceError):
    """Raised when appointment data fails a required-field or format check"""
    code = RejectionCode.VALIDATION_ERROR


class NotCompletedError(AppointmentServiceError):
    """Raised when attaching a document to an appointment that is not completed"""
    code = RejectionCode.NOT_COMPLETED


class RepositoryError(AppointmentServiceError):
    """Raised when the backing store call fails"""
    code = RejectionCode.REPOSITORY_ERROR
