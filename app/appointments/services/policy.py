# appointments/services/policy.py
"""
Role policy

Pure functions mapping a user's role to the operations it may perform.
Nothing here raises or touches the database; callers turn a ``False`` into
a permission-denied rejection before attempting any mutation.
"""
from typing import Iterable, List, Optional

from users.models import User
from ..constants import (
    STATUS_SCHEDULED,
    STATUS_COMPLETED,
    STATUS_CANCELLED,
    STATUS_NO_SHOW,
)

ADMIN = User.ROLE_ADMIN
COORDINATOR = User.ROLE_COORDINATOR
PSYCHOLOGIST = User.ROLE_PSYCHOLOGIST

_MANAGERS = frozenset({ADMIN, COORDINATOR})

# (from, to) -> roles allowed to perform it; every other pair is forbidden
TRANSITION_ROLES = {
    (STATUS_SCHEDULED, STATUS_COMPLETED): frozenset({ADMIN, COORDINATOR, PSYCHOLOGIST}),
    (STATUS_SCHEDULED, STATUS_CANCELLED): frozenset({ADMIN, COORDINATOR}),
    (STATUS_SCHEDULED, STATUS_NO_SHOW): frozenset({ADMIN, COORDINATOR, PSYCHOLOGIST}),
}


def can_create_or_edit(role: Optional[str]) -> bool:
    return role in _MANAGERS


def can_delete(role: Optional[str]) -> bool:
    return role in _MANAGERS


def can_transition(role: Optional[str], from_status: Optional[str], to_status: Optional[str]) -> bool:
    return role in TRANSITION_ROLES.get((from_status, to_status), frozenset())


def can_view_statistics(role: Optional[str]) -> bool:
    """Per-psychologist statistics are a management view"""
    return role in _MANAGERS


def can_manage_psychologists(role: Optional[str]) -> bool:
    return role in _MANAGERS


def can_manage_catalogs(role: Optional[str]) -> bool:
    """Processes and consultation reasons are administered by admins only"""
    return role == ADMIN


def can_manage_users(role: Optional[str]) -> bool:
    return role == ADMIN


def can_manage_settings(role: Optional[str]) -> bool:
    """Office settings are read and changed by admins only"""
    return role == ADMIN


def visible_appointments(role: Optional[str], user_psychologist_id, appointments: Iterable) -> List:
    """
    Scope an appointment list to what the role may see.

    Psychologists only see the appointments assigned to the psychologist
    record linked to their login (none if there is no linked record);
    every other role sees the list unfiltered.
    """
    appointments = list(appointments)
    if role != PSYCHOLOGIST:
        return appointments

    if not user_psychologist_id:
        return []

    own_id = str(user_psychologist_id)
    return [
        appointment for appointment in appointments
        if appointment.psychologist_id is not None and str(appointment.psychologist_id) == own_id
    ]
