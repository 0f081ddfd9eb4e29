# appointments/services/query.py
"""
Appointment query and aggregation engine

Pure transformations of an in-memory appointment list (already scoped by
``policy.visible_appointments``): filtering, ordering, pagination, the
"today"/"upcoming" subsets and per-psychologist statistics. Nothing here
performs I/O.
"""
from dataclasses import dataclass, fields
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from django.conf import settings
from django.utils.dateparse import parse_date

from ..constants import (
    STATUS_SCHEDULED,
    STATUS_COMPLETED,
    STATUS_CANCELLED,
    STATUS_NO_SHOW,
    PAGE_ELLIPSIS,
)


def _as_date(value) -> Optional[date]:
    if value in (None, ''):
        return None
    if isinstance(value, date):
        return value
    try:
        return parse_date(str(value))
    except ValueError:
        return None


def _text(value) -> str:
    return '' if value is None else str(value).strip()


@dataclass(frozen=True)
class AppointmentFilters:
    search: str = ''
    psychologist: str = ''
    process: str = ''
    reason: str = ''
    status: str = ''
    date: str = ''

    @classmethod
    def from_params(cls, params) -> 'AppointmentFilters':
        """
        Build filters from query parameters; missing keys impose no constraint
        """
        return cls(
            search=_text(params.get('search')),
            psychologist=_text(params.get('psychologist')),
            process=_text(params.get('process')),
            reason=_text(params.get('reason')),
            status=_text(params.get('status')),
            date=_text(params.get('date')),
        )

    @property
    def active_count(self) -> int:
        return sum(1 for field in fields(self) if getattr(self, field.name))

    def matches(self, appointment) -> bool:
        if self.search:
            term = self.search.lower()
            name_hit = term in (appointment.client_full_name or '').lower()
            dni_hit = self.search in (appointment.client_dni or '')
            if not (name_hit or dni_hit):
                return False

        for value, attribute in (
            (self.psychologist, 'psychologist_id'),
            (self.process, 'process_id'),
            (self.reason, 'reason_id'),
        ):
            if value and _text(getattr(appointment, attribute)) != value:
                return False

        if self.status and appointment.status != self.status:
            return False

        if self.date and _as_date(appointment.date) != _as_date(self.date):
            return False

        return True


def filter_appointments(appointments: Iterable, filters: AppointmentFilters) -> List:
    return [appointment for appointment in appointments if filters.matches(appointment)]


def sort_appointments(appointments: Iterable) -> List:
    """
    Most recent date first, earliest time first within a date
    """
    by_time = sorted(appointments, key=lambda appointment: appointment.time)
    return sorted(by_time, key=lambda appointment: appointment.date, reverse=True)


def normalize_page_size(page_size) -> int:
    try:
        page_size = int(page_size)
    except (TypeError, ValueError):
        return settings.APPOINTMENT_DEFAULT_PAGE_SIZE
    if page_size not in settings.APPOINTMENT_PAGE_SIZE_OPTIONS:
        return settings.APPOINTMENT_DEFAULT_PAGE_SIZE
    return page_size


def normalize_page(page) -> int:
    try:
        page = int(page)
    except (TypeError, ValueError):
        return 1
    return max(page, 1)


def paginate(items: Sequence, page=1, page_size=None) -> Dict[str, Any]:
    """
    Slice ``items`` for the requested page.

    Pages past the end are empty rather than an error; ``total_pages`` is 0 for
    an empty sequence.
    """
    page = normalize_page(page)
    page_size = normalize_page_size(page_size)
    total_items = len(items)
    total_pages = -(-total_items // page_size)
    start = (page - 1) * page_size

    return {
        'items': list(items[start:start + page_size]),
        'total_items': total_items,
        'total_pages': total_pages,
        'page': page,
        'page_size': page_size,
    }


def page_numbers(current_page: int, total_pages: int) -> List[Union[int, str]]:
    """
    Compact page-number sequence of at most seven tokens, e.g.
    ``[1, '…', 4, 5, 6, '…', 10]``
    """
    if total_pages <= 0:
        return []
    if total_pages <= 5:
        return list(range(1, total_pages + 1))
    if current_page <= 3:
        return [1, 2, 3, 4, PAGE_ELLIPSIS, total_pages]
    if current_page >= total_pages - 2:
        return [1, PAGE_ELLIPSIS] + list(range(total_pages - 3, total_pages + 1))
    return [1, PAGE_ELLIPSIS, current_page - 1, current_page, current_page + 1, PAGE_ELLIPSIS, total_pages]


def today_appointments(appointments: Iterable, today) -> List:
    today = _as_date(today)
    return [appointment for appointment in appointments if _as_date(appointment.date) == today]


def upcoming_appointments(appointments: Iterable, today, limit: Optional[int] = None) -> List:
    """
    Scheduled appointments after ``today``, soonest date first
    """
    today = _as_date(today)
    upcoming = sorted(
        (
            appointment for appointment in appointments
            if appointment.status == STATUS_SCHEDULED and _as_date(appointment.date) > today
        ),
        key=lambda appointment: appointment.date
    )
    return upcoming[:limit] if limit is not None else upcoming


def status_counts(appointments: Iterable) -> Dict[str, int]:
    counts = {
        'total': 0,
        'scheduled': 0,
        'completed': 0,
        'cancelled': 0,
        'no_show': 0,
    }
    key_by_status = {
        STATUS_SCHEDULED: 'scheduled',
        STATUS_COMPLETED: 'completed',
        STATUS_CANCELLED: 'cancelled',
        STATUS_NO_SHOW: 'no_show',
    }
    for appointment in appointments:
        counts['total'] += 1
        key = key_by_status.get(appointment.status)
        if key:
            counts[key] += 1
    return counts


def completion_rate(completed: int, total: int) -> int:
    """Percentage of completed appointments, rounded half up; 0 when there are none"""
    if total <= 0:
        return 0
    return (completed * 200 + total) // (2 * total)


def compute_psychologist_stats(appointments: Iterable, psychologists: Iterable) -> List[Dict[str, Any]]:
    """
    One row per psychologist with counts by status and completion rate,
    busiest first; psychologists with equal totals keep their input order
    """
    appointments = list(appointments)
    rows = []
    for psychologist in psychologists:
        own_id = str(psychologist.pk)
        own = [
            appointment for appointment in appointments
            if appointment.psychologist_id is not None and str(appointment.psychologist_id) == own_id
        ]
        counts = status_counts(own)
        rows.append({
            'psychologist_id': own_id,
            'psychologist_name': psychologist.full_name,
            'completed': counts['completed'],
            'scheduled': counts['scheduled'],
            'cancelled': counts['cancelled'],
            'no_show': counts['no_show'],
            'total': counts['total'],
            'completion_rate': completion_rate(counts['completed'], counts['total']),
        })

    return sorted(rows, key=lambda row: row['total'], reverse=True)


def query_appointments(visible: Iterable, filters: AppointmentFilters, page=1, page_size=None) -> Dict[str, Any]:
    """
    Filter, order and paginate the visible appointments
    """
    ordered = sort_appointments(filter_appointments(visible, filters))
    result = paginate(ordered, page, page_size)
    result['page_numbers'] = page_numbers(result['page'], result['total_pages'])
    result['active_filters'] = filters.active_count
    return result
