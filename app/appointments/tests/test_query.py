# appointments/tests/test_query.py
import datetime

from django.test import SimpleTestCase, override_settings

from appointments.services import AppointmentFilters
from appointments.services import query
from .fakes import make_appointment, make_process, make_psychologist, make_reason


@override_settings(APPOINTMENT_PAGE_SIZE_OPTIONS=[10, 25, 50, 100], APPOINTMENT_DEFAULT_PAGE_SIZE=10)
class SortAndPaginateTest(SimpleTestCase):
    """Test ordering and pagination"""

    def test_sort_date_descending_time_ascending(self):
        late = make_appointment(date='2024-01-02', time='09:00')
        early = make_appointment(date='2024-01-02', time='08:00')
        previous_day = make_appointment(date='2024-01-01', time='23:00')

        ordered = query.sort_appointments([late, previous_day, early])

        self.assertEqual(ordered, [early, late, previous_day])

    def test_every_item_lands_on_exactly_one_page(self):
        for total in (0, 1, 9, 10, 11, 25, 99, 100, 101):
            items = list(range(total))
            for page_size in (10, 25, 50, 100):
                first = query.paginate(items, 1, page_size)
                slices = [query.paginate(items, page, page_size)['items']
                          for page in range(1, first['total_pages'] + 1)]

                self.assertEqual(sum(len(chunk) for chunk in slices), total)
                self.assertTrue(all(len(chunk) <= page_size for chunk in slices))
                self.assertEqual([item for chunk in slices for item in chunk], items)

    def test_total_pages(self):
        self.assertEqual(query.paginate(list(range(21)), 1, 10)['total_pages'], 3)
        self.assertEqual(query.paginate([], 1, 10)['total_pages'], 0)

    def test_page_past_the_end_is_empty(self):
        result = query.paginate(list(range(5)), 3, 10)
        self.assertEqual(result['items'], [])
        self.assertEqual(result['total_items'], 5)

    def test_page_size_outside_options_falls_back_to_default(self):
        for page_size in (7, '0', 'abc', None, 1000):
            self.assertEqual(query.normalize_page_size(page_size), 10)
        self.assertEqual(query.normalize_page_size('25'), 25)

    def test_invalid_page_falls_back_to_first(self):
        self.assertEqual(query.normalize_page(0), 1)
        self.assertEqual(query.normalize_page('-3'), 1)
        self.assertEqual(query.normalize_page('x'), 1)
        self.assertEqual(query.normalize_page('4'), 4)


class PageNumbersTest(SimpleTestCase):
    """Test the compact page-number sequence"""

    def test_documented_examples(self):
        self.assertEqual(query.page_numbers(1, 10), [1, 2, 3, 4, '…', 10])
        self.assertEqual(query.page_numbers(10, 10), [1, '…', 7, 8, 9, 10])
        self.assertEqual(query.page_numbers(5, 10), [1, '…', 4, 5, 6, '…', 10])

    def test_few_pages_are_listed_in_full(self):
        self.assertEqual(query.page_numbers(2, 5), [1, 2, 3, 4, 5])
        self.assertEqual(query.page_numbers(1, 1), [1])

    def test_no_pages(self):
        self.assertEqual(query.page_numbers(1, 0), [])

    def test_sequences_are_short_and_contain_current_and_last_page(self):
        for total_pages in range(1, 40):
            for current in range(1, total_pages + 1):
                tokens = query.page_numbers(current, total_pages)
                numbers = [token for token in tokens if token != '…']

                self.assertLessEqual(len(tokens), 7)
                self.assertIn(current, numbers)
                self.assertEqual(numbers[0], 1)
                self.assertEqual(numbers[-1], total_pages)
                self.assertEqual(numbers, sorted(set(numbers)))


class FilterTest(SimpleTestCase):
    """Test appointment filters"""

    def setUp(self):
        self.psy_1 = make_psychologist('Ana Torres')
        self.psy_2 = make_psychologist('Carlos Mendoza')
        self.reason = make_reason()
        self.process = make_process()

        self.luis = make_appointment(psychologist=self.psy_1, reason=self.reason,
                                     client_full_name='Luis Quispe', client_dni='70112233',
                                     date='2025-03-10', status='scheduled')
        self.rosa = make_appointment(psychologist=self.psy_2, reason=self.reason, process=self.process,
                                     client_full_name='Rosa Mamani', client_dni='71234567',
                                     client_situation='ceprunsa', date='2025-03-11', status='completed')
        self.appointments = [self.luis, self.rosa]

    def test_empty_filters_pass_everything(self):
        filters = AppointmentFilters()
        self.assertEqual(query.filter_appointments(self.appointments, filters), self.appointments)
        self.assertEqual(filters.active_count, 0)

    def test_search_matches_name_case_insensitively(self):
        filters = AppointmentFilters(search='qUISPE')
        self.assertEqual(query.filter_appointments(self.appointments, filters), [self.luis])

    def test_search_matches_dni_substring(self):
        filters = AppointmentFilters(search='12345')
        self.assertEqual(query.filter_appointments(self.appointments, filters), [self.rosa])

    def test_search_without_match_excludes(self):
        self.assertEqual(query.filter_appointments(self.appointments, AppointmentFilters(search='zzz')), [])

    def test_filters_compose_with_and(self):
        filters = AppointmentFilters(psychologist=str(self.psy_1.pk), status='completed')
        self.assertEqual(query.filter_appointments(self.appointments, filters), [])
        self.assertEqual(filters.active_count, 2)

    def test_equality_filters(self):
        by_process = AppointmentFilters(process=str(self.process.pk))
        by_reason = AppointmentFilters(reason=str(self.reason.pk))
        by_date = AppointmentFilters(date='2025-03-10')

        self.assertEqual(query.filter_appointments(self.appointments, by_process), [self.rosa])
        self.assertEqual(query.filter_appointments(self.appointments, by_reason), self.appointments)
        self.assertEqual(query.filter_appointments(self.appointments, by_date), [self.luis])

    def test_from_params_ignores_blank_values(self):
        filters = AppointmentFilters.from_params({'search': '  ', 'status': 'scheduled', 'page': '2'})
        self.assertEqual(filters.search, '')
        self.assertEqual(filters.active_count, 1)

    def test_active_count_counts_every_dimension(self):
        filters = AppointmentFilters(search='a', psychologist='p', process='x', reason='r',
                                     status='scheduled', date='2025-03-10')
        self.assertEqual(filters.active_count, 6)

    @override_settings(APPOINTMENT_PAGE_SIZE_OPTIONS=[10, 25, 50, 100], APPOINTMENT_DEFAULT_PAGE_SIZE=10)
    def test_query_appointments_filters_sorts_and_paginates(self):
        result = query.query_appointments(self.appointments, AppointmentFilters(status='completed'), 1, 10)

        self.assertEqual(result['items'], [self.rosa])
        self.assertEqual(result['total_items'], 1)
        self.assertEqual(result['total_pages'], 1)
        self.assertEqual(result['page_numbers'], [1])
        self.assertEqual(result['active_filters'], 1)


class DerivedSubsetsTest(SimpleTestCase):
    """Test today's, upcoming and status aggregates"""

    def setUp(self):
        self.today = datetime.date(2025, 3, 10)
        self.now = make_appointment(date='2025-03-10', status='completed')
        self.tomorrow = make_appointment(date='2025-03-11')
        self.next_week = make_appointment(date='2025-03-17')
        self.cancelled_later = make_appointment(date='2025-03-12', status='cancelled')
        self.yesterday = make_appointment(date='2025-03-09', status='no-show')
        self.appointments = [self.next_week, self.yesterday, self.cancelled_later, self.tomorrow, self.now]

    def test_today(self):
        self.assertEqual(query.today_appointments(self.appointments, self.today), [self.now])
        self.assertEqual(query.today_appointments(self.appointments, '2025-03-10'), [self.now])

    def test_upcoming_is_scheduled_after_today_soonest_first(self):
        self.assertEqual(
            query.upcoming_appointments(self.appointments, self.today),
            [self.tomorrow, self.next_week]
        )
        self.assertEqual(query.upcoming_appointments(self.appointments, self.today, limit=1), [self.tomorrow])

    def test_status_counts(self):
        self.assertEqual(query.status_counts(self.appointments), {
            'total': 5, 'scheduled': 2, 'completed': 1, 'cancelled': 1, 'no_show': 1,
        })

    def test_empty_list_aggregates_to_zero(self):
        self.assertEqual(query.status_counts([])['total'], 0)
        self.assertEqual(query.today_appointments([], self.today), [])
        self.assertEqual(query.upcoming_appointments([], self.today), [])


class PsychologistStatsTest(SimpleTestCase):
    """Test per-psychologist statistics"""

    def test_completion_rate(self):
        self.assertEqual(query.completion_rate(0, 0), 0)
        self.assertEqual(query.completion_rate(3, 4), 75)
        self.assertEqual(query.completion_rate(1, 3), 33)
        self.assertEqual(query.completion_rate(2, 3), 67)
        self.assertEqual(query.completion_rate(1, 8), 13)

    def test_rows_are_ordered_by_total_with_stable_ties(self):
        idle = make_psychologist('Idle')
        busy = make_psychologist('Busy')
        tie_a = make_psychologist('Tie A')
        tie_b = make_psychologist('Tie B')
        appointments = [
            make_appointment(psychologist=busy, status='completed'),
            make_appointment(psychologist=busy, status='completed'),
            make_appointment(psychologist=busy, status='completed'),
            make_appointment(psychologist=busy, status='no-show'),
            make_appointment(psychologist=tie_a, status='scheduled'),
            make_appointment(psychologist=tie_b, status='cancelled'),
            make_appointment(status='completed'),
        ]

        rows = query.compute_psychologist_stats(appointments, [idle, tie_a, busy, tie_b])

        self.assertEqual([row['psychologist_name'] for row in rows], ['Busy', 'Tie A', 'Tie B', 'Idle'])
        self.assertEqual(rows[0], {
            'psychologist_id': str(busy.pk),
            'psychologist_name': 'Busy',
            'completed': 3,
            'scheduled': 0,
            'cancelled': 0,
            'no_show': 1,
            'total': 4,
            'completion_rate': 75,
        })
        self.assertEqual(rows[-1]['completion_rate'], 0)
        self.assertEqual(rows[-1]['total'], 0)
