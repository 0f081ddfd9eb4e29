# catalogs/tests/test_services.py
from datetime import date

from django.test import TestCase

from catalogs.models import Process, ConsultationReason
from catalogs.services import (
    ReferenceDataService,
    CatalogEntryNotFoundError,
    CatalogValidationError,
)
from factories.appointments import AppointmentFactory
from factories.catalogs import ProcessFactory, ConsultationReasonFactory


class ReferenceDataServiceTest(TestCase):
    """Test ReferenceDataService functionality"""

    def test_create_process(self):
        process = ReferenceDataService.create_entry(Process, {
            'name': 'CEPRUNSA 2026-I',
            'start_date': date(2026, 1, 5),
            'end_date': date(2026, 4, 30),
        }, created_by='admin@test.com')

        self.assertTrue(process.is_active)
        self.assertEqual(process.created_by, 'admin@test.com')

    def test_process_may_start_and_end_on_the_same_day(self):
        process = ReferenceDataService.create_entry(Process, {
            'name': 'CEPRUNSA 2026-I',
            'start_date': date(2026, 4, 30),
            'end_date': date(2026, 4, 30),
        })

        self.assertEqual(process.start_date, process.end_date)

    def test_process_end_date_before_start_is_rejected(self):
        with self.assertRaises(CatalogValidationError):
            ReferenceDataService.create_entry(Process, {
                'name': 'CEPRUNSA 2026-I',
                'start_date': date(2026, 4, 30),
                'end_date': date(2026, 4, 29),
            })

    def test_blank_name_is_rejected(self):
        with self.assertRaises(CatalogValidationError):
            ReferenceDataService.create_entry(ConsultationReason, {'name': '   '})

    def test_update_checks_merged_dates(self):
        process = ProcessFactory(start_date=date(2026, 1, 5), end_date=date(2026, 4, 30))

        with self.assertRaises(CatalogValidationError):
            ReferenceDataService.update_entry(process, {'end_date': date(2025, 12, 31)})

        updated = ReferenceDataService.update_entry(process, {'name': 'Renamed'}, updated_by='admin@test.com')
        self.assertEqual(updated.name, 'Renamed')
        self.assertEqual(updated.updated_by, 'admin@test.com')

    def test_only_active_entries_are_selectable(self):
        active = ConsultationReasonFactory(name='Anxiety')
        ConsultationReasonFactory(name='Grief', is_active=False)

        self.assertEqual(list(ReferenceDataService.selectable_entries(ConsultationReason)), [active])

    def test_deactivation_keeps_existing_appointments(self):
        reason = ConsultationReasonFactory(name='Anxiety')
        appointment = AppointmentFactory(reason=reason)

        ReferenceDataService.toggle_status(ConsultationReason, reason.pk, False, updated_by='admin@test.com')

        appointment.refresh_from_db()
        self.assertEqual(appointment.reason_id, reason.pk)
        self.assertEqual(appointment.reason_name, 'Anxiety')
        self.assertNotIn(reason, ReferenceDataService.selectable_entries(ConsultationReason))

    def test_delete_keeps_denormalized_name(self):
        process = ProcessFactory(name='CEPRUNSA 2025-I')
        appointment = AppointmentFactory(client_situation='ceprunsa', process=process, process_name=process.name)

        ReferenceDataService.delete_entry(Process, process.pk)

        appointment.refresh_from_db()
        self.assertIsNone(appointment.process_id)
        self.assertEqual(appointment.process_name, 'CEPRUNSA 2025-I')

    def test_unknown_entry(self):
        with self.assertRaises(CatalogEntryNotFoundError):
            ReferenceDataService.get_entry(Process, 'not-a-uuid')
