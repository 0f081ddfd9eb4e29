# appointments/tests/test_views.py
from datetime import timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase, APIClient

from appointments.models import Appointment
from factories.appointments import AppointmentFactory, CompletedAppointmentFactory
from factories.catalogs import ConsultationReasonFactory, ProcessFactory
from factories.psychologists import LinkedPsychologistFactory, PsychologistFactory
from factories.users import AdminUserFactory, CoordinatorUserFactory, UserFactory


class AppointmentViewTestMixin:

    def setUp(self):
        self.client = APIClient()

        self.admin = AdminUserFactory()
        self.coordinator = CoordinatorUserFactory()
        self.plain_user = UserFactory()
        self.own_psychologist = LinkedPsychologistFactory(full_name='Ana Torres')
        self.psychologist_user = self.own_psychologist.user
        self.other_psychologist = PsychologistFactory(full_name='Carlos Mendoza')

        self.reason = ConsultationReasonFactory(name='Anxiety')
        self.process = ProcessFactory(name='CEPRUNSA 2025-II')
        self.today = timezone.localdate()

        self.own_appointment = AppointmentFactory(
            psychologist=self.own_psychologist, reason=self.reason, date=self.today,
            client_full_name='Luis Quispe', client_dni='70112233'
        )
        self.other_appointment = AppointmentFactory(
            psychologist=self.other_psychologist, reason=self.reason, date=self.today + timedelta(days=2),
            client_full_name='Rosa Mamani', client_dni='71234567'
        )

        self.list_url = reverse('appointment-list')

    def authenticate(self, user):
        token, _ = Token.objects.get_or_create(user=user)
        self.client.credentials(HTTP_AUTHORIZATION=f'Token {token.key}')

    def detail_url(self, appointment, name='detail'):
        return reverse(f'appointment-{name}', kwargs={'pk': appointment.pk})

    def draft_data(self, **overrides):
        data = {
            'client': {
                'full_name': 'Maria Flores',
                'dni': '72345678',
                'situation': 'particular',
                'phone': '987654321',
                'email': 'maria@example.com',
            },
            'reason_id': str(self.reason.pk),
            'psychologist_id': str(self.own_psychologist.pk),
            'date': str(self.today + timedelta(days=3)),
            'time': '10:30',
            'modality': 'presential',
            'location': 'Consultorio 1',
        }
        data.update(overrides)
        return data


class AppointmentListViewTest(AppointmentViewTestMixin, APITestCase):
    """Test listing and reading appointments"""

    def test_unauthenticated_request_is_rejected(self):
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_admin_lists_everything_most_recent_first(self):
        self.authenticate(self.admin)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 2)
        self.assertEqual(response.data['page_size'], 10)
        self.assertEqual(response.data['page_numbers'], [1])
        ids = [item['appointment_id'] for item in response.data['results']]
        self.assertEqual(ids, [str(self.other_appointment.pk), str(self.own_appointment.pk)])

    def test_psychologist_lists_only_own_appointments(self):
        self.authenticate(self.psychologist_user)

        response = self.client.get(self.list_url)

        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['appointment_id'], str(self.own_appointment.pk))

    def test_filters_and_active_count(self):
        self.authenticate(self.coordinator)

        response = self.client.get(self.list_url, {'search': 'mamani', 'status': 'scheduled'})

        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['active_filters'], 2)
        self.assertEqual(response.data['results'][0]['client']['full_name'], 'Rosa Mamani')

    def test_invalid_page_size_uses_default(self):
        self.authenticate(self.coordinator)

        response = self.client.get(self.list_url, {'page_size': 7, 'page': 0})

        self.assertEqual(response.data['page_size'], 10)
        self.assertEqual(response.data['page'], 1)

    def test_retrieve_serializes_client_and_time(self):
        self.authenticate(self.coordinator)

        response = self.client.get(self.detail_url(self.own_appointment))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['client']['dni'], '70112233')
        self.assertEqual(response.data['reason_name'], 'Anxiety')
        self.assertRegex(response.data['time'], r'^\d{2}:\d{2}$')

    def test_psychologist_cannot_retrieve_other_appointment(self):
        self.authenticate(self.psychologist_user)

        response = self.client.get(self.detail_url(self.other_appointment))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['code'], 'PermissionDenied')

    def test_retrieve_unknown_is_not_found(self):
        self.authenticate(self.admin)

        response = self.client.get(reverse('appointment-detail', kwargs={'pk': 'missing'}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['code'], 'NotFound')


class AppointmentWriteViewTest(AppointmentViewTestMixin, APITestCase):
    """Test scheduling, editing and deleting appointments"""

    def test_coordinator_schedules_appointment(self):
        self.authenticate(self.coordinator)

        response = self.client.post(self.list_url, self.draft_data(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        appointment = response.data['appointment']
        self.assertEqual(appointment['status'], 'scheduled')
        self.assertEqual(appointment['psychologist_name'], 'Ana Torres')
        self.assertEqual(appointment['created_by'], self.coordinator.email)
        self.assertEqual(Appointment.objects.count(), 3)

    def test_private_client_process_is_dropped(self):
        self.authenticate(self.admin)

        response = self.client.post(self.list_url, self.draft_data(process_id=str(self.process.pk)), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(response.data['appointment']['process'])
        self.assertEqual(response.data['appointment']['process_name'], '')

    def test_psychologist_cannot_schedule(self):
        self.authenticate(self.psychologist_user)

        response = self.client.post(self.list_url, self.draft_data(), format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(Appointment.objects.count(), 2)

    def test_missing_fields_are_reported(self):
        self.authenticate(self.coordinator)
        data = self.draft_data(modality='virtual', location='')
        data['client']['dni'] = '123'

        response = self.client.post(self.list_url, data, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'ValidationError')
        self.assertEqual(response.data['fields'], ['client.dni', 'location'])

    def test_partial_update_keeps_other_fields(self):
        self.authenticate(self.coordinator)

        response = self.client.patch(self.detail_url(self.own_appointment), {'time': '17:00'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.own_appointment.refresh_from_db()
        self.assertEqual(self.own_appointment.time.strftime('%H:%M'), '17:00')
        self.assertEqual(self.own_appointment.client_full_name, 'Luis Quispe')
        self.assertEqual(self.own_appointment.updated_by, self.coordinator.email)

    def test_completed_appointment_cannot_be_edited(self):
        completed = CompletedAppointmentFactory(reason=self.reason)
        self.authenticate(self.admin)

        response = self.client.patch(self.detail_url(completed), {'location': 'Room 3'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['code'], 'InvalidTransition')

    def test_delete(self):
        self.authenticate(self.coordinator)

        response = self.client.delete(self.detail_url(self.other_appointment))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Appointment.objects.filter(pk=self.other_appointment.pk).exists())

    def test_plain_user_cannot_delete(self):
        self.authenticate(self.plain_user)

        response = self.client.delete(self.detail_url(self.other_appointment))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class AppointmentStatusViewTest(AppointmentViewTestMixin, APITestCase):
    """Test status change and document endpoints"""

    def test_psychologist_completes_own_appointment(self):
        self.authenticate(self.psychologist_user)

        response = self.client.post(self.detail_url(self.own_appointment, 'complete'), {
            'diagnosis': 'Generalized anxiety',
            'recommendations': 'Weekly sessions',
            'conclusions': 'Good prognosis',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['appointment']['status'], 'completed')
        self.own_appointment.refresh_from_db()
        self.assertEqual(self.own_appointment.diagnosis, 'Generalized anxiety')

    def test_completion_with_blank_result_is_rejected(self):
        self.authenticate(self.coordinator)

        response = self.client.post(self.detail_url(self.own_appointment, 'complete'), {
            'diagnosis': 'x', 'recommendations': '', 'conclusions': 'y',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'IncompleteResults')
        self.assertEqual(response.data['fields'], ['recommendations'])
        self.own_appointment.refresh_from_db()
        self.assertEqual(self.own_appointment.status, 'scheduled')

    def test_psychologist_cannot_cancel(self):
        self.authenticate(self.psychologist_user)

        response = self.client.post(self.detail_url(self.own_appointment, 'cancel'), {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_coordinator_cancels_with_reason(self):
        self.authenticate(self.coordinator)

        response = self.client.post(self.detail_url(self.own_appointment, 'cancel'),
                                    {'cancellation_reason': 'Client request'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['appointment']['cancellation_reason'], 'Client request')

        again = self.client.post(self.detail_url(self.own_appointment, 'mark-no-show'), format='json')
        self.assertEqual(again.status_code, status.HTTP_409_CONFLICT)

    def test_mark_no_show(self):
        self.authenticate(self.psychologist_user)

        response = self.client.post(self.detail_url(self.own_appointment, 'mark-no-show'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['appointment']['status'], 'no-show')

    def document_data(self, **overrides):
        data = {
            'id': 'doc-1',
            'file_name': 'informe_70112233.pdf',
            'original_name': 'informe.pdf',
            'url': 'https://files.example.com/informe_70112233.pdf',
            'size': 4096,
            'mime_type': 'application/pdf',
        }
        data.update(overrides)
        return data

    def test_document_requires_completed_appointment(self):
        self.authenticate(self.admin)

        response = self.client.post(self.detail_url(self.own_appointment, 'attach-document'),
                                    self.document_data(), format='json')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['code'], 'NotCompleted')

    def test_attach_document_to_completed_appointment(self):
        completed = CompletedAppointmentFactory(psychologist=self.own_psychologist, reason=self.reason)
        self.authenticate(self.psychologist_user)

        response = self.client.post(self.detail_url(completed, 'attach-document'),
                                    self.document_data(), format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        completed.refresh_from_db()
        self.assertEqual(completed.document['file_name'], 'informe_70112233.pdf')
        self.assertEqual(completed.document['uploaded_by'], self.psychologist_user.email)

    def test_non_pdf_document_is_rejected(self):
        completed = CompletedAppointmentFactory(reason=self.reason)
        self.authenticate(self.admin)

        response = self.client.post(self.detail_url(completed, 'attach-document'),
                                    self.document_data(mime_type='image/png', original_name='scan.png'),
                                    format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['fields'], ['mime_type', 'original_name'])


class AppointmentAgendaViewTest(AppointmentViewTestMixin, APITestCase):
    """Test today, upcoming, dashboard and statistics endpoints"""

    def test_today(self):
        self.authenticate(self.coordinator)

        response = self.client.get(reverse('appointment-today'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['appointment_id'] for item in response.data], [str(self.own_appointment.pk)])

    def test_upcoming_with_limit(self):
        AppointmentFactory(psychologist=self.other_psychologist, reason=self.reason,
                           date=self.today + timedelta(days=5))
        self.authenticate(self.coordinator)

        response = self.client.get(reverse('appointment-upcoming'), {'limit': 1})

        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['appointment_id'], str(self.other_appointment.pk))

    def test_upcoming_rejects_bad_limit(self):
        self.authenticate(self.coordinator)

        response = self.client.get(reverse('appointment-upcoming'), {'limit': 'many'})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_upcoming_rejects_limit_below_one(self):
        self.authenticate(self.coordinator)

        for limit in (0, -1):
            response = self.client.get(reverse('appointment-upcoming'), {'limit': limit})
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_dashboard_for_coordinator(self):
        self.authenticate(self.coordinator)

        response = self.client.get(reverse('appointment-dashboard'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['counts']['total'], 2)
        self.assertEqual(len(response.data['today_appointments']), 1)
        self.assertEqual(len(response.data['upcoming_appointments']), 1)
        self.assertEqual(len(response.data['psychologist_stats']), 2)

    def test_dashboard_for_psychologist(self):
        self.authenticate(self.psychologist_user)

        response = self.client.get(reverse('appointment-dashboard'))

        self.assertEqual(response.data['counts']['total'], 1)
        self.assertIsNone(response.data['psychologist_stats'])

    def test_psychologist_stats(self):
        CompletedAppointmentFactory(psychologist=self.other_psychologist, reason=self.reason)
        self.authenticate(self.admin)

        response = self.client.get(reverse('appointment-analytics-psychologist-stats'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]['psychologist_name'], 'Carlos Mendoza')
        self.assertEqual(response.data[0]['total'], 2)
        self.assertEqual(response.data[0]['completion_rate'], 50)

    def test_psychologist_stats_forbidden_for_psychologists(self):
        self.authenticate(self.psychologist_user)

        response = self.client.get(reverse('appointment-analytics-psychologist-stats'))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
