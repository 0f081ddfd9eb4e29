# catalogs/tests/test_views.py
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase, APIClient

from catalogs.models import ConsultationReason
from factories.catalogs import ProcessFactory, ConsultationReasonFactory
from factories.users import AdminUserFactory, CoordinatorUserFactory


class CatalogViewSetTest(APITestCase):
    """Test the processes and consultation reasons endpoints"""

    def setUp(self):
        self.client = APIClient()
        self.admin = AdminUserFactory()
        self.coordinator = CoordinatorUserFactory()
        self.reason = ConsultationReasonFactory(name='Anxiety')
        self.inactive_reason = ConsultationReasonFactory(name='Grief', is_active=False)

    def authenticate(self, user):
        token, _ = Token.objects.get_or_create(user=user)
        self.client.credentials(HTTP_AUTHORIZATION=f'Token {token.key}')

    def test_any_authenticated_user_can_read(self):
        self.authenticate(self.coordinator)

        response = self.client.get(reverse('consultation-reason-list'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 2)

    def test_active_lists_selectable_entries(self):
        self.authenticate(self.coordinator)

        response = self.client.get(reverse('consultation-reason-active'))

        self.assertEqual([entry['name'] for entry in response.data], ['Anxiety'])

    def test_active_processes(self):
        ProcessFactory(name='CEPRUNSA 2026-I')
        ProcessFactory(name='CEPRUNSA 2024-I', is_active=False)
        self.authenticate(self.coordinator)

        response = self.client.get(reverse('process-active'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([entry['name'] for entry in response.data], ['CEPRUNSA 2026-I'])

    def test_coordinator_cannot_write(self):
        self.authenticate(self.coordinator)

        response = self.client.post(reverse('consultation-reason-list'), {'name': 'Insomnia'})

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_creates_reason(self):
        self.authenticate(self.admin)

        response = self.client.post(reverse('consultation-reason-list'), {
            'name': 'Insomnia',
            'description': 'Sleep problems',
        })

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['created_by'], self.admin.email)
        self.assertTrue(ConsultationReason.objects.filter(name='Insomnia', is_active=True).exists())

    def test_process_end_date_must_follow_start(self):
        self.authenticate(self.admin)

        response = self.client.post(reverse('process-list'), {
            'name': 'CEPRUNSA 2026-I',
            'start_date': '2026-04-30',
            'end_date': '2026-01-05',
        })

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('end_date', response.data)

    def test_admin_creates_single_day_process(self):
        self.authenticate(self.admin)

        response = self.client.post(reverse('process-list'), {
            'name': 'CEPRUNSA 2026-I',
            'start_date': '2026-04-30',
            'end_date': '2026-04-30',
        })

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['is_active'])

    def test_partial_update_keeps_inactive_entry_inactive(self):
        self.authenticate(self.admin)

        response = self.client.patch(
            reverse('consultation-reason-detail', kwargs={'pk': self.inactive_reason.pk}),
            {'description': 'Loss and bereavement'}
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.inactive_reason.refresh_from_db()
        self.assertFalse(self.inactive_reason.is_active)

    def test_toggle_status(self):
        self.authenticate(self.admin)

        response = self.client.post(
            reverse('consultation-reason-toggle-status', kwargs={'pk': self.inactive_reason.pk}),
            {'is_active': True}
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Consultation reason activated')
        self.inactive_reason.refresh_from_db()
        self.assertTrue(self.inactive_reason.is_active)

    def test_partial_update_process(self):
        process = ProcessFactory(name='CEPRUNSA 2025-II')
        self.authenticate(self.admin)

        response = self.client.patch(reverse('process-detail', kwargs={'pk': process.pk}),
                                     {'name': 'CEPRUNSA 2025-II (extended)'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'CEPRUNSA 2025-II (extended)')
        self.assertEqual(response.data['updated_by'], self.admin.email)

    def test_delete(self):
        self.authenticate(self.admin)

        response = self.client.delete(reverse('consultation-reason-detail', kwargs={'pk': self.reason.pk}))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(ConsultationReason.objects.filter(pk=self.reason.pk).exists())

    def test_delete_unknown(self):
        self.authenticate(self.admin)

        response = self.client.delete(reverse('consultation-reason-detail', kwargs={'pk': 'missing'}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
