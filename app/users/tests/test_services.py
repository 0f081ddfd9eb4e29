from django.test import TestCase
from django.contrib.auth import get_user_model

from users.services import UserService
from users.exceptions import (
    EmailAlreadyExistsError,
    InvalidRoleError,
    UserNotFoundError,
)
from psychologists.models import Psychologist

User = get_user_model()


class UserServiceTestCase(TestCase):
    """Test cases for UserService"""

    def setUp(self):
        self.admin = User.objects.create_superuser(email='admin@example.com', password='testpass123')

    def test_create_user_with_role(self):
        """Test creating a user records the role and the creator"""
        user = UserService.create_user(
            email='coord@example.com',
            role=User.ROLE_COORDINATOR,
            password='testpass123',
            display_name='Coordinadora',
            created_by=self.admin.email,
        )

        self.assertEqual(user.role, User.ROLE_COORDINATOR)
        self.assertEqual(user.display_name, 'Coordinadora')
        self.assertEqual(user.created_by, 'admin@example.com')
        self.assertTrue(user.check_password('testpass123'))

    def test_create_user_defaults_creator_to_system(self):
        """Test the creator falls back to system"""
        user = UserService.create_user(email='new@example.com', role=User.ROLE_USER)

        self.assertEqual(user.created_by, 'system')
        self.assertFalse(user.has_usable_password())

    def test_create_user_invalid_role(self):
        """Test unknown roles are rejected"""
        with self.assertRaises(InvalidRoleError):
            UserService.create_user(email='new@example.com', role='Parent')

    def test_create_user_duplicate_email(self):
        """Test duplicate emails are rejected case-insensitively"""
        with self.assertRaises(EmailAlreadyExistsError) as context:
            UserService.create_user(email='ADMIN@example.com', role=User.ROLE_USER)

        self.assertEqual(context.exception.email, 'ADMIN@example.com')

    def test_update_role(self):
        """Test changing a user's role"""
        user = User.objects.create_user(email='someone@example.com', password='testpass123')

        updated = UserService.update_role(user.id, User.ROLE_PSYCHOLOGIST, self.admin.email)

        self.assertEqual(updated.role, User.ROLE_PSYCHOLOGIST)
        user.refresh_from_db()
        self.assertEqual(user.role, User.ROLE_PSYCHOLOGIST)

    def test_update_role_invalid(self):
        """Test changing to an unknown role"""
        with self.assertRaises(InvalidRoleError):
            UserService.update_role(self.admin.id, 'superhero')

    def test_update_role_missing_user(self):
        """Test changing the role of an unknown user"""
        import uuid
        with self.assertRaises(UserNotFoundError):
            UserService.update_role(uuid.uuid4(), User.ROLE_USER)

    def test_delete_user_keeps_psychologist_record(self):
        """Test deleting a login leaves the psychologist record unlinked"""
        user = User.objects.create_psychologist_user(email='psy@example.com', password='testpass123')
        psychologist = Psychologist.objects.create(
            full_name='Ana Torres',
            dni='12345678',
            institutional_email='ana@office.example.com',
            phone='999888777',
            user=user,
        )

        UserService.delete_user(user.id, self.admin.email)

        self.assertFalse(User.objects.filter(id=user.id).exists())
        psychologist.refresh_from_db()
        self.assertIsNone(psychologist.user)

    def test_delete_missing_user(self):
        """Test deleting an unknown user"""
        import uuid
        with self.assertRaises(UserNotFoundError):
            UserService.delete_user(uuid.uuid4())

    def test_get_user_profile_includes_linked_psychologist(self):
        """Test profile carries the linked psychologist id"""
        user = User.objects.create_psychologist_user(email='psy@example.com', password='testpass123')
        psychologist = Psychologist.objects.create(
            full_name='Ana Torres',
            dni='12345678',
            institutional_email='ana@office.example.com',
            phone='999888777',
            user=user,
        )

        profile = UserService.get_user_profile(user)

        self.assertEqual(profile['role'], User.ROLE_PSYCHOLOGIST)
        self.assertEqual(profile['psychologist_id'], str(psychologist.id))

    def test_get_user_profile_without_linked_psychologist(self):
        """Test profile of a user without psychologist record"""
        profile = UserService.get_user_profile(self.admin)

        self.assertEqual(profile['email'], 'admin@example.com')
        self.assertIsNone(profile['psychologist_id'])
