from django.test import TestCase
from django.contrib.auth import get_user_model


User = get_user_model()


class UserManagerTest(TestCase):
    """Test cases for UserManager"""

    def setUp(self):
        """Set up test data"""
        self.manager = User.objects
        self.valid_email = 'test@example.com'
        self.valid_password = 'testpassword123'

    def test_email_validator_with_valid_email(self):
        """Test email validator with valid email"""
        try:
            self.manager.email_validator(self.valid_email)
        except ValueError:
            self.fail("email_validator raised ValueError unexpectedly!")

    def test_email_validator_with_invalid_email(self):
        """Test email validator with invalid email"""
        for invalid_email in ['invalid_email', '@example.com', 'test@']:
            with self.subTest(email=invalid_email):
                with self.assertRaises(ValueError) as context:
                    self.manager.email_validator(invalid_email)
                self.assertIn('Invalid email address', str(context.exception))

    def test_create_user_success(self):
        """Test creating a user successfully with the default role"""
        user = self.manager.create_user(
            email=self.valid_email,
            password=self.valid_password
        )

        self.assertEqual(user.email, self.valid_email)
        self.assertTrue(user.check_password(self.valid_password))
        self.assertEqual(user.role, User.ROLE_USER)
        self.assertEqual(user.created_by, 'system')
        self.assertTrue(user.is_active)
        self.assertFalse(user.is_staff)
        self.assertFalse(user.is_superuser)

    def test_create_user_without_email(self):
        """Test creating user without email raises ValueError"""
        with self.assertRaises(ValueError) as context:
            self.manager.create_user(email='', password=self.valid_password)
        self.assertIn('The Email field must be set', str(context.exception))

    def test_create_user_normalizes_email_domain(self):
        """Test the email domain is lowercased"""
        user = self.manager.create_user(email='someone@EXAMPLE.COM', password=self.valid_password)

        self.assertEqual(user.email, 'someone@example.com')

    def test_create_superuser_is_admin(self):
        """Test superusers get the admin role and staff flags"""
        user = self.manager.create_superuser(email='root@example.com', password=self.valid_password)

        self.assertEqual(user.role, User.ROLE_ADMIN)
        self.assertTrue(user.is_staff)
        self.assertTrue(user.is_superuser)
        self.assertTrue(user.is_admin)

    def test_create_superuser_requires_staff(self):
        """Test superuser creation rejects is_staff=False"""
        with self.assertRaises(ValueError):
            self.manager.create_superuser(
                email='root@example.com',
                password=self.valid_password,
                is_staff=False
            )

    def test_create_coordinator(self):
        """Test coordinator helper sets the role"""
        user = self.manager.create_coordinator(email='coord@example.com', password=self.valid_password)

        self.assertEqual(user.role, User.ROLE_COORDINATOR)
        self.assertTrue(user.is_coordinator)
        self.assertFalse(user.is_admin)

    def test_create_psychologist_user(self):
        """Test psychologist helper sets the role"""
        user = self.manager.create_psychologist_user(email='psy@example.com', password=self.valid_password)

        self.assertEqual(user.role, User.ROLE_PSYCHOLOGIST)
        self.assertTrue(user.is_psychologist)
