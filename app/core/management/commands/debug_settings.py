# app/core/management/commands/debug_settings.py
from django.core.management.base import BaseCommand
from django.conf import settings
import os


class Command(BaseCommand):
    help = 'Debug Django settings configuration'

    def handle(self, *args, **options):
        self.stdout.write(self.style.SUCCESS('=== DJANGO SETTINGS DEBUG ==='))

        # Environment variable
        env_setting = os.environ.get('DJANGO_SETTINGS_MODULE', 'Not set')
        self.stdout.write(f"🔧 DJANGO_SETTINGS_MODULE (env): {env_setting}")

        # Django's detected settings module
        self.stdout.write(f"📋 Django settings module: {settings.SETTINGS_MODULE}")

        # Debug mode
        self.stdout.write(f"🛠️  DEBUG: {settings.DEBUG}")

        # Database info
        database = settings.DATABASES['default']
        self.stdout.write(
            f"🗄️  Database: {database['NAME']} @ {database.get('HOST') or 'local'} ({database['ENGINE']})"
        )

        # Allowed hosts
        self.stdout.write(f"🌐 ALLOWED_HOSTS: {settings.ALLOWED_HOSTS}")

        # Appointment workflow
        self.stdout.write(f"📅 Page sizes: {settings.APPOINTMENT_PAGE_SIZE_OPTIONS} "
                          f"(default {settings.APPOINTMENT_DEFAULT_PAGE_SIZE})")
        self.stdout.write(f"📅 Upcoming limit: {settings.APPOINTMENT_UPCOMING_LIMIT}")
        self.stdout.write(f"📄 Documents: {settings.APPOINTMENT_DOCUMENT_MIME_TYPES} "
                          f"up to {settings.APPOINTMENT_DOCUMENT_MAX_SIZE} bytes")

        self.stdout.write(self.style.SUCCESS('=== END DEBUG ==='))
