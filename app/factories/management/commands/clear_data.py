# factories/management/commands/clear_data.py
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.conf import settings

from appointments.models import Appointment
from catalogs.models import Process, ConsultationReason
from psychologists.models import Psychologist
from users.models import User


class DryRunRollback(Exception):
    """Raised to roll back the transaction of a dry run"""
    pass


class Command(BaseCommand):
    help = 'Clear generated sample data with safety checks'

    def add_arguments(self, parser):
        parser.add_argument(
            '--type',
            type=str,
            choices=['all', 'appointments', 'catalogs', 'psychologists', 'users', 'test'],
            default='all',
            help='Type of data to clear (default: all)'
        )
        parser.add_argument(
            '--force',
            action='store_true',
            help='Skip confirmation prompts'
        )
        parser.add_argument(
            '--exclude-admins',
            action='store_true',
            help='Keep admin users when clearing'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be deleted without actually deleting'
        )

    def handle(self, *args, **options):
        # Safety check for production
        if getattr(settings, 'ENVIRONMENT', None) == 'production':
            if not options['force']:
                self.stdout.write(self.style.ERROR('WARNING: You are running this on a PRODUCTION environment!'))
                confirm = input('Are you absolutely sure? Type "DELETE PRODUCTION DATA" to confirm: ')
                if confirm != 'DELETE PRODUCTION DATA':
                    self.stdout.write(self.style.ERROR('Aborted.'))
                    return

        clear_type = options['type']
        is_dry_run = options['dry_run']

        self.stdout.write(f'{"[DRY RUN] " if is_dry_run else ""}Analyzing data to clear...\n')

        # Delete in dependency order: appointments point at everything else
        querysets = []
        if clear_type in ['all', 'appointments']:
            querysets.append(('Appointments', Appointment.objects.all()))
        if clear_type in ['all', 'catalogs']:
            querysets.append(('Processes', Process.objects.all()))
            querysets.append(('Consultation reasons', ConsultationReason.objects.all()))
        if clear_type in ['all', 'psychologists']:
            querysets.append(('Psychologists', Psychologist.objects.all()))
        if clear_type in ['all', 'users', 'test']:
            user_qs = User.objects.all()
            if clear_type == 'test':
                user_qs = user_qs.filter(email__in=['admin@test.com', 'coordinator@test.com', 'psychologist@test.com'])
            elif options['exclude_admins']:
                user_qs = user_qs.exclude(role=User.ROLE_ADMIN)
            querysets.append(('Users', user_qs))

        try:
            with transaction.atomic():
                self.stdout.write('Data to be deleted:')
                total_records = 0
                for label, queryset in querysets:
                    count = queryset.count()
                    total_records += count
                    self.stdout.write(f'  - {label}: {count}')

                if total_records == 0:
                    self.stdout.write(self.style.WARNING('\nNo data matches the criteria. Nothing to delete.'))
                    return

                # Confirmation
                if not options['force'] and not is_dry_run:
                    self.stdout.write(f'\nTotal records to delete: {total_records}')
                    confirm = input('Are you sure you want to proceed? Type "yes" to confirm: ')
                    if confirm.lower() != 'yes':
                        self.stdout.write(self.style.ERROR('Aborted.'))
                        return

                if is_dry_run:
                    self.stdout.write(self.style.WARNING('\n[DRY RUN] No data was actually deleted.'))
                    raise DryRunRollback()

                self.stdout.write('\nDeleting data...')
                for label, queryset in querysets:
                    deleted = queryset.delete()[0]
                    self.stdout.write(self.style.SUCCESS(f'✓ Deleted {deleted} {label.lower()}'))

                self.stdout.write(self.style.SUCCESS('\nData cleared successfully!'))

        except DryRunRollback:
            pass
        except Exception as e:
            self.stdout.write(self.style.ERROR(f'Error clearing data: {str(e)}'))
            raise CommandError(f'Failed to clear data: {str(e)}')
