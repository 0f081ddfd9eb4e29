# factories/management/commands/generate_sample_data.py
import random
from datetime import timedelta
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone

from factories.users import AdminUserFactory, CoordinatorUserFactory, PsychologistUserFactory
from factories.psychologists import PsychologistFactory
from factories.catalogs import ProcessFactory, ConsultationReasonFactory
from factories.appointments import AppointmentFactory, random_status_factory
from appointments.constants import SITUATION_CEPRUNSA

TEST_ACCOUNTS = ('admin@test.com', 'coordinator@test.com', 'psychologist@test.com')

REASON_NAMES = [
    'Anxiety', 'Academic stress', 'Vocational guidance', 'Family conflict',
    'Grief', 'Low mood', 'Relationship problems', 'Sleep problems',
]


class Command(BaseCommand):
    help = 'Generate realistic sample data for development and testing'

    def add_arguments(self, parser):
        parser.add_argument(
            '--psychologists',
            type=int,
            default=5,
            help='Number of psychologist records to create (default: 5)'
        )
        parser.add_argument(
            '--appointments',
            type=int,
            default=120,
            help='Number of appointments to create (default: 120)'
        )
        parser.add_argument(
            '--days',
            type=int,
            default=30,
            help='Spread appointments over this many days before and after today (default: 30)'
        )
        parser.add_argument(
            '--ceprunsa-ratio',
            type=float,
            default=0.4,
            help='Ratio of appointments for CEPRUNSA applicants (default: 0.4)'
        )
        parser.add_argument(
            '--seed',
            type=int,
            help='Random seed for reproducible data'
        )
        parser.add_argument(
            '--verbose',
            action='store_true',
            help='Show detailed progress'
        )

    def handle(self, *args, **options):
        # Set random seed if provided
        if options['seed']:
            random.seed(options['seed'])
            self.stdout.write(self.style.SUCCESS(f'Using random seed: {options["seed"]}'))

        if not 0 <= options['ceprunsa_ratio'] <= 1:
            raise CommandError('ceprunsa-ratio must be between 0 and 1')
        if options['psychologists'] < 1:
            raise CommandError('At least one psychologist is required')

        self.stdout.write('Starting sample data generation...\n')

        try:
            with transaction.atomic():
                # Step 1: test logins with known credentials (password: testpass123)
                self.stdout.write('Creating test accounts...')
                AdminUserFactory.create(email='admin@test.com')
                CoordinatorUserFactory.create(email='coordinator@test.com')
                psychologist_user = PsychologistUserFactory.create(email='psychologist@test.com')
                self.stdout.write(self.style.SUCCESS(f'✓ Created {len(TEST_ACCOUNTS)} test accounts'))

                # Step 2: psychologists, the first one linked to the test login
                self.stdout.write('Creating psychologists...')
                psychologists = [
                    PsychologistFactory.create(user=psychologist_user, institutional_email=psychologist_user.email)
                ]
                psychologists.extend(PsychologistFactory.create_batch(options['psychologists'] - 1))
                self.stdout.write(self.style.SUCCESS(f'✓ Created {len(psychologists)} psychologists'))

                # Step 3: reference data, one inactive entry of each kind
                self.stdout.write('Creating processes and consultation reasons...')
                processes = [
                    ProcessFactory.create(name='CEPRUNSA 2025-I', is_active=False,
                                          start_date=timezone.localdate() - timedelta(days=300),
                                          end_date=timezone.localdate() - timedelta(days=120)),
                    ProcessFactory.create(name='CEPRUNSA 2025-II'),
                ]
                reasons = [ConsultationReasonFactory.create(name=name) for name in REASON_NAMES]
                reasons[-1].is_active = False
                reasons[-1].save(update_fields=['is_active'])
                active_reasons = [reason for reason in reasons if reason.is_active]
                self.stdout.write(self.style.SUCCESS(f'✓ Created {len(processes)} processes and {len(reasons)} reasons'))

                # Step 4: appointments, past ones in every status, future ones scheduled
                self.stdout.write('Creating appointments...')
                today = timezone.localdate()
                status_totals = {}
                for _ in range(options['appointments']):
                    offset = random.randint(-options['days'], options['days'])
                    appointment_date = today + timedelta(days=offset)
                    factory_class = random_status_factory() if offset < 0 else AppointmentFactory

                    kwargs = {
                        'date': appointment_date,
                        'psychologist': random.choice(psychologists),
                        'reason': random.choice(active_reasons),
                    }
                    if random.random() < options['ceprunsa_ratio']:
                        kwargs.update(
                            client_situation=SITUATION_CEPRUNSA,
                            process=processes[-1],
                            process_name=processes[-1].name,
                        )
                    appointment = factory_class.create(**kwargs)

                    status_totals[appointment.status] = status_totals.get(appointment.status, 0) + 1

                self.stdout.write(self.style.SUCCESS(f'✓ Created {options["appointments"]} appointments'))

                # Summary
                self.stdout.write('\n' + self.style.SUCCESS('Sample data generation complete!'))
                self.stdout.write('\nSummary:')
                self.stdout.write(f'  - Test accounts: {", ".join(TEST_ACCOUNTS)} (password: testpass123)')
                self.stdout.write(f'  - Psychologists: {len(psychologists)}')
                self.stdout.write(f'  - Processes: {len(processes)}')
                self.stdout.write(f'  - Consultation reasons: {len(reasons)}')
                self.stdout.write(f'  - Appointments: {options["appointments"]}')

                if options['verbose']:
                    self.stdout.write('\nAppointments by status:')
                    for status_value, count in sorted(status_totals.items()):
                        self.stdout.write(f'  - {status_value}: {count}')

        except Exception as e:
            self.stdout.write(self.style.ERROR(f'Error generating sample data: {str(e)}'))
            raise CommandError(f'Failed to generate sample data: {str(e)}')
