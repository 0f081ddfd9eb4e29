# app/core/management/commands/wait_for_db.py
import time

from django.core.management.base import BaseCommand, CommandError
from django.db import connections
from django.db.utils import OperationalError


class Command(BaseCommand):
    """Django command to wait for the default database to accept connections"""
    help = 'Wait until the database is available'

    def add_arguments(self, parser):
        parser.add_argument(
            '--retries',
            type=int,
            default=30,
            help='Number of connection attempts (default: 30)'
        )
        parser.add_argument(
            '--interval',
            type=float,
            default=2,
            help='Seconds between attempts (default: 2)'
        )

    def handle(self, *args, **options):
        self.stdout.write('Waiting for database...')

        retries = options['retries']
        for attempt in range(1, retries + 1):
            try:
                connections['default'].ensure_connection()
                self.stdout.write(self.style.SUCCESS('Database is available!'))
                return
            except OperationalError:
                self.stdout.write(
                    f"Database unavailable, waiting {options['interval']} seconds... ({attempt}/{retries})"
                )
                time.sleep(options['interval'])

        raise CommandError('Could not connect to the database!')
