"""
Management command to seed the default GlobalConfig entries.

Usage:
    python manage.py initialize_config
    python manage.py initialize_config --clear-cache
"""

from django.core.management.base import BaseCommand

from apps.configuration.services import initialize_defaults, clear_cache


class Command(BaseCommand):
    help = 'Create default runtime configuration entries (existing keys are kept)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear-cache',
            action='store_true',
            help='Drop cached config values afterwards',
        )

    def handle(self, *args, **options):
        created = initialize_defaults()
        self.stdout.write(self.style.SUCCESS(f'Default configs initialized ({created} created)'))

        if options['clear_cache']:
            clear_cache()
            self.stdout.write('Config cache cleared')
