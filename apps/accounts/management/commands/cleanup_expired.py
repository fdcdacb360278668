"""
Management command to remove expired OTPs and old notifications.

Usage:
    python manage.py cleanup_expired
    python manage.py cleanup_expired --notification-days 60
"""

from django.core.management.base import BaseCommand, CommandError

from apps.accounts.services import cleanup_expired_otps
from apps.notifications.services import delete_old_notifications


class Command(BaseCommand):
    help = 'Delete expired OTP codes and notifications older than the retention window'

    def add_arguments(self, parser):
        parser.add_argument(
            '--notification-days',
            type=int,
            default=30,
            help='Keep notifications newer than this many days (default: 30)',
        )

    def handle(self, *args, **options):
        days = options['notification_days']
        if days < 1:
            raise CommandError('--notification-days must be at least 1')

        otps = cleanup_expired_otps()
        notifications = delete_old_notifications(days=days)

        self.stdout.write(self.style.SUCCESS(
            f'Removed {otps} expired OTPs and {notifications} notifications older than {days} days'
        ))
