"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data

This creates:
- Default runtime configuration
- A super admin and a regular admin (portal accounts)
- 3 brand categories and 5 partner brands
- 3 active app users with welcome bonuses
- Earn requests in every state and one redeem request waiting for review
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone
from decimal import Decimal

from apps.accounts.models import User, UserStatus
from apps.accounts.services import create_user, update_payment_details
from apps.admins.models import Admin, AdminRole
from apps.admins.services import create_admin
from apps.brands.models import Brand, BrandCategory
from apps.brands.services import create_brand, create_category
from apps.coins.models import CoinBalance, CoinTransaction
from apps.coins.services import (
    approve_earn,
    create_earn_request,
    create_redeem_request,
    create_welcome_bonus,
    reject_earn,
)
from apps.configuration.services import initialize_defaults
from apps.notifications.models import Notification


SAMPLE_MOBILES = ['9000000001', '9000000002', '9000000003']


class Command(BaseCommand):
    help = 'Create sample data for trying out the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing sample data before creating it again',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        created = initialize_defaults()
        self.stdout.write(f'  {created} config entries created')

        self.create_admins()
        brands = self.create_brands()
        users = self.create_users()
        self.create_transactions(users, brands)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Admin portal accounts:')
        self.stdout.write('  super@clubcorra.com / SuperAdmin123 (super admin)')
        self.stdout.write('  admin@clubcorra.com / Admin12345')
        self.stdout.write('App users (password: Password123):')
        for mobile in SAMPLE_MOBILES:
            self.stdout.write(f'  {mobile}')

    def clear_data(self):
        """Remove sample users, their coins and the sample brands."""
        sample_users = User.objects.filter(mobile_number__in=SAMPLE_MOBILES)
        Notification.objects.filter(user__in=sample_users).delete()
        CoinTransaction.objects.filter(user__in=sample_users).delete()
        CoinBalance.objects.filter(user__in=sample_users).delete()
        sample_users.delete()
        Brand.objects.filter(transactions__isnull=True).delete()
        BrandCategory.objects.filter(brands__isnull=True).delete()
        Admin.objects.filter(email__in=['super@clubcorra.com', 'admin@clubcorra.com']).delete()

    def create_admins(self):
        self.stdout.write('  Creating admins...')

        accounts = [
            ('super@clubcorra.com', 'SuperAdmin123', 'Sam', 'Super', AdminRole.SUPER_ADMIN),
            ('admin@clubcorra.com', 'Admin12345', 'Alex', 'Reviewer', AdminRole.ADMIN),
        ]
        for email, password, first_name, last_name, role in accounts:
            if Admin.objects.filter(email=email).exists():
                continue
            create_admin(
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
                role=role,
            )

    def create_brands(self):
        """Create categories and partner brands."""
        self.stdout.write('  Creating brands...')

        categories = {}
        for name, icon, color in [
            ('Food & Drink', 'utensils', '#E4572E'),
            ('Fashion', 'shirt', '#6C5CE7'),
            ('Electronics', 'plug', '#17BEBB'),
        ]:
            category = BrandCategory.objects.filter(name=name).first()
            categories[name] = category or create_category(name=name, icon=icon, color=color)

        brands_data = [
            ('Cafe Corra', 'Food & Drink', Decimal('10'), Decimal('30'), 2000),
            ('Spice Route', 'Food & Drink', Decimal('8'), Decimal('25'), 1500),
            ('Style Street', 'Fashion', Decimal('5'), Decimal('20'), 1000),
            ('Thread Theory', 'Fashion', Decimal('6'), Decimal('15'), 800),
            ('Gadget Garage', 'Electronics', Decimal('2'), Decimal('10'), 500),
        ]

        brands = {}
        for name, category, earning, redemption, cap in brands_data:
            brand = Brand.objects.filter(name=name).first()
            if brand is None:
                brand = create_brand(
                    name=name,
                    description=f'{name} partner outlet',
                    category_id=categories[category].id,
                    earning_percentage=earning,
                    redemption_percentage=redemption,
                    brandwise_max_cap=cap,
                )
            brands[name] = brand

        return brands

    def create_users(self):
        """Create active app users and grant their welcome bonus."""
        self.stdout.write('  Creating users...')

        people = [('Asha', 'Rao'), ('Vikram', 'Singh'), ('Meera', 'Iyer')]
        users = []
        for mobile, (first_name, last_name) in zip(SAMPLE_MOBILES, people):
            user = User.objects.filter(mobile_number=mobile).first()
            if user is None:
                user = create_user(
                    mobile_number=mobile,
                    first_name=first_name,
                    last_name=last_name,
                    email=f'{first_name.lower()}@example.com',
                    password='Password123',
                    status=UserStatus.ACTIVE,
                )
                update_payment_details(user=user, upi_id=f'{mobile}@upi')
                create_welcome_bonus(user_id=user.id)
            users.append(user)

        return users

    def create_transactions(self, users, brands):
        """Earn requests in each state plus one pending redemption."""
        self.stdout.write('  Creating transactions...')

        today = timezone.localdate()
        asha, vikram, meera = users

        approved = create_earn_request(
            user=asha,
            brand_id=brands['Cafe Corra'].id,
            bill_amount=Decimal('1250.00'),
            bill_date=today,
            notes='Team lunch',
        )
        approve_earn(transaction_id=approved.id, admin_notes='Receipt verified')

        rejected = create_earn_request(
            user=vikram,
            brand_id=brands['Style Street'].id,
            bill_amount=Decimal('3200.00'),
            bill_date=today,
        )
        reject_earn(transaction_id=rejected.id, admin_notes='Receipt is unreadable')

        create_earn_request(
            user=meera,
            brand_id=brands['Gadget Garage'].id,
            bill_amount=Decimal('15999.00'),
            bill_date=today,
            notes='New headphones',
        )

        create_redeem_request(
            user=vikram,
            brand_id=brands['Spice Route'].id,
            bill_amount=Decimal('600.00'),
            coins_to_redeem=60,
            bill_date=today,
        )
