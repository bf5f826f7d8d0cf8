"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data [--clear]

This creates:
- 3 users (admin, anna, pavel)
- 1 family (anna as admin, pavel as member) with default categories
- 3 accounts with two months of transactions
- Recurring payments (rent, insurance, mortgage)
- A pending code-only invitation
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone
from decimal import Decimal
from datetime import timedelta

from apps.users.models import User
from apps.families.models import Family, FamilyMembership, FamilyRole
from apps.families.services import create_family, create_invitation, get_family_for_user
from apps.ledger.models import Account, AccountType, Category, TransactionType
from apps.ledger.services import create_transaction
from apps.recurring.models import Frequency, RecurringPaymentType
from apps.recurring.services import create_recurring_payment

SAMPLE_USERNAMES = ['admin', 'anna', 'pavel']
SAMPLE_FAMILY_NAME = 'Demo Family'

# (days ago, type, amount, category, account, description, booked by)
SAMPLE_TRANSACTIONS = [
    (58, TransactionType.INCOME, '3200.00', 'Salary', 'checking', 'Monthly salary', 'anna'),
    (56, TransactionType.EXPENSE, '1500.00', 'Housing', 'checking', 'Rent', 'anna'),
    (52, TransactionType.EXPENSE, '84.20', 'Groceries', 'checking', 'Weekly shopping', 'pavel'),
    (47, TransactionType.EXPENSE, '42.00', 'Transport', 'cash', 'Bus passes', 'pavel'),
    (45, TransactionType.EXPENSE, '96.75', 'Groceries', 'checking', 'Weekly shopping', 'anna'),
    (40, TransactionType.INCOME, '650.00', 'Freelance', 'checking', 'Website project', 'pavel'),
    (38, TransactionType.EXPENSE, '63.50', 'Cafes & restaurants', 'cash', 'Dinner out', 'anna'),
    (31, TransactionType.TRANSFER, '500.00', None, 'checking', 'Move to savings', 'anna'),
    (28, TransactionType.INCOME, '3200.00', 'Salary', 'checking', 'Monthly salary', 'anna'),
    (26, TransactionType.EXPENSE, '1500.00', 'Housing', 'checking', 'Rent', 'anna'),
    (21, TransactionType.EXPENSE, '118.40', 'Groceries', 'checking', 'Weekly shopping', 'pavel'),
    (17, TransactionType.EXPENSE, '145.00', 'Utilities', 'checking', 'Electricity', 'anna'),
    (12, TransactionType.EXPENSE, '36.00', 'Entertainment', 'cash', 'Cinema', 'pavel'),
    (9, TransactionType.EXPENSE, '210.30', 'Groceries', 'checking', 'Big shopping', 'anna'),
    (5, TransactionType.EXPENSE, '88.00', 'Cafes & restaurants', 'cash', 'Birthday lunch', 'pavel'),
    (2, TransactionType.EXPENSE, '54.90', 'Transport', 'checking', 'Fuel', 'anna'),
]


class Command(BaseCommand):
    help = 'Create sample data for trying out the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete the sample users and their family before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing sample data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()

        family = get_family_for_user(users['anna'])
        if family is not None:
            self.stdout.write(self.style.WARNING(
                f'  {family.name} already exists, skipping ledger data (use --clear to rebuild)'
            ))
        else:
            family = self.create_family(users)
            accounts = self.create_accounts(family)
            self.create_transactions(family, users, accounts)
            self.create_recurring_payments(family, users)
            invitation = create_invitation(family_id=family.id, invited_by=users['anna'])
            self.stdout.write(f'  Invitation code: {invitation.invitation_code}')

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin / admin123 (superuser, no family)')
        self.stdout.write('  anna / password123 (family admin)')
        self.stdout.write('  pavel / password123 (family member)')

    def clear_data(self):
        """Delete the sample users and every family they belong to."""
        family_ids = FamilyMembership.objects.filter(
            user__username__in=SAMPLE_USERNAMES
        ).values('family_id')
        families = Family.objects.filter(id__in=family_ids)
        # Ledger rows and recurring payments cascade with the family
        deleted, _ = families.delete()
        deleted_users, _ = User.objects.filter(username__in=SAMPLE_USERNAMES).delete()
        self.stdout.write(f"  Removed {deleted + deleted_users} rows")

    def create_users(self):
        """Create test users."""
        self.stdout.write('  Creating users...')

        admin, _ = User.objects.get_or_create(
            username='admin',
            defaults={
                'first_name': 'Admin',
                'is_staff': True,
                'is_superuser': True,
            }
        )
        admin.set_password('admin123')
        admin.save()

        anna, _ = User.objects.get_or_create(
            username='anna',
            defaults={'first_name': 'Anna', 'last_name': 'Dvorak'}
        )
        anna.set_password('password123')
        anna.save()

        pavel, _ = User.objects.get_or_create(
            username='pavel',
            defaults={'first_name': 'Pavel', 'last_name': 'Dvorak'}
        )
        pavel.set_password('password123')
        pavel.save()

        return {
            'admin': admin,
            'anna': anna,
            'pavel': pavel,
        }

    def create_family(self, users):
        """Create the demo family with anna as admin and pavel as member."""
        self.stdout.write('  Creating family...')

        family = create_family(name=SAMPLE_FAMILY_NAME, creator=users['anna'])
        FamilyMembership.objects.get_or_create(
            user=users['pavel'],
            defaults={'family': family, 'role': FamilyRole.MEMBER},
        )
        return family

    def create_accounts(self, family):
        """Create accounts. Balances start where the sample history begins."""
        self.stdout.write('  Creating accounts...')

        return {
            'checking': Account.objects.create(
                family=family,
                name='Main checking',
                type=AccountType.CHECKING,
                balance=Decimal('1200.00'),
                color='#3b82f6',
            ),
            'savings': Account.objects.create(
                family=family,
                name='Savings',
                type=AccountType.SAVINGS,
                balance=Decimal('5000.00'),
                color='#10b981',
            ),
            'cash': Account.objects.create(
                family=family,
                name='Wallet',
                type=AccountType.CASH,
                balance=Decimal('300.00'),
                color='#f59e0b',
            ),
        }

    def create_transactions(self, family, users, accounts):
        """Book two months of history through the balance service."""
        self.stdout.write('  Creating transactions...')

        categories = {category.name: category for category in Category.objects.filter(family=family)}
        today = timezone.localdate()

        for days_ago, txn_type, amount, category_name, account_key, description, username in SAMPLE_TRANSACTIONS:
            create_transaction(
                account=accounts[account_key],
                created_by=users[username],
                amount=Decimal(amount),
                date=today - timedelta(days=days_ago),
                description=description,
                type=txn_type,
                category=categories.get(category_name),
            )

    def create_recurring_payments(self, family, users):
        """Create recurring payments."""
        self.stdout.write('  Creating recurring payments...')

        today = timezone.localdate()
        start = today - timedelta(days=90)

        create_recurring_payment(
            family=family,
            created_by=users['anna'],
            name='Rent',
            amount=Decimal('1500.00'),
            frequency=Frequency.MONTHLY,
            start_date=start,
            color='#8b5cf6',
        )
        create_recurring_payment(
            family=family,
            created_by=users['pavel'],
            name='Car insurance',
            amount=Decimal('420.00'),
            frequency=Frequency.SEMI_ANNUAL,
            start_date=start + timedelta(days=20),
            color='#06b6d4',
        )
        create_recurring_payment(
            family=family,
            created_by=users['anna'],
            name='Mortgage instalment',
            amount=Decimal('2400.00'),
            frequency=Frequency.ANNUAL,
            start_date=start + timedelta(days=45),
            type=RecurringPaymentType.LOAN,
            color='#ef4444',
        )
