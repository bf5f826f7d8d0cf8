import pytest
from io import StringIO
from decimal import Decimal
from django.core.management import call_command

from apps.users.models import User
from apps.families.models import Family, FamilyInvitation
from apps.ledger.models import Account, Transaction
from apps.recurring.models import RecurringPayment


def _run(*args):
    out = StringIO()
    call_command('create_sample_data', *args, stdout=out)
    return out.getvalue()


@pytest.mark.django_db
class TestCreateSampleData:

    def test_creates_family_ledger(self):
        output = _run()

        family = Family.objects.get(name='Demo Family')
        assert family.is_admin(User.objects.get(username='anna'))
        assert family.has_member(User.objects.get(username='pavel'))
        assert User.objects.get(username='admin').is_superuser
        assert Transaction.objects.filter(family=family).count() == 16
        assert RecurringPayment.objects.filter(family=family).count() == 3
        assert FamilyInvitation.objects.filter(family=family).count() == 1
        assert 'Sample data created successfully!' in output

    def test_balances_follow_transactions(self):
        _run()

        # Wallet: 300 - 42 - 63.50 - 36 - 88
        assert Account.objects.get(name='Wallet').balance == Decimal('70.50')

    def test_second_run_skips_ledger(self):
        _run()
        output = _run()

        assert Family.objects.filter(name='Demo Family').count() == 1
        assert Transaction.objects.count() == 16
        assert 'already exists' in output

    def test_clear_rebuilds(self):
        _run()
        _run('--clear')

        assert Family.objects.filter(name='Demo Family').count() == 1
        assert Transaction.objects.count() == 16
