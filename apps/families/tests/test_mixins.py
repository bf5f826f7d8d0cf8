import pytest
from rest_framework import serializers

from apps.families.mixins import FamilyScopedRelatedField
from apps.families.services import create_family
from apps.ledger.models import Account, AccountType


class AccountChoiceSerializer(serializers.Serializer):
    account = FamilyScopedRelatedField(queryset=Account.objects.all())


@pytest.mark.django_db
class TestFamilyScopedRelatedField:

    @pytest.fixture
    def accounts(self, family, outsider):
        neighbours = create_family(name='Neighbours', creator=outsider)
        own = Account.objects.create(family=family, name='Joint', type=AccountType.CHECKING)
        foreign = Account.objects.create(family=neighbours, name='Theirs', type=AccountType.CASH)
        return own, foreign

    def test_own_family_account_resolves(self, family, accounts):
        own, _ = accounts
        serializer = AccountChoiceSerializer(data={'account': str(own.id)}, context={'family': family})

        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data['account'] == own

    def test_other_family_account_rejected(self, family, accounts):
        _, foreign = accounts
        serializer = AccountChoiceSerializer(data={'account': str(foreign.id)}, context={'family': family})

        assert not serializer.is_valid()
        assert 'account' in serializer.errors

    def test_without_family_nothing_resolves(self, accounts):
        own, _ = accounts
        serializer = AccountChoiceSerializer(data={'account': str(own.id)})

        assert not serializer.is_valid()
