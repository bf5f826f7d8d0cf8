from rest_framework import serializers

from apps.families.mixins import FamilyScopedRelatedField

from .models import Account, Category, Transaction, TransactionType
from .services import update_account


# =============================================================================
# Input Serializers
# =============================================================================

class TransactionFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for transaction filtering.

    Query Parameters:
        account (UUID): Filter by account ID
        category (UUID): Filter by category ID
        type (str): expense, income or transfer
        date_from (date): Transactions on or after this date
        date_to (date): Transactions on or before this date
    """

    account = serializers.UUIDField(required=False)
    category = serializers.UUIDField(required=False)
    type = serializers.ChoiceField(choices=TransactionType.choices, required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        """Validate date range."""
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({
                'date_to': 'End date must be after start date'
            })

        return attrs


# =============================================================================
# Model Serializers
# =============================================================================

class CategorySerializer(serializers.ModelSerializer):
    """Serializer for categories."""

    class Meta:
        model = Category
        fields = [
            'id',
            'name',
            'type',
            'color',
            'icon',
            'budget_limit',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class AccountSerializer(serializers.ModelSerializer):
    """Serializer for accounts. Balance is writable for manual corrections."""

    class Meta:
        model = Account
        fields = [
            'id',
            'name',
            'type',
            'balance',
            'currency',
            'color',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def update(self, instance, validated_data):
        return update_account(account_id=instance.id, **validated_data)


class TransactionSerializer(serializers.ModelSerializer):
    """Serializer for transactions."""

    account = FamilyScopedRelatedField(queryset=Account.objects.all())
    category = FamilyScopedRelatedField(
        queryset=Category.objects.all(),
        required=False,
        allow_null=True
    )
    account_name = serializers.CharField(source='account.name', read_only=True)
    category_name = serializers.CharField(source='category.name', read_only=True, default=None)
    created_by_name = serializers.SerializerMethodField()

    class Meta:
        model = Transaction
        fields = [
            'id',
            'amount',
            'date',
            'description',
            'type',
            'category',
            'category_name',
            'account',
            'account_name',
            'created_by',
            'created_by_name',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_by', 'created_at', 'updated_at']

    def get_created_by_name(self, obj):
        return obj.get_created_by_name()

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError('Amount must be greater than zero.')
        return value
