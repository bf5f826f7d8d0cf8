from datetime import MINYEAR, MAXYEAR

from rest_framework import serializers

from apps.ledger.serializers import TransactionSerializer

from .models import RecurringPayment


# =============================================================================
# Input Serializers
# =============================================================================

class OccurrenceRangeSerializer(serializers.Serializer):
    """Validate the optional range of the occurrences endpoint."""

    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        start_date = attrs.get('start_date')
        end_date = attrs.get('end_date')

        if start_date and end_date and start_date > end_date:
            raise serializers.ValidationError({
                'end_date': 'End date must be after start date'
            })

        return attrs


class UpcomingQuerySerializer(serializers.Serializer):
    days = serializers.IntegerField(required=False, default=30, min_value=1, max_value=366)


class CalendarQuerySerializer(serializers.Serializer):
    """
    Validate the calendar month.

    Query Parameters:
        month (str): Month in YYYY-MM format (default: current month)
    """

    month = serializers.RegexField(
        r'^\d{4}-(0[1-9]|1[0-2])$',
        required=False,
        error_messages={'invalid': 'Month must be in YYYY-MM format.'}
    )

    def validate_month(self, value):
        if not MINYEAR <= int(value[:4]) <= MAXYEAR:
            raise serializers.ValidationError(f'Year must be between {MINYEAR} and {MAXYEAR}.')
        return value


# =============================================================================
# Output Serializers
# =============================================================================

class RecurringPaymentSerializer(serializers.ModelSerializer):
    """Serializer for recurring payments."""

    created_by_name = serializers.SerializerMethodField()

    class Meta:
        model = RecurringPayment
        fields = [
            'id',
            'name',
            'amount',
            'frequency',
            'start_date',
            'type',
            'color',
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


class OccurrencesResponseSerializer(serializers.Serializer):
    payment = serializers.UUIDField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    dates = serializers.ListField(child=serializers.DateField())


class UpcomingPaymentSerializer(serializers.Serializer):
    payment = RecurringPaymentSerializer()
    date = serializers.DateField()
    days_until = serializers.IntegerField()


class CalendarDaySerializer(serializers.Serializer):
    date = serializers.DateField()
    payments = RecurringPaymentSerializer(many=True)
    transactions = TransactionSerializer(many=True)


class CalendarTotalsSerializer(serializers.Serializer):
    scheduled = serializers.DecimalField(max_digits=14, decimal_places=2)
    income = serializers.DecimalField(max_digits=14, decimal_places=2)
    expenses = serializers.DecimalField(max_digits=14, decimal_places=2)


class CalendarSerializer(serializers.Serializer):
    month = serializers.CharField()
    leading_blank_days = serializers.IntegerField()
    days = CalendarDaySerializer(many=True)
    totals = CalendarTotalsSerializer()
