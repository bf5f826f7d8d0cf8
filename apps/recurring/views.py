from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django.utils import timezone
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.families.mixins import FamilyScopedMixin
from apps.families.permissions import HasFamily
from apps.families.services import get_family_for_user

from .models import RecurringPayment
from .serializers import (
    RecurringPaymentSerializer,
    OccurrenceRangeSerializer,
    OccurrencesResponseSerializer,
    UpcomingQuerySerializer,
    UpcomingPaymentSerializer,
    CalendarQuerySerializer,
    CalendarSerializer,
)
from .services import (
    create_recurring_payment,
    update_recurring_payment,
    delete_recurring_payment,
    get_payment_occurrences,
    get_upcoming_payments,
    build_month_calendar,
    one_year_later,
    RecurringPaymentNotFoundError,
    InvalidDateRangeError,
)


class RecurringPaymentViewSet(FamilyScopedMixin, viewsets.ModelViewSet):
    """
    ViewSet for the family's recurring payments.

    Payments are templates: they show up on matching dates and are never
    executed against an account.
    """

    queryset = RecurringPayment.objects.select_related('created_by')
    serializer_class = RecurringPaymentSerializer

    def perform_create(self, serializer):
        serializer.instance = create_recurring_payment(
            family=self.family,
            created_by=self.request.user,
            **serializer.validated_data
        )

    def perform_update(self, serializer):
        serializer.instance = update_recurring_payment(
            payment_id=serializer.instance.id,
            **serializer.validated_data
        )

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        try:
            delete_recurring_payment(payment_id=instance.id)
        except RecurringPaymentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        parameters=[OccurrenceRangeSerializer],
        responses=OccurrencesResponseSerializer,
    )
    @action(detail=True, methods=['get'])
    def occurrences(self, request, pk=None):
        """
        Dates this payment falls on.

        GET /api/recurring/payments/{id}/occurrences/?start_date=...&end_date=...
        """
        payment = self.get_object()
        query = OccurrenceRangeSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        start_date = query.validated_data.get('start_date') or timezone.localdate()

        try:
            end_date = query.validated_data.get('end_date') or one_year_later(start_date)
            dates = get_payment_occurrences(
                payment=payment,
                start_date=start_date,
                end_date=end_date
            )
        except InvalidDateRangeError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output = OccurrencesResponseSerializer({
            'payment': payment.id,
            'start_date': start_date,
            'end_date': end_date,
            'dates': dates,
        })
        return Response(output.data)

    @extend_schema(
        parameters=[UpcomingQuerySerializer],
        responses=UpcomingPaymentSerializer(many=True),
    )
    @action(detail=False, methods=['get'])
    def upcoming(self, request):
        """
        Next occurrence of each payment within the coming days.

        GET /api/recurring/payments/upcoming/?days=30
        """
        query = UpcomingQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        upcoming = get_upcoming_payments(family=self.family, days=query.validated_data['days'])
        serializer = UpcomingPaymentSerializer(upcoming, many=True)
        return Response(serializer.data)


@extend_schema(
    parameters=[
        OpenApiParameter('month', str, description='Month in YYYY-MM format (default: current month)'),
    ],
    responses=CalendarSerializer,
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, HasFamily])
def month_calendar(request):
    """
    Month grid of scheduled payments and recorded transactions.

    GET /api/recurring/calendar/?month=YYYY-MM
    """
    query = CalendarQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    month = query.validated_data.get('month')
    if month:
        year, month_number = (int(part) for part in month.split('-'))
    else:
        today = timezone.localdate()
        year, month_number = today.year, today.month

    family = get_family_for_user(request.user)
    data = build_month_calendar(family=family, year=year, month=month_number)
    return Response(CalendarSerializer(data).data)
