from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.families.permissions import HasFamily
from apps.families.services import get_family_for_user

from .analytics import FamilyAnalytics
from .serializers import (
    # Input serializers
    PeriodQuerySerializer,
    # Response serializers
    StatsResponseSerializer,
    DashboardResponseSerializer,
    BudgetResponseSerializer,
)


PERIOD_PARAMETERS = [
    OpenApiParameter('period', OpenApiTypes.STR, description='Month period (YYYY-MM)'),
    OpenApiParameter('start_date', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD)'),
    OpenApiParameter('end_date', OpenApiTypes.DATE, description='End date (YYYY-MM-DD)'),
]


def _period(request):
    query_serializer = PeriodQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data
    return params['start_date'], params['end_date']


@extend_schema(
    responses={200: StatsResponseSerializer},
    description="All-time counts and totals for the caller's family.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, HasFamily])
def stats(request):
    """Family statistics - thin HTTP handler."""
    family = get_family_for_user(request.user)
    data = FamilyAnalytics.stats(family)
    return Response(StatsResponseSerializer(data).data)


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={200: DashboardResponseSerializer},
    description="Balance, income, expenses, savings rate and recent activity for a period (default: current month).",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, HasFamily])
def dashboard(request):
    """Dashboard summary - thin HTTP handler."""
    start_date, end_date = _period(request)
    family = get_family_for_user(request.user)

    data = FamilyAnalytics.dashboard(family, start_date, end_date)
    data.update(start_date=start_date, end_date=end_date)
    return Response(DashboardResponseSerializer(data).data)


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={200: BudgetResponseSerializer},
    description="Spending against each expense category's budget limit for a period (default: current month).",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, HasFamily])
def budget(request):
    """Budget usage - thin HTTP handler."""
    start_date, end_date = _period(request)
    family = get_family_for_user(request.user)

    data = FamilyAnalytics.budget(family, start_date, end_date)
    data.update(start_date=start_date, end_date=end_date)
    return Response(BudgetResponseSerializer(data).data)
