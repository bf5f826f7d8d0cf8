import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.families.mixins import FamilyScopedMixin

from .models import Account, Category, Transaction
from .serializers import (
    AccountSerializer,
    CategorySerializer,
    TransactionSerializer,
    TransactionFilterSerializer,
)
from .services import (
    create_transaction,
    update_transaction,
    delete_transaction,
    LedgerServiceError,
    AccountNotFoundError,
    TransactionNotFoundError,
)

logger = logging.getLogger(__name__)


class TransactionPagination(PageNumberPagination):
    """Custom pagination for transactions."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class CategoryViewSet(FamilyScopedMixin, viewsets.ModelViewSet):
    """
    ViewSet for the family's categories.

    Deleting a category keeps its transactions; their category becomes null.
    """

    queryset = Category.objects.all()
    serializer_class = CategorySerializer

    def perform_create(self, serializer):
        category = serializer.save(family=self.family)
        logger.info("Category %s created in family %s", category.name, self.family.id)

    def perform_destroy(self, instance):
        logger.info("Category %s deleted from family %s", instance.name, self.family.id)
        instance.delete()


class AccountViewSet(FamilyScopedMixin, viewsets.ModelViewSet):
    """
    ViewSet for the family's accounts.

    Deleting an account deletes its transactions.
    """

    queryset = Account.objects.all()
    serializer_class = AccountSerializer

    def perform_create(self, serializer):
        account = serializer.save(family=self.family)
        logger.info("Account %s created in family %s", account.name, self.family.id)

    def perform_update(self, serializer):
        try:
            account = serializer.save()
        except AccountNotFoundError as e:
            raise NotFound(str(e))
        logger.info("Account %s updated", account.id)

    def perform_destroy(self, instance):
        logger.info("Account %s deleted from family %s", instance.name, self.family.id)
        instance.delete()

    @extend_schema(responses=TransactionSerializer(many=True))
    @action(detail=True, methods=['get'])
    def transactions(self, request, pk=None):
        """
        List transactions booked on this account.

        GET /api/ledger/accounts/{id}/transactions/
        """
        account = self.get_object()
        transactions = (
            account.transactions
            .select_related('account', 'category', 'created_by')
            .order_by('-date', '-created_at')
        )
        serializer = TransactionSerializer(
            transactions,
            many=True,
            context=self.get_serializer_context()
        )
        return Response(serializer.data)


class TransactionViewSet(FamilyScopedMixin, viewsets.ModelViewSet):
    """
    ViewSet for the family's transactions.

    Creating, updating and deleting go through the balance service so the
    account balance always reflects the transactions.

    list: Paginated; filter with account, category, type, date_from, date_to
    """

    queryset = Transaction.objects.select_related('account', 'category', 'created_by')
    serializer_class = TransactionSerializer
    pagination_class = TransactionPagination

    def get_queryset(self):
        """Apply validated query-string filters to the list."""
        queryset = super().get_queryset()
        if self.action != 'list':
            return queryset

        filter_serializer = TransactionFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if 'account' in params:
            queryset = queryset.filter(account_id=params['account'])
        if 'category' in params:
            queryset = queryset.filter(category_id=params['category'])
        if 'type' in params:
            queryset = queryset.filter(type=params['type'])
        if 'date_from' in params:
            queryset = queryset.filter(date__gte=params['date_from'])
        if 'date_to' in params:
            queryset = queryset.filter(date__lte=params['date_to'])

        return queryset

    @extend_schema(
        parameters=[
            OpenApiParameter('account', str),
            OpenApiParameter('category', str),
            OpenApiParameter('type', str),
            OpenApiParameter('date_from', str),
            OpenApiParameter('date_to', str),
        ]
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            txn = create_transaction(created_by=request.user, **serializer.validated_data)
        except LedgerServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = self.get_serializer(txn)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            txn = update_transaction(transaction_id=instance.id, **serializer.validated_data)
        except TransactionNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except LedgerServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = self.get_serializer(txn)
        return Response(output_serializer.data)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        try:
            delete_transaction(transaction_id=instance.id)
        except TransactionNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
