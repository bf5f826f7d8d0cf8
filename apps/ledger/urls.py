from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import AccountViewSet, CategoryViewSet, TransactionViewSet

app_name = 'ledger'

router = DefaultRouter()
router.register(r'categories', CategoryViewSet, basename='category')
router.register(r'accounts', AccountViewSet, basename='account')
router.register(r'transactions', TransactionViewSet, basename='transaction')

urlpatterns = [
    path('', include(router.urls)),
]
