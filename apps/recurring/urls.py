from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import RecurringPaymentViewSet, month_calendar

app_name = 'recurring'

router = DefaultRouter()
router.register(r'payments', RecurringPaymentViewSet, basename='payment')

urlpatterns = [
    path('calendar/', month_calendar, name='calendar'),
    path('', include(router.urls)),
]
