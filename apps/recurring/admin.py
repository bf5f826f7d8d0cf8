from django.contrib import admin

from .models import RecurringPayment


@admin.register(RecurringPayment)
class RecurringPaymentAdmin(admin.ModelAdmin):
    """Admin interface for Recurring Payments."""

    list_display = ['name', 'amount', 'frequency', 'type', 'start_date', 'family', 'created_by']
    list_filter = ['frequency', 'type']
    search_fields = ['name', 'family__name', 'created_by__username']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'start_date'
