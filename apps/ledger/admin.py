# ==========================================
# apps/ledger/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html

from .models import Account, Category, Transaction, TransactionType


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    """Admin interface for Categories."""

    list_display = ['name', 'type', 'family', 'budget_limit', 'color_swatch']
    list_filter = ['type']
    search_fields = ['name', 'family__name']
    readonly_fields = ['created_at', 'updated_at']

    def color_swatch(self, obj):
        """Show the category color."""
        if not obj.color:
            return '-'
        return format_html(
            '<span style="background: {}; padding: 2px 12px; border-radius: 4px;">&nbsp;</span>',
            obj.color
        )
    color_swatch.short_description = 'Color'


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    """
    Admin interface for Accounts.

    Balances edited here bypass the transaction history, the same as a
    manual correction through the API.
    """

    list_display = ['name', 'type', 'family', 'balance', 'currency', 'created_at']
    list_filter = ['type', 'currency']
    search_fields = ['name', 'family__name']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """Admin interface for Transactions (read-mostly; balances are not adjusted here)."""

    list_display = [
        'description',
        'type_badge',
        'amount',
        'account',
        'category',
        'created_by',
        'date',
    ]
    list_filter = ['type', 'date']
    search_fields = ['description', 'account__name', 'created_by__username']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'date'
    ordering = ['-date']

    def type_badge(self, obj):
        """Display transaction type as colored badge."""
        colors = {
            TransactionType.INCOME: '#10b981',
            TransactionType.EXPENSE: '#ef4444',
            TransactionType.TRANSFER: '#6366f1',
        }
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            colors.get(obj.type, '#ccc'), obj.get_type_display()
        )
    type_badge.short_description = 'Type'
