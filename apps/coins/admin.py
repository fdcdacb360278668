from django.contrib import admin

from .models import CoinBalance, CoinTransaction


@admin.register(CoinBalance)
class CoinBalanceAdmin(admin.ModelAdmin):
    list_display = ['user', 'balance', 'total_earned', 'total_redeemed', 'updated_at']
    search_fields = ['user__mobile_number', 'user__email']
    readonly_fields = ['balance', 'total_earned', 'total_redeemed', 'created_at', 'updated_at']
    raw_id_fields = ['user']


@admin.register(CoinTransaction)
class CoinTransactionAdmin(admin.ModelAdmin):
    """
    Read-mostly view of coin transactions.

    Status changes go through the admin API so balances stay in step.
    """

    list_display = ['id', 'user', 'brand', 'type', 'status', 'amount', 'bill_amount', 'created_at']
    list_filter = ['type', 'status', 'created_at']
    search_fields = ['user__mobile_number', 'user__email', 'brand__name', 'transaction_id']
    date_hierarchy = 'created_at'
    raw_id_fields = ['user', 'brand']
    readonly_fields = [
        'type', 'status', 'amount', 'coins_earned', 'coins_redeemed',
        'processed_at', 'transaction_id', 'payment_method', 'payment_amount',
        'payment_processed_at', 'created_at', 'updated_at',
    ]
    fieldsets = (
        ('Transaction', {
            'fields': ('user', 'brand', 'type', 'status', 'amount', 'description'),
        }),
        ('Bill', {
            'fields': ('bill_amount', 'bill_date', 'receipt_url', 'coins_earned', 'coins_redeemed', 'notes'),
        }),
        ('Review', {
            'fields': ('admin_notes', 'processed_at'),
        }),
        ('Payment', {
            'fields': ('transaction_id', 'payment_method', 'payment_amount', 'payment_processed_at'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def has_add_permission(self, request):
        return False
