from django.contrib import admin
from .models import Payment, SecurityDeposit


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['booking', 'amount', 'method', 'status', 'transaction_id', 'paid_at', 'created_at']
    list_filter = ['status', 'method']
    search_fields = ['transaction_id', 'booking__guest__first_name', 'booking__guest__last_name',
                     'booking__room__number']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(SecurityDeposit)
class SecurityDepositAdmin(admin.ModelAdmin):
    list_display = ['booking', 'amount', 'status', 'refund_amount', 'deduction_amount', 'processed_by', 'paid_at']
    list_filter = ['status', 'method']
    search_fields = ['transaction_id', 'booking__guest__first_name', 'booking__guest__last_name']
    readonly_fields = ['created_at', 'updated_at']
