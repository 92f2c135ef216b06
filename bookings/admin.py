from django.contrib import admin
from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ['id', 'guest', 'room', 'check_in', 'check_out', 'status', 'total_amount', 'deleted_at']
    list_filter = ['status', 'room__block', 'room__room_type']
    search_fields = ['guest__first_name', 'guest__last_name', 'guest__email', 'room__number']
    date_hierarchy = 'check_in'
    raw_id_fields = ['guest', 'room']

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('guest', 'room')
