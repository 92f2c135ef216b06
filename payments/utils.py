"""
Utilities for payments - CSV export
"""
import csv
from django.http import HttpResponse
from django.utils import timezone


def export_payments_csv(payments, filename="payments.csv"):
    """
    Export payments to CSV

    Args:
        payments: QuerySet of Payment objects (booking, guest and room selected)

    Returns:
        HttpResponse with file
    """
    response = HttpResponse(content_type='text/csv')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'

    writer = csv.writer(response)
    writer.writerow(['Payment ID', 'Booking', 'Guest', 'Room', 'Amount', 'Method', 'Status',
                     'Transaction ID', 'Paid At', 'Created'])

    for payment in payments:
        booking = payment.booking
        writer.writerow([
            payment.id,
            booking.id,
            booking.guest.full_name,
            booking.room.number,
            str(payment.amount),
            payment.get_method_display(),
            payment.get_status_display(),
            payment.transaction_id,
            timezone.localtime(payment.paid_at).strftime('%Y-%m-%d %H:%M') if payment.paid_at else '',
            timezone.localtime(payment.created_at).strftime('%Y-%m-%d'),
        ])

    return response
