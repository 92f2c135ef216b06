"""
PDF receipts for booking payments
"""
from io import BytesIO

from django.utils import timezone
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from common.utils import get_setting
from core.constants import PaymentStatus

BRAND = colors.HexColor('#1e40af')
MUTED = colors.HexColor('#64748b')
RULE = colors.HexColor('#e2e8f0')

STATUS_COLORS = {
    PaymentStatus.COMPLETED: colors.HexColor('#10b981'),
    PaymentStatus.PENDING: colors.HexColor('#f59e0b'),
    PaymentStatus.FAILED: colors.HexColor('#ef4444'),
    PaymentStatus.REFUNDED: colors.HexColor('#0ea5e9'),
}


def receipt_number(payment) -> str:
    return f"PR-{payment.id:06d}"


def receipt_filename(payment) -> str:
    guest_name = payment.booking.guest.full_name.replace(' ', '_')
    return f"Receipt_{receipt_number(payment)}_{guest_name}.pdf"


def _money(amount) -> str:
    return f"{get_setting('CURRENCY_SYMBOL', '$')}{amount:,.2f}"


def _styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(
        name='ReceiptTitle',
        parent=styles['Heading1'],
        fontSize=24,
        spaceAfter=10,
        alignment=TA_CENTER,
        textColor=BRAND
    ))
    styles.add(ParagraphStyle(
        name='ReceiptSubtitle',
        parent=styles['Normal'],
        fontSize=12,
        alignment=TA_CENTER,
        textColor=MUTED,
        spaceAfter=20
    ))
    styles.add(ParagraphStyle(
        name='SectionHeader',
        parent=styles['Heading2'],
        fontSize=14,
        textColor=BRAND,
        spaceBefore=15,
        spaceAfter=10
    ))
    styles.add(ParagraphStyle(
        name='AmountLarge',
        parent=styles['Normal'],
        fontSize=28,
        fontName='Helvetica-Bold',
        alignment=TA_CENTER,
        textColor=STATUS_COLORS[PaymentStatus.COMPLETED]
    ))
    styles.add(ParagraphStyle(
        name='Footer',
        parent=styles['Normal'],
        fontSize=9,
        alignment=TA_CENTER,
        textColor=colors.HexColor('#94a3b8')
    ))
    return styles


def _status_badge(payment, styles, width):
    badge = Table(
        [[Paragraph(f"<font color='white'><b>{payment.get_status_display().upper()}</b></font>", styles['Normal'])]],
        colWidths=[110]
    )
    badge.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, -1), STATUS_COLORS.get(payment.status, MUTED)),
        ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('TOPPADDING', (0, 0), (-1, -1), 8),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 8),
        ('LEFTPADDING', (0, 0), (-1, -1), 15),
        ('RIGHTPADDING', (0, 0), (-1, -1), 15),
    ]))
    wrapper = Table([[badge]], colWidths=[width])
    wrapper.setStyle(TableStyle([('ALIGN', (0, 0), (-1, -1), 'CENTER')]))
    return wrapper


def _details_table(rows, col_widths, font_size=10):
    table = Table(rows, colWidths=col_widths)
    table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (-1, -1), 'Helvetica-Bold'),
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica'),
        ('FONTSIZE', (0, 0), (-1, -1), font_size),
        ('TEXTCOLOR', (0, 0), (0, -1), MUTED),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
        ('LINEBELOW', (0, 0), (-1, -2), 0.5, RULE),
        ('LINEBELOW', (0, -1), (-1, -1), 1.5, BRAND),
    ]))
    return table


def generate_payment_receipt_pdf(payment, signed_by_user=None):
    """
    Render the receipt of a booking payment

    Args:
        payment: Payment with booking, guest and room loaded
        signed_by_user: Staff member named on the signature line

    Returns:
        BytesIO buffer containing the PDF
    """
    booking = payment.booking
    guest = booking.guest
    room = booking.room

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=20 * mm,
        leftMargin=20 * mm,
        topMargin=20 * mm,
        bottomMargin=20 * mm,
        title=f"Receipt {receipt_number(payment)}",
    )
    styles = _styles()
    elements = []

    elements.append(Paragraph(get_setting('SITE_NAME', 'StayDesk'), styles['ReceiptTitle']))
    if room.block_id:
        elements.append(Paragraph(room.block.location or room.block.name, styles['ReceiptSubtitle']))
    elements.append(Spacer(1, 10))

    elements.append(Paragraph("PAYMENT RECEIPT", styles['ReceiptTitle']))
    elements.append(Paragraph(f"Receipt No: {receipt_number(payment)}", styles['ReceiptSubtitle']))
    elements.append(_status_badge(payment, styles, doc.width))
    elements.append(Spacer(1, 20))

    elements.append(Paragraph(_money(payment.amount), styles['AmountLarge']))
    elements.append(Paragraph(f"Booking #{booking.id}", styles['ReceiptSubtitle']))

    elements.append(Paragraph("Guest Details", styles['SectionHeader']))
    stay = (
        f"{timezone.localtime(booking.check_in):%d %b %Y %H:%M} - "
        f"{timezone.localtime(booking.check_out):%d %b %Y %H:%M}"
    )
    elements.append(_details_table([
        ['Name', guest.full_name],
        ['Email', guest.email or '-'],
        ['Phone', guest.phone or '-'],
        ['Room', f"{room.number} ({room.room_type.display_name})"],
        ['Stay', stay],
    ], [120, 330]))

    elements.append(Paragraph("Payment Details", styles['SectionHeader']))
    rows = [['Booking Total', _money(booking.total_amount)]]
    for line in booking.booking_services.select_related('service'):
        rows.append([f"  incl. {line.service.name} x{line.quantity}", _money(line.total_price)])
    rows.append(['Method', payment.get_method_display()])
    if payment.transaction_id:
        rows.append(['Transaction ID', payment.transaction_id])
    if payment.paid_at:
        rows.append(['Paid On', f"{timezone.localtime(payment.paid_at):%d %b %Y %H:%M}"])
    rows.append(['Amount Paid', _money(payment.amount)])
    elements.append(_details_table(rows, [150, 300], font_size=11))
    elements.append(Spacer(1, 30))

    if payment.notes:
        elements.append(Paragraph("Notes", styles['SectionHeader']))
        elements.append(Paragraph(payment.notes, styles['Normal']))
        elements.append(Spacer(1, 20))

    if signed_by_user:
        signed_by_name = signed_by_user.full_name
        signed_by_role = signed_by_user.get_role_display()
    else:
        signed_by_name = "Front Desk"
        signed_by_role = "Authorized"
    signatures = Table([
        ['', ''],
        ['_' * 30, '_' * 30],
        [guest.full_name, signed_by_name],
        ['Guest', signed_by_role],
    ], colWidths=[doc.width / 2, doc.width / 2])
    signatures.setStyle(TableStyle([
        ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
        ('FONTSIZE', (0, 0), (-1, -1), 10),
        ('FONTSIZE', (0, 2), (-1, 2), 11),
        ('FONTNAME', (0, 2), (-1, 2), 'Helvetica-Bold'),
        ('TEXTCOLOR', (0, 2), (-1, 2), BRAND),
        ('TEXTCOLOR', (0, 3), (-1, 3), MUTED),
        ('TOPPADDING', (0, 0), (-1, -1), 5),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 5),
        ('TOPPADDING', (0, 2), (-1, 2), 10),
    ]))
    elements.append(signatures)
    elements.append(Spacer(1, 30))

    elements.append(Paragraph(f"Generated on {timezone.localtime():%d %b %Y, %I:%M %p}", styles['Footer']))
    elements.append(Paragraph("This is a computer-generated receipt.", styles['Footer']))

    doc.build(elements)
    buffer.seek(0)
    return buffer
