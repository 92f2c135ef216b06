"""
Guest service - guests are users with the GUEST role.

Covers creation with a temporary password, CSV import, deletion guard and
the figures shown on the guest list and guest detail pages.
"""
import csv
import io
import secrets
import string
from collections import OrderedDict
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db import transaction, IntegrityError
from django.db.models import Sum, Count, Q
from django.utils import timezone

from core.constants import UserRole, BookingStatus, PaymentStatus, DepositStatus, DefaultLimits
from core.dto import GuestDTO
from core.exceptions import NotFoundError, ValidationError, BusinessLogicError
from core.services import BaseService
from core.validators import GuestValidator
from bookings import rules
from bookings.models import Booking
from payments.models import Payment, SecurityDeposit
from addons.models import BookingService
from notifications.services import send_welcome

User = get_user_model()

PASSWORD_ALPHABET = string.ascii_letters + string.digits

# Accepted spellings of the CSV headers
COLUMN_ALIASES = {
    'first_name': ['firstName', 'firstname', 'first_name', 'First Name', 'FirstName'],
    'last_name': ['lastName', 'lastname', 'last_name', 'Last Name', 'LastName'],
    'email': ['email', 'Email', 'EMAIL', 'e-mail'],
    'phone': ['phone', 'Phone', 'PHONE', 'phoneNumber', 'phone_number'],
}

TEMPLATE_HEADER = ['firstName', 'lastName', 'email', 'phone']


def generate_temporary_password(length=DefaultLimits.TEMP_PASSWORD_LENGTH) -> str:
    return ''.join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


def _column(row: dict, field: str) -> str:
    for alias in COLUMN_ALIASES[field]:
        value = row.get(alias)
        if value:
            return value.strip()
    return ''


def _money(value) -> Decimal:
    return value if value is not None else Decimal('0')


class GuestService(BaseService):
    """Service for guest records"""

    def guests(self):
        return User.objects.filter(role=UserRole.GUEST)

    def get_guest(self, guest_id: int):
        guest = self.guests().filter(id=guest_id).first()
        if not guest:
            raise NotFoundError(resource_type="Guest", resource_id=guest_id)
        return guest

    def search(self, q=None):
        queryset = self.guests().annotate(booking_count=Count('bookings', filter=Q(bookings__deleted_at__isnull=True)))
        if q:
            queryset = queryset.filter(
                Q(first_name__icontains=q) | Q(last_name__icontains=q) |
                Q(email__icontains=q) | Q(phone__icontains=q) | Q(id_card__icontains=q)
            )
        return queryset.order_by('-date_joined')

    def _unique_username(self, dto: GuestDTO) -> str:
        base = (dto.email.split('@')[0] if dto.email else f"{dto.first_name}.{dto.last_name}").lower()
        base = ''.join(ch for ch in base if ch.isalnum() or ch in '._-')[:30] or 'guest'
        username = base
        suffix = 1
        while User.objects.filter(username=username).exists():
            suffix += 1
            username = f"{base}{suffix}"
        return username

    def _validate(self, dto: GuestDTO, exclude_id=None):
        GuestValidator.validate_names(dto.first_name, dto.last_name)
        email = (dto.email or '').strip().lower()
        GuestValidator.validate_email(email)
        if email:
            taken = User.objects.filter(email__iexact=email)
            if exclude_id:
                taken = taken.exclude(id=exclude_id)
            if taken.exists():
                raise ValidationError(f"Email already exists - {email}", code="DUPLICATE_EMAIL")
        return email

    def create_guest(self, dto: GuestDTO, user=None):
        """
        Create a guest with a generated temporary password.

        Returns:
            (guest, temporary_password)
        """
        if user is not None:
            self.require_staff(user, "create guests")
        email = self._validate(dto)
        password = generate_temporary_password()

        with transaction.atomic():
            guest = User(
                username=self._unique_username(dto),
                first_name=dto.first_name.strip(),
                last_name=dto.last_name.strip(),
                email=email or None,
                phone=(dto.phone or '').strip(),
                address=(dto.address or '').strip(),
                gender=dto.gender or '',
                id_card=(dto.id_card or '').strip(),
                role=UserRole.GUEST,
            )
            guest.set_password(password)
            guest.save()
            if guest.email:
                send_welcome(guest, password)
        self.log_info("Guest created", guest_id=guest.id)
        return guest, password

    def update_guest(self, guest, dto: GuestDTO, user):
        self.require_staff(user, "edit guests")
        email = self._validate(dto, exclude_id=guest.id)
        guest.first_name = dto.first_name.strip()
        guest.last_name = dto.last_name.strip()
        guest.email = email or None
        guest.phone = (dto.phone or '').strip()
        guest.address = (dto.address or '').strip()
        guest.gender = dto.gender or ''
        guest.id_card = (dto.id_card or '').strip()
        guest.save()
        self.log_info("Guest updated", guest_id=guest.id, user=user.username)
        return guest

    def import_guests(self, csv_file, user=None) -> dict:
        """
        Create guests from a CSV upload.

        Each row needs firstName and lastName; email and phone are optional.
        Bad rows are reported and skipped, good rows are created.

        Returns:
            {'created': n, 'errors': ['Row 3: ...', ...], 'guests': [(guest, password), ...]}
        """
        if user is not None:
            self.require_staff(user, "import guests")
        content = csv_file.read()
        if isinstance(content, bytes):
            try:
                content = content.decode('utf-8-sig')
            except UnicodeDecodeError:
                raise ValidationError("File must be UTF-8 encoded CSV", code="INVALID_ENCODING")
        reader = csv.DictReader(io.StringIO(content))
        if not reader.fieldnames:
            raise ValidationError("The CSV file is empty", code="EMPTY_FILE")

        created = []
        errors = []
        seen_emails = set()
        # Row 1 is the header
        for row_number, row in enumerate(reader, start=2):
            dto = GuestDTO(
                first_name=_column(row, 'first_name'),
                last_name=_column(row, 'last_name'),
                email=_column(row, 'email'),
                phone=_column(row, 'phone'),
            )
            email = dto.email.lower()
            if email and email in seen_emails:
                errors.append(f"Row {row_number}: Duplicate email in file - {email}")
                continue
            try:
                guest, password = self.create_guest(dto)
            except ValidationError as e:
                errors.append(f"Row {row_number}: {e.message}")
                continue
            except IntegrityError as e:
                errors.append(f"Row {row_number}: {e}")
                continue
            if email:
                seen_emails.add(email)
            created.append((guest, password))

        self.log_info("Guest import finished", created=len(created), errors=len(errors))
        return {'created': len(created), 'errors': errors, 'guests': created}

    def delete_guest(self, guest, user):
        """Refused while the guest has a confirmed or checked-in booking"""
        self.require_staff(user, "delete guests")
        active = Booking.objects.active().filter(guest=guest).count()
        if active:
            raise BusinessLogicError(
                f"Cannot delete guest with {active} active booking(s)",
                code="GUEST_HAS_ACTIVE_BOOKINGS",
                details={'active_bookings': active}
            )
        guest_id = guest.id
        guest.delete()
        self.log_info("Guest deleted", guest_id=guest_id, user=user.username)
        return True

    def guest_list_stats(self) -> dict:
        guests = self.guests()
        bookings = Booking.objects.alive().filter(guest__role=UserRole.GUEST).exclude(status=BookingStatus.CANCELLED)
        total_revenue = _money(bookings.aggregate(total=Sum('total_amount'))['total'])
        total_paid = _money(
            Payment.objects.filter(
                status=PaymentStatus.COMPLETED, booking__guest__role=UserRole.GUEST, booking__deleted_at__isnull=True
            ).aggregate(total=Sum('amount'))['total']
        )
        total_pending = _money(
            bookings.filter(Q(payment__isnull=True) | Q(payment__status=PaymentStatus.PENDING))
            .aggregate(total=Sum('total_amount'))['total']
        )
        return {
            'total_guests': guests.count(),
            'active_guests': guests.filter(
                bookings__status__in=BookingStatus.ACTIVE, bookings__deleted_at__isnull=True
            ).distinct().count(),
            'total_revenue': total_revenue,
            'total_paid': total_paid,
            'total_pending': total_pending,
        }

    def guest_detail_stats(self, guest, now=None) -> dict:
        """Spending, stay and checkout figures for one guest"""
        now = now or timezone.now()
        bookings = list(
            Booking.objects.alive().filter(guest=guest)
            .select_related('room', 'room__room_type', 'payment')
            .order_by('-check_in')
        )
        billable = [b for b in bookings if b.status != BookingStatus.CANCELLED]

        total_revenue = sum((b.total_amount for b in billable), Decimal('0'))
        yearly_revenue = sum((b.total_amount for b in billable if b.created_at.year == now.year), Decimal('0'))
        total_paid = sum(
            (b.payment_or_none.amount for b in bookings
             if b.payment_or_none and b.payment_or_none.status == PaymentStatus.COMPLETED),
            Decimal('0')
        )
        total_pending = sum(
            (b.total_amount for b in billable
             if b.payment_or_none is None or b.payment_or_none.status == PaymentStatus.PENDING),
            Decimal('0')
        )

        deposits = SecurityDeposit.objects.filter(booking__guest=guest, booking__deleted_at__isnull=True)
        deposit_totals = deposits.aggregate(
            total=Sum('amount'),
            paid=Sum('amount', filter=Q(status=DepositStatus.PAID)),
            refunded=Sum('refund_amount', filter=Q(status__in=DepositStatus.SETTLED)),
        )

        total_nights = sum(b.nights for b in billable)
        stay_count = len(billable)

        preferred_room_types = OrderedDict()
        for booking in billable:
            name = booking.room.room_type.display_name
            preferred_room_types[name] = preferred_room_types.get(name, 0) + 1
        preferred_room_types = OrderedDict(
            sorted(preferred_room_types.items(), key=lambda item: item[1], reverse=True)
        )

        service_usage = list(
            BookingService.objects.filter(booking__guest=guest, booking__deleted_at__isnull=True)
            .values('service__name')
            .annotate(quantity=Sum('quantity'), spend=Sum('total_price'))
            .order_by('-spend')
        )

        current = next((b for b in bookings if b.status in BookingStatus.ACTIVE), None)
        checkout = rules.checkout_info(current, now) if current else None

        return {
            'total_revenue': total_revenue,
            'yearly_revenue': yearly_revenue,
            'total_paid': total_paid,
            'total_pending': total_pending,
            'deposits_total': _money(deposit_totals['total']),
            'deposits_paid': _money(deposit_totals['paid']),
            'deposits_refunded': _money(deposit_totals['refunded']),
            'total_nights': total_nights,
            'average_stay': round(total_nights / stay_count, 1) if stay_count else 0,
            'average_spending': (total_revenue / stay_count).quantize(Decimal('0.01')) if stay_count else Decimal('0'),
            'total_bookings': len(bookings),
            'preferred_room_types': preferred_room_types,
            'service_usage': service_usage,
            'customer_since': guest.date_joined,
            'current_booking': current,
            'checkout': checkout,
            'bookings': bookings,
        }


def import_template_csv() -> str:
    """Header plus one example row for the import template download"""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(TEMPLATE_HEADER)
    writer.writerow(['Jane', 'Doe', 'jane.doe@example.com', '+1 555 0100'])
    return output.getvalue()
