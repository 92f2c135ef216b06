"""
Tests for GuestService: creation, CSV import, deletion and stats.
"""
from decimal import Decimal
from io import BytesIO

import pytest

from core.constants import BookingStatus, NotificationType, UserRole
from core.dto import GuestDTO
from core.exceptions import ValidationError, BusinessLogicError, PermissionDeniedError
from guests.services import GuestService, TEMPLATE_HEADER, import_template_csv
from notifications.models import Notification
from users.models import User


@pytest.mark.django_db
class TestCreateGuest:

    def test_create_guest_returns_working_password(self, staff):
        guest, password = GuestService().create_guest(
            GuestDTO(first_name="Ada", last_name="Lovelace", email="Ada@Example.com"), staff
        )
        assert guest.role == UserRole.GUEST
        assert guest.username == "ada"
        assert guest.email == "ada@example.com"
        assert guest.check_password(password)

    def test_new_guest_is_sent_a_welcome(self, staff):
        guest, password = GuestService().create_guest(
            GuestDTO(first_name="Ada", last_name="Lovelace", email="ada@example.com"), staff
        )
        welcome = Notification.objects.get(user=guest, type=NotificationType.WELCOME)
        assert password in welcome.message
        assert "Username: ada" in welcome.message

    def test_no_welcome_without_email(self, staff):
        guest, _ = GuestService().create_guest(GuestDTO(first_name="Ada", last_name="Lovelace"), staff)
        assert not Notification.objects.filter(user=guest).exists()

    def test_username_is_made_unique(self, staff):
        service = GuestService()
        first, _ = service.create_guest(GuestDTO(first_name="Ada", last_name="Lovelace"), staff)
        second, _ = service.create_guest(GuestDTO(first_name="Ada", last_name="Lovelace"), staff)
        assert first.username == "ada.lovelace"
        assert second.username == "ada.lovelace2"

    def test_duplicate_email(self, staff, guest):
        with pytest.raises(ValidationError) as exc_info:
            GuestService().create_guest(GuestDTO(first_name="G", last_name="H", email=guest.email.upper()), staff)
        assert exc_info.value.code == "DUPLICATE_EMAIL"

    def test_names_required(self, staff):
        with pytest.raises(ValidationError) as exc_info:
            GuestService().create_guest(GuestDTO(first_name="Ada"), staff)
        assert exc_info.value.code == "MISSING_FIELDS"

    def test_invalid_email(self, staff):
        with pytest.raises(ValidationError) as exc_info:
            GuestService().create_guest(GuestDTO(first_name="A", last_name="B", email="not-an-email"), staff)
        assert exc_info.value.code == "INVALID_EMAIL"

    def test_guests_cannot_create_guests(self, guest):
        with pytest.raises(PermissionDeniedError):
            GuestService().create_guest(GuestDTO(first_name="A", last_name="B"), guest)

    def test_update_keeps_own_email(self, staff, guest):
        dto = GuestDTO(first_name="Grace", last_name="Murray", email=guest.email, phone="555")
        guest = GuestService().update_guest(guest, dto, staff)
        assert guest.last_name == "Murray"
        assert guest.phone == "555"


@pytest.mark.django_db
class TestImportGuests:

    def test_import_creates_rows_and_reports_errors(self, staff, guest):
        csv_file = BytesIO(
            b"firstName,lastName,email,phone\n"
            b"Jane,Doe,jane@example.com,555-0100\n"
            b"John,,john@example.com,\n"
            b"Janet,Doe,jane@example.com,\n"
            b"Taken,Email,guest@example.com,\n"
            b"Bob,Smith,,\n"
        )
        result = GuestService().import_guests(csv_file, staff)

        assert result['created'] == 2
        assert len(result['errors']) == 3
        assert result['errors'][0].startswith("Row 3:")
        assert "Duplicate email in file" in result['errors'][1]
        assert result['errors'][2].startswith("Row 5:")
        assert User.objects.filter(email="jane@example.com", role=UserRole.GUEST).exists()

    def test_import_accepts_snake_case_headers(self, staff):
        csv_file = BytesIO(b"first_name,last_name,email\nLinus,Torvalds,linus@example.com\n")
        result = GuestService().import_guests(csv_file, staff)
        assert result['created'] == 1
        guest, password = result['guests'][0]
        assert guest.first_name == "Linus"
        assert password

    def test_empty_file(self, staff):
        with pytest.raises(ValidationError) as exc_info:
            GuestService().import_guests(BytesIO(b""), staff)
        assert exc_info.value.code == "EMPTY_FILE"

    def test_non_utf8_file_is_rejected(self, staff):
        with pytest.raises(ValidationError) as exc_info:
            GuestService().import_guests(BytesIO(b"firstName,lastName\n\xff\xfeJos\xe9,Doe\n"), staff)
        assert exc_info.value.code == "INVALID_ENCODING"
        assert not User.objects.filter(last_name="Doe").exists()

    def test_template(self):
        assert import_template_csv().splitlines()[0] == ",".join(TEMPLATE_HEADER)


@pytest.mark.django_db
class TestDeleteGuest:

    def test_guest_with_active_booking_is_kept(self, staff, guest, checked_in_booking):
        with pytest.raises(BusinessLogicError) as exc_info:
            GuestService().delete_guest(guest, staff)
        assert exc_info.value.code == "GUEST_HAS_ACTIVE_BOOKINGS"
        assert User.objects.filter(id=guest.id).exists()

    def test_guest_without_active_bookings_is_deleted(self, staff, guest, booking):
        assert booking.status == BookingStatus.PENDING
        GuestService().delete_guest(guest, staff)
        assert not User.objects.filter(id=guest.id).exists()


@pytest.mark.django_db
class TestGuestStats:

    def test_detail_stats(self, guest, room, make_booking):
        make_booking(guest, room, nights=2)
        make_booking(guest, room, nights=4, status=BookingStatus.CONFIRMED)
        make_booking(guest, room, nights=5, status=BookingStatus.CANCELLED)

        stats = GuestService().guest_detail_stats(guest)
        assert stats['total_bookings'] == 3
        assert stats['total_nights'] == 6
        assert stats['average_stay'] == 3.0
        assert stats['total_revenue'] == Decimal('600.00')
        assert stats['total_pending'] == Decimal('600.00')
        assert list(stats['preferred_room_types']) == ["Double"]
        assert stats['current_booking'] is not None

    def test_list_stats(self, guest, other_guest, room, make_booking):
        make_booking(guest, room, status=BookingStatus.CONFIRMED)
        stats = GuestService().guest_list_stats()
        assert stats['total_guests'] == 2
        assert stats['active_guests'] == 1
        assert stats['total_revenue'] == Decimal('300.00')
