"""
Tests for the extra-services catalogue and booking service lines.
"""
from decimal import Decimal

import pytest

from addons.models import Service, BookingService
from addons.services import AddonService
from core.constants import BookingStatus, ServiceCategory
from core.exceptions import ValidationError, BusinessLogicError, PermissionDeniedError


@pytest.fixture
def breakfast(db):
    return Service.objects.create(name="Breakfast", price=Decimal('12.50'), category=ServiceCategory.FOOD_BEVERAGE)


@pytest.mark.django_db
class TestCatalogue:

    def test_create_strips_name(self, staff):
        service = AddonService().create(staff, {'name': "  Laundry ", 'price': Decimal('8'),
                                                'category': ServiceCategory.LAUNDRY})
        assert service.name == "Laundry"

    def test_duplicate_name(self, staff, breakfast):
        with pytest.raises(ValidationError) as exc_info:
            AddonService().create(staff, {'name': "breakfast", 'price': Decimal('1')})
        assert exc_info.value.code == "DUPLICATE_SERVICE"

    def test_negative_price(self, staff):
        with pytest.raises(ValidationError):
            AddonService().create(staff, {'name': "Spa", 'price': Decimal('-5')})

    def test_guest_cannot_manage(self, guest):
        with pytest.raises(PermissionDeniedError):
            AddonService().create(guest, {'name': "Spa", 'price': Decimal('5')})

    def test_service_in_use_cannot_be_deleted(self, staff, booking, breakfast):
        service = AddonService()
        service.add_to_booking(booking, breakfast, 1, staff)
        with pytest.raises(BusinessLogicError) as exc_info:
            service.delete(staff, breakfast)
        assert exc_info.value.code == "SERVICE_IN_USE"

    def test_unused_service_is_deleted(self, staff, breakfast):
        AddonService().delete(staff, breakfast)
        assert not Service.objects.filter(name="Breakfast").exists()


@pytest.mark.django_db
class TestAddToBooking:

    def test_line_total_added_to_booking(self, staff, booking, breakfast):
        line = AddonService().add_to_booking(booking, breakfast, 2, staff)
        booking.refresh_from_db()
        assert line.total_price == Decimal('25.00')
        assert booking.total_amount == Decimal('325.00')

    def test_same_service_merges_into_one_line(self, staff, booking, breakfast):
        service = AddonService()
        service.add_to_booking(booking, breakfast, 1, staff)
        line = service.add_to_booking(booking, breakfast, 3, staff)
        assert line.quantity == 4
        assert line.total_price == Decimal('50.00')
        assert BookingService.objects.filter(booking=booking).count() == 1

    def test_quantity_must_be_positive(self, staff, booking, breakfast):
        with pytest.raises(ValidationError) as exc_info:
            AddonService().add_to_booking(booking, breakfast, 0, staff)
        assert exc_info.value.code == "INVALID_QUANTITY"

    def test_inactive_service(self, staff, booking, breakfast):
        breakfast.is_active = False
        breakfast.save()
        with pytest.raises(BusinessLogicError) as exc_info:
            AddonService().add_to_booking(booking, breakfast, 1, staff)
        assert exc_info.value.code == "SERVICE_INACTIVE"

    def test_closed_booking(self, staff, guest, room, make_booking, breakfast):
        closed = make_booking(guest, room, status=BookingStatus.CHECKED_OUT)
        with pytest.raises(BusinessLogicError) as exc_info:
            AddonService().add_to_booking(closed, breakfast, 1, staff)
        assert exc_info.value.code == "BOOKING_CLOSED"
