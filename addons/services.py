"""
Extra service catalogue and booking service lines.
"""
from django.db import transaction
from core.constants import BookingStatus
from core.exceptions import NotFoundError, ValidationError, BusinessLogicError
from core.services import BaseService
from core.validators import PaymentValidator
from bookings import rules
from bookings.models import Booking
from .models import Service, BookingService


class AddonService(BaseService):
    """Service for the extra-services catalogue"""

    def get_service(self, service_id: int) -> Service:
        service = Service.objects.filter(id=service_id).first()
        if not service:
            raise NotFoundError(resource_type="Service", resource_id=service_id)
        return service

    def _clean(self, data: dict, exclude_id=None) -> dict:
        name = (data.get('name') or '').strip()
        if not name:
            raise ValidationError("Service name is required", code="MISSING_FIELDS")
        duplicate = Service.objects.filter(name__iexact=name)
        if exclude_id:
            duplicate = duplicate.exclude(id=exclude_id)
        if duplicate.exists():
            raise ValidationError("A service with this name already exists", code="DUPLICATE_SERVICE")
        price = data.get('price')
        if price is None or price < 0:
            raise ValidationError("Price cannot be negative", code="INVALID_AMOUNT")
        cleaned = dict(data)
        cleaned['name'] = name
        return cleaned

    def create(self, user, data: dict) -> Service:
        self.require_staff(user, "manage services")
        service = Service.objects.create(**self._clean(data))
        self.log_info("Service created", service_id=service.id, user=user.username)
        return service

    def update(self, user, service: Service, data: dict) -> Service:
        self.require_staff(user, "manage services")
        for key, value in self._clean(data, exclude_id=service.id).items():
            setattr(service, key, value)
        service.save()
        self.log_info("Service updated", service_id=service.id, user=user.username)
        return service

    def delete(self, user, service: Service) -> bool:
        """Refused while any booking uses the service"""
        self.require_staff(user, "manage services")
        in_use = service.booking_services.count()
        if in_use:
            raise BusinessLogicError(
                f"Service is used by {in_use} booking(s); deactivate it instead",
                code="SERVICE_IN_USE"
            )
        service_id = service.id
        service.delete()
        self.log_info("Service deleted", service_id=service_id, user=user.username)
        return True

    def add_to_booking(self, booking: Booking, service: Service, quantity: int, user) -> BookingService:
        """
        Add a service line to a booking.

        Adding a service that is already on the booking increases its quantity.
        The line total is added to the booking total.
        """
        self.require_staff(user, "add services to bookings")
        if quantity is None or quantity < 1:
            raise ValidationError("Quantity must be at least 1", code="INVALID_QUANTITY")
        if not service.is_active:
            raise BusinessLogicError(f"{service.name} is not available", code="SERVICE_INACTIVE")
        if booking.is_deleted or booking.status in BookingStatus.TERMINAL:
            raise BusinessLogicError("Services cannot be added to a closed booking", code="BOOKING_CLOSED")

        line_total = rules.booking_total(service.price, quantity)
        if line_total > 0:
            PaymentValidator.validate_amount(line_total, "Service total")

        with transaction.atomic():
            booking = Booking.objects.select_for_update().get(id=booking.id)
            line = BookingService.objects.filter(booking=booking, service=service).first()
            if line:
                line.quantity += quantity
                line.total_price += line_total
                line.save(update_fields=['quantity', 'total_price'])
            else:
                line = BookingService.objects.create(
                    booking=booking, service=service, quantity=quantity, total_price=line_total
                )
            booking.total_amount += line_total
            booking.save(update_fields=['total_amount', 'updated_at'])
            self.log_info("Service added to booking", booking_id=booking.id, service=service.name,
                          quantity=quantity, user=user.username)
            return line
