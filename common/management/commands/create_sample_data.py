"""
Management command to create sample data for demos and manual testing
Creates staff users, a block, rooms, extra services, guests, bookings and payments
"""
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from core.constants import UserRole, BookingStatus, PaymentMethod, PricingPeriod, ServiceCategory
from core.dto import BookingDTO, GuestDTO, PaymentDTO
from core.exceptions import BaseApplicationException
from addons.models import Service
from blocks.models import Block
from bookings.services import BookingService
from guests.services import GuestService
from payments.services import PaymentService
from rooms.models import Room, RoomType
from rooms.services import seed_room_types

User = get_user_model()

STAFF_USERS = [
    ('admin', UserRole.ADMIN, 'Ada', 'Admin'),
    ('manager', UserRole.MANAGER, 'Max', 'Manager'),
    ('frontdesk', UserRole.STAFF, 'Sam', 'Staff'),
]

# (number, room type, floor, price, pricing period)
ROOMS = [
    ('101', 'SINGLE', 1, Decimal('60.00'), PricingPeriod.NIGHT),
    ('102', 'DOUBLE', 1, Decimal('90.00'), PricingPeriod.NIGHT),
    ('201', 'SUITE', 2, Decimal('180.00'), PricingPeriod.NIGHT),
    ('202', 'DELUXE', 2, Decimal('140.00'), PricingPeriod.NIGHT),
    ('301', 'DOUBLE', 3, Decimal('1500.00'), PricingPeriod.MONTH),
]

SERVICES = [
    ('Breakfast', Decimal('12.00'), ServiceCategory.FOOD_BEVERAGE),
    ('Laundry', Decimal('8.00'), ServiceCategory.LAUNDRY),
    ('Airport Pickup', Decimal('35.00'), ServiceCategory.TRANSPORT),
]

GUESTS = [
    ('Jane', 'Doe', 'jane.doe@example.com', '+1 555 0100'),
    ('John', 'Smith', 'john.smith@example.com', '+1 555 0101'),
    ('Amara', 'Okafor', 'amara.okafor@example.com', '+1 555 0102'),
]


class Command(BaseCommand):
    help = 'Create sample data: 3 staff users, 1 block, 5 rooms, 3 services, 3 guests with bookings'

    def add_arguments(self, parser):
        parser.add_argument(
            '--password',
            type=str,
            default='changeme123',
            help='Password for the staff users (default: changeme123)'
        )

    @transaction.atomic
    def handle(self, *args, **options):
        password = options['password']

        admin = None
        for username, role, first_name, last_name in STAFF_USERS:
            user, created = User.objects.get_or_create(
                username=username,
                defaults={'role': role, 'first_name': first_name, 'last_name': last_name,
                          'email': f'{username}@example.com', 'is_staff': role == UserRole.ADMIN,
                          'is_superuser': role == UserRole.ADMIN}
            )
            if created:
                user.set_password(password)
                user.save()
                self.stdout.write(self.style.SUCCESS(f'Created {role.lower()} user: {username}'))
            if role == UserRole.ADMIN:
                admin = user

        seed_room_types()
        block, created = Block.objects.get_or_create(
            name='Main Building', defaults={'description': 'Reception and guest rooms', 'floors': 3}
        )
        if created:
            self.stdout.write(self.style.SUCCESS(f'Created block: {block.name}'))

        rooms = []
        for number, type_code, floor, price, period in ROOMS:
            room_type = RoomType.objects.get(name=type_code)
            room, created = Room.objects.get_or_create(
                block=block, number=number,
                defaults={'room_type': room_type, 'floor': floor, 'capacity': room_type.max_capacity,
                          'price_per_night': price, 'pricing_period': period,
                          'amenities': 'WiFi, TV, Air conditioning'}
            )
            rooms.append(room)
            if created:
                self.stdout.write(self.style.SUCCESS(f'Created room {number} ({room_type.display_name})'))

        for name, price, category in SERVICES:
            Service.objects.get_or_create(name=name, defaults={'price': price, 'category': category})

        guest_service = GuestService()
        guests = []
        for first_name, last_name, email, phone in GUESTS:
            guest = User.objects.filter(email=email).first()
            if guest is None:
                guest, temp_password = guest_service.create_guest(
                    GuestDTO(first_name=first_name, last_name=last_name, email=email, phone=phone)
                )
                self.stdout.write(self.style.SUCCESS(
                    f'Created guest {guest.full_name} (login {guest.username} / {temp_password})'))
            guests.append(guest)

        today = timezone.localdate()
        plans = [
            # guest, room, check-in date, periods, target status, paid
            (guests[0], rooms[0], today - timedelta(days=2), 4, BookingStatus.CHECKED_IN, True),
            (guests[1], rooms[1], today + timedelta(days=3), 2, BookingStatus.PENDING, False),
            (guests[2], rooms[4], today - timedelta(days=10), 1, BookingStatus.CONFIRMED, True),
        ]
        booking_service = BookingService()
        payment_service = PaymentService()
        for guest, room, check_in_date, periods, target, paid in plans:
            if room.bookings.filter(guest=guest).exists():
                continue
            try:
                booking = booking_service.create_booking(BookingDTO(
                    guest_id=guest.id, room_id=room.id, check_in_date=check_in_date, periods=periods,
                ), admin)
                if paid:
                    payment_service.record_payment(PaymentDTO(
                        booking_id=booking.id, amount=booking.total_amount, method=PaymentMethod.CASH
                    ), admin)
                    booking.refresh_from_db()
                if target == BookingStatus.CHECKED_IN:
                    booking_service.update_status(booking, target, admin)
            except BaseApplicationException as e:
                self.stdout.write(self.style.WARNING(f'Skipped booking for room {room.number}: {e.message}'))
                continue
            self.stdout.write(self.style.SUCCESS(
                f'Created booking #{booking.id}: {guest.full_name} in room {room.number} ({booking.status})'))

        self.stdout.write(self.style.SUCCESS('\nSample data created successfully!'))
