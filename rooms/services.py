"""
Room service - Business logic layer for Room domain.
"""
from django.db import transaction
from core.constants import RoomStatus, UserRole, DEFAULT_ROOM_TYPES
from core.services import BaseService
from core.exceptions import NotFoundError, ValidationError, BusinessLogicError
from .models import Room, RoomType, Asset, RoomAsset
from .repositories import RoomRepository
from .status import update_room_status


class RoomService(BaseService):
    """Service for room-related business logic"""

    def __init__(self):
        super().__init__()
        self.room_repo = RoomRepository(Room)

    def get_room(self, room_id: int) -> Room:
        room = self.room_repo.get_queryset().filter(id=room_id).first()
        if not room:
            raise NotFoundError(resource_type="Room", resource_id=room_id)
        return room

    def _clean(self, data: dict, exclude_id=None) -> dict:
        number = (data.get('number') or '').strip()
        if not number:
            raise ValidationError("Room number is required", code="MISSING_FIELDS")
        room_type = data.get('room_type')
        if room_type is None:
            raise ValidationError("Room type is required", code="MISSING_FIELDS")
        block = data.get('block')
        if self.room_repo.number_taken(number, block_id=block.id if block else None, exclude_id=exclude_id):
            raise ValidationError(
                f"Room {number} already exists in this block",
                code="DUPLICATE_ROOM",
                details={'number': number}
            )
        cleaned = dict(data)
        cleaned['number'] = number
        if not cleaned.get('capacity'):
            cleaned['capacity'] = room_type.max_capacity
        if cleaned.get('price_per_night') in (None, ''):
            cleaned['price_per_night'] = room_type.base_price
        return cleaned

    def create_room(self, user, data: dict) -> Room:
        """
        Create a room.

        `data` holds model field values (room_type and block as instances).
        Capacity and price fall back to the room type defaults.
        """
        self.require_staff(user, "manage rooms")
        cleaned = self._clean(data)
        with transaction.atomic():
            room = self.room_repo.create(**cleaned)
            self.log_info(f"Room created: {room.number}", room_id=room.id, user=user.username)
            return room

    def update_room(self, user, room: Room, data: dict) -> Room:
        self.require_staff(user, "manage rooms")
        cleaned = self._clean(data, exclude_id=room.id)
        with transaction.atomic():
            self.room_repo.update(room, **cleaned)
            self.log_info(f"Room updated: {room.number}", room_id=room.id, user=user.username)
            return room

    def set_status(self, user, room: Room, status: str) -> Room:
        """
        Manual status change from the front desk.

        Putting a room back to AVAILABLE re-derives it from its bookings, so a
        room with a guest checked in returns to OCCUPIED.
        """
        self.require_staff(user, "change room status")
        if status not in dict(RoomStatus.CHOICES):
            raise ValidationError(f"Unknown room status: {status}", code="INVALID_STATUS")

        with transaction.atomic():
            room.status = status
            room.save(update_fields=['status', 'updated_at'])
            if status == RoomStatus.AVAILABLE:
                update_room_status(room)
            self.log_info("Room status set", room_id=room.id, status=room.status, user=user.username)
        return room

    def delete_room(self, user, room: Room) -> None:
        self.require_role(user, [UserRole.ADMIN], "delete rooms")
        if room.bookings.exists():
            raise BusinessLogicError(
                f"Room {room.number} has bookings and cannot be deleted",
                code="ROOM_HAS_BOOKINGS"
            )
        self.room_repo.delete(room)

    def available_rooms(self, start=None, end=None):
        if start and end:
            return self.room_repo.available_between(start, end)
        return self.room_repo.get_queryset().filter(status=RoomStatus.AVAILABLE)

    def assign_asset(self, user, room: Room, asset: Asset, quantity: int = 1,
                     condition: str = None, notes: str = "") -> RoomAsset:
        """Place an asset in a room; assigning it again adds to the quantity"""
        self.require_staff(user, "assign assets")
        if quantity is None or quantity < 1:
            raise ValidationError("Quantity must be at least 1", code="INVALID_QUANTITY")

        with transaction.atomic():
            room_asset, created = RoomAsset.objects.select_for_update().get_or_create(
                room=room, asset=asset,
                defaults={'quantity': quantity, 'notes': notes, **({'condition': condition} if condition else {})}
            )
            if not created:
                room_asset.quantity += quantity
                if condition:
                    room_asset.condition = condition
                room_asset.save()
            self.log_info("Asset assigned", room_id=room.id, asset_id=asset.id, quantity=room_asset.quantity)
            return room_asset


def seed_room_types():
    """Create the default room types that do not exist yet. Returns the number created."""
    created_count = 0
    for code, label, capacity in DEFAULT_ROOM_TYPES:
        _, created = RoomType.objects.get_or_create(
            name=code,
            defaults={'display_name': label, 'max_capacity': capacity}
        )
        if created:
            created_count += 1
    return created_count
