"""
Room status derivation from bookings.

A room is OCCUPIED while a guest is checked in, or while a pending / confirmed
booking covers the current time. MAINTENANCE and OUT_OF_ORDER are set by hand
(or by maintenance logs) and are never overwritten here.
"""
import logging
from django.utils import timezone

from core.constants import RoomStatus
from bookings.rules import holds_room

logger = logging.getLogger(__name__)


def derive_room_status(bookings, now=None) -> str:
    now = now or timezone.now()
    for booking in bookings:
        if holds_room(booking, now):
            return RoomStatus.OCCUPIED
    return RoomStatus.AVAILABLE


def update_room_status(room, now=None) -> str:
    """Recompute and persist one room's status; returns the status the room ends up with"""
    if room.status in RoomStatus.LOCKED:
        return room.status

    bookings = room.bookings.filter(deleted_at__isnull=True)
    new_status = derive_room_status(bookings, now)
    if new_status != room.status:
        logger.info(f"Room {room.number}: {room.status} -> {new_status}")
        room.status = new_status
        room.save(update_fields=['status', 'updated_at'])
    return new_status


def update_all_room_statuses(now=None, dry_run=False) -> int:
    """Re-derive every unlocked room. Returns the number of rooms whose status changed."""
    from rooms.models import Room

    now = now or timezone.now()
    changed = 0
    rooms = Room.objects.exclude(status__in=RoomStatus.LOCKED).prefetch_related('bookings')
    for room in rooms:
        live = [b for b in room.bookings.all() if b.deleted_at is None]
        new_status = derive_room_status(live, now)
        if new_status == room.status:
            continue
        changed += 1
        if not dry_run:
            room.status = new_status
            room.save(update_fields=['status', 'updated_at'])
    logger.info(f"Room status sync: {changed} room(s) {'would change' if dry_run else 'changed'}")
    return changed
