"""
Maintenance service - logs work on rooms and keeps room status in step.
"""
from django.db import transaction
from django.db.models import Count, Q
from django.utils import timezone

from core.constants import MaintenanceStatus, Priority, RoomStatus
from core.dto import MaintenanceDTO
from core.exceptions import NotFoundError, ValidationError
from core.services import BaseService
from core.validators import MaintenanceValidator, validate_required
from rooms.models import Room, Asset
from rooms.status import update_room_status
from .models import MaintenanceLog


class MaintenanceService(BaseService):
    """Service for maintenance logs"""

    def get_log(self, log_id: int) -> MaintenanceLog:
        log = MaintenanceLog.objects.select_related('room', 'asset').filter(id=log_id).first()
        if not log:
            raise NotFoundError(resource_type="MaintenanceLog", resource_id=log_id)
        return log

    def create(self, dto: MaintenanceDTO, user) -> MaintenanceLog:
        """
        Log maintenance work as PENDING.

        HIGH and CRITICAL priority take the room out of service (MAINTENANCE).
        """
        self.require_staff(user, "log maintenance")
        validate_required(
            room=dto.room_id, type=dto.type, description=(dto.description or '').strip(), priority=dto.priority
        )
        MaintenanceValidator.validate_choices(dto.type, dto.priority)
        MaintenanceValidator.validate_cost(dto.cost)

        with transaction.atomic():
            room = Room.objects.select_for_update().filter(id=dto.room_id).first()
            if not room:
                raise NotFoundError(resource_type="Room", resource_id=dto.room_id)
            asset = None
            if dto.asset_id:
                asset = Asset.objects.filter(id=dto.asset_id).first()
                if not asset:
                    raise NotFoundError(resource_type="Asset", resource_id=dto.asset_id)

            log = MaintenanceLog.objects.create(
                room=room,
                asset=asset,
                type=dto.type,
                description=dto.description.strip(),
                priority=dto.priority,
                status=MaintenanceStatus.PENDING,
                reported_by=(dto.reported_by or user.full_name).strip(),
                assigned_to=(dto.assigned_to or '').strip(),
                cost=dto.cost,
                notes=(dto.notes or '').strip(),
            )
            if dto.priority in Priority.BLOCKING and room.status != RoomStatus.OUT_OF_ORDER:
                room.status = RoomStatus.MAINTENANCE
                room.save(update_fields=['status', 'updated_at'])
            self.log_info("Maintenance logged", log_id=log.id, room=room.number, priority=dto.priority,
                          user=user.username)
            return log

    def update_status(self, log: MaintenanceLog, status: str, user, cost=None, notes=None) -> MaintenanceLog:
        """
        IN_PROGRESS stamps start_date; COMPLETED stamps end_date and hands the
        room back to booking-derived status when no other urgent work is open.
        """
        self.require_staff(user, "update maintenance")
        if status not in dict(MaintenanceStatus.CHOICES):
            raise ValidationError(f"Unknown maintenance status: {status}", code="INVALID_STATUS")
        MaintenanceValidator.validate_cost(cost)

        with transaction.atomic():
            now = timezone.now()
            log.status = status
            if status == MaintenanceStatus.IN_PROGRESS and log.start_date is None:
                log.start_date = now
            if status == MaintenanceStatus.COMPLETED:
                log.end_date = now
            if cost is not None:
                log.cost = cost
            if notes:
                log.notes = f"{log.notes}\n{notes}".strip()
            log.save()

            if status in (MaintenanceStatus.COMPLETED, MaintenanceStatus.CANCELLED):
                room = Room.objects.select_for_update().get(id=log.room_id)
                still_blocked = MaintenanceLog.objects.filter(
                    room=room, status__in=MaintenanceStatus.OPEN, priority__in=Priority.BLOCKING
                ).exists()
                if room.status == RoomStatus.MAINTENANCE and not still_blocked:
                    room.status = RoomStatus.AVAILABLE
                    room.save(update_fields=['status', 'updated_at'])
                    update_room_status(room)
            self.log_info("Maintenance status changed", log_id=log.id, status=status, user=user.username)
            return log

    def search(self, status=None, priority=None, type=None, room=None):
        queryset = MaintenanceLog.objects.select_related('room', 'room__block', 'asset')
        if status:
            queryset = queryset.filter(status=status)
        if priority:
            queryset = queryset.filter(priority=priority)
        if type:
            queryset = queryset.filter(type=type)
        if room:
            queryset = queryset.filter(room_id=room)
        return queryset.order_by('-created_at')

    def counts(self) -> dict:
        return MaintenanceLog.objects.aggregate(
            total=Count('id'),
            pending=Count('id', filter=Q(status=MaintenanceStatus.PENDING)),
            in_progress=Count('id', filter=Q(status=MaintenanceStatus.IN_PROGRESS)),
            completed=Count('id', filter=Q(status=MaintenanceStatus.COMPLETED)),
            urgent=Count('id', filter=Q(status__in=MaintenanceStatus.OPEN, priority__in=Priority.BLOCKING)),
        )
