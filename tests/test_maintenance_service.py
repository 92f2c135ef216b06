"""
Tests for MaintenanceService and its effect on room status.
"""
from decimal import Decimal

import pytest

from core.constants import MaintenanceStatus, MaintenanceType, Priority, RoomStatus
from core.dto import MaintenanceDTO
from core.exceptions import ValidationError, NotFoundError
from maintenance.services import MaintenanceService


def _dto(room, priority=Priority.MEDIUM, **extra):
    return MaintenanceDTO(room_id=room.id, type=MaintenanceType.REPAIR, description="Leaking tap",
                          priority=priority, **extra)


@pytest.mark.django_db
class TestMaintenance:

    def test_medium_priority_keeps_room_in_service(self, staff, room):
        log = MaintenanceService().create(_dto(room), staff)
        room.refresh_from_db()
        assert log.status == MaintenanceStatus.PENDING
        assert log.reported_by == staff.full_name
        assert room.status == RoomStatus.AVAILABLE

    def test_high_priority_takes_room_out_of_service(self, staff, room):
        MaintenanceService().create(_dto(room, priority=Priority.HIGH), staff)
        room.refresh_from_db()
        assert room.status == RoomStatus.MAINTENANCE

    def test_out_of_order_room_is_not_downgraded(self, staff, room):
        room.status = RoomStatus.OUT_OF_ORDER
        room.save()
        MaintenanceService().create(_dto(room, priority=Priority.CRITICAL), staff)
        room.refresh_from_db()
        assert room.status == RoomStatus.OUT_OF_ORDER

    def test_status_dates_are_stamped(self, staff, room):
        service = MaintenanceService()
        log = service.create(_dto(room), staff)

        log = service.update_status(log, MaintenanceStatus.IN_PROGRESS, staff)
        assert log.start_date is not None
        assert log.end_date is None

        log = service.update_status(log, MaintenanceStatus.COMPLETED, staff, cost=Decimal('45.50'), notes="Washer")
        assert log.end_date is not None
        assert log.cost == Decimal('45.50')
        assert "Washer" in log.notes

    def test_completion_releases_room(self, staff, room):
        service = MaintenanceService()
        log = service.create(_dto(room, priority=Priority.HIGH), staff)
        service.update_status(log, MaintenanceStatus.COMPLETED, staff)
        room.refresh_from_db()
        assert room.status == RoomStatus.AVAILABLE

    def test_room_stays_blocked_while_other_urgent_work_is_open(self, staff, room):
        service = MaintenanceService()
        first = service.create(_dto(room, priority=Priority.HIGH), staff)
        service.create(_dto(room, priority=Priority.CRITICAL), staff)
        service.update_status(first, MaintenanceStatus.COMPLETED, staff)
        room.refresh_from_db()
        assert room.status == RoomStatus.MAINTENANCE

    def test_released_room_with_checked_in_guest_is_occupied(self, staff, room, checked_in_booking):
        room.status = RoomStatus.AVAILABLE
        room.save()
        service = MaintenanceService()
        log = service.create(_dto(room, priority=Priority.HIGH), staff)
        service.update_status(log, MaintenanceStatus.CANCELLED, staff)
        room.refresh_from_db()
        assert room.status == RoomStatus.OCCUPIED

    def test_validation(self, staff, room):
        service = MaintenanceService()
        with pytest.raises(ValidationError) as exc_info:
            service.create(MaintenanceDTO(room_id=room.id, type="PAINT", description="x"), staff)
        assert exc_info.value.code == "INVALID_TYPE"
        with pytest.raises(ValidationError) as exc_info:
            service.create(_dto(room, cost=Decimal('-1')), staff)
        assert exc_info.value.code == "INVALID_AMOUNT"
        with pytest.raises(ValidationError) as exc_info:
            service.create(MaintenanceDTO(room_id=room.id, type=MaintenanceType.REPAIR, description="  "), staff)
        assert exc_info.value.code == "MISSING_FIELDS"
        assert exc_info.value.details == {'missing': ['description']}
        with pytest.raises(NotFoundError):
            service.create(MaintenanceDTO(room_id=9999, type=MaintenanceType.CLEANING, description="x"), staff)

        log = service.create(_dto(room), staff)
        with pytest.raises(ValidationError):
            service.update_status(log, MaintenanceStatus.COMPLETED, staff, cost=Decimal('-5'))

    def test_counts(self, staff, room):
        service = MaintenanceService()
        service.create(_dto(room, priority=Priority.HIGH), staff)
        log = service.create(_dto(room), staff)
        service.update_status(log, MaintenanceStatus.COMPLETED, staff)
        counts = service.counts()
        assert counts['total'] == 2
        assert counts['pending'] == 1
        assert counts['completed'] == 1
        assert counts['urgent'] == 1
