"""
Plain dataclasses that views, serializers and commands hand to the services.
"""
from dataclasses import dataclass
from typing import Optional
from decimal import Decimal
from datetime import date, datetime


@dataclass
class BookingDTO:
    """Data Transfer Object for Booking"""
    id: Optional[int] = None
    guest_id: int = None
    room_id: int = None
    check_in_date: date = None
    periods: int = 1
    guests: int = 1
    special_requests: str = ""


@dataclass
class ExtensionDTO:
    """Data Transfer Object for a booking extension"""
    periods: int = 1
    reason: str = ""
    method: str = "CASH"


@dataclass
class PaymentDTO:
    """Data Transfer Object for Payment"""
    id: Optional[int] = None
    booking_id: int = None
    amount: Decimal = Decimal('0')
    method: str = "CASH"
    transaction_id: str = ""
    notes: str = ""


@dataclass
class DepositDTO:
    """Data Transfer Object for collecting a security deposit"""
    booking_id: int = None
    amount: Decimal = Decimal('0')
    method: str = "CASH"
    transaction_id: str = ""


@dataclass
class DepositRefundDTO:
    """Data Transfer Object for settling a security deposit"""
    refund_amount: Decimal = Decimal('0')
    deduction_amount: Decimal = Decimal('0')
    deduction_reason: str = ""
    damage_report: str = ""


@dataclass
class GuestDTO:
    """Data Transfer Object for Guest"""
    id: Optional[int] = None
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    gender: str = ""
    id_card: str = ""


@dataclass
class MaintenanceDTO:
    """Data Transfer Object for MaintenanceLog"""
    id: Optional[int] = None
    room_id: int = None
    type: str = ""
    description: str = ""
    priority: str = "MEDIUM"
    reported_by: str = ""
    assigned_to: str = ""
    cost: Optional[Decimal] = None
    asset_id: Optional[int] = None
    notes: str = ""


@dataclass
class CheckoutInfo:
    """Computed checkout state of a booking at a point in time"""
    booking_id: int = None
    check_out: datetime = None
    hours_remaining: float = 0.0
    is_overdue: bool = False
    due_soon: bool = False
    urgency: str = "low"
