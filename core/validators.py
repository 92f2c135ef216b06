"""
Input checks shared by the services (required fields, names, emails,
amounts, booking periods, guest counts, deposit refunds, maintenance entries). Each raises
core.exceptions.ValidationError with a code.
"""
import re
from decimal import Decimal
from core.constants import MaintenanceType, Priority
from core.exceptions import ValidationError as AppValidationError

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


def validate_required(**fields):
    """Every keyword must carry a value"""
    missing = [name for name, value in fields.items() if value in (None, '')]
    if missing:
        raise AppValidationError(
            message="All required fields must be filled",
            code="MISSING_FIELDS",
            details={"missing": missing}
        )


class BookingValidator:
    """Validates booking operations"""

    @staticmethod
    def validate_periods(periods: int):
        """Validate number of pricing periods"""
        if periods is None or periods < 1:
            raise AppValidationError(
                message="Number of periods must be at least 1",
                code="INVALID_PERIODS"
            )

    @staticmethod
    def validate_guests(guests: int, capacity: int):
        """Validate guest count against room capacity"""
        if guests is None or guests < 1:
            raise AppValidationError(
                message="At least one guest is required",
                code="INVALID_GUESTS"
            )
        if capacity and guests > capacity:
            raise AppValidationError(
                message=f"Room capacity is {capacity} guest(s)",
                code="CAPACITY_EXCEEDED",
                details={"guests": guests, "capacity": capacity}
            )


class PaymentValidator:
    """Validates payment-related operations"""

    @staticmethod
    def validate_amount(amount: Decimal, label: str = "Payment amount"):
        """Amounts must be strictly positive"""
        if amount is None or amount <= 0:
            raise AppValidationError(
                message=f"{label} must be greater than 0",
                code="INVALID_AMOUNT"
            )
        if amount > Decimal('99999999.99'):
            raise AppValidationError(
                message=f"{label} exceeds maximum allowed",
                code="AMOUNT_TOO_LARGE"
            )


class DepositValidator:
    """Validates security deposit settlement"""

    @staticmethod
    def validate_refund(deposit_amount: Decimal, refund_amount: Decimal,
                        deduction_amount: Decimal, deduction_reason: str = ""):
        if refund_amount < 0 or deduction_amount < 0:
            raise AppValidationError(
                message="Refund and deduction amounts cannot be negative",
                code="NEGATIVE_AMOUNT"
            )
        if refund_amount + deduction_amount != deposit_amount:
            raise AppValidationError(
                message=f"Refund amount plus deduction must equal the deposit amount of {deposit_amount}",
                code="REFUND_MISMATCH",
                details={
                    "deposit": str(deposit_amount),
                    "refund": str(refund_amount),
                    "deduction": str(deduction_amount),
                }
            )
        if deduction_amount > 0 and not (deduction_reason or '').strip():
            raise AppValidationError(
                message="A reason is required when deducting from the deposit",
                code="DEDUCTION_REASON_REQUIRED"
            )


class BlockValidator:
    """Validates block fields"""

    @staticmethod
    def validate_name(name: str):
        if not (name or '').strip():
            raise AppValidationError(message="Block name is required", code="NAME_REQUIRED")

    @staticmethod
    def validate_floors(floors):
        if floors is not None and floors <= 0:
            raise AppValidationError(
                message="Floors must be a valid positive number",
                code="INVALID_FLOORS"
            )


class GuestValidator:
    """Validates guest records"""

    @staticmethod
    def validate_names(first_name: str, last_name: str):
        if not (first_name or '').strip() or not (last_name or '').strip():
            raise AppValidationError(
                message="First name and last name are required",
                code="MISSING_FIELDS"
            )

    @staticmethod
    def validate_email(email: str):
        if email and not EMAIL_RE.match(email):
            raise AppValidationError(
                message=f"Invalid email format - {email}",
                code="INVALID_EMAIL"
            )


class MaintenanceValidator:
    """Validates maintenance log entries"""

    @staticmethod
    def validate_choices(type: str, priority: str):
        if type not in dict(MaintenanceType.CHOICES):
            raise AppValidationError(message=f"Unknown maintenance type: {type}", code="INVALID_TYPE")
        if priority not in dict(Priority.CHOICES):
            raise AppValidationError(message=f"Unknown priority: {priority}", code="INVALID_PRIORITY")

    @staticmethod
    def validate_cost(cost):
        if cost is not None and cost < 0:
            raise AppValidationError(message="Cost cannot be negative", code="INVALID_AMOUNT")
