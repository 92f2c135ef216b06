"""
Roles, status vocabularies and defaults used across the apps.
"""

# User Roles
class UserRole:
    ADMIN = 'ADMIN'
    MANAGER = 'MANAGER'
    STAFF = 'STAFF'
    GUEST = 'GUEST'

    CHOICES = [
        (ADMIN, 'Admin'),
        (MANAGER, 'Manager'),
        (STAFF, 'Staff'),
        (GUEST, 'Guest'),
    ]

    # Roles allowed to operate the front desk
    STAFF_ROLES = [ADMIN, MANAGER, STAFF]
    MANAGEMENT_ROLES = [ADMIN, MANAGER]


# Room Status
class RoomStatus:
    AVAILABLE = 'AVAILABLE'
    OCCUPIED = 'OCCUPIED'
    MAINTENANCE = 'MAINTENANCE'
    OUT_OF_ORDER = 'OUT_OF_ORDER'

    CHOICES = [
        (AVAILABLE, 'Available'),
        (OCCUPIED, 'Occupied'),
        (MAINTENANCE, 'Maintenance'),
        (OUT_OF_ORDER, 'Out of Order'),
    ]

    # Statuses that booking changes never overwrite
    LOCKED = [MAINTENANCE, OUT_OF_ORDER]


# Default room types seeded by init_settings
DEFAULT_ROOM_TYPES = [
    ('SINGLE', 'Single', 1),
    ('DOUBLE', 'Double', 2),
    ('SUITE', 'Suite', 4),
    ('DELUXE', 'Deluxe', 3),
    ('PRESIDENTIAL', 'Presidential', 6),
]


# Pricing Period
class PricingPeriod:
    NIGHT = 'NIGHT'
    DAY = 'DAY'
    WEEK = 'WEEK'
    MONTH = 'MONTH'
    YEAR = 'YEAR'

    CHOICES = [
        (NIGHT, 'Per Night'),
        (DAY, 'Per Day'),
        (WEEK, 'Per Week'),
        (MONTH, 'Per Month'),
        (YEAR, 'Per Year'),
    ]

    LABELS = {
        NIGHT: 'night',
        DAY: 'day',
        WEEK: 'week',
        MONTH: 'month',
        YEAR: 'year',
    }


# Booking Status
class BookingStatus:
    PENDING = 'PENDING'
    CONFIRMED = 'CONFIRMED'
    CHECKED_IN = 'CHECKED_IN'
    CHECKED_OUT = 'CHECKED_OUT'
    CANCELLED = 'CANCELLED'

    CHOICES = [
        (PENDING, 'Pending'),
        (CONFIRMED, 'Confirmed'),
        (CHECKED_IN, 'Checked In'),
        (CHECKED_OUT, 'Checked Out'),
        (CANCELLED, 'Cancelled'),
    ]

    ACTIVE = [CONFIRMED, CHECKED_IN]
    # Statuses that hold a room for their date range
    BLOCKING = [PENDING, CONFIRMED, CHECKED_IN]
    EXTENDABLE = [CONFIRMED, CHECKED_IN]
    SOFT_DELETABLE = [PENDING, CANCELLED]
    TERMINAL = [CHECKED_OUT, CANCELLED]


# Payment Method
class PaymentMethod:
    CASH = 'CASH'
    CREDIT_CARD = 'CREDIT_CARD'
    DEBIT_CARD = 'DEBIT_CARD'
    ONLINE = 'ONLINE'
    BANK_TRANSFER = 'BANK_TRANSFER'
    MOBILE_MONEY = 'MOBILE_MONEY'

    CHOICES = [
        (CASH, 'Cash'),
        (CREDIT_CARD, 'Credit Card'),
        (DEBIT_CARD, 'Debit Card'),
        (ONLINE, 'Online'),
        (BANK_TRANSFER, 'Bank Transfer'),
        (MOBILE_MONEY, 'Mobile Money'),
    ]


# Payment Status
class PaymentStatus:
    PENDING = 'PENDING'
    COMPLETED = 'COMPLETED'
    FAILED = 'FAILED'
    REFUNDED = 'REFUNDED'

    CHOICES = [
        (PENDING, 'Pending'),
        (COMPLETED, 'Completed'),
        (FAILED, 'Failed'),
        (REFUNDED, 'Refunded'),
    ]


# Security Deposit Status
class DepositStatus:
    PENDING = 'PENDING'
    PAID = 'PAID'
    REFUNDED = 'REFUNDED'
    PARTIALLY_REFUNDED = 'PARTIALLY_REFUNDED'
    FORFEITED = 'FORFEITED'

    CHOICES = [
        (PENDING, 'Pending'),
        (PAID, 'Paid'),
        (REFUNDED, 'Refunded'),
        (PARTIALLY_REFUNDED, 'Partially Refunded'),
        (FORFEITED, 'Forfeited'),
    ]

    SETTLED = [REFUNDED, PARTIALLY_REFUNDED, FORFEITED]


# Maintenance Type
class MaintenanceType:
    CLEANING = 'CLEANING'
    REPAIR = 'REPAIR'
    INSPECTION = 'INSPECTION'
    UPGRADE = 'UPGRADE'
    PREVENTIVE = 'PREVENTIVE'

    CHOICES = [
        (CLEANING, 'Cleaning'),
        (REPAIR, 'Repair'),
        (INSPECTION, 'Inspection'),
        (UPGRADE, 'Upgrade'),
        (PREVENTIVE, 'Preventive'),
    ]


# Maintenance Status
class MaintenanceStatus:
    PENDING = 'PENDING'
    IN_PROGRESS = 'IN_PROGRESS'
    COMPLETED = 'COMPLETED'
    CANCELLED = 'CANCELLED'

    CHOICES = [
        (PENDING, 'Pending'),
        (IN_PROGRESS, 'In Progress'),
        (COMPLETED, 'Completed'),
        (CANCELLED, 'Cancelled'),
    ]

    OPEN = [PENDING, IN_PROGRESS]


# Priority
class Priority:
    LOW = 'LOW'
    MEDIUM = 'MEDIUM'
    HIGH = 'HIGH'
    CRITICAL = 'CRITICAL'

    CHOICES = [
        (LOW, 'Low'),
        (MEDIUM, 'Medium'),
        (HIGH, 'High'),
        (CRITICAL, 'Critical'),
    ]

    # Priorities that take the room out of service
    BLOCKING = [HIGH, CRITICAL]


# Extra Service Category
class ServiceCategory:
    FOOD_BEVERAGE = 'FOOD_BEVERAGE'
    SPA = 'SPA'
    LAUNDRY = 'LAUNDRY'
    TRANSPORT = 'TRANSPORT'
    ENTERTAINMENT = 'ENTERTAINMENT'
    BUSINESS = 'BUSINESS'
    OTHER = 'OTHER'

    CHOICES = [
        (FOOD_BEVERAGE, 'Food & Beverage'),
        (SPA, 'Spa'),
        (LAUNDRY, 'Laundry'),
        (TRANSPORT, 'Transport'),
        (ENTERTAINMENT, 'Entertainment'),
        (BUSINESS, 'Business'),
        (OTHER, 'Other'),
    ]


# Review Category
class ReviewCategory:
    OVERALL = 'OVERALL'
    ROOM = 'ROOM'
    SERVICE = 'SERVICE'
    FOOD = 'FOOD'
    LOCATION = 'LOCATION'
    CLEANLINESS = 'CLEANLINESS'

    CHOICES = [
        (OVERALL, 'Overall'),
        (ROOM, 'Room'),
        (SERVICE, 'Service'),
        (FOOD, 'Food'),
        (LOCATION, 'Location'),
        (CLEANLINESS, 'Cleanliness'),
    ]


# Notifications
class NotificationType:
    BOOKING_CONFIRMATION = 'BOOKING_CONFIRMATION'
    CHECK_IN_REMINDER = 'CHECK_IN_REMINDER'
    CHECK_OUT_REMINDER = 'CHECK_OUT_REMINDER'
    SEVENTY_FIVE_PERCENT_STAY = 'SEVENTY_FIVE_PERCENT_STAY'
    PAYMENT_DUE = 'PAYMENT_DUE'
    PAYMENT_RECEIVED = 'PAYMENT_RECEIVED'
    MAINTENANCE_NOTICE = 'MAINTENANCE_NOTICE'
    GENERAL_ANNOUNCEMENT = 'GENERAL_ANNOUNCEMENT'
    WELCOME = 'WELCOME'

    CHOICES = [
        (BOOKING_CONFIRMATION, 'Booking Confirmation'),
        (CHECK_IN_REMINDER, 'Check-in Reminder'),
        (CHECK_OUT_REMINDER, 'Check-out Reminder'),
        (SEVENTY_FIVE_PERCENT_STAY, '75% of Stay Reached'),
        (PAYMENT_DUE, 'Payment Due'),
        (PAYMENT_RECEIVED, 'Payment Received'),
        (MAINTENANCE_NOTICE, 'Maintenance Notice'),
        (GENERAL_ANNOUNCEMENT, 'General Announcement'),
        (WELCOME, 'Welcome'),
    ]


class NotificationChannel:
    EMAIL = 'EMAIL'
    SMS = 'SMS'
    EMAIL_SMS = 'EMAIL_SMS'
    PUSH = 'PUSH'

    CHOICES = [
        (EMAIL, 'Email'),
        (SMS, 'SMS'),
        (EMAIL_SMS, 'Email & SMS'),
        (PUSH, 'Push'),
    ]


class NotificationStatus:
    PENDING = 'PENDING'
    SENT = 'SENT'
    FAILED = 'FAILED'
    CANCELLED = 'CANCELLED'

    CHOICES = [
        (PENDING, 'Pending'),
        (SENT, 'Sent'),
        (FAILED, 'Failed'),
        (CANCELLED, 'Cancelled'),
    ]


# Runtime settings
class SettingCategory:
    GENERAL = 'GENERAL'
    EMAIL = 'EMAIL'
    SMS = 'SMS'
    SECURITY = 'SECURITY'
    API = 'API'

    CHOICES = [
        (GENERAL, 'General'),
        (EMAIL, 'Email'),
        (SMS, 'SMS'),
        (SECURITY, 'Security'),
        (API, 'API'),
    ]


# Checkout urgency levels
class Urgency:
    CRITICAL = 'critical'
    HIGH = 'high'
    MEDIUM = 'medium'
    LOW = 'low'

    # (upper bound in hours, level)
    THRESHOLDS = [
        (2, CRITICAL),
        (6, HIGH),
        (12, MEDIUM),
    ]


# Room assets
class AssetCategory:
    FURNITURE = 'FURNITURE'
    ELECTRONICS = 'ELECTRONICS'
    BATHROOM = 'BATHROOM'
    KITCHEN = 'KITCHEN'
    BEDDING = 'BEDDING'
    LIGHTING = 'LIGHTING'
    SAFETY = 'SAFETY'
    DECORATION = 'DECORATION'
    CLEANING = 'CLEANING'
    OTHER = 'OTHER'

    CHOICES = [
        (FURNITURE, 'Furniture'),
        (ELECTRONICS, 'Electronics'),
        (BATHROOM, 'Bathroom'),
        (KITCHEN, 'Kitchen'),
        (BEDDING, 'Bedding'),
        (LIGHTING, 'Lighting'),
        (SAFETY, 'Safety'),
        (DECORATION, 'Decoration'),
        (CLEANING, 'Cleaning'),
        (OTHER, 'Other'),
    ]


class AssetCondition:
    EXCELLENT = 'EXCELLENT'
    GOOD = 'GOOD'
    FAIR = 'FAIR'
    POOR = 'POOR'
    DAMAGED = 'DAMAGED'
    BROKEN = 'BROKEN'
    MISSING = 'MISSING'

    CHOICES = [
        (EXCELLENT, 'Excellent'),
        (GOOD, 'Good'),
        (FAIR, 'Fair'),
        (POOR, 'Poor'),
        (DAMAGED, 'Damaged'),
        (BROKEN, 'Broken'),
        (MISSING, 'Missing'),
    ]


# Audit trail vocabulary
class AuditAction:
    CREATE = 'CREATE'
    UPDATE = 'UPDATE'
    DELETE = 'DELETE'
    LOGIN = 'LOGIN'
    LOGOUT = 'LOGOUT'
    STATUS_CHANGE = 'STATUS_CHANGE'
    PAYMENT = 'PAYMENT'
    EXTEND = 'EXTEND'
    SOFT_DELETE = 'SOFT_DELETE'
    RESTORE = 'RESTORE'
    PURGE = 'PURGE'
    DEPOSIT = 'DEPOSIT'
    REFUND = 'REFUND'

    CHOICES = [
        (CREATE, 'Create'),
        (UPDATE, 'Update'),
        (DELETE, 'Delete'),
        (LOGIN, 'Login'),
        (LOGOUT, 'Logout'),
        (STATUS_CHANGE, 'Status Change'),
        (PAYMENT, 'Payment'),
        (EXTEND, 'Extend Stay'),
        (SOFT_DELETE, 'Move to Trash'),
        (RESTORE, 'Restore'),
        (PURGE, 'Purge'),
        (DEPOSIT, 'Deposit Collected'),
        (REFUND, 'Deposit Settled'),
    ]


class AuditResource:
    BLOCK = 'Block'
    ROOM = 'Room'
    BOOKING = 'Booking'
    PAYMENT = 'Payment'
    DEPOSIT = 'SecurityDeposit'
    MAINTENANCE = 'MaintenanceLog'
    SERVICE = 'Service'
    USER = 'User'
    SETTING = 'Setting'

    CHOICES = [
        (BLOCK, 'Block'),
        (ROOM, 'Room'),
        (BOOKING, 'Booking'),
        (PAYMENT, 'Payment'),
        (DEPOSIT, 'Security Deposit'),
        (MAINTENANCE, 'Maintenance Log'),
        (SERVICE, 'Service'),
        (USER, 'User'),
        (SETTING, 'Setting'),
    ]


# Default Limits
class DefaultLimits:
    TEMP_PASSWORD_LENGTH = 12
    RECENT_BOOKINGS = 5
    URGENT_CHECKOUT_HOURS = 2


# Pagination
class Pagination:
    DEFAULT_PAGE_SIZE = 20
    MAX_PAGE_SIZE = 100
