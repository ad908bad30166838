"""
Application-wide constants.
Centralized constants following DRY principle.
"""


# Room Status (derived, never stored)
class RoomStatus:
    VACANT = 'VACANT'
    AVAILABLE = 'AVAILABLE'
    FULL = 'FULL'
    MAINTENANCE = 'MAINTENANCE'

    CHOICES = [
        (VACANT, 'Vacant'),
        (AVAILABLE, 'Available'),
        (FULL, 'Full'),
        (MAINTENANCE, 'Maintenance'),
    ]

    ALL = [VACANT, AVAILABLE, FULL, MAINTENANCE]


# Request lifecycle
class RequestStatus:
    PENDING = 'PENDING'
    APPROVED = 'APPROVED'
    REJECTED = 'REJECTED'

    CHOICES = [
        (PENDING, 'Pending'),
        (APPROVED, 'Approved'),
        (REJECTED, 'Rejected'),
    ]

    TERMINAL = [APPROVED, REJECTED]


# Request variants
class RequestType:
    NEW_ASSIGNMENT = 'NEW_ASSIGNMENT'
    TRANSFER = 'TRANSFER'
    MOVE_OUT = 'MOVE_OUT'

    CHOICES = [
        (NEW_ASSIGNMENT, 'New Assignment'),
        (TRANSFER, 'Transfer'),
        (MOVE_OUT, 'Move Out'),
    ]


# Administrator decision
class Decision:
    APPROVE = 'APPROVE'
    REJECT = 'REJECT'

    CHOICES = [
        (APPROVE, 'Approve'),
        (REJECT, 'Reject'),
    ]


# Room price period
class PricePeriod:
    DAILY = 'daily'
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'

    CHOICES = [
        (DAILY, 'Daily'),
        (WEEKLY, 'Weekly'),
        (MONTHLY, 'Monthly'),
    ]


class SizeUnit:
    SQM = 'sqm'
    SQFT = 'sqft'

    CHOICES = [
        (SQM, 'Square meters'),
        (SQFT, 'Square feet'),
    ]


# Property amenities
class Amenity:
    CHOICES = ['WiFi', 'Parking', 'Security', 'Laundry', 'Kitchen', 'Common Area', 'Other']


# Defaults
class Defaults:
    CURRENCY = 'PHP'
    COUNTRY = 'Philippines'
    APPROVAL_MESSAGE = 'Your request has been approved'
    REJECTION_MESSAGE = 'Your request has been rejected'
    SYSTEM_ADMIN_ID = 'system'

