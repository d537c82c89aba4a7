from __future__ import annotations

from enum import Enum


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class AttendanceStatus(str, Enum):
    """Attendance mark stored per subject and day."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class Attendee(str, Enum):
    """Who an attendance sheet is kept for."""

    STUDENT = "student"
    TEACHER = "teacher"


class FeeStatus(str, Enum):
    PAID = "paid"
    UNPAID = "unpaid"
    PARTIAL = "partial"


class SalaryStatus(str, Enum):
    PAID = "paid"
    UNPAID = "unpaid"


class PaymentMode(str, Enum):
    CASH = "cash"
    BANK = "bank"
    ONLINE = "online"
