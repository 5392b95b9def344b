from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles checked by the access gate."""

    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    PARENT = "PARENT"


class AttendanceStatus(str, Enum):
    """Per-class attendance status stored in the database."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    EXCUSED = "EXCUSED"


class StudentStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class FeeStatus(str, Enum):
    """Derived from paid_amount vs amount; never stored."""

    PENDING = "PENDING"
    PARTIAL = "PARTIAL"
    PAID = "PAID"
