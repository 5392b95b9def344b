from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import iso_or_none


@dataclass(frozen=True)
class DashboardStats:
    total_students: int
    active_batches: int
    attendance_percent_overall: float
    fees_due: float

    def to_dict(self) -> dict:
        return {
            "totalStudents": self.total_students,
            "activeBatches": self.active_batches,
            "attendancePercentOverall": self.attendance_percent_overall,
            "feesDue": self.fees_due,
        }


@dataclass(frozen=True)
class AttendanceIssue:
    """An active student with too many absences this month."""

    student_id: int
    student_name: str
    batch_name: str
    absences_this_month: int
    total_classes_this_month: int
    last_attendance: Optional[date]

    def to_dict(self) -> dict:
        return {
            "studentId": self.student_id,
            "studentName": self.student_name,
            "batchName": self.batch_name,
            "absencesThisMonth": self.absences_this_month,
            "totalClassesThisMonth": self.total_classes_this_month,
            "lastAttendance": iso_or_none(self.last_attendance),
        }
