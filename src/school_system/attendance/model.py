from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's status for one class date.

    student_name / batch_name are read-model fields filled by joins.
    """

    attendance_id: int
    student_id: int
    batch_id: int
    attendance_date: date
    status: AttendanceStatus
    note: Optional[str] = None
    marked_by: Optional[int] = None
    student_name: Optional[str] = None
    batch_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "studentId": self.student_id,
            "batchId": self.batch_id,
            "date": self.attendance_date.isoformat(),
            "status": self.status.value,
            "note": self.note,
            "markedBy": self.marked_by,
            "studentName": self.student_name,
            "batchName": self.batch_name,
        }


@dataclass(frozen=True)
class AttendanceEntry:
    """One line of a batch attendance sheet."""

    student_id: int
    status: AttendanceStatus
    note: Optional[str] = None


@dataclass(frozen=True)
class AttendanceSummary:
    total_classes: int
    present_count: int
    absent_count: int
    late_count: int
    excused_count: int
    attendance_percent: float

    @classmethod
    def empty(cls) -> "AttendanceSummary":
        return cls(0, 0, 0, 0, 0, 0.0)

    def to_dict(self) -> dict:
        return {
            "totalClasses": self.total_classes,
            "presentCount": self.present_count,
            "absentCount": self.absent_count,
            "lateCount": self.late_count,
            "excusedCount": self.excused_count,
            "attendancePercent": self.attendance_percent,
        }


@dataclass(frozen=True)
class StudentAttendanceStats:
    """Per-student row of a batch attendance report.

    present_count includes LATE; EXCUSED earns no credit here.
    """

    student_id: int
    student_name: str
    total_classes: int
    present_count: int
    present_percent: float

    def to_dict(self) -> dict:
        return {
            "studentId": self.student_id,
            "studentName": self.student_name,
            "totalClasses": self.total_classes,
            "presentCount": self.present_count,
            "presentPercent": self.present_percent,
        }
