from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..assessments.model import LevelSummary
from ..assessments.service import AssessmentService
from ..attendance.model import StudentAttendanceStats
from ..attendance.repository import AttendanceRepository
from ..attendance.service import AttendanceService
from ..attendance.weighting.base import AttendanceWeighting, StatusTally
from ..attendance.weighting.strict import StrictWeighting
from ..batches.repository import BatchRepository
from ..common.app_logger import get_logger
from ..common.datetime_utils import start_of_month
from ..core.constants import ATTENDANCE_EXPORT_LIMIT, ATTENDANCE_ISSUE_ABSENCE_THRESHOLD
from ..core.enums import AttendanceStatus, StudentStatus
from ..fees.repository import FeeRepository
from ..students.repository import StudentRepository
from . import exporters
from .model import AttendanceIssue, DashboardStats

logger = get_logger("reports")


@dataclass
class _MonthTally:
    total_classes: int = 0
    absences: int = 0
    last_attendance: Optional[date] = None


class ReportService:
    """Dashboard and report views composed from the aggregators.

    Every call reads the store afresh; nothing is memoized.
    """

    def __init__(
        self,
        *,
        students: StudentRepository,
        batches: BatchRepository,
        attendance: AttendanceRepository,
        fees: FeeRepository,
        attendance_service: AttendanceService,
        assessment_service: AssessmentService,
        overall_weighting: AttendanceWeighting | None = None,
    ):
        self._students = students
        self._batches = batches
        self._attendance = attendance
        self._fees = fees
        self._attendance_service = attendance_service
        self._assessment_service = assessment_service
        self._overall_weighting = overall_weighting or StrictWeighting()

    def get_dashboard_stats(self) -> DashboardStats:
        tally = StatusTally()
        for status, count in self._attendance.status_counts().items():
            tally.add(status, count)

        stats = DashboardStats(
            total_students=self._students.count(),
            active_batches=self._batches.count(),
            attendance_percent_overall=self._overall_weighting.percent(tally),
            fees_due=self._fees.totals().due,
        )
        logger.debug("dashboard stats: %s", stats)
        return stats

    def get_batch_attendance(
        self,
        batch_id: int,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> list[StudentAttendanceStats]:
        return self._attendance_service.summarize_batch_attendance(batch_id, from_date, to_date)

    def get_student_level_summary(self, student_id: int) -> list[LevelSummary]:
        return self._assessment_service.summarize_student_levels(student_id)

    def get_attendance_issues(self, today: Optional[date] = None) -> list[AttendanceIssue]:
        """Active students with more than the allowed absences since the 1st of the month."""
        today = today or date.today()
        students = self._students.list_all(status=StudentStatus.ACTIVE)
        records = self._attendance.list_since(start_of_month(today))

        by_student: dict[int, _MonthTally] = {s.student_id: _MonthTally() for s in students}
        for r in records:
            acc = by_student.get(r.student_id)
            if acc is None:
                continue
            acc.total_classes += 1
            if r.status == AttendanceStatus.ABSENT:
                acc.absences += 1
            elif acc.last_attendance is None and r.status in (AttendanceStatus.PRESENT, AttendanceStatus.LATE):
                # records arrive most recent first
                acc.last_attendance = r.attendance_date

        issues = [
            AttendanceIssue(
                student_id=s.student_id,
                student_name=s.full_name,
                batch_name=s.batch_name or "No Batch",
                absences_this_month=by_student[s.student_id].absences,
                total_classes_this_month=by_student[s.student_id].total_classes,
                last_attendance=by_student[s.student_id].last_attendance,
            )
            for s in students
            if by_student[s.student_id].absences > ATTENDANCE_ISSUE_ABSENCE_THRESHOLD
        ]
        issues.sort(key=lambda i: i.absences_this_month, reverse=True)
        return issues

    def export_students_csv(self) -> str:
        return exporters.students_csv(self._students.list_all())

    def export_attendance_csv(self) -> str:
        return exporters.attendance_csv(self._attendance.list_recent(ATTENDANCE_EXPORT_LIMIT))

    def export_fees_csv(self) -> str:
        return exporters.fees_csv(self._fees.list_all())
