from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

from ..batches.repository import BatchRepository
from ..common.app_logger import get_logger
from ..common.datetime_utils import is_inverted_range
from ..core.exceptions import NotFoundError, ValidationError
from ..students.repository import StudentRepository
from .model import AttendanceEntry, AttendanceRecord, AttendanceSummary, StudentAttendanceStats
from .repository import AttendanceRepository
from .weighting.base import AttendanceWeighting, StatusTally
from .weighting.partial_credit import PartialCreditWeighting
from .weighting.strict import StrictWeighting

logger = get_logger("attendance")


@dataclass
class _StudentTally:
    student_name: str
    statuses: StatusTally = field(default_factory=StatusTally)


class AttendanceService:
    """Marks attendance and computes attendance summaries.

    Summaries are recomputed from the stored records on every call.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        batches: BatchRepository,
        *,
        student_weighting: AttendanceWeighting | None = None,
        batch_weighting: AttendanceWeighting | None = None,
    ):
        self._attendance = attendance
        self._students = students
        self._batches = batches
        self._student_weighting = student_weighting or PartialCreditWeighting()
        self._batch_weighting = batch_weighting or StrictWeighting()

    def _require_student(self, student_id: int):
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student", student_id)
        return student

    def _require_batch(self, batch_id: int):
        batch = self._batches.get_by_id(batch_id)
        if not batch:
            raise NotFoundError("Batch", batch_id)
        return batch

    def mark_batch_attendance(
        self,
        *,
        marked_by: int,
        batch_id: int,
        attendance_date: date,
        entries: Sequence[AttendanceEntry],
    ) -> list[AttendanceRecord]:
        # No (student, date) uniqueness check: re-marking a day adds new rows.
        batch = self._require_batch(batch_id)
        if not entries:
            raise ValidationError("At least one attendance entry is required")

        students = {e.student_id: self._require_student(e.student_id) for e in entries}

        created: list[AttendanceRecord] = []
        for entry in entries:
            attendance_id = self._attendance.create(
                student_id=entry.student_id,
                batch_id=batch_id,
                attendance_date=attendance_date,
                status=entry.status,
                note=entry.note,
                marked_by=marked_by,
            )
            created.append(
                AttendanceRecord(
                    attendance_id=attendance_id,
                    student_id=entry.student_id,
                    batch_id=batch_id,
                    attendance_date=attendance_date,
                    status=entry.status,
                    note=entry.note,
                    marked_by=marked_by,
                    student_name=students[entry.student_id].full_name,
                    batch_name=batch.name,
                )
            )

        logger.info("user %s marked %d records for batch %s on %s", marked_by, len(created), batch_id, attendance_date)
        return created

    def list_for_student(self, student_id: int) -> Sequence[AttendanceRecord]:
        self._require_student(student_id)
        return self._attendance.list_for_student(student_id)

    def list_for_batch_and_date(self, batch_id: int, attendance_date: date) -> Sequence[AttendanceRecord]:
        self._require_batch(batch_id)
        return self._attendance.list_for_batch_and_date(batch_id, attendance_date)

    def summarize_student_attendance(
        self,
        student_id: int,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> AttendanceSummary:
        self._require_student(student_id)
        if is_inverted_range(from_date, to_date):
            return AttendanceSummary.empty()

        records = self._attendance.list_for_student(student_id, from_date=from_date, to_date=to_date)
        tally = StatusTally.of(r.status for r in records)
        if tally.total == 0:
            return AttendanceSummary.empty()

        logger.debug("student %s attendance over %d records", student_id, tally.total)
        return AttendanceSummary(
            total_classes=tally.total,
            present_count=tally.present,
            absent_count=tally.absent,
            late_count=tally.late,
            excused_count=tally.excused,
            attendance_percent=self._student_weighting.percent(tally),
        )

    def summarize_batch_attendance(
        self,
        batch_id: int,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> list[StudentAttendanceStats]:
        self._require_batch(batch_id)
        if is_inverted_range(from_date, to_date):
            return []

        records = self._attendance.list_for_batch(batch_id, from_date=from_date, to_date=to_date)

        by_student: dict[int, _StudentTally] = {}
        for r in records:
            acc = by_student.get(r.student_id)
            if acc is None:
                acc = _StudentTally(student_name=r.student_name or "")
                by_student[r.student_id] = acc
            acc.statuses.add(r.status)

        logger.debug("batch %s attendance over %d records, %d students", batch_id, len(records), len(by_student))
        return [
            StudentAttendanceStats(
                student_id=student_id,
                student_name=acc.student_name,
                total_classes=acc.statuses.total,
                present_count=acc.statuses.present + acc.statuses.late,
                present_percent=self._batch_weighting.percent(acc.statuses),
            )
            for student_id, acc in by_student.items()
        ]
