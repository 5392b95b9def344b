from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_student(
        self,
        student_id: int,
        *,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Inclusive bounds, most recent first."""

        raise NotImplementedError

    def list_for_batch(
        self,
        batch_id: int,
        *,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_batch_and_date(self, batch_id: int, attendance_date: date) -> Sequence[AttendanceRecord]:
        """Ordered by student first name."""

        raise NotImplementedError

    def list_since(self, since: date) -> Sequence[AttendanceRecord]:
        """All records on or after `since`, most recent first."""

        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def status_counts(self) -> Mapping[AttendanceStatus, int]:
        """Organization-wide record count per status."""

        raise NotImplementedError

    def create(
        self,
        *,
        student_id: int,
        batch_id: int,
        attendance_date: date,
        status: AttendanceStatus,
        note: Optional[str] = None,
        marked_by: Optional[int] = None,
    ) -> int:
        raise NotImplementedError
