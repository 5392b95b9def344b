"""CSV renderings of students, attendance and fees for spreadsheet export."""
from __future__ import annotations

import csv
import io
from typing import Iterable, Sequence

from ..attendance.model import AttendanceRecord
from ..fees.model import Fee
from ..students.model import Student

STUDENT_COLUMNS = ["ID", "First Name", "Last Name", "Email", "Phone", "Batch", "Level", "Status"]
ATTENDANCE_COLUMNS = ["Date", "Student Name", "Batch", "Status"]
FEE_COLUMNS = ["Invoice Number", "Student Name", "Amount", "Paid Amount", "Due Date", "Status", "Created Date"]


def _render(header: Sequence[str], rows: Iterable[Sequence[object]]) -> str:
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return out.getvalue()


def students_csv(students: Iterable[Student]) -> str:
    return _render(
        STUDENT_COLUMNS,
        (
            [
                s.student_id,
                s.first_name,
                s.last_name,
                s.email or "N/A",
                s.phone_number or "N/A",
                s.batch_name or "N/A",
                s.level_name or "N/A",
                s.status.value,
            ]
            for s in students
        ),
    )


def attendance_csv(records: Iterable[AttendanceRecord]) -> str:
    return _render(
        ATTENDANCE_COLUMNS,
        (
            [r.attendance_date.isoformat(), r.student_name or "", r.batch_name or "", r.status.value]
            for r in records
        ),
    )


def fees_csv(fees: Iterable[Fee]) -> str:
    return _render(
        FEE_COLUMNS,
        (
            [
                f.invoice_number,
                f.student_name or "",
                f.amount,
                f.paid_amount,
                f.due_date.isoformat(),
                f.status.value,
                f.created_at.date().isoformat() if f.created_at else "",
            ]
            for f in fees
        ),
    )
