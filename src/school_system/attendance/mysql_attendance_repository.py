from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import date_range_clauses, db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT a.attendance_id, a.student_id, a.batch_id, a.attendance_date, a.status, a.note, a.marked_by,
           CONCAT(s.first_name, ' ', s.last_name) AS student_name,
           b.name AS batch_name
    FROM attendance a
    JOIN students s ON s.student_id = a.student_id
    JOIN batches b ON b.batch_id = a.batch_id
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        student_id=int(r["student_id"]),
        batch_id=int(r["batch_id"]),
        attendance_date=r["attendance_date"],
        status=AttendanceStatus(r["status"]),
        note=r.get("note"),
        marked_by=r.get("marked_by"),
        student_name=r.get("student_name"),
        batch_name=r.get("batch_name"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, clauses: list[str], params: list[object], *, order_by: str, limit: Optional[int] = None):
        sql = _SELECT
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += f" ORDER BY {order_by}"
        if limit is not None:
            sql += " LIMIT %s"
            params = [*params, int(limit)]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_student(
        self,
        student_id: int,
        *,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses, params = date_range_clauses("a.attendance_date", from_date, to_date)
        return self._select(
            ["a.student_id=%s", *clauses],
            [student_id, *params],
            order_by="a.attendance_date DESC, a.attendance_id DESC",
        )

    def list_for_batch(
        self,
        batch_id: int,
        *,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses, params = date_range_clauses("a.attendance_date", from_date, to_date)
        return self._select(
            ["a.batch_id=%s", *clauses],
            [batch_id, *params],
            order_by="a.attendance_date ASC, a.attendance_id ASC",
        )

    def list_for_batch_and_date(self, batch_id: int, attendance_date: date) -> Sequence[AttendanceRecord]:
        return self._select(
            ["a.batch_id=%s", "a.attendance_date=%s"],
            [batch_id, attendance_date],
            order_by="s.first_name ASC, a.attendance_id ASC",
        )

    def list_since(self, since: date) -> Sequence[AttendanceRecord]:
        return self._select(
            ["a.attendance_date >= %s"],
            [since],
            order_by="a.attendance_date DESC, a.attendance_id DESC",
        )

    def list_recent(self, limit: int) -> Sequence[AttendanceRecord]:
        return self._select([], [], order_by="a.attendance_date DESC, a.attendance_id DESC", limit=limit)

    def status_counts(self) -> Mapping[AttendanceStatus, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT status, COUNT(*) AS n FROM attendance GROUP BY status")
            return {AttendanceStatus(r["status"]): int(r["n"]) for r in fetchall(cur)}

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(student_id, batch_id, attendance_date, status, note, marked_by)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (student_id, batch_id, attendance_date, status.value, note, marked_by),
            )
            return int(cur.lastrowid)
