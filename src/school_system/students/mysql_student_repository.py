from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import StudentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository

_SELECT = """
    SELECT s.student_id, s.first_name, s.last_name, s.email, s.phone_number,
           s.current_level, s.batch_id, s.status,
           b.name AS batch_name, l.name AS level_name
    FROM students s
    LEFT JOIN batches b ON b.batch_id = s.batch_id
    LEFT JOIN levels l ON l.level_id = b.level_id
"""


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        first_name=r["first_name"],
        last_name=r["last_name"],
        email=r.get("email"),
        phone_number=r.get("phone_number"),
        current_level=int(r["current_level"]),
        batch_id=r.get("batch_id"),
        status=StudentStatus(r["status"]),
        batch_name=r.get("batch_name"),
        level_name=r.get("level_name"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE s.student_id=%s", (student_id,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM students")
            return int(fetchone(cur)["n"])

    def list_all(self, *, status: Optional[StudentStatus] = None) -> Sequence[Student]:
        sql = _SELECT
        params: tuple = ()
        if status is not None:
            sql += " WHERE s.status=%s"
            params = (status.value,)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " ORDER BY s.student_id ASC", params)
            return [_to_student(r) for r in fetchall(cur)]
