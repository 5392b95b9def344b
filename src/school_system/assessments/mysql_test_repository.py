from __future__ import annotations

import json
from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SubjectMark, TestRecord, TestScore
from .repository import TestRepository

_SELECT = """
    SELECT t.test_id, t.student_id, t.batch_id, t.level, t.test_name, t.test_date, t.subjects,
           t.total_obtained, t.total_possible, t.percent,
           CONCAT(s.first_name, ' ', s.last_name) AS student_name
    FROM tests t
    JOIN students s ON s.student_id = t.student_id
"""


def _dump_subjects(subjects: Sequence[SubjectMark]) -> str:
    return json.dumps([s.to_dict() for s in subjects])


def _load_subjects(raw) -> tuple[SubjectMark, ...]:
    items = json.loads(raw) if isinstance(raw, (str, bytes, bytearray)) else (raw or [])
    return tuple(
        SubjectMark(name=i["name"], obtained=float(i["obtained"]), total=float(i["total"])) for i in items
    )


def _to_test(r: dict) -> TestRecord:
    return TestRecord(
        test_id=int(r["test_id"]),
        student_id=int(r["student_id"]),
        batch_id=int(r["batch_id"]),
        level=int(r["level"]),
        test_name=r["test_name"],
        test_date=r["test_date"],
        subjects=_load_subjects(r["subjects"]),
        total_obtained=float(r["total_obtained"]),
        total_possible=float(r["total_possible"]),
        percent=float(r["percent"]),
        student_name=r.get("student_name"),
    )


class MySQLTestRepository(TestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, test_id: int) -> Optional[TestRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE t.test_id=%s", (test_id,))
            r = fetchone(cur)
            return _to_test(r) if r else None

    def list_for_student(self, student_id: int, *, level: Optional[int] = None) -> Sequence[TestRecord]:
        sql = _SELECT + " WHERE t.student_id=%s"
        params: list[object] = [student_id]
        if level is not None:
            sql += " AND t.level=%s"
            params.append(int(level))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " ORDER BY t.test_date DESC, t.test_id DESC", tuple(params))
            return [_to_test(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        student_id: int,
        batch_id: int,
        level: int,
        test_name: str,
        test_date: date,
        subjects: Sequence[SubjectMark],
        score: TestScore,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tests(student_id, batch_id, level, test_name, test_date, subjects,
                                  total_obtained, total_possible, percent)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    student_id,
                    batch_id,
                    level,
                    test_name,
                    test_date,
                    _dump_subjects(subjects),
                    score.total_obtained,
                    score.total_possible,
                    score.percent,
                ),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        test_id: int,
        test_name: str,
        test_date: date,
        subjects: Sequence[SubjectMark],
        score: TestScore,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE tests
                SET test_name=%s, test_date=%s, subjects=%s, total_obtained=%s, total_possible=%s, percent=%s
                WHERE test_id=%s
                """,
                (
                    test_name,
                    test_date,
                    _dump_subjects(subjects),
                    score.total_obtained,
                    score.total_possible,
                    score.percent,
                    int(test_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, test_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tests WHERE test_id=%s", (int(test_id),))
            return cur.rowcount > 0
