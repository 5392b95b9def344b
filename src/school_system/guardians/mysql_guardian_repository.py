from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Guardian
from .repository import GuardianRepository


class MySQLGuardianRepository(GuardianRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def is_guardian(self, *, user_id: int, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS ok FROM guardians WHERE user_id=%s AND student_id=%s LIMIT 1",
                (user_id, student_id),
            )
            return fetchone(cur) is not None

    def list_for_user(self, user_id: int) -> Sequence[Guardian]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT guardian_id, user_id, student_id, relationship, is_primary, can_pickup, emergency_contact
                FROM guardians
                WHERE user_id=%s
                ORDER BY is_primary DESC, student_id ASC
                """,
                (user_id,),
            )
            return [
                Guardian(
                    guardian_id=int(r["guardian_id"]),
                    user_id=int(r["user_id"]),
                    student_id=int(r["student_id"]),
                    relationship=r["relationship"],
                    is_primary=bool(r["is_primary"]),
                    can_pickup=bool(r["can_pickup"]),
                    emergency_contact=bool(r["emergency_contact"]),
                )
                for r in fetchall(cur)
            ]
