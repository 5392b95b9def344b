from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import Batch, Level
from .repository import BatchRepository


class MySQLBatchRepository(BatchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, batch_id: int) -> Optional[Batch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT batch_id, name, level_id, teacher_id, day_mask, start_time, end_time, capacity
                FROM batches
                WHERE batch_id=%s
                """,
                (batch_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Batch(
                batch_id=int(r["batch_id"]),
                name=r["name"],
                level_id=int(r["level_id"]),
                teacher_id=r.get("teacher_id"),
                day_mask=r.get("day_mask") or "",
                start_time=normalize_mysql_time(r.get("start_time")),
                end_time=normalize_mysql_time(r.get("end_time")),
                capacity=int(r["capacity"]),
            )

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM batches")
            return int(fetchone(cur)["n"])

    def get_level(self, level_id: int) -> Optional[Level]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT level_id, name, order_number, passing_percent FROM levels WHERE level_id=%s",
                (level_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Level(
                level_id=int(r["level_id"]),
                name=r["name"],
                order_number=int(r["order_number"]),
                passing_percent=float(r["passing_percent"]),
            )
