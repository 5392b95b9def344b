from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Fee, FeeTotals
from .repository import FeeRepository


class MySQLFeeRepository(FeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def totals(self) -> FeeTotals:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT SUM(amount) AS amount, SUM(paid_amount) AS paid_amount FROM fees")
            r = fetchone(cur) or {}
            # SUM over zero rows is NULL
            return FeeTotals(
                amount=float(r.get("amount") or 0),
                paid_amount=float(r.get("paid_amount") or 0),
            )

    def list_all(self) -> Sequence[Fee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT f.fee_id, f.student_id, f.invoice_number, f.amount, f.paid_amount,
                       f.due_date, f.created_at,
                       CONCAT(s.first_name, ' ', s.last_name) AS student_name
                FROM fees f
                JOIN students s ON s.student_id = f.student_id
                ORDER BY f.created_at DESC, f.fee_id DESC
                """
            )
            return [
                Fee(
                    fee_id=int(r["fee_id"]),
                    student_id=int(r["student_id"]),
                    invoice_number=r["invoice_number"],
                    amount=float(r["amount"]),
                    paid_amount=float(r["paid_amount"]),
                    due_date=r["due_date"],
                    created_at=r.get("created_at"),
                    student_name=r.get("student_name"),
                )
                for r in fetchall(cur)
            ]
