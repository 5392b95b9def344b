from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import FeeStatus


def derive_fee_status(amount: float, paid_amount: float) -> FeeStatus:
    if paid_amount >= amount:
        return FeeStatus.PAID
    if paid_amount > 0:
        return FeeStatus.PARTIAL
    return FeeStatus.PENDING


@dataclass(frozen=True)
class Fee:
    fee_id: int
    student_id: int
    invoice_number: str
    amount: float
    paid_amount: float
    due_date: date
    created_at: Optional[datetime] = None
    student_name: Optional[str] = None

    @property
    def status(self) -> FeeStatus:
        return derive_fee_status(self.amount, self.paid_amount)


@dataclass(frozen=True)
class FeeTotals:
    """Organization-wide sums over every fee record."""

    amount: float = 0.0
    paid_amount: float = 0.0

    @property
    def due(self) -> float:
        # Overpayment makes this negative; not clamped.
        return self.amount - self.paid_amount
