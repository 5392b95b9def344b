from __future__ import annotations

from typing import Protocol, Sequence

from .model import Fee, FeeTotals


class FeeRepository(Protocol):
    def totals(self) -> FeeTotals:
        raise NotImplementedError

    def list_all(self) -> Sequence[Fee]:
        """Every fee with the student name joined, newest first."""

        raise NotImplementedError
