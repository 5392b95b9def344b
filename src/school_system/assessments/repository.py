from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import SubjectMark, TestRecord, TestScore


class TestRepository(Protocol):
    def get_by_id(self, test_id: int) -> Optional[TestRecord]:
        raise NotImplementedError

    def list_for_student(self, student_id: int, *, level: Optional[int] = None) -> Sequence[TestRecord]:
        """Most recent test first."""

        raise NotImplementedError

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
        raise NotImplementedError

    def update(
        self,
        *,
        test_id: int,
        test_name: str,
        test_date: date,
        subjects: Sequence[SubjectMark],
        score: TestScore,
    ) -> bool:
        raise NotImplementedError

    def delete(self, test_id: int) -> bool:
        raise NotImplementedError
