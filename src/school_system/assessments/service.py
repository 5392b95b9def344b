from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from ..batches.repository import BatchRepository
from ..common.app_logger import get_logger
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_PASSING_PERCENT
from ..core.exceptions import NotFoundError, ValidationError
from ..students.repository import StudentRepository
from .model import LevelPerformance, LevelSummary, SubjectMark, TestRecord, calculate_test_score
from .repository import TestRepository

logger = get_logger("assessments")


@dataclass
class _LevelTally:
    last_test_date: date
    total_percent: float = 0.0
    tests_count: int = 0


def _validate_subjects(subjects: Sequence[SubjectMark]) -> None:
    if not subjects:
        raise ValidationError("At least one subject mark is required")
    for s in subjects:
        require_non_empty(s.name, "Subject name")
        if s.obtained < 0:
            raise ValidationError(f"{s.name}: obtained marks cannot be negative")
        if s.total < 1:
            raise ValidationError(f"{s.name}: total marks must be at least 1")


class AssessmentService:
    """Stores test results and rolls them up per curriculum level."""

    def __init__(self, tests: TestRepository, students: StudentRepository, batches: BatchRepository):
        self._tests = tests
        self._students = students
        self._batches = batches

    def _require_student(self, student_id: int):
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student", student_id)
        return student

    def get_test(self, test_id: int) -> TestRecord:
        test = self._tests.get_by_id(test_id)
        if not test:
            raise NotFoundError("Test", test_id)
        return test

    def create_test(
        self,
        *,
        student_id: int,
        batch_id: int,
        level: int,
        test_name: str,
        test_date: date,
        subjects: Sequence[SubjectMark],
    ) -> TestRecord:
        self._require_student(student_id)
        if not self._batches.get_by_id(batch_id):
            raise NotFoundError("Batch", batch_id)
        test_name = require_non_empty(test_name, "Test name")
        _validate_subjects(subjects)

        score = calculate_test_score(subjects)
        test_id = self._tests.create(
            student_id=student_id,
            batch_id=batch_id,
            level=int(level),
            test_name=test_name,
            test_date=test_date,
            subjects=subjects,
            score=score,
        )
        logger.info("test %s recorded for student %s (%.2f%%)", test_id, student_id, score.percent)
        return self.get_test(test_id)

    def update_test(
        self,
        test_id: int,
        *,
        test_name: str,
        test_date: date,
        subjects: Sequence[SubjectMark],
    ) -> TestRecord:
        self.get_test(test_id)
        test_name = require_non_empty(test_name, "Test name")
        _validate_subjects(subjects)

        self._tests.update(
            test_id=test_id,
            test_name=test_name,
            test_date=test_date,
            subjects=subjects,
            score=calculate_test_score(subjects),
        )
        logger.info("test %s updated", test_id)
        return self.get_test(test_id)

    def delete_test(self, test_id: int) -> None:
        self.get_test(test_id)
        self._tests.delete(test_id)
        logger.info("test %s deleted", test_id)

    def list_for_student(self, student_id: int) -> Sequence[TestRecord]:
        self._require_student(student_id)
        return self._tests.list_for_student(student_id)

    def summarize_student_levels(self, student_id: int) -> list[LevelSummary]:
        """Average stored percent per level.

        Tests arrive most recent first, so the first test seen for a level
        carries that level's last_test_date.
        """
        self._require_student(student_id)
        tests = self._tests.list_for_student(student_id)

        by_level: dict[int, _LevelTally] = {}
        for t in tests:
            acc = by_level.get(t.level)
            if acc is None:
                acc = _LevelTally(last_test_date=t.test_date)
                by_level[t.level] = acc
            acc.total_percent += t.percent
            acc.tests_count += 1

        return [
            LevelSummary(
                level=level,
                tests_count=acc.tests_count,
                last_test_date=acc.last_test_date,
                avg_percent=acc.total_percent / acc.tests_count,
            )
            for level, acc in by_level.items()
        ]

    def level_performance(self, student_id: int, level: int) -> LevelPerformance:
        self._require_student(student_id)
        return self._level_performance(student_id, level)

    def _level_performance(self, student_id: int, level: int) -> LevelPerformance:
        tests = self._tests.list_for_student(student_id, level=level)
        if not tests:
            return LevelPerformance(
                level=level, total_tests=0, average_percent=0.0, passing_tests=0, passing_percent=0.0
            )

        level_ = self._batches.get_level(level)
        # an unset or zero threshold falls back to the default
        passing_percent = (level_.passing_percent if level_ else 0) or DEFAULT_PASSING_PERCENT

        return LevelPerformance(
            level=level,
            total_tests=len(tests),
            average_percent=sum(t.percent for t in tests) / len(tests),
            passing_tests=sum(1 for t in tests if t.percent >= passing_percent),
            passing_percent=passing_percent,
        )

    def all_levels_performance(self, student_id: int) -> list[LevelPerformance]:
        student = self._require_student(student_id)
        return [self._level_performance(student_id, level) for level in range(1, student.current_level + 1)]
