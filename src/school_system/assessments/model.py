from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence


@dataclass(frozen=True)
class SubjectMark:
    name: str
    obtained: float
    total: float

    def to_dict(self) -> dict:
        return {"name": self.name, "obtained": self.obtained, "total": self.total}


@dataclass(frozen=True)
class TestScore:
    """Totals derived from subject marks when a test is saved."""

    total_obtained: float
    total_possible: float
    percent: float


def calculate_test_score(subjects: Sequence[SubjectMark]) -> TestScore:
    total_obtained = sum(s.obtained for s in subjects)
    total_possible = sum(s.total for s in subjects)
    percent = (total_obtained / total_possible) * 100 if total_possible else 0.0
    return TestScore(total_obtained=total_obtained, total_possible=total_possible, percent=percent)


@dataclass(frozen=True)
class TestRecord:
    """Domain entity: one student's result for one test.

    percent is stored at save time and is authoritative for reporting.
    """

    test_id: int
    student_id: int
    batch_id: int
    level: int
    test_name: str
    test_date: date
    subjects: tuple[SubjectMark, ...]
    total_obtained: float
    total_possible: float
    percent: float
    student_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.test_id,
            "studentId": self.student_id,
            "batchId": self.batch_id,
            "level": self.level,
            "testName": self.test_name,
            "date": self.test_date.isoformat(),
            "subjects": [s.to_dict() for s in self.subjects],
            "totalObtained": self.total_obtained,
            "totalPossible": self.total_possible,
            "percent": self.percent,
            "studentName": self.student_name,
        }


@dataclass(frozen=True)
class LevelSummary:
    level: int
    tests_count: int
    last_test_date: date
    avg_percent: float

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "testsCount": self.tests_count,
            "lastTestDate": self.last_test_date.isoformat(),
            "avgPercent": self.avg_percent,
        }


@dataclass(frozen=True)
class LevelPerformance:
    level: int
    total_tests: int
    average_percent: float
    passing_tests: int
    passing_percent: float

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "totalTests": self.total_tests,
            "averagePercent": self.average_percent,
            "passingTests": self.passing_tests,
            "passingPercent": self.passing_percent,
        }
