from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from school_system.assessments.model import SubjectMark, calculate_test_score
from school_system.batches.model import Level
from school_system.core.exceptions import NotFoundError, ValidationError
from conftest import make_student


@pytest.fixture
def service(container):
    return container.assessment_service


def _record(service, *, level: int, day: date, obtained: float, total: float = 10, student_id: int = 1):
    return service.create_test(
        student_id=student_id,
        batch_id=1,
        level=level,
        test_name=f"Unit test {day.isoformat()}",
        test_date=day,
        subjects=[SubjectMark("Reading", obtained, total)],
    )


def test_score_sums_subjects_before_dividing():
    score = calculate_test_score([SubjectMark("Maths", 8, 10), SubjectMark("English", 7, 10)])

    assert score.total_obtained == 15
    assert score.total_possible == 20
    assert score.percent == pytest.approx(75.0)


def test_score_with_zero_total_is_zero():
    assert calculate_test_score([]).percent == 0.0


def test_create_test_stores_computed_percent(store, service):
    store.students.add(make_student(1, "Asha", "Rao"))

    test = service.create_test(
        student_id=1,
        batch_id=1,
        level=1,
        test_name="Mid term",
        test_date=date(2025, 3, 1),
        subjects=[SubjectMark("Maths", 8, 10), SubjectMark("English", 7, 10)],
    )

    assert test.percent == pytest.approx(75.0)
    assert store.tests.get_by_id(test.test_id).percent == pytest.approx(75.0)


def test_create_test_rejects_bad_marks(store, service):
    store.students.add(make_student(1, "Asha", "Rao"))

    with pytest.raises(ValidationError):
        _record(service, level=1, day=date(2025, 3, 1), obtained=5, total=0)
    with pytest.raises(ValidationError):
        _record(service, level=1, day=date(2025, 3, 1), obtained=-1)


def test_create_test_unknown_student(service):
    with pytest.raises(NotFoundError, match="Student with ID 1 not found"):
        _record(service, level=1, day=date(2025, 3, 1), obtained=5)


def test_level_summary_uses_most_recent_date(store, service):
    store.students.add(make_student(1, "Asha", "Rao"))
    _record(service, level=1, day=date(2025, 1, 10), obtained=8)
    _record(service, level=1, day=date(2025, 2, 10), obtained=6)

    summaries = service.summarize_student_levels(1)

    assert len(summaries) == 1
    assert summaries[0].level == 1
    assert summaries[0].tests_count == 2
    assert summaries[0].avg_percent == pytest.approx(70.0)
    assert summaries[0].last_test_date == date(2025, 2, 10)


def test_level_summary_groups_by_level(store, service):
    store.students.add(make_student(1, "Asha", "Rao", current_level=2))
    _record(service, level=1, day=date(2025, 1, 10), obtained=5)
    _record(service, level=2, day=date(2025, 4, 10), obtained=9)
    _record(service, level=2, day=date(2025, 5, 10), obtained=10)

    by_level = {s.level: s for s in service.summarize_student_levels(1)}

    assert by_level[1].tests_count == 1
    assert by_level[1].avg_percent == pytest.approx(50.0)
    assert by_level[2].avg_percent == pytest.approx(95.0)
    assert by_level[2].last_test_date == date(2025, 5, 10)


def test_level_summary_without_tests_is_empty(store, service):
    store.students.add(make_student(1, "Asha", "Rao"))

    assert service.summarize_student_levels(1) == []


def test_level_summary_reads_stored_percent(store, service):
    store.students.add(make_student(1, "Asha", "Rao"))
    test = _record(service, level=1, day=date(2025, 1, 10), obtained=8)
    # A stored percent that disagrees with the marks still wins.
    store.tests.tests[test.test_id] = replace(test, percent=42.0)

    assert service.summarize_student_levels(1)[0].avg_percent == pytest.approx(42.0)


def test_update_recomputes_totals(store, service):
    store.students.add(make_student(1, "Asha", "Rao"))
    test = _record(service, level=1, day=date(2025, 1, 10), obtained=4)

    updated = service.update_test(
        test.test_id,
        test_name="Retake",
        test_date=date(2025, 1, 20),
        subjects=[SubjectMark("Reading", 9, 10)],
    )

    assert updated.test_name == "Retake"
    assert updated.percent == pytest.approx(90.0)


def test_update_unknown_test(service):
    with pytest.raises(NotFoundError, match="Test with ID 5 not found"):
        service.update_test(5, test_name="x", test_date=date(2025, 1, 1), subjects=[SubjectMark("a", 1, 1)])


def test_delete_test(store, service):
    store.students.add(make_student(1, "Asha", "Rao"))
    test = _record(service, level=1, day=date(2025, 1, 10), obtained=4)

    service.delete_test(test.test_id)

    with pytest.raises(NotFoundError):
        service.get_test(test.test_id)


def test_level_performance_counts_passing_tests(store, service):
    store.students.add(make_student(1, "Asha", "Rao"))
    store.batches.levels[1] = Level(level_id=1, name="Beginner", order_number=1, passing_percent=60)
    _record(service, level=1, day=date(2025, 1, 10), obtained=5)
    _record(service, level=1, day=date(2025, 1, 20), obtained=6)
    _record(service, level=1, day=date(2025, 1, 30), obtained=10)

    perf = service.level_performance(1, 1)

    assert perf.total_tests == 3
    assert perf.passing_tests == 2
    assert perf.passing_percent == 60
    assert perf.average_percent == pytest.approx(70.0)


def test_level_performance_defaults_passing_to_fifty(store, service):
    store.students.add(make_student(1, "Asha", "Rao"))
    _record(service, level=1, day=date(2025, 1, 10), obtained=5)

    assert service.level_performance(1, 1).passing_tests == 1
    assert service.level_performance(1, 1).passing_percent == 50.0


def test_all_levels_performance_covers_every_level_up_to_current(store, service):
    store.students.add(make_student(1, "Asha", "Rao", current_level=3))
    _record(service, level=2, day=date(2025, 1, 10), obtained=7)

    rows = service.all_levels_performance(1)

    assert [r.level for r in rows] == [1, 2, 3]
    assert [r.total_tests for r in rows] == [0, 1, 0]


def test_level_performance_treats_zero_threshold_as_default(store, service):
    store.students.add(make_student(1, "Asha", "Rao"))
    store.batches.levels[1] = Level(level_id=1, name="Beginner", order_number=1, passing_percent=0)
    _record(service, level=1, day=date(2025, 1, 10), obtained=4)
    _record(service, level=1, day=date(2025, 1, 20), obtained=6)

    perf = service.level_performance(1, 1)

    assert perf.passing_percent == 50.0
    assert perf.passing_tests == 1


def test_level_performance_unknown_student(service):
    with pytest.raises(NotFoundError, match="Student with ID 8 not found"):
        service.level_performance(8, 1)


def test_list_for_student_unknown_student(service):
    with pytest.raises(NotFoundError, match="Student with ID 8 not found"):
        service.list_for_student(8)


def test_level_summary_is_repeatable(store, service):
    store.students.add(make_student(1, "Asha", "Rao", current_level=2))
    _record(service, level=1, day=date(2025, 1, 10), obtained=5)
    _record(service, level=2, day=date(2025, 4, 10), obtained=9)

    first = {s.level: s.to_dict() for s in service.summarize_student_levels(1)}
    second = {s.level: s.to_dict() for s in service.summarize_student_levels(1)}

    assert first == second
