from __future__ import annotations

from datetime import date

import pytest

from school_system.assessments.model import SubjectMark
from school_system.core.enums import AttendanceStatus, StudentStatus
from school_system.core.exceptions import NotFoundError
from school_system.fees.model import Fee
from conftest import make_student

P, A, L, E = AttendanceStatus.PRESENT, AttendanceStatus.ABSENT, AttendanceStatus.LATE, AttendanceStatus.EXCUSED


@pytest.fixture
def reports(container):
    return container.report_service


def _fee(fee_id: int, amount: float, paid: float) -> Fee:
    return Fee(
        fee_id=fee_id,
        student_id=1,
        invoice_number=f"INV-{fee_id:04d}",
        amount=amount,
        paid_amount=paid,
        due_date=date(2025, 6, 30),
    )


def test_dashboard_with_empty_store(store, reports):
    stats = reports.get_dashboard_stats()

    assert stats.total_students == 0
    assert stats.active_batches == 1
    assert stats.attendance_percent_overall == 0.0
    assert stats.fees_due == 0


def test_fees_due_is_amount_minus_paid(store, reports):
    store.fees.fees.append(_fee(1, 1000, 400))

    assert reports.get_dashboard_stats().fees_due == pytest.approx(600)


def test_fees_due_can_go_negative_on_overpayment(store, reports):
    store.fees.fees.extend([_fee(1, 100, 150), _fee(2, 50, 0)])

    assert reports.get_dashboard_stats().fees_due == pytest.approx(0)

    store.fees.fees.append(_fee(3, 10, 60))
    assert reports.get_dashboard_stats().fees_due == pytest.approx(-50)


def test_overall_percent_counts_late_but_not_excused(store, reports):
    store.students.add(make_student(1, "Asha", "Rao"))
    for i, status in enumerate([P, L, A, E], start=1):
        store.attendance.add(1, 1, date(2025, 3, i), status)

    stats = reports.get_dashboard_stats()

    assert stats.total_students == 1
    assert stats.attendance_percent_overall == pytest.approx(50.0)


def test_dashboard_is_repeatable(store, reports):
    store.students.add(make_student(1, "Asha", "Rao"))
    store.attendance.add(1, 1, date(2025, 3, 1), P)
    store.attendance.add(1, 1, date(2025, 3, 2), E)
    store.fees.fees.append(_fee(1, 300, 120))

    assert reports.get_dashboard_stats() == reports.get_dashboard_stats()


def test_dashboard_serializes_camel_case(store, reports):
    assert set(reports.get_dashboard_stats().to_dict()) == {
        "totalStudents",
        "activeBatches",
        "attendancePercentOverall",
        "feesDue",
    }


def test_batch_attendance_delegates(store, reports):
    store.students.add(make_student(1, "Asha", "Rao"))
    store.attendance.add(1, 1, date(2025, 3, 1), P)
    store.attendance.add(1, 1, date(2025, 3, 2), E)

    rows = reports.get_batch_attendance(1, date(2025, 3, 1), date(2025, 3, 31))

    assert len(rows) == 1
    assert rows[0].present_count == 1
    assert rows[0].present_percent == pytest.approx(50.0)


def test_batch_attendance_unknown_batch(reports):
    with pytest.raises(NotFoundError, match="Batch with ID 99 not found"):
        reports.get_batch_attendance(99)


def test_student_level_summary_delegates(store, container, reports):
    store.students.add(make_student(1, "Asha", "Rao"))
    container.assessment_service.create_test(
        student_id=1,
        batch_id=1,
        level=1,
        test_name="Quiz",
        test_date=date(2025, 2, 1),
        subjects=[SubjectMark("Maths", 8, 10), SubjectMark("English", 7, 10)],
    )

    rows = reports.get_student_level_summary(1)

    assert [r.to_dict() for r in rows] == [
        {"level": 1, "testsCount": 1, "lastTestDate": "2025-02-01", "avgPercent": pytest.approx(75.0)}
    ]


def test_attendance_issues_flags_more_than_three_absences(store, reports):
    store.students.add(make_student(1, "Asha", "Rao", batch_id=1, batch_name="Morning A"))
    store.students.add(make_student(2, "Ben", "Ode"))
    store.students.add(make_student(3, "Cai", "Lin", status=StudentStatus.INACTIVE))

    for day in (2, 3, 4, 5):
        store.attendance.add(1, 1, date(2025, 3, day), A)
        store.attendance.add(3, 1, date(2025, 3, day), A)
    store.attendance.add(1, 1, date(2025, 3, 6), L)
    store.attendance.add(1, 1, date(2025, 3, 1), P)
    for day in (2, 3, 4):
        store.attendance.add(2, 1, date(2025, 3, day), A)
    # previous month does not count
    store.attendance.add(2, 1, date(2025, 2, 27), A)

    issues = reports.get_attendance_issues(today=date(2025, 3, 15))

    assert len(issues) == 1
    assert issues[0].to_dict() == {
        "studentId": 1,
        "studentName": "Asha Rao",
        "batchName": "Morning A",
        "absencesThisMonth": 4,
        "totalClassesThisMonth": 6,
        "lastAttendance": "2025-03-06",
    }


def test_attendance_issues_sorted_by_absences(store, reports):
    store.students.add(make_student(1, "Asha", "Rao"))
    store.students.add(make_student(2, "Ben", "Ode"))
    for day in range(1, 5):
        store.attendance.add(1, 1, date(2025, 3, day), A)
    for day in range(1, 7):
        store.attendance.add(2, 1, date(2025, 3, day), A)

    issues = reports.get_attendance_issues(today=date(2025, 3, 20))

    assert [i.student_id for i in issues] == [2, 1]
    assert issues[0].batch_name == "No Batch"
    assert issues[0].last_attendance is None


def test_export_attendance_csv(store, reports):
    store.students.add(make_student(1, "Asha", "Rao"))
    store.attendance.add(1, 1, date(2025, 3, 1), P)
    store.attendance.add(1, 1, date(2025, 3, 2), A)

    lines = reports.export_attendance_csv().splitlines()

    assert lines == [
        "Date,Student Name,Batch,Status",
        "2025-03-02,Asha Rao,Morning A,ABSENT",
        "2025-03-01,Asha Rao,Morning A,PRESENT",
    ]
