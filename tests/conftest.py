from __future__ import annotations

from dataclasses import replace
from datetime import date
from types import SimpleNamespace
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from school_system.assessments.model import TestRecord
from school_system.attendance.model import AttendanceRecord
from school_system.batches.model import Batch, Level
from school_system.container import build_services
from school_system.core.enums import AttendanceStatus, Role, StudentStatus
from school_system.fees.model import Fee, FeeTotals
from school_system.guardians.model import Guardian
from school_system.main import create_app
from school_system.students.model import Student
from school_system.users.model import User


def make_student(student_id: int, first: str, last: str, **kwargs) -> Student:
    kwargs.setdefault("current_level", 1)
    kwargs.setdefault("status", StudentStatus.ACTIVE)
    return Student(student_id=student_id, first_name=first, last_name=last, **kwargs)


class InMemoryStudents:
    def __init__(self):
        self.students: dict[int, Student] = {}

    def add(self, student: Student) -> Student:
        self.students[student.student_id] = student
        return student

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self.students.get(student_id)

    def count(self) -> int:
        return len(self.students)

    def list_all(self, *, status=None):
        rows = sorted(self.students.values(), key=lambda s: s.student_id)
        return [s for s in rows if status is None or s.status == status]


class InMemoryBatches:
    def __init__(self):
        self.batches: dict[int, Batch] = {}
        self.levels: dict[int, Level] = {}

    def add(self, batch: Batch) -> Batch:
        self.batches[batch.batch_id] = batch
        return batch

    def get_by_id(self, batch_id: int) -> Optional[Batch]:
        return self.batches.get(batch_id)

    def count(self) -> int:
        return len(self.batches)

    def get_level(self, level_id: int) -> Optional[Level]:
        return self.levels.get(level_id)


class InMemoryAttendance:
    """Mimics the SQL joins by filling names from the student/batch fakes."""

    def __init__(self, students: InMemoryStudents, batches: InMemoryBatches):
        self._students = students
        self._batches = batches
        self._next_id = 1
        self.records: list[AttendanceRecord] = []

    def create(self, *, student_id, batch_id, attendance_date, status, note=None, marked_by=None) -> int:
        attendance_id = self._next_id
        self._next_id += 1
        student = self._students.get_by_id(student_id)
        batch = self._batches.get_by_id(batch_id)
        self.records.append(
            AttendanceRecord(
                attendance_id=attendance_id,
                student_id=student_id,
                batch_id=batch_id,
                attendance_date=attendance_date,
                status=status,
                note=note,
                marked_by=marked_by,
                student_name=student.full_name if student else None,
                batch_name=batch.name if batch else None,
            )
        )
        return attendance_id

    def add(self, student_id: int, batch_id: int, day: date, status: AttendanceStatus) -> int:
        return self.create(student_id=student_id, batch_id=batch_id, attendance_date=day, status=status)

    @staticmethod
    def _in_range(r, from_date, to_date) -> bool:
        if from_date is not None and r.attendance_date < from_date:
            return False
        if to_date is not None and r.attendance_date > to_date:
            return False
        return True

    @staticmethod
    def _newest_first(rows):
        return sorted(rows, key=lambda r: (r.attendance_date, r.attendance_id), reverse=True)

    def list_for_student(self, student_id, *, from_date=None, to_date=None):
        return self._newest_first(
            r for r in self.records if r.student_id == student_id and self._in_range(r, from_date, to_date)
        )

    def list_for_batch(self, batch_id, *, from_date=None, to_date=None):
        return [r for r in self.records if r.batch_id == batch_id and self._in_range(r, from_date, to_date)]

    def list_for_batch_and_date(self, batch_id, attendance_date):
        rows = [r for r in self.records if r.batch_id == batch_id and r.attendance_date == attendance_date]
        return sorted(rows, key=lambda r: r.student_name or "")

    def list_since(self, since):
        return self._newest_first(r for r in self.records if r.attendance_date >= since)

    def list_recent(self, limit):
        return self._newest_first(self.records)[:limit]

    def status_counts(self):
        counts: dict[AttendanceStatus, int] = {}
        for r in self.records:
            counts[r.status] = counts.get(r.status, 0) + 1
        return counts


class InMemoryTests:
    def __init__(self, students: InMemoryStudents):
        self._students = students
        self._next_id = 1
        self.tests: dict[int, TestRecord] = {}

    def get_by_id(self, test_id):
        return self.tests.get(test_id)

    def list_for_student(self, student_id, *, level=None):
        rows = [
            t for t in self.tests.values() if t.student_id == student_id and (level is None or t.level == level)
        ]
        return sorted(rows, key=lambda t: (t.test_date, t.test_id), reverse=True)

    def create(self, *, student_id, batch_id, level, test_name, test_date, subjects, score) -> int:
        test_id = self._next_id
        self._next_id += 1
        student = self._students.get_by_id(student_id)
        self.tests[test_id] = TestRecord(
            test_id=test_id,
            student_id=student_id,
            batch_id=batch_id,
            level=level,
            test_name=test_name,
            test_date=test_date,
            subjects=tuple(subjects),
            total_obtained=score.total_obtained,
            total_possible=score.total_possible,
            percent=score.percent,
            student_name=student.full_name if student else None,
        )
        return test_id

    def update(self, *, test_id, test_name, test_date, subjects, score) -> bool:
        current = self.tests.get(test_id)
        if not current:
            return False
        self.tests[test_id] = replace(
            current,
            test_name=test_name,
            test_date=test_date,
            subjects=tuple(subjects),
            total_obtained=score.total_obtained,
            total_possible=score.total_possible,
            percent=score.percent,
        )
        return True

    def delete(self, test_id) -> bool:
        return self.tests.pop(test_id, None) is not None


class InMemoryFees:
    def __init__(self):
        self.fees: list[Fee] = []

    def totals(self) -> FeeTotals:
        return FeeTotals(
            amount=sum(f.amount for f in self.fees),
            paid_amount=sum(f.paid_amount for f in self.fees),
        )

    def list_all(self):
        return list(self.fees)


class InMemoryGuardians:
    def __init__(self):
        self.links: list[Guardian] = []

    def is_guardian(self, *, user_id, student_id) -> bool:
        return any(g.user_id == user_id and g.student_id == student_id for g in self.links)

    def list_for_user(self, user_id):
        return [g for g in self.links if g.user_id == user_id]


class InMemoryUsers:
    def __init__(self):
        self.users: dict[int, User] = {}

    def add(self, user_id: int, email: str, password: str, role: Role) -> User:
        user = User(
            user_id=user_id,
            name=email.split("@")[0].title(),
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
        )
        self.users[user_id] = user
        return user

    def get_by_id(self, user_id):
        return self.users.get(user_id)

    def get_by_email(self, email):
        return next((u for u in self.users.values() if u.email == email), None)


@pytest.fixture
def store():
    students = InMemoryStudents()
    batches = InMemoryBatches()
    batches.add(Batch(batch_id=1, name="Morning A", level_id=1, capacity=20))
    return SimpleNamespace(
        users=InMemoryUsers(),
        students=students,
        batches=batches,
        guardians=InMemoryGuardians(),
        attendance=InMemoryAttendance(students, batches),
        tests=InMemoryTests(students),
        fees=InMemoryFees(),
    )


@pytest.fixture
def container(store):
    return build_services(
        users_repo=store.users,
        students_repo=store.students,
        batches_repo=store.batches,
        guardians_repo=store.guardians,
        attendance_repo=store.attendance,
        tests_repo=store.tests,
        fees_repo=store.fees,
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    def _login(role: Role, user_id: int = 1):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["name"] = role.value.title()
            sess["role"] = role.value
        return client

    return _login
