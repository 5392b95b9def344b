from __future__ import annotations

from dataclasses import dataclass

from .assessments.mysql_test_repository import MySQLTestRepository
from .assessments.service import AssessmentService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .batches.mysql_batch_repository import MySQLBatchRepository
from .database.connection import DBConfig, DatabaseConnection
from .fees.mysql_fee_repository import MySQLFeeRepository
from .guardians.mysql_guardian_repository import MySQLGuardianRepository
from .guardians.service import GuardianService
from .reports.service import ReportService
from .students.mysql_student_repository import MySQLStudentRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    guardian_service: GuardianService
    attendance_service: AttendanceService
    assessment_service: AssessmentService
    report_service: ReportService


def build_services(
    *,
    users_repo,
    students_repo,
    batches_repo,
    guardians_repo,
    attendance_repo,
    tests_repo,
    fees_repo,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""
    attendance_service = AttendanceService(attendance_repo, students_repo, batches_repo)
    assessment_service = AssessmentService(tests_repo, students_repo, batches_repo)

    return Container(
        auth_service=AuthService(users_repo),
        guardian_service=GuardianService(guardians_repo),
        attendance_service=attendance_service,
        assessment_service=assessment_service,
        report_service=ReportService(
            students=students_repo,
            batches=batches_repo,
            attendance=attendance_repo,
            fees=fees_repo,
            attendance_service=attendance_service,
            assessment_service=assessment_service,
        ),
    )


def build_container(*, db_config: dict) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return build_services(
        users_repo=MySQLUserRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        batches_repo=MySQLBatchRepository(conn),
        guardians_repo=MySQLGuardianRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        tests_repo=MySQLTestRepository(conn),
        fees_repo=MySQLFeeRepository(conn),
    )
