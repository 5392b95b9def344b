from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.access import current_role, current_user_id, roles_required
from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_positive_id
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container
from .model import SubjectMark


def _parse_subjects(raw) -> list[SubjectMark]:
    if not isinstance(raw, list):
        raise ValidationError("subjects must be a list")
    try:
        return [
            SubjectMark(name=str(s.get("name", "")), obtained=float(s["obtained"]), total=float(s["total"]))
            for s in raw
        ]
    except (AttributeError, KeyError, TypeError, ValueError):
        raise ValidationError("each subject needs name, obtained and total")


def register(app: Flask, container: Container) -> None:
    def _guard_student(student_id: int) -> None:
        container.guardian_service.ensure_can_view_student(
            role=current_role(), user_id=current_user_id(), student_id=student_id
        )

    @app.route("/tests", methods=["POST"], endpoint="create_test")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def create_test():
        data = request.get_json(silent=True) or {}
        test = container.assessment_service.create_test(
            student_id=require_positive_id(data.get("studentId"), "studentId"),
            batch_id=require_positive_id(data.get("batchId"), "batchId"),
            level=require_positive_id(data.get("level"), "level"),
            test_name=str(data.get("testName") or ""),
            test_date=parse_iso_date(data.get("date") or ""),
            subjects=_parse_subjects(data.get("subjects")),
        )
        return jsonify(test.to_dict()), 201

    @app.route("/tests/<int:test_id>", methods=["GET"], endpoint="get_test")
    @roles_required(Role.TEACHER, Role.ADMIN, Role.PARENT)
    def get_test(test_id: int):
        test = container.assessment_service.get_test(test_id)
        _guard_student(test.student_id)
        return jsonify(test.to_dict())

    @app.route("/tests/<int:test_id>", methods=["PUT"], endpoint="update_test")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def update_test(test_id: int):
        data = request.get_json(silent=True) or {}
        test = container.assessment_service.update_test(
            test_id,
            test_name=str(data.get("testName") or ""),
            test_date=parse_iso_date(data.get("date") or ""),
            subjects=_parse_subjects(data.get("subjects")),
        )
        return jsonify(test.to_dict())

    @app.route("/tests/<int:test_id>", methods=["DELETE"], endpoint="delete_test")
    @roles_required(Role.ADMIN)
    def delete_test(test_id: int):
        container.assessment_service.delete_test(test_id)
        return jsonify({"success": True})

    @app.route("/tests/student/<int:student_id>", methods=["GET"], endpoint="student_tests")
    @roles_required(Role.TEACHER, Role.ADMIN, Role.PARENT)
    def student_tests(student_id: int):
        _guard_student(student_id)
        tests = container.assessment_service.list_for_student(student_id)
        return jsonify([t.to_dict() for t in tests])

    @app.route("/tests/student/<int:student_id>/levels", methods=["GET"], endpoint="student_levels_performance")
    @roles_required(Role.TEACHER, Role.ADMIN, Role.PARENT)
    def student_levels_performance(student_id: int):
        _guard_student(student_id)
        rows = container.assessment_service.all_levels_performance(student_id)
        return jsonify([r.to_dict() for r in rows])

    @app.route("/tests/student/<int:student_id>/level/<int:level>", methods=["GET"], endpoint="student_level_performance")
    @roles_required(Role.TEACHER, Role.ADMIN, Role.PARENT)
    def student_level_performance(student_id: int, level: int):
        _guard_student(student_id)
        return jsonify(container.assessment_service.level_performance(student_id, level).to_dict())
