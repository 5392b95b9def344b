from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.access import current_role, current_user_id, roles_required
from ..common.datetime_utils import parse_iso_date, parse_optional_date
from ..common.validators import require_positive_id
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import ValidationError
from ..container import Container
from .model import AttendanceEntry


def _parse_entries(raw) -> list[AttendanceEntry]:
    if not isinstance(raw, list):
        raise ValidationError("entries must be a list")

    entries = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValidationError("each entry must be an object")
        try:
            status = AttendanceStatus(str(item.get("status", "")).upper())
        except ValueError:
            raise ValidationError(f"Invalid attendance status: {item.get('status')!r}")
        entries.append(
            AttendanceEntry(
                student_id=require_positive_id(item.get("studentId"), "studentId"),
                status=status,
                note=(item.get("note") or None),
            )
        )
    return entries


def register(app: Flask, container: Container) -> None:
    def _guard_student(student_id: int) -> None:
        container.guardian_service.ensure_can_view_student(
            role=current_role(), user_id=current_user_id(), student_id=student_id
        )

    @app.route("/attendance/batch", methods=["POST"], endpoint="mark_batch_attendance")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def mark_batch_attendance():
        data = request.get_json(silent=True) or {}
        created = container.attendance_service.mark_batch_attendance(
            marked_by=current_user_id(),
            batch_id=require_positive_id(data.get("batchId"), "batchId"),
            attendance_date=parse_iso_date(data.get("date") or ""),
            entries=_parse_entries(data.get("entries")),
        )
        return jsonify([r.to_dict() for r in created]), 201

    @app.route("/attendance/student/<int:student_id>", methods=["GET"], endpoint="student_attendance")
    @roles_required(Role.TEACHER, Role.ADMIN, Role.PARENT)
    def student_attendance(student_id: int):
        _guard_student(student_id)
        from_date = parse_optional_date(request.args.get("fromDate"))
        to_date = parse_optional_date(request.args.get("toDate"))

        if from_date or to_date:
            summary = container.attendance_service.summarize_student_attendance(student_id, from_date, to_date)
            return jsonify(summary.to_dict())

        records = container.attendance_service.list_for_student(student_id)
        return jsonify([r.to_dict() for r in records])

    @app.route("/attendance/student/<int:student_id>/summary", methods=["GET"], endpoint="student_attendance_summary")
    @roles_required(Role.TEACHER, Role.ADMIN, Role.PARENT)
    def student_attendance_summary(student_id: int):
        _guard_student(student_id)
        summary = container.attendance_service.summarize_student_attendance(
            student_id,
            parse_optional_date(request.args.get("fromDate")),
            parse_optional_date(request.args.get("toDate")),
        )
        return jsonify(summary.to_dict())

    @app.route("/attendance/batch/<int:batch_id>/date/<date_s>", methods=["GET"], endpoint="batch_attendance_by_date")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def batch_attendance_by_date(batch_id: int, date_s: str):
        records = container.attendance_service.list_for_batch_and_date(batch_id, parse_iso_date(date_s))
        return jsonify([r.to_dict() for r in records])
