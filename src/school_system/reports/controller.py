from __future__ import annotations

from datetime import date

from flask import Flask, abort, jsonify, request

from ..common.access import roles_required
from ..common.datetime_utils import parse_optional_date
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _write_csv(content: str, *, filename: str):
        return app.response_class(
            content.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/reports/dashboard", methods=["GET"], endpoint="reports_dashboard")
    @roles_required(Role.ADMIN)
    def reports_dashboard():
        return jsonify(container.report_service.get_dashboard_stats().to_dict())

    @app.route("/reports/student-level-summary/<int:student_id>", methods=["GET"], endpoint="student_level_summary")
    @roles_required(Role.ADMIN)
    def student_level_summary(student_id: int):
        rows = container.report_service.get_student_level_summary(student_id)
        return jsonify([r.to_dict() for r in rows])

    @app.route("/reports/batch-attendance/<int:batch_id>", methods=["GET"], endpoint="batch_attendance_report")
    @roles_required(Role.ADMIN)
    def batch_attendance_report(batch_id: int):
        rows = container.report_service.get_batch_attendance(
            batch_id,
            parse_optional_date(request.args.get("from")),
            parse_optional_date(request.args.get("to")),
        )
        return jsonify([r.to_dict() for r in rows])

    @app.route("/reports/attendance-issues", methods=["GET"], endpoint="attendance_issues")
    @roles_required(Role.ADMIN)
    def attendance_issues():
        issues = container.report_service.get_attendance_issues()
        return jsonify([i.to_dict() for i in issues])

    @app.route("/reports/export/<kind>.csv", methods=["GET"], endpoint="export_csv")
    @roles_required(Role.ADMIN)
    def export_csv(kind: str):
        exporters = {
            "students": container.report_service.export_students_csv,
            "attendance": container.report_service.export_attendance_csv,
            "fees": container.report_service.export_fees_csv,
        }
        if kind not in exporters:
            abort(404, description=f"Unknown export: {kind}")

        filename = f"{kind}_{date.today().strftime('%Y%m%d')}.csv"
        return _write_csv(exporters[kind](), filename=filename)
