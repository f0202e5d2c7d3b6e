from __future__ import annotations

import csv
import io
from dataclasses import asdict
from datetime import datetime

from flask import Flask, g, jsonify, request

from ..common.auth import login_required, roles_required
from ..common.datetime_utils import parse_optional_date
from ..common.requests import json_body, pick
from ..common.responses import to_jsonable
from ..core.enums import Role
from ..container import Container
from .model import AttendanceRecord, AttendanceRecordView, ReportFilters

REPORT_CSV_FIELDS = [
    "date",
    "student_id",
    "student_name",
    "enrollment_number",
    "subject_name",
    "faculty_name",
    "department",
    "division",
    "semester",
    "status",
    "detection_confidence",
    "remarks",
]


def record_to_dict(r: AttendanceRecord) -> dict:
    return to_jsonable(asdict(r))


def view_to_dict(v: AttendanceRecordView) -> dict:
    data = record_to_dict(v.record)
    if v.student is not None:
        data["student"] = to_jsonable(v.student)
    if v.subject is not None:
        data["subject"] = to_jsonable(v.subject)
    if v.faculty is not None:
        data["faculty"] = to_jsonable(v.faculty)
    return data


def register(app: Flask, container: Container) -> None:
    def _report_filters() -> ReportFilters:
        args = request.args
        return ReportFilters(
            subject_id=pick(args, "subject_id", "subjectId"),
            division=pick(args, "division"),
            department=pick(args, "department"),
            semester=pick(args, "semester"),
            faculty_id=pick(args, "faculty_id", "facultyId"),
            start_date=parse_optional_date(pick(args, "start_date", "startDate")),
            end_date=parse_optional_date(pick(args, "end_date", "endDate")),
        )

    def _run_report():
        return container.attendance_service.query_report(
            filters=_report_filters(),
            caller_role=g.caller.role,
            caller_id=g.caller.user_id,
        )

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    @roles_required(Role.FACULTY)
    def attendance_mark():
        data = json_body()
        record, created = container.attendance_service.mark(
            session_id=pick(data, "session_id", "sessionId"),
            student_id=pick(data, "student_id", "studentId"),
            faculty_id=g.caller.user_id,
            status=pick(data, "status"),
            detection_confidence=pick(data, "detection_confidence", "detectionConfidence"),
            remarks=pick(data, "remarks"),
        )
        message = "Attendance marked successfully" if created else "Attendance updated successfully"
        return jsonify({"success": True, "message": message, "attendance": record_to_dict(record)}), (
            201 if created else 200
        )

    @app.route("/api/attendance/student/<student_id>", methods=["GET"], endpoint="attendance_student")
    @login_required
    def attendance_student(student_id: str):
        args = request.args
        history = container.attendance_service.query_by_student(
            student_id=student_id,
            caller_role=g.caller.role,
            caller_id=g.caller.user_id,
            subject_id=pick(args, "subject_id", "subjectId"),
            start_date=parse_optional_date(pick(args, "start_date", "startDate")),
            end_date=parse_optional_date(pick(args, "end_date", "endDate")),
        )
        return jsonify({
            "success": True,
            "attendance": [view_to_dict(v) for v in history.records],
            "statistics": [to_jsonable(asdict(s)) for s in history.statistics],
        }), 200

    @app.route("/api/attendance/report", methods=["GET"], endpoint="attendance_report")
    @roles_required(Role.FACULTY, Role.ADMIN)
    def attendance_report():
        views = _run_report()
        return jsonify({"success": True, "attendance": [view_to_dict(v) for v in views]}), 200

    @app.route("/api/attendance/report.csv", methods=["GET"], endpoint="attendance_report_csv")
    @roles_required(Role.FACULTY, Role.ADMIN)
    def attendance_report_csv():
        views = _run_report()

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=REPORT_CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for v in views:
            row = record_to_dict(v.record)
            if v.student and v.student.get("enrollment_number"):
                row["enrollment_number"] = v.student["enrollment_number"]
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        filename = f"attendance_report_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
