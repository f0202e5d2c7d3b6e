from __future__ import annotations

from typing import Optional

from flask import Flask, g, jsonify, request

from ..common.auth import roles_required
from ..common.requests import json_body, pick
from ..common.responses import to_jsonable
from ..core.constants import DEFAULT_SESSION_LIMIT
from ..core.enums import Role
from ..container import Container
from .model import AttendanceSession, SessionSummary


def session_to_dict(s: AttendanceSession, summary: Optional[SessionSummary] = None) -> dict:
    data = {
        "session_id": s.session_id,
        "subject_id": s.subject_id,
        "subject_name": s.subject_name,
        "faculty_id": s.faculty_id,
        "faculty_name": s.faculty_name,
        "division": s.division,
        "department": s.department,
        "semester": s.semester,
        "date": s.date,
        "start_time": s.start_time,
        "end_time": s.end_time,
        "total_students": s.total_students,
        "present_students": s.present_students,
        "absent_students": s.absent_students,
        "status": s.status,
        "created_at": s.created_at,
    }
    if summary is not None:
        data["subject"] = {"name": summary.subject_name, "code": summary.subject_code}
    return to_jsonable(data)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/session/start", methods=["POST"], endpoint="session_start")
    @roles_required(Role.FACULTY)
    def session_start():
        data = json_body()
        session = container.session_service.open_session(
            subject_id=pick(data, "subject_id", "subjectId"),
            faculty_id=g.caller.user_id,
            division=pick(data, "division"),
            department=pick(data, "department"),
            semester=pick(data, "semester"),
        )
        return jsonify({
            "success": True,
            "message": "Attendance session started successfully",
            "session": session_to_dict(session),
        }), 201

    @app.route("/api/attendance/session/<session_id>/end", methods=["PUT"], endpoint="session_end")
    @roles_required(Role.FACULTY)
    def session_end(session_id: str):
        session = container.session_service.close_session(session_id=session_id, faculty_id=g.caller.user_id)
        return jsonify({
            "success": True,
            "message": "Attendance session ended successfully",
            "session": session_to_dict(session),
        }), 200

    @app.route("/api/attendance/sessions", methods=["GET"], endpoint="session_list")
    @roles_required(Role.FACULTY)
    def session_list():
        summaries = container.session_service.list_sessions(
            faculty_id=g.caller.user_id,
            status=request.args.get("status") or None,
            limit=request.args.get("limit", DEFAULT_SESSION_LIMIT),
        )
        return jsonify({"success": True, "sessions": [session_to_dict(s.session, s) for s in summaries]}), 200
