from __future__ import annotations

from dataclasses import asdict

from flask import Flask, g, jsonify, request

from ..common.auth import login_required
from ..common.requests import pick
from ..common.responses import to_jsonable
from ..container import Container
from .model import TimetableEntry


def entry_to_dict(e: TimetableEntry) -> dict:
    return to_jsonable(asdict(e))


def register(app: Flask, container: Container) -> None:
    @app.route("/api/timetable", methods=["GET"], endpoint="timetable_list")
    @login_required
    def timetable_list():
        args = request.args
        entries = container.timetable_service.list_for_caller(
            caller_role=g.caller.role,
            caller_id=g.caller.user_id,
            day=pick(args, "day"),
            faculty_id=pick(args, "faculty_id", "facultyId"),
            department=pick(args, "department"),
            division=pick(args, "division"),
            semester=pick(args, "semester"),
        )
        return jsonify({"success": True, "timetable": [entry_to_dict(e) for e in entries]}), 200
