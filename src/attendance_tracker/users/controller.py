from __future__ import annotations

import logging

from flask import Flask, g, jsonify, session

from ..common.auth import login_required
from ..common.requests import json_body, pick
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(pick(data, "username"), pick(data, "password"))

        session.clear()
        session["user_id"] = s_user.user_id
        session["username"] = s_user.username
        session["role"] = s_user.role.value

        logger.info("User %s logged in as %s", s_user.username, s_user.role.value)
        return jsonify({
            "success": True,
            "user": {"user_id": s_user.user_id, "username": s_user.username, "role": s_user.role.value},
        }), 200

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True}), 200

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify({
            "success": True,
            "user": {"user_id": g.caller.user_id, "username": session.get("username"), "role": g.caller.role.value},
        }), 200
