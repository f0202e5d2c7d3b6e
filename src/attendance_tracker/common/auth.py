from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Optional

from flask import g, jsonify, session

from ..core.enums import Role


@dataclass(frozen=True)
class Caller:
    """Authenticated caller as trusted from the Flask session."""

    user_id: str
    role: Role


def current_caller() -> Optional[Caller]:
    user_id = session.get("user_id")
    role = session.get("role")
    if not user_id or not role:
        return None
    try:
        return Caller(user_id=str(user_id), role=Role(role))
    except ValueError:
        return None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        caller = current_caller()
        if caller is None:
            return jsonify({"success": False, "message": "Authentication required"}), 401
        g.caller = caller
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    """Allow only callers whose role is in `roles`."""

    allowed = {Role(r) for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            caller = current_caller()
            if caller is None:
                return jsonify({"success": False, "message": "Authentication required"}), 401
            if caller.role not in allowed:
                return jsonify({"success": False, "message": "Access denied"}), 403
            g.caller = caller
            return view(*args, **kwargs)

        return wrapper

    return decorator
