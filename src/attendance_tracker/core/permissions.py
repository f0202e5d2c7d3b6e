from __future__ import annotations

from typing import Optional

from .enums import Role
from .exceptions import AccessDeniedError


def can_access(caller_role: Role, caller_id: str, owner_id: str) -> bool:
    """Students may only touch their own resources; faculty and admins are privileged."""
    if caller_role == Role.STUDENT:
        return str(caller_id) == str(owner_id)
    return caller_role in {Role.FACULTY, Role.ADMIN}


def require_access(caller_role: Role, caller_id: str, owner_id: str) -> None:
    if not can_access(caller_role, caller_id, owner_id):
        raise AccessDeniedError("Access denied")


def scope_faculty(caller_role: Role, caller_id: str, requested_faculty_id: Optional[str]) -> Optional[str]:
    """Return the faculty filter a report query must run with.

    Faculty members are pinned to their own id whatever they asked for.
    """
    if caller_role == Role.FACULTY:
        return str(caller_id)
    if caller_role == Role.ADMIN:
        return requested_faculty_id
    raise AccessDeniedError("Access denied")
