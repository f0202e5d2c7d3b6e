from __future__ import annotations

import pytest

from attendance_tracker.core.enums import Role
from attendance_tracker.core.exceptions import AccessDeniedError
from attendance_tracker.core.permissions import can_access, require_access, scope_faculty


def test_student_only_sees_own_records():
    assert can_access(Role.STUDENT, "s1", "s1") is True
    assert can_access(Role.STUDENT, "s1", "s2") is False


@pytest.mark.parametrize("role", [Role.FACULTY, Role.ADMIN])
def test_staff_see_everyone(role):
    assert can_access(role, "x", "s2") is True


def test_require_access_raises():
    with pytest.raises(AccessDeniedError):
        require_access(Role.STUDENT, "s1", "s2")


def test_scope_faculty():
    assert scope_faculty(Role.FACULTY, "f1", "f2") == "f1"
    assert scope_faculty(Role.FACULTY, "f1", None) == "f1"
    assert scope_faculty(Role.ADMIN, "a1", "f2") == "f2"
    assert scope_faculty(Role.ADMIN, "a1", None) is None
    with pytest.raises(AccessDeniedError):
        scope_faculty(Role.STUDENT, "s1", None)
