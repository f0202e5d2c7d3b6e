from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Read-only lookup for this service; accounts are managed elsewhere.
    """

    user_id: str
    username: str
    password_hash: str
    role: Role
    department: Optional[str] = None
    division: Optional[str] = None
    semester: Optional[int] = None
    enrollment_number: Optional[str] = None
    is_active: bool = True

    @property
    def is_student(self) -> bool:
        return self.role == Role.STUDENT
