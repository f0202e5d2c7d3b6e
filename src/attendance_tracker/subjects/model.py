from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Subject:
    """Domain entity: Subject (course taught to a department/semester)."""

    subject_id: str
    name: str
    code: str
    department: Optional[str] = None
    credits: Optional[int] = None
    semester: Optional[int] = None
    faculty_id: Optional[str] = None
    faculty_name: Optional[str] = None
    description: Optional[str] = None
    syllabus: Optional[str] = None
    is_active: bool = True
