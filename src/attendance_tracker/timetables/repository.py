from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Weekday
from .model import TimetableEntry


class TimetableRepository(Protocol):
    def find(
        self,
        *,
        faculty_id: Optional[str] = None,
        department: Optional[str] = None,
        division: Optional[str] = None,
        semester: Optional[int] = None,
        day: Optional[Weekday] = None,
    ) -> Sequence[TimetableEntry]:
        """Active slots matching every given filter."""
        raise NotImplementedError
