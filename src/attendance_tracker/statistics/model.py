from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import StandingStatus


@dataclass(frozen=True)
class SubjectStats:
    subject_id: str
    subject_name: str
    total: int
    present: int
    absent: int
    late: int
    percentage: float
    status: StandingStatus
