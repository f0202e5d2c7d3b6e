from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ..attendance.model import AttendanceRecord
from ..core.enums import AttendanceStatus
from .classifier.base import StatusClassifier
from .classifier.threshold_classifier import ThresholdStatusClassifier
from .model import SubjectStats


def round_percentage(value: float) -> float:
    """One decimal place, halves rounded up (66.66.. -> 66.7, 74.95 -> 75.0)."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class AttendanceStatisticsService:
    def __init__(self, *, classifier: Optional[StatusClassifier] = None):
        self._classifier = classifier or ThresholdStatusClassifier()

    def compute_per_subject_stats(self, records: Iterable[AttendanceRecord]) -> list[SubjectStats]:
        """Group by subject and count outcomes.

        Late marks count as attended for the percentage. Groups come out in
        the order their subject is first seen.
        """
        groups: dict[str, dict] = {}

        for r in records:
            g = groups.get(r.subject_id)
            if not g:
                g = {
                    "subject_name": r.subject_name,
                    "total": 0,
                    AttendanceStatus.PRESENT: 0,
                    AttendanceStatus.ABSENT: 0,
                    AttendanceStatus.LATE: 0,
                }
                groups[r.subject_id] = g
            g["total"] += 1
            g[r.status] += 1

        out: list[SubjectStats] = []
        for subject_id, g in groups.items():
            present = g[AttendanceStatus.PRESENT]
            late = g[AttendanceStatus.LATE]
            total = g["total"]
            percentage = round_percentage((present + late) / total * 100) if total else 0.0
            out.append(
                SubjectStats(
                    subject_id=subject_id,
                    subject_name=g["subject_name"],
                    total=total,
                    present=present,
                    absent=g[AttendanceStatus.ABSENT],
                    late=late,
                    percentage=percentage,
                    status=self._classifier.classify(percentage),
                )
            )
        return out
