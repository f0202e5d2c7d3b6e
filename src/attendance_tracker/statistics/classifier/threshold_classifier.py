from __future__ import annotations

from ...core.constants import EXCELLENT_PERCENTAGE, GOOD_PERCENTAGE
from ...core.enums import StandingStatus
from .base import StatusClassifier


class ThresholdStatusClassifier(StatusClassifier):
    """Standard rule: >= 90 excellent, >= 75 good, otherwise bad."""

    def __init__(self, *, excellent: float = EXCELLENT_PERCENTAGE, good: float = GOOD_PERCENTAGE):
        self._excellent = float(excellent)
        self._good = float(good)

    def classify(self, percentage: float) -> StandingStatus:
        if percentage >= self._excellent:
            return StandingStatus.EXCELLENT
        if percentage >= self._good:
            return StandingStatus.GOOD
        return StandingStatus.BAD
