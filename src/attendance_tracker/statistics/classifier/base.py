from __future__ import annotations

from abc import ABC, abstractmethod

from ...core.enums import StandingStatus


class StatusClassifier(ABC):
    """Classifier interface (Strategy Pattern for attendance standing)."""

    @abstractmethod
    def classify(self, percentage: float) -> StandingStatus:
        raise NotImplementedError
