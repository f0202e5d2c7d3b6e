from __future__ import annotations

from typing import Dict, Iterable, Optional, Protocol

from .model import Subject


class SubjectRepository(Protocol):
    def get_by_id(self, subject_id: str) -> Optional[Subject]:
        raise NotImplementedError

    def get_many(self, subject_ids: Iterable[str]) -> Dict[str, Subject]:
        raise NotImplementedError
