from __future__ import annotations

from typing import Dict, Iterable, Optional, Protocol

from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, not on a concrete store.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def get_many(self, user_ids: Iterable[str]) -> Dict[str, User]:
        raise NotImplementedError

    def count_active_students(self, *, department: str, division: str, semester: int) -> int:
        raise NotImplementedError
