from __future__ import annotations

from typing import Protocol, Sequence

from .model import Guardian


class GuardianRepository(Protocol):
    def is_guardian(self, *, user_id: int, student_id: int) -> bool:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[Guardian]:
        raise NotImplementedError
