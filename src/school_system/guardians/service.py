from __future__ import annotations

from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from .repository import GuardianRepository


class GuardianService:
    """Scopes parent callers to their own children."""

    def __init__(self, guardians: GuardianRepository):
        self._guardians = guardians

    def ensure_can_view_student(self, *, role: Role | None, user_id: int, student_id: int) -> None:
        if role != Role.PARENT:
            return
        if not self._guardians.is_guardian(user_id=user_id, student_id=student_id):
            raise AuthorizationError("You can only view your own children")

    def children_ids(self, user_id: int) -> list[int]:
        return [g.student_id for g in self._guardians.list_for_user(user_id)]
