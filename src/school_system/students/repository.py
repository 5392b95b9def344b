from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import StudentStatus
from .model import Student


class StudentRepository(Protocol):
    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def list_all(self, *, status: Optional[StudentStatus] = None) -> Sequence[Student]:
        """Students with batch and level names joined, ordered by id."""

        raise NotImplementedError
