from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import StudentStatus


@dataclass(frozen=True)
class Student:
    """Domain entity: an enrolled student.

    batch_name / level_name are read-model fields filled by joins.
    """

    student_id: int
    first_name: str
    last_name: str
    current_level: int
    status: StudentStatus
    batch_id: Optional[int] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    batch_name: Optional[str] = None
    level_name: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
