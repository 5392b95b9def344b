from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Guardian:
    """Link between a parent account and a student."""

    guardian_id: int
    user_id: int
    student_id: int
    relationship: str
    is_primary: bool = False
    can_pickup: bool = True
    emergency_contact: bool = False
