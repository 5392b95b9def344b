from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..core.constants import DEFAULT_PASSING_PERCENT


@dataclass(frozen=True)
class Level:
    """Curriculum tier; tests below passing_percent count as failed."""

    level_id: int
    name: str
    order_number: int
    passing_percent: float = DEFAULT_PASSING_PERCENT


@dataclass(frozen=True)
class Batch:
    """A cohort taught on a fixed weekly schedule.

    capacity is checked at enrollment time, not enforced by the schema.
    """

    batch_id: int
    name: str
    level_id: int
    capacity: int
    teacher_id: Optional[int] = None
    day_mask: str = ""
    start_time: Optional[time] = None
    end_time: Optional[time] = None
