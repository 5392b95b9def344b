from __future__ import annotations

from .base import AttendanceWeighting, StatusTally


class StrictWeighting(AttendanceWeighting):
    """Batch and dashboard rule: present + late, no credit for excused."""

    def credited(self, tally: StatusTally) -> float:
        return tally.present + tally.late
