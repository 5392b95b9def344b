from __future__ import annotations

from ...core.constants import EXCUSED_CREDIT
from .base import AttendanceWeighting, StatusTally


class PartialCreditWeighting(AttendanceWeighting):
    """Student summary rule: present + late + half of excused."""

    def __init__(self, excused_credit: float = EXCUSED_CREDIT):
        self._excused_credit = excused_credit

    def credited(self, tally: StatusTally) -> float:
        return tally.present + tally.late + (tally.excused * self._excused_credit)
