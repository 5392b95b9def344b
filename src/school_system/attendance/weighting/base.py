from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from ...core.enums import AttendanceStatus


@dataclass
class StatusTally:
    """Running count of records per attendance status."""

    present: int = 0
    absent: int = 0
    late: int = 0
    excused: int = 0

    def add(self, status: AttendanceStatus, count: int = 1) -> None:
        if status == AttendanceStatus.PRESENT:
            self.present += count
        elif status == AttendanceStatus.ABSENT:
            self.absent += count
        elif status == AttendanceStatus.LATE:
            self.late += count
        elif status == AttendanceStatus.EXCUSED:
            self.excused += count

    @property
    def total(self) -> int:
        return self.present + self.absent + self.late + self.excused

    @classmethod
    def of(cls, statuses: Iterable[AttendanceStatus]) -> "StatusTally":
        tally = cls()
        for status in statuses:
            tally.add(status)
        return tally


class AttendanceWeighting(ABC):
    """Strategy interface: how many classes a tally counts as attended."""

    @abstractmethod
    def credited(self, tally: StatusTally) -> float:
        raise NotImplementedError

    def percent(self, tally: StatusTally) -> float:
        if tally.total == 0:
            return 0.0
        return (self.credited(tally) / tally.total) * 100
