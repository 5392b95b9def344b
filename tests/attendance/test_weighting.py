import pytest

from school_system.attendance.weighting.base import StatusTally
from school_system.attendance.weighting.partial_credit import PartialCreditWeighting
from school_system.attendance.weighting.strict import StrictWeighting
from school_system.core.enums import AttendanceStatus


def _mixed_week() -> StatusTally:
    return StatusTally.of(
        [
            AttendanceStatus.PRESENT,
            AttendanceStatus.PRESENT,
            AttendanceStatus.LATE,
            AttendanceStatus.EXCUSED,
            AttendanceStatus.ABSENT,
        ]
    )


def test_tally_counts_each_status():
    tally = _mixed_week()

    assert (tally.present, tally.late, tally.excused, tally.absent) == (2, 1, 1, 1)
    assert tally.total == 5


def test_partial_credit_gives_half_for_excused():
    weighting = PartialCreditWeighting()

    assert weighting.credited(_mixed_week()) == 3.5
    assert weighting.percent(_mixed_week()) == pytest.approx(70.0)


def test_strict_ignores_excused():
    assert StrictWeighting().credited(_mixed_week()) == 3
    assert StrictWeighting().percent(_mixed_week()) == pytest.approx(60.0)


def test_empty_tally_is_zero_percent_not_nan():
    assert PartialCreditWeighting().percent(StatusTally()) == 0.0
    assert StrictWeighting().percent(StatusTally()) == 0.0


def test_tally_add_with_count():
    tally = StatusTally()
    tally.add(AttendanceStatus.LATE, 4)

    assert tally.late == 4
    assert tally.total == 4
