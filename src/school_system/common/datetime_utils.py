from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date.

    Longer ISO timestamps ("2025-03-01T00:00:00Z") are truncated to their date part.
    """
    try:
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def parse_optional_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    return parse_iso_date(value)


def is_inverted_range(from_date: Optional[date], to_date: Optional[date]) -> bool:
    return from_date is not None and to_date is not None and from_date > to_date


def start_of_month(today: date) -> date:
    return today.replace(day=1)


def iso_or_none(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None
