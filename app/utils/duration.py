"""
Duration parsing and calendar arithmetic for bookings.

A booking duration is free text such as ``"3 months"`` or ``"2 Weeks"``. It is
parsed into a magnitude and a unit, converted to a month-equivalent for
pricing, and added to the start date to produce the lease window.
"""
import calendar
import enum
import math
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Tuple


class DurationUnit(str, enum.Enum):
    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    HOUR = "hour"


DAYS_PER_MONTH = 30.44
WEEKS_PER_MONTH = 4.34
MAX_DURATION_MONTHS = 1200  # 100 years

MONTH_EQUIVALENT = {
    DurationUnit.YEAR: 12.0,
    DurationUnit.MONTH: 1.0,
    DurationUnit.WEEK: 1 / WEEKS_PER_MONTH,
    DurationUnit.DAY: 1 / DAYS_PER_MONTH,
    DurationUnit.HOUR: 1 / (DAYS_PER_MONTH * 24),
}

_DURATION_RE = re.compile(r"^\s*(?P<magnitude>\d+(?:\.\d+)?)\s*(?P<unit>[A-Za-z]+)\s*$")


@dataclass(frozen=True)
class ParsedDuration:
    magnitude: float
    unit: DurationUnit

    @property
    def month_equivalent(self) -> float:
        return self.magnitude * MONTH_EQUIVALENT[self.unit]


def parse_duration(raw: str) -> ParsedDuration:
    """
    Parses ``"<number> <unit>"``. The unit word matches case-insensitively when
    it starts with a canonical unit name, so "Months" is a month while "mo" and
    "hrs" are rejected.

    Raises ValueError for anything that does not resolve to a positive
    magnitude of a known unit.
    """
    if raw is None or not str(raw).strip():
        raise ValueError("Duration is required")

    match = _DURATION_RE.match(str(raw))
    if not match:
        raise ValueError(f"Invalid duration '{raw}'. Expected a format like '3 months'")

    magnitude = float(match.group("magnitude"))
    if magnitude <= 0:
        raise ValueError("Duration must be greater than zero")

    unit_word = match.group("unit").lower()
    unit = next((u for u in DurationUnit if unit_word.startswith(u.value)), None)
    if unit is None:
        raise ValueError(f"Unrecognized duration unit '{match.group('unit')}'")

    parsed = ParsedDuration(magnitude=magnitude, unit=unit)
    if not math.isfinite(magnitude) or parsed.month_equivalent > MAX_DURATION_MONTHS:
        raise ValueError("Duration must not exceed 100 years")
    return parsed


def _add_months(base: datetime, months: int) -> datetime:
    year = base.year + (base.month - 1 + months) // 12
    month = (base.month - 1 + months) % 12 + 1
    day = min(base.day, calendar.monthrange(year, month)[1])
    return base.replace(year=year, month=month, day=day)


def _whole(parsed: ParsedDuration) -> int:
    if not parsed.magnitude.is_integer():
        raise ValueError(f"Durations in {parsed.unit.value}s must be a whole number")
    return int(parsed.magnitude)


def _shift(moment: datetime, parsed: ParsedDuration, sign: int) -> datetime:
    if parsed.unit == DurationUnit.YEAR:
        return _add_months(moment, sign * 12 * _whole(parsed))
    if parsed.unit == DurationUnit.MONTH:
        return _add_months(moment, sign * _whole(parsed))
    if parsed.unit == DurationUnit.WEEK:
        return moment + sign * timedelta(days=7 * parsed.magnitude)
    if parsed.unit == DurationUnit.DAY:
        return moment + sign * timedelta(days=parsed.magnitude)
    return moment + sign * timedelta(hours=parsed.magnitude)


def add_duration(start: datetime, parsed: ParsedDuration) -> datetime:
    """Calendar-correct addition; month ends clamp (Jan 31 + 1 month = Feb 28/29)."""
    return _shift(start, parsed, 1)


def subtract_duration(end: datetime, parsed: ParsedDuration) -> datetime:
    return _shift(end, parsed, -1)


def compute_lease_window(start: datetime, parsed: ParsedDuration) -> Tuple[datetime, datetime]:
    try:
        return start, add_duration(start, parsed)
    except OverflowError:
        raise ValueError("Lease end date is out of range")
