"""Pure calendar calculations — no UI dependencies."""

import calendar
import re
from datetime import date, datetime

GRID_ROWS = 6
GRID_COLUMNS = 7

# calendar module numbering: Monday=0 .. Sunday=6
MONDAY = calendar.MONDAY
SUNDAY = calendar.SUNDAY

DAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

_DAY_KEY_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in the given month (leap years included)."""
    return calendar.monthrange(year, month)[1]


def first_weekday_offset(year: int, month: int, first_weekday: int = SUNDAY) -> int:
    """Return the column (0–6) of day 1 in a week starting on *first_weekday*."""
    return (calendar.weekday(year, month, 1) - first_weekday) % 7


def cell_for_position(row: int, column: int, first_weekday_offset: int,
                      days_in_month: int) -> int | None:
    """Return the day number shown at (row, column), or None for padding."""
    day = row * GRID_COLUMNS + column - first_weekday_offset
    if 1 <= day <= days_in_month:
        return day
    return None


def month_grid(year: int, month: int, first_weekday: int = SUNDAY) -> list[list[int | None]]:
    """Return a 6×7 grid for the given month.

    Each cell is a day number (1–31) or None for empty slots.
    Always 6 rows so the calendar height stays constant; the last row
    may be entirely empty.
    """
    offset = first_weekday_offset(year, month, first_weekday)
    total = days_in_month(year, month)
    return [
        [cell_for_position(r, c, offset, total) for c in range(GRID_COLUMNS)]
        for r in range(GRID_ROWS)
    ]


def weekday_labels(first_weekday: int = SUNDAY) -> list[str]:
    """Return the column headers rotated to start on *first_weekday*."""
    return DAY_ABBR[first_weekday:] + DAY_ABBR[:first_weekday]


def is_today(year: int, month: int, day: int | None,
             reference_now: date | datetime) -> bool:
    """True iff (year, month, day) is the calendar date of *reference_now*."""
    if day is None:
        return False
    if isinstance(reference_now, datetime):
        reference_now = reference_now.date()
    return (year, month, day) == (reference_now.year, reference_now.month, reference_now.day)


def day_key(year: int, month: int, day: int) -> str:
    """Return the zero-padded YYYY-MM-DD key for a calendar day."""
    return f"{year:04d}-{month:02d}-{day:02d}"


def is_day_key(text: object) -> bool:
    """True if *text* is a YYYY-MM-DD string naming a real date."""
    if not isinstance(text, str):
        return False
    m = _DAY_KEY_RE.fullmatch(text)
    if m is None:
        return False
    try:
        date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        return False
    return True


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    if month == 12:
        return year + 1, 1
    return year, month + 1
