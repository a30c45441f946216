"""Dense per-month series for the chart view."""

from dataclasses import dataclass

from calendar_logic import day_key, days_in_month

FALLBACK_MAX = 10


@dataclass(frozen=True)
class MonthSummary:
    year: int
    month: int
    series: list[tuple[str, int]]
    max_value: int
    total: int


def build_series(counts, year: int, month: int) -> list[tuple[str, int]]:
    """Return (DayKey, count) for every day of the month, in day order.

    *counts* is anything with a dict-style ``get`` (a plain dict or a
    CountStore). Days without an entry are reported as 0 so the chart
    line never skips a day.
    """
    series: list[tuple[str, int]] = []
    for day in range(1, days_in_month(year, month) + 1):
        key = day_key(year, month, day)
        series.append((key, counts.get(key) or 0))
    return series


def max_value(series: list[tuple[str, int]]) -> int:
    """Upper bound for the chart's y axis; FALLBACK_MAX when there is no activity."""
    peak = max((count for _key, count in series), default=0)
    return peak if peak > 0 else FALLBACK_MAX


def month_total(series: list[tuple[str, int]]) -> int:
    return sum(count for _key, count in series)


def summarize(counts, year: int, month: int) -> MonthSummary:
    series = build_series(counts, year, month)
    return MonthSummary(year, month, series, max_value(series), month_total(series))
