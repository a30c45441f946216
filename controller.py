"""Session controller: displayed-month cursor and cell interactions."""

import calendar as _cal
import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable

from calendar_logic import (
    GRID_COLUMNS,
    GRID_ROWS,
    SUNDAY,
    cell_for_position,
    day_key,
    days_in_month,
    first_weekday_offset,
    is_today,
    next_month,
    prev_month,
    weekday_labels,
)
from count_store import CountStore
from month_aggregator import MonthSummary, build_series, month_total, summarize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CellView:
    row: int
    column: int
    day: int | None
    is_today: bool
    count: int | None


@dataclass(frozen=True)
class MonthView:
    year: int
    month: int
    header: str
    weekday_labels: list[str]
    cells: list[CellView]
    total: int
    today: date


class CalendarController:
    """Owns the displayed month and routes view events to the CountStore.

    Every mutating operation ends by pushing a fresh MonthView to the
    registered listeners; there is no implicit re-rendering.
    """

    def __init__(self, store: CountStore,
                 clock: Callable[[], date] = date.today,
                 first_weekday: int = SUNDAY) -> None:
        self.store = store
        self._clock = clock
        self.first_weekday = first_weekday
        today = clock()
        self.year = today.year
        self.month = today.month
        self._listeners: list[Callable[[MonthView], None]] = []
        self._summary_listeners: list[Callable[[MonthSummary], None]] = []

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def add_listener(self, callback: Callable[[MonthView], None]) -> None:
        self._listeners.append(callback)

    def add_summary_listener(self, callback: Callable[[MonthSummary], None]) -> None:
        self._summary_listeners.append(callback)

    def refresh(self) -> MonthView:
        """Recompute the month view and push it to every listener."""
        view = self.view()
        for callback in self._listeners:
            callback(view)
        return view

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def navigate_previous(self) -> None:
        self.year, self.month = prev_month(self.year, self.month)
        self.refresh()

    def navigate_next(self) -> None:
        self.year, self.month = next_month(self.year, self.month)
        self.refresh()

    def go_today(self) -> None:
        today = self._clock()
        self.year, self.month = today.year, today.month
        self.refresh()

    # ------------------------------------------------------------------
    # Cell interactions
    # ------------------------------------------------------------------
    def _key_for(self, day: int | None) -> str | None:
        if day is None or not 1 <= day <= days_in_month(self.year, self.month):
            return None
        return day_key(self.year, self.month, day)

    def cell_tapped(self, day: int | None) -> None:
        key = self._key_for(day)
        if key is None:
            logger.debug("Ignoring tap on empty cell %r", day)
            return
        self.store.increment(key)
        self.refresh()

    def cell_long_pressed(self, day: int | None) -> None:
        key = self._key_for(day)
        if key is None:
            logger.debug("Ignoring long-press on empty cell %r", day)
            return
        self.store.reset(key)
        self.refresh()

    def summary_requested(self) -> MonthSummary:
        summary = summarize(self.store, self.year, self.month)
        for callback in self._summary_listeners:
            callback(summary)
        return summary

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------
    def header_label(self) -> str:
        return f"{_cal.month_name[self.month]} {self.year}"

    def today_count(self) -> int:
        today = self._clock()
        return self.store.get(day_key(today.year, today.month, today.day)) or 0

    def view(self) -> MonthView:
        year, month = self.year, self.month
        offset = first_weekday_offset(year, month, self.first_weekday)
        total_days = days_in_month(year, month)
        now = self._clock()

        cells: list[CellView] = []
        for r in range(GRID_ROWS):
            for c in range(GRID_COLUMNS):
                day = cell_for_position(r, c, offset, total_days)
                count = None
                if day is not None:
                    count = self.store.get(day_key(year, month, day))
                cells.append(CellView(r, c, day, is_today(year, month, day, now), count))

        return MonthView(
            year=year,
            month=month,
            header=self.header_label(),
            weekday_labels=weekday_labels(self.first_weekday),
            cells=cells,
            total=month_total(build_series(self.store, year, month)),
            today=now,
        )
