import json
from datetime import date

import pytest

from calendar_logic import MONDAY
from controller import CalendarController
from count_store import STORAGE_KEY, CountStore
from storage import MemoryStorage


@pytest.fixture
def storage():
    return MemoryStorage({STORAGE_KEY: b'{"2024-11-05": 7, "2024-10-31": 2}'})


@pytest.fixture
def controller(storage):
    store = CountStore(storage)
    store.load()
    return CalendarController(store, clock=lambda: date(2024, 11, 5))


def _persisted(storage):
    return json.loads(storage.read(STORAGE_KEY))


def test_starts_on_current_month(controller):
    assert (controller.year, controller.month) == (2024, 11)
    assert controller.header_label() == "November 2024"


def test_view_layout(controller):
    view = controller.view()
    assert len(view.cells) == 42
    assert view.weekday_labels[0] == "Sun"
    assert [(c.row, c.column) for c in view.cells] == [(r, c) for r in range(6) for c in range(7)]
    assert [c.day for c in view.cells[:6]] == [None, None, None, None, None, 1]

    day5 = next(c for c in view.cells if c.day == 5)
    assert day5.is_today
    assert day5.count == 7
    assert sum(c.is_today for c in view.cells) == 1
    assert next(c for c in view.cells if c.day == 6).count is None
    assert view.total == 7
    assert view.today == date(2024, 11, 5)


def test_tap_increments_and_persists(controller, storage):
    controller.cell_tapped(5)
    assert controller.store.get("2024-11-05") == 8
    assert _persisted(storage) == {"2024-11-05": 8, "2024-10-31": 2}


def test_long_press_then_tap(controller, storage):
    controller.store.increment("2024-11-07")
    for _ in range(3):
        controller.cell_tapped(7)
    assert controller.store.get("2024-11-07") == 4

    controller.cell_long_pressed(7)
    assert "2024-11-07" not in controller.store
    assert "2024-11-07" not in _persisted(storage)

    controller.cell_tapped(7)
    assert controller.store.get("2024-11-07") == 1


@pytest.mark.parametrize("day", [None, 0, 31, 42])
def test_empty_cell_is_noop(controller, storage, day):
    pushed = []
    controller.add_listener(pushed.append)
    before = storage.read(STORAGE_KEY)
    controller.cell_tapped(day)
    controller.cell_long_pressed(day)
    assert storage.read(STORAGE_KEY) == before
    assert pushed == []


def test_navigation_rolls_over_and_leaves_store(controller, storage):
    before = storage.read(STORAGE_KEY)
    controller.navigate_next()
    assert (controller.year, controller.month) == (2024, 12)
    controller.navigate_next()
    assert (controller.year, controller.month) == (2025, 1)
    for _ in range(3):
        controller.navigate_previous()
    assert (controller.year, controller.month) == (2024, 10)
    assert storage.read(STORAGE_KEY) == before


def test_tap_resolves_against_displayed_month(controller):
    controller.navigate_previous()
    controller.cell_tapped(31)
    assert controller.store.get("2024-10-31") == 3
    assert controller.store.get("2024-11-05") == 7


def test_today_only_highlighted_in_current_month(controller):
    controller.navigate_next()
    assert not any(c.is_today for c in controller.view().cells)
    controller.go_today()
    assert (controller.year, controller.month) == (2024, 11)
    assert any(c.is_today for c in controller.view().cells)


def test_every_mutation_pushes_a_view(controller):
    pushed = []
    controller.add_listener(pushed.append)
    controller.cell_tapped(1)
    controller.cell_long_pressed(1)
    controller.navigate_next()
    controller.navigate_previous()
    controller.go_today()
    assert len(pushed) == 5
    assert next(c for c in pushed[0].cells if c.day == 1).count == 1
    assert next(c for c in pushed[1].cells if c.day == 1).count is None
    assert pushed[2].month == 12


def test_summary_requested(controller, storage):
    received = []
    controller.add_summary_listener(received.append)
    before = storage.read(STORAGE_KEY)

    summary = controller.summary_requested()
    assert received == [summary]
    assert len(summary.series) == 30
    assert summary.series[4] == ("2024-11-05", 7)
    assert summary.max_value == 7
    assert summary.total == 7
    assert storage.read(STORAGE_KEY) == before

    controller.navigate_next()
    december = controller.summary_requested()
    assert len(december.series) == 31
    assert december.max_value == 10


def test_today_count(controller):
    assert controller.today_count() == 7
    controller.cell_long_pressed(5)
    assert controller.today_count() == 0


def test_monday_first_weekday():
    store = CountStore(MemoryStorage())
    store.load()
    controller = CalendarController(store, clock=lambda: date(2024, 11, 5), first_weekday=MONDAY)
    view = controller.view()
    assert view.weekday_labels[0] == "Mon"
    assert [c.day for c in view.cells[:5]] == [None, None, None, None, 1]
