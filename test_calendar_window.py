from datetime import date
from types import SimpleNamespace

import pytest

tk = pytest.importorskip("tkinter")

import settings  # noqa: E402
from calendar_window import CalendarWindow, ChartWindow  # noqa: E402
from controller import CalendarController  # noqa: E402
from count_store import STORAGE_KEY, CountStore  # noqa: E402
from storage import MemoryStorage  # noqa: E402


@pytest.fixture
def window(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "_SETTINGS_PATH", str(tmp_path / "settings.json"))
    store = CountStore(MemoryStorage({STORAGE_KEY: b'{"2024-11-05": 4}'}))
    store.load()
    controller = CalendarController(store, clock=lambda: date(2024, 11, 5))
    try:
        win = CalendarWindow(controller)
    except tk.TclError:
        pytest.skip("no display available")
    controller.refresh()
    yield win
    win.root.destroy()


def _cell_for(win, day):
    for row in win._panel.day_cells:
        for cell in row:
            if win._widget_days.get(id(cell)) == day:
                return cell
    raise AssertionError(f"day {day} not rendered")


def test_footer_uses_controller_clock(window):
    assert "Today: 05.11.2024" in window._footer_label.cget("text")
    assert "Month total: 4" in window._footer_label.cget("text")


def test_navigation_cancels_pending_hold(window):
    window._on_press(SimpleNamespace(widget=_cell_for(window, 5)))
    assert window._press is not None

    window.controller.navigate_next()
    assert window._press is None

    window.controller.navigate_previous()
    assert window.controller.store.get("2024-11-05") == 4


def test_taps_redraw_chart_without_raising_it(window, monkeypatch):
    raised = []
    monkeypatch.setattr(ChartWindow, "raise_", lambda self: raised.append(self))

    window.open_chart()
    assert len(raised) == 1

    window.controller.cell_tapped(5)
    window.controller.cell_tapped(6)
    assert len(raised) == 1
    assert window._chart.top.title().endswith("total 6")
