"""Monthly line chart drawn on a tkinter Canvas."""

import calendar as _cal
import tkinter as tk

from month_aggregator import MonthSummary

LINE = "#0078D4"
RULE = "#C8C8C8"
AXIS = "#555555"

WIDTH = 520
HEIGHT = 300
MARGIN_L = 40
MARGIN_R = 16
MARGIN_T = 16
MARGIN_B = 36


def week_marks(days: int) -> list[int]:
    """Days that start a 7-day block (1, 8, 15, 22, 29 …) within the month."""
    return list(range(1, days + 1, 7))


class ChartWindow:
    """Toplevel showing one MonthSummary; redrawn in place on every update."""

    def __init__(self, master: tk.Misc) -> None:
        self.top = tk.Toplevel(master)
        self.top.resizable(False, False)
        self.canvas = tk.Canvas(
            self.top, width=WIDTH, height=HEIGHT, bg="white", highlightthickness=0,
        )
        self.canvas.pack(padx=8, pady=8)
        self.top.bind("<Escape>", lambda _e: self.top.destroy())

    def is_open(self) -> bool:
        return bool(self.top.winfo_exists())

    def draw(self, summary: MonthSummary) -> None:
        self.top.title(
            f"{_cal.month_name[summary.month]} {summary.year} · total {summary.total}"
        )
        c = self.canvas
        c.delete("all")

        days = len(summary.series)
        plot_w = WIDTH - MARGIN_L - MARGIN_R
        plot_h = HEIGHT - MARGIN_T - MARGIN_B
        y_max = summary.max_value

        def x_for(day: int) -> float:
            return MARGIN_L + (day - 1) * plot_w / max(days - 1, 1)

        def y_for(count: int) -> float:
            return MARGIN_T + plot_h - count * plot_h / y_max

        # Axes
        bottom = MARGIN_T + plot_h
        c.create_line(MARGIN_L, MARGIN_T, MARGIN_L, bottom, fill=AXIS)
        c.create_line(MARGIN_L, bottom, MARGIN_L + plot_w, bottom, fill=AXIS)
        for value in (0, y_max // 2, y_max):
            c.create_text(MARGIN_L - 6, y_for(value), text=str(value), anchor="e", fill=AXIS)

        # Weekly rules + labels
        for day in week_marks(days):
            x = x_for(day)
            c.create_line(x, MARGIN_T, x, bottom, fill=RULE, dash=(5,))
            c.create_text(x, bottom + 6, text=f"{day}", anchor="n", fill=AXIS)

        points: list[float] = []
        for day, (_key, count) in enumerate(summary.series, start=1):
            points.extend((x_for(day), y_for(count)))
        if len(points) >= 4:
            c.create_line(*points, fill=LINE, width=2)
        for i in range(0, len(points), 2):
            x, y = points[i], points[i + 1]
            c.create_oval(x - 2, y - 2, x + 2, y + 2, fill=LINE, outline="")

    def raise_(self) -> None:
        self.top.deiconify()
        self.top.lift()
