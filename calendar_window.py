"""Month calendar window (tkinter): tap a day to count, hold to reset."""

import logging
from tkinter import font as tkfont
import tkinter as tk

from calendar_logic import GRID_COLUMNS, GRID_ROWS
from chart_window import ChartWindow
from controller import CalendarController, MonthView
from settings import load_settings, save_settings

logger = logging.getLogger(__name__)

# Colours
ACCENT = "#0078D4"
CELL_BG = "#EBEBEB"
HEADER_BG = "#F3F3F3"
GRID_BG = "white"
COUNT_FG = "#222222"

LONG_PRESS_MS = 500
CELL_W = 56
CELL_H = 48


class _MonthPanel:
    """Pre-allocated widget pool for one month (header + 6 weeks)."""

    __slots__ = ("frame", "header", "day_headers", "day_cells")

    def __init__(self, parent: tk.Frame, fonts: dict, on_press, on_release,
                 on_secondary) -> None:
        self.frame = tk.Frame(parent, bg=GRID_BG)

        self.header = tk.Label(
            self.frame, font=fonts["header"], bg=HEADER_BG, fg="#333333",
        )
        self.header.grid(row=0, column=0, columnspan=GRID_COLUMNS, sticky="we", pady=(0, 2))

        self.day_headers: list[tk.Label] = []
        for col in range(GRID_COLUMNS):
            lbl = tk.Label(self.frame, font=fonts["bold"], bg=GRID_BG, fg="#333333")
            lbl.grid(row=1, column=col)
            self.day_headers.append(lbl)

        self.day_cells: list[list[tk.Canvas]] = []
        for r in range(GRID_ROWS):
            row_cells: list[tk.Canvas] = []
            for c in range(GRID_COLUMNS):
                cell = tk.Canvas(
                    self.frame, width=CELL_W, height=CELL_H,
                    bg=GRID_BG, highlightthickness=0, borderwidth=0,
                )
                cell.grid(row=r + 2, column=c, padx=2, pady=2)
                # Bound once; handlers look the day up in _widget_days
                cell.bind("<ButtonPress-1>", on_press)
                cell.bind("<ButtonRelease-1>", on_release)
                cell.bind("<Button-3>", on_secondary)
                row_cells.append(cell)
            self.day_cells.append(row_cells)


class CalendarWindow:
    """Single-month counter calendar driven by a CalendarController."""

    def __init__(self, controller: CalendarController) -> None:
        self.controller = controller
        self.root = tk.Tk()
        self.root.title("Count Per Day")
        self.root.configure(bg=GRID_BG)

        self._setup_fonts()

        settings = load_settings()
        self._saved_width: int | None = settings["window_width"]
        self._saved_height: int | None = settings["window_height"]

        # Widget-to-day mapping (filled during render)
        self._widget_days: dict[int, int] = {}
        # Pending long-press timer: (widget id, after id)
        self._press: tuple[int, str] | None = None
        self._footer_label: tk.Label | None = None
        self._chart: ChartWindow | None = None

        self._build_shell()

        controller.add_listener(self.render)
        controller.add_summary_listener(self._show_chart)

        self.root.bind("<Left>", lambda _e: controller.navigate_previous())
        self.root.bind("<Right>", lambda _e: controller.navigate_next())
        self.root.bind("<Escape>", lambda _e: self.hide())
        self.root.bind("<Configure>", self._on_configure)
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=9)
        self.font_bold = tkfont.Font(family=base, size=9, weight="bold")
        self.font_header = tkfont.Font(family=base, size=12, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=12, weight="bold")
        self.font_count = tkfont.Font(family=base, size=16, weight="bold")
        self.font_footer = tkfont.Font(family=base, size=9)

    # ------------------------------------------------------------------
    # Build shell (once) — nav bar + month panel + footer
    # ------------------------------------------------------------------
    def _build_shell(self) -> None:
        outer = tk.Frame(self.root, bg=GRID_BG)
        outer.pack(padx=6, pady=4)

        # Navigation row: ◀  Today  Chart  ▶
        nav = tk.Frame(outer, bg=GRID_BG)
        nav.pack(fill="x", pady=(0, 2))

        btn_prev = tk.Label(
            nav, text="◀", font=self.font_nav, bg=GRID_BG, cursor="hand2"
        )
        btn_prev.pack(side="left", padx=6)
        btn_prev.bind("<Button-1>", lambda _e: self.controller.navigate_previous())

        btn_today = tk.Label(
            nav, text="Today", font=self.font_bold, bg=GRID_BG, fg=ACCENT,
            cursor="hand2",
        )
        btn_today.pack(side="left", padx=6)
        btn_today.bind("<Button-1>", lambda _e: self.controller.go_today())

        btn_next = tk.Label(
            nav, text="▶", font=self.font_nav, bg=GRID_BG, cursor="hand2"
        )
        btn_next.pack(side="right", padx=6)
        btn_next.bind("<Button-1>", lambda _e: self.controller.navigate_next())

        btn_chart = tk.Label(
            nav, text="Chart", font=self.font_bold, bg=GRID_BG, fg=ACCENT,
            cursor="hand2",
        )
        btn_chart.pack(side="right", padx=6)
        btn_chart.bind("<Button-1>", lambda _e: self.open_chart())

        fonts = {"header": self.font_header, "bold": self.font_bold}
        self._panel = _MonthPanel(
            outer, fonts, self._on_press, self._on_release, self._on_secondary,
        )
        self._panel.frame.pack()

        self._footer_label = tk.Label(
            outer, font=self.font_footer, bg=GRID_BG, fg="#555555",
        )
        self._footer_label.pack(pady=(4, 0))

    # ------------------------------------------------------------------
    # Render a MonthView pushed by the controller
    # ------------------------------------------------------------------
    def render(self, view: MonthView) -> None:
        # A pending hold must not fire against a different month
        self._cancel_press()
        panel = self._panel
        panel.header.configure(text=view.header)
        for lbl, text in zip(panel.day_headers, view.weekday_labels):
            lbl.configure(text=text)

        self._widget_days.clear()
        for cell_view in view.cells:
            cell = panel.day_cells[cell_view.row][cell_view.column]
            if cell_view.day is None:
                cell.delete("all")
                cell.configure(bg=GRID_BG, cursor="")
                continue
            self._draw_cell(cell, cell_view.day, cell_view.count, cell_view.is_today)
            self._widget_days[id(cell)] = cell_view.day

        if self._footer_label:
            self._footer_label.configure(text=self._footer_text(view))
        if self._chart is not None and self._chart.is_open():
            self.controller.summary_requested()

    def _draw_cell(self, cell: tk.Canvas, day: int, count: int | None,
                   is_today: bool) -> None:
        cell.delete("all")
        bg = ACCENT if is_today else CELL_BG
        fg = "white" if is_today else COUNT_FG
        cell.configure(bg=bg, cursor="hand2")
        cell.create_text(5, 4, text=str(day), anchor="nw", fill=fg,
                         font=self.font_bold if is_today else self.font_normal)
        if count is not None:
            cell.create_text(CELL_W - 5, CELL_H - 3, text=str(count), anchor="se",
                             fill=fg, font=self.font_count)

    @staticmethod
    def _footer_text(view: MonthView) -> str:
        today_str = f"Today: {view.today.strftime('%d.%m.%Y')}"
        return f"Month total: {view.total}     {today_str}"

    # ------------------------------------------------------------------
    # Tap / long-press
    # ------------------------------------------------------------------
    def _on_press(self, event: tk.Event) -> None:
        self._cancel_press()
        day = self._widget_days.get(id(event.widget))
        if day is None:
            return
        after_id = self.root.after(LONG_PRESS_MS, lambda: self._fire_long_press(day))
        self._press = (id(event.widget), after_id)

    def _on_release(self, event: tk.Event) -> None:
        if self._press is None:
            return
        widget_id, after_id = self._press
        self._press = None
        self.root.after_cancel(after_id)
        w = event.widget.winfo_containing(event.x_root, event.y_root)
        # Released elsewhere: treat as cancelled
        if w is None or id(w) != widget_id:
            return
        self.controller.cell_tapped(self._widget_days.get(widget_id))

    def _fire_long_press(self, day: int) -> None:
        self._press = None
        self.controller.cell_long_pressed(day)

    def _on_secondary(self, event: tk.Event) -> None:
        self._cancel_press()
        self.controller.cell_long_pressed(self._widget_days.get(id(event.widget)))

    def _cancel_press(self) -> None:
        if self._press is not None:
            self.root.after_cancel(self._press[1])
            self._press = None

    # ------------------------------------------------------------------
    # Chart
    # ------------------------------------------------------------------
    def open_chart(self) -> None:
        self.controller.summary_requested()
        # Only an explicit request brings the chart forward; redraws after taps do not
        if self._chart is not None:
            self._chart.raise_()

    def _show_chart(self, summary) -> None:
        if self._chart is None or not self._chart.is_open():
            self._chart = ChartWindow(self.root)
        self._chart.draw(summary)

    # ------------------------------------------------------------------
    # Resize tracking / persist window size
    # ------------------------------------------------------------------
    def _on_configure(self, event: tk.Event) -> None:
        if event.widget is not self.root:
            return
        self._saved_width = self.root.winfo_width()
        self._saved_height = self.root.winfo_height()

    def persist_size(self) -> None:
        if self._saved_width is None or self._saved_height is None:
            return
        settings = load_settings()
        settings["window_width"] = self._saved_width
        settings["window_height"] = self._saved_height
        try:
            save_settings(settings)
        except OSError as err:
            logger.warning("Could not save window size: %s", err)

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self.controller.go_today()
        self.root.deiconify()
        if self._saved_width is not None and self._saved_height is not None:
            self.root.geometry(f"{self._saved_width}x{self._saved_height}")
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        self.persist_size()
        self.root.withdraw()
