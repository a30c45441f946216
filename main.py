"""Entry point — glues pystray (daemon thread) with tkinter (main thread)."""

import ctypes
import logging
import os
import sys
import threading

from calendar_window import CalendarWindow
from controller import CalendarController
from count_store import CountStore
from icon_gen import create_icon_image
from settings import data_dir, load_settings
from storage import FileStorage
from tray_icon import create_tray, update_tray

LOG_NAME = "count-per-day.log"

logger = logging.getLogger(__name__)


def setup_logging(log_path: str) -> None:
    root = logging.getLogger()
    root.setLevel(logging.INFO)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    root.addHandler(handler)


def log_unhandled_exception(exc_type, exc, tb) -> None:
    logger.error("Unhandled exception", exc_info=(exc_type, exc, tb))


def main() -> None:
    # DPI awareness so fonts are crisp on Hi-DPI monitors (Windows only)
    try:
        ctypes.windll.shcore.SetProcessDpiAwareness(1)
    except (AttributeError, OSError):
        pass

    settings = load_settings()
    directory = data_dir(settings)
    os.makedirs(directory, exist_ok=True)
    setup_logging(os.path.join(directory, LOG_NAME))
    sys.excepthook = log_unhandled_exception

    store = CountStore(FileStorage(directory))
    store.load()
    controller = CalendarController(store, first_weekday=settings["first_weekday"])
    cal_win = CalendarWindow(controller)

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        cal_win.root.after(0, cal_win.toggle)

    def on_chart() -> None:
        def _chart() -> None:
            cal_win.show()
            cal_win.open_chart()
        cal_win.root.after(0, _chart)

    def on_exit() -> None:
        def _quit() -> None:
            cal_win.persist_size()
            tray.stop()
            cal_win.root.destroy()
        cal_win.root.after(0, _quit)

    tray = create_tray(create_icon_image(controller.today_count()),
                       controller.today_count(), on_show, on_exit, on_chart=on_chart)
    controller.add_listener(lambda _view: update_tray(tray, controller.today_count()))

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()

    cal_win.show()
    # tkinter main loop on the main thread
    cal_win.root.mainloop()
    logger.info("Exiting")


if __name__ == "__main__":
    main()
