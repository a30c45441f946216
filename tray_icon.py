"""System-tray icon setup via pystray."""

from typing import Callable

import pystray
from PIL import Image
from pystray import MenuItem, Menu

from icon_gen import create_icon_image


def _tooltip(count: int) -> str:
    return f"Count Per Day – today: {count}"


def create_tray(
    icon_image: Image.Image,
    today_count: int,
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
    on_chart: Callable[[], None] | None = None,
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    items: list[MenuItem | Menu] = [
        MenuItem("Show Calendar", lambda _icon, _item: on_show(), default=True),
    ]
    if on_chart is not None:
        items.append(MenuItem("Monthly Chart", lambda _icon, _item: on_chart()))
    items.append(Menu.SEPARATOR)
    items.append(MenuItem("Exit", lambda _icon, _item: on_exit()))
    menu = Menu(*items)
    return pystray.Icon("count-per-day", icon_image, _tooltip(today_count), menu)


def update_tray(icon: pystray.Icon, today_count: int) -> None:
    """Redraw the icon and tooltip for a new count."""
    icon.icon = create_icon_image(today_count)
    icon.title = _tooltip(today_count)
