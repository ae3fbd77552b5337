"""System-tray icon setup via pystray."""

from datetime import date
from typing import Callable

import pystray
from PIL import Image
from pystray import Menu, MenuItem


def create_tray(
    icon_image: Image.Image,
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
    on_export: Callable[[], None] | None = None,
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    items: list[MenuItem | Menu] = [
        MenuItem("Show Form", lambda _icon, _item: on_show(), default=True),
    ]
    if on_export is not None:
        items.append(MenuItem("Export PDF", lambda _icon, _item: on_export()))
    items.append(Menu.SEPARATOR)
    items.append(MenuItem("Exit", lambda _icon, _item: on_exit()))
    title = f"Mini Date Picker: {date.today().isoformat()}"
    return pystray.Icon("mini-date-picker", icon_image, title, Menu(*items))
