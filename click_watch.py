"""Outside-click detection on a tkinter toplevel.

Each subscription adds its own ``<ButtonPress-1>`` handler to the toplevel
and removes only that handler on release, so several pickers (and the host
application) can share one window.
"""

from tkinter import TclError
from typing import Callable

PRESS = "<ButtonPress-1>"


def is_inside(widget, region) -> bool:
    """True when ``widget`` is ``region`` or one of its descendants."""
    w = widget
    while w is not None:
        if w is region:
            return True
        w = getattr(w, "master", None)
    return False


def remove_handler(top, sequence: str, funcid: str) -> None:
    """Drop one handler added with ``bind(..., add="+")``, keeping the rest.

    ``Misc.unbind(sequence, funcid)`` clears every handler of the sequence
    before Python 3.13, so the binding script is rewritten instead.
    """
    # tkinter writes each handler as: if {"[<funcid> %# %b ...]" == "break"} break
    marker = f"[{funcid} "
    script = top.bind(sequence) or ""
    kept = [line for line in script.split("\n") if line.strip() and marker not in line]
    top.bind(sequence, "\n".join(kept))
    top.deletecommand(funcid)


class TkOutsideClickWatcher:
    """Reports mouse presses in the host window that land outside ``region``.

    The popup is a child of ``region``, so presses inside it never count as
    outside. The handler lives only between ``watch`` and its release.
    """

    __slots__ = ("_region",)

    def __init__(self, region) -> None:
        self._region = region

    def watch(self, callback: Callable[[], None]) -> Callable[[], None]:
        top = self._region.winfo_toplevel()

        def _on_press(event) -> None:
            if not is_inside(event.widget, self._region):
                callback()

        funcid = top.bind(PRESS, _on_press, add="+")
        released = False

        def release() -> None:
            nonlocal released
            if released:
                return
            released = True
            try:
                remove_handler(top, PRESS, funcid)
            except TclError:
                # Toplevel already destroyed together with its bindings
                pass

        return release
