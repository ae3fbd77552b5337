"""Time-of-day field with quick-pick options, no UI dependencies."""

import logging
import re
from datetime import datetime
from typing import Callable

from date_picker import OutsideClickWatcher, Release

log = logging.getLogger(__name__)

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})\Z", re.ASCII)

QUICK_TIMES = [(9, 0), (12, 0), (15, 0), (18, 0), (21, 0)]


def parse_time(text: str | None) -> tuple[int, int] | None:
    """Return (hours, minutes) for ``H:MM`` / ``HH:MM`` text, else None."""
    if not text:
        return None
    m = _TIME_RE.match(text)
    if m is None:
        return None
    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours, minutes


def format_time(hours: int, minutes: int) -> str:
    return f"{hours:02d}:{minutes:02d}"


def quick_options(now: datetime) -> list[tuple[str, int, int]]:
    """Return [(label, hours, minutes), ...] with "Now" first."""
    options = [("Now", now.hour, now.minute)]
    for hours, minutes in QUICK_TIMES:
        options.append((f"{hours}:{minutes:02d}", hours, minutes))
    return options


class TimePickerController:
    """Companion to DatePickerController for an ``HH:MM`` field."""

    def __init__(
        self,
        value: str | None = None,
        on_change: Callable[[str], None] | None = None,
        disabled: bool = False,
        placeholder: str = "Select time",
        clock: Callable[[], datetime] = datetime.now,
        outside_clicks: OutsideClickWatcher | None = None,
    ) -> None:
        self.on_change = on_change
        self.disabled = disabled
        self.placeholder = placeholder
        self._clock = clock
        self._outside_clicks = outside_clicks
        self._release: Release | None = None
        self.text_value: str = value or ""
        self.is_open = False

    def options(self) -> list[tuple[str, int, int]]:
        return quick_options(self._clock())

    def open(self) -> None:
        if self.disabled or self.is_open:
            return
        self.is_open = True
        if self._outside_clicks is not None:
            self._release = self._outside_clicks.watch(self.close)

    def close(self) -> None:
        if not self.is_open:
            return
        self.is_open = False
        if self._release is not None:
            release, self._release = self._release, None
            release()

    def toggle(self) -> None:
        if self.is_open:
            self.close()
        else:
            self.open()

    def destroy(self) -> None:
        self.close()

    def key(self, name: str) -> bool:
        if self.is_open and name == "Escape":
            self.close()
            return True
        return False

    def type_text(self, text: str) -> None:
        if self.disabled:
            return
        self.text_value = text
        if parse_time(text) is not None:
            self._emit(text)

    def blur(self) -> None:
        parsed = parse_time(self.text_value)
        if parsed is None:
            return
        self.text_value = format_time(*parsed)
        self._emit(self.text_value)

    def pick(self, hours: int, minutes: int) -> None:
        self.text_value = format_time(hours, minutes)
        self._emit(self.text_value)
        self.close()

    def clear(self) -> None:
        self.text_value = ""
        self._emit("")

    def set_value(self, value: str | None) -> None:
        self.text_value = value or ""

    def _emit(self, text: str) -> None:
        log.debug("Time committed: %r", text)
        if self.on_change is not None:
            self.on_change(text)
