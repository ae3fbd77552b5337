"""Date picker state machine (Closed/Open), no UI dependencies.

The controller owns the popup state and routes user actions to the
calendar engine and the text/date sync layer. It is the only place the
external ``on_change`` callback is fired from. Rendering lives in
``picker_widgets``; the host environment supplies the clock and the
outside-click watcher.
"""

import logging
from dataclasses import replace
from datetime import date
from typing import Callable, Protocol

from calendar_logic import NEXT, PREVIOUS, GridCell, build_grid, navigate_month
from date_sync import (
    SelectionState,
    apply_blur,
    apply_text,
    clear_state,
    commit_date,
    make_bounds,
    seed_state,
)

log = logging.getLogger(__name__)

Clock = Callable[[], date]
Release = Callable[[], None]

_ARROW_DIRECTIONS = {"ArrowLeft": PREVIOUS, "ArrowRight": NEXT}


class OutsideClickWatcher(Protocol):
    """Calls ``callback`` for pointer presses outside the picker's region."""

    def watch(self, callback: Callable[[], None]) -> Release: ...


class DatePickerController:
    """Popup date field: typed text, month grid and keyboard shortcuts."""

    def __init__(
        self,
        value: str | None = None,
        on_change: Callable[[str], None] | None = None,
        min_date: str | date | None = None,
        max_date: str | date | None = None,
        disabled: bool = False,
        placeholder: str = "Select date",
        clock: Clock = date.today,
        outside_clicks: OutsideClickWatcher | None = None,
    ) -> None:
        self.on_change = on_change
        self.disabled = disabled
        self.placeholder = placeholder
        self._clock = clock
        self._outside_clicks = outside_clicks
        self._release: Release | None = None
        self.bounds = make_bounds(min_date, max_date)
        self.state: SelectionState = seed_state(value, clock(), self.bounds)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def is_open(self) -> bool:
        return self.state.is_open

    @property
    def selected_date(self) -> date | None:
        return self.state.selected_date

    @property
    def text_value(self) -> str:
        return self.state.text_value

    @property
    def viewed_month(self) -> tuple[int, int]:
        return self.state.viewed_month

    def grid(self) -> list[GridCell]:
        return build_grid(
            self.state.viewed_month, self.state.selected_date,
            self.bounds.min_date, self.bounds.max_date, self._clock(),
        )

    # ------------------------------------------------------------------
    # Open / Close
    # ------------------------------------------------------------------
    def open(self) -> None:
        if self.disabled or self.state.is_open:
            return
        self._set_open(True)
        if self._outside_clicks is not None:
            self._release = self._outside_clicks.watch(self.outside_click)

    def close(self) -> None:
        if not self.state.is_open:
            return
        self._set_open(False)
        self._release_watch()

    def toggle(self) -> None:
        if self.state.is_open:
            self.close()
        else:
            self.open()

    def focus(self) -> None:
        self.open()

    def outside_click(self) -> None:
        self.close()

    def destroy(self) -> None:
        """Drop the outside-click subscription when the host goes away."""
        self._release_watch()
        self._set_open(False)

    # ------------------------------------------------------------------
    # Text field
    # ------------------------------------------------------------------
    def type_text(self, text: str) -> None:
        if self.disabled:
            return
        self.state, committed = apply_text(self.state, text, self.bounds)
        self._emit(committed)

    def blur(self) -> None:
        self.state = apply_blur(self.state)

    # ------------------------------------------------------------------
    # Grid and navigation
    # ------------------------------------------------------------------
    def navigate(self, direction: str) -> None:
        self._replace_state(viewed_month=navigate_month(self.state.viewed_month, direction))

    def pick(self, d: date) -> None:
        """Commit a date and close; out-of-bounds dates are ignored."""
        self.state, committed = commit_date(self.state, d, self.bounds)
        if committed is None:
            log.debug("Refused out-of-bounds pick %s", d)
            return
        self.close()
        self._emit(committed)

    def pick_cell(self, cell: GridCell) -> None:
        if not cell.selectable:
            return
        self.pick(cell.date)

    def jump_to_today(self) -> None:
        if not self.state.is_open:
            return
        today = self._clock()
        if self.bounds.contains(today):
            self.pick(today)

    def clear(self) -> None:
        self.state, committed = clear_state(self.state, self._clock())
        self._emit(committed)

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------
    def key(self, name: str) -> bool:
        """Handle a key while open; return True when the key was consumed."""
        if not self.state.is_open:
            return False
        if name == "Escape":
            self.close()
        elif name == "Enter":
            if self.state.selected_date is not None:
                self.pick(self.state.selected_date)
            self.close()
        elif name in _ARROW_DIRECTIONS:
            self.navigate(_ARROW_DIRECTIONS[name])
        else:
            return False
        return True

    # ------------------------------------------------------------------
    # External value and configuration
    # ------------------------------------------------------------------
    def set_value(self, value: str | None) -> None:
        """Re-seed selection, viewed month and text from the host form."""
        self.state = seed_state(value, self._clock(), self.bounds,
                                is_open=self.state.is_open)

    def set_bounds(self, min_date: str | date | None, max_date: str | date | None) -> None:
        """Replace the bounds; a selection that falls outside them is cleared."""
        self.bounds = make_bounds(min_date, max_date)
        selected = self.state.selected_date
        if selected is None or self.bounds.contains(selected):
            return
        log.debug("Selection %s dropped by new bounds", selected)
        self.state = seed_state(None, self._clock(), self.bounds,
                                is_open=self.state.is_open)
        self._emit("")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _set_open(self, is_open: bool) -> None:
        self._replace_state(is_open=is_open)

    def _replace_state(self, **changes) -> None:
        self.state = replace(self.state, **changes)

    def _release_watch(self) -> None:
        if self._release is not None:
            release, self._release = self._release, None
            release()

    def _emit(self, committed: str | None) -> None:
        if committed is None:
            return
        log.debug("Date committed: %r", committed)
        if self.on_change is not None:
            self.on_change(committed)
