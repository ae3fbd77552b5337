"""Conversion between the text field and the selected date.

The picker keeps its whole state in one ``SelectionState`` value. The
functions below are the only transitions that touch the text/date pair;
each returns the new state and the canonical text that was committed, or
``None`` when the committed value did not change hands.
"""

import logging
import re
from dataclasses import dataclass, replace
from datetime import date

from calendar_logic import DateBounds, view_of

log = logging.getLogger(__name__)

_CANONICAL_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})\s*\Z", re.ASCII)
# A configured bound may carry a time of day; only the date part counts
_BOUND_RE = re.compile(r"^\s*(\d{4}-\d{1,2}-\d{1,2})(?:[T ]\d{1,2}:\d{2}.*)?\s*\Z", re.ASCII)


def parse_date(text: str | None) -> date | None:
    """Return the date denoted by canonical ``YYYY-MM-DD`` text, else None."""
    if not text:
        return None
    m = _CANONICAL_RE.match(text)
    if m is None:
        return None
    year, month, day = (int(g) for g in m.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def format_date(d: date) -> str:
    # strftime("%Y") does not zero-pad years below 1000 on every platform
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def parse_bound(text: str | None) -> date | None:
    """Parse a min/max configuration value, truncating any time component."""
    if not text:
        return None
    m = _BOUND_RE.match(text)
    if m is None:
        log.warning("Ignoring unparsable date bound %r", text)
        return None
    d = parse_date(m.group(1))
    if d is None:
        log.warning("Ignoring invalid date bound %r", text)
    return d


def make_bounds(min_date: str | date | None, max_date: str | date | None) -> DateBounds:
    """Build a DateBounds from text or date values."""
    lo = min_date if isinstance(min_date, date) or min_date is None else parse_bound(min_date)
    hi = max_date if isinstance(max_date, date) or max_date is None else parse_bound(max_date)
    bounds = DateBounds(lo, hi)
    if bounds.is_empty:
        log.warning("min_date %s is after max_date %s; no date is selectable", lo, hi)
    return bounds


@dataclass(frozen=True)
class SelectionState:
    selected_date: date | None
    viewed_month: tuple[int, int]
    text_value: str
    is_open: bool = False


def seed_state(value: str | None, today: date, bounds: DateBounds,
               is_open: bool = False) -> SelectionState:
    """Build the state for an externally supplied value.

    Selection, viewed month and text are set together. A value that does not
    parse, or falls outside the bounds, seeds an empty selection.
    """
    d = parse_date(value)
    if d is not None and not bounds.contains(d):
        log.debug("Seed value %s is out of bounds; starting empty", d)
        d = None
    if d is None:
        return SelectionState(None, view_of(today), "", is_open)
    return SelectionState(d, view_of(d), format_date(d), is_open)


def apply_text(state: SelectionState, text: str,
               bounds: DateBounds) -> tuple[SelectionState, str | None]:
    """Live sync on every keystroke.

    A valid in-bounds date updates the selection and the viewed month right
    away. Anything else only updates the text; a previous selection is kept.
    """
    d = parse_date(text)
    if d is None or not bounds.contains(d):
        return replace(state, text_value=text), None
    committed = format_date(d)
    return replace(state, selected_date=d, viewed_month=view_of(d),
                   text_value=text), committed


def apply_blur(state: SelectionState) -> SelectionState:
    """Snap the text back to the canonical form of the selection."""
    if state.selected_date is None:
        return replace(state, text_value="")
    return replace(state, text_value=format_date(state.selected_date))


def commit_date(state: SelectionState, d: date,
                bounds: DateBounds) -> tuple[SelectionState, str | None]:
    """Select a date from the grid, the keyboard or the today shortcut."""
    if not bounds.contains(d):
        return state, None
    committed = format_date(d)
    return replace(state, selected_date=d, viewed_month=view_of(d),
                   text_value=committed), committed


def clear_state(state: SelectionState, today: date) -> tuple[SelectionState, str]:
    """Reset selection, text and viewed month together."""
    return replace(state, selected_date=None, viewed_month=view_of(today),
                   text_value=""), ""
