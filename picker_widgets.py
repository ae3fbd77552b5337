"""tkinter date and time fields with a popup picker below the entry."""

import tkinter as tk
from datetime import date, datetime
from tkinter import font as tkfont
from typing import Callable

from calendar_logic import DAY_ABBR, NEXT, PREVIOUS, GRID_WEEKS, GridCell, month_title
from click_watch import TkOutsideClickWatcher
from date_picker import DatePickerController
from time_picker import TimePickerController

# Colours
ACCENT = "#0078D4"
TODAY_BG = "#E5F1FB"
HEADER_BG = "#F3F3F3"
GRID_BG = "white"
INERT_FG = "#AAAAAA"
DISABLED_FG = "#C8C8C8"
HINT_FG = "#888888"

_KEY_NAMES = {
    "<Escape>": "Escape",
    "<Return>": "Enter",
    "<Left>": "ArrowLeft",
    "<Right>": "ArrowRight",
}


class _PopupField(tk.Frame):
    """Entry + clear/toggle buttons + a borderless popup below the entry.

    Subclasses own a controller and fill the popup; this class keeps the
    entry text and the popup visibility in line with the controller.
    """

    toggle_text = "▾"

    def __init__(self, master: tk.Misc, controller, width: int = 12) -> None:
        super().__init__(master, bg=GRID_BG)
        self.controller = controller
        self._setup_fonts()

        self._var = tk.StringVar(value=controller.text_value)
        self._syncing = False
        self._popup: tk.Toplevel | None = None

        self.entry = tk.Entry(self, textvariable=self._var, width=width,
                              font=self.font_normal)
        self.entry.pack(side="left", fill="x", expand=True)
        if controller.disabled:
            self.entry.configure(state="disabled")

        # tk.Entry has no placeholder; overlay a grey hint while empty
        self._hint = tk.Label(self.entry, text=controller.placeholder,
                              font=self.font_normal, fg=HINT_FG, bg=GRID_BG)
        self._hint.bind("<Button-1>", lambda _e: self.entry.focus_set())

        self._btn_clear = tk.Label(self, text="✕", font=self.font_normal,
                                   bg=GRID_BG, cursor="hand2")
        self._btn_clear.bind("<Button-1>", lambda _e: self._run(controller.clear))

        btn_toggle = tk.Label(self, text=self.toggle_text, font=self.font_nav,
                              bg=GRID_BG, cursor="hand2")
        btn_toggle.pack(side="right", padx=(2, 0))
        btn_toggle.bind("<Button-1>", lambda _e: self._run(controller.toggle))

        self._var.trace_add("write", self._on_var_write)
        self.entry.bind("<FocusIn>", self._on_focus_in)
        self.entry.bind("<FocusOut>", lambda _e: self._run(controller.blur))
        for sequence, name in _KEY_NAMES.items():
            self.entry.bind(sequence, self._make_key_handler(name))
        self.bind("<Destroy>", self._on_destroy)

        self._refresh()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=9)
        self.font_bold = tkfont.Font(family=base, size=9, weight="bold")
        self.font_header = tkfont.Font(family=base, size=10, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=12, weight="bold")

    # ------------------------------------------------------------------
    # Event plumbing
    # ------------------------------------------------------------------
    def _run(self, action: Callable[[], None]) -> None:
        action()
        self._refresh()

    def _on_focus_in(self, _event: tk.Event) -> None:
        self._hint.place_forget()
        self._run(self.controller.open)

    def _on_var_write(self, *_args) -> None:
        if self._syncing:
            return
        self._run(lambda: self.controller.type_text(self._var.get()))

    def _make_key_handler(self, name: str):
        def _handler(_event: tk.Event) -> str | None:
            if self.controller.key(name):
                self._refresh()
                return "break"
            return None
        return _handler

    def _on_destroy(self, event: tk.Event) -> None:
        if event.widget is self:
            self.controller.destroy()

    def _emit_changed(self, _text: str) -> None:
        self.event_generate("<<ValueChanged>>")

    # ------------------------------------------------------------------
    # Sync widgets with controller state
    # ------------------------------------------------------------------
    def _refresh(self) -> None:
        text = self.controller.text_value
        if self._var.get() != text:
            self._syncing = True
            try:
                self._var.set(text)
            finally:
                self._syncing = False

        if text:
            self._btn_clear.pack(side="right", padx=(2, 0))
        else:
            self._btn_clear.pack_forget()

        if not text and self.focus_get() is not self.entry:
            self._hint.place(x=2, rely=0.5, anchor="w")
        else:
            self._hint.place_forget()

        if self.controller.is_open:
            self._show_popup()
        elif self._popup is not None:
            self._popup.withdraw()

    def _show_popup(self) -> None:
        if self._popup is None:
            self._popup = tk.Toplevel(self)
            self._popup.withdraw()
            self._popup.wm_overrideredirect(True)
            self._popup.wm_attributes("-topmost", True)
            self._popup.configure(bg=GRID_BG, highlightthickness=1,
                                  highlightbackground="#CCCCCC")
            self._build_popup(self._popup)
        self._fill_popup()
        x = self.winfo_rootx()
        y = self.winfo_rooty() + self.winfo_height() + 2
        self._popup.wm_geometry(f"+{x}+{y}")
        self._popup.deiconify()
        self._popup.lift()

    def _build_popup(self, popup: tk.Toplevel) -> None:
        raise NotImplementedError

    def _fill_popup(self) -> None:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Host form API
    # ------------------------------------------------------------------
    def get(self) -> str:
        return self.controller.text_value

    def set(self, value: str | None) -> None:
        """Replace the value from the host form (no change event)."""
        self.controller.set_value(value)
        self._refresh()


class DatePicker(_PopupField):
    """Date entry with a month-grid popup.

    Emits ``<<ValueChanged>>`` and calls ``on_change`` with the canonical
    ``YYYY-MM-DD`` text (or ``""`` after clear) whenever the value changes.
    """

    toggle_text = "\U0001F4C5"

    def __init__(
        self,
        master: tk.Misc,
        value: str | None = None,
        on_change: Callable[[str], None] | None = None,
        placeholder: str = "Select date",
        disabled: bool = False,
        min_date: str | None = None,
        max_date: str | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._on_change = on_change
        # Widget-to-cell mapping (filled during _fill_popup)
        self._widget_cells: dict[int, GridCell] = {}
        self._day_cells: list[tk.Label] = []
        self._title: tk.Label | None = None
        controller = DatePickerController(
            value, on_change=self._on_commit, min_date=min_date,
            max_date=max_date, disabled=disabled, placeholder=placeholder,
            clock=clock, outside_clicks=TkOutsideClickWatcher(self),
        )
        super().__init__(master, controller)

    def _on_commit(self, text: str) -> None:
        if self._on_change is not None:
            self._on_change(text)
        self._emit_changed(text)

    # ------------------------------------------------------------------
    # Build popup (once): nav row, weekday headers, 6x7 cells, Today
    # ------------------------------------------------------------------
    def _build_popup(self, popup: tk.Toplevel) -> None:
        frame = tk.Frame(popup, bg=GRID_BG)
        frame.pack(padx=6, pady=4)

        nav = tk.Frame(frame, bg=GRID_BG)
        nav.grid(row=0, column=0, columnspan=7, sticky="we", pady=(0, 2))

        btn_prev = tk.Label(nav, text="◀", font=self.font_nav,
                            bg=GRID_BG, cursor="hand2")
        btn_prev.pack(side="left", padx=6)
        btn_prev.bind("<Button-1>", lambda _e: self._run(
            lambda: self.controller.navigate(PREVIOUS)))

        btn_next = tk.Label(nav, text="▶", font=self.font_nav,
                            bg=GRID_BG, cursor="hand2")
        btn_next.pack(side="right", padx=6)
        btn_next.bind("<Button-1>", lambda _e: self._run(
            lambda: self.controller.navigate(NEXT)))

        self._title = tk.Label(nav, font=self.font_header, bg=GRID_BG, fg="#333333")
        self._title.pack(side="left", expand=True)

        for col, abbr in enumerate(DAY_ABBR):
            tk.Label(frame, text=abbr, font=self.font_bold, bg=HEADER_BG,
                     fg="#333333", width=3).grid(row=1, column=col, sticky="we")

        for r in range(GRID_WEEKS):
            for c in range(7):
                cell = tk.Label(frame, font=self.font_normal, bg=GRID_BG, width=3)
                cell.grid(row=r + 2, column=c, padx=1, pady=1)
                cell.bind("<Button-1>", self._on_cell_click)
                self._day_cells.append(cell)

        btn_today = tk.Label(frame, text="Today", font=self.font_bold, bg=GRID_BG,
                             fg=ACCENT, cursor="hand2")
        btn_today.grid(row=GRID_WEEKS + 2, column=0, columnspan=7, pady=(4, 0))
        btn_today.bind("<Button-1>", lambda _e: self._run(self.controller.jump_to_today))

    def _fill_popup(self) -> None:
        """Reconfigure the pooled cells; no widget creation."""
        self._title.configure(text=month_title(*self.controller.viewed_month))
        self._widget_cells.clear()
        for label, cell in zip(self._day_cells, self.controller.grid()):
            bg, fg = self._day_colors(cell)
            label.configure(
                text=str(cell.day), bg=bg, fg=fg,
                font=self.font_bold if cell.today or cell.selected else self.font_normal,
                cursor="hand2" if cell.selectable else "",
            )
            self._widget_cells[id(label)] = cell

    @staticmethod
    def _day_colors(cell: GridCell) -> tuple[str, str]:
        if cell.inert:
            return GRID_BG, INERT_FG
        if cell.selected:
            return ACCENT, "white"
        if not cell.selectable:
            return GRID_BG, DISABLED_FG
        if cell.today:
            return TODAY_BG, "black"
        return GRID_BG, "black"

    def _on_cell_click(self, event: tk.Event) -> None:
        cell = self._widget_cells.get(id(event.widget))
        if cell is not None:
            self._run(lambda: self.controller.pick_cell(cell))


class TimePicker(_PopupField):
    """``HH:MM`` entry with a quick-select popup."""

    toggle_text = "\U0001F552"

    def __init__(
        self,
        master: tk.Misc,
        value: str | None = None,
        on_change: Callable[[str], None] | None = None,
        placeholder: str = "Select time",
        disabled: bool = False,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._on_change = on_change
        self._option_buttons: list[tk.Button] = []
        controller = TimePickerController(
            value, on_change=self._on_commit, disabled=disabled,
            placeholder=placeholder, clock=clock,
            outside_clicks=TkOutsideClickWatcher(self),
        )
        super().__init__(master, controller, width=6)

    def _on_commit(self, text: str) -> None:
        if self._on_change is not None:
            self._on_change(text)
        self._emit_changed(text)

    def _build_popup(self, popup: tk.Toplevel) -> None:
        frame = tk.Frame(popup, bg=GRID_BG, padx=8, pady=6)
        frame.pack()
        tk.Label(frame, text="Quick Select", font=self.font_bold, bg=GRID_BG,
                 fg=HINT_FG).grid(row=0, column=0, columnspan=2, sticky="w", pady=(0, 4))
        for i in range(len(self.controller.options())):
            btn = tk.Button(frame, width=6, font=self.font_normal)
            btn.grid(row=1 + i // 2, column=i % 2, padx=2, pady=2)
            self._option_buttons.append(btn)

    def _fill_popup(self) -> None:
        # "Now" moves with the clock, so labels and commands are rebound on every open
        for btn, (label, hours, minutes) in zip(self._option_buttons,
                                                 self.controller.options()):
            btn.configure(
                text=label,
                command=lambda h=hours, m=minutes: self._run(
                    lambda: self.controller.pick(h, m)),
            )
