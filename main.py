"""Entry point: glues pystray (daemon thread) with the tkinter form (main thread)."""

import ctypes
import logging
import os
import threading
import tkinter as tk

from icon_gen import create_icon_image
from pdf_export import capture_widget, export_image_to_pdf, result_filename
from picker_widgets import GRID_BG, DatePicker, TimePicker
from settings import load_settings
from tray_icon import create_tray

log = logging.getLogger(__name__)


class FormWindow:
    """Exam schedule form: registration number, exam date, exam time."""

    def __init__(self, settings: dict) -> None:
        self.settings = settings
        self.root = tk.Tk()
        self.root.title("Exam Schedule")
        self.root.configure(bg=GRID_BG)
        self.root.resizable(False, False)

        self._form = tk.Frame(self.root, bg=GRID_BG, padx=12, pady=8)
        self._form.pack()

        tk.Label(self._form, text="Registration No.:", bg=GRID_BG).grid(
            row=0, column=0, sticky="w", pady=4)
        self.reg_no = tk.Entry(self._form, width=14)
        self.reg_no.grid(row=0, column=1, sticky="we", padx=(8, 0), pady=4)

        tk.Label(self._form, text="Exam date:", bg=GRID_BG).grid(
            row=1, column=0, sticky="w", pady=4)
        self.date_field = DatePicker(
            self._form,
            placeholder=settings["date_placeholder"],
            min_date=settings["min_date"],
            max_date=settings["max_date"],
            on_change=lambda v: log.info("Exam date changed: %r", v),
        )
        self.date_field.grid(row=1, column=1, sticky="we", padx=(8, 0), pady=4)

        tk.Label(self._form, text="Exam time:", bg=GRID_BG).grid(
            row=2, column=0, sticky="w", pady=4)
        self.time_field = TimePicker(
            self._form,
            placeholder=settings["time_placeholder"],
            on_change=lambda v: log.info("Exam time changed: %r", v),
        )
        self.time_field.grid(row=2, column=1, sticky="we", padx=(8, 0), pady=4)

        btn_frame = tk.Frame(self.root, bg=GRID_BG)
        btn_frame.pack(pady=(0, 8))
        tk.Button(btn_frame, text="Download PDF", width=14,
                  command=self.export_pdf).pack(side="left", padx=4)
        tk.Button(btn_frame, text="Reset", width=8,
                  command=self.reset).pack(side="left", padx=4)

        self._status = tk.Label(self.root, bg=GRID_BG, fg="#555555")
        self._status.pack(pady=(0, 4))

        self.root.protocol("WM_DELETE_WINDOW", self.hide)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self.date_field.set(None)
        self.time_field.set(None)

    def export_pdf(self) -> None:
        reg_no = self.reg_no.get().strip() or "schedule"
        path = os.path.join(self.settings["export_dir"], result_filename(reg_no))
        image = capture_widget(self._form)
        if export_image_to_pdf(image, path, title="EXAM SCHEDULE"):
            self._status.configure(text=f"Saved {path}")
        else:
            self._status.configure(text="Could not save the PDF")

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self.root.deiconify()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        self.root.withdraw()


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=settings["log_level"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # DPI awareness so positions / fonts are crisp on Hi-DPI Windows monitors
    windll = getattr(ctypes, "windll", None)
    if windll is not None:
        windll.shcore.SetProcessDpiAwareness(1)

    form = FormWindow(settings)

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        form.root.after(0, form.toggle)

    def on_export() -> None:
        form.root.after(0, form.export_pdf)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            form.root.destroy()
        form.root.after(0, _quit)

    tray = create_tray(create_icon_image(), on_show, on_exit, on_export=on_export)

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()

    # tkinter main loop on the main thread
    form.root.mainloop()


if __name__ == "__main__":
    main()
