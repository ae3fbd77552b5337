"""Export a rendered region (e.g. a result table) to a one-page PDF."""

from __future__ import annotations

import logging
import os

from PIL import Image, ImageDraw, ImageFont, ImageGrab

log = logging.getLogger(__name__)

A4_MM = (210, 297)
DEFAULT_DPI = 150
MARGIN_MM = 10
HEADER_MM = 30  # image starts below the title band
TITLE_BASELINE_MM = 20
TITLE_PT = 16


def _mm_to_px(mm: float, dpi: int) -> int:
    return round(mm / 25.4 * dpi)


def page_size_px(dpi: int = DEFAULT_DPI) -> tuple[int, int]:
    return _mm_to_px(A4_MM[0], dpi), _mm_to_px(A4_MM[1], dpi)


def fit_image(page_size: tuple[int, int], image_size: tuple[int, int],
              margin: int, top: int) -> tuple[int, int, int, int]:
    """Return (x, y, width, height) for the image on the page.

    The image keeps its aspect ratio, fits between the side margins and
    between ``top`` and the bottom margin, is centred horizontally and is
    never scaled up.
    """
    page_w, page_h = page_size
    img_w, img_h = image_size
    avail_w = max(1, page_w - 2 * margin)
    avail_h = max(1, page_h - top - margin)
    ratio = min(avail_w / img_w, avail_h / img_h, 1.0)
    w = max(1, round(img_w * ratio))
    h = max(1, round(img_h * ratio))
    x = (page_w - w) // 2
    return x, top, w, h


def _title_font(size_px: int) -> ImageFont.ImageFont:
    for name in ("segoeuib.ttf", "DejaVuSans-Bold.ttf", "arialbd.ttf"):
        try:
            return ImageFont.truetype(name, size_px)
        except OSError:
            continue
    return ImageFont.load_default()


def render_page(image: Image.Image, title: str | None = None,
                dpi: int = DEFAULT_DPI) -> Image.Image:
    """Lay the image out on a white A4 page with an optional centred title."""
    page_w, page_h = page_size_px(dpi)
    page = Image.new("RGB", (page_w, page_h), "white")

    if title:
        draw = ImageDraw.Draw(page)
        font = _title_font(round(TITLE_PT / 72 * dpi))
        bbox = draw.textbbox((0, 0), title, font=font)
        x = (page_w - (bbox[2] - bbox[0])) / 2 - bbox[0]
        y = _mm_to_px(TITLE_BASELINE_MM, dpi) - bbox[3]
        draw.text((x, y), title, fill="black", font=font)

    x, y, w, h = fit_image(
        (page_w, page_h), image.size,
        margin=_mm_to_px(MARGIN_MM, dpi), top=_mm_to_px(HEADER_MM, dpi),
    )
    fitted = image.convert("RGB")
    if (w, h) != image.size:
        fitted = fitted.resize((w, h), Image.Resampling.LANCZOS)
    page.paste(fitted, (x, y))
    return page


def export_image_to_pdf(image: Image.Image, path: str, title: str | None = None,
                        dpi: int = DEFAULT_DPI) -> bool:
    """Write a one-page PDF; return False (and log) when it cannot be saved."""
    page = render_page(image, title, dpi)
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        page.save(path, "PDF", resolution=dpi)
    except OSError:
        log.exception("Error generating PDF %s", path)
        return False
    log.info("Saved PDF %s", path)
    return True


def capture_widget(widget) -> Image.Image:
    """Grab the on-screen pixels of a mapped tkinter widget."""
    widget.update_idletasks()
    x = widget.winfo_rootx()
    y = widget.winfo_rooty()
    bbox = (x, y, x + widget.winfo_width(), y + widget.winfo_height())
    return ImageGrab.grab(bbox=bbox)


def result_filename(registration_number: str) -> str:
    return f"{registration_number}_Result.pdf"
