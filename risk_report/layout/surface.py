"""
Drawing surfaces: the low-level primitives the layout engine asks for.

``DrawingSurface`` is the small protocol the engine depends on.  It speaks in
millimetres from the top-left corner, RGB colours as 0–255 triples, and
font families by name plus a style (``normal``, ``bold``, ``italic``,
``bolditalic``).

``ReportLabSurface`` implements it on a ``reportlab.pdfgen.canvas.Canvas``
writing into memory.  ReportLab's origin is bottom-left in points, and it
uses one fill colour for both shapes and glyphs, so the surface keeps the
text and fill colours separately and applies the right one per call.  It
also re-applies font and colours after every page break because
``showPage()`` resets the graphics state.
"""

from __future__ import annotations

import io
import logging
from typing import Protocol, Sequence

from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from risk_report.layout.cursor import PageGeometry

logger = logging.getLogger(__name__)

RGB = tuple[int, int, int]

BLACK: RGB = (0, 0, 0)

_FONT_NAMES: dict[str, dict[str, str]] = {
    "helvetica": {
        "normal":     "Helvetica",
        "bold":       "Helvetica-Bold",
        "italic":     "Helvetica-Oblique",
        "bolditalic": "Helvetica-BoldOblique",
    },
    "times": {
        "normal":     "Times-Roman",
        "bold":       "Times-Bold",
        "italic":     "Times-Italic",
        "bolditalic": "Times-BoldItalic",
    },
    "courier": {
        "normal":     "Courier",
        "bold":       "Courier-Bold",
        "italic":     "Courier-Oblique",
        "bolditalic": "Courier-BoldOblique",
    },
}


class DrawingSurface(Protocol):
    """What the layout engine needs from a 2D document backend."""

    def set_font(self, family: str, style: str, size: float) -> None: ...

    def set_text_color(self, rgb: RGB) -> None: ...

    def set_fill_color(self, rgb: RGB) -> None: ...

    def rect(self, x: float, y: float, width: float, height: float) -> None: ...

    def text(self, text: str, x: float, y: float, align: str = "left") -> None: ...

    def split_text(self, text: str, max_width: float) -> list[str]: ...

    def add_page(self) -> None: ...

    @property
    def page_count(self) -> int: ...

    def to_bytes(self) -> bytes: ...


def resolve_font(family: str, style: str) -> str:
    """Map ``(family, style)`` to a standard PDF font name."""
    try:
        return _FONT_NAMES[family.lower()][style.lower()]
    except KeyError:
        raise ValueError(f"Unsupported font {family!r} / style {style!r}.") from None


class ReportLabSurface:
    """``DrawingSurface`` backed by an in-memory ReportLab canvas.

    Args:
        geometry: Page size in millimetres.
        title:    PDF document title metadata.
        author:   PDF author metadata.
    """

    def __init__(
        self,
        geometry: PageGeometry,
        title: str = "",
        author: str = "",
    ) -> None:
        self.geometry = geometry
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(
            self._buffer,
            pagesize=(geometry.width * mm, geometry.height * mm),
            pageCompression=1,
        )
        if title:
            self._canvas.setTitle(title)
        if author:
            self._canvas.setAuthor(author)

        self._font_name  = resolve_font("helvetica", "normal")
        self._font_size  = 10.0
        self._text_color = BLACK
        self._fill_color = BLACK
        self._pages      = 1
        self._saved      = False
        self._apply_font()

    # ── DrawingSurface ────────────────────────────────────────────────────────

    def set_font(self, family: str, style: str, size: float) -> None:
        self._font_name = resolve_font(family, style)
        self._font_size = size
        self._apply_font()

    def set_text_color(self, rgb: RGB) -> None:
        self._text_color = rgb

    def set_fill_color(self, rgb: RGB) -> None:
        self._fill_color = rgb

    def rect(self, x: float, y: float, width: float, height: float) -> None:
        self._canvas.setFillColorRGB(*_unit_rgb(self._fill_color))
        self._canvas.rect(
            x * mm,
            (self.geometry.height - y - height) * mm,
            width * mm,
            height * mm,
            fill=1,
            stroke=0,
        )

    def text(self, text: str, x: float, y: float, align: str = "left") -> None:
        self._canvas.setFillColorRGB(*_unit_rgb(self._text_color))
        px, py = x * mm, (self.geometry.height - y) * mm
        match align:
            case "left":
                self._canvas.drawString(px, py, text)
            case "center":
                self._canvas.drawCentredString(px, py, text)
            case "right":
                self._canvas.drawRightString(px, py, text)
            case _:
                raise ValueError(f"Unsupported alignment {align!r}.")

    def split_text(self, text: str, max_width: float) -> list[str]:
        return simpleSplit(text, self._font_name, self._font_size, max_width * mm)

    def add_page(self) -> None:
        self._canvas.showPage()
        self._pages += 1
        self._apply_font()

    @property
    def page_count(self) -> int:
        return self._pages

    # ── Output ────────────────────────────────────────────────────────────────

    def to_bytes(self) -> bytes:
        """Close the canvas and return the finished PDF."""
        if not self._saved:
            self._canvas.save()
            self._saved = True
            logger.debug("PDF canvas saved | pages=%d", self._pages)
        return self._buffer.getvalue()

    def _apply_font(self) -> None:
        self._canvas.setFont(self._font_name, self._font_size)


def _unit_rgb(rgb: Sequence[int]) -> tuple[float, float, float]:
    r, g, b = rgb
    return r / 255, g / 255, b / 255
