"""
Sequential page layout over a ``DrawingSurface``.

The engine owns a ``LayoutCursor`` and is driven top to bottom, once:

  1. ``ensure_space(h)`` before any block whose height is known up front;
     it starts a new page when the block would cross the bottom margin.
  2. ``draw_*`` calls render at explicit positions and return the height
     (or length) they used.  They never move the cursor themselves; the
     caller ``advance()``s by the returned amount.
  3. ``finalize()`` stamps the last footer and hands back the document.
     Any draw call after that raises ``LayoutFinalizedError``.

Line height
-----------
Wrapped text uses a fixed row height of ``font_size * 0.35`` mm per line
(``LINE_HEIGHT_FACTOR``).  This is a heuristic tied to font size, not a
measured glyph height.

Tables
------
``draw_table`` shades a header band and prints body rows at fixed
increments.  It does not paginate: callers ``ensure_space(table_height(...))``
first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from risk_report.layout.cursor import LayoutCursor, PageGeometry
from risk_report.layout.surface import RGB, DrawingSurface

logger = logging.getLogger(__name__)

LINE_HEIGHT_FACTOR = 0.35
TABLE_BODY_GAP     = 4.0
FOOTER_OFFSET      = 10.0
FOOTER_FONT_SIZE   = 8.0

DEFAULT_FONT = "helvetica"


class LayoutFinalizedError(RuntimeError):
    """Raised when content is added after ``finalize()``."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(
            f"Cannot {operation}: the document has already been finalized."
        )


@dataclass(frozen=True)
class RenderedDocument:
    """A finished, multi-page document ready to be persisted.

    Attributes:
        surface:    The surface holding the drawn pages.
        page_count: Number of pages laid out.
    """

    surface:    DrawingSurface
    page_count: int


class DocumentLayoutEngine:
    """Single-pass layout state machine for one document.

    Args:
        surface:     Drawing backend; receives every primitive in order.
        geometry:    Page size and margin.
        footer_text: Printed at the bottom of every page with the page number.
                     ``None`` disables footers.
        footer_color: Footer text colour.
    """

    def __init__(
        self,
        surface: DrawingSurface,
        geometry: PageGeometry | None = None,
        footer_text: str | None = None,
        footer_color: RGB = (100, 116, 139),
    ) -> None:
        self.surface = surface
        self.geometry = geometry or PageGeometry()
        self.footer_text = footer_text
        self.footer_color = footer_color
        self._cursor = LayoutCursor(geometry=self.geometry)
        self._text_color: RGB = (0, 0, 0)
        self._finalized = False

    # ── Cursor ────────────────────────────────────────────────────────────────

    @property
    def y(self) -> float:
        return self._cursor.y

    @property
    def page(self) -> int:
        return self._cursor.page

    @property
    def finalized(self) -> bool:
        return self._finalized

    def advance(self, dy: float) -> None:
        self._check_open("advance the cursor")
        self._cursor.advance(dy)

    def move_to(self, y: float) -> None:
        self._check_open("move the cursor")
        self._cursor.y = y

    def ensure_space(self, height: float) -> bool:
        """Start a new page if a ``height``-tall block would not fit.

        Returns:
            True if a page break was inserted.
        """
        self._check_open("reserve space")
        if self._cursor.fits(height):
            return False
        logger.debug(
            "Page break | page=%d y=%.1f needed=%.1f", self.page, self.y, height
        )
        self.new_page()
        return True

    def new_page(self) -> None:
        """Unconditional page break; ``y`` resets to the top margin."""
        self._check_open("add a page")
        self._draw_footer()
        self.surface.add_page()
        self._cursor.next_page()

    # ── Text ──────────────────────────────────────────────────────────────────

    def set_text_color(self, rgb: RGB) -> None:
        self._text_color = rgb
        self.surface.set_text_color(rgb)

    def wrap_text(
        self,
        text: str,
        max_width: float,
        font_size: float = 10,
        style: str = "normal",
    ) -> list[str]:
        """Lines ``text`` would occupy at ``max_width``; draws nothing."""
        self.surface.set_font(DEFAULT_FONT, style, font_size)
        return self.surface.split_text(text, max_width)

    def measure_text(
        self,
        text: str,
        max_width: float,
        font_size: float = 10,
        style: str = "normal",
    ) -> float:
        """Height ``draw_wrapped_text`` would return for the same arguments."""
        lines = self.wrap_text(text, max_width, font_size, style)
        return len(lines) * font_size * LINE_HEIGHT_FACTOR

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        font_size: float = 10,
        style: str = "normal",
        align: str = "left",
    ) -> None:
        """Draw one unwrapped line with its baseline at ``y``."""
        self._check_open("draw text")
        self.surface.set_font(DEFAULT_FONT, style, font_size)
        self.surface.text(text, x, y, align=align)

    def draw_wrapped_text(
        self,
        text: str,
        x: float,
        y: float,
        max_width: float,
        font_size: float = 10,
        style: str = "normal",
    ) -> float:
        """Wrap ``text`` to ``max_width`` and draw it from baseline ``y``.

        Returns:
            Vertical space used: ``line_count * font_size * LINE_HEIGHT_FACTOR``.
        """
        self._check_open("draw text")
        lines = self.wrap_text(text, max_width, font_size, style)
        line_height = font_size * LINE_HEIGHT_FACTOR
        for i, line in enumerate(lines):
            self.surface.text(line, x, y + i * line_height)
        return len(lines) * line_height

    def draw_heading(
        self,
        text: str,
        x: float,
        y: float,
        max_width: float,
        font_size: float = 14,
    ) -> float:
        """Bold wrapped text; same return contract as ``draw_wrapped_text``."""
        return self.draw_wrapped_text(text, x, y, max_width, font_size, style="bold")

    # ── Shapes ────────────────────────────────────────────────────────────────

    def draw_box(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        fill: RGB,
    ) -> None:
        """Filled rectangle with its top-left corner at ``(x, y)``."""
        self._check_open("draw a box")
        self.surface.set_fill_color(fill)
        self.surface.rect(x, y, width, height)

    @staticmethod
    def table_height(body_rows: int, row_height: float = 6.0) -> float:
        """Height ``draw_table`` consumes for ``body_rows`` rows plus the header."""
        return row_height + TABLE_BODY_GAP + (body_rows + 1) * row_height

    def draw_table(
        self,
        header: Sequence[str],
        rows: Sequence[Sequence[str]],
        x: float,
        y: float,
        width: float,
        row_height: float = 6.0,
        column_widths: Sequence[float] | None = None,
        header_fill: RGB = (207, 250, 254),
        font_size: float = 9,
    ) -> float:
        """Draw a shaded header band followed by fixed-height body rows.

        Cells wider than their column are cut to the first wrapped line.

        Returns:
            Vertical space used (see ``table_height``).

        Raises:
            ValueError: If a row's cell count differs from the header's.
        """
        self._check_open("draw a table")
        widths = list(column_widths) if column_widths else [width / len(header)] * len(header)
        if len(widths) != len(header):
            raise ValueError(
                f"{len(widths)} column widths given for {len(header)} columns."
            )
        for i, row in enumerate(rows):
            if len(row) != len(header):
                raise ValueError(
                    f"Row {i} has {len(row)} cells; header has {len(header)}."
                )

        self.surface.set_fill_color(header_fill)
        self.surface.rect(x, y, width, row_height)
        self._draw_row(header, x, y + row_height - 2, widths, font_size, "bold")

        body_top = y + row_height + TABLE_BODY_GAP
        for i, row in enumerate(rows):
            self._draw_row(row, x, body_top + i * row_height, widths, font_size, "normal")

        return self.table_height(len(rows), row_height)

    def draw_proportional_bar(
        self,
        max_value: float,
        value: float,
        scale_factor: float,
        x: float,
        y: float,
        height: float = 4.0,
        fill: RGB = (239, 68, 68),
        label: str | None = None,
        font_size: float = 9,
    ) -> float:
        """Draw a bar ``abs(value) * scale_factor`` long, capped at ``max_value``.

        The cap is the space left between ``x`` and the right margin for the
        bar and its label; a larger ``scale_factor`` in config would otherwise
        push both off the page.  With the default scales no scenario or
        allocation reaches it.

        The sign of ``value`` only matters for the caller's ``label``, printed
        4 mm past the bar end.

        Returns:
            The drawn bar length.
        """
        self._check_open("draw a bar")
        length = min(abs(value) * scale_factor, max_value)
        self.surface.set_fill_color(fill)
        self.surface.rect(x, y, length, height)
        if label is not None:
            self.surface.set_font(DEFAULT_FONT, "normal", font_size)
            self.surface.text(label, x + length + 4, y + height - 1)
        return length

    # ── Finalization ──────────────────────────────────────────────────────────

    def finalize(self) -> RenderedDocument:
        """Close the document; no further content may be added."""
        self._check_open("finalize")
        self._draw_footer()
        self._finalized = True
        logger.info("Layout finalized | pages=%d", self.page)
        return RenderedDocument(surface=self.surface, page_count=self.page)

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _draw_row(
        self,
        cells: Sequence[str],
        x: float,
        baseline: float,
        widths: Sequence[float],
        font_size: float,
        style: str,
    ) -> None:
        self.surface.set_font(DEFAULT_FONT, style, font_size)
        col_x = x + 2
        for cell, col_width in zip(cells, widths):
            lines = self.surface.split_text(str(cell), col_width - 2)
            if lines:
                self.surface.text(lines[0], col_x, baseline)
            col_x += col_width

    def _draw_footer(self) -> None:
        if self.footer_text is None:
            return
        self.surface.set_font(DEFAULT_FONT, "normal", FOOTER_FONT_SIZE)
        self.surface.set_text_color(self.footer_color)
        self.surface.text(
            f"{self.footer_text}  |  Page {self.page}",
            self.geometry.width / 2,
            self.geometry.height - FOOTER_OFFSET,
            align="center",
        )
        self.surface.set_text_color(self._text_color)

    def _check_open(self, operation: str) -> None:
        if self._finalized:
            raise LayoutFinalizedError(operation)
