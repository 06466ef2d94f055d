"""
Page geometry and the layout cursor.

All positions are millimetres measured from the **top-left** corner of the
page; ``y`` grows downwards.  The drawing surface converts to its own
coordinate system.

A ``LayoutCursor`` belongs to exactly one ``DocumentLayoutEngine`` for the
duration of one report; it is never shared between reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field

A4_WIDTH_MM  = 210.0
A4_HEIGHT_MM = 297.0


@dataclass(frozen=True)
class PageGeometry:
    """Fixed page size and margin (mm)."""

    width:  float = A4_WIDTH_MM
    height: float = A4_HEIGHT_MM
    margin: float = 20.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Page size must be positive, got {self.width}x{self.height}.")
        if not 0 <= self.margin < min(self.width, self.height) / 2:
            raise ValueError(f"Margin {self.margin} leaves no printable area.")

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def bottom_limit(self) -> float:
        """Lowest ``y`` any block may reach."""
        return self.height - self.margin


@dataclass
class LayoutCursor:
    """Current page number and vertical position.

    Attributes:
        geometry: Page geometry the cursor moves within.
        y:        Current vertical position; starts at the top margin.
        page:     1-based page number.
    """

    geometry: PageGeometry = field(default_factory=PageGeometry)
    y:        float | None = None
    page:     int = 1

    def __post_init__(self) -> None:
        if self.y is None:
            self.y = self.geometry.margin

    def fits(self, height: float) -> bool:
        """True if a block of ``height`` starting at ``y`` stays above the bottom margin."""
        return self.y + height <= self.geometry.bottom_limit

    def advance(self, dy: float) -> None:
        self.y += dy

    def next_page(self) -> None:
        self.page += 1
        self.y = self.geometry.margin
