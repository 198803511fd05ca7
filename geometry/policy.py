"""Viewport-derived geometry constraints for managed windows.

Every threshold used to place or size a window lives here: breakpoints,
minimum window sizes, reserved insets (menu bar on top, dock at the bottom)
and side margins. Requests are best-effort: out-of-range input is pulled to
the nearest legal value and nothing in this module raises.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any

from geometry.types import Insets, Point, Rect, Size, Viewport

logger = logging.getLogger("dwm.geometry")

_DEFAULT_MIN_SIZES = {
    "mobile": {"width": 300, "height": 250},
    "tablet": {"width": 350, "height": 280},
    "desktop": {"width": 400, "height": 300},
}
_DEFAULT_SIDE_MARGINS = {"mobile": 16, "tablet": 40, "desktop": 48}


class Breakpoint(str, Enum):
    MOBILE = "mobile"
    TABLET = "tablet"
    DESKTOP = "desktop"


def _finite(value: float, fallback: float) -> float:
    return value if math.isfinite(value) else fallback


def _pull(value: float, low: float, high: float) -> float:
    """Pull ``value`` into ``[low, high]``; the lower bound wins on an empty range."""
    return max(low, min(_finite(value, low), high))


class GeometryPolicy:
    """Breakpoint-aware size, inset and clamping rules."""

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        cfg = config or {}
        thresholds = cfg.get("breakpoints", {})
        self.tablet_width = float(thresholds.get("tablet", 640))
        self.desktop_width = float(thresholds.get("desktop", 1024))
        self.top_inset = float(cfg.get("top_inset", 32))
        self.bottom_inset = float(cfg.get("bottom_inset", 80))
        self.fallback_anchor_lift = float(cfg.get("fallback_anchor_lift", 100))

        min_sizes = cfg.get("minimum_size", {})
        margins = cfg.get("side_margin", {})
        self._min_sizes: dict[Breakpoint, Size] = {}
        self._margins: dict[Breakpoint, float] = {}
        for bp in Breakpoint:
            raw = {**_DEFAULT_MIN_SIZES[bp.value], **min_sizes.get(bp.value, {})}
            self._min_sizes[bp] = Size(float(raw["width"]), float(raw["height"]))
            self._margins[bp] = float(margins.get(bp.value, _DEFAULT_SIDE_MARGINS[bp.value]))

        if self.tablet_width > self.desktop_width:
            raise ValueError("geometry.breakpoints.tablet must not exceed breakpoints.desktop")

    def breakpoint_for(self, viewport_width: float) -> Breakpoint:
        """Classify a viewport width."""
        if viewport_width < self.tablet_width:
            return Breakpoint.MOBILE
        if viewport_width < self.desktop_width:
            return Breakpoint.TABLET
        return Breakpoint.DESKTOP

    def minimum_size(self, breakpoint: Breakpoint) -> Size:
        return self._min_sizes[breakpoint]

    def viewport_insets(self, breakpoint: Breakpoint) -> Insets:
        """Menu bar and dock insets are the same at every breakpoint; margins differ."""
        return Insets(
            top=self.top_inset,
            bottom=self.bottom_inset,
            side_margin=self._margins[breakpoint],
        )

    def placeable_area(self, viewport: Viewport, breakpoint: Breakpoint | None = None) -> Rect:
        """Region a non-maximized window must stay inside."""
        bp = breakpoint or self.breakpoint_for(viewport.width)
        insets = self.viewport_insets(bp)
        return Rect(
            x=insets.side_margin,
            y=insets.top,
            width=max(0.0, viewport.width - 2 * insets.side_margin),
            height=max(0.0, viewport.height - insets.top - insets.bottom),
        )

    def maximized_rect(self, viewport: Viewport) -> Rect:
        """Full width, between the menu bar and the dock."""
        return Rect(
            x=0.0,
            y=self.top_inset,
            width=max(0.0, viewport.width),
            height=max(0.0, viewport.height - self.top_inset - self.bottom_inset),
        )

    def fallback_anchor(self, viewport: Viewport) -> Point:
        """Bottom-center point used when a window carries no source anchor."""
        return Point(viewport.width / 2, max(0.0, viewport.height - self.fallback_anchor_lift))

    def clamp_size(
        self,
        size: Size,
        viewport: Viewport,
        breakpoint: Breakpoint | None = None,
    ) -> Size:
        """Raise a size to the breakpoint minimum, then cap it to the placeable area.

        When the viewport is smaller than the minimum size, fitting inside the
        placeable area takes priority.
        """
        bp = breakpoint or self.breakpoint_for(viewport.width)
        minimum = self.minimum_size(bp)
        area = self.placeable_area(viewport, bp)
        width = min(max(_finite(size.width, minimum.width), minimum.width), area.width)
        height = min(max(_finite(size.height, minimum.height), minimum.height), area.height)
        return Size(width, height)

    def clamp(
        self,
        position: Point,
        size: Size,
        viewport: Viewport,
        breakpoint: Breakpoint | None = None,
    ) -> Point:
        """Pull ``position`` so the window box stays inside the placeable area."""
        bp = breakpoint or self.breakpoint_for(viewport.width)
        area = self.placeable_area(viewport, bp)
        width = max(0.0, _finite(size.width, 0.0))
        height = max(0.0, _finite(size.height, 0.0))
        x = _pull(position.x, area.x, area.right - width)
        y = _pull(position.y, area.y, area.bottom - height)
        if (x, y) != (position.x, position.y):
            logger.debug(
                "Clamped (%s, %s) -> (%s, %s) for %s viewport %sx%s",
                position.x, position.y, x, y, bp.value, viewport.width, viewport.height,
            )
        return Point(x, y)
