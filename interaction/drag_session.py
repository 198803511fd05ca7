"""Single-pointer drag tracking for window title bars."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from geometry.types import Point
from world_model.window_record import LifecyclePhase, WindowRecord

logger = logging.getLogger("dwm.drag")

NOT_DRAGGABLE = frozenset(
    {LifecyclePhase.MAXIMIZED, LifecyclePhase.CLOSING, LifecyclePhase.MINIMIZED}
)


class PointerRegion(str, Enum):
    """Part of a window under the pointer."""

    TITLE = "title"
    CONTROL = "control"
    BODY = "body"


@dataclass(frozen=True)
class DragState:
    window_id: str
    pointer_offset: Point


class InteractionSession:
    """Idle/Dragging state machine. At most one drag is tracked at a time."""

    def __init__(self) -> None:
        self._state: DragState | None = None

    @property
    def active(self) -> bool:
        return self._state is not None

    @property
    def dragged_window_id(self) -> str | None:
        return self._state.window_id if self._state else None

    @property
    def pointer_offset(self) -> Point | None:
        return self._state.pointer_offset if self._state else None

    def begin(self, window: WindowRecord, pointer: Point, region: PointerRegion) -> bool:
        """Start dragging ``window`` if nothing else is being dragged."""
        if self._state is not None:
            logger.debug(
                "Pointer-down on %s ignored: already dragging %s",
                window.id, self._state.window_id,
            )
            return False
        if region is not PointerRegion.TITLE:
            return False
        if window.phase in NOT_DRAGGABLE:
            logger.debug("Window %s is not draggable while %s", window.id, window.phase.value)
            return False
        self._state = DragState(window_id=window.id, pointer_offset=pointer - window.position)
        logger.debug("Drag started on %s, offset=%s", window.id, self._state.pointer_offset)
        return True

    def propose(self, pointer: Point) -> Point | None:
        """Unclamped top-left for the dragged window, or None when idle."""
        if self._state is None:
            return None
        return pointer - self._state.pointer_offset

    def end(self) -> str | None:
        """Return to Idle; returns the window that was being dragged."""
        window_id = self.dragged_window_id
        self._state = None
        if window_id is not None:
            logger.debug("Drag ended on %s", window_id)
        return window_id

    def cancel_if_missing(self, window_ids: Iterable[str]) -> bool:
        """Drop the session unless the dragged window is among ``window_ids``."""
        if self._state is None:
            return False
        if self._state.window_id in set(window_ids):
            return False
        logger.debug("Dragged window %s disappeared; cancelling", self._state.window_id)
        self._state = None
        return True
