"""Host-side window store and the callback contract the window core consumes.

The core never touches records directly; it only calls the
:class:`WindowCallbacks` methods. :class:`WindowStore` is the reference
controller that owns the canonical records and applies those requests.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Protocol

from core.event_bus import EventBus
from core.z_order import ZOrderCounter
from geometry.policy import GeometryPolicy
from geometry.types import Point, Size, Viewport
from lifecycle.phases import Intent, ensure_legal, resolve
from world_model.desktop_state import DesktopState
from world_model.window_record import LifecyclePhase, WindowRecord

logger = logging.getLogger("dwm.window_store")


class WindowCallbacks(Protocol):
    """Intents issued by the window core. Fire-and-forget."""

    def request_focus(self, window_id: str) -> Any: ...

    def request_move(self, window_id: str, position: Point) -> Any: ...

    def request_minimize_toggle(self, window_id: str) -> Any: ...

    def request_maximize_toggle(self, window_id: str) -> Any: ...

    def request_close(self, window_id: str) -> Any: ...

    def transition_complete(self, window_id: str, phase: LifecyclePhase) -> Any: ...


class WindowStore:
    """Canonical, in-memory collection of window records."""

    def __init__(
        self,
        policy: GeometryPolicy,
        viewport: Viewport,
        event_bus: EventBus | None = None,
        counter: ZOrderCounter | None = None,
        config: dict[str, Any] | None = None,
    ) -> None:
        cfg = config or {}
        self.policy = policy
        self.viewport = viewport
        self.event_bus = event_bus or EventBus()
        self.counter = counter or ZOrderCounter()
        default_size = cfg.get("default_size", {})
        self.default_size = Size(
            float(default_size.get("width", 800)), float(default_size.get("height", 600))
        )
        cascade = cfg.get("cascade_step", {})
        self.cascade_step = Point(float(cascade.get("x", 32)), float(cascade.get("y", 32)))
        self._records: dict[str, WindowRecord] = {}

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def windows(self) -> tuple[WindowRecord, ...]:
        """Copies of every record, in creation order."""
        return tuple(record.model_copy() for record in self._records.values())

    def get(self, window_id: str) -> WindowRecord | None:
        record = self._records.get(window_id)
        return record.model_copy() if record else None

    def top_window_id(self) -> str | None:
        if not self._records:
            return None
        return max(self._records.values(), key=lambda r: r.z_index).id

    def snapshot(self) -> DesktopState:
        return DesktopState(
            viewport=self.viewport,
            windows=sorted(self.windows, key=lambda r: r.z_index),
            next_z_index=self.counter.peek,
        )

    # ------------------------------------------------------------------
    # Launch / removal
    # ------------------------------------------------------------------

    def launch(
        self,
        content_kind: str,
        title: str,
        source_anchor: Point | None = None,
        position: Point | None = None,
        size: Size | None = None,
        window_id: str | None = None,
    ) -> WindowRecord:
        """Create a window in the opening phase, on top of every other window."""
        window_id = window_id or f"{content_kind}-{uuid.uuid4().hex[:8]}"
        if window_id in self._records:
            raise ValueError(f"Window id already exists: {window_id}")

        fitted = self.policy.clamp_size(size or self.default_size, self.viewport)
        proposed = position or self._next_window_offset(fitted)
        record = WindowRecord(
            id=window_id,
            content_kind=content_kind,
            title=title,
            phase=LifecyclePhase.OPENING,
            position=self.policy.clamp(proposed, fitted, self.viewport),
            size=fitted,
            z_index=self.counter.next(),
            source_anchor=source_anchor,
        )
        self._records[window_id] = record
        logger.info("Launched %s (%s) at z=%s", window_id, content_kind, record.z_index)
        self._emit("window.launched", record)
        return record.model_copy()

    def remove(self, window_id: str) -> bool:
        record = self._records.pop(window_id, None)
        if record is None:
            return False
        logger.info("Removed %s", window_id)
        self.event_bus.emit("window.removed", {"window_id": window_id})
        return True

    def _next_window_offset(self, size: Size) -> Point:
        """Center in the placeable area, staggered by the number of live windows."""
        area = self.policy.placeable_area(self.viewport)
        count = sum(1 for r in self._records.values() if r.phase is not LifecyclePhase.CLOSING)
        base_x = area.x + (area.width - size.width) / 2
        base_y = area.y + (area.height - size.height) / 2
        return Point(base_x + count * self.cascade_step.x, base_y + count * self.cascade_step.y)

    # ------------------------------------------------------------------
    # WindowCallbacks
    # ------------------------------------------------------------------

    def request_focus(self, window_id: str) -> bool:
        record = self._records.get(window_id)
        if record is None:
            logger.debug("Focus ignored for unknown window %s", window_id)
            return False
        if window_id == self.top_window_id():
            return False
        record.z_index = self.counter.next()
        self._emit("window.focused", record)
        return True

    def request_move(self, window_id: str, position: Point) -> bool:
        record = self._records.get(window_id)
        if record is None:
            logger.debug("Move ignored for unknown window %s", window_id)
            return False
        if record.phase in (LifecyclePhase.MAXIMIZED, LifecyclePhase.CLOSING):
            logger.debug("Move ignored for %s in phase %s", window_id, record.phase.value)
            return False
        clamped = self.policy.clamp(position, record.size, self.viewport)
        if clamped == record.position:
            return False
        record.position = clamped
        self._emit("window.moved", record)
        return True

    def request_minimize_toggle(self, window_id: str) -> bool:
        return self._apply(window_id, Intent.MINIMIZE)

    def request_maximize_toggle(self, window_id: str) -> bool:
        return self._apply(window_id, Intent.MAXIMIZE)

    def request_close(self, window_id: str) -> bool:
        return self._apply(window_id, Intent.CLOSE)

    def transition_complete(self, window_id: str, phase: LifecyclePhase) -> bool:
        """Finish an opening transition or drop a window whose exit has played."""
        record = self._records.get(window_id)
        if record is None or record.phase is not phase:
            logger.debug("Stale completion for %s (%s)", window_id, phase.value)
            return False
        if phase is LifecyclePhase.CLOSING:
            return self.remove(window_id)
        return self._apply(window_id, Intent.OPENED)

    # ------------------------------------------------------------------
    # Viewport
    # ------------------------------------------------------------------

    def set_viewport(self, viewport: Viewport) -> None:
        """Adopt a new viewport and re-fit every record's remembered geometry."""
        self.viewport = viewport
        for record in self._records.values():
            self._refit(record)
        self.event_bus.emit(
            "viewport.changed", {"width": viewport.width, "height": viewport.height}
        )

    def _refit(self, record: WindowRecord) -> None:
        record.size = self.policy.clamp_size(record.size, self.viewport)
        record.position = self.policy.clamp(record.position, record.size, self.viewport)

    def _apply(self, window_id: str, intent: Intent) -> bool:
        record = self._records.get(window_id)
        if record is None:
            logger.debug("%s ignored for unknown window %s", intent.value, window_id)
            return False
        target = resolve(record.phase, intent)
        if target is None:
            logger.debug(
                "%s ignored for %s in phase %s", intent.value, window_id, record.phase.value
            )
            return False
        ensure_legal(record.phase, target)
        previous = record.phase
        record.phase = target
        if record.uses_explicit_geometry:
            self._refit(record)
        logger.info("Window %s: %s -> %s", window_id, previous.value, target.value)
        self._emit("window.phase_changed", record, previous=previous.value)
        return True

    def _emit(self, event_name: str, record: WindowRecord, **extra: Any) -> None:
        payload = {"window_id": record.id, "record": record.model_copy(), **extra}
        self.event_bus.emit(event_name, payload)
