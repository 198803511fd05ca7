"""Window manager facade.

Receives the host's window list, renders it into :class:`RenderedWindow`
descriptions and turns pointer, control and viewport events into requests on
the host's :class:`WindowCallbacks`. It never mutates window records itself;
the host applies the requests and hands a fresh list back through
:meth:`WindowManager.render`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from core.scheduler import FrameCoalescer, Scheduler
from geometry.policy import GeometryPolicy
from geometry.types import Point, Viewport
from interaction.drag_session import NOT_DRAGGABLE, InteractionSession, PointerRegion
from lifecycle.orchestrator import TransitionOrchestrator
from manager.render import Control, RenderedWindow, controls_for
from world_model.window_record import LifecyclePhase, WindowRecord
from world_model.window_store import WindowCallbacks

logger = logging.getLogger("dwm.window_manager")


class WindowManager:
    """Composes geometry, drag handling and transitions for a set of windows."""

    def __init__(
        self,
        callbacks: WindowCallbacks,
        policy: GeometryPolicy,
        scheduler: Scheduler,
        viewport: Viewport,
        config: dict[str, Any] | None = None,
        orchestrator: TransitionOrchestrator | None = None,
    ) -> None:
        cfg = config or {}
        self.callbacks = callbacks
        self.policy = policy
        self.viewport = viewport
        self.orchestrator = orchestrator or TransitionOrchestrator(
            policy,
            scheduler,
            on_complete=callbacks.transition_complete,
            config=cfg.get("transitions"),
        )
        self.coalesce_moves = bool(cfg.get("interaction", {}).get("coalesce_moves", True))
        self.session = InteractionSession()
        self._moves = FrameCoalescer(self._deliver_move)
        self._windows: dict[str, WindowRecord] = {}
        self._rendered: list[RenderedWindow] = []

    @property
    def rendered(self) -> list[RenderedWindow]:
        return list(self._rendered)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(
        self,
        windows: Iterable[WindowRecord],
        viewport: Viewport | None = None,
    ) -> list[RenderedWindow]:
        """Render the latest window list, bottom-most first."""
        if viewport is not None:
            self.viewport = viewport

        unique: dict[str, WindowRecord] = {}
        for window in windows:
            if window.id in unique:
                logger.warning("Duplicate window id %r in input; keeping the first", window.id)
                continue
            unique[window.id] = window
        self._windows = unique

        draggable = [wid for wid, w in unique.items() if w.phase not in NOT_DRAGGABLE]
        dragged = self.session.dragged_window_id
        if self.session.cancel_if_missing(draggable) and dragged is not None:
            self._moves.discard(dragged)

        descriptors = self.orchestrator.sync(unique.values(), self.viewport)
        self._rendered = [
            RenderedWindow(
                id=window.id,
                title=window.title,
                content_kind=window.content_kind,
                phase=window.phase,
                z_index=window.z_index,
                state=descriptors[window.id].to_state,
                transition=descriptors[window.id],
                dragging=window.id == self.session.dragged_window_id,
                controls=controls_for(window),
            )
            for window in sorted(unique.values(), key=lambda w: w.z_index)
        ]
        return list(self._rendered)

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def pointer_down(self, window_id: str, point: Point, region: PointerRegion) -> bool:
        """Focus the window on a title-bar press and start a drag where allowed.

        Returns True only when a drag started.
        """
        window = self._windows.get(window_id)
        if window is None:
            logger.debug("Pointer-down on unknown window %s", window_id)
            return False
        if self.session.active:
            logger.debug("Pointer-down on %s ignored during a drag", window_id)
            return False
        started = self.session.begin(window, point, region)
        # Title bars raise the window even when its phase rules out dragging.
        if region is PointerRegion.TITLE and window.phase is not LifecyclePhase.CLOSING:
            self.callbacks.request_focus(window_id)
        return started

    def pointer_move(self, point: Point) -> bool:
        window_id = self.session.dragged_window_id
        if window_id is None:
            return False
        window = self._windows.get(window_id)
        if window is None:
            self.session.end()
            self._moves.discard(window_id)
            return False
        raw = self.session.propose(point)
        size = self.policy.clamp_size(window.size, self.viewport)
        clamped = self.policy.clamp(raw, size, self.viewport)
        self._moves.submit(window_id, clamped)
        if not self.coalesce_moves:
            self._moves.flush()
        return True

    def pointer_up(self) -> bool:
        """End any drag, wherever the pointer was released. Delivers the last move."""
        window_id = self.session.end()
        if window_id is None:
            return False
        self._moves.flush()
        return True

    def frame(self) -> int:
        """Deliver at most one coalesced move per dragged window."""
        return self._moves.flush()

    def _deliver_move(self, window_id: str, position: Point) -> None:
        if window_id not in self._windows:
            return
        self.callbacks.request_move(window_id, position)

    # ------------------------------------------------------------------
    # Controls and viewport
    # ------------------------------------------------------------------

    def click_control(self, window_id: str, control: Control) -> bool:
        if window_id not in self._windows:
            logger.debug("%s clicked on unknown window %s", control.value, window_id)
            return False
        if control is Control.CLOSE:
            self.callbacks.request_close(window_id)
        elif control is Control.MINIMIZE:
            self.callbacks.request_minimize_toggle(window_id)
        else:
            self.callbacks.request_maximize_toggle(window_id)
        return True

    def resize(self, viewport: Viewport) -> list[str]:
        """Adopt a new viewport and request moves for windows now out of bounds.

        Returns the ids that were asked to move.
        """
        self.viewport = viewport
        moved: list[str] = []
        for window in self._windows.values():
            if window.phase in (LifecyclePhase.MAXIMIZED, LifecyclePhase.CLOSING):
                continue
            fitted = self.policy.clamp_size(window.size, viewport)
            clamped = self.policy.clamp(window.position, fitted, viewport)
            if clamped != window.position:
                self.callbacks.request_move(window.id, clamped)
                moved.append(window.id)
        if moved:
            logger.debug("Re-clamped %d window(s) after resize to %sx%s",
                         len(moved), viewport.width, viewport.height)
        return moved
