"""Maps window phases to transition descriptors and completion timers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from core.scheduler import Cancellable, Scheduler
from geometry.policy import GeometryPolicy
from geometry.types import Point, Rect, Size, Viewport
from lifecycle.descriptors import (
    EASINGS,
    TransitionDescriptor,
    TransitionProfile,
    VisualState,
    anchored_state,
    closing_state,
    resting_state,
)
from world_model.window_record import LifecyclePhase, WindowRecord

logger = logging.getLogger("dwm.transitions")

CompletionHandler = Callable[[str, LifecyclePhase], None]

# Only these completions change the controller's store.
SIGNALLED_PHASES = frozenset({LifecyclePhase.OPENING, LifecyclePhase.CLOSING})


@dataclass
class _Track:
    phase: LifecyclePhase
    descriptor: TransitionDescriptor
    timer: Cancellable | None = None

    def cancel_timer(self) -> None:
        if self.timer is not None:
            self.timer.cancel()
            self.timer = None


class TransitionOrchestrator:
    """Computes one descriptor per phase change and owns the completion timers.

    A phase change observed before the previous transition finished cancels
    the pending completion; geometry changes inside a phase retarget the
    current descriptor without restarting its timer.
    """

    def __init__(
        self,
        policy: GeometryPolicy,
        scheduler: Scheduler,
        on_complete: CompletionHandler | None = None,
        config: dict[str, Any] | None = None,
    ) -> None:
        self.policy = policy
        self.scheduler = scheduler
        self.on_complete = on_complete
        self.profile = TransitionProfile.from_config(config)
        self._tracks: dict[str, _Track] = {}

    def anchor_for(self, window: WindowRecord, viewport: Viewport) -> Point:
        return window.source_anchor or self.policy.fallback_anchor(viewport)

    def fitted_geometry(self, window: WindowRecord, viewport: Viewport) -> tuple[Point, Size]:
        """Host-supplied position and size pulled into the legal range for ``viewport``."""
        size = self.policy.clamp_size(window.size, viewport)
        return self.policy.clamp(window.position, size, viewport), size

    def target_state(self, window: WindowRecord, viewport: Viewport) -> VisualState:
        """Resting visual state for the window's current phase."""
        phase = window.phase
        if phase is LifecyclePhase.MAXIMIZED:
            return resting_state(self.policy.maximized_rect(viewport), corner_radius=0.0)
        anchor = self.anchor_for(window, viewport)
        position, size = self.fitted_geometry(window, viewport)
        if phase is LifecyclePhase.MINIMIZED:
            return anchored_state(anchor, size)
        if phase is LifecyclePhase.CLOSING:
            return closing_state(anchor, size, self.profile.closing_drop)
        return resting_state(Rect(position.x, position.y, size.width, size.height))

    def descriptor(self, window_id: str) -> TransitionDescriptor | None:
        track = self._tracks.get(window_id)
        return track.descriptor if track else None

    def in_flight(self, window_id: str) -> bool:
        track = self._tracks.get(window_id)
        return bool(track and track.timer is not None)

    def sync(
        self,
        windows: Iterable[WindowRecord],
        viewport: Viewport,
    ) -> dict[str, TransitionDescriptor]:
        """Reconcile tracked transitions with the latest window list."""
        seen: dict[str, TransitionDescriptor] = {}
        for window in windows:
            if window.id in seen:
                continue
            seen[window.id] = self._reconcile(window, viewport)

        for window_id in [wid for wid in self._tracks if wid not in seen]:
            self._tracks.pop(window_id).cancel_timer()
            logger.debug("Dropped transition state for removed window %s", window_id)
        return seen

    def _reconcile(self, window: WindowRecord, viewport: Viewport) -> TransitionDescriptor:
        target = self.target_state(window, viewport)
        track = self._tracks.get(window.id)

        if track is None:
            if window.phase is LifecyclePhase.OPENING:
                _, size = self.fitted_geometry(window, viewport)
                start = anchored_state(self.anchor_for(window, viewport), size)
            else:
                start = target
            track = _Track(phase=window.phase, descriptor=self._build(window, start, target))
            self._tracks[window.id] = track
            self._arm(track, window.id)
            return track.descriptor

        if track.phase is not window.phase:
            track.cancel_timer()
            logger.debug(
                "Window %s: %s -> %s", window.id, track.phase.value, window.phase.value
            )
            track.phase = window.phase
            track.descriptor = self._build(window, track.descriptor.to_state, target)
            self._arm(track, window.id)
            return track.descriptor

        if track.descriptor.to_state != target:
            if track.timer is not None:
                track.descriptor = TransitionDescriptor(
                    window_id=window.id,
                    phase=window.phase,
                    from_state=track.descriptor.from_state,
                    to_state=target,
                    duration=track.descriptor.duration,
                    easing=track.descriptor.easing,
                )
            else:
                track.descriptor = TransitionDescriptor(
                    window_id=window.id,
                    phase=window.phase,
                    from_state=track.descriptor.to_state,
                    to_state=target,
                    duration=0.0,
                    easing=EASINGS["instant"],
                )
        return track.descriptor

    def _build(
        self, window: WindowRecord, start: VisualState, target: VisualState
    ) -> TransitionDescriptor:
        return TransitionDescriptor(
            window_id=window.id,
            phase=window.phase,
            from_state=start,
            to_state=target,
            duration=self.profile.duration_for(window.phase),
            easing=self.profile.easing_for(window.phase),
        )

    def _arm(self, track: _Track, window_id: str) -> None:
        # Zero-length opening/closing transitions still complete asynchronously.
        if track.descriptor.duration <= 0 and track.phase not in SIGNALLED_PHASES:
            return
        track.timer = self.scheduler.call_later(
            track.descriptor.duration, self._finish, window_id, track.phase
        )

    def _finish(self, window_id: str, phase: LifecyclePhase) -> None:
        track = self._tracks.get(window_id)
        if track is None or track.phase is not phase:
            return
        track.timer = None
        logger.debug("Window %s finished %s transition", window_id, phase.value)
        if phase in SIGNALLED_PHASES and self.on_complete is not None:
            self.on_complete(window_id, phase)
