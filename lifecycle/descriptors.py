"""Declarative visual targets for window transitions."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from geometry.types import Point, Rect, Size
from world_model.window_record import LifecyclePhase


@dataclass(frozen=True)
class Easing:
    """Cubic-bezier easing curve identified by name."""

    name: str
    control_points: tuple[float, float, float, float]


EASINGS: dict[str, Easing] = {
    "materialize": Easing("materialize", (0.25, 0.1, 0.25, 1.0)),
    "settle": Easing("settle", (0.16, 1.0, 0.3, 1.0)),
    "dismiss": Easing("dismiss", (0.4, 0.0, 1.0, 1.0)),
    "instant": Easing("instant", (0.0, 0.0, 1.0, 1.0)),
}


@dataclass(frozen=True)
class VisualState:
    """Everything a renderer needs to draw one window at rest.

    Scale and rotation are applied around the bottom-center of the box.
    """

    x: float
    y: float
    width: float
    height: float
    opacity: float = 1.0
    scale: float = 1.0
    rotate_x: float = 0.0
    rotate_y: float = 0.0
    rotate_z: float = 0.0
    blur: float = 0.0
    corner_radius: float = 12.0

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def to_dict(self) -> dict[str, float]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "opacity": self.opacity,
            "scale": self.scale,
            "rotate_x": self.rotate_x,
            "rotate_y": self.rotate_y,
            "rotate_z": self.rotate_z,
            "blur": self.blur,
            "corner_radius": self.corner_radius,
        }


@dataclass(frozen=True)
class TransitionDescriptor:
    """One animation from ``from_state`` to ``to_state``."""

    window_id: str
    phase: LifecyclePhase
    from_state: VisualState
    to_state: VisualState
    duration: float
    easing: Easing

    def to_dict(self) -> dict[str, Any]:
        return {
            "window_id": self.window_id,
            "phase": self.phase.value,
            "from": self.from_state.to_dict(),
            "to": self.to_state.to_dict(),
            "duration": self.duration,
            "easing": self.easing.name,
        }


@dataclass
class TransitionProfile:
    """Durations and effect parameters, loaded from the ``transitions`` config section."""

    durations: dict[str, float] = field(
        default_factory=lambda: {
            "opening": 0.8,
            "open": 0.4,
            "minimized": 0.6,
            "maximized": 0.4,
            "closing": 0.4,
        }
    )
    easings: dict[str, str] = field(
        default_factory=lambda: {
            "opening": "materialize",
            "open": "settle",
            "minimized": "settle",
            "maximized": "settle",
            "closing": "dismiss",
        }
    )
    closing_drop: float = 50.0

    @classmethod
    def from_config(cls, config: dict[str, Any] | None) -> TransitionProfile:
        cfg = config or {}
        profile = cls()
        for phase, value in (cfg.get("durations") or {}).items():
            profile.durations[str(phase)] = max(0.0, float(value))
        for phase, value in (cfg.get("easings") or {}).items():
            if value not in EASINGS:
                raise ValueError(f"Unknown easing '{value}' for phase '{phase}'")
            profile.easings[str(phase)] = value
        profile.closing_drop = float(cfg.get("closing_drop", profile.closing_drop))
        return profile

    def duration_for(self, phase: LifecyclePhase) -> float:
        return self.durations.get(phase.value, 0.0)

    def easing_for(self, phase: LifecyclePhase) -> Easing:
        return EASINGS[self.easings.get(phase.value, "settle")]


def resting_state(rect: Rect, corner_radius: float = 12.0) -> VisualState:
    return VisualState(rect.x, rect.y, rect.width, rect.height, corner_radius=corner_radius)


def anchored_state(anchor: Point, size: Size) -> VisualState:
    """Collapsed "genie" state: the box shrinks onto the anchor point."""
    return VisualState(
        x=anchor.x - size.width / 2,
        y=anchor.y - size.height,
        width=size.width,
        height=size.height,
        opacity=0.0,
        scale=0.05,
        rotate_x=-15.0,
        blur=8.0,
        corner_radius=50.0,
    )


def closing_state(anchor: Point, size: Size, drop: float) -> VisualState:
    """Exit state: toward the anchor, pushed further down, tilted away."""
    collapsed = anchored_state(Point(anchor.x, anchor.y + drop), size)
    return replace(
        collapsed,
        scale=0.3,
        rotate_x=-25.0,
        rotate_y=10.0,
        rotate_z=-5.0,
        blur=12.0,
        corner_radius=25.0,
    )
