"""Renderer-facing description of each managed window."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from lifecycle.descriptors import TransitionDescriptor, VisualState
from world_model.window_record import LifecyclePhase, WindowRecord


class Control(str, Enum):
    CLOSE = "close"
    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"


@dataclass(frozen=True)
class ControlAffordance:
    control: Control
    label: str


def controls_for(window: WindowRecord) -> tuple[ControlAffordance, ...]:
    """Close, minimize and maximize buttons, labelled for the current phase."""
    minimized = window.phase is LifecyclePhase.MINIMIZED
    maximized = window.phase is LifecyclePhase.MAXIMIZED
    return (
        ControlAffordance(Control.CLOSE, "Close window"),
        ControlAffordance(Control.MINIMIZE, "Restore window" if minimized else "Minimize window"),
        ControlAffordance(Control.MAXIMIZE, "Restore window" if maximized else "Maximize window"),
    )


@dataclass(frozen=True)
class RenderedWindow:
    id: str
    title: str
    content_kind: str
    phase: LifecyclePhase
    z_index: int
    state: VisualState
    transition: TransitionDescriptor
    dragging: bool = False
    controls: tuple[ControlAffordance, ...] = field(default_factory=tuple)

    @property
    def visible(self) -> bool:
        """Minimized windows stay mounted but are not shown once settled."""
        return self.phase is not LifecyclePhase.MINIMIZED

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content_kind": self.content_kind,
            "phase": self.phase.value,
            "z_index": self.z_index,
            "visible": self.visible,
            "dragging": self.dragging,
            "state": self.state.to_dict(),
            "transition": self.transition.to_dict(),
            "controls": [{"control": c.control.value, "label": c.label} for c in self.controls],
        }
