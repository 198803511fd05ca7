"""Desktop state schema."""

from __future__ import annotations

from dataclasses import dataclass, field

from geometry.types import Viewport
from world_model.window_record import LifecyclePhase, WindowRecord


@dataclass
class DesktopState:
    """Read-only snapshot of the controller's windows and viewport."""

    viewport: Viewport
    windows: list[WindowRecord] = field(default_factory=list)
    next_z_index: int = 1

    @property
    def active_window(self) -> str | None:
        """Id of the topmost window that is not minimized or closing."""
        candidates = [
            w for w in self.windows
            if w.phase not in (LifecyclePhase.MINIMIZED, LifecyclePhase.CLOSING)
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda w: w.z_index).id

    def to_dict(self) -> dict:
        return {
            "viewport": {"width": self.viewport.width, "height": self.viewport.height},
            "active_window": self.active_window,
            "next_z_index": self.next_z_index,
            "windows": [w.model_dump(mode="json") for w in self.windows],
        }
