"""Window record model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from geometry.types import Point, Size


class LifecyclePhase(str, Enum):
    OPENING = "opening"
    OPEN = "open"
    MINIMIZED = "minimized"
    MAXIMIZED = "maximized"
    CLOSING = "closing"


class WindowRecord(BaseModel):
    """One managed panel as owned by the host controller."""

    id: str
    content_kind: str
    title: str
    phase: LifecyclePhase = LifecyclePhase.OPENING
    position: Point = Field(default_factory=Point)
    size: Size = Field(default_factory=Size)
    z_index: int = 0
    source_anchor: Point | None = None

    @property
    def uses_explicit_geometry(self) -> bool:
        """False while maximized: position and size are remembered but unused."""
        return self.phase is not LifecyclePhase.MAXIMIZED
