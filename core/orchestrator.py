"""Top-level wiring of a desktop session."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from core.event_bus import WILDCARD, EventBus
from core.policy_runtime import load_effective_config
from core.scheduler import ManualScheduler
from geometry.policy import GeometryPolicy
from geometry.types import Viewport
from manager.render import RenderedWindow
from manager.window_manager import WindowManager
from world_model.window_store import WindowStore

logger = logging.getLogger("dwm.session")


@dataclass
class DesktopSession:
    """Holds initialized components and keeps the manager in sync with the store."""

    config: dict[str, Any]
    policy: GeometryPolicy
    scheduler: ManualScheduler
    event_bus: EventBus
    store: WindowStore
    manager: WindowManager
    renders: int = field(default=0)

    @classmethod
    def build(
        cls,
        root: Path | None = None,
        config: dict[str, Any] | None = None,
        viewport: Viewport | None = None,
    ) -> DesktopSession:
        default_root = Path(__file__).resolve().parents[1]
        if config is None:
            config = load_effective_config((root or default_root).resolve())
        vp_cfg = config.get("viewport", {})
        viewport = viewport or Viewport(
            float(vp_cfg.get("width", 1280)), float(vp_cfg.get("height", 800))
        )

        policy = GeometryPolicy(config=config.get("geometry"))
        scheduler = ManualScheduler()
        bus = EventBus()
        store = WindowStore(policy, viewport, event_bus=bus, config=config.get("windows"))
        manager = WindowManager(
            callbacks=store,
            policy=policy,
            scheduler=scheduler,
            viewport=viewport,
            config=config,
        )
        session = cls(
            config=config,
            policy=policy,
            scheduler=scheduler,
            event_bus=bus,
            store=store,
            manager=manager,
        )
        bus.subscribe(WILDCARD, session._on_store_event)
        return session

    def _on_store_event(self, payload: dict[str, Any]) -> None:
        logger.debug("Store event %s for %s", payload.get("event"), payload.get("window_id"))
        self.refresh()

    def refresh(self) -> list[RenderedWindow]:
        """Hand the store's current windows to the manager."""
        self.renders += 1
        return self.manager.render(self.store.windows, self.store.viewport)

    def resize(self, viewport: Viewport) -> None:
        self.store.set_viewport(viewport)
        self.manager.resize(viewport)

    def advance(self, seconds: float) -> int:
        """Let ``seconds`` of animation time pass."""
        return self.scheduler.advance(seconds)

    def tick(self) -> int:
        """Run one rendering frame."""
        return self.manager.frame()
