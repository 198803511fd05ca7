"""Typer command handlers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer

from core.orchestrator import DesktopSession
from core.policy_runtime import configure_logging, load_effective_config, load_yaml
from geometry.policy import GeometryPolicy
from geometry.types import Point, Size, Viewport
from interaction.drag_session import PointerRegion
from manager.render import Control

ROOT = Path(__file__).resolve().parents[2]


def _config() -> dict[str, Any]:
    return load_effective_config(ROOT)


def setup_logging(level: str | None = None) -> None:
    try:
        configure_logging(_config(), level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc


def config_show() -> None:
    """Show effective runtime config."""
    typer.echo(json.dumps(_config(), indent=2))


def policy_show(width: float, height: float) -> None:
    """Print the geometry constants for a viewport."""
    policy = GeometryPolicy(config=_config().get("geometry"))
    viewport = Viewport(width, height)
    bp = policy.breakpoint_for(width)
    minimum = policy.minimum_size(bp)
    insets = policy.viewport_insets(bp)
    maximized = policy.maximized_rect(viewport)
    anchor = policy.fallback_anchor(viewport)
    typer.echo(json.dumps({
        "breakpoint": bp.value,
        "minimum_size": {"width": minimum.width, "height": minimum.height},
        "insets": {"top": insets.top, "bottom": insets.bottom, "side_margin": insets.side_margin},
        "maximized_rect": {
            "x": maximized.x, "y": maximized.y,
            "width": maximized.width, "height": maximized.height,
        },
        "fallback_anchor": {"x": anchor.x, "y": anchor.y},
    }, indent=2))


def clamp_position(
    x: float,
    y: float,
    width: float,
    height: float,
    viewport_width: float,
    viewport_height: float,
) -> None:
    """Print the clamped position (and fitted size) for a proposed placement."""
    policy = GeometryPolicy(config=_config().get("geometry"))
    viewport = Viewport(viewport_width, viewport_height)
    size = policy.clamp_size(Size(width, height), viewport)
    position = policy.clamp(Point(x, y), size, viewport)
    typer.echo(json.dumps({
        "position": {"x": position.x, "y": position.y},
        "size": {"width": size.width, "height": size.height},
    }, indent=2))


def replay(script: Path, rendered: bool = False) -> None:
    """Run a YAML step script through a fresh session."""
    data = load_yaml(script)
    config = _config()
    vp = data.get("viewport") or config.get("viewport", {})
    session = DesktopSession.build(
        config=config,
        viewport=Viewport(float(vp.get("width", 1280)), float(vp.get("height", 800))),
    )
    for index, step in enumerate(data.get("steps") or []):
        try:
            run_step(session, step)
        except (KeyError, TypeError, ValueError) as exc:
            typer.echo(f"Step {index + 1} failed: {exc}", err=True)
            raise typer.Exit(code=1) from exc

    output: dict[str, Any] = session.store.snapshot().to_dict()
    if rendered:
        output["rendered"] = [w.to_dict() for w in session.refresh()]
    typer.echo(json.dumps(output, indent=2))


def run_step(session: DesktopSession, step: dict[str, Any]) -> None:
    """Apply one ``{action: args}`` mapping to ``session``."""
    if not isinstance(step, dict) or len(step) != 1:
        raise ValueError(f"Each step must be a single-key mapping, got {step!r}")
    action, args = next(iter(step.items()))
    args = args if args is not None else {}

    if action == "launch":
        session.store.launch(
            content_kind=args["kind"],
            title=args.get("title", args["kind"].title()),
            source_anchor=_point(args.get("anchor")),
            position=_point(args.get("position")),
            size=_size(args.get("size")),
            window_id=args.get("id"),
        )
    elif action == "pointer_down":
        session.manager.pointer_down(
            args["window"], _point(args["at"]), PointerRegion(args.get("region", "title"))
        )
    elif action == "pointer_move":
        session.manager.pointer_move(_point(args["at"]))
    elif action == "pointer_up":
        session.manager.pointer_up()
    elif action == "frame":
        for _ in range(int(args or 1)):
            session.tick()
    elif action == "click":
        session.manager.click_control(args["window"], Control(args["control"]))
    elif action == "focus":
        session.store.request_focus(str(args))
    elif action == "resize":
        session.resize(Viewport(float(args["width"]), float(args["height"])))
    elif action == "advance":
        session.advance(float(args))
    else:
        raise ValueError(f"Unknown step action: {action}")


def _point(raw: Any) -> Point | None:
    if raw is None:
        return None
    if isinstance(raw, dict):
        return Point(float(raw["x"]), float(raw["y"]))
    x, y = raw
    return Point(float(x), float(y))


def _size(raw: Any) -> Size | None:
    if raw is None:
        return None
    if isinstance(raw, dict):
        return Size(float(raw["width"]), float(raw["height"]))
    width, height = raw
    return Size(float(width), float(height))
