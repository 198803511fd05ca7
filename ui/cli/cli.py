"""CLI entrypoint for the window-management developer harness."""

from __future__ import annotations

from pathlib import Path

import typer

from ui.cli import commands

app = typer.Typer(help="Desktop window manager developer harness")
config_app = typer.Typer(help="Configuration commands")


@app.callback()
def main_callback(
    log_level: str = typer.Option(None, "--log-level", help="Override logging.level"),
) -> None:
    """Configure logging before any command runs."""
    commands.setup_logging(log_level)


@app.command("policy")
def policy_cmd(
    width: float = typer.Argument(..., help="Viewport width in pixels"),
    height: float = typer.Argument(..., help="Viewport height in pixels"),
) -> None:
    """Show breakpoint, minimum size and insets for a viewport."""
    commands.policy_show(width=width, height=height)


@app.command("clamp")
def clamp_cmd(
    x: float = typer.Argument(...),
    y: float = typer.Argument(...),
    width: float = typer.Option(800, help="Window width"),
    height: float = typer.Option(600, help="Window height"),
    viewport_width: float = typer.Option(1280, "--vw", help="Viewport width"),
    viewport_height: float = typer.Option(800, "--vh", help="Viewport height"),
) -> None:
    """Clamp a proposed window position into the placeable area."""
    commands.clamp_position(
        x=x, y=y, width=width, height=height,
        viewport_width=viewport_width, viewport_height=viewport_height,
    )


@app.command("replay")
def replay_cmd(
    script: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML step script"),
    rendered: bool = typer.Option(False, "--rendered", help="Include rendered window output"),
) -> None:
    """Replay a scripted event sequence and print the final desktop state."""
    commands.replay(script=script, rendered=rendered)


@config_app.command("show")
def config_show_cmd() -> None:
    """Show effective configuration."""
    commands.config_show()


app.add_typer(config_app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
