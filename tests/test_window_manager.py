"""Window manager facade tests: intents are asserted as callback invocations."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from core.scheduler import ManualScheduler
from geometry.policy import GeometryPolicy
from geometry.types import Point, Size, Viewport
from interaction.drag_session import PointerRegion
from manager.render import Control
from manager.window_manager import WindowManager
from world_model.window_record import LifecyclePhase, WindowRecord


def _record(wid: str, z: int, phase: LifecyclePhase = LifecyclePhase.OPEN, **kw) -> WindowRecord:
    return WindowRecord(
        id=wid,
        content_kind="about",
        title=wid.upper(),
        phase=phase,
        position=kw.get("position", Point(100, 100)),
        size=kw.get("size", Size(400, 300)),
        z_index=z,
    )


def _manager(viewport: Viewport | None = None, config: dict | None = None):
    callbacks = MagicMock()
    scheduler = ManualScheduler()
    manager = WindowManager(
        callbacks=callbacks,
        policy=GeometryPolicy(),
        scheduler=scheduler,
        viewport=viewport or Viewport(1280, 800),
        config=config,
    )
    return manager, callbacks, scheduler


def test_render_orders_by_z_and_exposes_controls() -> None:
    manager, _, _ = _manager()
    out = manager.render([_record("b", 5), _record("a", 2, LifecyclePhase.MINIMIZED)])
    assert [w.id for w in out] == ["a", "b"]
    assert out[0].visible is False
    labels = {c.control: c.label for c in out[0].controls}
    assert labels[Control.MINIMIZE] == "Restore window"
    assert labels[Control.MAXIMIZE] == "Maximize window"
    assert labels[Control.CLOSE] == "Close window"


def test_duplicate_ids_are_logged_not_fatal(caplog: pytest.LogCaptureFixture) -> None:
    manager, _, _ = _manager()
    with caplog.at_level(logging.WARNING, logger="dwm.window_manager"):
        out = manager.render([_record("a", 1), _record("a", 2)])
    assert len(out) == 1
    assert out[0].z_index == 1
    assert "Duplicate window id" in caplog.text


def test_drag_start_focuses_and_moves_are_coalesced_per_frame() -> None:
    manager, callbacks, _ = _manager()
    manager.render([_record("w1", 1), _record("w2", 2)])

    assert manager.pointer_down("w1", Point(120, 110), PointerRegion.TITLE) is True
    callbacks.request_focus.assert_called_once_with("w1")

    manager.pointer_move(Point(220, 210))
    manager.pointer_move(Point(320, 310))
    callbacks.request_move.assert_not_called()
    assert manager.frame() == 1
    callbacks.request_move.assert_called_once_with("w1", Point(300, 300))

    assert manager.frame() == 0
    assert callbacks.request_move.call_count == 1


def test_pointer_up_delivers_final_move_of_a_burst() -> None:
    manager, callbacks, _ = _manager()
    manager.render([_record("w1", 1)])
    manager.pointer_down("w1", Point(120, 110), PointerRegion.TITLE)
    manager.pointer_move(Point(150, 150))
    manager.pointer_move(Point(170, 160))
    assert manager.pointer_up() is True
    callbacks.request_move.assert_called_once_with("w1", Point(150, 150))
    assert manager.session.active is False

    manager.pointer_move(Point(600, 600))
    manager.frame()
    assert callbacks.request_move.call_count == 1


def test_pointer_up_without_drag_is_harmless() -> None:
    manager, callbacks, _ = _manager()
    manager.render([_record("w1", 1)])
    assert manager.pointer_up() is False
    callbacks.request_move.assert_not_called()


def test_moves_are_clamped_to_viewport() -> None:
    manager, callbacks, _ = _manager()
    manager.render([_record("w1", 1)])
    manager.pointer_down("w1", Point(100, 100), PointerRegion.TITLE)
    manager.pointer_move(Point(-500, 5000))
    manager.frame()
    callbacks.request_move.assert_called_once_with("w1", Point(48, 800 - 80 - 300))


def test_second_pointer_down_is_ignored_while_dragging() -> None:
    manager, callbacks, _ = _manager()
    manager.render([_record("w1", 1), _record("w2", 2)])
    manager.pointer_down("w1", Point(120, 110), PointerRegion.TITLE)
    assert manager.pointer_down("w2", Point(120, 110), PointerRegion.TITLE) is False
    assert manager.session.dragged_window_id == "w1"
    assert callbacks.request_focus.call_count == 1


def test_body_and_maximized_pointer_down_do_not_drag() -> None:
    manager, callbacks, _ = _manager()
    manager.render([_record("w1", 1), _record("w2", 2, LifecyclePhase.MAXIMIZED)])
    assert manager.pointer_down("w1", Point(150, 250), PointerRegion.BODY) is False
    assert manager.pointer_down("ghost", Point(10, 40), PointerRegion.TITLE) is False
    callbacks.request_focus.assert_not_called()
    assert manager.pointer_down("w2", Point(10, 40), PointerRegion.TITLE) is False
    assert manager.session.active is False


def test_title_press_raises_buried_maximized_window() -> None:
    manager, callbacks, _ = _manager()
    manager.render([
        _record("a", 1, LifecyclePhase.MAXIMIZED),
        _record("b", 2, LifecyclePhase.MAXIMIZED),
    ])
    assert manager.pointer_down("a", Point(50, 40), PointerRegion.TITLE) is False
    callbacks.request_focus.assert_called_once_with("a")
    assert manager.session.active is False


def test_title_press_on_closing_window_does_not_focus() -> None:
    manager, callbacks, _ = _manager()
    manager.render([_record("w1", 1, LifecyclePhase.CLOSING)])
    assert manager.pointer_down("w1", Point(120, 110), PointerRegion.TITLE) is False
    callbacks.request_focus.assert_not_called()


def test_window_disappearing_mid_drag_cancels_without_callbacks() -> None:
    manager, callbacks, _ = _manager()
    manager.render([_record("w1", 1), _record("w2", 2)])
    manager.pointer_down("w1", Point(120, 110), PointerRegion.TITLE)
    manager.pointer_move(Point(200, 200))
    manager.render([_record("w2", 2)])
    assert manager.session.active is False
    manager.frame()
    manager.pointer_up()
    callbacks.request_move.assert_not_called()


def test_window_closing_mid_drag_cancels_the_drag() -> None:
    manager, callbacks, _ = _manager()
    manager.render([_record("w1", 1)])
    manager.pointer_down("w1", Point(120, 110), PointerRegion.TITLE)
    manager.render([_record("w1", 1, LifecyclePhase.CLOSING)])
    assert manager.session.active is False
    manager.pointer_move(Point(300, 300))
    manager.frame()
    callbacks.request_move.assert_not_called()


def test_resize_mid_drag_uses_new_viewport_on_next_move() -> None:
    manager, callbacks, _ = _manager()
    manager.render([_record("w1", 1, position=Point(100, 100))])
    manager.pointer_down("w1", Point(100, 100), PointerRegion.TITLE)
    manager.resize(Viewport(700, 600))
    manager.pointer_move(Point(1000, 200))
    manager.frame()
    # tablet: side margin 40, window 400 wide
    callbacks.request_move.assert_called_once_with("w1", Point(700 - 40 - 400, 200))


def test_resize_requests_moves_for_out_of_bounds_windows() -> None:
    manager, callbacks, _ = _manager()
    manager.render([
        _record("inside", 1, position=Point(100, 100)),
        _record("outside", 2, position=Point(1100, 100)),
        _record("max", 3, LifecyclePhase.MAXIMIZED, position=Point(1100, 100)),
    ])
    moved = manager.resize(Viewport(320, 700))
    assert set(moved) == {"inside", "outside"}
    for call in callbacks.request_move.call_args_list:
        window_id, position = call.args
        assert window_id != "max"
        assert 16 <= position.x <= 320 - 300


def test_control_clicks_issue_exactly_one_callback_each() -> None:
    manager, callbacks, _ = _manager()
    manager.render([_record("w1", 1)])
    manager.click_control("w1", Control.MINIMIZE)
    manager.click_control("w1", Control.MINIMIZE)
    manager.click_control("w1", Control.MAXIMIZE)
    manager.click_control("w1", Control.CLOSE)
    assert callbacks.request_minimize_toggle.call_count == 2
    callbacks.request_maximize_toggle.assert_called_once_with("w1")
    callbacks.request_close.assert_called_once_with("w1")
    assert manager.click_control("ghost", Control.CLOSE) is False


def test_opening_completion_is_signalled_to_host() -> None:
    manager, callbacks, scheduler = _manager()
    manager.render([_record("w1", 1, LifecyclePhase.OPENING)])
    scheduler.advance(1.0)
    callbacks.transition_complete.assert_called_once_with("w1", LifecyclePhase.OPENING)


def test_uncoalesced_mode_delivers_every_move() -> None:
    manager, callbacks, _ = _manager(config={"interaction": {"coalesce_moves": False}})
    manager.render([_record("w1", 1)])
    manager.pointer_down("w1", Point(100, 100), PointerRegion.TITLE)
    manager.pointer_move(Point(150, 150))
    manager.pointer_move(Point(160, 160))
    assert callbacks.request_move.call_count == 2


def test_out_of_range_host_geometry_is_clamped_before_rendering() -> None:
    manager, _, _ = _manager()
    viewport = Viewport(1280, 800)
    area = manager.policy.placeable_area(viewport)
    out = manager.render([
        _record("neg", 1, position=Point(-500, -500), size=Size(-10, 5000)),
        _record("huge", 2, LifecyclePhase.OPENING, position=Point(9000, 9000), size=Size(5000, 20)),
    ])
    for rendered in out:
        assert area.contains(rendered.state.rect)
    assert out[0].state.width == 400
    assert out[0].state.height == 800 - 32 - 80


def test_drag_clamps_with_fitted_size_for_oversize_host_window() -> None:
    manager, callbacks, _ = _manager()
    manager.render([_record("w1", 1, position=Point(100, 100), size=Size(3000, 3000))])
    manager.pointer_down("w1", Point(100, 100), PointerRegion.TITLE)
    manager.pointer_move(Point(700, 600))
    manager.frame()
    callbacks.request_move.assert_called_once_with("w1", Point(48, 32))
