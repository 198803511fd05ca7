"""Interaction session tests."""

from __future__ import annotations

from geometry.types import Point, Size
from interaction.drag_session import InteractionSession, PointerRegion
from world_model.window_record import LifecyclePhase, WindowRecord


def _window(wid: str, phase: LifecyclePhase = LifecyclePhase.OPEN) -> WindowRecord:
    return WindowRecord(
        id=wid,
        content_kind="about",
        title=wid,
        phase=phase,
        position=Point(100, 100),
        size=Size(400, 300),
        z_index=1,
    )


def test_begin_captures_pointer_offset() -> None:
    session = InteractionSession()
    assert session.begin(_window("w1"), Point(130, 110), PointerRegion.TITLE) is True
    assert session.dragged_window_id == "w1"
    assert session.pointer_offset == Point(30, 10)
    assert session.propose(Point(200, 300)) == Point(170, 290)


def test_only_title_region_starts_a_drag() -> None:
    session = InteractionSession()
    assert session.begin(_window("w1"), Point(130, 200), PointerRegion.BODY) is False
    assert session.begin(_window("w1"), Point(105, 105), PointerRegion.CONTROL) is False
    assert session.active is False


def test_second_drag_does_not_replace_the_first() -> None:
    session = InteractionSession()
    session.begin(_window("w1"), Point(130, 110), PointerRegion.TITLE)
    assert session.begin(_window("w2"), Point(150, 150), PointerRegion.TITLE) is False
    assert session.dragged_window_id == "w1"
    assert session.pointer_offset == Point(30, 10)


def test_maximized_closing_and_minimized_windows_cannot_be_dragged() -> None:
    session = InteractionSession()
    for phase in (LifecyclePhase.MAXIMIZED, LifecyclePhase.CLOSING, LifecyclePhase.MINIMIZED):
        assert session.begin(_window("w", phase), Point(110, 110), PointerRegion.TITLE) is False
    assert session.begin(_window("w", LifecyclePhase.OPENING), Point(110, 110), PointerRegion.TITLE)


def test_end_and_cancel() -> None:
    session = InteractionSession()
    session.begin(_window("w1"), Point(130, 110), PointerRegion.TITLE)
    assert session.cancel_if_missing(["w1", "w2"]) is False
    assert session.cancel_if_missing(["w2"]) is True
    assert session.active is False
    assert session.propose(Point(0, 0)) is None
    assert session.end() is None
