"""Window lifecycle state machine."""

from __future__ import annotations

from enum import Enum

from world_model.window_record import LifecyclePhase

Phase = LifecyclePhase


class Intent(str, Enum):
    """Requests that may move a window between phases."""

    OPENED = "opened"
    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"
    CLOSE = "close"


class IllegalTransition(ValueError):
    """Raised when a phase change violates the lifecycle graph."""


# closing has no successor other than removal from the store.
LEGAL_TRANSITIONS: dict[Phase, frozenset[Phase]] = {
    Phase.OPENING: frozenset({Phase.OPEN, Phase.CLOSING}),
    Phase.OPEN: frozenset({Phase.MINIMIZED, Phase.MAXIMIZED, Phase.CLOSING}),
    Phase.MINIMIZED: frozenset({Phase.OPEN, Phase.CLOSING}),
    Phase.MAXIMIZED: frozenset({Phase.OPEN, Phase.MINIMIZED, Phase.CLOSING}),
    Phase.CLOSING: frozenset(),
}

_INTENT_TARGETS: dict[tuple[Phase, Intent], Phase] = {
    (Phase.OPENING, Intent.OPENED): Phase.OPEN,
    (Phase.OPEN, Intent.MINIMIZE): Phase.MINIMIZED,
    (Phase.MAXIMIZED, Intent.MINIMIZE): Phase.MINIMIZED,
    (Phase.MINIMIZED, Intent.MINIMIZE): Phase.OPEN,
    (Phase.OPEN, Intent.MAXIMIZE): Phase.MAXIMIZED,
    (Phase.MAXIMIZED, Intent.MAXIMIZE): Phase.OPEN,
}


def is_legal(source: Phase, target: Phase) -> bool:
    return target in LEGAL_TRANSITIONS[source]


def ensure_legal(source: Phase, target: Phase) -> None:
    if not is_legal(source, target):
        raise IllegalTransition(f"{source.value} -> {target.value} is not a legal transition")


def resolve(phase: Phase, intent: Intent) -> Phase | None:
    """Return the phase an intent leads to, or None when it does not apply.

    Close wins from every phase except closing itself, including a window
    that is still opening.
    """
    if intent is Intent.CLOSE:
        return None if phase is Phase.CLOSING else Phase.CLOSING
    return _INTENT_TARGETS.get((phase, intent))
