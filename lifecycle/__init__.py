"""Window lifecycle phases, transition descriptors and their orchestration."""

from lifecycle.descriptors import EASINGS, Easing, TransitionDescriptor, TransitionProfile, VisualState
from lifecycle.orchestrator import TransitionOrchestrator
from lifecycle.phases import IllegalTransition, Intent, ensure_legal, is_legal, resolve

__all__ = [
    "EASINGS",
    "Easing",
    "IllegalTransition",
    "Intent",
    "TransitionDescriptor",
    "TransitionOrchestrator",
    "TransitionProfile",
    "VisualState",
    "ensure_legal",
    "is_legal",
    "resolve",
]
