"""fsmkit: in-process finite state machines with observable state."""

__version__ = "0.1.0"

from fsmkit.machine import (  # noqa: E402
    MachineError,
    ReentrantFeedError,
    StateMachine,
    Subscription,
    Transition,
    UndefinedTransitionError,
)
from fsmkit.utils.actor import InactiveActorError  # noqa: E402

__all__ = [
    "__version__",
    "StateMachine",
    "Subscription",
    "Transition",
    "MachineError",
    "UndefinedTransitionError",
    "ReentrantFeedError",
    "InactiveActorError",
]
