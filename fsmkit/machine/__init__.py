"""Transition table state machine.

A machine owns a table mapping ``(state, event)`` to a target state and a
current state that subscribers can observe:

    machine = StateMachine("closed", log_prefix="door")
    machine.let("open", "closed", "opening")
    machine.let("opened", "opening", "open")
    machine.subscribe("open", lambda: print("door is open"))
    machine.feed("open")      # closed -> opening
    machine.feed("opened")    # opening -> open, prints "door is open"

Feeding an event with no entry for the current state raises
UndefinedTransitionError and leaves the state alone. Subscribers run
synchronously within ``feed()``; their exceptions never reach the caller.
"""

from fsmkit.machine.broadcast import StateBroadcast, Subscription
from fsmkit.machine.machine import StateMachine
from fsmkit.machine.states import (
    MachineError,
    ReentrantFeedError,
    Transition,
    UndefinedTransitionError,
)

__all__ = [
    # Machine
    "StateMachine",
    "Transition",
    # Stream
    "StateBroadcast",
    "Subscription",
    # Errors
    "MachineError",
    "UndefinedTransitionError",
    "ReentrantFeedError",
]
