"""Errors and value types for the transition table machine."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

S = TypeVar("S", bound=Hashable)  # State type
E = TypeVar("E", bound=Hashable)  # Event type


class MachineError(Exception):
    """Base class for state machine errors."""


class UndefinedTransitionError(MachineError):
    """No transition is registered for an event in the current state."""

    def __init__(self, event: Any, state: Any) -> None:
        self.event = event
        self.state = state
        super().__init__(f"Event {event} undefined for state {state}")


class ReentrantFeedError(MachineError):
    """A transition was requested while subscribers were being notified."""

    def __init__(self, event: Any = None) -> None:
        self.event = event
        if event is None:
            message = "Cannot publish while subscribers are being notified"
        else:
            message = f"Event {event} fed while subscribers are being notified"
        super().__init__(message)


@dataclass(frozen=True)
class Transition(Generic[S, E]):
    """One entry of a transition table: ``event`` moves ``origin`` to ``target``."""

    event: E
    origin: S
    target: S

    def __str__(self) -> str:
        return f"{self.event}: {self.origin} -> {self.target}"
