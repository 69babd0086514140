"""Lifecycle for objects that hold resources until explicitly released.

An actor starts UNSET, becomes ACTIVE on ``initialize()`` and ends
DEACTIVATED on ``deactivate()``. It never goes back.
"""

from __future__ import annotations

from enum import Enum, auto


class ActorStatus(Enum):
    """Lifecycle stages of an actor."""

    UNSET = auto()
    ACTIVE = auto()
    DEACTIVATED = auto()


class InactiveActorError(RuntimeError):
    """An actor was used outside of its ACTIVE stage."""

    def __init__(self, actor: "Actor", operation: str = "") -> None:
        self.actor_type = type(actor).__name__
        self.status = actor.status
        message = f"{self.actor_type} is {self.status.name.lower()}"
        if operation:
            message = f"{message}, cannot {operation}"
        super().__init__(message)


class Actor:
    """
    Base class for objects with an initialize/deactivate lifecycle.

    Subclasses acquire resources in ``propose()`` and release them in
    ``dispose()``. If ``propose()`` raises, the actor is deactivated
    before the error propagates.
    """

    def __init__(self) -> None:
        self._status = ActorStatus.UNSET

    @property
    def status(self) -> ActorStatus:
        return self._status

    def is_uninitialized(self) -> bool:
        return self._status == ActorStatus.UNSET

    def is_active(self) -> bool:
        return self._status == ActorStatus.ACTIVE

    def is_deactivated(self) -> bool:
        return self._status == ActorStatus.DEACTIVATED

    def raise_inactive(self, operation: str = "") -> None:
        """Raise InactiveActorError unless the actor is ACTIVE."""
        if not self.is_active():
            raise InactiveActorError(self, operation)

    def initialize(self) -> None:
        if not self.is_uninitialized():
            raise InactiveActorError(self, "initialize")

        self._status = ActorStatus.ACTIVE
        try:
            self.propose()
        except Exception:
            self.deactivate()
            raise

    def deactivate(self) -> None:
        """Release resources. A no-op unless the actor is ACTIVE."""
        if self.is_active():
            self.dispose()
            self._status = ActorStatus.DEACTIVATED

    def propose(self) -> None:
        """Acquire resources. Called once by ``initialize()``."""

    def dispose(self) -> None:
        """Release resources. Called once by ``deactivate()``."""
