"""Tests for the Actor lifecycle."""

from __future__ import annotations

import pytest

from fsmkit.utils.actor import Actor, ActorStatus, InactiveActorError


class Resource(Actor):
    def __init__(self, fail_on_propose: bool = False) -> None:
        super().__init__()
        self.fail_on_propose = fail_on_propose
        self.events: list[str] = []

    def propose(self) -> None:
        self.events.append("propose")
        if self.fail_on_propose:
            raise OSError("cannot acquire")

    def dispose(self) -> None:
        self.events.append("dispose")


def test_starts_unset():
    resource = Resource()
    assert resource.status == ActorStatus.UNSET
    assert resource.is_uninitialized()


def test_initialize_then_deactivate():
    resource = Resource()

    resource.initialize()
    assert resource.is_active()

    resource.deactivate()
    assert resource.is_deactivated()
    assert resource.events == ["propose", "dispose"]


def test_deactivate_only_disposes_once():
    resource = Resource()
    resource.initialize()

    resource.deactivate()
    resource.deactivate()

    assert resource.events == ["propose", "dispose"]


def test_deactivate_before_initialize_is_noop():
    resource = Resource()
    resource.deactivate()
    assert resource.is_uninitialized()
    assert resource.events == []


def test_failed_propose_deactivates():
    resource = Resource(fail_on_propose=True)

    with pytest.raises(OSError):
        resource.initialize()

    assert resource.is_deactivated()
    assert resource.events == ["propose", "dispose"]


def test_initialize_twice_raises():
    resource = Resource()
    resource.initialize()

    with pytest.raises(InactiveActorError):
        resource.initialize()


def test_raise_inactive():
    resource = Resource()

    with pytest.raises(InactiveActorError, match="Resource is unset, cannot read"):
        resource.raise_inactive("read")

    resource.initialize()
    resource.raise_inactive("read")

    resource.deactivate()
    with pytest.raises(InactiveActorError) as exc_info:
        resource.raise_inactive()
    assert str(exc_info.value) == "Resource is deactivated"
    assert exc_info.value.status == ActorStatus.DEACTIVATED
