"""Transition table state machine with an observable state stream."""

from __future__ import annotations

from typing import Any, Callable, Generic, Optional

from fsmkit.machine.broadcast import StateBroadcast, Subscription
from fsmkit.machine.states import (
    E,
    ReentrantFeedError,
    S,
    Transition,
    UndefinedTransitionError,
)
from fsmkit.utils.logging import get_logger


class StateMachine(Generic[S, E]):
    """
    Finite state machine driven by a ``(state, event) -> state`` table.

    Transitions are registered with ``let()`` and taken with ``feed()``.
    Every state the machine enters, starting with the initial one, is
    published to subscribers synchronously.

    The machine is not thread-safe. Keep it confined to one owner.
    """

    def __init__(
        self,
        initial: S,
        log_prefix: Optional[str] = "",
        logger: Any = None,
    ) -> None:
        """
        Create a machine in the ``initial`` state.

        The initial state is published to the state stream but not logged.

        Args:
            initial: Starting state
            log_prefix: Transition logging. None disables it, an empty
                string logs without a prefix, any other text is prepended
                to each line as ``"<prefix>, "``
            logger: structlog logger receiving transition lines at debug
                level (default: the ``machine`` logger)
        """
        self._table: dict[S, dict[E, S]] = {}
        self._log_prefix = log_prefix
        self._logger = logger if logger is not None else get_logger("machine")
        self._broadcast: StateBroadcast[S] = StateBroadcast(initial)

    @property
    def state(self) -> S:
        """Current state. Still readable after ``close()``."""
        return self._broadcast.value

    @property
    def log_prefix(self) -> Optional[str]:
        return self._log_prefix

    @property
    def closed(self) -> bool:
        return self._broadcast.is_deactivated()

    def let(self, event: E, origin: S, target: S) -> None:
        """
        Define a transition from ``origin`` to ``target`` by ``event``.

        Registering the same ``(origin, event)`` pair again replaces the
        previous target.

        Raises:
            InactiveActorError: If the machine is closed
        """
        self._broadcast.raise_inactive("define transitions")
        self._table.setdefault(origin, {})[event] = target

    def can_feed(self, event: E) -> bool:
        """Check whether ``event`` is defined for the current state."""
        return event in self._table.get(self.state, {})

    def transitions(self) -> list[Transition[S, E]]:
        """Get all registered transitions."""
        return [
            Transition(event=event, origin=origin, target=target)
            for origin, targets in self._table.items()
            for event, target in targets.items()
        ]

    def feed(self, event: E) -> None:
        """
        Send ``event`` to the machine.

        Logs the transition (unless logging is disabled), moves to the
        target state and notifies subscribers before returning.

        Args:
            event: Event to apply to the current state

        Raises:
            UndefinedTransitionError: If no transition is defined for
                ``event`` in the current state. The state is unchanged.
            ReentrantFeedError: If called from a subscriber callback
            InactiveActorError: If the machine is closed
        """
        self._broadcast.raise_inactive("feed events")
        if self._broadcast.publishing:
            raise ReentrantFeedError(event)

        state = self.state
        targets = self._table.get(state, {})
        if event not in targets:
            raise UndefinedTransitionError(event, state)
        target = targets[event]

        if self._log_prefix is not None:
            self._logger.debug(self._format_transition(event, state, target))

        self._broadcast.publish(target)

    def subscribe(self, trigger: S, callback: Callable[[], Any]) -> Subscription[S]:
        """
        Call ``callback`` whenever the machine enters ``trigger``.

        If the machine is already in ``trigger``, the callback runs once
        right away. Exceptions raised by the callback are discarded.

        Returns:
            Subscription whose ``cancel()`` stops the callbacks
        """

        def on_state(state: S) -> None:
            if state == trigger:
                callback()

        return self.listen(on_state)

    def listen(self, observer: Callable[[S], None]) -> Subscription[S]:
        """
        Receive every state the machine enters.

        ``observer`` gets the current state immediately, then each new
        state in transition order.
        """
        return self._broadcast.subscribe(observer)

    def close(self) -> None:
        """Release the state stream. Further calls are no-ops."""
        self._broadcast.close()

    def _format_transition(self, event: E, state: S, target: S) -> str:
        message = f"{event}: {state} -> {target}"
        if self._log_prefix:
            message = f"{self._log_prefix}, {message}"
        return message

    def __enter__(self) -> StateMachine[S, E]:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"StateMachine(state={self.state!r})"
