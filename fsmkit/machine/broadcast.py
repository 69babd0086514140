"""Latest-value broadcast backing a machine's state stream."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

from fsmkit.machine.states import ReentrantFeedError
from fsmkit.utils.actor import Actor

T = TypeVar("T")


class Subscription(Generic[T]):
    """Handle binding one observer to a broadcast until cancelled."""

    def __init__(
        self,
        broadcast: StateBroadcast[T],
        observer: Callable[[T], None],
    ) -> None:
        self._broadcast = broadcast
        self._observer = observer
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        """Stop delivery to the observer. Safe to call more than once."""
        if not self._active:
            return
        self._active = False
        self._broadcast._remove(self)

    def _deliver(self, value: T) -> None:
        if not self._active:
            return
        try:
            self._observer(value)
        except Exception:
            # Observer failures stay with the observer
            pass


class StateBroadcast(Actor, Generic[T]):
    """
    Holds the latest value and pushes every new value to observers.

    A new observer first receives the latest value, then each value
    published after it subscribed, in publish order. Observers run
    synchronously inside ``publish()`` in subscription order.

    ``close()`` drops all observers. It may be called any number of
    times; ``publish()`` and ``subscribe()`` raise InactiveActorError
    afterwards.
    """

    def __init__(self, initial: T) -> None:
        super().__init__()
        self._value = initial
        self._subscriptions: list[Subscription[T]] = []
        self._publishing = False
        self.initialize()

    @property
    def value(self) -> T:
        """The most recently published value."""
        return self._value

    @property
    def publishing(self) -> bool:
        """Whether observers are being notified right now."""
        return self._publishing

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def publish(self, value: T) -> None:
        """
        Store ``value`` as latest and deliver it to every observer.

        Raises:
            InactiveActorError: If the broadcast is closed
            ReentrantFeedError: If called from inside an observer
        """
        self.raise_inactive("publish")
        if self._publishing:
            raise ReentrantFeedError()

        self._value = value
        self._publishing = True
        try:
            for subscription in tuple(self._subscriptions):
                subscription._deliver(value)
        finally:
            self._publishing = False

    def subscribe(self, observer: Callable[[T], None]) -> Subscription[T]:
        """
        Register ``observer`` and replay the latest value to it.

        Returns:
            Subscription that cancels delivery
        """
        self.raise_inactive("subscribe")

        subscription = Subscription(self, observer)

        # The replay counts as a delivery: publishing from it is refused
        was_publishing = self._publishing
        self._publishing = True
        try:
            subscription._deliver(self._value)
        finally:
            self._publishing = was_publishing

        # The observer may have cancelled itself during the replay
        if subscription.active:
            self._subscriptions.append(subscription)
        return subscription

    def close(self) -> None:
        self.deactivate()

    def dispose(self) -> None:
        for subscription in self._subscriptions:
            subscription._active = False
        self._subscriptions.clear()

    def _remove(self, subscription: Subscription[T]) -> None:
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            pass
