"""Scoped subscriptions for side effects bound to an open control.

A selection control listens for interactions outside its bounds only while it
is open. The listener is acquired when the control opens and released when it
closes or is disposed. Releasing is idempotent, so close-then-dispose is safe.
"""

from typing import Callable, Optional

from shelfdesk.logger import get_logger

logger = get_logger("subscription")


class ScopedSubscription:
    """Handle that releases a listener exactly once.

    Example:
        ```python
        subscription = monitor.subscribe(contains, on_outside)
        ...
        subscription.release()
        subscription.release()  # no-op
        ```
    """

    def __init__(self, release: Callable[[], None], name: str = "subscription"):
        self.name = name
        self._release: Optional[Callable[[], None]] = release

    @property
    def active(self) -> bool:
        return self._release is not None

    def release(self) -> None:
        """Run the release callback unless it already ran."""
        release, self._release = self._release, None
        if release is None:
            return
        release()
        logger.debug(f"Released {self.name}")

    def __enter__(self) -> "ScopedSubscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()


# Registers a callback and returns the handle that unregisters it
SubscriptionSource = Callable[[Callable[[], None]], ScopedSubscription]


class OutsideInteractionMonitor:
    """Routes pointer interactions to listeners that live outside the target.

    The host (usually the Textual app) calls :meth:`notify` with whatever was
    interacted with. Every listener whose ``contains`` predicate rejects the
    target is called.

    Thread safety:
        Not thread-safe. All calls happen on the UI event loop.
    """

    def __init__(self) -> None:
        self._listeners: dict[int, tuple[Callable[[object], bool], Callable[[], None]]] = {}
        self._next_id = 0

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(
        self,
        contains: Callable[[object], bool],
        callback: Callable[[], None],
    ) -> ScopedSubscription:
        """
        Listen for interactions outside an area.

        Args:
            contains: Returns True when the interacted target lies inside the area
            callback: Called for every interaction outside the area

        Returns:
            Subscription whose release removes the listener
        """
        listener_id = self._next_id
        self._next_id += 1
        self._listeners[listener_id] = (contains, callback)
        logger.debug(f"Outside-interaction listener {listener_id} subscribed")
        return ScopedSubscription(
            lambda: self._listeners.pop(listener_id, None),
            name=f"outside-interaction listener {listener_id}",
        )

    def notify(self, target: object) -> None:
        """
        Report an interaction with ``target``.

        Listeners are called in subscription order. A listener that raises is
        logged and does not prevent the others from running.
        """
        # Listeners usually release themselves while being called
        for listener_id, (contains, callback) in list(self._listeners.items()):
            if listener_id not in self._listeners:
                continue
            try:
                if contains(target):
                    continue
                callback()
            except Exception as e:
                logger.error(f"Outside-interaction listener {listener_id} failed: {e}")
