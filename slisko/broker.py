"""A fan-out broker that hands each published frame signal to every subscriber."""

from __future__ import annotations

import queue
import threading

_STOP = object()


class Broker:
    """Delivers published messages to all subscribers from a dispatcher thread.

    Each subscriber gets a small bounded queue. A subscriber that falls behind
    misses messages rather than holding up the broker.
    """

    SUBSCRIBER_BUFFER = 5

    def __init__(self) -> None:
        self._subscribers: set[queue.Queue[bool]] = set()
        self._lock = threading.Lock()
        self._inbox: queue.Queue[object] = queue.Queue()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start dispatching in a background thread."""
        if self.running:
            raise RuntimeError("broker is already running")
        self._thread = threading.Thread(
            target=self._dispatch, name="frame-broker", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Deliver what was already published, then stop dispatching."""
        if self._thread is None or not self._thread.is_alive():
            raise RuntimeError("broker is not running")
        self._inbox.put(_STOP)
        self._thread.join()
        self._thread = None

    def subscribe(self) -> queue.Queue[bool]:
        """Register a new subscriber and return the queue it reads from."""
        subscription: queue.Queue[bool] = queue.Queue(maxsize=self.SUBSCRIBER_BUFFER)
        with self._lock:
            self._subscribers.add(subscription)
        return subscription

    def unsubscribe(self, subscription: queue.Queue[bool]) -> None:
        """Stop delivering to ``subscription``; unknown subscriptions are ignored."""
        with self._lock:
            self._subscribers.discard(subscription)

    def publish(self, message: bool) -> None:
        """Queue a message for delivery to every subscriber."""
        self._inbox.put(message)

    def _dispatch(self) -> None:
        while True:
            message = self._inbox.get()
            if message is _STOP:
                return
            with self._lock:
                targets = list(self._subscribers)
            for subscription in targets:
                try:
                    subscription.put_nowait(message)  # type: ignore[arg-type]
                except queue.Full:
                    pass