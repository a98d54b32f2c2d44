"""Observer channel used by repositories to push record-set changes."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    """Cancellable handle returned by ChangeFeed.subscribe()."""

    def __init__(self, cancel: Callable[[], None]):
        self._cancel = cancel
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if self._active:
            self._active = False
            self._cancel()


class ChangeFeed(Generic[T]):
    """Fan-out of snapshots to subscribed callbacks.

    Callbacks run synchronously on the publishing thread. A failing callback
    is logged and does not stop delivery to the others, nor does it undo the
    write that triggered the notification.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._callbacks: dict[int, Callable[[T], None]] = {}
        self._next_id = 0

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        with self._lock:
            token = self._next_id
            self._next_id += 1
            self._callbacks[token] = callback

        def _cancel() -> None:
            with self._lock:
                self._callbacks.pop(token, None)

        return Subscription(_cancel)

    def publish(self, snapshot: T) -> None:
        with self._lock:
            callbacks = list(self._callbacks.values())
        for callback in callbacks:
            try:
                callback(snapshot)
            except Exception:
                logger.exception("Change subscriber failed")

    def __len__(self) -> int:
        return len(self._callbacks)
