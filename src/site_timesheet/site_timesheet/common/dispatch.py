from __future__ import annotations

import logging
import threading
from collections import defaultdict
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

ErrorReporter = Callable[[BaseException], None]


class WriteDispatcher:
    """Fire-and-forget writes with error reporting.

    The caller gets control back right away; if the write later fails the
    error reporter is called once. There is no automatic retry.
    """

    def __init__(self, *, max_workers: int = 2, executor: Optional[ThreadPoolExecutor] = None):
        self._executor = executor or ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="write")
        self._owns_executor = executor is None

    def submit(self, fn: Callable[..., Any], *args: Any, on_error: Optional[ErrorReporter] = None, **kwargs: Any) -> Future:
        future = self._executor.submit(fn, *args, **kwargs)

        def _done(f: Future) -> None:
            exc = f.exception()
            if exc is None:
                return
            logger.warning("Background write failed: %s", exc)
            if on_error is not None:
                on_error(exc)

        future.add_done_callback(_done)
        return future

    def shutdown(self, wait: bool = True) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=wait)


class WriteFailureLog:
    """Per-user inbox of background write failures, drained by the client."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._messages: dict[str, list[str]] = defaultdict(list)

    def reporter(self, user: str) -> ErrorReporter:
        def _report(exc: BaseException) -> None:
            with self._lock:
                self._messages[user].append(str(exc) or type(exc).__name__)

        return _report

    def drain(self, user: str) -> list[str]:
        with self._lock:
            return self._messages.pop(user, [])
