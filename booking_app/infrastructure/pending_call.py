"""Cancellable handle for a remote call running in the background."""
import logging
from concurrent.futures import CancelledError, Executor, Future
from threading import Lock
from typing import Any, Callable, List, Optional

from booking_app.domain.exceptions import OperationCancelledError


logger = logging.getLogger(__name__)


class PendingCall:
    """
    Wraps a Future so the caller can walk away from it.

    Once :meth:`cancel` returns, no registered callback will run, even if
    the underlying request completes later. The request itself is not
    aborted if it has already started.
    """

    def __init__(self, future: Future, operation: str = "call"):
        self.operation = operation
        self._future = future
        self._lock = Lock()
        self._callbacks: List[Callable[["PendingCall"], Any]] = []
        self._cancel_callbacks: List[Callable[["PendingCall"], Any]] = []
        self._cancelled = False
        self._fired = False
        future.add_done_callback(self._on_done)

    @classmethod
    def submit(cls, executor: Executor, operation: str, fn: Callable, *args, **kwargs) -> "PendingCall":
        return cls(executor.submit(fn, *args, **kwargs), operation=operation)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def done(self) -> bool:
        return self._cancelled or self._future.done()

    def cancel(self) -> bool:
        """
        Invalidate the call; late results are dropped.

        Returns False if the call already completed and its callbacks ran.
        """
        with self._lock:
            if self._cancelled:
                return True
            if self._fired:
                return False
            self._cancelled = True
            self._callbacks.clear()
            cancel_callbacks, self._cancel_callbacks = self._cancel_callbacks, []
        self._future.cancel()
        logger.debug(f"Pending {self.operation} cancelled")
        for callback in cancel_callbacks:
            self._invoke(callback)
        return True

    def add_cancel_callback(self, callback: Callable[["PendingCall"], Any]) -> None:
        """Run ``callback(self)`` if the call is cancelled before it completes."""
        with self._lock:
            if self._fired and not self._cancelled:
                return
            if not self._cancelled:
                self._cancel_callbacks.append(callback)
                return
        self._invoke(callback)

    def add_done_callback(self, callback: Callable[["PendingCall"], Any]) -> None:
        """Run ``callback(self)`` on completion unless cancelled first."""
        with self._lock:
            if self._cancelled:
                return
            if not self._fired:
                self._callbacks.append(callback)
                return
        self._invoke(callback)

    def result(self, timeout: Optional[float] = None) -> Any:
        """
        Wait for and return the call's result.

        Raises:
            OperationCancelledError: If the call was cancelled
            Exception: Whatever the call itself raised
        """
        if self._cancelled:
            raise OperationCancelledError()
        try:
            value = self._future.result(timeout=timeout)
        except CancelledError as e:
            raise OperationCancelledError() from e
        if self._cancelled:
            raise OperationCancelledError()
        return value

    def exception(self, timeout: Optional[float] = None) -> Optional[BaseException]:
        if self._cancelled:
            return None
        return self._future.exception(timeout=timeout)

    def _on_done(self, _future: Future) -> None:
        with self._lock:
            self._fired = True
            if self._cancelled:
                return
            callbacks = list(self._callbacks)
            self._callbacks.clear()
            self._cancel_callbacks.clear()
        for callback in callbacks:
            self._invoke(callback)

    def _invoke(self, callback: Callable[["PendingCall"], Any]) -> None:
        try:
            callback(self)
        except Exception as e:
            logger.error(f"Callback for pending {self.operation} failed: {e}", exc_info=True)
