"""
Igor Cancellation Signal

Hierarchical, idempotent cancellation shared between the wizard and any
long-running detection or installation work it launches.
"""

import threading
from typing import Callable, List, Optional

from igor.wizard.logging_config import get_logger

logger = get_logger(__name__)


class CancellationToken:
    """Read-only view of a cancellation source.

    Collaborators receive a token so they can observe an abort request
    without being able to trigger one.
    """

    def __init__(self, source: "CancellationSource"):
        self._source = source

    @property
    def cancelled(self) -> bool:
        return self._source._event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or timeout elapses.

        Returns:
            True if the signal fired, False on timeout
        """
        return self._source._event.wait(timeout)

    def add_callback(self, callback: Callable[[], None]) -> None:
        """Run callback once on cancellation (immediately if already cancelled)."""
        self._source._add_callback(callback)

    def child(self) -> "CancellationSource":
        """Create a new source that is cancelled whenever this one is."""
        return CancellationSource(parent=self)


class CancellationSource:
    """Owner side of a cancellation signal.

    Cancelling a source cancels every child derived from it. Cancelling
    a child never affects its parent.
    """

    def __init__(self, parent: Optional[CancellationToken] = None):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: List[Callable[[], None]] = []
        self.token = CancellationToken(self)
        if parent is not None:
            parent.add_callback(self.cancel)

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> bool:
        """Trigger the signal.

        Returns:
            True if this call fired the signal, False if it was already set
        """
        with self._lock:
            if self._event.is_set():
                return False
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []

        logger.debug("Cancellation fired (%d dependents)", len(callbacks))
        for callback in callbacks:
            _invoke(callback)
        return True

    def _add_callback(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        _invoke(callback)


def _invoke(callback: Callable[[], None]) -> None:
    """Run one cancellation callback; a failure is logged, not propagated."""
    try:
        callback()
    except Exception:
        logger.exception("Cancellation callback %r failed", callback)
