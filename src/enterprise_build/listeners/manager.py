"""ListenerManager -- dispatches finalization hooks to registered listeners."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from enterprise_build.listeners.base import FinalizeListener

if TYPE_CHECKING:
    from enterprise_build.module import Module

__all__ = ["ListenerManager"]

_logger = logging.getLogger(__name__)


class ListenerManager:
    """Ordered collection of finalization listeners.

    ``before`` hooks run in registration order, ``after`` and ``on_error``
    hooks in reverse registration order. Exceptions from ``before`` and
    ``after`` propagate and fail the finalization; exceptions from
    ``on_error`` are logged so the original error is not masked.
    """

    def __init__(self, listeners: list[FinalizeListener] | None = None) -> None:
        self._listeners: list[FinalizeListener] = list(listeners or [])
        self._lock = threading.Lock()

    def add(self, listener: FinalizeListener) -> None:
        """Append a listener to the end of the dispatch list."""
        with self._lock:
            self._listeners.append(listener)

    def remove(self, listener: FinalizeListener) -> bool:
        """Remove a listener by identity (is). Returns True if found and removed."""
        with self._lock:
            for i, entry in enumerate(self._listeners):
                if entry is listener:
                    self._listeners.pop(i)
                    return True
            return False

    def snapshot(self) -> list[FinalizeListener]:
        """Return a copy of the current listener list."""
        with self._lock:
            return list(self._listeners)

    def notify_before(self, module: Module, owner: str | None) -> None:
        for listener in self.snapshot():
            listener.before(module, owner)

    def notify_after(self, module: Module, owner: str | None) -> None:
        for listener in reversed(self.snapshot()):
            listener.after(module, owner)

    def notify_error(self, module: Module, owner: str | None, error: Exception) -> None:
        for listener in reversed(self.snapshot()):
            try:
                listener.on_error(module, owner, error)
            except Exception:
                _logger.error("Exception in on_error handler %r", listener, exc_info=True)
