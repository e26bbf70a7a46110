"""Finalization listeners."""

from enterprise_build.listeners.base import FinalizeListener
from enterprise_build.listeners.logging import LoggingListener
from enterprise_build.listeners.manager import ListenerManager

__all__ = [
    "FinalizeListener",
    "ListenerManager",
    "LoggingListener",
]
