"""LoggingListener for structured finalization logging."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from enterprise_build.config import redact_properties
from enterprise_build.listeners.base import FinalizeListener

if TYPE_CHECKING:
    from enterprise_build.module import Module

__all__ = ["LoggingListener"]


class LoggingListener(FinalizeListener):
    """Logs the start, completion (with duration) and failure of each convention's finalization.

    Module properties are logged through :func:`redact_properties` so signing
    credentials never reach the log. Per-call timing is kept in a stack
    keyed by module name, so one listener can serve every module of a build.
    """

    def __init__(self, logger: logging.Logger | None = None, log_properties: bool = True) -> None:
        self._logger = logger or logging.getLogger("enterprise_build.listeners.logging")
        self._log_properties = log_properties
        self._starts: dict[str, list[float]] = {}

    def before(self, module: Module, owner: str | None) -> None:
        self._starts.setdefault(module.name, []).append(time.time())
        extra = {"module_name": module.name, "convention_id": owner}
        if self._log_properties:
            extra["properties"] = redact_properties(module.properties)
        self._logger.info(f"[{module.name}] START {owner or '<module>'}", extra=extra)

    def after(self, module: Module, owner: str | None) -> None:
        duration_ms = self._elapsed_ms(module)
        self._logger.info(
            f"[{module.name}] END {owner or '<module>'} ({duration_ms:.2f}ms)",
            extra={"module_name": module.name, "convention_id": owner, "duration_ms": duration_ms},
        )

    def on_error(self, module: Module, owner: str | None, error: Exception) -> None:
        duration_ms = self._elapsed_ms(module)
        self._logger.error(
            f"[{module.name}] ERROR {owner or '<module>'}: {error}",
            extra={
                "module_name": module.name,
                "convention_id": owner,
                "duration_ms": duration_ms,
                "error": str(error),
            },
        )

    def _elapsed_ms(self, module: Module) -> float:
        starts = self._starts.get(module.name)
        start = starts.pop() if starts else time.time()
        if not starts:
            self._starts.pop(module.name, None)
        return (time.time() - start) * 1000
