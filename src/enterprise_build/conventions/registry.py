"""Catalog of conventions available to modules."""

from __future__ import annotations

import logging
import threading

from enterprise_build.conventions.base import Convention
from enterprise_build.errors import ConventionNotFoundError, InvalidInputError

logger = logging.getLogger(__name__)

__all__ = ["ConventionRegistry", "default_registry"]


class ConventionRegistry:
    """Catalog of convention instances keyed by id."""

    def __init__(self, conventions: list[Convention] | None = None) -> None:
        self._conventions: dict[str, Convention] = {}
        self._lock = threading.RLock()
        for convention in conventions or []:
            self.register(convention)

    def register(self, convention: Convention) -> None:
        """Add a convention to the catalog.

        Raises:
            InvalidInputError: If the id is empty or already registered.
        """
        if not convention.id:
            raise InvalidInputError(message=f"{type(convention).__name__} has no id")
        with self._lock:
            if convention.id in self._conventions:
                raise InvalidInputError(message=f"Convention already exists: {convention.id}")
            self._conventions[convention.id] = convention
        logger.debug("Registered convention '%s'", convention.id)

    def get(self, convention_id: str) -> Convention:
        """Look up a convention by id.

        Raises:
            ConventionNotFoundError: If no convention has that id.
        """
        with self._lock:
            convention = self._conventions.get(convention_id)
        if convention is None:
            raise ConventionNotFoundError(convention_id=convention_id)
        return convention

    def has(self, convention_id: str) -> bool:
        with self._lock:
            return convention_id in self._conventions

    @property
    def ids(self) -> list[str]:
        """Registered convention ids in registration order."""
        with self._lock:
            return list(self._conventions)


def default_registry() -> ConventionRegistry:
    """Return a registry holding the built-in Enterprise conventions."""
    from enterprise_build.conventions.java import JavaConventions
    from enterprise_build.conventions.platform import PlatformConventions
    from enterprise_build.conventions.publishing import PublishingConventions
    from enterprise_build.conventions.shadow import ShadowConventions

    return ConventionRegistry(
        [
            JavaConventions(),
            ShadowConventions(),
            PlatformConventions(),
            PublishingConventions(),
        ]
    )
