"""Name-deduplicated repository sets."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterator

from enterprise_build.dependency import Repository
from enterprise_build.errors import RepositoryConflictError

logger = logging.getLogger(__name__)

__all__ = ["RepositorySet"]


class RepositorySet:
    """Additive, name-deduplicated set of repositories.

    Re-adding a repository whose name is already present is a no-op when the
    definition is identical and raises :class:`RepositoryConflictError` when
    it differs. When ``parent`` is given (the build-wide catalog) every
    addition is also recorded there first, so one name always means one
    repository across all modules.

    ``guard``, when given, is called with a description of each addition
    and may refuse it by raising.

    Thread safety:
        Internally synchronized. ``add`` may be called concurrently from
        several modules against the same parent.
    """

    def __init__(
        self,
        parent: RepositorySet | None = None,
        name: str = "repositories",
        guard: Callable[[str], None] | None = None,
    ) -> None:
        self._name = name
        self._parent = parent
        self._guard = guard
        self._entries: dict[str, Repository] = {}
        self._lock = threading.RLock()

    def add(self, repository: Repository) -> bool:
        """Add a repository. Returns True if it was newly added to this set.

        Raises:
            RepositoryConflictError: If the name is taken by a different definition.
            AlreadyFinalizedError: If ``guard`` rejects the change (owning module finalized).
        """
        if self._guard is not None:
            self._guard(f"add repository '{repository.name}'")
        if self._parent is not None:
            self._parent.add(repository)

        with self._lock:
            existing = self._entries.get(repository.name)
            if existing is not None:
                if existing != repository:
                    raise RepositoryConflictError(
                        name=repository.name,
                        existing_url=existing.url,
                        new_url=repository.url,
                    )
                logger.debug("Repository '%s' already registered in %s", repository.name, self._name)
                return False
            self._entries[repository.name] = repository

        logger.debug("Registered repository '%s' (%s) in %s", repository.name, repository.url, self._name)
        return True

    def get(self, name: str) -> Repository | None:
        with self._lock:
            return self._entries.get(name)

    @property
    def names(self) -> list[str]:
        """Repository names in registration order."""
        with self._lock:
            return list(self._entries)

    def candidates_for(self, notation: str) -> list[Repository]:
        """Repositories whose content filters admit the coordinate, in registration order."""
        with self._lock:
            entries = list(self._entries.values())
        return [repo for repo in entries if repo.allows(notation)]

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[Repository]:
        with self._lock:
            items = list(self._entries.values())
        return iter(items)

    def __repr__(self) -> str:
        return f"RepositorySet(name={self._name!r}, entries={self.names!r})"
