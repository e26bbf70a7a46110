"""Dependency descriptors and Maven repository definitions.

A :class:`Dependency` is an immutable coordinate plus an optional
repository-registration action. The action is only invoked when a module
actually needs the dependency (see the platform convention), never at
construction time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from enterprise_build.errors import InvalidInputError
from enterprise_build.utils.pattern import match_any

if TYPE_CHECKING:
    from enterprise_build.repositories import RepositorySet

__all__ = [
    "Dependency",
    "Repository",
    "RepositoryRegistration",
    "MAVEN_CENTRAL",
    "MAVEN_LOCAL",
    "parse_notation",
]

RepositoryRegistration = Callable[["RepositorySet"], None]


@dataclass(frozen=True)
class Repository:
    """A named Maven repository with optional content filters.

    Attributes:
        name: Unique repository name; the de-duplication key.
        url: Repository base URL.
        include_groups: Group ids (wildcards allowed) this repository may serve.
        include_modules: ``group:artifact`` pairs this repository may serve.

    With no filters the repository serves everything. A ``Repository`` is a
    valid registration action: calling it adds it to a repository set.
    """

    name: str
    url: str
    include_groups: tuple[str, ...] = ()
    include_modules: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidInputError(message="Repository name must be a non-empty string")
        if not self.url:
            raise InvalidInputError(message=f"Repository '{self.name}' must have a url")

    def __call__(self, repositories: RepositorySet) -> None:
        repositories.add(self)

    @property
    def filtered(self) -> bool:
        return bool(self.include_groups or self.include_modules)

    def allows(self, notation: str) -> bool:
        """Return True if the content filters admit the given coordinate."""
        if not self.filtered:
            return True
        parts = notation.split(":")
        if len(parts) < 2:
            return False
        group, artifact = parts[0], parts[1]
        if match_any(self.include_groups, group):
            return True
        return match_any(self.include_modules, f"{group}:{artifact}")


MAVEN_CENTRAL = Repository(name="MavenRepo", url="https://repo.maven.apache.org/maven2/")
MAVEN_LOCAL = Repository(name="MavenLocal", url="file:~/.m2/repository/")


@dataclass(frozen=True)
class Dependency:
    """Static information about a Maven dependency and its repository.

    Attributes:
        group_id: The groupId of the dependency.
        artifact_id: The artifactId of the dependency.
        version: The version of the dependency.
        classifier: The classifier of the dependency, if any.
        repository: Action registering the repository for the dependency, if necessary.
        notation: ``group:artifact:version[:classifier]``, derived at construction.
    """

    group_id: str
    artifact_id: str
    version: str
    classifier: str | None = None
    repository: RepositoryRegistration | None = field(default=None, compare=False, repr=False)
    notation: str = field(init=False)

    def __post_init__(self) -> None:
        for attr in ("group_id", "artifact_id", "version"):
            value = getattr(self, attr)
            if not value or ":" in value:
                raise InvalidInputError(message=f"Invalid {attr} for dependency: {value!r}")
        if self.classifier is not None and (not self.classifier or ":" in self.classifier):
            raise InvalidInputError(message=f"Invalid classifier for dependency: {self.classifier!r}")
        suffix = f":{self.classifier}" if self.classifier else ""
        object.__setattr__(self, "notation", f"{self.group_id}:{self.artifact_id}:{self.version}{suffix}")

    @property
    def module(self) -> str:
        """The ``group:artifact`` pair without version."""
        return f"{self.group_id}:{self.artifact_id}"

    def __str__(self) -> str:
        return self.notation


def parse_notation(text: str, repository: RepositoryRegistration | None = None) -> Dependency:
    """Parse ``group:artifact:version[:classifier]`` into a Dependency.

    Raises:
        InvalidInputError: If the text does not have three or four parts.
    """
    parts = text.strip().split(":")
    if len(parts) not in (3, 4):
        raise InvalidInputError(message=f"Invalid dependency notation: '{text}'")
    classifier = parts[3] if len(parts) == 4 else None
    return Dependency(parts[0], parts[1], parts[2], classifier=classifier, repository=repository)
