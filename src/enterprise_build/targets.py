"""Target platforms a module can be built against."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from enterprise_build.dependency import Dependency, Repository
from enterprise_build.errors import InvalidInputError, UnknownTargetError

__all__ = ["Target", "BUKKIT", "TARGETS", "get_target"]


@dataclass(frozen=True)
class Target:
    """A target platform of the project.

    Attributes:
        name: The name of the target platform (used for programmatic access).
        dependency: The primary API dependency of the platform.
    """

    name: str
    dependency: Dependency

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidInputError(message="Target name must be a non-empty string")
        if not isinstance(self.dependency, Dependency):
            raise InvalidInputError(message=f"Target '{self.name}' requires a Dependency")


BUKKIT = Target(
    "Bukkit",
    Dependency(
        "org.spigotmc",
        "spigot-api",
        "1.20.2-R0.1-SNAPSHOT",
        repository=Repository(
            name="spigotmc",
            url="https://hub.spigotmc.org/nexus/content/repositories/snapshots/",
        ),
    ),
)

TARGETS: Mapping[str, Target] = MappingProxyType({BUKKIT.name: BUKKIT})


def get_target(name: str, targets: Mapping[str, Target] = TARGETS) -> Target:
    """Look up a target by name, ignoring case.

    Raises:
        UnknownTargetError: If no target has that name.
    """
    if name in targets:
        return targets[name]
    folded = name.casefold()
    for key, target in targets.items():
        if key.casefold() == folded:
            return target
    raise UnknownTargetError(name=name, known=sorted(targets))
