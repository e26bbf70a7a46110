"""Third-party libraries used by the Enterprise modules."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from enterprise_build.dependency import Dependency, Repository
from enterprise_build.errors import InvalidInputError

__all__ = ["Lamp", "JETBRAINS_ANNOTATIONS", "VAULT_API", "JITPACK_DEPS", "LIBRARIES", "get_library"]


class Lamp:
    """Lamp command framework dependencies."""

    GROUP = "com.github.Revxrsal.Lamp"
    VERSION = "3.1.7"
    REPOSITORY = Repository(
        name="jitpack-lamp",
        url="https://jitpack.io",
        include_groups=(GROUP,),
    )

    COMMON = Dependency(GROUP, "common", VERSION, repository=REPOSITORY)
    BUKKIT = Dependency(GROUP, "bukkit", VERSION, repository=REPOSITORY)


JETBRAINS_ANNOTATIONS = Dependency("org.jetbrains", "annotations", "24.0.1")

# jitpack restricted to Vault and Lamp, as the plugin module declares it
JITPACK_DEPS = Repository(
    name="jitpack-deps",
    url="https://jitpack.io",
    include_groups=(Lamp.GROUP,),
    include_modules=("com.github.MilkBowl:VaultAPI",),
)

VAULT_API = Dependency("com.github.MilkBowl", "VaultAPI", "1.7.1", repository=JITPACK_DEPS)

LIBRARIES: Mapping[str, Dependency] = MappingProxyType(
    {
        "lamp.common": Lamp.COMMON,
        "lamp.bukkit": Lamp.BUKKIT,
        "jetbrains.annotations": JETBRAINS_ANNOTATIONS,
        "vault.api": VAULT_API,
    }
)


def get_library(alias: str) -> Dependency:
    """Resolve a library alias such as ``"lamp.common"``.

    Raises:
        InvalidInputError: If the alias is unknown.
    """
    try:
        return LIBRARIES[alias]
    except KeyError:
        raise InvalidInputError(
            message=f"Unknown library alias '{alias}'. Known aliases: {', '.join(sorted(LIBRARIES))}"
        ) from None
