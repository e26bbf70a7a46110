"""Root build: module inclusion and per-module finalization with failure isolation."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from enterprise_build.conventions.registry import ConventionRegistry, default_registry
from enterprise_build.errors import InvalidInputError
from enterprise_build.listeners import FinalizeListener, ListenerManager
from enterprise_build.module import Module
from enterprise_build.repositories import RepositorySet
from enterprise_build.signing import HmacSigningBackend, SigningBackend

if TYPE_CHECKING:
    from enterprise_build.config import Config

logger = logging.getLogger(__name__)

__all__ = ["Build", "BuildResult", "DEFAULT_ENV_PREFIX"]

DEFAULT_ENV_PREFIX = "ENTERPRISE_"


@dataclass
class BuildResult:
    """Outcome of finalizing every module of a build."""

    finalized: list[str] = field(default_factory=list)
    failures: dict[str, Exception] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures

    def raise_for_failures(self) -> None:
        """Re-raise the first module failure, unchanged."""
        for error in self.failures.values():
            raise error


class Build:
    """The root project: owns the modules, the shared repository catalog and collaborators."""

    def __init__(
        self,
        name: str,
        description: str | None = None,
        version: str = "unspecified",
        group: str | None = None,
        properties: dict[str, Any] | None = None,
        registry: ConventionRegistry | None = None,
        signer: SigningBackend | None = None,
        listeners: list[FinalizeListener] | None = None,
        env_prefix: str = DEFAULT_ENV_PREFIX,
    ) -> None:
        """Initialize the Build.

        Args:
            name: Root project name.
            description: Root description; modules that publish must override it.
            version: Default version of every module.
            group: Default Maven group of every module.
            properties: Build-wide properties consulted after module properties.
            registry: Convention catalog. Defaults to the built-in conventions.
            signer: Backend used by the publishing convention to sign artifacts.
            listeners: Finalization listeners shared by all modules.
            env_prefix: Prefix of environment variables read as properties.
        """
        if not name:
            raise InvalidInputError(message="Build name must be a non-empty string")
        self.name = name
        self.description = description
        self.version = version
        self.group = group
        self.properties: dict[str, Any] = dict(properties or {})
        self.registry = registry if registry is not None else default_registry()
        self.signer: SigningBackend = signer if signer is not None else HmacSigningBackend()
        self.listeners = ListenerManager(listeners)
        self.env_prefix = env_prefix
        self.repositories = RepositorySet(name=f"{name} repositories")
        self._modules: dict[str, Module] = {}
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: Config, **kwargs: Any) -> Build:
        """Create a Build from the ``project`` block, ``properties`` and ``env_prefix`` of a Config."""
        return cls(
            name=config.get("project.name", "root"),
            description=config.get("project.description"),
            version=str(config.get("project.version", "unspecified")),
            group=config.get("project.group"),
            properties=config.get("properties", {}) or {},
            env_prefix=config.get("env_prefix", DEFAULT_ENV_PREFIX),
            **kwargs,
        )

    # ----- Modules -----

    def module(
        self,
        name: str,
        path: str | None = None,
        description: str | None = None,
        version: str | None = None,
        properties: dict[str, Any] | None = None,
    ) -> Module:
        """Include a new module.

        Raises:
            InvalidInputError: If a module with that name is already included.
        """
        key = name.lstrip(":")
        with self._lock:
            if key in self._modules:
                raise InvalidInputError(message=f"Module already included: {key}")
            module = Module(
                name=key,
                build=self,
                path=path,
                description=description,
                version=version,
                properties=properties,
            )
            self._modules[key] = module
        logger.debug("Included module '%s' (%s)", key, module.path)
        return module

    def get(self, name: str) -> Module:
        """Return an included module by name or ``:name`` path.

        Raises:
            InvalidInputError: If no such module is included.
        """
        with self._lock:
            module = self._modules.get(name.lstrip(":"))
        if module is None:
            raise InvalidInputError(message=f"Module not included: {name}")
        return module

    def has_module(self, name: str) -> bool:
        with self._lock:
            return name.lstrip(":") in self._modules

    @property
    def modules(self) -> list[Module]:
        """Included modules in inclusion order."""
        with self._lock:
            return list(self._modules.values())

    # ----- Finalization -----

    def finalize(self) -> BuildResult:
        """Finalize every module not yet finalized, in inclusion order.

        A failing module does not stop its siblings: its exception is
        recorded unchanged in the result and the next module is finalized.
        """
        result = BuildResult()
        for module in self.modules:
            if module.is_finalized:
                continue
            try:
                module.finalize()
            except Exception as e:
                logger.error("Module '%s' failed to finalize: %s", module.name, e)
                result.failures[module.name] = e
                continue
            result.finalized.append(module.name)

        if result.failures:
            logger.error(
                "Build '%s': %d of %d modules failed to finalize",
                self.name,
                len(result.failures),
                len(result.failures) + len(result.finalized),
            )
        else:
            logger.info("Build '%s': finalized %d modules", self.name, len(result.finalized))
        return result

    def __repr__(self) -> str:
        return f"Build(name={self.name!r}, modules={[m.name for m in self.modules]!r})"
