"""Build module: the per-module composition root conventions are applied to."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterator

from enterprise_build.config import redact_properties
from enterprise_build.conventions.base import Convention
from enterprise_build.conventions.ordering import resolve_order
from enterprise_build.conventions.types import DeferredAction
from enterprise_build.dependency import Dependency
from enterprise_build.errors import (
    AlreadyFinalizedError,
    ConfigError,
    InvalidInputError,
    MissingPrerequisiteError,
)
from enterprise_build.listeners import ListenerManager
from enterprise_build.publication import Artifact, Publication
from enterprise_build.repositories import RepositorySet
from enterprise_build.targets import Target
from enterprise_build.tasks import TaskContainer

if TYPE_CHECKING:
    from enterprise_build.build import Build
    from enterprise_build.conventions.registry import ConventionRegistry

logger = logging.getLogger(__name__)

__all__ = [
    "Module",
    "ModuleState",
    "DeclaredDependency",
    "DependencySet",
    "ToolchainSettings",
    "ResourceSpec",
    "CONFIGURATIONS",
    "RUNTIME_CONFIGURATIONS",
]

CONFIGURATIONS: tuple[str, ...] = ("api", "implementation", "compileOnly", "runtimeOnly")
RUNTIME_CONFIGURATIONS: tuple[str, ...] = ("api", "implementation", "runtimeOnly")


class ModuleState(str, Enum):
    UNAPPLIED = "unapplied"
    REGISTERED = "registered"
    FINALIZED = "finalized"


@dataclass(frozen=True)
class DeclaredDependency:
    """One dependency declaration of a module.

    ``notation`` is either a Maven coordinate or a project path starting
    with ``:``. ``exclude`` holds ``group:module`` pairs removed from the
    dependency's transitive closure.
    """

    configuration: str
    notation: str
    exclude: tuple[str, ...] = ()

    @property
    def is_project(self) -> bool:
        return self.notation.startswith(":")


class DependencySet:
    """Dependency declarations grouped by configuration, in declaration order."""

    def __init__(self, guard: Callable[[str], None] | None = None) -> None:
        self._entries: list[DeclaredDependency] = []
        self._guard = guard

    def add(
        self,
        configuration: str,
        dependency: str | Dependency,
        exclude: tuple[str, ...] | list[str] = (),
    ) -> DeclaredDependency:
        """Declare a dependency. Declaring the same notation twice in a configuration is a no-op.

        A :class:`Dependency` with a repository action does not register that
        repository here; registration stays explicit.

        Raises:
            InvalidInputError: If the configuration is unknown or the notation empty.
            AlreadyFinalizedError: If the owning module is finalized.
        """
        if self._guard is not None:
            self._guard(f"add a dependency to '{configuration}'")
        if configuration not in CONFIGURATIONS:
            raise InvalidInputError(
                message=f"Unknown configuration '{configuration}'. Expected one of: {', '.join(CONFIGURATIONS)}"
            )
        notation = dependency.notation if isinstance(dependency, Dependency) else str(dependency).strip()
        if not notation:
            raise InvalidInputError(message="Dependency notation must be a non-empty string")
        for entry in self._entries:
            if entry.configuration == configuration and entry.notation == notation:
                return entry
        declared = DeclaredDependency(configuration=configuration, notation=notation, exclude=tuple(exclude))
        self._entries.append(declared)
        return declared

    def of(self, configuration: str) -> list[DeclaredDependency]:
        return [e for e in self._entries if e.configuration == configuration]

    def runtime(self) -> list[DeclaredDependency]:
        """Declarations that end up on the runtime classpath."""
        return [e for e in self._entries if e.configuration in RUNTIME_CONFIGURATIONS]

    def projects(self) -> list[DeclaredDependency]:
        return [e for e in self._entries if e.is_project]

    def notations(self, configuration: str | None = None) -> list[str]:
        return [e.notation for e in self._entries if configuration is None or e.configuration == configuration]

    def __iter__(self) -> Iterator[DeclaredDependency]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class ToolchainSettings:
    """Compiler settings passed through verbatim to the toolchain."""

    language_version: int | None = None
    encoding: str | None = None
    javadoc_encoding: str | None = None


@dataclass
class ResourceSpec:
    """Resource files to template and the property keys offered to them."""

    patterns: list[str] = field(default_factory=list)
    property_keys: list[str] = field(default_factory=list)


class Module:
    """A build module and its per-module convention state machine.

    State moves ``UNAPPLIED -> REGISTERED`` on the first convention applied
    and ``-> FINALIZED`` when :meth:`finalize` runs. Finalization happens
    exactly once; afterwards the module no longer accepts conventions,
    deferred actions or property changes.
    """

    def __init__(
        self,
        name: str,
        build: Build | None = None,
        path: str | None = None,
        description: str | None = None,
        version: str | None = None,
        group: str | None = None,
        properties: dict[str, Any] | None = None,
    ) -> None:
        if not name:
            raise InvalidInputError(message="Module name must be a non-empty string")
        self.name = name
        self.build = build
        self.path = path or name
        self.description = description
        self.version = version or (build.version if build is not None else "unspecified")
        self.group = group or (build.group if build is not None else None)

        self._properties: dict[str, Any] = dict(properties or {})
        self.extensions: dict[str, Any] = {}
        self.repositories = RepositorySet(
            parent=build.repositories if build is not None else None,
            name=f"{name} repositories",
            guard=self.check_mutable,
        )
        self.dependencies = DependencySet(guard=self.check_mutable)
        self.tasks = TaskContainer(name)
        self.toolchain = ToolchainSettings()
        self.resources = ResourceSpec()
        self.artifacts: dict[str | None, Artifact] = {}
        self.primary_artifact: Artifact | None = None
        self.publications: dict[str, Publication] = {}
        self.failure: Exception | None = None

        self._applied: dict[str, Convention] = {}
        self._deferred: list[DeferredAction] = []
        self._sequence = 0
        self._state = ModuleState.UNAPPLIED
        self._running = False

    # ----- State -----

    @property
    def state(self) -> ModuleState:
        return self._state

    @property
    def is_finalized(self) -> bool:
        return self._state is ModuleState.FINALIZED

    @property
    def root_description(self) -> str | None:
        """The root project's description, the placeholder modules must override."""
        return self.build.description if self.build is not None else None

    @property
    def applied_conventions(self) -> list[str]:
        """Applied convention ids in application order."""
        return list(self._applied)

    def has_convention(self, convention_id: str) -> bool:
        return convention_id in self._applied

    # ----- Properties -----

    @property
    def properties(self) -> dict[str, Any]:
        """Snapshot of the module-scoped properties."""
        return dict(self._properties)

    def set_property(self, name: str, value: Any) -> None:
        """Set a module-scoped property.

        Raises:
            AlreadyFinalizedError: If finalization has completed.
        """
        self.check_mutable(f"set property '{name}'")
        self._properties[name] = value

    def find_property(self, name: str) -> Any:
        """Look up a property: module first, then build, then the environment.

        The environment variable consulted is ``<env_prefix><name>`` where the
        prefix comes from the build. Returns None when absent everywhere.
        """
        if name in self._properties:
            return self._properties[name]
        if self.build is not None:
            if name in self.build.properties:
                return self.build.properties[name]
            env_value = os.environ.get(f"{self.build.env_prefix}{name}")
            if env_value is not None:
                return env_value
        return None

    def check_mutable(self, operation: str) -> None:
        """Reject ``operation`` once finalization has completed.

        Deferred actions still mutate the module while finalization runs.

        Raises:
            AlreadyFinalizedError: If the module is finalized and not finalizing.
        """
        if self.is_finalized and not self._running:
            raise AlreadyFinalizedError(module_name=self.name, operation=operation)

    def has_property(self, name: str) -> bool:
        return self.find_property(name) is not None

    # ----- Extensions -----

    def add_extension(self, name: str, extension: Any) -> Any:
        """Attach a convention's extension object; an existing one is kept."""
        return self.extensions.setdefault(name, extension)

    def extension(self, name: str) -> Any:
        """Return a convention's extension object.

        Raises:
            ConfigError: If no applied convention provides it.
        """
        try:
            return self.extensions[name]
        except KeyError:
            raise ConfigError(
                message=f"Module '{self.name}' has no '{name}' extension; apply the convention that provides it"
            ) from None

    # ----- Convention application -----

    def apply(self, convention: Convention | str) -> bool:
        """Apply a convention (instance or registry id).

        Returns True if the convention was applied now, False if it was
        already applied (re-application is a silent no-op).

        Raises:
            AlreadyFinalizedError: If the module is finalized.
            ConventionNotFoundError: If an id is not in the registry.
            MissingPrerequisiteError: If a required convention is not applied yet.
        """
        convention_id = convention if isinstance(convention, str) else convention.id
        if self.is_finalized:
            raise AlreadyFinalizedError(module_name=self.name, operation=f"apply convention '{convention_id}'")
        if convention_id in self._applied:
            logger.debug("Module '%s': convention '%s' already applied", self.name, convention_id)
            return False
        if isinstance(convention, str):
            convention = self._registry().get(convention)

        for req in convention.requires:
            if not req.optional and req.convention_id not in self._applied:
                raise MissingPrerequisiteError(
                    convention_id=convention.id,
                    missing_id=req.convention_id,
                    module_name=self.name,
                )

        self._applied[convention.id] = convention
        try:
            convention.apply(self)
        except Exception:
            self._applied.pop(convention.id, None)
            self._deferred = [d for d in self._deferred if d.owner != convention.id]
            raise

        self._state = ModuleState.REGISTERED
        logger.debug("Module '%s': applied convention '%s'", self.name, convention.id)
        return True

    def after_evaluate(self, action: Callable[[Module], None], owner: str | None = None) -> None:
        """Register an action to run when the module is finalized.

        ``owner`` is the id of the convention registering the action; actions
        without an owner run after every convention's actions.

        Raises:
            AlreadyFinalizedError: If the module is finalized.
            InvalidInputError: If ``owner`` names a convention not applied to this module.
        """
        if self.is_finalized:
            raise AlreadyFinalizedError(module_name=self.name, operation="register a deferred action")
        if owner is not None and owner not in self._applied:
            raise InvalidInputError(message=f"Convention '{owner}' is not applied to module '{self.name}'")
        self._deferred.append(DeferredAction(owner=owner, action=action, sequence=self._sequence))
        self._sequence += 1

    def deferred_actions(self, owner: str | None = None) -> list[DeferredAction]:
        return [d for d in self._deferred if d.owner == owner]

    # ----- Finalization -----

    def finalization_order(self) -> list[str]:
        """Convention ids in the order their deferred actions will run."""
        entries = [(cid, list(conv.requires)) for cid, conv in self._applied.items()]
        return resolve_order(entries)

    def finalize(self) -> None:
        """Run every deferred action once, prerequisites first.

        Actions are grouped by owning convention and the groups run in
        :meth:`finalization_order`, then the module's own actions. The first
        failing action stops finalization and its exception propagates; the
        module stays finalized and records the error in ``failure``.

        Raises:
            AlreadyFinalizedError: If the module was already finalized.
        """
        if self.is_finalized:
            raise AlreadyFinalizedError(module_name=self.name, operation="finalize again")
        self._state = ModuleState.FINALIZED
        self._running = True
        listeners = self._listeners()
        try:
            for owner in [*self.finalization_order(), None]:
                actions = self.deferred_actions(owner)
                if not actions:
                    continue
                try:
                    listeners.notify_before(self, owner)
                    for deferred in actions:
                        deferred.action(self)
                except Exception as e:
                    listeners.notify_error(self, owner, e)
                    raise
                listeners.notify_after(self, owner)
            self._verify_project_references()
        except Exception as e:
            self.failure = e
            raise
        finally:
            self._running = False

        logger.info(
            "Module '%s' finalized with conventions: %s",
            self.name,
            ", ".join(self._applied) or "none",
        )

    def _verify_project_references(self) -> None:
        if self.build is None:
            return
        for declared in self.dependencies.projects():
            if not self.build.has_module(declared.notation):
                raise ConfigError(
                    message=f"Module '{self.name}' depends on project '{declared.notation}' which is not included"
                )

    # ----- Artifacts -----

    def add_artifact(self, artifact: Artifact, primary: bool = False) -> None:
        self.check_mutable(f"add artifact '{artifact.file_name}'")
        self.artifacts[artifact.classifier] = artifact
        if primary or self.primary_artifact is None:
            self.primary_artifact = artifact

    def template_properties(self) -> dict[str, Any]:
        """Values for the resource property keys, resolved against current state."""
        values: dict[str, Any] = {}
        for key in self.resources.property_keys:
            if key == "version":
                values[key] = self.version
            elif key == "description":
                values[key] = self.description
            elif key == "rootProject.description":
                values[key] = self.root_description
            else:
                values[key] = self.find_property(key)
        return values

    def snapshot(self) -> dict[str, Any]:
        """Plain-data view of the module for reporting. Sensitive properties are redacted."""
        return {
            "name": self.name,
            "path": self.path,
            "description": self.description,
            "version": self.version,
            "state": self._state.value,
            "conventions": self.applied_conventions,
            "properties": redact_properties(
                {k: (v.name if isinstance(v, Target) else v) for k, v in self._properties.items()}
            ),
            "repositories": self.repositories.names,
            "dependencies": [
                {"configuration": d.configuration, "notation": d.notation, "exclude": list(d.exclude)}
                for d in self.dependencies
            ],
            "tasks": {t.name: list(t.depends_on) for t in self.tasks},
            "artifacts": [a.model_dump() for a in self.artifacts.values()],
            "publications": {name: p.model_dump() for name, p in self.publications.items()},
        }

    # ----- Collaborators -----

    def _registry(self) -> ConventionRegistry:
        if self.build is not None:
            return self.build.registry
        from enterprise_build.conventions.registry import default_registry

        return default_registry()

    def _listeners(self) -> ListenerManager:
        if self.build is not None:
            return self.build.listeners
        return ListenerManager()

    def __repr__(self) -> str:
        return f"Module(name={self.name!r}, state={self._state.value!r})"
