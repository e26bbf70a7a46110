"""YAML build scripts: declarative module composition roots."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from enterprise_build.build import DEFAULT_ENV_PREFIX, Build
from enterprise_build.config import Config
from enterprise_build.dependency import Dependency, Repository
from enterprise_build.errors import ConfigError
from enterprise_build.libraries import get_library
from enterprise_build.module import Module
from enterprise_build.targets import get_target

logger = logging.getLogger(__name__)

__all__ = [
    "BuildScript",
    "ModuleScript",
    "DependencyScript",
    "RepositoryScript",
    "load_build_script",
    "configure_build",
]


class _ScriptModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class RepositoryScript(_ScriptModel):
    name: str
    url: str
    include_groups: list[str] = Field(default_factory=list)
    include_modules: list[str] = Field(default_factory=list)

    def to_repository(self) -> Repository:
        return Repository(
            name=self.name,
            url=self.url,
            include_groups=tuple(self.include_groups),
            include_modules=tuple(self.include_modules),
        )


class DependencyScript(_ScriptModel):
    """One dependency line: a coordinate, a ``:project`` path or a library alias."""

    configuration: str = "implementation"
    notation: str | None = None
    library: str | None = None
    exclude: list[str] = Field(default_factory=list)
    register_repository: bool = True

    @model_validator(mode="after")
    def _one_reference(self) -> DependencyScript:
        if (self.notation is None) == (self.library is None):
            raise ValueError("exactly one of 'notation' or 'library' must be set")
        return self

    def resolve(self) -> str | Dependency:
        if self.library is not None:
            return get_library(self.library)
        return self.notation or ""


class ShadowScript(_ScriptModel):
    classifier: str = "plugin"
    extension: str = "jar"
    include: list[str] = Field(default_factory=list)


class ResourcesScript(_ScriptModel):
    patterns: list[str] = Field(default_factory=list)
    properties: list[str] = Field(default_factory=list)


class PublishingScript(_ScriptModel):
    with_sources: bool = True
    with_javadoc: bool = True


class ModuleScript(_ScriptModel):
    name: str
    path: str | None = None
    description: str | None = None
    version: str | None = None
    conventions: list[str] = Field(default_factory=list)
    platform: str | None = None
    properties: dict[str, Any] = Field(default_factory=dict)
    repositories: list[RepositoryScript] = Field(default_factory=list)
    target_repositories: list[str] = Field(default_factory=list)
    dependencies: list[DependencyScript] = Field(default_factory=list)
    shadow: ShadowScript | None = None
    resources: ResourcesScript | None = None
    publishing: PublishingScript | None = None


class ProjectScript(_ScriptModel):
    name: str
    description: str | None = None
    version: str = "unspecified"
    group: str | None = None


class BuildScript(_ScriptModel):
    """Top-level schema of a build script file."""

    project: ProjectScript
    properties: dict[str, Any] = Field(default_factory=dict)
    env_prefix: str = DEFAULT_ENV_PREFIX
    modules: list[ModuleScript] = Field(default_factory=list)


def load_build_script(path: str | Path, **build_kwargs: Any) -> Build:
    """Load a YAML build script and return the configured, unfinalized Build.

    Raises:
        ConfigNotFoundError: If the file does not exist.
        ConfigError: If the YAML is invalid or does not match the schema.
    """
    config = Config.load(path)
    try:
        script = BuildScript.model_validate(config.as_dict())
    except ValidationError as e:
        raise ConfigError(message=f"Invalid build script {path}: {e}", cause=e) from e
    return configure_build(script, **build_kwargs)


def configure_build(script: BuildScript, **build_kwargs: Any) -> Build:
    """Create a Build from a validated script, applying conventions module by module."""
    build = Build(
        name=script.project.name,
        description=script.project.description,
        version=script.project.version,
        group=script.project.group,
        properties=script.properties,
        env_prefix=script.env_prefix,
        **build_kwargs,
    )
    for module_script in script.modules:
        _configure_module(build, module_script)
    logger.debug("Configured build '%s' with %d modules", build.name, len(build.modules))
    return build


def _configure_module(build: Build, script: ModuleScript) -> Module:
    module = build.module(
        script.name,
        path=script.path,
        description=script.description,
        version=script.version,
        properties=script.properties,
    )
    for convention_id in script.conventions:
        module.apply(convention_id)
    if script.platform is not None:
        module.set_property("platform", script.platform)

    for target_name in script.target_repositories:
        registration = get_target(target_name).dependency.repository
        if registration is not None:
            registration(module.repositories)
    for repository in script.repositories:
        repository.to_repository()(module.repositories)

    for dep in script.dependencies:
        resolved = dep.resolve()
        if isinstance(resolved, Dependency) and dep.register_repository and resolved.repository is not None:
            resolved.repository(module.repositories)
        module.dependencies.add(dep.configuration, resolved, exclude=dep.exclude)

    if script.shadow is not None:
        shadow = module.extension("shadow")
        shadow.classifier = script.shadow.classifier
        shadow.extension = script.shadow.extension
        for reference in script.shadow.include:
            shadow.include(get_library(reference[1:]) if reference.startswith("@") else reference)

    if script.publishing is not None:
        publishing = module.extension("publishing")
        publishing.with_sources = script.publishing.with_sources
        publishing.with_javadoc = script.publishing.with_javadoc

    if script.resources is not None:
        module.resources.patterns = list(script.resources.patterns)
        module.resources.property_keys = list(script.resources.properties)
    return module
