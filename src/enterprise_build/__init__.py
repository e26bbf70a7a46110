"""enterprise_build - Declarative convention composition for multi-platform builds."""

from __future__ import annotations

# Core
from enterprise_build.build import Build, BuildResult
from enterprise_build.module import DeclaredDependency, DependencySet, Module, ModuleState

# Model
from enterprise_build.dependency import MAVEN_CENTRAL, MAVEN_LOCAL, Dependency, Repository, parse_notation
from enterprise_build.libraries import LIBRARIES, Lamp
from enterprise_build.repositories import RepositorySet
from enterprise_build.targets import BUKKIT, TARGETS, Target, get_target
from enterprise_build.publication import Artifact, PomMetadata, Publication, Signature
from enterprise_build.tasks import Task, TaskContainer

# Conventions
from enterprise_build.conventions import (
    Convention,
    ConventionRegistry,
    JavaConventions,
    MergeInstruction,
    PlatformConventions,
    PublishingConventions,
    Requirement,
    ShadowConventions,
    default_registry,
)

# Config
from enterprise_build.config import Config
from enterprise_build.script import load_build_script

# Signing
from enterprise_build.signing import HmacSigningBackend, SigningBackend

# Listeners
from enterprise_build.listeners import FinalizeListener, ListenerManager, LoggingListener

# Errors
from enterprise_build.errors import (
    AlreadyFinalizedError,
    BuildError,
    CircularDependencyError,
    ConfigError,
    ConventionNotFoundError,
    ErrorCodes,
    InvalidSigningCredentialError,
    MissingDescriptionError,
    MissingPrerequisiteError,
    MissingPropertyError,
    MissingTargetError,
    RepositoryConflictError,
)

__version__ = "2.0.0"

__all__ = [
    # Core
    "Build",
    "BuildResult",
    "Module",
    "ModuleState",
    "DeclaredDependency",
    "DependencySet",
    # Model
    "Dependency",
    "Repository",
    "RepositorySet",
    "MAVEN_CENTRAL",
    "MAVEN_LOCAL",
    "parse_notation",
    "Target",
    "BUKKIT",
    "TARGETS",
    "get_target",
    "Lamp",
    "LIBRARIES",
    "Artifact",
    "PomMetadata",
    "Publication",
    "Signature",
    "Task",
    "TaskContainer",
    # Conventions
    "Convention",
    "ConventionRegistry",
    "Requirement",
    "JavaConventions",
    "PlatformConventions",
    "ShadowConventions",
    "PublishingConventions",
    "MergeInstruction",
    "default_registry",
    # Config
    "Config",
    "load_build_script",
    # Signing
    "SigningBackend",
    "HmacSigningBackend",
    # Listeners
    "FinalizeListener",
    "ListenerManager",
    "LoggingListener",
    # Errors
    "ErrorCodes",
    "BuildError",
    "ConfigError",
    "ConventionNotFoundError",
    "MissingPrerequisiteError",
    "AlreadyFinalizedError",
    "CircularDependencyError",
    "MissingTargetError",
    "MissingDescriptionError",
    "MissingPropertyError",
    "InvalidSigningCredentialError",
    "RepositoryConflictError",
]
