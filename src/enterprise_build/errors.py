"""Error hierarchy for the enterprise build layer."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "BuildError",
    "ConfigNotFoundError",
    "ConfigError",
    "InvalidInputError",
    "ConventionNotFoundError",
    "MissingPrerequisiteError",
    "AlreadyFinalizedError",
    "CircularDependencyError",
    "MissingTargetError",
    "UnknownTargetError",
    "MissingDescriptionError",
    "MissingPropertyError",
    "InvalidSigningCredentialError",
    "RepositoryConflictError",
    "TaskNotFoundError",
    "ErrorCodes",
]


class BuildError(Exception):
    """Base error for all build configuration errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(BuildError):
    """Raised when a configuration or build script file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(BuildError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class InvalidInputError(BuildError):
    """Raised for invalid input."""

    def __init__(self, message: str = "Invalid input", **kwargs: Any) -> None:
        super().__init__(code="GENERAL_INVALID_INPUT", message=message, **kwargs)


class ConventionNotFoundError(BuildError):
    """Raised when a convention id is not known to the registry."""

    def __init__(self, convention_id: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONVENTION_NOT_FOUND",
            message=f"Convention not found: {convention_id}",
            details={"convention_id": convention_id},
            **kwargs,
        )

    @property
    def convention_id(self) -> str:
        return self.details["convention_id"]


class MissingPrerequisiteError(BuildError):
    """Raised when a convention is applied before a convention it requires."""

    def __init__(self, convention_id: str, missing_id: str, module_name: str | None = None, **kwargs: Any) -> None:
        where = f" on module '{module_name}'" if module_name else ""
        super().__init__(
            code="MISSING_PREREQUISITE",
            message=f"Convention '{convention_id}' requires '{missing_id}' to be applied first{where}",
            details={"convention_id": convention_id, "missing_id": missing_id, "module_name": module_name},
            **kwargs,
        )

    @property
    def missing_id(self) -> str:
        """The prerequisite convention id that was not applied."""
        return self.details["missing_id"]


class AlreadyFinalizedError(BuildError):
    """Raised when a module is mutated or finalized after finalization has run."""

    def __init__(self, module_name: str, operation: str, **kwargs: Any) -> None:
        super().__init__(
            code="ALREADY_FINALIZED",
            message=f"Module '{module_name}' is already finalized; cannot {operation}",
            details={"module_name": module_name, "operation": operation},
            **kwargs,
        )


class CircularDependencyError(BuildError):
    """Raised when circular prerequisites are detected among conventions or tasks."""

    def __init__(self, cycle_path: list[str], **kwargs: Any) -> None:
        super().__init__(
            code="CIRCULAR_DEPENDENCY",
            message=f"Circular dependency detected: {' -> '.join(cycle_path)}",
            details={"cycle_path": cycle_path},
            **kwargs,
        )


class MissingTargetError(BuildError):
    """Raised when the platform convention is finalized without a selected target."""

    def __init__(self, module_name: str, property_name: str = "platform", **kwargs: Any) -> None:
        super().__init__(
            code="MISSING_TARGET",
            message=(
                f"Module '{module_name}' applies the platform convention but property "
                f"'{property_name}' does not select a target"
            ),
            details={"module_name": module_name, "property_name": property_name},
            **kwargs,
        )


class UnknownTargetError(BuildError):
    """Raised when a target name does not match any declared platform."""

    def __init__(self, name: str, known: list[str], **kwargs: Any) -> None:
        super().__init__(
            code="UNKNOWN_TARGET",
            message=f"Unknown target '{name}'. Known targets: {', '.join(known) or 'none'}",
            details={"name": name, "known": known},
            **kwargs,
        )


class MissingDescriptionError(BuildError):
    """Raised when publishing is finalized with an unset or placeholder description."""

    def __init__(self, module_name: str, module_path: str | None = None, **kwargs: Any) -> None:
        location = module_path or module_name
        super().__init__(
            code="MISSING_DESCRIPTION",
            message=f"Set the module description for '{location}' before activating publishing.",
            details={"module_name": module_name, "module_path": module_path},
            **kwargs,
        )


class MissingPropertyError(BuildError):
    """Raised when a required module property is absent."""

    def __init__(self, module_name: str, property_name: str, **kwargs: Any) -> None:
        super().__init__(
            code="MISSING_PROPERTY",
            message=f"Module '{module_name}' requires property '{property_name}'",
            details={"module_name": module_name, "property_name": property_name},
            **kwargs,
        )

    @property
    def property_name(self) -> str:
        return self.details["property_name"]


class InvalidSigningCredentialError(BuildError):
    """Raised when signing is requested with malformed or partial credentials."""

    def __init__(self, reason: str, property_name: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            code="INVALID_SIGNING_CREDENTIAL",
            message=f"Invalid signing credential: {reason}",
            details={"reason": reason, "property_name": property_name},
            **kwargs,
        )


class RepositoryConflictError(BuildError):
    """Raised when a repository name is re-registered with a different definition."""

    def __init__(self, name: str, existing_url: str, new_url: str, **kwargs: Any) -> None:
        super().__init__(
            code="REPOSITORY_CONFLICT",
            message=f"Repository '{name}' is already registered for {existing_url}, refusing {new_url}",
            details={"name": name, "existing_url": existing_url, "new_url": new_url},
            **kwargs,
        )


class TaskNotFoundError(BuildError):
    """Raised when a task name is not registered on a module."""

    def __init__(self, module_name: str, task_name: str, **kwargs: Any) -> None:
        super().__init__(
            code="TASK_NOT_FOUND",
            message=f"Task '{task_name}' not found in module '{module_name}'",
            details={"module_name": module_name, "task_name": task_name},
            **kwargs,
        )


class ErrorCodes:
    """All build error codes as constants.

    Use these instead of hardcoding error code strings.

    Example:
        if error.code == ErrorCodes.MISSING_TARGET:
            select_platform()
    """

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    GENERAL_INVALID_INPUT = "GENERAL_INVALID_INPUT"
    CONVENTION_NOT_FOUND = "CONVENTION_NOT_FOUND"
    MISSING_PREREQUISITE = "MISSING_PREREQUISITE"
    ALREADY_FINALIZED = "ALREADY_FINALIZED"
    CIRCULAR_DEPENDENCY = "CIRCULAR_DEPENDENCY"
    MISSING_TARGET = "MISSING_TARGET"
    UNKNOWN_TARGET = "UNKNOWN_TARGET"
    MISSING_DESCRIPTION = "MISSING_DESCRIPTION"
    MISSING_PROPERTY = "MISSING_PROPERTY"
    INVALID_SIGNING_CREDENTIAL = "INVALID_SIGNING_CREDENTIAL"
    REPOSITORY_CONFLICT = "REPOSITORY_CONFLICT"
    TASK_NOT_FOUND = "TASK_NOT_FOUND"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
