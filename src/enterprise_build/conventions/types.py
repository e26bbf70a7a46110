"""Convention types: Requirement, DeferredAction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from enterprise_build.module import Module

__all__ = ["Requirement", "DeferredAction"]


@dataclass(frozen=True)
class Requirement:
    """A prerequisite of a convention.

    A required prerequisite must already be applied when the dependent
    convention is applied. An optional one only orders finalization: if it is
    applied, its deferred actions run first.
    """

    convention_id: str
    optional: bool = False


@dataclass(frozen=True)
class DeferredAction:
    """An action registered to run when its module is finalized."""

    owner: str | None
    action: Callable[[Module], None]
    sequence: int
