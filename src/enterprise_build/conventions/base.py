"""Convention base class."""

from __future__ import annotations

from typing import TYPE_CHECKING

from enterprise_build.conventions.types import Requirement

if TYPE_CHECKING:
    from enterprise_build.module import Module

__all__ = ["Convention"]


class Convention:
    """A named, composable unit of build configuration.

    Subclasses set ``id`` and ``requires`` and override :meth:`apply`. The
    apply step runs immediately when the convention is attached to a module
    and should stay cheap: anything that depends on the module's final
    configuration belongs in a deferred action registered with
    ``module.after_evaluate(action, owner=self.id)``.

    Conventions never reference each other directly. They observe each
    other only through the module state left behind by earlier deferred
    actions, in the order given by ``requires``.
    """

    id: str = ""
    requires: tuple[Requirement, ...] = ()

    def apply(self, module: Module) -> None:
        """Register this convention's configuration on ``module``."""

    @property
    def required_ids(self) -> list[str]:
        """Ids of prerequisites that must be applied first."""
        return [r.convention_id for r in self.requires if not r.optional]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"
