"""Binds a module to its target platform."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from enterprise_build.conventions.base import Convention
from enterprise_build.conventions.java import JAVA_CONVENTIONS_ID
from enterprise_build.conventions.types import Requirement
from enterprise_build.errors import MissingTargetError
from enterprise_build.targets import TARGETS, Target, get_target

if TYPE_CHECKING:
    from typing import Mapping

    from enterprise_build.module import Module

logger = logging.getLogger(__name__)

__all__ = ["PlatformConventions", "PLATFORM_CONVENTIONS_ID", "DEFAULT_DESCRIPTION_TEMPLATE"]

PLATFORM_CONVENTIONS_ID = "enterprise.platform-conventions"
DEFAULT_DESCRIPTION_TEMPLATE = "{name} platform implementation for Enterprise"


class PlatformConventions(Convention):
    """Resolves the module's target platform once configuration is complete.

    The target is read from the module property ``platform`` (a
    :class:`Target` or a target name) only at finalization, so build scripts
    may select it after applying the convention. At that point the target's
    repository is registered (once, by name), its API dependency is added to
    ``api`` and the module description is derived from ``description_template``.
    """

    id = PLATFORM_CONVENTIONS_ID
    requires = (Requirement(JAVA_CONVENTIONS_ID),)

    def __init__(
        self,
        property_name: str = "platform",
        description_template: str = DEFAULT_DESCRIPTION_TEMPLATE,
        targets: Mapping[str, Target] = TARGETS,
    ) -> None:
        self.property_name = property_name
        self.description_template = description_template
        self.targets = targets

    def apply(self, module: Module) -> None:
        module.after_evaluate(self._bind, owner=self.id)

    def resolve_target(self, module: Module) -> Target:
        """Return the module's selected target.

        Raises:
            MissingTargetError: If no target is selected.
            UnknownTargetError: If a target name matches no declared platform.
        """
        selected = module.find_property(self.property_name)
        if selected is None or selected == "":
            raise MissingTargetError(module_name=module.name, property_name=self.property_name)
        if isinstance(selected, Target):
            return selected
        return get_target(str(selected), self.targets)

    def _bind(self, module: Module) -> None:
        target = self.resolve_target(module)
        registration = target.dependency.repository
        if registration is not None:
            registration(module.repositories)
        module.dependencies.add("api", target.dependency)
        module.description = self.description_template.format(name=target.name)
        logger.info("Module '%s' bound to platform %s (%s)", module.name, target.name, target.dependency.notation)
