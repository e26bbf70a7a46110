"""Artifact assembly: merging declared dependencies into one plugin jar."""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from enterprise_build.conventions.base import Convention
from enterprise_build.conventions.java import JAVA_CONVENTIONS_ID
from enterprise_build.conventions.types import Requirement
from enterprise_build.dependency import Dependency
from enterprise_build.errors import InvalidInputError
from enterprise_build.publication import Artifact

if TYPE_CHECKING:
    from enterprise_build.module import Module

logger = logging.getLogger(__name__)

__all__ = ["ShadowConventions", "ShadowExtension", "MergeInstruction", "SHADOW_CONVENTIONS_ID"]

SHADOW_CONVENTIONS_ID = "enterprise.shadow-conventions"


@dataclass
class ShadowExtension:
    """Per-module shading settings, filled in by the build script."""

    classifier: str = "plugin"
    extension: str = "jar"
    includes: list[str] = field(default_factory=list)
    guard: Callable[[str], None] | None = field(default=None, repr=False, compare=False)

    def include(self, reference: str | Dependency) -> None:
        """Merge a project (``:path``) or a library coordinate into the output.

        Repeated includes keep their first position.

        Raises:
            AlreadyFinalizedError: If the owning module is finalized.
        """
        if self.guard is not None:
            self.guard(f"include '{reference}' in the shadow jar")
        notation = reference.notation if isinstance(reference, Dependency) else str(reference).strip()
        if not notation:
            raise InvalidInputError(message="Shadow include must be a non-empty reference")
        if notation not in self.includes:
            self.includes.append(notation)


@dataclass(frozen=True)
class MergeInstruction:
    """What the packaging tool merges, and under which name."""

    archive_file_name: str
    classifier: str
    includes: tuple[str, ...]
    external: tuple[str, ...]

    @property
    def fingerprint(self) -> str:
        """Stable digest of the instruction; equal inputs give equal fingerprints."""
        payload = json.dumps(
            {
                "archive_file_name": self.archive_file_name,
                "classifier": self.classifier,
                "includes": list(self.includes),
                "external": list(self.external),
            },
            sort_keys=True,
        )
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def _matches(include: str, notation: str) -> bool:
    if include == notation:
        return True
    # a coordinate include without classifier covers the classified declaration
    return not include.startswith(":") and notation.startswith(include + ":")


class ShadowConventions(Convention):
    """Produces the merged plugin artifact ``<module>-<version>.<ext>``.

    Only references declared through :class:`ShadowExtension` are merged, in
    declaration order; every other runtime dependency stays external. The
    merged artifact becomes the module's primary artifact.
    """

    id = SHADOW_CONVENTIONS_ID
    requires = (Requirement(JAVA_CONVENTIONS_ID),)

    def apply(self, module: Module) -> None:
        module.add_extension("shadow", ShadowExtension(guard=module.check_mutable))
        module.tasks.register("shadowJar", ["jar"], description="Creates a combined jar including dependencies.")
        module.after_evaluate(self._assemble, owner=self.id)

    def instruction(self, module: Module) -> MergeInstruction:
        """Compute the merge instruction from the module's current state."""
        shadow: ShadowExtension = module.extension("shadow")
        runtime = [d.notation for d in module.dependencies.runtime()]
        for include in shadow.includes:
            if not any(_matches(include, notation) for notation in runtime):
                logger.warning(
                    "Module '%s': shadow include '%s' is not a declared runtime dependency",
                    module.name, include,
                )
        external = tuple(n for n in runtime if not any(_matches(i, n) for i in shadow.includes))
        return MergeInstruction(
            archive_file_name=f"{module.name}-{module.version}.{shadow.extension}",
            classifier=shadow.classifier,
            includes=tuple(shadow.includes),
            external=external,
        )

    def _assemble(self, module: Module) -> None:
        instruction = self.instruction(module)
        task = module.tasks.named("shadowJar")
        task.inputs["merge"] = instruction
        module.tasks.register("assemble", ["shadowJar"])

        shadow: ShadowExtension = module.extension("shadow")
        module.add_artifact(
            Artifact(
                file_name=instruction.archive_file_name,
                task="shadowJar",
                classifier=instruction.classifier,
                extension=shadow.extension,
            ),
            primary=True,
        )
        logger.info(
            "Module '%s': shading %d references into %s",
            module.name, len(instruction.includes), instruction.archive_file_name,
        )
