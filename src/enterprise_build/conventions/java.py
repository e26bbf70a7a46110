"""Java library conventions shared by every module."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from enterprise_build.conventions.base import Convention
from enterprise_build.dependency import MAVEN_CENTRAL, MAVEN_LOCAL
from enterprise_build.libraries import JETBRAINS_ANNOTATIONS
from enterprise_build.publication import Artifact

if TYPE_CHECKING:
    from enterprise_build.module import Module

logger = logging.getLogger(__name__)

__all__ = ["JavaConventions", "JAVA_CONVENTIONS_ID", "with_sources_jar", "with_javadoc_jar"]

JAVA_CONVENTIONS_ID = "enterprise.java-conventions"


class JavaConventions(Convention):
    """Repositories, compile-only annotations, toolchain settings and the core task graph.

    The default jar is named ``<module>-<version>.jar`` and carries no
    classifier; it is resolved at finalization so late version changes are
    honored.
    """

    id = JAVA_CONVENTIONS_ID

    def __init__(self, language_version: int = 8, encoding: str = "UTF-8") -> None:
        self.language_version = language_version
        self.encoding = encoding

    def apply(self, module: Module) -> None:
        MAVEN_CENTRAL(module.repositories)
        MAVEN_LOCAL(module.repositories)
        module.dependencies.add("compileOnly", JETBRAINS_ANNOTATIONS)

        module.toolchain.language_version = self.language_version
        module.toolchain.encoding = self.encoding
        module.toolchain.javadoc_encoding = self.encoding

        compile_java = module.tasks.register("compileJava", description="Compiles main Java source.")
        compile_java.inputs.update(release=self.language_version, encoding=self.encoding)
        module.tasks.register("javadoc", ["compileJava"], description="Generates Javadoc API documentation.")
        module.tasks.register("jar", ["compileJava"], description="Assembles a jar archive of the main classes.")
        module.tasks.register("assemble", ["jar"], description="Assembles the outputs of this module.")
        module.tasks.register("build", ["assemble"], description="Assembles and tests this module.")

        module.after_evaluate(self._configure_jar, owner=self.id)

    def _configure_jar(self, module: Module) -> None:
        jar = Artifact(file_name=f"{module.name}-{module.version}.jar", task="jar")
        module.tasks.named("jar").inputs["archive_file_name"] = jar.file_name
        module.add_artifact(jar)
        logger.debug("Module '%s': default jar %s", module.name, jar.file_name)


def with_sources_jar(module: Module) -> None:
    """Register ``sourcesJar`` and make it part of ``assemble``."""
    module.tasks.register("sourcesJar", description="Assembles a jar archive of the main sources.")
    module.tasks.register("assemble", ["sourcesJar"])


def with_javadoc_jar(module: Module) -> None:
    """Register ``javadocJar`` and make it part of ``assemble``."""
    module.tasks.register("javadocJar", ["javadoc"], description="Assembles a jar archive of the Javadoc.")
    module.tasks.register("assemble", ["javadocJar"])

