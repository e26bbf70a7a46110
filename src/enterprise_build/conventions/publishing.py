"""Publication assembly: metadata, side artifacts and optional signing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from enterprise_build.conventions.base import Convention
from enterprise_build.conventions.java import JAVA_CONVENTIONS_ID, with_javadoc_jar, with_sources_jar
from enterprise_build.conventions.platform import PLATFORM_CONVENTIONS_ID
from enterprise_build.conventions.shadow import SHADOW_CONVENTIONS_ID
from enterprise_build.conventions.types import Requirement
from enterprise_build.errors import MissingDescriptionError, MissingPropertyError
from enterprise_build.publication import (
    ENTERPRISE_METADATA,
    Artifact,
    MetadataTemplate,
    PomMetadata,
    Publication,
)
from enterprise_build.signing import HmacSigningBackend, decode_signing_key

if TYPE_CHECKING:
    from enterprise_build.module import Module

logger = logging.getLogger(__name__)

__all__ = ["PublishingConventions", "PublishingExtension", "PUBLISHING_CONVENTIONS_ID"]

PUBLISHING_CONVENTIONS_ID = "enterprise.publishing-conventions"

PASSPHRASE_PROPERTY = "signingKeyPassphrase"
SIGNING_KEY_PROPERTY = "base64SigningKey"


@dataclass
class PublishingExtension:
    """Per-module publishing settings."""

    publication_name: str = "maven"
    with_sources: bool = True
    with_javadoc: bool = True


class PublishingConventions(Convention):
    """Assembles the ``maven`` publication of a module.

    ``sourcesJar`` and ``javadocJar`` are not part of ``assemble``; only
    ``publish`` depends on them. At finalization the description must differ
    from the root placeholder and the ``url`` and ``inceptionYear``
    properties must be set. The publication is signed if and only if the
    ``signingKeyPassphrase`` property is present, using the key material in
    ``base64SigningKey``.

    Runs after the shading and platform conventions when they are applied, so
    the published binary is the merged artifact and a platform-derived
    description is already in place.
    """

    id = PUBLISHING_CONVENTIONS_ID
    requires = (
        Requirement(JAVA_CONVENTIONS_ID),
        Requirement(SHADOW_CONVENTIONS_ID, optional=True),
        Requirement(PLATFORM_CONVENTIONS_ID, optional=True),
    )

    def __init__(self, metadata: MetadataTemplate = ENTERPRISE_METADATA) -> None:
        self.metadata = metadata

    def apply(self, module: Module) -> None:
        module.add_extension("publishing", PublishingExtension())
        with_sources_jar(module)
        with_javadoc_jar(module)
        # side artifacts are built by publish only
        module.tasks.named("assemble").unwire("sourcesJar", "javadocJar")
        module.tasks.register("publish", description="Publishes all publications of this module.")
        module.after_evaluate(self._publish, owner=self.id)

    def _require_property(self, module: Module, name: str) -> str:
        value = module.find_property(name)
        if value is None or str(value) == "":
            raise MissingPropertyError(module_name=module.name, property_name=name)
        return str(value)

    def _publish(self, module: Module) -> None:
        description = module.description
        if not description or description == module.root_description:
            raise MissingDescriptionError(module_name=module.name, module_path=module.path)
        url = self._require_property(module, "url")
        inception_year = self._require_property(module, "inceptionYear")

        settings: PublishingExtension = module.extension("publishing")
        binary = module.primary_artifact
        if binary is None:
            binary = Artifact(file_name=f"{module.name}-{module.version}.jar", task="jar")

        artifacts = [binary]
        publish = module.tasks.named("publish")
        publish.depend_on(binary.task)
        if settings.with_sources:
            artifacts.append(
                Artifact(file_name=f"{module.name}-{module.version}-sources.jar", task="sourcesJar", classifier="sources")
            )
            publish.depend_on("sourcesJar")
        if settings.with_javadoc:
            artifacts.append(
                Artifact(file_name=f"{module.name}-{module.version}-javadoc.jar", task="javadocJar", classifier="javadoc")
            )
            publish.depend_on("javadocJar")

        publication = Publication(
            name=settings.publication_name,
            group_id=module.group,
            artifact_id=module.name,
            version=module.version,
            artifacts=artifacts,
            pom=PomMetadata.from_template(self.metadata, description, url, inception_year),
        )

        passphrase = module.find_property(PASSPHRASE_PROPERTY)
        if passphrase is not None:
            key = decode_signing_key(module.find_property(SIGNING_KEY_PROPERTY), SIGNING_KEY_PROPERTY)
            signer = module.build.signer if module.build is not None else HmacSigningBackend()
            publication.signatures = signer.sign(key, str(passphrase), artifacts)
            sign_task = f"sign{settings.publication_name.capitalize()}Publication"
            module.tasks.register(sign_task, [a.task for a in artifacts], description="Signs the publication.")
            publish.depend_on(sign_task)
            logger.info("Module '%s': publication '%s' signed", module.name, publication.name)
        else:
            logger.info("Module '%s': no signing passphrase, publication left unsigned", module.name)

        module.publications[publication.name] = publication
