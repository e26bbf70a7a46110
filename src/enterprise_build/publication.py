"""Artifact and publication records handed to the publishing backend."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "Artifact",
    "License",
    "Organization",
    "Developer",
    "Scm",
    "MetadataTemplate",
    "PomMetadata",
    "Signature",
    "Publication",
    "ENTERPRISE_METADATA",
]


class Artifact(BaseModel):
    """A file produced by one of the module's tasks."""

    model_config = ConfigDict(frozen=True)

    file_name: str
    task: str
    classifier: str | None = None
    extension: str = "jar"


class License(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    distribution: str = "repo"


class Organization(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    url: str


class Developer(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    url: str


class Scm(BaseModel):
    model_config = ConfigDict(frozen=True)

    connection: str
    developer_connection: str
    url: str


class MetadataTemplate(BaseModel):
    """The fixed organization, license, developer and SCM block of every publication."""

    model_config = ConfigDict(frozen=True)

    licenses: tuple[License, ...]
    organization: Organization
    developers: tuple[Developer, ...]
    scm: Scm


class PomMetadata(BaseModel):
    """Publication metadata: per-module values plus the fixed template block."""

    model_config = ConfigDict(frozen=True)

    description: str
    url: str
    inception_year: str
    licenses: tuple[License, ...]
    organization: Organization
    developers: tuple[Developer, ...]
    scm: Scm

    @classmethod
    def from_template(
        cls,
        template: MetadataTemplate,
        description: str,
        url: str,
        inception_year: str,
    ) -> PomMetadata:
        return cls(
            description=description,
            url=url,
            inception_year=inception_year,
            licenses=template.licenses,
            organization=template.organization,
            developers=template.developers,
            scm=template.scm,
        )


class Signature(BaseModel):
    """Detached signature over one artifact."""

    model_config = ConfigDict(frozen=True)

    artifact: str
    file_name: str
    algorithm: str
    value: str


class Publication(BaseModel):
    """A publishable package: artifacts, metadata and optional signatures."""

    name: str
    group_id: str | None
    artifact_id: str
    version: str
    artifacts: list[Artifact] = Field(default_factory=list)
    pom: PomMetadata | None = None
    signatures: list[Signature] = Field(default_factory=list)

    @property
    def signed(self) -> bool:
        return bool(self.signatures)

    def artifact(self, classifier: str | None) -> Artifact | None:
        """Return the artifact with the given classifier, if any."""
        for artifact in self.artifacts:
            if artifact.classifier == classifier:
                return artifact
        return None


ENTERPRISE_METADATA = MetadataTemplate(
    licenses=(
        License(
            name="Apache License 2.0",
            url="https://opensource.org/licenses/Apache-2.0",
            distribution="repo",
        ),
    ),
    organization=Organization(name="Sanctum", url="https://github.com/the-h-team"),
    developers=(
        Developer(id="ms5984", name="Matt", url="https://github.com/ms5984"),
        Developer(id="Hempfest", name="Austin", url="https://github.com/Hempfest"),
    ),
    scm=Scm(
        connection="scm:git:git://github.com/the-h-team/Enterprise.git",
        developer_connection="scm:git:ssh://github.com/the-h-team/Enterprise.git",
        url="https://github.com/the-h-team/Enterprise/tree/master",
    ),
)
