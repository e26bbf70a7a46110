"""Tests for dependency descriptors and repository definitions."""

from __future__ import annotations

import dataclasses

import pytest

from enterprise_build.dependency import MAVEN_CENTRAL, Dependency, Repository, parse_notation
from enterprise_build.errors import InvalidInputError
from enterprise_build.repositories import RepositorySet


class TestDependencyNotation:
    def test_notation_without_classifier(self) -> None:
        dep = Dependency("org.spigotmc", "spigot-api", "1.20.2-R0.1-SNAPSHOT")
        assert dep.notation == "org.spigotmc:spigot-api:1.20.2-R0.1-SNAPSHOT"

    def test_notation_with_classifier(self) -> None:
        dep = Dependency("com.example", "lib", "1.0", classifier="shaded")
        assert dep.notation == "com.example:lib:1.0:shaded"

    @pytest.mark.parametrize(
        "group,artifact,version",
        [("a", "b", "1"), ("io.github.sanctum", "enterprise-api", "2.0.0"), ("x.y", "z-z", "0.0.1-SNAPSHOT")],
    )
    def test_notation_is_pure_function_of_fields(self, group: str, artifact: str, version: str) -> None:
        assert Dependency(group, artifact, version).notation == f"{group}:{artifact}:{version}"

    def test_str_is_notation(self) -> None:
        dep = Dependency("a", "b", "1")
        assert str(dep) == "a:b:1"

    def test_module_pair(self) -> None:
        assert Dependency("a", "b", "1").module == "a:b"


class TestDependencyImmutability:
    def test_fields_cannot_be_reassigned(self) -> None:
        dep = Dependency("a", "b", "1")
        with pytest.raises(dataclasses.FrozenInstanceError):
            dep.version = "2"  # type: ignore[misc]

    def test_notation_cannot_be_reassigned(self) -> None:
        dep = Dependency("a", "b", "1")
        with pytest.raises(dataclasses.FrozenInstanceError):
            dep.notation = "x:y:z"  # type: ignore[misc]

    def test_repository_excluded_from_equality(self) -> None:
        repo = Repository(name="r", url="https://r.example")
        assert Dependency("a", "b", "1", repository=repo) == Dependency("a", "b", "1")

    def test_hashable(self) -> None:
        assert len({Dependency("a", "b", "1"), Dependency("a", "b", "1")}) == 1


class TestDependencyValidation:
    @pytest.mark.parametrize("field", ["group_id", "artifact_id", "version"])
    def test_empty_identity_field_rejected(self, field: str) -> None:
        values = {"group_id": "a", "artifact_id": "b", "version": "1", field: ""}
        with pytest.raises(InvalidInputError):
            Dependency(**values)

    def test_colon_in_field_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            Dependency("a:b", "c", "1")

    def test_empty_classifier_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            Dependency("a", "b", "1", classifier="")


class TestRepositoryRegistration:
    def test_construction_does_not_register(self) -> None:
        calls: list[RepositorySet] = []
        Dependency("a", "b", "1", repository=calls.append)
        assert calls == []

    def test_repository_is_a_registration_action(self) -> None:
        repos = RepositorySet()
        repo = Repository(name="spigotmc", url="https://hub.spigotmc.org/nexus/content/repositories/snapshots/")
        dep = Dependency("org.spigotmc", "spigot-api", "1.0", repository=repo)
        dep.repository(repos)
        assert repos.names == ["spigotmc"]

    def test_repository_requires_name_and_url(self) -> None:
        with pytest.raises(InvalidInputError):
            Repository(name="", url="https://x")
        with pytest.raises(InvalidInputError):
            Repository(name="x", url="")


class TestRepositoryFilters:
    def test_unfiltered_allows_everything(self) -> None:
        assert MAVEN_CENTRAL.allows("any.group:thing:1.0")

    def test_include_group(self) -> None:
        repo = Repository(name="jitpack", url="https://jitpack.io", include_groups=("com.github.Revxrsal.Lamp",))
        assert repo.allows("com.github.Revxrsal.Lamp:common:3.1.7")
        assert not repo.allows("com.github.MilkBowl:VaultAPI:1.7.1")

    def test_include_module(self) -> None:
        repo = Repository(name="jitpack", url="https://jitpack.io", include_modules=("com.github.MilkBowl:VaultAPI",))
        assert repo.allows("com.github.MilkBowl:VaultAPI:1.7.1")
        assert not repo.allows("com.github.MilkBowl:Other:1.0")

    def test_wildcard_group(self) -> None:
        repo = Repository(name="gh", url="https://jitpack.io", include_groups=("com.github.*",))
        assert repo.allows("com.github.anyone:lib:1")
        assert not repo.allows("org.example:lib:1")


class TestParseNotation:
    def test_three_parts(self) -> None:
        dep = parse_notation("org.jetbrains:annotations:24.0.1")
        assert dep == Dependency("org.jetbrains", "annotations", "24.0.1")

    def test_four_parts(self) -> None:
        assert parse_notation("a:b:1:tests").classifier == "tests"

    @pytest.mark.parametrize("text", ["a:b", "a", "a:b:c:d:e", ""])
    def test_malformed(self, text: str) -> None:
        with pytest.raises(InvalidInputError):
            parse_notation(text)
