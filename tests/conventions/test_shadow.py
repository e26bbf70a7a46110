"""Tests for the artifact-assembly (shading) convention."""

from __future__ import annotations

import logging

import pytest

from enterprise_build.build import Build
from enterprise_build.conventions import ShadowConventions, ShadowExtension
from enterprise_build.errors import InvalidInputError, MissingPrerequisiteError
from enterprise_build.libraries import Lamp
from enterprise_build.module import Module

SHADOW = "enterprise.shadow-conventions"


@pytest.fixture
def shadow_module(build: Build, java_module: Module) -> Module:
    build.module("enterprise-bukkit")
    java_module.apply(SHADOW)
    java_module.dependencies.add("implementation", ":enterprise-bukkit")
    java_module.dependencies.add("implementation", Lamp.COMMON)
    java_module.dependencies.add("implementation", Lamp.BUKKIT)
    java_module.dependencies.add("implementation", "org.bstats:bstats-bukkit:3.0.2")
    return java_module


class TestShadowExtension:
    def test_include_keeps_first_position(self) -> None:
        ext = ShadowExtension()
        ext.include(":enterprise-bukkit")
        ext.include(Lamp.COMMON)
        ext.include(":enterprise-bukkit")
        assert ext.includes == [":enterprise-bukkit", "com.github.Revxrsal.Lamp:common:3.1.7"]

    def test_empty_include_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            ShadowExtension().include("  ")


class TestShadowConventions:
    def test_requires_java(self, module: Module) -> None:
        with pytest.raises(MissingPrerequisiteError):
            module.apply(SHADOW)

    def test_plugin_artifact(self, shadow_module: Module) -> None:
        shadow_module.finalize()
        artifact = shadow_module.primary_artifact
        assert artifact is not None
        assert artifact.file_name == "plugin-2.0.0.jar"
        assert artifact.classifier == "plugin"
        assert artifact.task == "shadowJar"
        assert shadow_module.artifacts[None].task == "jar"

    def test_assemble_depends_on_shadow_jar(self, shadow_module: Module) -> None:
        shadow_module.finalize()
        assert shadow_module.tasks.named("assemble").depends_on == ["jar", "shadowJar"]
        assert shadow_module.tasks.named("shadowJar").depends_on == ["jar"]

    def test_only_declared_includes_merged(self, shadow_module: Module) -> None:
        ext: ShadowExtension = shadow_module.extension("shadow")
        ext.include(":enterprise-bukkit")
        ext.include(Lamp.COMMON)
        ext.include(Lamp.BUKKIT)
        shadow_module.finalize()
        merge = shadow_module.tasks.named("shadowJar").inputs["merge"]
        assert merge.includes == (
            ":enterprise-bukkit",
            "com.github.Revxrsal.Lamp:common:3.1.7",
            "com.github.Revxrsal.Lamp:bukkit:3.1.7",
        )
        assert merge.external == ("org.bstats:bstats-bukkit:3.0.2",)
        assert merge.archive_file_name == "plugin-2.0.0.jar"

    def test_compile_only_never_merged_or_external(self, shadow_module: Module) -> None:
        shadow_module.finalize()
        merge = shadow_module.tasks.named("shadowJar").inputs["merge"]
        assert "org.jetbrains:annotations:24.0.1" not in merge.external

    def test_undeclared_include_warns(self, shadow_module: Module, caplog: pytest.LogCaptureFixture) -> None:
        shadow_module.extension("shadow").include("com.example:missing:1.0")
        with caplog.at_level(logging.WARNING, logger="enterprise_build.conventions.shadow"):
            shadow_module.finalize()
        assert "com.example:missing:1.0" in caplog.text

    def test_include_without_classifier_covers_classified(self, java_module: Module) -> None:
        java_module.apply(SHADOW)
        java_module.dependencies.add("implementation", "com.example:lib:1.0:all")
        java_module.extension("shadow").include("com.example:lib:1.0")
        java_module.finalize()
        assert java_module.tasks.named("shadowJar").inputs["merge"].external == ()

    def test_custom_classifier_and_extension(self, java_module: Module) -> None:
        java_module.apply(SHADOW)
        ext = java_module.extension("shadow")
        ext.classifier = "all"
        ext.extension = "zip"
        java_module.finalize()
        assert java_module.primary_artifact is not None
        assert java_module.primary_artifact.file_name == "plugin-2.0.0.zip"
        assert java_module.primary_artifact.classifier == "all"


class TestMergeInstruction:
    def test_fingerprint_stable_for_equal_inputs(self, build: Build) -> None:
        fingerprints = []
        for name in ("first", "second"):
            module = build.module(name)
            module.apply("enterprise.java-conventions")
            module.apply(SHADOW)
            module.dependencies.add("implementation", Lamp.COMMON)
            module.extension("shadow").include(Lamp.COMMON)
            fingerprints.append(ShadowConventions().instruction(module).fingerprint)
        assert fingerprints[0] != fingerprints[1]

        module = build.get("first")
        assert ShadowConventions().instruction(module).fingerprint == fingerprints[0]

    def test_fingerprint_changes_with_includes(self, java_module: Module) -> None:
        java_module.apply(SHADOW)
        java_module.dependencies.add("implementation", Lamp.COMMON)
        convention = ShadowConventions()
        before = convention.instruction(java_module).fingerprint
        java_module.extension("shadow").include(Lamp.COMMON)
        assert convention.instruction(java_module).fingerprint != before
