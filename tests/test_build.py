"""Tests for the root build and per-module failure isolation."""

from __future__ import annotations

import pytest

from convention_helpers import FailingConvention, RecordingConvention
from enterprise_build.build import DEFAULT_ENV_PREFIX, Build, BuildResult
from enterprise_build.config import Config
from enterprise_build.conventions import ConventionRegistry
from enterprise_build.errors import InvalidInputError
from enterprise_build.signing import HmacSigningBackend


@pytest.fixture
def mixed_build(log: list[str]) -> Build:
    registry = ConventionRegistry([RecordingConvention("test.base", log=log), FailingConvention()])
    return Build("root", registry=registry)


class TestModules:
    def test_module_inherits_version_and_group(self, build: Build) -> None:
        module = build.module("enterprise-api", path="api")
        assert module.version == "2.0.0"
        assert module.group == "io.github.sanctum.enterprise"
        assert module.path == "api"

    def test_leading_colon_stripped(self, build: Build) -> None:
        module = build.module(":enterprise-api")
        assert module.name == "enterprise-api"
        assert build.get(":enterprise-api") is module
        assert build.has_module("enterprise-api")

    def test_duplicate_module(self, build: Build) -> None:
        build.module("api")
        with pytest.raises(InvalidInputError):
            build.module(":api")

    def test_unknown_module(self, build: Build) -> None:
        with pytest.raises(InvalidInputError):
            build.get("missing")

    def test_inclusion_order(self, build: Build) -> None:
        for name in ("c", "a", "b"):
            build.module(name)
        assert [m.name for m in build.modules] == ["c", "a", "b"]

    def test_empty_name(self) -> None:
        with pytest.raises(InvalidInputError):
            Build("")

    def test_defaults(self) -> None:
        build = Build("root")
        assert build.env_prefix == DEFAULT_ENV_PREFIX
        assert isinstance(build.signer, HmacSigningBackend)
        assert build.registry.ids == [
            "enterprise.java-conventions",
            "enterprise.shadow-conventions",
            "enterprise.platform-conventions",
            "enterprise.publishing-conventions",
        ]

    def test_modules_share_repository_catalog(self, build: Build) -> None:
        first = build.module("a")
        second = build.module("b")
        first.apply("enterprise.java-conventions")
        second.apply("enterprise.java-conventions")
        assert build.repositories.names == ["MavenRepo", "MavenLocal"]


class TestFromConfig:
    def test_reads_project_block(self) -> None:
        config = Config(
            {
                "project": {"name": "enterprise-parent", "version": 2, "group": "g"},
                "properties": {"url": "https://x"},
                "env_prefix": "EP_",
            }
        )
        build = Build.from_config(config)
        assert build.name == "enterprise-parent"
        assert build.version == "2"
        assert build.group == "g"
        assert build.properties == {"url": "https://x"}
        assert build.env_prefix == "EP_"


class TestFinalize:
    def test_all_modules_finalized(self, mixed_build: Build, log: list[str]) -> None:
        mixed_build.module("a").apply("test.base")
        mixed_build.module("b").apply("test.base")
        result = mixed_build.finalize()
        assert result.ok
        assert result.finalized == ["a", "b"]
        assert log == ["test.base", "test.base"]

    def test_failure_isolated_to_module(self, mixed_build: Build, log: list[str]) -> None:
        mixed_build.module("broken").apply("test.failing")
        mixed_build.module("healthy").apply("test.base")
        result = mixed_build.finalize()
        assert not result.ok
        assert result.finalized == ["healthy"]
        assert isinstance(result.failures["broken"], RuntimeError)
        assert log == ["test.base"]

    def test_failure_reraised_unchanged(self, mixed_build: Build) -> None:
        mixed_build.module("broken").apply("test.failing")
        result = mixed_build.finalize()
        with pytest.raises(RuntimeError) as exc_info:
            result.raise_for_failures()
        assert exc_info.value is result.failures["broken"]

    def test_already_finalized_modules_skipped(self, mixed_build: Build) -> None:
        first = mixed_build.module("a")
        first.finalize()
        mixed_build.module("b")
        result = mixed_build.finalize()
        assert result.finalized == ["b"]

    def test_raise_for_failures_noop_when_ok(self) -> None:
        BuildResult(finalized=["a"]).raise_for_failures()
