"""Tests for Config loading and property redaction."""

from __future__ import annotations

from pathlib import Path

import pytest

from enterprise_build.config import REDACTED_VALUE, Config, redact_properties
from enterprise_build.errors import ConfigError, ConfigNotFoundError
from enterprise_build.utils.pattern import match_any, match_pattern


class TestConfig:
    def test_dot_path_lookup(self) -> None:
        config = Config({"project": {"name": "enterprise-parent", "version": "2.0.0"}})
        assert config.get("project.name") == "enterprise-parent"
        assert config.get("project.group") is None
        assert config.get("project.group", "fallback") == "fallback"

    def test_lookup_through_non_mapping(self) -> None:
        config = Config({"project": "flat"})
        assert config.get("project.name", 1) == 1

    def test_load_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "build.yaml"
        path.write_text("project:\n  name: demo\nproperties:\n  url: https://example.org\n", encoding="utf-8")
        config = Config.load(path)
        assert config.get("properties.url") == "https://example.org"

    def test_load_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert Config.load(path).as_dict() == {}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigNotFoundError):
            Config.load(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("project: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            Config.load(path)

    def test_non_mapping_root(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            Config.load(path)

    def test_as_dict_is_a_copy(self) -> None:
        config = Config({"a": 1})
        config.as_dict()["a"] = 2
        assert config.get("a") == 1


class TestRedaction:
    def test_signing_properties_masked(self) -> None:
        props = {"signingKeyPassphrase": "hunter2", "base64SigningKey": "a2V5", "url": "https://x"}
        redacted = redact_properties(props)
        assert redacted == {
            "signingKeyPassphrase": REDACTED_VALUE,
            "base64SigningKey": REDACTED_VALUE,
            "url": "https://x",
        }

    def test_none_is_not_masked(self) -> None:
        assert redact_properties({"signingKeyPassphrase": None}) == {"signingKeyPassphrase": None}

    def test_input_not_modified(self) -> None:
        props = {"repoPassword": "secret"}
        redact_properties(props)
        assert props == {"repoPassword": "secret"}

    def test_custom_patterns(self) -> None:
        assert redact_properties({"token": "t", "url": "u"}, patterns=("token",)) == {
            "token": REDACTED_VALUE,
            "url": "u",
        }


class TestMatchPattern:
    @pytest.mark.parametrize(
        "pattern,value,expected",
        [
            ("*", "anything", True),
            ("exact", "exact", True),
            ("exact", "other", False),
            ("com.github.*", "com.github.Revxrsal.Lamp", True),
            ("com.github.*", "org.github.x", False),
            ("*Passphrase*", "signingKeyPassphrase", True),
            ("*:VaultAPI", "com.github.MilkBowl:VaultAPI", True),
            ("a*c", "abc", True),
            ("a*c", "abd", False),
            ("ab*b", "ab", False),
            ("*", "", True),
        ],
    )
    def test_match(self, pattern: str, value: str, expected: bool) -> None:
        assert match_pattern(pattern, value) is expected

    def test_match_any(self) -> None:
        assert match_any(("com.github.Revxrsal.Lamp", "com.github.MilkBowl"), "com.github.MilkBowl")
        assert not match_any((), "anything")
