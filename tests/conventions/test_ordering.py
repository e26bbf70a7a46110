"""Tests for convention finalization order via Kahn's topological sort."""

from __future__ import annotations

import logging

import pytest

from enterprise_build.conventions.ordering import resolve_order
from enterprise_build.conventions.types import Requirement
from enterprise_build.errors import CircularDependencyError, MissingPrerequisiteError


class TestNoPrerequisites:
    def test_registration_order_kept(self) -> None:
        """Independent conventions keep registration order."""
        assert resolve_order([("C", []), ("A", []), ("B", [])]) == ["C", "A", "B"]

    def test_empty(self) -> None:
        assert resolve_order([]) == []


class TestSimpleOrdering:
    def test_chain(self) -> None:
        """Chain A -> B -> C -> order is C, B, A."""
        result = resolve_order(
            [
                ("A", [Requirement("B")]),
                ("B", [Requirement("C")]),
                ("C", []),
            ]
        )
        assert result == ["C", "B", "A"]

    def test_diamond(self) -> None:
        """Diamond: A -> B,C; B,C -> D; D first, then B before C by registration, A last."""
        result = resolve_order(
            [
                ("A", [Requirement("B"), Requirement("C")]),
                ("B", [Requirement("D")]),
                ("C", [Requirement("D")]),
                ("D", []),
            ]
        )
        assert result == ["D", "B", "C", "A"]

    def test_ties_broken_by_registration_position(self) -> None:
        """Once java is done, shadow and platform are both ready; the earlier one wins."""
        result = resolve_order(
            [
                ("java", []),
                ("platform", [Requirement("java")]),
                ("shadow", [Requirement("java")]),
            ]
        )
        assert result == ["java", "platform", "shadow"]

    def test_duplicate_requirement_counted_once(self) -> None:
        result = resolve_order([("A", [Requirement("B"), Requirement("B")]), ("B", [])])
        assert result == ["B", "A"]


class TestOptionalRequirements:
    def test_present_optional_orders(self) -> None:
        result = resolve_order([("publish", [Requirement("shadow", optional=True)]), ("shadow", [])])
        assert result == ["shadow", "publish"]

    def test_absent_optional_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="enterprise_build.conventions.ordering"):
            result = resolve_order([("publish", [Requirement("shadow", optional=True)])])
        assert result == ["publish"]
        assert "Optional prerequisite 'shadow'" in caplog.text

    def test_absent_required_raises(self) -> None:
        with pytest.raises(MissingPrerequisiteError) as exc_info:
            resolve_order([("shadow", [Requirement("java")])])
        assert exc_info.value.missing_id == "java"

    def test_known_but_outside_batch(self) -> None:
        """A requirement known to the caller but not in the batch does not block."""
        result = resolve_order([("shadow", [Requirement("java")])], known_ids={"java", "shadow"})
        assert result == ["shadow"]


class TestCircularDetection:
    def test_simple_cycle(self) -> None:
        """A -> B -> A raises CircularDependencyError."""
        with pytest.raises(CircularDependencyError) as exc_info:
            resolve_order([("A", [Requirement("B")]), ("B", [Requirement("A")])])
        path = exc_info.value.details["cycle_path"]
        assert path[0] == path[-1]
        assert set(path) == {"A", "B"}

    def test_self_cycle(self) -> None:
        with pytest.raises(CircularDependencyError) as exc_info:
            resolve_order([("A", [Requirement("A")])])
        assert exc_info.value.details["cycle_path"] == ["A", "A"]

    def test_cycle_behind_acyclic_prefix(self) -> None:
        with pytest.raises(CircularDependencyError) as exc_info:
            resolve_order(
                [
                    ("root", []),
                    ("A", [Requirement("root"), Requirement("C")]),
                    ("B", [Requirement("A")]),
                    ("C", [Requirement("B")]),
                ]
            )
        assert "root" not in exc_info.value.details["cycle_path"]
