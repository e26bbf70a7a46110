"""Convention registry and the built-in Enterprise conventions.

Usage::

    from enterprise_build import Build

    build = Build("enterprise-parent", description="Enterprise parent project")
    bukkit = build.module("enterprise-bukkit", path="platforms/bukkit")
    bukkit.apply("enterprise.java-conventions")
    bukkit.apply("enterprise.platform-conventions")
    bukkit.set_property("platform", "Bukkit")
    build.finalize().raise_for_failures()
"""

from __future__ import annotations

from enterprise_build.conventions.base import Convention
from enterprise_build.conventions.java import (
    JAVA_CONVENTIONS_ID,
    JavaConventions,
    with_javadoc_jar,
    with_sources_jar,
)
from enterprise_build.conventions.ordering import resolve_order
from enterprise_build.conventions.platform import PLATFORM_CONVENTIONS_ID, PlatformConventions
from enterprise_build.conventions.publishing import (
    PUBLISHING_CONVENTIONS_ID,
    PublishingConventions,
    PublishingExtension,
)
from enterprise_build.conventions.registry import ConventionRegistry, default_registry
from enterprise_build.conventions.shadow import (
    SHADOW_CONVENTIONS_ID,
    MergeInstruction,
    ShadowConventions,
    ShadowExtension,
)
from enterprise_build.conventions.types import DeferredAction, Requirement

__all__ = [
    "Convention",
    "ConventionRegistry",
    "DeferredAction",
    "JavaConventions",
    "MergeInstruction",
    "PlatformConventions",
    "PublishingConventions",
    "PublishingExtension",
    "Requirement",
    "ShadowConventions",
    "ShadowExtension",
    "default_registry",
    "resolve_order",
    "with_javadoc_jar",
    "with_sources_jar",
    "JAVA_CONVENTIONS_ID",
    "PLATFORM_CONVENTIONS_ID",
    "PUBLISHING_CONVENTIONS_ID",
    "SHADOW_CONVENTIONS_ID",
]
