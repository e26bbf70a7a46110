"""The Enterprise build composed in Python instead of YAML."""

from __future__ import annotations

from enterprise_build import BUKKIT, Build, Lamp
from enterprise_build.libraries import JITPACK_DEPS, VAULT_API

JAVA = "enterprise.java-conventions"
SHADOW = "enterprise.shadow-conventions"
PLATFORM = "enterprise.platform-conventions"
PUBLISHING = "enterprise.publishing-conventions"


def create_build(**kwargs) -> Build:
    """Configure (but do not finalize) the three Enterprise modules."""
    build = Build(
        "enterprise-parent",
        description="Enterprise parent project",
        version="2.0.0",
        group="io.github.sanctum.enterprise",
        properties={"url": "https://github.com/the-h-team/Enterprise", "inceptionYear": "2021"},
        **kwargs,
    )

    api = build.module("enterprise-api", path="api", description="The Enterprise economy API")
    for convention in (JAVA, PUBLISHING):
        api.apply(convention)

    bukkit = build.module("enterprise-bukkit", path="platforms/bukkit")
    for convention in (JAVA, SHADOW, PLATFORM, PUBLISHING):
        bukkit.apply(convention)
    bukkit.set_property("platform", BUKKIT)
    bukkit.dependencies.add("api", ":enterprise-api")

    plugin = build.module(
        "enterprise-plugin",
        path="platforms/plugin",
        description=f"The {BUKKIT.name} plugin implementation of Enterprise",
    )
    for convention in (JAVA, SHADOW, PUBLISHING):
        plugin.apply(convention)
    BUKKIT.dependency.repository(plugin.repositories)
    JITPACK_DEPS(plugin.repositories)
    plugin.dependencies.add("implementation", ":enterprise-bukkit")
    plugin.dependencies.add("implementation", Lamp.COMMON)
    plugin.dependencies.add("implementation", Lamp.BUKKIT)
    plugin.dependencies.add("compileOnly", VAULT_API, exclude=("org.bukkit:bukkit", "junit:junit"))

    shadow = plugin.extension("shadow")
    shadow.include(":enterprise-bukkit")
    shadow.include(Lamp.COMMON)
    shadow.include(Lamp.BUKKIT)

    plugin.resources.patterns = ["plugin.yml"]
    plugin.resources.property_keys = ["version", "rootProject.description", "url"]
    return build


if __name__ == "__main__":
    import json
    import logging

    logging.basicConfig(level=logging.INFO)
    enterprise = create_build()
    enterprise.finalize().raise_for_failures()
    for module in enterprise.modules:
        print(json.dumps(module.snapshot(), indent=2, default=str))
