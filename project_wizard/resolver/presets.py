"""Workspace presets and the auxiliary-service matrix.

A preset bundles the Nx plugins, code generator and default port for one
frontend/backend framework or language.  Lookups never fail: anything
unrecognised resolves to the general-purpose scripting preset (``js``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..answers.models import JavaFramework, LanguageFamily, ProjectType, ResolvedConfig
from .profile import LanguageProfile


class PresetKind(str, Enum):
    """What kind of target a preset builds."""
    SCRIPTING_LIBRARY = "scripting-library"
    FRONTEND = "frontend"
    SCRIPTING_SERVER = "scripting-server"
    MANAGED_RUNTIME = "managed-runtime"
    SYSTEMS_RUNTIME = "systems-runtime"


_BACKEND_KINDS = {
    PresetKind.SCRIPTING_SERVER,
    PresetKind.MANAGED_RUNTIME,
    PresetKind.SYSTEMS_RUNTIME,
}


@dataclass(frozen=True)
class PresetDescriptor:
    """Static metadata for one workspace preset."""

    identity: str
    label: str
    doc_url: str
    plugins: tuple[str, ...]
    generator: Optional[str]
    kind: PresetKind
    uses_scripting_toolchain: bool
    family: LanguageFamily
    base_port: Optional[int] = None

    @property
    def backend_capable(self) -> bool:
        return self.kind in _BACKEND_KINDS


DEFAULT_PRESET = "js"

PRESETS: dict[str, PresetDescriptor] = {
    p.identity: p
    for p in (
        PresetDescriptor(
            identity="js",
            label="JavaScript/TypeScript library",
            doc_url="https://nx.dev/nx-api/js",
            plugins=("@nx/js",),
            generator="nx g @nx/js:library",
            kind=PresetKind.SCRIPTING_LIBRARY,
            uses_scripting_toolchain=True,
            family=LanguageFamily.JAVASCRIPT,
        ),
        PresetDescriptor(
            identity="react",
            label="React",
            doc_url="https://nx.dev/nx-api/react",
            plugins=("@nx/react", "@nx/vite"),
            generator="nx g @nx/react:application",
            kind=PresetKind.FRONTEND,
            uses_scripting_toolchain=True,
            family=LanguageFamily.JAVASCRIPT,
            base_port=4200,
        ),
        PresetDescriptor(
            identity="angular",
            label="Angular",
            doc_url="https://nx.dev/nx-api/angular",
            plugins=("@nx/angular",),
            generator="nx g @nx/angular:application",
            kind=PresetKind.FRONTEND,
            uses_scripting_toolchain=True,
            family=LanguageFamily.JAVASCRIPT,
            base_port=4200,
        ),
        PresetDescriptor(
            identity="next",
            label="Next.js",
            doc_url="https://nx.dev/nx-api/next",
            plugins=("@nx/next",),
            generator="nx g @nx/next:application",
            kind=PresetKind.FRONTEND,
            uses_scripting_toolchain=True,
            family=LanguageFamily.JAVASCRIPT,
            base_port=3000,
        ),
        PresetDescriptor(
            identity="express",
            label="Express",
            doc_url="https://nx.dev/nx-api/express",
            plugins=("@nx/express", "@nx/node"),
            generator="nx g @nx/express:application",
            kind=PresetKind.SCRIPTING_SERVER,
            uses_scripting_toolchain=True,
            family=LanguageFamily.JAVASCRIPT,
            base_port=3000,
        ),
        PresetDescriptor(
            identity="nest",
            label="NestJS",
            doc_url="https://nx.dev/nx-api/nest",
            plugins=("@nx/nest", "@nx/node"),
            generator="nx g @nx/nest:application",
            kind=PresetKind.SCRIPTING_SERVER,
            uses_scripting_toolchain=True,
            family=LanguageFamily.JAVASCRIPT,
            base_port=3000,
        ),
        PresetDescriptor(
            identity="python",
            label="Python",
            doc_url="https://github.com/lucasvieirasilva/nx-plugins",
            plugins=("@nxlv/python",),
            generator="nx g @nxlv/python:poetry-project",
            kind=PresetKind.SCRIPTING_SERVER,
            uses_scripting_toolchain=False,
            family=LanguageFamily.PYTHON,
            base_port=8000,
        ),
        PresetDescriptor(
            identity="java",
            label="Java (Maven)",
            doc_url="https://github.com/khalilou88/jnxplus",
            plugins=("@jnxplus/nx-maven",),
            generator="nx g @jnxplus/nx-maven:application",
            kind=PresetKind.MANAGED_RUNTIME,
            uses_scripting_toolchain=False,
            family=LanguageFamily.JAVA,
            base_port=8080,
        ),
        PresetDescriptor(
            identity="spring-boot",
            label="Spring Boot",
            doc_url="https://github.com/tinesoft/nxrocks/tree/develop/packages/nx-spring-boot",
            plugins=("@nxrocks/nx-spring-boot",),
            generator="nx g @nxrocks/nx-spring-boot:project",
            kind=PresetKind.MANAGED_RUNTIME,
            uses_scripting_toolchain=False,
            family=LanguageFamily.JAVA,
            base_port=8080,
        ),
        PresetDescriptor(
            identity="quarkus",
            label="Quarkus",
            doc_url="https://github.com/tinesoft/nxrocks/tree/develop/packages/nx-quarkus",
            plugins=("@nxrocks/nx-quarkus",),
            generator="nx g @nxrocks/nx-quarkus:project",
            kind=PresetKind.MANAGED_RUNTIME,
            uses_scripting_toolchain=False,
            family=LanguageFamily.JAVA,
            base_port=8080,
        ),
        PresetDescriptor(
            identity="rust",
            label="Rust",
            doc_url="https://github.com/cammisuli/monodon",
            plugins=("@monodon/rust",),
            generator="nx g @monodon/rust:binary",
            kind=PresetKind.SYSTEMS_RUNTIME,
            uses_scripting_toolchain=False,
            family=LanguageFamily.RUST,
            base_port=8000,
        ),
        PresetDescriptor(
            identity="dotnet",
            label=".NET",
            doc_url="https://www.nx-dotnet.com/",
            plugins=("@nx-dotnet/core",),
            generator="nx g @nx-dotnet/core:app",
            kind=PresetKind.MANAGED_RUNTIME,
            uses_scripting_toolchain=False,
            family=LanguageFamily.DOTNET,
            base_port=5000,
        ),
    )
}

PRESET_IDENTITIES: list[str] = list(PRESETS)

_ALIASES: dict[str, str] = {
    "javascript": "js",
    "typescript": "js",
    "ts": "js",
    "nextjs": "next",
    "next-js": "next",
    "nestjs": "nest",
    "node": "express",
    "springboot": "spring-boot",
    "spring": "spring-boot",
    ".net": "dotnet",
    "net": "dotnet",
    "maven": "java",
}

_FAMILY_DEFAULTS: dict[LanguageFamily, str] = {
    LanguageFamily.JAVASCRIPT: "js",
    LanguageFamily.PYTHON: "python",
    LanguageFamily.JAVA: "java",
    LanguageFamily.RUST: "rust",
    LanguageFamily.DOTNET: "dotnet",
}

_FRAMEWORK_PRESETS: dict[JavaFramework, str] = {
    JavaFramework.SPRING_BOOT: "spring-boot",
    JavaFramework.QUARKUS: "quarkus",
}


def presets_for(family: LanguageFamily) -> list[str]:
    """Preset identities offered for a language family (all of them for Other)."""
    if family == LanguageFamily.OTHER:
        return list(PRESETS)
    return [p.identity for p in PRESETS.values() if p.family == family]


def normalize_preset_identity(value: str) -> str:
    """Canonical form of a preset name: lower-case, hyphenated, aliases applied."""
    key = re.sub(r"[\s_]+", "-", (value or "").strip().lower())
    return _ALIASES.get(key, key)


def lookup_preset(identity: Optional[str]) -> PresetDescriptor:
    """Return the descriptor for *identity*, falling back to ``js``."""
    return PRESETS.get(normalize_preset_identity(identity or ""), PRESETS[DEFAULT_PRESET])


def default_preset_for(profile: LanguageProfile) -> str:
    """Profile-derived preset identity used when no explicit preset was chosen."""
    if profile.has_framework:
        return _FRAMEWORK_PRESETS[profile.framework]
    return _FAMILY_DEFAULTS.get(profile.family, DEFAULT_PRESET)


def resolve_preset(
    config: ResolvedConfig,
    profile: LanguageProfile,
    warn: Optional[Callable[[str], None]] = None,
) -> PresetDescriptor:
    """Pick the preset for this run.

    An explicit choice wins when it belongs to the profile's language family.
    Java presets are always the one matching the profile's sub-framework, so
    every artifact branches on the same framework.  Unknown choices fall back
    to ``js``, mismatched ones to the profile default, both with a warning.
    """
    if not config.preset_choice:
        return lookup_preset(default_preset_for(profile))

    identity = normalize_preset_identity(config.preset_choice)
    if identity not in PRESETS:
        if warn is not None:
            warn(
                f"Unknown workspace preset '{config.preset_choice}'; "
                f"using '{DEFAULT_PRESET}'."
            )
        return PRESETS[DEFAULT_PRESET]

    preset = PRESETS[identity]
    if profile.family != LanguageFamily.OTHER and preset.family != profile.family:
        fallback = lookup_preset(default_preset_for(profile))
        if warn is not None:
            warn(
                f"Preset '{preset.identity}' does not match {profile.label}; "
                f"using '{fallback.identity}'."
            )
        return fallback
    if preset.family == LanguageFamily.JAVA:
        return lookup_preset(default_preset_for(profile))
    return preset


# ---------------------------------------------------------------------------
# Service matrix
# ---------------------------------------------------------------------------


def database_offered(
    workspace_mode: bool,
    preset: PresetDescriptor,
    profile: LanguageProfile,
    project_type: ProjectType,
) -> bool:
    """Whether the auxiliary database service is offered for this combination.

    Used both to decide whether the prompt asks the question and whether a
    ``--db`` flag is honoured.
    """
    if workspace_mode:
        return preset.backend_capable
    return profile.is_backend_typical or project_type == ProjectType.API_SERVICE


@dataclass(frozen=True)
class ServicePlan:
    """Resolved auxiliary services."""

    database_offered: bool
    database_enabled: bool


def plan_services(
    config: ResolvedConfig,
    preset: PresetDescriptor,
    profile: LanguageProfile,
    warn: Optional[Callable[[str], None]] = None,
) -> ServicePlan:
    """Combine the database request with the offer predicate."""
    offered = database_offered(config.workspace_mode, preset, profile, config.project_type)
    if config.database and not offered and warn is not None:
        warn(
            "A database service is not available for this project "
            f"({preset.label if config.workspace_mode else profile.label}); ignoring --db."
        )
    return ServicePlan(database_offered=offered, database_enabled=config.database and offered)
