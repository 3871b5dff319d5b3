"""Toolchain derivation: package manager, commands, images, system packages.

Each fact here is computed once per run from the resolved profile, preset and
identity, then threaded into the artifact generators through
``ResolvedContext``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from ..answers.models import Assistant, BaseImage, JavaFramework, LanguageFamily
from .identity import ProjectIdentity
from .presets import PresetDescriptor
from .profile import LanguageProfile


# ---------------------------------------------------------------------------
# System packages (Devbox / OS level)
# ---------------------------------------------------------------------------

BASE_SYSTEM_PACKAGES: tuple[str, ...] = ("git", "curl", "wget")

ALLOWED_SYSTEM_PACKAGES: frozenset[str] = frozenset({
    "ffmpeg",
    "yt-dlp",
    "openai-whisper",
    "opencv",
    "libjpeg",
    "openblas",
    "docker",
    "nodejs",
    "yarn",
    "python3",
    "rustc",
    "cargo",
    "jdk",
    "maven",
    "dotnet-sdk",
    "git",
    "curl",
    "wget",
    "postgresql",
})

SYSTEM_PACKAGE_ALIASES: dict[str, str] = {
    "ffmpeg-python": "ffmpeg",
    "opencv-python": "opencv",
    "pillow": "libjpeg",
    "numpy": "openblas",
    "scipy": "openblas",
    "whisper": "openai-whisper",
}

_FAMILY_SYSTEM_PACKAGES: dict[LanguageFamily, tuple[str, ...]] = {
    LanguageFamily.JAVASCRIPT: ("nodejs",),
    LanguageFamily.JAVA: ("jdk", "maven"),
    LanguageFamily.PYTHON: ("python3",),
    LanguageFamily.RUST: ("rustc", "cargo"),
    LanguageFamily.DOTNET: ("dotnet-sdk",),
}

# Devbox package -> (apt package, apk package) for container images.
_OS_PACKAGE_NAMES: dict[str, tuple[str, str]] = {
    "ffmpeg": ("ffmpeg", "ffmpeg"),
    "yt-dlp": ("yt-dlp", "yt-dlp"),
    "opencv": ("libopencv-dev", "opencv-dev"),
    "libjpeg": ("libjpeg-dev", "libjpeg-turbo-dev"),
    "openblas": ("libopenblas-dev", "openblas-dev"),
}


def filter_system_dependencies(dependencies: tuple[str, ...]) -> list[str]:
    """System packages requested through free-text dependencies.

    Only names in ``ALLOWED_SYSTEM_PACKAGES``, directly or through
    ``SYSTEM_PACKAGE_ALIASES``, survive; everything else is dropped here and
    left to the language-native manifest.
    """
    selected: list[str] = []
    for dep in dependencies:
        key = dep.strip().lower()
        mapped = SYSTEM_PACKAGE_ALIASES.get(key, key)
        if mapped in ALLOWED_SYSTEM_PACKAGES and mapped not in selected:
            selected.append(mapped)
    return selected


def _dedupe(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CommandSet:
    """The dev/build/test commands embedded in generated scripts."""

    dev: str
    build: str
    test: str

    def as_dict(self) -> dict[str, str]:
        return {"dev": self.dev, "build": self.build, "test": self.test}


def _raw_commands(profile: LanguageProfile) -> CommandSet:
    family = profile.family
    if family == LanguageFamily.JAVASCRIPT:
        return CommandSet("npm run dev", "npm run build", "npm test")
    if family == LanguageFamily.PYTHON:
        return CommandSet(
            ". .venv/bin/activate && python src/main.py",
            ". .venv/bin/activate && python -m pip install -r requirements.txt",
            ". .venv/bin/activate && python -m pytest",
        )
    if family == LanguageFamily.RUST:
        return CommandSet("cargo run", "cargo build --release", "cargo test")
    if family == LanguageFamily.JAVA:
        dev = {
            JavaFramework.SPRING_BOOT: "mvn spring-boot:run",
            JavaFramework.QUARKUS: "mvn quarkus:dev",
            JavaFramework.NONE: "mvn compile exec:java",
        }[profile.framework]
        return CommandSet(dev, "mvn clean package", "mvn test")
    if family == LanguageFamily.DOTNET:
        return CommandSet("dotnet run", "dotnet build", "dotnet test")
    return CommandSet(
        'echo "Configure your dev command"',
        'echo "Configure your build command"',
        'echo "Configure your test command"',
    )


def _app_commands(profile: LanguageProfile, raw: CommandSet) -> CommandSet:
    """Commands run inside ``apps/<slug>`` by the static workspace scaffold."""
    if profile.family == LanguageFamily.JAVASCRIPT:
        return CommandSet("node src/index.js", "node --check src/index.js", "node --test")
    if profile.family == LanguageFamily.PYTHON:
        return CommandSet(
            "python3 src/main.py",
            "python3 -m pip install -r requirements.txt",
            "python3 -m pytest",
        )
    return raw


def _workspace_commands(slug: str) -> CommandSet:
    return CommandSet(
        f"npx nx serve {slug}",
        "npx nx run-many -t build",
        "npx nx run-many -t test",
    )


# ---------------------------------------------------------------------------
# Container images
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ContainerPlan:
    """Images for the generated Dockerfile.

    ``build_image`` equals ``runtime_image`` for single-stage builds.
    """

    build_image: str
    runtime_image: str
    alpine: bool

    @property
    def multi_stage(self) -> bool:
        return self.build_image != self.runtime_image


def _container_plan(profile: LanguageProfile, base: BaseImage) -> ContainerPlan:
    alpine = base == BaseImage.ALPINE
    family = profile.family
    if family == LanguageFamily.JAVASCRIPT:
        image = "node:20-alpine" if alpine else "node:20"
        return ContainerPlan(image, image, alpine)
    if family == LanguageFamily.PYTHON:
        image = "python:3.12-alpine" if alpine else "python:3.12-slim"
        return ContainerPlan(image, image, alpine)
    if family == LanguageFamily.JAVA:
        runtime = "eclipse-temurin:21-jre-alpine" if alpine else "eclipse-temurin:21-jre"
        return ContainerPlan("maven:3.9-eclipse-temurin-21", runtime, alpine)
    if family == LanguageFamily.RUST:
        if alpine:
            return ContainerPlan("rust:1-alpine", "alpine:3.20", True)
        return ContainerPlan("rust:1", "debian:bookworm-slim", False)
    if family == LanguageFamily.DOTNET:
        runtime = (
            "mcr.microsoft.com/dotnet/aspnet:8.0-alpine"
            if alpine
            else "mcr.microsoft.com/dotnet/aspnet:8.0"
        )
        return ContainerPlan("mcr.microsoft.com/dotnet/sdk:8.0", runtime, alpine)
    image = {
        BaseImage.ALPINE: "alpine:3.20",
        BaseImage.UBUNTU: "ubuntu:22.04",
        BaseImage.DEBIAN: "debian:bookworm-slim",
    }.get(base, "ubuntu:22.04")
    return ContainerPlan(image, image, alpine)


# ---------------------------------------------------------------------------
# Assistant
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AssistantPlan:
    """How the selected coding assistant is installed, configured and started."""

    slug: str
    label: str
    command: str
    config_file: str
    npm_package: str
    api_key_var: str


_ASSISTANT_PLANS: dict[Assistant, AssistantPlan] = {
    Assistant.GEMINI: AssistantPlan(
        slug="gemini",
        label=Assistant.GEMINI.value,
        command="gemini",
        config_file=".gemini.json",
        npm_package="@google/gemini-cli",
        api_key_var="GEMINI_API_KEY",
    ),
    Assistant.CLAUDE: AssistantPlan(
        slug="claude",
        label=Assistant.CLAUDE.value,
        command="claude",
        config_file=".claude.json",
        npm_package="@anthropic-ai/claude-code",
        api_key_var="ANTHROPIC_API_KEY",
    ),
}


def assistant_plan(assistant: Assistant) -> Optional[AssistantPlan]:
    """Plan for *assistant*; ``None`` when no assistant was selected."""
    return _ASSISTANT_PLANS.get(assistant)


_COMMAND_ACTIONS: dict[str, str] = {
    "scaffold": "Scaffold a new module following the existing layout",
    "refactor": "Refactor the selected code without changing behaviour",
    "debug": "Find and fix the cause of a failing command or test",
    "optimize": "Profile and speed up a slow code path",
    "document": "Write or update documentation for the selected code",
}


def assistant_actions(
    expected: tuple[str, ...], commands: CommandSet, container: bool
) -> dict[str, str]:
    """Map each expected assistant command to what it runs or asks for.

    ``build``, ``test`` and ``dev`` resolve to the run's own command set, so the
    assistant config and the helper scripts never disagree.
    """
    runnable = commands.as_dict()
    runnable["deploy"] = (
        "docker compose up --build -d" if container else "Deploy with your platform CLI"
    )
    actions: dict[str, str] = {}
    for name in expected:
        key = name.strip().lower()
        actions[key] = runnable.get(key) or _COMMAND_ACTIONS.get(key, f"Run the {key} workflow")
    return actions


# ---------------------------------------------------------------------------
# Toolchain
# ---------------------------------------------------------------------------

_PACKAGE_MANAGERS: dict[LanguageFamily, str] = {
    LanguageFamily.JAVASCRIPT: "npm",
    LanguageFamily.PYTHON: "pip",
    LanguageFamily.JAVA: "maven",
    LanguageFamily.RUST: "cargo",
    LanguageFamily.DOTNET: "dotnet",
}

_TEST_FRAMEWORKS: dict[LanguageFamily, str] = {
    LanguageFamily.JAVASCRIPT: "jest",
    LanguageFamily.PYTHON: "pytest",
    LanguageFamily.JAVA: "junit",
    LanguageFamily.RUST: "cargo test",
    LanguageFamily.DOTNET: "xunit",
}

_MANIFEST_NAME = re.compile(r"^[A-Za-z0-9@][A-Za-z0-9@/._-]*$")


@dataclass(frozen=True)
class Toolchain:
    """Every toolchain decision for the run."""

    package_manager: str
    commands: CommandSet
    raw_commands: CommandSet
    app_commands: CommandSet
    container: ContainerPlan
    system_packages: tuple[str, ...]
    os_packages: tuple[str, ...]
    test_framework: str
    uses_node: bool
    assistant: Optional[AssistantPlan] = None


def derive_toolchain(
    profile: LanguageProfile,
    preset: PresetDescriptor,
    identity: ProjectIdentity,
    *,
    workspace_mode: bool,
    container: bool,
    database: bool,
    assistant: Assistant,
    base_image: BaseImage,
    dependencies: tuple[str, ...],
) -> Toolchain:
    """Derive the toolchain for a run.

    ``commands`` is the workspace command set in workspace mode and the raw
    per-language set otherwise; generators only ever read ``commands``.
    """
    raw = _raw_commands(profile)
    commands = _workspace_commands(identity.slug) if workspace_mode else raw
    uses_node = (
        profile.is_javascript
        or workspace_mode
        or assistant != Assistant.NONE
    )

    packages: list[str] = list(BASE_SYSTEM_PACKAGES)
    packages.extend(_FAMILY_SYSTEM_PACKAGES.get(profile.family, ()))
    if uses_node:
        packages.append("nodejs")
    if container:
        packages.append("docker")
    if database:
        packages.append("postgresql")
    user_packages = filter_system_dependencies(dependencies)
    packages.extend(user_packages)

    plan = _container_plan(profile, base_image)
    os_index = 1 if plan.alpine else 0
    os_packages = tuple(
        _OS_PACKAGE_NAMES[p][os_index] for p in user_packages if p in _OS_PACKAGE_NAMES
    )

    if workspace_mode and preset.uses_scripting_toolchain:
        package_manager = "npm"
    else:
        package_manager = _PACKAGE_MANAGERS.get(profile.family, "none")

    return Toolchain(
        package_manager=package_manager,
        commands=commands,
        raw_commands=raw,
        app_commands=_app_commands(profile, raw),
        container=plan,
        system_packages=tuple(_dedupe(packages)),
        os_packages=os_packages,
        test_framework=_TEST_FRAMEWORKS.get(profile.family, "custom"),
        uses_node=uses_node,
        assistant=assistant_plan(assistant),
    )


def manifest_dependencies(dependencies: tuple[str, ...]) -> list[str]:
    """Dependencies safe to place in structured manifests (JSON/TOML/XML names).

    ``requirements.txt`` takes the raw list; package.json, Cargo.toml and
    .csproj entries must be plain package names.
    """
    return [d for d in dependencies if _MANIFEST_NAME.match(d)]
