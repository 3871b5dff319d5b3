"""Unit tests for toolchain derivation (project_wizard.resolver.toolchain)."""

from __future__ import annotations

import pytest

from project_wizard.answers.models import Assistant
from project_wizard.resolver.toolchain import (
    BASE_SYSTEM_PACKAGES,
    CommandSet,
    assistant_actions,
    assistant_plan,
    filter_system_dependencies,
    manifest_dependencies,
)


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# System packages
# ---------------------------------------------------------------------------


class TestFilterSystemDependencies:
    def test_allow_list_and_aliases(self):
        deps = ("ffmpeg-python", "numpy", "scipy", "yt-dlp", "left-pad", "requests")
        assert filter_system_dependencies(deps) == ["ffmpeg", "openblas", "yt-dlp"]

    def test_case_insensitive(self):
        assert filter_system_dependencies(("FFmpeg",)) == ["ffmpeg"]

    def test_nothing_allowed(self):
        assert filter_system_dependencies(("express", "lodash")) == []


class TestSystemPackages:
    def test_python_service(self, python_context):
        packages = python_context.toolchain.system_packages
        assert packages[: len(BASE_SYSTEM_PACKAGES)] == BASE_SYSTEM_PACKAGES
        assert "python3" in packages
        assert "docker" in packages
        assert "postgresql" in packages
        assert "nodejs" in packages  # assistant CLI is an npm package
        assert "ffmpeg" in packages
        assert "openblas" in packages
        assert "fastapi" not in packages
        assert "left-pad" not in packages
        assert len(packages) == len(set(packages))

    def test_no_node_without_js_workspace_or_assistant(self, make_context):
        ctx = make_context(language="Rust", workspace_mode=False, assistant="None", container=False)
        assert not ctx.toolchain.uses_node
        assert "nodejs" not in ctx.toolchain.system_packages
        assert "docker" not in ctx.toolchain.system_packages
        assert {"rustc", "cargo"} <= set(ctx.toolchain.system_packages)

    def test_os_packages_follow_base_image(self, make_context):
        alpine = make_context(language="Python", dependencies="opencv-python,pillow")
        debian = make_context(language="Python", dependencies="opencv-python,pillow", base_image="Debian")
        assert alpine.toolchain.os_packages == ("opencv-dev", "libjpeg-turbo-dev")
        assert debian.toolchain.os_packages == ("libopencv-dev", "libjpeg-dev")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


class TestCommands:
    def test_workspace_commands(self, default_context):
        commands = default_context.toolchain.commands
        assert commands.dev == "npx nx serve my-project"
        assert commands.build == "npx nx run-many -t build"
        assert commands.test == "npx nx run-many -t test"

    def test_raw_python_commands(self, python_context):
        commands = python_context.toolchain.commands
        assert commands == python_context.toolchain.raw_commands
        assert commands.dev.endswith("python src/main.py")
        assert commands.test.endswith("python -m pytest")

    @pytest.mark.parametrize(
        "framework, dev",
        [
            ("Spring Boot", "mvn spring-boot:run"),
            ("Quarkus", "mvn quarkus:dev"),
            ("None (plain Maven)", "mvn compile exec:java"),
        ],
    )
    def test_java_dev_command_follows_framework(self, make_context, framework, dev):
        ctx = make_context(language="Java", framework=framework, workspace_mode=False)
        assert ctx.toolchain.commands.dev == dev
        assert ctx.toolchain.commands.build == "mvn clean package"

    def test_app_commands_for_static_scaffold(self, default_context):
        assert default_context.toolchain.app_commands.dev == "node src/index.js"

    def test_other_family_placeholder_commands(self, make_context):
        ctx = make_context(language="Elixir", workspace_mode=False)
        assert ctx.toolchain.commands.dev.startswith("echo")
        assert ctx.toolchain.package_manager == "none"


# ---------------------------------------------------------------------------
# Package manager, images, test framework
# ---------------------------------------------------------------------------


class TestToolchainFacts:
    def test_workspace_with_scripting_preset_uses_npm(self, make_context):
        assert make_context(preset="react").toolchain.package_manager == "npm"

    def test_workspace_with_native_preset_uses_language_manager(self, make_context):
        ctx = make_context(language="Rust", workspace_mode=True)
        assert ctx.toolchain.package_manager == "cargo"
        assert ctx.toolchain.uses_node

    @pytest.mark.parametrize(
        "language, manager, tests",
        [
            ("Python", "pip", "pytest"),
            ("Java", "maven", "junit"),
            (".NET", "dotnet", "xunit"),
        ],
    )
    def test_per_family(self, make_context, language, manager, tests):
        ctx = make_context(language=language, workspace_mode=False)
        assert ctx.toolchain.package_manager == manager
        assert ctx.toolchain.test_framework == tests

    def test_java_images(self, make_context):
        ctx = make_context(language="Java", framework="Spring Boot")
        plan = ctx.toolchain.container
        assert plan.build_image == "maven:3.9-eclipse-temurin-21"
        assert plan.runtime_image == "eclipse-temurin:21-jre-alpine"
        assert plan.multi_stage

    def test_rust_debian_images(self, make_context):
        ctx = make_context(language="Rust", base_image="Debian")
        plan = ctx.toolchain.container
        assert plan.build_image == "rust:1"
        assert plan.runtime_image == "debian:bookworm-slim"
        assert not plan.alpine

    def test_python_single_stage(self, python_context):
        plan = python_context.toolchain.container
        assert plan.runtime_image == "python:3.12-alpine"
        assert not plan.multi_stage


# ---------------------------------------------------------------------------
# Assistant
# ---------------------------------------------------------------------------


class TestAssistant:
    def test_plans(self):
        assert assistant_plan(Assistant.GEMINI).config_file == ".gemini.json"
        assert assistant_plan(Assistant.CLAUDE).api_key_var == "ANTHROPIC_API_KEY"
        assert assistant_plan(Assistant.NONE) is None

    def test_actions_use_run_commands(self):
        commands = CommandSet("dev-cmd", "build-cmd", "test-cmd")
        actions = assistant_actions(("build", "test", "deploy", "debug", "custom"), commands, True)
        assert actions["build"] == "build-cmd"
        assert actions["test"] == "test-cmd"
        assert actions["deploy"] == "docker compose up --build -d"
        assert "failing" in actions["debug"]
        assert actions["custom"] == "Run the custom workflow"

    def test_deploy_without_container(self):
        actions = assistant_actions(("deploy",), CommandSet("a", "b", "c"), False)
        assert "docker" not in actions["deploy"]


# ---------------------------------------------------------------------------
# Manifest names
# ---------------------------------------------------------------------------


class TestManifestDependencies:
    def test_filters_unsafe_names(self):
        deps = ("express", "@nestjs/core", "lodash.merge", "bad name", 'x"; rm', "-flag")
        assert manifest_dependencies(deps) == ["express", "@nestjs/core", "lodash.merge"]
