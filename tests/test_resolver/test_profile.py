"""Unit tests for language/framework classification (project_wizard.resolver.profile)."""

from __future__ import annotations

import pytest

from project_wizard.answers.models import JavaFramework, LanguageFamily, ProjectType
from project_wizard.resolver.profile import (
    LanguageProfile,
    detect_language,
    recommend_workspace,
    resolve_profile,
)


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# detect_language
# ---------------------------------------------------------------------------


class TestDetectLanguage:
    @pytest.mark.parametrize(
        "text, family",
        [
            ("JavaScript/TypeScript", LanguageFamily.JAVASCRIPT),
            ("typescript", LanguageFamily.JAVASCRIPT),
            ("Node", LanguageFamily.JAVASCRIPT),
            ("Python", LanguageFamily.PYTHON),
            ("Rust", LanguageFamily.RUST),
            (".NET", LanguageFamily.DOTNET),
            ("C#", LanguageFamily.DOTNET),
            ("Elixir", LanguageFamily.OTHER),
            ("", LanguageFamily.OTHER),
        ],
    )
    def test_families(self, text, family):
        assert detect_language(text) == (family, JavaFramework.NONE)

    @pytest.mark.parametrize("text", ["Java", "java ", "JAVA(", "Java (Spring Boot/Quarkus)"])
    def test_java_spellings_are_equivalent(self, text):
        assert detect_language(text) == (LanguageFamily.JAVA, JavaFramework.NONE)

    def test_javascript_is_not_java(self):
        assert detect_language("javascript")[0] == LanguageFamily.JAVASCRIPT

    def test_framework_keyword_implies_java(self):
        assert detect_language("spring boot") == (LanguageFamily.JAVA, JavaFramework.SPRING_BOOT)
        assert detect_language("Quarkus") == (LanguageFamily.JAVA, JavaFramework.QUARKUS)

    def test_framework_answer_wins(self):
        result = detect_language("Java (Spring Boot/Quarkus)", "Quarkus")
        assert result == (LanguageFamily.JAVA, JavaFramework.QUARKUS)

    def test_plain_maven_answer(self):
        result = detect_language("Java (Spring Boot/Quarkus)", "None (plain Maven)")
        assert result == (LanguageFamily.JAVA, JavaFramework.NONE)


# ---------------------------------------------------------------------------
# recommend_workspace
# ---------------------------------------------------------------------------


class TestRecommendWorkspace:
    def test_javascript_and_java(self):
        assert recommend_workspace(LanguageFamily.JAVASCRIPT, ProjectType.LIBRARY)
        assert recommend_workspace(LanguageFamily.JAVA, ProjectType.CLI_TOOL)

    def test_web_app_for_any_language(self):
        assert recommend_workspace(LanguageFamily.RUST, ProjectType.WEB_APP)

    def test_not_recommended(self):
        assert not recommend_workspace(LanguageFamily.PYTHON, ProjectType.CLI_TOOL)


# ---------------------------------------------------------------------------
# LanguageProfile
# ---------------------------------------------------------------------------


class TestLanguageProfile:
    def test_framework_dropped_outside_java(self):
        profile = LanguageProfile(LanguageFamily.PYTHON, JavaFramework.QUARKUS)
        assert profile.framework == JavaFramework.NONE

    def test_labels(self):
        assert resolve_profile(LanguageFamily.JAVA, JavaFramework.QUARKUS).label == "Java (Quarkus)"
        assert resolve_profile(LanguageFamily.JAVA, JavaFramework.NONE).label == "Java"
        assert resolve_profile(LanguageFamily.DOTNET, JavaFramework.NONE).label == ".NET"

    def test_categories(self):
        python = resolve_profile(LanguageFamily.PYTHON, JavaFramework.NONE)
        assert python.is_scripting
        assert python.is_backend_typical
        js = resolve_profile(LanguageFamily.JAVASCRIPT, JavaFramework.NONE)
        assert js.is_javascript
        assert not js.is_backend_typical
        rust = resolve_profile(LanguageFamily.RUST, JavaFramework.NONE)
        assert rust.is_systems
        dotnet = resolve_profile(LanguageFamily.DOTNET, JavaFramework.NONE)
        assert dotnet.is_managed_runtime
