"""Language/framework profile resolution.

Free-text language answers are classified exactly once, here, into a closed
``LanguageFamily`` plus an optional ``JavaFramework``.  Later stages consult the
resulting ``LanguageProfile`` instead of re-inspecting strings.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from ..answers.models import JavaFramework, LanguageFamily, ProjectType


# Order matters: the first matching family wins.
_LANGUAGE_PATTERNS: list[tuple[LanguageFamily, re.Pattern[str]]] = [
    (LanguageFamily.JAVASCRIPT, re.compile(r"javascript|typescript|\bnode(js)?\b|\b[jt]s\b")),
    (LanguageFamily.JAVA, re.compile(r"java(?!script)")),
    (LanguageFamily.PYTHON, re.compile(r"python|\bpy\b")),
    (LanguageFamily.RUST, re.compile(r"\brust")),
    (LanguageFamily.DOTNET, re.compile(r"\.net\b|dotnet|c#|csharp")),
]

_FRAMEWORK_PATTERNS: list[tuple[JavaFramework, re.Pattern[str]]] = [
    (JavaFramework.SPRING_BOOT, re.compile(r"spring")),
    (JavaFramework.QUARKUS, re.compile(r"quarkus")),
]

_FAMILY_LABELS: dict[LanguageFamily, str] = {
    LanguageFamily.JAVASCRIPT: "JavaScript/TypeScript",
    LanguageFamily.JAVA: "Java",
    LanguageFamily.PYTHON: "Python",
    LanguageFamily.RUST: "Rust",
    LanguageFamily.DOTNET: ".NET",
    LanguageFamily.OTHER: "Other",
}

_FRAMEWORK_LABELS: dict[JavaFramework, str] = {
    JavaFramework.NONE: "",
    JavaFramework.SPRING_BOOT: "Spring Boot",
    JavaFramework.QUARKUS: "Quarkus",
}


def _frameworks_in(text: str) -> list[JavaFramework]:
    return [fw for fw, pattern in _FRAMEWORK_PATTERNS if pattern.search(text)]


def detect_language(
    language_text: str, framework_text: Optional[str] = None
) -> tuple[LanguageFamily, JavaFramework]:
    """Classify a language answer (and optional sub-framework answer).

    Matching is case-insensitive and ignores surrounding punctuation, so
    ``"Java"``, ``"java "`` and ``"java("`` are equivalent.  A recognised
    framework keyword takes precedence over generic language detection and
    implies the Java family.  The language answer itself only contributes a
    framework when it names exactly one (the option text
    ``"Java (Spring Boot/Quarkus)"`` names both and so selects none).
    """
    lang = (language_text or "").strip().lower()

    if framework_text is not None:
        named = _frameworks_in(framework_text.strip().lower())
        if len(named) == 1:
            return LanguageFamily.JAVA, named[0]

    in_language = _frameworks_in(lang)
    if len(in_language) == 1:
        return LanguageFamily.JAVA, in_language[0]

    for family, pattern in _LANGUAGE_PATTERNS:
        if pattern.search(lang):
            return family, JavaFramework.NONE
    return LanguageFamily.OTHER, JavaFramework.NONE


def recommend_workspace(family: LanguageFamily, project_type: ProjectType) -> bool:
    """Whether an Nx workspace is the recommended layout for this combination."""
    return (
        family in (LanguageFamily.JAVASCRIPT, LanguageFamily.JAVA)
        or project_type == ProjectType.WEB_APP
    )


@dataclass(frozen=True)
class LanguageProfile:
    """Closed-set classification of the run's language and sub-framework."""

    family: LanguageFamily
    framework: JavaFramework = JavaFramework.NONE

    def __post_init__(self) -> None:
        if self.family != LanguageFamily.JAVA and self.framework != JavaFramework.NONE:
            object.__setattr__(self, "framework", JavaFramework.NONE)

    @property
    def is_scripting(self) -> bool:
        return self.family in (LanguageFamily.JAVASCRIPT, LanguageFamily.PYTHON)

    @property
    def is_managed_runtime(self) -> bool:
        return self.family in (LanguageFamily.JAVA, LanguageFamily.DOTNET)

    @property
    def is_systems(self) -> bool:
        return self.family == LanguageFamily.RUST

    @property
    def is_javascript(self) -> bool:
        return self.family == LanguageFamily.JAVASCRIPT

    @property
    def is_backend_typical(self) -> bool:
        """Languages that usually ship a server and so get a database offer."""
        return self.family in (
            LanguageFamily.JAVA,
            LanguageFamily.PYTHON,
            LanguageFamily.RUST,
            LanguageFamily.DOTNET,
        )

    @property
    def has_framework(self) -> bool:
        return self.framework != JavaFramework.NONE

    @property
    def label(self) -> str:
        """Human label, e.g. ``"Java (Quarkus)"``."""
        base = _FAMILY_LABELS[self.family]
        if self.has_framework:
            return f"{base} ({_FRAMEWORK_LABELS[self.framework]})"
        return base

    @property
    def framework_label(self) -> str:
        return _FRAMEWORK_LABELS[self.framework]


def resolve_profile(family: LanguageFamily, framework: JavaFramework) -> LanguageProfile:
    """Build the profile from the family/framework stored on ``ResolvedConfig``."""
    return LanguageProfile(family=family, framework=framework)
