"""Interactive answer source: the question sequence -> ``RawAnswers``.

Questions are asked one at a time in a fixed order.  Answers are stored as
typed (an empty string means "use the default"), so the normaliser applies
defaults in one place for both input paths.  A few answers are interpreted
immediately because they decide which follow-up questions are asked.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..resolver.presets import database_offered, default_preset_for, presets_for, resolve_preset
from ..resolver.profile import detect_language, recommend_workspace, resolve_profile
from ..utils import console, print_section
from .models import (
    ASSISTANT_COMMANDS,
    ASSISTANT_OPTIONS,
    BASE_IMAGE_OPTIONS,
    DEFAULT_ASSISTANT,
    DEFAULT_BASE_IMAGE,
    DEFAULT_COMMANDS,
    DEFAULT_DEPLOYMENT,
    DEFAULT_DESCRIPTION,
    DEFAULT_FRAMEWORK,
    DEFAULT_LANGUAGE,
    DEFAULT_PROJECT_TYPE,
    DEFAULT_REPO_NAME,
    DEPLOYMENT_OPTIONS,
    FRAMEWORK_OPTIONS,
    LANGUAGE_OPTIONS,
    PROJECT_TYPE_OPTIONS,
    AnswerKey,
    JavaFramework,
    LanguageFamily,
    RawAnswers,
)
from .normalizer import build_config, normalize_choice, parse_yes_no

AskFn = Callable[[str], str]


def _console_ask(prompt: str) -> str:
    return console.input(prompt)


class PromptSession:
    """Runs the question sequence against an input function.

    *ask* receives the rendered prompt and returns the typed line.  It
    defaults to the rich console; tests pass a scripted callable.
    """

    def __init__(self, ask: Optional[AskFn] = None, show_sections: bool = True) -> None:
        self._ask = ask or _console_ask
        self._show_sections = show_sections
        self.answers: RawAnswers = {}

    # -- Primitives ---------------------------------------------------------

    def _section(self, title: str) -> None:
        if self._show_sections:
            print_section(title)

    def question(
        self,
        key: AnswerKey,
        text: str,
        options: Optional[list[str]] = None,
        default: str = "",
    ) -> str:
        """Ask one question and record the trimmed answer under *key*."""
        lines = [f"[bold]{text}[/bold]"]
        if options:
            lines.extend(f"  {i}. {option}" for i, option in enumerate(options, 1))
        hint = f" [dim]\\[default: {default}][/dim]" if default else ""
        raw = self._ask("\n".join(lines) + f"\n{hint}> ").strip()
        self.answers[key.value] = raw
        return raw

    def yes_no(self, key: AnswerKey, text: str, default: bool) -> bool:
        """Ask a yes/no question; returns the interpreted value."""
        raw = self.question(key, f"{text} (yes/no)", default="yes" if default else "no")
        return parse_yes_no(raw, default)

    # -- Sequence -----------------------------------------------------------

    def run(self) -> RawAnswers:
        """Ask every applicable question and return the raw answer bag."""
        self._section("Project Basics")
        self.question(
            AnswerKey.PROJECT_TYPE,
            "What kind of project do you want to build?",
            PROJECT_TYPE_OPTIONS,
            DEFAULT_PROJECT_TYPE,
        )
        language = normalize_choice(
            self.question(
                AnswerKey.LANGUAGE,
                "What is the primary programming language or framework?",
                LANGUAGE_OPTIONS,
                DEFAULT_LANGUAGE,
            ),
            LANGUAGE_OPTIONS,
            DEFAULT_LANGUAGE,
        )
        family, framework = detect_language(language)
        if family == LanguageFamily.JAVA and framework == JavaFramework.NONE:
            self.question(
                AnswerKey.FRAMEWORK,
                "Which Java framework?",
                FRAMEWORK_OPTIONS,
                DEFAULT_FRAMEWORK,
            )
        self.question(
            AnswerKey.DESCRIPTION,
            "Briefly describe the main purpose or functionality (optional):",
            default=DEFAULT_DESCRIPTION,
        )

        self._section("Development Environment")
        config = build_config(self.answers)
        recommended = recommend_workspace(config.language, config.project_type)
        workspace = self.yes_no(
            AnswerKey.WORKSPACE_MODE,
            "Use an Nx workspace to manage the project? "
            + ("(recommended for your language)" if recommended else "(Devbox-only recommended)"),
            recommended,
        )
        profile = resolve_profile(config.language, config.framework)
        # Java presets follow the framework answer, so only other families choose.
        if workspace and profile.family != LanguageFamily.JAVA:
            options = presets_for(profile.family)
            raw = self.question(
                AnswerKey.PRESET,
                "Which workspace preset?",
                options,
                default_preset_for(profile),
            )
            self.answers[AnswerKey.PRESET.value] = normalize_choice(raw, options)
        self.question(
            AnswerKey.DEPENDENCIES,
            "Specific dependencies or tools to preconfigure? (comma-separated, optional):",
        )

        self._section("Coding Assistant")
        self.question(
            AnswerKey.ASSISTANT,
            "Which coding assistant do you want to use?",
            ASSISTANT_OPTIONS,
            DEFAULT_ASSISTANT,
        )
        self.question(
            AnswerKey.EXPECTED_COMMANDS,
            "Which commands do you expect to use most? (comma-separated)\n"
            f"Available: {', '.join(ASSISTANT_COMMANDS)}",
            default=DEFAULT_COMMANDS,
        )
        self.yes_no(AnswerKey.GENERATE_SCRIPTS, "Generate helper scripts for CLI commands?", True)
        self.yes_no(AnswerKey.INCLUDE_DOCS, "Include sample assistant usage documentation?", True)

        self._section("Deployment")
        self.question(
            AnswerKey.DEPLOYMENT_TARGET,
            "What is your preferred deployment target?",
            DEPLOYMENT_OPTIONS,
            DEFAULT_DEPLOYMENT,
        )
        if self.yes_no(AnswerKey.CONTAINER, "Create Dockerfile and container setup?", True):
            self.question(
                AnswerKey.BASE_IMAGE,
                "Preferred base OS/image for Docker?",
                BASE_IMAGE_OPTIONS,
                DEFAULT_BASE_IMAGE,
            )
        config = build_config(self.answers)
        preset = resolve_preset(config, profile)
        if database_offered(config.workspace_mode, preset, profile, config.project_type):
            self.yes_no(AnswerKey.DATABASE, "Include a PostgreSQL database service?", False)

        self._section("Repository")
        self.question(
            AnswerKey.REPO_NAME,
            "GitHub repository name for this template:",
            default=DEFAULT_REPO_NAME,
        )
        self.question(AnswerKey.GITHUB_USER, "Your GitHub username (optional):")
        self.yes_no(AnswerKey.INIT_GIT, "Initialize Git repository locally?", True)
        self.yes_no(AnswerKey.GENERATE_README, "Generate README and contributing guidelines?", True)
        self.yes_no(AnswerKey.SETUP_VERSIONING, "Set up version tagging and release support?", True)
        return dict(self.answers)


def collect_answers(ask: Optional[AskFn] = None) -> RawAnswers:
    """Run the interactive question sequence."""
    return PromptSession(ask=ask).run()
